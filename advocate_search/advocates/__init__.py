"""
Advocate roster.

Responsibilities:
- Define the canonical Advocate record and its wire format.
- Load the roster from the bundled CSV.
- Filter records by free-text substring queries.
- Pick the single best advocate for a free-text need.
"""
