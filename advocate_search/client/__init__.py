"""
Search and recommendation orchestration for the advocate browser.

Responsibilities:
- Talk to the advocate list and recommend endpoints over HTTP.
- Debounce live filter input and re-run the local filter on settled values.
- Keep exactly one current recommendation, discarding superseded results.
- Expose a read-only view of session state to the presentation layer.
"""
