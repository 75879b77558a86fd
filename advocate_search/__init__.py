"""Advocate roster search: live filtering plus free-text recommendations."""
