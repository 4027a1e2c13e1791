"""
Rate payload ingestion and normalization module.

Handles tolerant parsing of values and dates, alias-based field lookup, and
the strict/lax series building pipeline.
"""
