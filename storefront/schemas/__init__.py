"""API and validation schemas (pydantic)."""
