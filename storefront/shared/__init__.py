"""Shared helpers used across layers: request context, utilities, logging."""
