"""Infrastructure layer: persistence, cache, security, storage and shipping adapters."""
