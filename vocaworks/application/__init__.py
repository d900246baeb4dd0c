"""Application layer: use cases and shared utilities."""
