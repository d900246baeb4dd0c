"""Infrastructure layer: external connectors and CLI."""
