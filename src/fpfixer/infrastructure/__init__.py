"""Infrastructure layer: reading registry files and payloads from disk."""
