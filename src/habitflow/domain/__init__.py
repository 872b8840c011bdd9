"""Domain layer: storage-agnostic contracts."""
