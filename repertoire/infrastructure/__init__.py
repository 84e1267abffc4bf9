"""Infrastructure layer - implementations of domain contracts."""
