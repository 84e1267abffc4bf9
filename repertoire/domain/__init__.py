"""Domain layer: entities, pure algorithms and persistence contracts."""
