"""Application layer - orchestrates domain logic through use cases."""
