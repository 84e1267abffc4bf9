"""SQLAlchemy-backed persistence: repositories and the unit of work."""
