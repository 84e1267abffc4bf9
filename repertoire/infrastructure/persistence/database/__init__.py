"""Database models, engine and session management."""

from .db_connection import create_db_engine, create_session_factory, get_engine
from .db_models import RepertoireDBBase, init_db

__all__ = [
    "RepertoireDBBase",
    "create_db_engine",
    "create_session_factory",
    "get_engine",
    "init_db",
]
