"""Playlist repositories."""

from .core import PlaylistRepository
from .mapper import PlaylistMapper, PlaylistSongMapper

__all__ = ["PlaylistMapper", "PlaylistRepository", "PlaylistSongMapper"]
