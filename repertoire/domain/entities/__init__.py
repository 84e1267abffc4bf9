"""Core domain entities representing repertoire concepts."""

# Album and artist entities
from .album import Album, Artist, BandMember

# Playlist entities
from .playlist import Playlist, PlaylistSong

# Shared utilities
from .shared import ensure_utc, utc_now

# Song entities
from .song import (
    DEFAULT_SECTION_CONFIDENCE,
    MAX_SECTION_CONFIDENCE,
    HistoryProperty,
    Song,
    SongArrangement,
    SongSection,
    SongSectionHistory,
)

# Reference list entities
from .user_data import ReferenceItem, ReferenceKind

__all__ = [
    # Song entities
    "DEFAULT_SECTION_CONFIDENCE",
    "MAX_SECTION_CONFIDENCE",
    "HistoryProperty",
    "Song",
    "SongArrangement",
    "SongSection",
    "SongSectionHistory",
    # Album and artist entities
    "Album",
    "Artist",
    "BandMember",
    # Playlist entities
    "Playlist",
    "PlaylistSong",
    # Reference list entities
    "ReferenceItem",
    "ReferenceKind",
    # Shared utilities
    "ensure_utc",
    "utc_now",
]
