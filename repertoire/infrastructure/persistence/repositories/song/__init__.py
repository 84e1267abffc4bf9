"""Song repositories."""

from .core import SongRepository, SongSectionRepository
from .mapper import SongMapper, SongSectionHistoryMapper, SongSectionMapper

__all__ = [
    "SongMapper",
    "SongRepository",
    "SongSectionHistoryMapper",
    "SongSectionMapper",
    "SongSectionRepository",
]
