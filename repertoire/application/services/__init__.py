"""Application services shared by use cases."""

from .section_progress import SectionProgressService
from .song_rehearsals import SongRehearsalService

__all__ = ["SectionProgressService", "SongRehearsalService"]
