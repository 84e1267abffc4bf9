"""Domain repository interfaces following Clean Architecture principles.

These interfaces define the contracts for data access without depending on
infrastructure implementations, following the dependency inversion principle.
"""

from .interfaces import (
    AlbumRepositoryProtocol,
    ArtistRepositoryProtocol,
    MessagePublisherProtocol,
    PlaylistRepositoryProtocol,
    ReferenceItemRepositoryProtocol,
    RepositoryFactory,
    SongRepositoryProtocol,
    SongSectionRepositoryProtocol,
    UnitOfWorkProtocol,
    Work,
)

__all__ = [
    "AlbumRepositoryProtocol",
    "ArtistRepositoryProtocol",
    "MessagePublisherProtocol",
    "PlaylistRepositoryProtocol",
    "ReferenceItemRepositoryProtocol",
    "RepositoryFactory",
    "SongRepositoryProtocol",
    "SongSectionRepositoryProtocol",
    "UnitOfWorkProtocol",
    "Work",
]
