"""Repositories for the repertoire aggregates."""

from repertoire.infrastructure.persistence.repositories.album import AlbumRepository
from repertoire.infrastructure.persistence.repositories.artist import ArtistRepository
from repertoire.infrastructure.persistence.repositories.base_repo import (
    BaseModelMapper,
    BaseRepository,
    ModelMapper,
)
from repertoire.infrastructure.persistence.repositories.playlist import (
    PlaylistRepository,
)
from repertoire.infrastructure.persistence.repositories.repo_decorator import (
    db_operation,
)
from repertoire.infrastructure.persistence.repositories.song import (
    SongRepository,
    SongSectionRepository,
)
from repertoire.infrastructure.persistence.repositories.user_data import (
    ReferenceItemRepository,
)

__all__ = [
    "AlbumRepository",
    "ArtistRepository",
    "BaseModelMapper",
    "BaseRepository",
    "ModelMapper",
    "PlaylistRepository",
    "ReferenceItemRepository",
    "SongRepository",
    "SongSectionRepository",
    "db_operation",
]
