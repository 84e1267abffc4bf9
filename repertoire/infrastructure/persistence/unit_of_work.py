"""SQLAlchemy-backed unit of work.

One DatabaseUnitOfWork wraps one AsyncSession. Every repository it hands out
shares that session, so a song, its sections and their history rows are
committed or discarded together.
"""

from typing import Self, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from repertoire.config import get_logger
from repertoire.domain.repositories import (
    AlbumRepositoryProtocol,
    ArtistRepositoryProtocol,
    PlaylistRepositoryProtocol,
    ReferenceItemRepositoryProtocol,
    SongRepositoryProtocol,
    SongSectionRepositoryProtocol,
    Work,
)
from repertoire.infrastructure.persistence.repositories.album import AlbumRepository
from repertoire.infrastructure.persistence.repositories.artist import ArtistRepository
from repertoire.infrastructure.persistence.repositories.playlist import (
    PlaylistRepository,
)
from repertoire.infrastructure.persistence.repositories.song import (
    SongRepository,
    SongSectionRepository,
)
from repertoire.infrastructure.persistence.repositories.user_data import (
    ReferenceItemRepository,
)

logger = get_logger(__name__)

T = TypeVar("T")


class DatabaseUnitOfWork:
    """Transaction boundary for repertoire use cases.

    Use cases call ``execute(work)``: the work receives this object as its
    repository factory, and its writes are committed only if it returns.
    Used directly as an async context manager it commits on a clean exit
    and rolls back when the block raises.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Bind the unit of work to a session it does not own or close."""
        self._session = session
        self._committed = False

    async def __aenter__(self) -> Self:
        """Enter async context manager."""
        self._committed = False
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Roll back on error, otherwise commit unless already committed."""
        if exc_type is not None:
            logger.debug(
                "Rolling back transaction",
                error_type=exc_type.__name__,
                error=str(exc_val),
            )
            await self.rollback()
        elif not self._committed:
            await self.commit()

    async def commit(self) -> None:
        """Explicitly commit the current transaction."""
        await self._session.commit()
        self._committed = True

    async def rollback(self) -> None:
        """Explicitly rollback the current transaction."""
        await self._session.rollback()

    async def execute(self, work: Work[T]) -> T:
        """Run work in one transaction, committing only if it returns."""
        async with self:
            return await work(self)

    def get_song_repository(self) -> SongRepositoryProtocol:
        """Get song repository using this unit of work's transaction."""
        return SongRepository(self._session)

    def get_song_section_repository(self) -> SongSectionRepositoryProtocol:
        """Get song section repository using this unit of work's transaction."""
        return SongSectionRepository(self._session)

    def get_album_repository(self) -> AlbumRepositoryProtocol:
        """Get album repository using this unit of work's transaction."""
        return AlbumRepository(self._session)

    def get_artist_repository(self) -> ArtistRepositoryProtocol:
        """Get artist repository using this unit of work's transaction."""
        return ArtistRepository(self._session)

    def get_playlist_repository(self) -> PlaylistRepositoryProtocol:
        """Get playlist repository using this unit of work's transaction."""
        return PlaylistRepository(self._session)

    def get_reference_item_repository(self) -> ReferenceItemRepositoryProtocol:
        """Get reference item repository using this unit of work's transaction."""
        return ReferenceItemRepository(self._session)
