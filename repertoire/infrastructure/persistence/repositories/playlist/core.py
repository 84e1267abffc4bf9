"""Playlist repository, saving playlists together with their memberships."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from repertoire.config import get_logger
from repertoire.domain.entities import Playlist
from repertoire.infrastructure.persistence.database.db_models import (
    DBPlaylist,
    DBPlaylistSong,
)
from repertoire.infrastructure.persistence.repositories.base_repo import (
    BaseRepository,
)
from repertoire.infrastructure.persistence.repositories.playlist.mapper import (
    PlaylistMapper,
)
from repertoire.infrastructure.persistence.repositories.repo_decorator import (
    db_operation,
)

logger = get_logger(__name__)


class PlaylistRepository(BaseRepository[DBPlaylist, Playlist]):
    """Repository for playlist operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(
            session=session, model_class=DBPlaylist, mapper=PlaylistMapper
        )

    @db_operation("get_playlist")
    async def get_playlist(self, playlist_id: UUID) -> Playlist | None:
        return await self.get_by_id(playlist_id)

    @db_operation("get_playlists_by_ids")
    async def get_playlists_by_ids(self, playlist_ids: list[UUID]) -> list[Playlist]:
        return await self.get_by_ids(playlist_ids)

    @db_operation("get_playlists_containing_songs")
    async def get_playlists_containing_songs(
        self, song_ids: list[UUID]
    ) -> list[Playlist]:
        if not song_ids:
            return []
        stmt = self.select().where(
            DBPlaylist.songs.any(DBPlaylistSong.song_id.in_(song_ids))
        )
        return await self.mapper.map_collection(await self._execute_query(stmt))

    @db_operation("save_playlist")
    async def save_playlist(self, playlist: Playlist) -> Playlist:
        saved = await self.save(playlist)
        logger.debug(
            "Saved playlist",
            playlist_id=str(playlist.id),
            song_count=len(playlist.songs),
        )
        return saved
