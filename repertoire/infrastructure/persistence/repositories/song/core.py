"""Song and song section repositories."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from repertoire.config import get_logger
from repertoire.domain.entities import (
    HistoryProperty,
    Song,
    SongSection,
    SongSectionHistory,
)
from repertoire.infrastructure.persistence.database.db_models import (
    DBSong,
    DBSongSection,
    DBSongSectionHistory,
)
from repertoire.infrastructure.persistence.repositories.base_repo import (
    BaseRepository,
)
from repertoire.infrastructure.persistence.repositories.repo_decorator import (
    db_operation,
)
from repertoire.infrastructure.persistence.repositories.song.mapper import (
    SongMapper,
    SongSectionHistoryMapper,
    SongSectionMapper,
)

logger = get_logger(__name__)


def _ordered_by_group(
    songs: list[Song], group_ids: list[UUID], attribute: str
) -> list[Song]:
    """Order songs by the position of their group in the requested IDs."""
    rank = {group_id: index for index, group_id in enumerate(group_ids)}
    return sorted(songs, key=lambda s: rank[getattr(s, attribute)])


class SongRepository(BaseRepository[DBSong, Song]):
    """Repository for songs and the sections and arrangements they own."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=DBSong, mapper=SongMapper)

    @db_operation("get_song")
    async def get_song(self, song_id: UUID) -> Song | None:
        return await self.get_by_id(song_id)

    @db_operation("get_songs_by_ids")
    async def get_songs_by_ids(self, song_ids: list[UUID]) -> list[Song]:
        return await self.get_by_ids(song_ids)

    @db_operation("get_songs_by_albums")
    async def get_songs_by_albums(self, album_ids: list[UUID]) -> list[Song]:
        if not album_ids:
            return []
        stmt = (
            self.select()
            .where(DBSong.album_id.in_(album_ids))
            .order_by(DBSong.album_track_no)
        )
        songs = await self.mapper.map_collection(await self._execute_query(stmt))
        # sorted() is stable, so track order survives within each album
        return _ordered_by_group(songs, album_ids, "album_id")

    @db_operation("get_songs_by_artists")
    async def get_songs_by_artists(self, artist_ids: list[UUID]) -> list[Song]:
        if not artist_ids:
            return []
        stmt = (
            self.select()
            .where(DBSong.artist_id.in_(artist_ids))
            .order_by(DBSong.title, DBSong.id)
        )
        songs = await self.mapper.map_collection(await self._execute_query(stmt))
        return _ordered_by_group(songs, artist_ids, "artist_id")

    @db_operation("save_song")
    async def save_song(self, song: Song) -> Song:
        return await self.save(song)

    @db_operation("save_songs")
    async def save_songs(self, songs: list[Song]) -> list[Song]:
        return await self.save_many(songs)

    @db_operation("delete_songs")
    async def delete_songs(self, song_ids: list[UUID]) -> int:
        deleted = await self.delete_by_ids(song_ids)
        logger.info("Deleted songs", count=deleted)
        return deleted


class SongSectionRepository(BaseRepository[DBSongSection, SongSection]):
    """Repository for section lookups and append-only section history."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(
            session=session, model_class=DBSongSection, mapper=SongSectionMapper
        )

    @db_operation("get_section")
    async def get_section(self, section_id: UUID) -> SongSection | None:
        return await self.get_by_id(section_id)

    @db_operation("create_history")
    async def create_history(self, history: SongSectionHistory) -> SongSectionHistory:
        self.session.add(SongSectionHistoryMapper.to_db(history))
        await self.session.flush()
        return history

    @db_operation("get_history")
    async def get_history(
        self, section_id: UUID, property_: HistoryProperty
    ) -> list[SongSectionHistory]:
        stmt = (
            select(DBSongSectionHistory)
            .where(
                DBSongSectionHistory.section_id == section_id,
                DBSongSectionHistory.property == str(property_),
            )
            .order_by(DBSongSectionHistory.created_at, DBSongSectionHistory.id)
        )
        result = await self.session.execute(stmt)
        return await SongSectionHistoryMapper.map_collection(
            list(result.scalars().all())
        )
