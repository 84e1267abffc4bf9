"""Album repository.

Album rows are saved on their own; the album's track list is the set of
songs pointing at it and is persisted through the song repository.
"""

from typing import Any
from uuid import UUID

from attrs import define
from sqlalchemy.ext.asyncio import AsyncSession

from repertoire.domain.entities import Album
from repertoire.infrastructure.persistence.database.db_models import DBAlbum, DBSong
from repertoire.infrastructure.persistence.repositories.base_repo import (
    BaseModelMapper,
    BaseRepository,
    fetch_relationship,
)
from repertoire.infrastructure.persistence.repositories.repo_decorator import (
    db_operation,
)
from repertoire.infrastructure.persistence.repositories.song.mapper import SongMapper


@define(frozen=True, slots=True)
class AlbumMapper(BaseModelMapper[DBAlbum, Album]):
    @staticmethod
    def get_default_relationships() -> list[Any]:
        return [
            (DBAlbum.songs, DBSong.sections),
            (DBAlbum.songs, DBSong.arrangements),
        ]

    @staticmethod
    async def to_domain(db_model: DBAlbum) -> Album:
        songs = await fetch_relationship(db_model, "songs")
        return Album(
            id=db_model.id,
            user_id=db_model.user_id,
            title=db_model.title,
            artist_id=db_model.artist_id,
            songs=await SongMapper.map_collection(songs),
        )

    @staticmethod
    def to_db(domain_model: Album) -> DBAlbum:
        return DBAlbum(
            id=domain_model.id,
            user_id=domain_model.user_id,
            title=domain_model.title,
            artist_id=domain_model.artist_id,
        )


class AlbumRepository(BaseRepository[DBAlbum, Album]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=DBAlbum, mapper=AlbumMapper)

    @db_operation("get_album")
    async def get_album(self, album_id: UUID) -> Album | None:
        return await self.get_by_id(album_id)

    @db_operation("get_albums_by_ids")
    async def get_albums_by_ids(self, album_ids: list[UUID]) -> list[Album]:
        return await self.get_by_ids(album_ids)

    @db_operation("save_album")
    async def save_album(self, album: Album) -> Album:
        return await self.save(album)
