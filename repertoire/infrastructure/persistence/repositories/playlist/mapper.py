"""Playlist repository mappers for domain-persistence conversions."""

from typing import Any

from attrs import define

from repertoire.domain.entities import Playlist, PlaylistSong, ensure_utc
from repertoire.infrastructure.persistence.database.db_models import (
    DBPlaylist,
    DBPlaylistSong,
)
from repertoire.infrastructure.persistence.repositories.base_repo import (
    BaseModelMapper,
    fetch_relationship,
)


@define(frozen=True, slots=True)
class PlaylistSongMapper(BaseModelMapper[DBPlaylistSong, PlaylistSong]):
    @staticmethod
    async def to_domain(db_model: DBPlaylistSong) -> PlaylistSong:
        return PlaylistSong(
            id=db_model.id,
            playlist_id=db_model.playlist_id,
            song_id=db_model.song_id,
            song_track_no=db_model.song_track_no,
            created_at=ensure_utc(db_model.created_at),
        )

    @staticmethod
    def to_db(domain_model: PlaylistSong) -> DBPlaylistSong:
        return DBPlaylistSong(
            id=domain_model.id,
            playlist_id=domain_model.playlist_id,
            song_id=domain_model.song_id,
            song_track_no=domain_model.song_track_no,
            created_at=domain_model.created_at,
        )


@define(frozen=True, slots=True)
class PlaylistMapper(BaseModelMapper[DBPlaylist, Playlist]):
    """Bidirectional mapper between domain and persistence models."""

    @staticmethod
    def get_default_relationships() -> list[Any]:
        return [DBPlaylist.songs]

    @staticmethod
    async def to_domain(db_model: DBPlaylist) -> Playlist:
        songs = await fetch_relationship(db_model, "songs")
        return Playlist(
            id=db_model.id,
            user_id=db_model.user_id,
            title=db_model.title,
            description=db_model.description,
            songs=await PlaylistSongMapper.map_collection(songs),
        )

    @staticmethod
    def to_db(domain_model: Playlist) -> DBPlaylist:
        return DBPlaylist(
            id=domain_model.id,
            user_id=domain_model.user_id,
            title=domain_model.title,
            description=domain_model.description,
            songs=[PlaylistSongMapper.to_db(ps) for ps in domain_model.songs],
        )
