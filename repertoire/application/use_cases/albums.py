"""Use cases for the songs of an album (1-based track numbers)."""

from uuid import UUID

from attrs import define, evolve
from toolz import unique

from repertoire.config import get_logger
from repertoire.domain.entities import Song
from repertoire.domain.exceptions import BadRequestError
from repertoire.domain.ordering import (
    ALBUM_TRACKS,
    append_position,
    move_within_collection,
    renumber_after_removal,
)
from repertoire.domain.repositories import RepositoryFactory, UnitOfWorkProtocol

from .common import require_album, require_ids

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class AddSongsToAlbumCommand:
    album_id: UUID
    song_ids: list[UUID]


@define(slots=True)
class AddSongsToAlbumUseCase:
    """Append loose songs to an album.

    Songs without an artist take over the album's artist; songs with a
    different artist are rejected. Repeated IDs are added once.
    """

    async def execute(
        self, command: AddSongsToAlbumCommand, uow: UnitOfWorkProtocol
    ) -> list[Song]:
        logger.info(
            "Adding songs to album",
            album_id=str(command.album_id),
            song_count=len(command.song_ids),
        )

        async def work(repos: RepositoryFactory) -> list[Song]:
            album = await require_album(repos, command.album_id)
            song_repo = repos.get_song_repository()
            song_ids = list(unique(command.song_ids))
            songs = {s.id: s for s in await song_repo.get_songs_by_ids(song_ids)}
            require_ids(set(songs), song_ids, "Song")

            tracks = list(album.songs)
            added = []
            for song_id in song_ids:
                song = songs[song_id]
                if song.album_id is not None:
                    raise BadRequestError(f"song {song_id} already has an album")
                if song.artist_id not in (None, album.artist_id):
                    raise BadRequestError(
                        f"song {song_id} and album do not share the same artist"
                    )
                placed = evolve(
                    song,
                    album_id=album.id,
                    album_track_no=append_position(tracks, ALBUM_TRACKS),
                    artist_id=album.artist_id,
                )
                tracks.append(placed)
                added.append(placed)

            await song_repo.save_songs(added)
            return added

        return await uow.execute(work)


@define(frozen=True, slots=True)
class RemoveSongsFromAlbumCommand:
    album_id: UUID
    song_ids: list[UUID]


@define(slots=True)
class RemoveSongsFromAlbumUseCase:
    """Take songs off an album and close the gaps they leave."""

    async def execute(
        self, command: RemoveSongsFromAlbumCommand, uow: UnitOfWorkProtocol
    ) -> list[Song]:
        logger.info(
            "Removing songs from album",
            album_id=str(command.album_id),
            song_count=len(command.song_ids),
        )

        async def work(repos: RepositoryFactory) -> list[Song]:
            album = await require_album(repos, command.album_id)
            require_ids({s.id for s in album.songs}, command.song_ids, "Album song")

            removed_ids = set(command.song_ids)
            removed = [
                s.with_album(None, None) for s in album.songs if s.id in removed_ids
            ]
            survivors = renumber_after_removal(
                album.songs, command.song_ids, ALBUM_TRACKS
            )
            await repos.get_song_repository().save_songs([*removed, *survivors])
            return survivors

        return await uow.execute(work)


@define(frozen=True, slots=True)
class MoveSongFromAlbumCommand:
    album_id: UUID
    song_id: UUID
    over_song_id: UUID


@define(slots=True)
class MoveSongFromAlbumUseCase:
    async def execute(
        self, command: MoveSongFromAlbumCommand, uow: UnitOfWorkProtocol
    ) -> list[Song]:
        async def work(repos: RepositoryFactory) -> list[Song]:
            album = await require_album(repos, command.album_id)
            require_ids(
                {s.id for s in album.songs},
                [command.song_id, command.over_song_id],
                "Album song",
            )
            songs = move_within_collection(
                album.songs, command.song_id, command.over_song_id, ALBUM_TRACKS
            )
            await repos.get_song_repository().save_songs(songs)
            return songs

        return await uow.execute(work)
