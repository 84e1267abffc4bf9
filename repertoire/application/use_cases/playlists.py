"""Use cases for the songs of a playlist (1-based track numbers).

Bulk additions go through the duplicate resolver: when some of the songs are
already on the playlist nothing is added until the caller decides, through
``force_add``, whether to add them again or skip them.
"""

import random
from collections.abc import Callable, Hashable
from uuid import UUID

from attrs import define, field

from repertoire.config import get_logger
from repertoire.domain.duplicates import (
    DuplicateResolution,
    append_to_playlist,
    partition_and_filter,
)
from repertoire.domain.entities import PlaylistSong, Song
from repertoire.domain.ordering import (
    PLAYLIST_SONGS,
    assign_positions,
    move_within_collection,
    renumber_after_removal,
)
from repertoire.domain.repositories import RepositoryFactory, UnitOfWorkProtocol

from .common import require_ids, require_playlist

logger = get_logger(__name__)


async def _add_to_playlist(
    repos: RepositoryFactory,
    playlist_id: UUID,
    candidates: list[Song],
    force_add: bool | None,
    group_key: Callable[[Song], Hashable] | None = None,
) -> DuplicateResolution:
    playlist = await require_playlist(repos, playlist_id)
    resolution = partition_and_filter(
        candidates, playlist.song_ids, force_add=force_add, group_key=group_key
    )

    if resolution.duplicate_song_ids:
        logger.info(
            "Duplicate songs found while adding to playlist",
            playlist_id=str(playlist_id),
            duplicates=len(resolution.duplicate_song_ids),
            force_add=force_add,
        )

    if resolution.added_song_ids:
        await repos.get_playlist_repository().save_playlist(
            append_to_playlist(playlist, resolution.added_song_ids)
        )
    return resolution


@define(frozen=True, slots=True)
class AddSongsToPlaylistCommand:
    playlist_id: UUID
    song_ids: list[UUID]
    force_add: bool | None = None


@define(slots=True)
class AddSongsToPlaylistUseCase:
    async def execute(
        self, command: AddSongsToPlaylistCommand, uow: UnitOfWorkProtocol
    ) -> DuplicateResolution:
        logger.info(
            "Adding songs to playlist",
            playlist_id=str(command.playlist_id),
            song_count=len(command.song_ids),
        )

        async def work(repos: RepositoryFactory) -> DuplicateResolution:
            found = await repos.get_song_repository().get_songs_by_ids(command.song_ids)
            by_id = {s.id: s for s in found}
            require_ids(set(by_id), command.song_ids, "Song")
            candidates = [by_id[song_id] for song_id in command.song_ids]
            return await _add_to_playlist(
                repos, command.playlist_id, candidates, command.force_add
            )

        return await uow.execute(work)


@define(frozen=True, slots=True)
class AddAlbumsToPlaylistCommand:
    playlist_id: UUID
    album_ids: list[UUID]
    force_add: bool | None = None


@define(slots=True)
class AddAlbumsToPlaylistUseCase:
    """Add every song of the albums, album by album in track order."""

    async def execute(
        self, command: AddAlbumsToPlaylistCommand, uow: UnitOfWorkProtocol
    ) -> DuplicateResolution:
        logger.info(
            "Adding albums to playlist",
            playlist_id=str(command.playlist_id),
            album_count=len(command.album_ids),
        )

        async def work(repos: RepositoryFactory) -> DuplicateResolution:
            candidates = await repos.get_song_repository().get_songs_by_albums(
                command.album_ids
            )
            return await _add_to_playlist(
                repos,
                command.playlist_id,
                candidates,
                command.force_add,
                group_key=lambda song: song.album_id,
            )

        return await uow.execute(work)


@define(frozen=True, slots=True)
class AddArtistsToPlaylistCommand:
    playlist_id: UUID
    artist_ids: list[UUID]
    force_add: bool | None = None


@define(slots=True)
class AddArtistsToPlaylistUseCase:
    """Add every song of the artists, artist by artist."""

    async def execute(
        self, command: AddArtistsToPlaylistCommand, uow: UnitOfWorkProtocol
    ) -> DuplicateResolution:
        logger.info(
            "Adding artists to playlist",
            playlist_id=str(command.playlist_id),
            artist_count=len(command.artist_ids),
        )

        async def work(repos: RepositoryFactory) -> DuplicateResolution:
            candidates = await repos.get_song_repository().get_songs_by_artists(
                command.artist_ids
            )
            return await _add_to_playlist(
                repos,
                command.playlist_id,
                candidates,
                command.force_add,
                group_key=lambda song: song.artist_id,
            )

        return await uow.execute(work)


@define(frozen=True, slots=True)
class MoveSongFromPlaylistCommand:
    playlist_id: UUID
    playlist_song_id: UUID
    over_playlist_song_id: UUID


@define(slots=True)
class MoveSongFromPlaylistUseCase:
    async def execute(
        self, command: MoveSongFromPlaylistCommand, uow: UnitOfWorkProtocol
    ) -> list[PlaylistSong]:
        async def work(repos: RepositoryFactory) -> list[PlaylistSong]:
            playlist = await require_playlist(repos, command.playlist_id)
            require_ids(
                {ps.id for ps in playlist.songs},
                [command.playlist_song_id, command.over_playlist_song_id],
                "Playlist song",
            )
            songs = move_within_collection(
                playlist.songs,
                command.playlist_song_id,
                command.over_playlist_song_id,
                PLAYLIST_SONGS,
            )
            await repos.get_playlist_repository().save_playlist(
                playlist.with_songs(songs)
            )
            return songs

        return await uow.execute(work)


@define(frozen=True, slots=True)
class RemoveSongsFromPlaylistCommand:
    playlist_id: UUID
    playlist_song_ids: list[UUID]


@define(slots=True)
class RemoveSongsFromPlaylistUseCase:
    async def execute(
        self, command: RemoveSongsFromPlaylistCommand, uow: UnitOfWorkProtocol
    ) -> list[PlaylistSong]:
        logger.info(
            "Removing songs from playlist",
            playlist_id=str(command.playlist_id),
            song_count=len(command.playlist_song_ids),
        )

        async def work(repos: RepositoryFactory) -> list[PlaylistSong]:
            playlist = await require_playlist(repos, command.playlist_id)
            require_ids(
                {ps.id for ps in playlist.songs},
                command.playlist_song_ids,
                "Playlist song",
            )
            songs = renumber_after_removal(
                playlist.songs, command.playlist_song_ids, PLAYLIST_SONGS
            )
            await repos.get_playlist_repository().save_playlist(
                playlist.with_songs(songs)
            )
            return songs

        return await uow.execute(work)


@define(frozen=True, slots=True)
class ShufflePlaylistSongsCommand:
    playlist_id: UUID


@define(slots=True)
class ShufflePlaylistSongsUseCase:
    """Put a playlist's songs in random order."""

    rng: random.Random = field(factory=random.Random)

    async def execute(
        self, command: ShufflePlaylistSongsCommand, uow: UnitOfWorkProtocol
    ) -> list[PlaylistSong]:
        async def work(repos: RepositoryFactory) -> list[PlaylistSong]:
            playlist = await require_playlist(repos, command.playlist_id)
            songs = list(playlist.songs)
            self.rng.shuffle(songs)
            songs = assign_positions(songs, PLAYLIST_SONGS)
            await repos.get_playlist_repository().save_playlist(
                playlist.with_songs(songs)
            )
            return songs

        return await uow.execute(work)
