"""Use cases that add run-through rehearsals to whole songs.

A perfect rehearsal plays every section as often as it occurs in the song,
a partial one as often as it occurs in a partial run. Songs none of whose
sections are played are left unchanged and are not saved. Every bulk
variant rescoring many songs does so inside a single transaction.
"""

from uuid import UUID

from attrs import define, field
from toolz import unique

from repertoire.application.services import SongRehearsalService
from repertoire.config import get_logger
from repertoire.domain.entities import Song
from repertoire.domain.exceptions import NotFoundError
from repertoire.domain.repositories import RepositoryFactory, UnitOfWorkProtocol

from .common import require_song

logger = get_logger(__name__)


async def _rehearse_songs(
    songs: list[Song], rehearsals: SongRehearsalService, repos: RepositoryFactory
) -> list[Song]:
    """Give each distinct song a perfect rehearsal and save the changed ones."""
    changed = []
    for song in unique(songs, key=lambda s: s.id):
        song, updated = await rehearsals.add_perfect_rehearsal(song, repos)
        if updated:
            changed.append(song)

    if changed:
        await repos.get_song_repository().save_songs(changed)
    logger.info(
        "Added perfect rehearsals", song_count=len(songs), changed=len(changed)
    )
    return changed


@define(frozen=True, slots=True)
class AddPerfectSongRehearsalCommand:
    song_id: UUID


@define(slots=True)
class AddPerfectSongRehearsalUseCase:
    rehearsals: SongRehearsalService = field(factory=SongRehearsalService)

    async def execute(
        self, command: AddPerfectSongRehearsalCommand, uow: UnitOfWorkProtocol
    ) -> Song:
        logger.info("Adding perfect rehearsal", song_id=str(command.song_id))

        async def work(repos: RepositoryFactory) -> Song:
            song = await require_song(repos, command.song_id)
            song, updated = await self.rehearsals.add_perfect_rehearsal(song, repos)
            if updated:
                await repos.get_song_repository().save_song(song)
            return song

        return await uow.execute(work)


@define(frozen=True, slots=True)
class AddPartialSongRehearsalCommand:
    song_id: UUID


@define(slots=True)
class AddPartialSongRehearsalUseCase:
    rehearsals: SongRehearsalService = field(factory=SongRehearsalService)

    async def execute(
        self, command: AddPartialSongRehearsalCommand, uow: UnitOfWorkProtocol
    ) -> Song:
        logger.info("Adding partial rehearsal", song_id=str(command.song_id))

        async def work(repos: RepositoryFactory) -> Song:
            song = await require_song(repos, command.song_id)
            song, updated = await self.rehearsals.add_partial_rehearsal(song, repos)
            if updated:
                await repos.get_song_repository().save_song(song)
            return song

        return await uow.execute(work)


@define(frozen=True, slots=True)
class AddPerfectSongRehearsalsCommand:
    song_ids: list[UUID]


@define(slots=True)
class AddPerfectSongRehearsalsUseCase:
    """Perfect rehearsal of several songs; every song must exist."""

    rehearsals: SongRehearsalService = field(factory=SongRehearsalService)

    async def execute(
        self, command: AddPerfectSongRehearsalsCommand, uow: UnitOfWorkProtocol
    ) -> list[Song]:
        async def work(repos: RepositoryFactory) -> list[Song]:
            song_ids = list(unique(command.song_ids))
            songs = await repos.get_song_repository().get_songs_by_ids(song_ids)
            if len(songs) != len(song_ids):
                raise NotFoundError("Songs")
            return await _rehearse_songs(songs, self.rehearsals, repos)

        return await uow.execute(work)


@define(frozen=True, slots=True)
class AddPerfectRehearsalsToAlbumsCommand:
    album_ids: list[UUID]


@define(slots=True)
class AddPerfectRehearsalsToAlbumsUseCase:
    rehearsals: SongRehearsalService = field(factory=SongRehearsalService)

    async def execute(
        self, command: AddPerfectRehearsalsToAlbumsCommand, uow: UnitOfWorkProtocol
    ) -> list[Song]:
        async def work(repos: RepositoryFactory) -> list[Song]:
            albums = await repos.get_album_repository().get_albums_by_ids(
                command.album_ids
            )
            if not albums:
                raise NotFoundError("Albums")
            songs = [song for album in albums for song in album.songs]
            return await _rehearse_songs(songs, self.rehearsals, repos)

        return await uow.execute(work)


@define(frozen=True, slots=True)
class AddPerfectRehearsalsToArtistsCommand:
    artist_ids: list[UUID]


@define(slots=True)
class AddPerfectRehearsalsToArtistsUseCase:
    rehearsals: SongRehearsalService = field(factory=SongRehearsalService)

    async def execute(
        self, command: AddPerfectRehearsalsToArtistsCommand, uow: UnitOfWorkProtocol
    ) -> list[Song]:
        async def work(repos: RepositoryFactory) -> list[Song]:
            artists = await repos.get_artist_repository().get_artists_by_ids(
                command.artist_ids
            )
            if not artists:
                raise NotFoundError("Artists")
            songs = await repos.get_song_repository().get_songs_by_artists(
                [a.id for a in artists]
            )
            return await _rehearse_songs(songs, self.rehearsals, repos)

        return await uow.execute(work)


@define(frozen=True, slots=True)
class AddPerfectRehearsalsToPlaylistsCommand:
    playlist_ids: list[UUID]


@define(slots=True)
class AddPerfectRehearsalsToPlaylistsUseCase:
    """Perfect rehearsal of every song on the playlists, once per song."""

    rehearsals: SongRehearsalService = field(factory=SongRehearsalService)

    async def execute(
        self,
        command: AddPerfectRehearsalsToPlaylistsCommand,
        uow: UnitOfWorkProtocol,
    ) -> list[Song]:
        async def work(repos: RepositoryFactory) -> list[Song]:
            playlists = await repos.get_playlist_repository().get_playlists_by_ids(
                command.playlist_ids
            )
            if not playlists:
                raise NotFoundError("Playlists")
            song_ids = list(
                unique(ps.song_id for playlist in playlists for ps in playlist.songs)
            )
            songs = await repos.get_song_repository().get_songs_by_ids(song_ids)
            return await _rehearse_songs(songs, self.rehearsals, repos)

        return await uow.execute(work)
