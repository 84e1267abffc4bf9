"""Use cases for songs.

Songs placed on an album hold a 1-based album track number. Moving a song
off an album closes the gap it leaves; moving it onto an album appends it at
the end. Mutations are announced through the optional message publisher
once the transaction has committed.
"""

from uuid import UUID

from attrs import define, evolve, field
from toolz import unique

from repertoire.config import get_logger
from repertoire.domain.entities import Song, SongSection
from repertoire.domain.events import Topic
from repertoire.domain.exceptions import BadRequestError, NotFoundError
from repertoire.domain.ordering import (
    ALBUM_TRACKS,
    PLAYLIST_SONGS,
    append_position,
    renumber_after_removal,
)
from repertoire.domain.repositories import (
    MessagePublisherProtocol,
    RepositoryFactory,
    UnitOfWorkProtocol,
)
from repertoire.domain.stats import apply_section_stats

from .common import require_album, require_song

logger = get_logger(__name__)


async def detach_from_album(repos: RepositoryFactory, songs: list[Song]) -> None:
    """Renumber the albums the songs are leaving.

    The songs themselves are not saved; callers persist them with their new
    album placement.
    """
    song_ids = [s.id for s in songs]
    album_ids = list(unique(s.album_id for s in songs if s.album_id is not None))
    if not album_ids:
        return

    song_repo = repos.get_song_repository()
    for album in await repos.get_album_repository().get_albums_by_ids(album_ids):
        survivors = renumber_after_removal(album.songs, song_ids, ALBUM_TRACKS)
        await song_repo.save_songs(survivors)


@define(frozen=True, slots=True)
class SectionDraft:
    """Section to create together with a new song."""

    name: str
    section_type_id: UUID | None = None


@define(frozen=True, slots=True)
class CreateSongCommand:
    user_id: UUID
    title: str
    description: str = ""
    album_id: UUID | None = None
    artist_id: UUID | None = None
    guitar_tuning_id: UUID | None = None
    sections: list[SectionDraft] = field(factory=list)


@define(slots=True)
class CreateSongUseCase:
    """Create a song with its sections, optionally at the end of an album.

    A song created on an album takes over the album's artist.
    """

    publisher: MessagePublisherProtocol | None = None

    async def execute(
        self, command: CreateSongCommand, uow: UnitOfWorkProtocol
    ) -> Song:
        logger.info(
            "Creating song",
            title=command.title,
            album_id=str(command.album_id) if command.album_id else None,
            section_count=len(command.sections),
        )

        async def work(repos: RepositoryFactory) -> Song:
            song = Song(
                user_id=command.user_id,
                title=command.title,
                description=command.description,
                artist_id=command.artist_id,
                guitar_tuning_id=command.guitar_tuning_id,
            )
            if command.album_id is not None:
                album = await require_album(repos, command.album_id)
                song = evolve(
                    song,
                    album_id=album.id,
                    album_track_no=append_position(album.songs, ALBUM_TRACKS),
                    artist_id=album.artist_id,
                )

            sections = [
                SongSection(
                    song_id=song.id,
                    name=draft.name,
                    order=order,
                    section_type_id=draft.section_type_id,
                )
                for order, draft in enumerate(command.sections)
            ]
            song = apply_section_stats(song, sections)
            return await repos.get_song_repository().save_song(song)

        song = await uow.execute(work)
        if self.publisher is not None:
            await self.publisher.publish(Topic.SONG_CREATED, song)
        return song


@define(frozen=True, slots=True)
class UpdateSongCommand:
    song_id: UUID
    title: str
    description: str = ""
    album_id: UUID | None = None
    artist_id: UUID | None = None
    guitar_tuning_id: UUID | None = None


@define(slots=True)
class UpdateSongUseCase:
    """Edit a song, moving it between albums when its album changes."""

    publisher: MessagePublisherProtocol | None = None

    async def execute(
        self, command: UpdateSongCommand, uow: UnitOfWorkProtocol
    ) -> Song:
        logger.info("Updating song", song_id=str(command.song_id))

        async def work(repos: RepositoryFactory) -> Song:
            song = await require_song(repos, command.song_id)
            album_changed = song.album_id != command.album_id
            artist_changed = song.artist_id != command.artist_id

            new_album = None
            if (album_changed or artist_changed) and command.album_id is not None:
                new_album = await require_album(repos, command.album_id)
                if new_album.artist_id != command.artist_id:
                    raise BadRequestError(
                        "album's artist does not match the request's artist"
                    )

            if album_changed:
                await detach_from_album(repos, [song])
                track_no = None
                if new_album is not None:
                    track_no = append_position(new_album.songs, ALBUM_TRACKS)
                song = song.with_album(command.album_id, track_no)

            song = evolve(
                song,
                title=command.title,
                description=command.description,
                artist_id=command.artist_id,
                guitar_tuning_id=command.guitar_tuning_id,
            )
            return await repos.get_song_repository().save_song(song)

        song = await uow.execute(work)
        if self.publisher is not None:
            await self.publisher.publish(Topic.SONGS_UPDATED, [song.id])
        return song


@define(frozen=True, slots=True)
class BulkDeleteSongsCommand:
    song_ids: list[UUID]


@define(slots=True)
class BulkDeleteSongsUseCase:
    """Delete songs and close the gaps they leave on albums and playlists."""

    publisher: MessagePublisherProtocol | None = None

    async def execute(
        self, command: BulkDeleteSongsCommand, uow: UnitOfWorkProtocol
    ) -> list[Song]:
        logger.info("Deleting songs", song_count=len(command.song_ids))

        async def work(repos: RepositoryFactory) -> list[Song]:
            song_repo = repos.get_song_repository()
            songs = await song_repo.get_songs_by_ids(command.song_ids)
            if not songs:
                raise NotFoundError("Songs")

            await detach_from_album(repos, songs)

            deleted_ids = {s.id for s in songs}
            playlist_repo = repos.get_playlist_repository()
            for playlist in await playlist_repo.get_playlists_containing_songs(
                list(deleted_ids)
            ):
                removed = [ps.id for ps in playlist.songs if ps.song_id in deleted_ids]
                remaining = renumber_after_removal(
                    playlist.songs, removed, PLAYLIST_SONGS
                )
                await playlist_repo.save_playlist(
                    playlist.with_songs(remaining)
                )

            await song_repo.delete_songs([s.id for s in songs])
            return songs

        songs = await uow.execute(work)
        if self.publisher is not None:
            await self.publisher.publish(Topic.SONGS_DELETED, songs)
        return songs
