"""Domain repository interfaces following Clean Architecture principles.

These interfaces define the contracts for data access without depending on
infrastructure implementations, following the dependency inversion principle.
Aggregates are loaded and saved whole: a song with its sections and
arrangements, an artist with its band members, a playlist with its
membership rows.
"""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol, Self, TypeAlias, TypeVar
from uuid import UUID

if TYPE_CHECKING:
    from repertoire.domain.entities import (
        Album,
        Artist,
        HistoryProperty,
        Playlist,
        ReferenceItem,
        ReferenceKind,
        Song,
        SongSection,
        SongSectionHistory,
    )
    from repertoire.domain.events import Topic


class SongRepositoryProtocol(Protocol):
    """Repository interface for songs and the sections they own."""

    def get_song(self, song_id: UUID) -> Awaitable["Song | None"]:
        """Get a song with its sections and arrangements."""
        ...

    def get_songs_by_ids(self, song_ids: list[UUID]) -> Awaitable[list["Song"]]:
        """Get songs by ID, in no particular order."""
        ...

    def get_songs_by_albums(self, album_ids: list[UUID]) -> Awaitable[list["Song"]]:
        """Get album songs grouped by album in the requested order.

        Within an album, songs are ordered by track number.
        """
        ...

    def get_songs_by_artists(
        self, artist_ids: list[UUID]
    ) -> Awaitable[list["Song"]]:
        """Get artist songs grouped by artist in the requested order.

        Within an artist, songs are ordered by title.
        """
        ...

    def save_song(self, song: "Song") -> Awaitable["Song"]:
        """Insert or update a song together with its sections and arrangements.

        Sections and arrangements no longer present on the song are deleted.
        """
        ...

    def save_songs(self, songs: list["Song"]) -> Awaitable[list["Song"]]:
        """Save several songs in one go."""
        ...

    def delete_songs(self, song_ids: list[UUID]) -> Awaitable[int]:
        """Delete songs, cascading to sections, history and memberships.

        Returns:
            Number of deleted songs
        """
        ...


class SongSectionRepositoryProtocol(Protocol):
    """Repository interface for section lookups and section history."""

    def get_section(self, section_id: UUID) -> Awaitable["SongSection | None"]:
        """Get a single section."""
        ...

    def create_history(
        self, history: "SongSectionHistory"
    ) -> Awaitable["SongSectionHistory"]:
        """Append a history record. Records are never updated."""
        ...

    def get_history(
        self, section_id: UUID, property_: "HistoryProperty"
    ) -> Awaitable[list["SongSectionHistory"]]:
        """Get a section's history for one property, oldest first."""
        ...


class AlbumRepositoryProtocol(Protocol):
    """Repository interface for albums."""

    def get_album(self, album_id: UUID) -> Awaitable["Album | None"]:
        """Get an album with its songs ordered by track number."""
        ...

    def get_albums_by_ids(self, album_ids: list[UUID]) -> Awaitable[list["Album"]]:
        """Get several albums with their songs."""
        ...

    def save_album(self, album: "Album") -> Awaitable["Album"]:
        """Insert or update the album row. Songs are saved through songs."""
        ...


class ArtistRepositoryProtocol(Protocol):
    """Repository interface for artists and their band members."""

    def get_artist(self, artist_id: UUID) -> Awaitable["Artist | None"]:
        """Get an artist with its band members ordered by position."""
        ...

    def get_artists_by_ids(
        self, artist_ids: list[UUID]
    ) -> Awaitable[list["Artist"]]:
        """Get several artists with their band members."""
        ...

    def save_artist(self, artist: "Artist") -> Awaitable["Artist"]:
        """Insert or update an artist with its band members.

        Band members no longer present on the artist are deleted.
        """
        ...


class PlaylistRepositoryProtocol(Protocol):
    """Repository interface for playlists and their membership rows."""

    def get_playlist(self, playlist_id: UUID) -> Awaitable["Playlist | None"]:
        """Get a playlist with its songs ordered by track number."""
        ...

    def get_playlists_by_ids(
        self, playlist_ids: list[UUID]
    ) -> Awaitable[list["Playlist"]]:
        """Get several playlists with their membership rows."""
        ...

    def get_playlists_containing_songs(
        self, song_ids: list[UUID]
    ) -> Awaitable[list["Playlist"]]:
        """Get every playlist holding at least one of the songs."""
        ...

    def save_playlist(self, playlist: "Playlist") -> Awaitable["Playlist"]:
        """Insert or update a playlist with its membership rows.

        Membership rows no longer present on the playlist are deleted.
        """
        ...


class ReferenceItemRepositoryProtocol(Protocol):
    """Repository interface for per-user reference lists."""

    def get_items(
        self, user_id: UUID, kind: "ReferenceKind"
    ) -> Awaitable[list["ReferenceItem"]]:
        """Get one of a user's reference lists ordered by position."""
        ...

    def save_items(
        self, items: list["ReferenceItem"]
    ) -> Awaitable[list["ReferenceItem"]]:
        """Insert or update reference items."""
        ...

    def delete_item(self, item_id: UUID) -> Awaitable[int]:
        """Delete a reference item, returning the number of deleted rows."""
        ...


class MessagePublisherProtocol(Protocol):
    """Outbound messaging used to notify other services of song changes."""

    def publish(self, topic: "Topic", payload: Any) -> Awaitable[None]:
        """Publish a payload on a topic."""
        ...


class RepositoryFactory(Protocol):
    """Provides repositories bound to a single transaction."""

    def get_song_repository(self) -> SongRepositoryProtocol:
        """Get song repository using this unit of work's transaction."""
        ...

    def get_song_section_repository(self) -> SongSectionRepositoryProtocol:
        """Get song section repository using this unit of work's transaction."""
        ...

    def get_album_repository(self) -> AlbumRepositoryProtocol:
        """Get album repository using this unit of work's transaction."""
        ...

    def get_artist_repository(self) -> ArtistRepositoryProtocol:
        """Get artist repository using this unit of work's transaction."""
        ...

    def get_playlist_repository(self) -> PlaylistRepositoryProtocol:
        """Get playlist repository using this unit of work's transaction."""
        ...

    def get_reference_item_repository(self) -> ReferenceItemRepositoryProtocol:
        """Get reference item repository using this unit of work's transaction."""
        ...


T = TypeVar("T")

Work: TypeAlias = Callable[[RepositoryFactory], Awaitable[T]]


class UnitOfWorkProtocol(RepositoryFactory, Protocol):
    """Unit of Work interface for transaction boundary management.

    This protocol allows the application layer to control transaction
    boundaries while keeping the implementation details in the
    infrastructure layer. Each UnitOfWork instance manages a single database
    transaction and provides access to all repositories sharing that
    transaction.
    """

    async def __aenter__(self) -> Self:
        """Enter async context manager."""
        ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit async context manager with automatic commit/rollback."""
        ...

    async def commit(self) -> None:
        """Explicitly commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Explicitly rollback the current transaction."""
        ...

    async def execute(self, work: Work[T]) -> T:
        """Run work inside one transaction.

        The work receives the repository factory and must perform all reads
        and writes through repositories obtained from it. Raising inside the
        work rolls the transaction back and re-raises; returning normally
        commits.
        """
        ...
