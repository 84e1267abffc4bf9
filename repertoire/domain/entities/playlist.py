"""Playlist-related domain entities.

A playlist holds songs through PlaylistSong membership rows. Each row has its
own track number scoped to the playlist, so the same song may appear more
than once when it was force-added.
"""

from datetime import datetime
from uuid import UUID, uuid4

from attrs import define, evolve, field, validators

from .shared import utc_now


@define(frozen=True, slots=True)
class PlaylistSong:
    """Playlist membership of a song with its 1-based track number."""

    playlist_id: UUID
    song_id: UUID
    song_track_no: int = field(validator=validators.ge(1))
    created_at: datetime = field(factory=utc_now)
    id: UUID = field(factory=uuid4)


@define(frozen=True, slots=True)
class Playlist:
    """A user-facing, ordered list of songs."""

    user_id: UUID
    title: str = field(validator=validators.instance_of(str))
    description: str = ""
    songs: list[PlaylistSong] = field(factory=list)
    id: UUID = field(factory=uuid4)

    @property
    def song_ids(self) -> set[UUID]:
        """IDs of all songs currently on the playlist."""
        return {ps.song_id for ps in self.songs}

    def with_songs(self, songs: list[PlaylistSong]) -> "Playlist":
        """Create a new playlist with the given membership rows."""
        return evolve(self, songs=list(songs))

    def find_playlist_song(self, playlist_song_id: UUID) -> PlaylistSong | None:
        """Return the membership row with the given ID, if any."""
        return next((ps for ps in self.songs if ps.id == playlist_song_id), None)
