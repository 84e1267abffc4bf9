"""Duplicate-aware bulk insertion of songs into playlists.

When songs, albums or artists are added to a playlist in bulk, some songs may
already be on it. The caller chooses what happens through a three-state
``force_add`` flag:

- unset: nothing is added when duplicates exist, and the duplicates are
  reported so the user can decide
- True: every candidate is added, duplicates included
- False: only songs not yet on the playlist are added

Setting the flag when there is nothing to decide is a usage error.
"""

from collections.abc import Callable, Hashable, Iterable, Sequence
from uuid import UUID

from attrs import define, field
from toolz import groupby, unique

from .entities import Playlist, PlaylistSong, Song
from .exceptions import BadRequestError
from .ordering import PLAYLIST_SONGS, append_position


@define(frozen=True, slots=True)
class DuplicateResolution:
    """Outcome of a duplicate-aware bulk add."""

    success: bool
    duplicate_group_ids: list[Hashable] = field(factory=list)
    duplicate_song_ids: list[UUID] = field(factory=list)
    added_song_ids: list[UUID] = field(factory=list)


def partition_and_filter(
    candidates: Sequence[Song],
    existing_song_ids: Iterable[UUID],
    force_add: bool | None = None,
    group_key: Callable[[Song], Hashable] | None = None,
) -> DuplicateResolution:
    """Classify candidate songs as duplicates and apply the force/skip policy.

    Args:
        candidates: Songs to add, in the order they should be appended
        existing_song_ids: IDs of songs already on the target playlist
        force_add: Unset, or the caller's explicit choice for duplicates
        group_key: Source grouping of candidates (album or artist ID); a
            group is reported when all of its songs are duplicates

    Returns:
        Resolution listing duplicates and the song IDs to append, in order

    Raises:
        BadRequestError: force_add is set but no candidate is a duplicate
    """
    existing = set(existing_song_ids)
    duplicate_song_ids = list(unique(s.id for s in candidates if s.id in existing))

    duplicate_group_ids: list[Hashable] = []
    if group_key is not None:
        groups = groupby(group_key, candidates)
        duplicate_group_ids = [
            key
            for key, songs in groups.items()
            if all(s.id in existing for s in songs)
        ]

    if not duplicate_song_ids:
        if force_add is not None:
            raise BadRequestError("force adding when there are no duplicates")
        return DuplicateResolution(
            success=True,
            added_song_ids=[s.id for s in candidates],
        )

    if force_add is None:
        return DuplicateResolution(
            success=False,
            duplicate_group_ids=duplicate_group_ids,
            duplicate_song_ids=duplicate_song_ids,
        )

    if force_add:
        added = [s.id for s in candidates]
    else:
        added = [s.id for s in candidates if s.id not in existing]

    return DuplicateResolution(
        success=True,
        duplicate_group_ids=duplicate_group_ids,
        duplicate_song_ids=duplicate_song_ids,
        added_song_ids=added,
    )


def append_to_playlist(playlist: Playlist, song_ids: Iterable[UUID]) -> Playlist:
    """Append songs to the end of a playlist with consecutive track numbers."""
    songs = list(playlist.songs)
    for song_id in song_ids:
        songs.append(
            PlaylistSong(
                playlist_id=playlist.id,
                song_id=song_id,
                song_track_no=append_position(songs, PLAYLIST_SONGS),
            )
        )
    return playlist.with_songs(songs)
