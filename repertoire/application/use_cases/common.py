"""Lookups shared by use cases.

Each helper loads an aggregate through transaction-scoped repositories and
raises NotFoundError when it does not exist.
"""

from uuid import UUID

from repertoire.domain.entities import Album, Artist, Playlist, Song
from repertoire.domain.exceptions import ConflictError, NotFoundError
from repertoire.domain.repositories import RepositoryFactory


async def require_song(repos: RepositoryFactory, song_id: UUID) -> Song:
    song = await repos.get_song_repository().get_song(song_id)
    if song is None:
        raise NotFoundError("Song", song_id)
    return song


async def require_album(repos: RepositoryFactory, album_id: UUID) -> Album:
    album = await repos.get_album_repository().get_album(album_id)
    if album is None:
        raise NotFoundError("Album", album_id)
    return album


async def require_artist(repos: RepositoryFactory, artist_id: UUID) -> Artist:
    artist = await repos.get_artist_repository().get_artist(artist_id)
    if artist is None:
        raise NotFoundError("Artist", artist_id)
    return artist


async def require_playlist(repos: RepositoryFactory, playlist_id: UUID) -> Playlist:
    playlist = await repos.get_playlist_repository().get_playlist(playlist_id)
    if playlist is None:
        raise NotFoundError("Playlist", playlist_id)
    return playlist


def require_ids(present: set[UUID], requested: list[UUID], entity_type: str) -> None:
    """Raise NotFoundError for the first requested ID that is not present."""
    for entity_id in requested:
        if entity_id not in present:
            raise NotFoundError(entity_type, entity_id)


async def ensure_band_member_of_song(
    repos: RepositoryFactory, song: Song, band_member_id: UUID
) -> None:
    """Check that a band member belongs to the artist of the song."""
    artist = None
    if song.artist_id is not None:
        artist = await repos.get_artist_repository().get_artist(song.artist_id)
    if artist is None or artist.find_band_member(band_member_id) is None:
        raise ConflictError(
            "band member is not part of the artist associated with this song"
        )
