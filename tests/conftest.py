"""Shared test fixtures.

The unit of work double runs use case work against AsyncMock repositories,
so application tests need no database.
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

import pytest

from repertoire.domain.entities import HistoryProperty


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def uow():
    """Unit of work double backed by AsyncMock repositories.

    ``execute`` runs the work against the double itself. Section history is
    kept in ``uow.history`` so scoring sees every record created during the
    test.
    """
    uow = MagicMock()
    uow.history = []

    async def execute(work):
        return await work(uow)

    uow.execute = AsyncMock(side_effect=execute)

    song_repo = AsyncMock()
    song_repo.save_song.side_effect = lambda song: song
    song_repo.save_songs.side_effect = lambda songs: list(songs)

    section_repo = AsyncMock()

    async def create_history(record):
        uow.history.append(record)
        return record

    async def get_history(section_id, property_: HistoryProperty):
        return [
            h
            for h in uow.history
            if h.section_id == section_id and h.property == property_
        ]

    section_repo.create_history.side_effect = create_history
    section_repo.get_history.side_effect = get_history

    playlist_repo = AsyncMock()
    playlist_repo.save_playlist.side_effect = lambda playlist: playlist
    playlist_repo.get_playlists_containing_songs.return_value = []

    reference_repo = AsyncMock()
    reference_repo.save_items.side_effect = lambda items: list(items)

    uow.get_song_repository.return_value = song_repo
    uow.get_song_section_repository.return_value = section_repo
    uow.get_album_repository.return_value = AsyncMock()
    uow.get_artist_repository.return_value = AsyncMock()
    uow.get_playlist_repository.return_value = playlist_repo
    uow.get_reference_item_repository.return_value = reference_repo
    return uow
