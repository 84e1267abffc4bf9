"""Unit tests for run-through rehearsals of songs and their collections."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest
from attrs import evolve

from repertoire.application.services import SongRehearsalService
from repertoire.application.use_cases import (
    AddPartialSongRehearsalCommand,
    AddPartialSongRehearsalUseCase,
    AddPerfectRehearsalsToAlbumsCommand,
    AddPerfectRehearsalsToAlbumsUseCase,
    AddPerfectRehearsalsToArtistsCommand,
    AddPerfectRehearsalsToArtistsUseCase,
    AddPerfectRehearsalsToPlaylistsCommand,
    AddPerfectRehearsalsToPlaylistsUseCase,
    AddPerfectSongRehearsalCommand,
    AddPerfectSongRehearsalUseCase,
    AddPerfectSongRehearsalsCommand,
    AddPerfectSongRehearsalsUseCase,
)
from repertoire.domain.entities import HistoryProperty
from repertoire.domain.exceptions import NotFoundError
from tests.factories import make_album_with_songs, make_artist, make_playlist, make_song


def _with_counts(song, occurrences, partial=None):
    """Give the song's sections the given occurrence counts."""
    partial = partial or [0] * len(occurrences)
    return song.with_sections(
        [
            evolve(s, occurrences=o, partial_occurrences=p)
            for s, o, p in zip(song.sections, occurrences, partial, strict=True)
        ]
    )


class TestSongRehearsalService:
    @pytest.mark.asyncio
    async def test_perfect_rehearsal_adds_occurrences(self, uow):
        song = make_song(sections=3)
        first, second, third = song.sections
        song = song.with_sections(
            [
                evolve(first, rehearsals=23, occurrences=2),
                evolve(second, rehearsals=10),
                evolve(third, occurrences=4),
            ]
        )

        rehearsed, updated = await SongRehearsalService().add_perfect_rehearsal(
            song, uow
        )

        assert updated is True
        assert [s.rehearsals for s in rehearsed.sections] == [25, 10, 4]
        assert rehearsed.sections[1] == song.sections[1]
        assert [(h.section_id, h.from_value, h.to_value) for h in uow.history] == [
            (first.id, 23, 25),
            (third.id, 0, 4),
        ]
        assert all(h.property == HistoryProperty.REHEARSALS for h in uow.history)
        assert [s.rehearsals_score for s in rehearsed.sections] == [2, 0, 4]
        assert rehearsed.rehearsals == pytest.approx(13.0)
        assert rehearsed.last_time_played is not None

    @pytest.mark.asyncio
    async def test_partial_rehearsal_adds_partial_occurrences(self, uow):
        song = _with_counts(make_song(sections=2), [3, 3], partial=[0, 1])

        rehearsed, updated = await SongRehearsalService().add_partial_rehearsal(
            song, uow
        )

        assert updated is True
        assert [s.rehearsals for s in rehearsed.sections] == [0, 1]
        assert len(uow.history) == 1

    @pytest.mark.asyncio
    async def test_song_without_occurrences_is_unchanged(self, uow):
        played = datetime(2024, 1, 1, tzinfo=UTC)
        song = evolve(make_song(sections=2), last_time_played=played)

        rehearsed, updated = await SongRehearsalService().add_perfect_rehearsal(
            song, uow
        )

        assert updated is False
        assert rehearsed is song
        assert uow.history == []


class TestSingleSongRehearsal:
    @pytest.mark.asyncio
    async def test_perfect_rehearsal_saves_song(self, uow):
        song = _with_counts(make_song(sections=2), [1, 2])
        uow.get_song_repository().get_song.return_value = song

        result = await AddPerfectSongRehearsalUseCase().execute(
            AddPerfectSongRehearsalCommand(song.id), uow
        )

        assert [s.rehearsals for s in result.sections] == [1, 2]
        uow.get_song_repository().save_song.assert_awaited_once_with(result)
        uow.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_partial_rehearsal_without_partial_occurrences_saves_nothing(
        self, uow
    ):
        song = _with_counts(make_song(sections=2), [1, 2])
        uow.get_song_repository().get_song.return_value = song

        result = await AddPartialSongRehearsalUseCase().execute(
            AddPartialSongRehearsalCommand(song.id), uow
        )

        assert result is song
        uow.get_song_repository().save_song.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_song(self, uow):
        uow.get_song_repository().get_song.return_value = None

        with pytest.raises(NotFoundError, match="Song"):
            await AddPerfectSongRehearsalUseCase().execute(
                AddPerfectSongRehearsalCommand(uuid4()), uow
            )


class TestBulkPerfectRehearsals:
    @pytest.mark.asyncio
    async def test_songs_saves_only_changed_songs(self, uow):
        played = _with_counts(make_song(sections=1, title="played"), [2])
        silent = make_song(sections=1, title="silent")
        song_repo = uow.get_song_repository()
        song_repo.get_songs_by_ids.return_value = [played, silent]

        changed = await AddPerfectSongRehearsalsUseCase().execute(
            AddPerfectSongRehearsalsCommand([played.id, silent.id, played.id]), uow
        )

        assert [s.title for s in changed] == ["played"]
        song_repo.get_songs_by_ids.assert_awaited_once_with([played.id, silent.id])
        song_repo.save_songs.assert_awaited_once_with(changed)

    @pytest.mark.asyncio
    async def test_songs_require_every_song(self, uow):
        song = make_song(sections=1)
        uow.get_song_repository().get_songs_by_ids.return_value = [song]

        with pytest.raises(NotFoundError, match="Songs not found"):
            await AddPerfectSongRehearsalsUseCase().execute(
                AddPerfectSongRehearsalsCommand([song.id, uuid4()]), uow
            )
        uow.get_song_repository().save_songs.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_nothing_to_rehearse_saves_nothing(self, uow):
        song = make_song(sections=2)
        uow.get_song_repository().get_songs_by_ids.return_value = [song]

        changed = await AddPerfectSongRehearsalsUseCase().execute(
            AddPerfectSongRehearsalsCommand([song.id]), uow
        )

        assert changed == []
        uow.get_song_repository().save_songs.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_albums_rehearse_every_album_song(self, uow):
        albums = [
            album.with_songs(
                [
                    _with_counts(make_song(sections=1, id=s.id, title=s.title), [1])
                    for s in album.songs
                ]
            )
            for album in [make_album_with_songs(2), make_album_with_songs(1)]
        ]
        uow.get_album_repository().get_albums_by_ids.return_value = albums

        changed = await AddPerfectRehearsalsToAlbumsUseCase().execute(
            AddPerfectRehearsalsToAlbumsCommand([a.id for a in albums]), uow
        )

        assert [s.id for s in changed] == [
            s.id for album in albums for s in album.songs
        ]
        assert all(s.sections[0].rehearsals == 1 for s in changed)
        uow.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_albums_none_found(self, uow):
        uow.get_album_repository().get_albums_by_ids.return_value = []

        with pytest.raises(NotFoundError, match="Albums not found"):
            await AddPerfectRehearsalsToAlbumsUseCase().execute(
                AddPerfectRehearsalsToAlbumsCommand([uuid4()]), uow
            )

    @pytest.mark.asyncio
    async def test_artists_rehearse_artist_songs(self, uow):
        artist = make_artist(["Ann"])
        songs = [
            _with_counts(make_song(sections=1, artist_id=artist.id), [3])
            for _ in range(2)
        ]
        uow.get_artist_repository().get_artists_by_ids.return_value = [artist]
        song_repo = uow.get_song_repository()
        song_repo.get_songs_by_artists.return_value = songs

        changed = await AddPerfectRehearsalsToArtistsUseCase().execute(
            AddPerfectRehearsalsToArtistsCommand([artist.id, uuid4()]), uow
        )

        song_repo.get_songs_by_artists.assert_awaited_once_with([artist.id])
        assert [s.sections[0].rehearsals for s in changed] == [3, 3]

    @pytest.mark.asyncio
    async def test_artists_none_found(self, uow):
        uow.get_artist_repository().get_artists_by_ids.return_value = []

        with pytest.raises(NotFoundError, match="Artists not found"):
            await AddPerfectRehearsalsToArtistsUseCase().execute(
                AddPerfectRehearsalsToArtistsCommand([uuid4()]), uow
            )

    @pytest.mark.asyncio
    async def test_playlists_rehearse_repeated_song_once(self, uow):
        song = _with_counts(make_song(sections=1), [2])
        other = _with_counts(make_song(sections=1), [1])
        playlists = [make_playlist([song.id, other.id, song.id]), make_playlist([])]
        uow.get_playlist_repository().get_playlists_by_ids.return_value = playlists
        song_repo = uow.get_song_repository()
        song_repo.get_songs_by_ids.return_value = [song, other]

        changed = await AddPerfectRehearsalsToPlaylistsUseCase().execute(
            AddPerfectRehearsalsToPlaylistsCommand([p.id for p in playlists]), uow
        )

        song_repo.get_songs_by_ids.assert_awaited_once_with([song.id, other.id])
        assert [s.sections[0].rehearsals for s in changed] == [2, 1]
        assert len(uow.history) == 2

    @pytest.mark.asyncio
    async def test_playlists_none_found(self, uow):
        uow.get_playlist_repository().get_playlists_by_ids.return_value = []

        with pytest.raises(NotFoundError, match="Playlists not found"):
            await AddPerfectRehearsalsToPlaylistsUseCase().execute(
                AddPerfectRehearsalsToPlaylistsCommand([uuid4()]), uow
            )
