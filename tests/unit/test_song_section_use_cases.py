"""Unit tests for song section use cases with mocked repositories."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest
from attrs import evolve

from repertoire.application.use_cases import (
    BulkDeleteSongSectionsCommand,
    BulkDeleteSongSectionsUseCase,
    BulkRehearsalsSongSectionsCommand,
    BulkRehearsalsSongSectionsUseCase,
    CreateSongSectionCommand,
    CreateSongSectionUseCase,
    DeleteSongSectionCommand,
    DeleteSongSectionUseCase,
    MoveSongSectionCommand,
    MoveSongSectionUseCase,
    SectionOccurrences,
    SectionRehearsals,
    UpdateSongSectionCommand,
    UpdateSongSectionUseCase,
    UpdateSongSectionsOccurrencesCommand,
    UpdateSongSectionsOccurrencesUseCase,
    UpdateSongSectionsPartialOccurrencesCommand,
    UpdateSongSectionsPartialOccurrencesUseCase,
)
from repertoire.domain.entities import HistoryProperty
from repertoire.domain.exceptions import ConflictError, NotFoundError
from tests.factories import make_artist, make_song


def _stored(uow, song):
    """Make the mocked repositories return the given song and its sections."""
    uow.get_song_repository().get_song.return_value = song
    uow.get_song_section_repository().get_section.side_effect = song.find_section


def _saved_song(uow):
    return uow.get_song_repository().save_song.await_args.args[0]


class TestCreateSongSection:
    @pytest.mark.asyncio
    async def test_appends_section_and_recomputes_song(self, uow):
        song = make_song(sections=2)
        _stored(uow, song)

        section = await CreateSongSectionUseCase().execute(
            CreateSongSectionCommand(song_id=song.id, name="Solo"), uow
        )

        assert section.order == 2
        assert section.confidence == 0
        saved = _saved_song(uow)
        assert [s.name for s in saved.sections] == ["Section 0", "Section 1", "Solo"]
        uow.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_song(self, uow):
        uow.get_song_repository().get_song.return_value = None

        with pytest.raises(NotFoundError):
            await CreateSongSectionUseCase().execute(
                CreateSongSectionCommand(song_id=uuid4(), name="Solo"), uow
            )

    @pytest.mark.asyncio
    async def test_band_member_of_other_artist_conflicts(self, uow):
        artist = make_artist(["Ann"])
        song = make_song(sections=1, artist_id=artist.id)
        _stored(uow, song)
        uow.get_artist_repository().get_artist.return_value = artist

        with pytest.raises(ConflictError, match="band member"):
            await CreateSongSectionUseCase().execute(
                CreateSongSectionCommand(
                    song_id=song.id, name="Solo", band_member_id=uuid4()
                ),
                uow,
            )
        uow.get_song_repository().save_song.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_band_member_of_song_artist_accepted(self, uow):
        artist = make_artist(["Ann"])
        member = artist.band_members[0]
        song = make_song(artist_id=artist.id)
        _stored(uow, song)
        uow.get_artist_repository().get_artist.return_value = artist

        section = await CreateSongSectionUseCase().execute(
            CreateSongSectionCommand(
                song_id=song.id, name="Solo", band_member_id=member.id
            ),
            uow,
        )

        assert section.band_member_id == member.id


class TestUpdateSongSection:
    def _command(self, section, **changes):
        values = {
            "section_id": section.id,
            "name": section.name,
            "rehearsals": section.rehearsals,
            "confidence": section.confidence,
            "section_type_id": section.section_type_id,
            "band_member_id": section.band_member_id,
            "instrument_id": section.instrument_id,
        }
        values.update(changes)
        return UpdateSongSectionCommand(**values)

    @pytest.mark.asyncio
    async def test_missing_section(self, uow):
        uow.get_song_section_repository().get_section.return_value = None

        with pytest.raises(NotFoundError):
            await UpdateSongSectionUseCase().execute(
                UpdateSongSectionCommand(
                    section_id=uuid4(), name="x", rehearsals=0, confidence=0
                ),
                uow,
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "other_changes",
        [{}, {"name": "Renamed"}, {"confidence": 90}, {"band_member_id": uuid4()}],
    )
    async def test_rehearsal_decrease_conflicts(self, uow, other_changes):
        """Test decreasing rehearsals is rejected whatever else changes."""
        song = make_song(sections=1)
        section = evolve(song.sections[0], rehearsals=5)
        song = song.with_sections([section])
        _stored(uow, song)

        with pytest.raises(ConflictError, match="rehearsals can only be increased"):
            await UpdateSongSectionUseCase().execute(
                self._command(section, rehearsals=4, **other_changes), uow
            )

        assert uow.history == []
        uow.get_song_repository().save_song.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rehearsal_increase_rescores_and_marks_played(self, uow):
        song = make_song(sections=2)
        section = song.sections[0]
        _stored(uow, song)
        before = datetime.now(UTC)

        updated = await UpdateSongSectionUseCase().execute(
            self._command(section, rehearsals=4, confidence=50), uow
        )

        assert updated.rehearsals == 4
        assert updated.rehearsals_score == 4
        assert updated.confidence_score == 50
        assert updated.progress == 2
        assert [h.property for h in uow.history] == [
            HistoryProperty.REHEARSALS,
            HistoryProperty.CONFIDENCE,
        ]
        saved = _saved_song(uow)
        assert saved.rehearsals == pytest.approx(2.0)
        assert saved.confidence == pytest.approx(25.0)
        assert saved.progress == pytest.approx(1.0)
        assert saved.last_time_played >= before

    @pytest.mark.asyncio
    async def test_rename_only_writes_no_history(self, uow):
        song = make_song(sections=1)
        section = song.sections[0]
        _stored(uow, song)

        updated = await UpdateSongSectionUseCase().execute(
            self._command(section, name="Chorus"), uow
        )

        assert updated.name == "Chorus"
        assert uow.history == []
        assert _saved_song(uow).last_time_played is None

    @pytest.mark.asyncio
    async def test_band_member_change_validated(self, uow):
        artist = make_artist(["Ann"])
        song = make_song(sections=1, artist_id=artist.id)
        _stored(uow, song)
        uow.get_artist_repository().get_artist.return_value = artist

        with pytest.raises(ConflictError):
            await UpdateSongSectionUseCase().execute(
                self._command(song.sections[0], band_member_id=uuid4()), uow
            )


class TestBulkRehearsals:
    @pytest.mark.asyncio
    async def test_adds_increments_and_recomputes_once(self, uow):
        song = make_song(sections=3)
        first, second, third = song.sections
        _stored(uow, song)

        sections = await BulkRehearsalsSongSectionsUseCase().execute(
            BulkRehearsalsSongSectionsCommand(
                song_id=song.id,
                sections=[
                    SectionRehearsals(first.id, 2),
                    SectionRehearsals(third.id, 4),
                ],
            ),
            uow,
        )

        assert [s.rehearsals for s in sections] == [2, 0, 4]
        assert [s.id for s in sections] == [first.id, second.id, third.id]
        uow.get_song_repository().save_song.assert_awaited_once()
        saved = _saved_song(uow)
        assert saved.rehearsals == pytest.approx(2.0)
        assert saved.last_time_played is not None
        uow.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_section_of_other_song(self, uow):
        song = make_song(sections=1)
        _stored(uow, song)

        with pytest.raises(NotFoundError):
            await BulkRehearsalsSongSectionsUseCase().execute(
                BulkRehearsalsSongSectionsCommand(
                    song_id=song.id, sections=[SectionRehearsals(uuid4(), 1)]
                ),
                uow,
            )
        assert uow.history == []

    @pytest.mark.asyncio
    async def test_repeated_section_counts_first_entry_only(self, uow):
        song = make_song(sections=2)
        first, _ = song.sections
        _stored(uow, song)

        sections = await BulkRehearsalsSongSectionsUseCase().execute(
            BulkRehearsalsSongSectionsCommand(
                song_id=song.id,
                sections=[
                    SectionRehearsals(first.id, 2),
                    SectionRehearsals(first.id, 5),
                ],
            ),
            uow,
        )

        assert [s.rehearsals for s in sections] == [2, 0]
        assert [(h.from_value, h.to_value) for h in uow.history] == [(0, 2)]


class TestSectionOccurrences:
    @pytest.mark.asyncio
    async def test_sets_occurrences_of_listed_sections(self, uow):
        song = make_song(sections=3)
        first, second, third = song.sections
        _stored(uow, song)

        sections = await UpdateSongSectionsOccurrencesUseCase().execute(
            UpdateSongSectionsOccurrencesCommand(
                song_id=song.id,
                sections=[
                    SectionOccurrences(third.id, 3),
                    SectionOccurrences(first.id, 1),
                    SectionOccurrences(first.id, 7),
                    SectionOccurrences(uuid4(), 23),
                ],
            ),
            uow,
        )

        assert [s.occurrences for s in sections] == [1, 0, 3]
        assert [s.id for s in sections] == [first.id, second.id, third.id]
        assert _saved_song(uow).sections == sections
        assert uow.history == []

    @pytest.mark.asyncio
    async def test_sets_partial_occurrences_only(self, uow):
        song = make_song(sections=2)
        first, second = song.sections
        song = song.with_sections([evolve(first, occurrences=4), second])
        _stored(uow, song)

        sections = await UpdateSongSectionsPartialOccurrencesUseCase().execute(
            UpdateSongSectionsPartialOccurrencesCommand(
                song_id=song.id, sections=[SectionOccurrences(second.id, 2)]
            ),
            uow,
        )

        assert [(s.occurrences, s.partial_occurrences) for s in sections] == [
            (4, 0),
            (0, 2),
        ]

    @pytest.mark.asyncio
    async def test_missing_song(self, uow):
        uow.get_song_repository().get_song.return_value = None

        with pytest.raises(NotFoundError):
            await UpdateSongSectionsOccurrencesUseCase().execute(
                UpdateSongSectionsOccurrencesCommand(song_id=uuid4(), sections=[]),
                uow,
            )


class TestMoveAndDeleteSections:
    @pytest.mark.asyncio
    async def test_move_section(self, uow):
        song = make_song(sections=3)
        a, b, c = song.sections
        _stored(uow, song)

        moved = await MoveSongSectionUseCase().execute(
            MoveSongSectionCommand(song.id, c.id, a.id), uow
        )

        assert [s.id for s in moved] == [c.id, a.id, b.id]
        assert [s.order for s in moved] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_move_unknown_target(self, uow):
        song = make_song(sections=2)
        _stored(uow, song)

        with pytest.raises(NotFoundError):
            await MoveSongSectionUseCase().execute(
                MoveSongSectionCommand(song.id, song.sections[0].id, uuid4()), uow
            )

    @pytest.mark.asyncio
    async def test_bulk_delete_renumbers_and_recomputes(self, uow):
        song = make_song(sections=4)
        song = song.with_sections(
            [evolve(s, confidence=10 * (i + 1)) for i, s in enumerate(song.sections)]
        )
        _stored(uow, song)

        await BulkDeleteSongSectionsUseCase().execute(
            BulkDeleteSongSectionsCommand(
                song.id, [song.sections[0].id, song.sections[2].id]
            ),
            uow,
        )

        saved = _saved_song(uow)
        assert [s.name for s in saved.sections] == ["Section 1", "Section 3"]
        assert [s.order for s in saved.sections] == [0, 1]
        assert saved.confidence == pytest.approx(30.0)

    @pytest.mark.asyncio
    async def test_delete_single_section(self, uow):
        song = make_song(sections=2)
        _stored(uow, song)

        await DeleteSongSectionUseCase().execute(
            DeleteSongSectionCommand(song.id, song.sections[1].id), uow
        )

        assert [s.id for s in _saved_song(uow).sections] == [song.sections[0].id]
