"""Unit tests for SectionProgressService scoring sequence."""

from unittest.mock import Mock
from uuid import uuid4

import pytest

from repertoire.application.services import SectionProgressService
from repertoire.domain.entities import HistoryProperty, SongSection
from repertoire.domain.progress import ProgressProcessorProtocol


@pytest.fixture
def section():
    return SongSection(song_id=uuid4(), name="Verse", rehearsals=2, confidence=40)


class TestRecordChange:
    @pytest.mark.asyncio
    async def test_rehearsal_change_is_logged_then_scored(self, uow, section):
        """Test history is written before scoring and includes the new entry."""
        service = SectionProgressService()

        updated = await service.record_change(
            section, HistoryProperty.REHEARSALS, 5, uow
        )

        assert len(uow.history) == 1
        record = uow.history[0]
        assert (record.section_id, record.from_value, record.to_value) == (
            section.id,
            2,
            5,
        )
        assert record.property == HistoryProperty.REHEARSALS
        assert updated.rehearsals == 5
        assert updated.rehearsals_score == 3
        assert updated.confidence == 40  # Untouched

    @pytest.mark.asyncio
    async def test_confidence_change_rescores_progress(self, uow, section):
        service = SectionProgressService()
        section = await service.record_change(
            section, HistoryProperty.REHEARSALS, 12, uow
        )

        updated = await service.record_change(
            section, HistoryProperty.CONFIDENCE, 50, uow
        )

        assert updated.confidence == 50
        assert updated.confidence_score == 50
        assert updated.progress == 10 * 50 // 100
        assert [h.property for h in uow.history] == [
            HistoryProperty.REHEARSALS,
            HistoryProperty.CONFIDENCE,
        ]

    @pytest.mark.asyncio
    async def test_scores_only_matching_property_history(self, uow, section):
        service = SectionProgressService()
        await service.record_change(section, HistoryProperty.CONFIDENCE, 90, uow)

        updated = await service.record_change(
            section, HistoryProperty.REHEARSALS, 4, uow
        )

        assert updated.rehearsals_score == 2
        section_repo = uow.get_song_section_repository()
        section_repo.get_history.assert_awaited_with(
            section.id, HistoryProperty.REHEARSALS
        )

    @pytest.mark.asyncio
    async def test_uses_injected_processor(self, uow, section):
        processor = Mock(spec=ProgressProcessorProtocol)
        processor.compute_rehearsals_score.return_value = 77
        processor.compute_progress.return_value = 33

        updated = await SectionProgressService(processor=processor).record_change(
            section, HistoryProperty.REHEARSALS, 3, uow
        )

        assert updated.rehearsals_score == 77
        assert updated.progress == 33
        processor.compute_rehearsals_score.assert_called_once()
        processor.compute_confidence_score.assert_not_called()
