"""Tests for the default section scoring strategy."""

from uuid import uuid4

import pytest

from repertoire.domain.entities import HistoryProperty, SongSection, SongSectionHistory
from repertoire.domain.progress import DefaultProgressProcessor


def _history(prop: HistoryProperty, *changes: tuple[int, int]):
    section_id = uuid4()
    return [
        SongSectionHistory(
            section_id=section_id, property=prop, from_value=old, to_value=new
        )
        for old, new in changes
    ]


@pytest.fixture
def processor():
    return DefaultProgressProcessor()


class TestRehearsalsScore:
    def test_empty_history_scores_zero(self, processor):
        assert processor.compute_rehearsals_score([]) == 0

    def test_sums_rehearsal_gains(self, processor):
        history = _history(HistoryProperty.REHEARSALS, (0, 3), (3, 5), (5, 10))

        assert processor.compute_rehearsals_score(history) == 10

    def test_more_rehearsals_never_lower_score(self, processor):
        history = _history(HistoryProperty.REHEARSALS, (0, 2))
        before = processor.compute_rehearsals_score(history)

        history += _history(HistoryProperty.REHEARSALS, (2, 3))

        assert processor.compute_rehearsals_score(history) > before


class TestConfidenceScore:
    def test_empty_history_scores_zero(self, processor):
        assert processor.compute_confidence_score([]) == 0

    def test_averages_recorded_confidence(self, processor):
        history = _history(HistoryProperty.CONFIDENCE, (0, 40), (40, 60), (60, 81))

        assert processor.compute_confidence_score(history) == 60

    def test_score_stays_within_bounds(self, processor):
        history = _history(HistoryProperty.CONFIDENCE, (0, 100), (100, 100))

        assert processor.compute_confidence_score(history) == 100


class TestProgress:
    @pytest.mark.parametrize(
        ("rehearsals_score", "confidence_score", "expected"),
        [(0, 100, 0), (10, 0, 0), (10, 100, 10), (10, 50, 5), (7, 30, 2)],
    )
    def test_rehearsals_weighted_by_confidence(
        self, processor, rehearsals_score, confidence_score, expected
    ):
        section = SongSection(
            song_id=uuid4(),
            name="Chorus",
            rehearsals_score=rehearsals_score,
            confidence_score=confidence_score,
        )

        assert processor.compute_progress(section) == expected
