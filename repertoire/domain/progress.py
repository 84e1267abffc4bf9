"""Section scoring strategies.

The progress processor turns a section's change history into scores. It is a
pluggable strategy: use cases depend on ProgressProcessorProtocol only, and
DefaultProgressProcessor is the implementation wired in when none is given.
"""

from collections.abc import Sequence
from typing import Protocol

from .entities import MAX_SECTION_CONFIDENCE, SongSection, SongSectionHistory


class ProgressProcessorProtocol(Protocol):
    """Contract for computing section scores from history."""

    def compute_rehearsals_score(self, history: Sequence[SongSectionHistory]) -> int:
        """Score a section's rehearsal history."""
        ...

    def compute_confidence_score(self, history: Sequence[SongSectionHistory]) -> int:
        """Score a section's confidence history."""
        ...

    def compute_progress(self, section: SongSection) -> int:
        """Combine a section's scores into a progress value."""
        ...


class DefaultProgressProcessor:
    """Straightforward scoring based on rehearsal gains and confidence levels.

    - Rehearsals score: total rehearsals gained across history entries.
    - Confidence score: mean of the confidence values recorded, 0..100.
    - Progress: rehearsals score weighted by the confidence score percentage.

    Empty history scores 0, and adding rehearsals never lowers the score.
    """

    def compute_rehearsals_score(self, history: Sequence[SongSectionHistory]) -> int:
        return sum(max(h.to_value - h.from_value, 0) for h in history)

    def compute_confidence_score(self, history: Sequence[SongSectionHistory]) -> int:
        if not history:
            return 0
        mean = sum(h.to_value for h in history) / len(history)
        return min(max(round(mean), 0), MAX_SECTION_CONFIDENCE)

    def compute_progress(self, section: SongSection) -> int:
        return section.rehearsals_score * section.confidence_score // MAX_SECTION_CONFIDENCE
