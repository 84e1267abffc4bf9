"""Song statistics derived from its sections.

Songs persist the mean confidence, rehearsals and progress of their sections
so list queries can filter and sort on them. These values are recomputed in
the same operation as every section change; nothing here is cached.
"""

from collections.abc import Sequence
from datetime import datetime
from statistics import fmean

from attrs import define, evolve

from .entities import Song, SongSection, utc_now


@define(frozen=True, slots=True)
class SectionStats:
    """Aggregate statistics of a song's sections."""

    confidence: float = 0.0
    rehearsals: float = 0.0
    progress: float = 0.0


def recompute_parent_stats(sections: Sequence[SongSection]) -> SectionStats:
    """Average confidence, rehearsals and progress across sections.

    A song without sections has all statistics at zero.
    """
    if not sections:
        return SectionStats()

    return SectionStats(
        confidence=fmean(s.confidence for s in sections),
        rehearsals=fmean(s.rehearsals for s in sections),
        progress=fmean(s.progress for s in sections),
    )


def apply_section_stats(
    song: Song,
    sections: Sequence[SongSection],
    rehearsed: bool = False,
    now: datetime | None = None,
) -> Song:
    """Attach sections to a song and refresh its aggregate statistics.

    Args:
        song: Song owning the sections
        sections: Full, final section set of the song
        rehearsed: Whether the change added rehearsals
        now: Timestamp used for last_time_played when rehearsed

    Returns:
        New song instance with updated sections and statistics
    """
    stats = recompute_parent_stats(sections)
    last_time_played = song.last_time_played
    if rehearsed:
        last_time_played = now or utc_now()

    return evolve(
        song,
        sections=list(sections),
        confidence=stats.confidence,
        rehearsals=stats.rehearsals,
        progress=stats.progress,
        last_time_played=last_time_played,
    )
