"""Full and partial run-throughs of a song.

A run-through adds to every section the number of times the section is
played in it: ``occurrences`` for a perfect rehearsal, ``partial_occurrences``
for a partial one. Sections not played in the run-through are left alone.
"""

from attrs import define, field

from repertoire.config import get_logger
from repertoire.domain.entities import HistoryProperty, Song
from repertoire.domain.repositories import RepositoryFactory
from repertoire.domain.stats import apply_section_stats

from .section_progress import SectionProgressService

logger = get_logger(__name__)


@define(slots=True)
class SongRehearsalService:
    """Adds run-through rehearsals to a song's sections and rescores the song."""

    progress_service: SectionProgressService = field(factory=SectionProgressService)

    async def add_perfect_rehearsal(
        self, song: Song, repos: RepositoryFactory
    ) -> tuple[Song, bool]:
        """Rehearse every section as many times as it occurs in the song.

        Returns:
            The rescored song and whether anything changed. An unchanged
            song is returned as given and must not be saved.
        """
        return await self._run_through(song, "occurrences", repos)

    async def add_partial_rehearsal(
        self, song: Song, repos: RepositoryFactory
    ) -> tuple[Song, bool]:
        """Rehearse every section as many times as it occurs in a partial run."""
        return await self._run_through(song, "partial_occurrences", repos)

    async def _run_through(
        self, song: Song, counter: str, repos: RepositoryFactory
    ) -> tuple[Song, bool]:
        sections = []
        rehearsed = 0
        for section in song.sections:
            count = getattr(section, counter)
            if count > 0:
                section = await self.progress_service.record_change(
                    section,
                    HistoryProperty.REHEARSALS,
                    section.rehearsals + count,
                    repos,
                )
                rehearsed += 1
            sections.append(section)

        if not rehearsed:
            return song, False

        logger.debug(
            "Added run-through rehearsals",
            song_id=str(song.id),
            counter=counter,
            sections=rehearsed,
        )
        return apply_section_stats(song, sections, rehearsed=True), True
