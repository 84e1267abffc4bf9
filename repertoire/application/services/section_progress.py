"""Section scoring service.

Every change to a section's rehearsals or confidence goes through the same
sequence: the change is appended to the section's history, the full history
of that property is read back and scored, and the section's progress is
recomputed from the new score. The caller then recomputes the song's
aggregate statistics and saves section and song together.
"""

from attrs import define, evolve, field

from repertoire.config import get_logger
from repertoire.domain.entities import HistoryProperty, SongSection, SongSectionHistory
from repertoire.domain.progress import (
    DefaultProgressProcessor,
    ProgressProcessorProtocol,
)
from repertoire.domain.repositories import RepositoryFactory

logger = get_logger(__name__)


@define(slots=True)
class SectionProgressService:
    """Records section changes and rescores the section."""

    processor: ProgressProcessorProtocol = field(factory=DefaultProgressProcessor)

    async def record_change(
        self,
        section: SongSection,
        property_: HistoryProperty,
        to_value: int,
        repos: RepositoryFactory,
    ) -> SongSection:
        """Apply a rehearsals or confidence change to a section.

        Args:
            section: Section before the change
            property_: Which property changes
            to_value: New value of the property
            repos: Transaction-scoped repositories

        Returns:
            Section with the new value, the matching score and progress
        """
        section_repo = repos.get_song_section_repository()

        if property_ == HistoryProperty.REHEARSALS:
            from_value = section.rehearsals
        else:
            from_value = section.confidence

        await section_repo.create_history(
            SongSectionHistory(
                section_id=section.id,
                property=property_,
                from_value=from_value,
                to_value=to_value,
            )
        )
        history = await section_repo.get_history(section.id, property_)

        if property_ == HistoryProperty.REHEARSALS:
            updated = evolve(
                section,
                rehearsals=to_value,
                rehearsals_score=self.processor.compute_rehearsals_score(history),
            )
        else:
            updated = evolve(
                section,
                confidence=to_value,
                confidence_score=self.processor.compute_confidence_score(history),
            )

        updated = evolve(updated, progress=self.processor.compute_progress(updated))

        logger.debug(
            "Recorded section change",
            section_id=str(section.id),
            property=str(property_),
            from_value=from_value,
            to_value=to_value,
            history_entries=len(history),
            progress=updated.progress,
        )
        return updated
