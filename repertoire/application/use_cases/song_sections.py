"""Use cases for song sections.

Sections are positioned within their song (0-based) and carry the scores the
song's statistics are averaged from. Every use case here recomputes the
song's statistics in the same transaction as the section change.
"""

from uuid import UUID

from attrs import define, evolve, field
from toolz import unique

from repertoire.application.services import SectionProgressService
from repertoire.config import get_logger
from repertoire.domain.entities import (
    DEFAULT_SECTION_CONFIDENCE,
    HistoryProperty,
    SongSection,
)
from repertoire.domain.exceptions import ConflictError, NotFoundError
from repertoire.domain.ordering import (
    SONG_SECTIONS,
    append_position,
    move_within_collection,
    renumber_after_removal,
)
from repertoire.domain.repositories import RepositoryFactory, UnitOfWorkProtocol
from repertoire.domain.stats import apply_section_stats

from .common import ensure_band_member_of_song, require_ids, require_song

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class CreateSongSectionCommand:
    song_id: UUID
    name: str
    section_type_id: UUID | None = None
    band_member_id: UUID | None = None
    instrument_id: UUID | None = None


@define(slots=True)
class CreateSongSectionUseCase:
    """Append a new, unrehearsed section to a song."""

    async def execute(
        self, command: CreateSongSectionCommand, uow: UnitOfWorkProtocol
    ) -> SongSection:
        logger.info("Creating song section", song_id=str(command.song_id))

        async def work(repos: RepositoryFactory) -> SongSection:
            song = await require_song(repos, command.song_id)
            if command.band_member_id is not None:
                await ensure_band_member_of_song(repos, song, command.band_member_id)

            section = SongSection(
                song_id=song.id,
                name=command.name,
                order=append_position(song.sections, SONG_SECTIONS),
                section_type_id=command.section_type_id,
                band_member_id=command.band_member_id,
                instrument_id=command.instrument_id,
                confidence=DEFAULT_SECTION_CONFIDENCE,
            )
            song = apply_section_stats(song, [*song.sections, section])
            await repos.get_song_repository().save_song(song)
            return section

        return await uow.execute(work)


@define(frozen=True, slots=True)
class UpdateSongSectionCommand:
    section_id: UUID
    name: str
    rehearsals: int
    confidence: int
    section_type_id: UUID | None = None
    band_member_id: UUID | None = None
    instrument_id: UUID | None = None


@define(slots=True)
class UpdateSongSectionUseCase:
    """Edit a section, rescoring it when rehearsals or confidence change.

    Rehearsals can only grow through this path. A rehearsal increase also
    marks the song as played now.
    """

    progress_service: SectionProgressService = field(factory=SectionProgressService)

    async def execute(
        self, command: UpdateSongSectionCommand, uow: UnitOfWorkProtocol
    ) -> SongSection:
        logger.info("Updating song section", section_id=str(command.section_id))

        async def work(repos: RepositoryFactory) -> SongSection:
            section = await repos.get_song_section_repository().get_section(
                command.section_id
            )
            if section is None:
                raise NotFoundError("Song section", command.section_id)
            if command.rehearsals < section.rehearsals:
                logger.warning(
                    "Rejected rehearsals decrease",
                    section_id=str(section.id),
                    current=section.rehearsals,
                    requested=command.rehearsals,
                )
                raise ConflictError("rehearsals can only be increased")

            song = await require_song(repos, section.song_id)

            band_member_changed = command.band_member_id != section.band_member_id
            if band_member_changed and command.band_member_id is not None:
                await ensure_band_member_of_song(repos, song, command.band_member_id)

            rehearsals_changed = command.rehearsals != section.rehearsals
            updated = section
            if rehearsals_changed:
                updated = await self.progress_service.record_change(
                    updated, HistoryProperty.REHEARSALS, command.rehearsals, repos
                )
            if command.confidence != section.confidence:
                updated = await self.progress_service.record_change(
                    updated, HistoryProperty.CONFIDENCE, command.confidence, repos
                )

            updated = evolve(
                updated,
                name=command.name,
                section_type_id=command.section_type_id,
                band_member_id=command.band_member_id,
                instrument_id=command.instrument_id,
            )
            sections = [updated if s.id == updated.id else s for s in song.sections]
            song = apply_section_stats(song, sections, rehearsed=rehearsals_changed)
            await repos.get_song_repository().save_song(song)
            return updated

        return await uow.execute(work)


@define(frozen=True, slots=True)
class SectionRehearsals:
    """Rehearsals to add to one section."""

    section_id: UUID
    rehearsals: int


@define(frozen=True, slots=True)
class BulkRehearsalsSongSectionsCommand:
    song_id: UUID
    sections: list[SectionRehearsals]


@define(slots=True)
class BulkRehearsalsSongSectionsUseCase:
    """Add rehearsals to several sections of a song at once.

    Each section is rescored individually; the song's statistics are
    recomputed once at the end, all inside one transaction. Only the first
    entry for a section counts.
    """

    progress_service: SectionProgressService = field(factory=SectionProgressService)

    async def execute(
        self, command: BulkRehearsalsSongSectionsCommand, uow: UnitOfWorkProtocol
    ) -> list[SongSection]:
        logger.info(
            "Adding rehearsals to song sections",
            song_id=str(command.song_id),
            section_count=len(command.sections),
        )

        async def work(repos: RepositoryFactory) -> list[SongSection]:
            song = await require_song(repos, command.song_id)
            require_ids(
                {s.id for s in song.sections},
                [r.section_id for r in command.sections],
                "Song section",
            )

            by_id = {s.id: s for s in song.sections}
            rehearsed = False
            for request in unique(command.sections, key=lambda r: r.section_id):
                if request.rehearsals <= 0:
                    continue
                section = by_id[request.section_id]
                by_id[section.id] = await self.progress_service.record_change(
                    section,
                    HistoryProperty.REHEARSALS,
                    section.rehearsals + request.rehearsals,
                    repos,
                )
                rehearsed = True

            sections = [by_id[s.id] for s in song.sections]
            song = apply_section_stats(song, sections, rehearsed=rehearsed)
            await repos.get_song_repository().save_song(song)
            return sections

        return await uow.execute(work)


@define(frozen=True, slots=True)
class SectionOccurrences:
    """How many times one section is played in a run-through."""

    section_id: UUID
    occurrences: int


@define(frozen=True, slots=True)
class UpdateSongSectionsOccurrencesCommand:
    song_id: UUID
    sections: list[SectionOccurrences]


def _with_counts(
    sections: list[SongSection], counts: list[SectionOccurrences], counter: str
) -> list[SongSection]:
    # First entry per section wins; unknown sections are skipped
    by_id = {c.section_id: c.occurrences for c in reversed(counts)}
    return [
        evolve(s, **{counter: by_id[s.id]}) if s.id in by_id else s for s in sections
    ]


@define(slots=True)
class UpdateSongSectionsOccurrencesUseCase:
    """Set how often each section is played in a perfect rehearsal."""

    async def execute(
        self, command: UpdateSongSectionsOccurrencesCommand, uow: UnitOfWorkProtocol
    ) -> list[SongSection]:
        async def work(repos: RepositoryFactory) -> list[SongSection]:
            song = await require_song(repos, command.song_id)
            sections = _with_counts(song.sections, command.sections, "occurrences")
            await repos.get_song_repository().save_song(song.with_sections(sections))
            return sections

        return await uow.execute(work)


@define(frozen=True, slots=True)
class UpdateSongSectionsPartialOccurrencesCommand:
    song_id: UUID
    sections: list[SectionOccurrences]


@define(slots=True)
class UpdateSongSectionsPartialOccurrencesUseCase:
    """Set how often each section is played in a partial rehearsal."""

    async def execute(
        self,
        command: UpdateSongSectionsPartialOccurrencesCommand,
        uow: UnitOfWorkProtocol,
    ) -> list[SongSection]:
        async def work(repos: RepositoryFactory) -> list[SongSection]:
            song = await require_song(repos, command.song_id)
            sections = _with_counts(
                song.sections, command.sections, "partial_occurrences"
            )
            await repos.get_song_repository().save_song(song.with_sections(sections))
            return sections

        return await uow.execute(work)


@define(frozen=True, slots=True)
class MoveSongSectionCommand:
    song_id: UUID
    section_id: UUID
    over_section_id: UUID


@define(slots=True)
class MoveSongSectionUseCase:
    async def execute(
        self, command: MoveSongSectionCommand, uow: UnitOfWorkProtocol
    ) -> list[SongSection]:
        async def work(repos: RepositoryFactory) -> list[SongSection]:
            song = await require_song(repos, command.song_id)
            require_ids(
                {s.id for s in song.sections},
                [command.section_id, command.over_section_id],
                "Song section",
            )
            sections = move_within_collection(
                song.sections, command.section_id, command.over_section_id, SONG_SECTIONS
            )
            await repos.get_song_repository().save_song(song.with_sections(sections))
            return sections

        return await uow.execute(work)


@define(frozen=True, slots=True)
class DeleteSongSectionCommand:
    song_id: UUID
    section_id: UUID


@define(slots=True)
class DeleteSongSectionUseCase:
    async def execute(
        self, command: DeleteSongSectionCommand, uow: UnitOfWorkProtocol
    ) -> None:
        await BulkDeleteSongSectionsUseCase().execute(
            BulkDeleteSongSectionsCommand(command.song_id, [command.section_id]), uow
        )


@define(frozen=True, slots=True)
class BulkDeleteSongSectionsCommand:
    song_id: UUID
    section_ids: list[UUID]


@define(slots=True)
class BulkDeleteSongSectionsUseCase:
    """Delete sections, close the gaps and refresh the song's statistics."""

    async def execute(
        self, command: BulkDeleteSongSectionsCommand, uow: UnitOfWorkProtocol
    ) -> None:
        logger.info(
            "Deleting song sections",
            song_id=str(command.song_id),
            section_count=len(command.section_ids),
        )

        async def work(repos: RepositoryFactory) -> None:
            song = await require_song(repos, command.song_id)
            require_ids(
                {s.id for s in song.sections}, command.section_ids, "Song section"
            )
            sections = renumber_after_removal(
                song.sections, command.section_ids, SONG_SECTIONS
            )
            await repos.get_song_repository().save_song(
                apply_section_stats(song, sections)
            )

        await uow.execute(work)
