"""Song-related domain entities.

A song owns an ordered list of sections and arrangements. Sections carry the
per-section rehearsal and confidence scores; the song carries their averages.
"""

from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4

from attrs import define, evolve, field, validators

from .shared import utc_now

DEFAULT_SECTION_CONFIDENCE = 0
MAX_SECTION_CONFIDENCE = 100


class HistoryProperty(StrEnum):
    """Section property tracked by history records."""

    REHEARSALS = "Rehearsals"
    CONFIDENCE = "Confidence"


@define(frozen=True, slots=True)
class SongSectionHistory:
    """Immutable log entry of a single section property change."""

    section_id: UUID
    property: HistoryProperty
    from_value: int
    to_value: int
    created_at: datetime = field(factory=utc_now)
    id: UUID = field(factory=uuid4)


@define(frozen=True, slots=True)
class SongSection:
    """A scored part of a song (verse, chorus, solo...)."""

    song_id: UUID
    name: str = field(validator=validators.instance_of(str))
    order: int = field(default=0, validator=validators.ge(0))
    section_type_id: UUID | None = None
    band_member_id: UUID | None = None
    instrument_id: UUID | None = None
    confidence: int = field(
        default=DEFAULT_SECTION_CONFIDENCE,
        validator=[validators.ge(0), validators.le(MAX_SECTION_CONFIDENCE)],
    )
    rehearsals: int = field(default=0, validator=validators.ge(0))
    rehearsals_score: int = field(default=0, validator=validators.ge(0))
    confidence_score: int = field(default=0, validator=validators.ge(0))
    progress: int = field(default=0, validator=validators.ge(0))
    occurrences: int = field(default=0, validator=validators.ge(0))
    partial_occurrences: int = field(default=0, validator=validators.ge(0))
    id: UUID = field(factory=uuid4)


@define(frozen=True, slots=True)
class SongArrangement:
    """A named arrangement of a song, ordered within the song."""

    song_id: UUID
    name: str
    order: int = field(default=0, validator=validators.ge(0))
    id: UUID = field(factory=uuid4)


@define(frozen=True, slots=True)
class Song:
    """Songs own their sections and carry the sections' aggregate statistics.

    The aggregate fields (confidence, rehearsals, progress) are persisted so
    listing and filtering can read them directly; they are recomputed every
    time a section is added, removed or rescored.
    """

    user_id: UUID
    title: str = field(validator=validators.instance_of(str))
    description: str = ""
    album_id: UUID | None = None
    album_track_no: int | None = None
    artist_id: UUID | None = None
    guitar_tuning_id: UUID | None = None
    sections: list[SongSection] = field(factory=list)
    arrangements: list[SongArrangement] = field(factory=list)
    confidence: float = 0.0
    rehearsals: float = 0.0
    progress: float = 0.0
    last_time_played: datetime | None = None
    id: UUID = field(factory=uuid4)

    def with_sections(self, sections: list[SongSection]) -> "Song":
        """Create a new song owning the given sections."""
        return evolve(self, sections=list(sections))

    def with_arrangements(self, arrangements: list[SongArrangement]) -> "Song":
        """Create a new song owning the given arrangements."""
        return evolve(self, arrangements=list(arrangements))

    def with_album(self, album_id: UUID | None, track_no: int | None) -> "Song":
        """Create a new song placed at the given album track number."""
        return evolve(self, album_id=album_id, album_track_no=track_no)

    def find_section(self, section_id: UUID) -> SongSection | None:
        """Return the owned section with the given ID, if any."""
        return next((s for s in self.sections if s.id == section_id), None)
