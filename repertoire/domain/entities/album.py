"""Album and artist domain entities."""

from uuid import UUID, uuid4

from attrs import define, evolve, field, validators

from .song import Song


@define(frozen=True, slots=True)
class Album:
    """An album; its songs are ordered by their album track number."""

    user_id: UUID
    title: str = field(validator=validators.instance_of(str))
    artist_id: UUID | None = None
    songs: list[Song] = field(factory=list)
    id: UUID = field(factory=uuid4)

    def with_songs(self, songs: list[Song]) -> "Album":
        """Create a new album with the given songs."""
        return evolve(self, songs=list(songs))

    def find_song(self, song_id: UUID) -> Song | None:
        """Return the album song with the given ID, if any."""
        return next((s for s in self.songs if s.id == song_id), None)


@define(frozen=True, slots=True)
class BandMember:
    """A member of an artist's band, ordered within the artist."""

    artist_id: UUID
    name: str
    order: int = field(default=0, validator=validators.ge(0))
    id: UUID = field(factory=uuid4)


@define(frozen=True, slots=True)
class Artist:
    """An artist owning an ordered list of band members."""

    user_id: UUID
    name: str = field(validator=validators.instance_of(str))
    band_members: list[BandMember] = field(factory=list)
    id: UUID = field(factory=uuid4)

    def with_band_members(self, band_members: list[BandMember]) -> "Artist":
        """Create a new artist with the given band members."""
        return evolve(self, band_members=list(band_members))

    def find_band_member(self, band_member_id: UUID) -> BandMember | None:
        """Return the band member with the given ID, if any."""
        return next((m for m in self.band_members if m.id == band_member_id), None)
