"""SQLAlchemy database models for the repertoire.

This module defines the persisted shape of the domain entities using
SQLAlchemy 2.0 patterns with type annotations and relationship definitions.
Children owned by an aggregate (sections, arrangements, band members,
playlist memberships) cascade on delete at the database level.
"""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import (
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Text,
    Uuid,
)
from sqlalchemy.ext.asyncio import AsyncAttrs, AsyncEngine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from repertoire.config import get_logger

# Create module logger
logger = get_logger(__name__)

# Define naming convention for constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)


class RepertoireDBBase(AsyncAttrs, DeclarativeBase):
    """Base class for all database models with UUID keys and timestamps."""

    metadata = metadata

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


class DBReferenceItem(RepertoireDBBase):
    """Entry of a per-user reference list (tuning, section type, ...)."""

    __tablename__ = "reference_items"

    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    kind: Mapped[str] = mapped_column(String(32), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (Index(None, "user_id", "kind"),)


class DBArtist(RepertoireDBBase):
    __tablename__ = "artists"

    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    band_members: Mapped[list["DBBandMember"]] = relationship(
        back_populates="artist",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DBBandMember.order",
    )


class DBBandMember(RepertoireDBBase):
    __tablename__ = "band_members"

    artist_id: Mapped[UUID] = mapped_column(
        ForeignKey("artists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    artist: Mapped[DBArtist] = relationship(back_populates="band_members")


class DBAlbum(RepertoireDBBase):
    __tablename__ = "albums"

    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    artist_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("artists.id", ondelete="SET NULL"), index=True
    )

    # Track placement is owned by the songs themselves
    songs: Mapped[list["DBSong"]] = relationship(
        viewonly=True,
        order_by="DBSong.album_track_no",
    )


class DBSong(RepertoireDBBase):
    """Song row holding the persisted aggregate of its sections."""

    __tablename__ = "songs"

    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    album_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("albums.id", ondelete="SET NULL"), index=True
    )
    album_track_no: Mapped[int | None] = mapped_column(Integer)
    artist_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("artists.id", ondelete="SET NULL"), index=True
    )
    guitar_tuning_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("reference_items.id", ondelete="SET NULL")
    )
    confidence: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    rehearsals: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    progress: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    last_time_played: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    sections: Mapped[list["DBSongSection"]] = relationship(
        back_populates="song",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DBSongSection.order",
    )
    arrangements: Mapped[list["DBSongArrangement"]] = relationship(
        back_populates="song",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DBSongArrangement.order",
    )

    __table_args__ = (Index(None, "title"),)


class DBSongSection(RepertoireDBBase):
    __tablename__ = "song_sections"

    song_id: Mapped[UUID] = mapped_column(
        ForeignKey("songs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(30), nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    section_type_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("reference_items.id", ondelete="SET NULL")
    )
    band_member_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("band_members.id", ondelete="SET NULL")
    )
    instrument_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("reference_items.id", ondelete="SET NULL")
    )
    confidence: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rehearsals: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rehearsals_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    confidence_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    occurrences: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    partial_occurrences: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )

    song: Mapped[DBSong] = relationship(back_populates="sections")


class DBSongSectionHistory(RepertoireDBBase):
    """Append-only log of section rehearsal and confidence changes."""

    __tablename__ = "song_section_history"

    section_id: Mapped[UUID] = mapped_column(
        ForeignKey("song_sections.id", ondelete="CASCADE"), nullable=False
    )
    property: Mapped[str] = mapped_column(String(16), nullable=False)
    from_value: Mapped[int] = mapped_column(Integer, nullable=False)
    to_value: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (Index(None, "section_id", "property"),)


class DBSongArrangement(RepertoireDBBase):
    __tablename__ = "song_arrangements"

    song_id: Mapped[UUID] = mapped_column(
        ForeignKey("songs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(30), nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    song: Mapped[DBSong] = relationship(back_populates="arrangements")


class DBPlaylist(RepertoireDBBase):
    __tablename__ = "playlists"

    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    songs: Mapped[list["DBPlaylistSong"]] = relationship(
        back_populates="playlist",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DBPlaylistSong.song_track_no",
    )


class DBPlaylistSong(RepertoireDBBase):
    """Membership of a song in a playlist with its track number."""

    __tablename__ = "playlist_songs"

    playlist_id: Mapped[UUID] = mapped_column(
        ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    song_id: Mapped[UUID] = mapped_column(
        ForeignKey("songs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    song_track_no: Mapped[int] = mapped_column(Integer, nullable=False)

    playlist: Mapped[DBPlaylist] = relationship(back_populates="songs")


async def init_db(engine: AsyncEngine) -> None:
    """Initialize database schema.

    Creates all tables if they don't exist.
    This is a safe operation that won't affect existing data.
    """
    try:
        async with engine.begin() as conn:
            await conn.run_sync(RepertoireDBBase.metadata.create_all)
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise
    else:
        logger.info("Database schema initialization complete")
