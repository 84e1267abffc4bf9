"""Song repository mappers for domain-persistence conversions."""

from typing import Any

from attrs import define

from repertoire.domain.entities import (
    HistoryProperty,
    Song,
    SongArrangement,
    SongSection,
    SongSectionHistory,
    ensure_utc,
)
from repertoire.infrastructure.persistence.database.db_models import (
    DBSong,
    DBSongArrangement,
    DBSongSection,
    DBSongSectionHistory,
)
from repertoire.infrastructure.persistence.repositories.base_repo import (
    BaseModelMapper,
    fetch_relationship,
)


@define(frozen=True, slots=True)
class SongSectionMapper(BaseModelMapper[DBSongSection, SongSection]):
    @staticmethod
    async def to_domain(db_model: DBSongSection) -> SongSection:
        return SongSection(
            id=db_model.id,
            song_id=db_model.song_id,
            name=db_model.name,
            order=db_model.order,
            section_type_id=db_model.section_type_id,
            band_member_id=db_model.band_member_id,
            instrument_id=db_model.instrument_id,
            confidence=db_model.confidence,
            rehearsals=db_model.rehearsals,
            rehearsals_score=db_model.rehearsals_score,
            confidence_score=db_model.confidence_score,
            progress=db_model.progress,
            occurrences=db_model.occurrences,
            partial_occurrences=db_model.partial_occurrences,
        )

    @staticmethod
    def to_db(domain_model: SongSection) -> DBSongSection:
        return DBSongSection(
            id=domain_model.id,
            song_id=domain_model.song_id,
            name=domain_model.name,
            order=domain_model.order,
            section_type_id=domain_model.section_type_id,
            band_member_id=domain_model.band_member_id,
            instrument_id=domain_model.instrument_id,
            confidence=domain_model.confidence,
            rehearsals=domain_model.rehearsals,
            rehearsals_score=domain_model.rehearsals_score,
            confidence_score=domain_model.confidence_score,
            progress=domain_model.progress,
            occurrences=domain_model.occurrences,
            partial_occurrences=domain_model.partial_occurrences,
        )


@define(frozen=True, slots=True)
class SongArrangementMapper(BaseModelMapper[DBSongArrangement, SongArrangement]):
    @staticmethod
    async def to_domain(db_model: DBSongArrangement) -> SongArrangement:
        return SongArrangement(
            id=db_model.id,
            song_id=db_model.song_id,
            name=db_model.name,
            order=db_model.order,
        )

    @staticmethod
    def to_db(domain_model: SongArrangement) -> DBSongArrangement:
        return DBSongArrangement(
            id=domain_model.id,
            song_id=domain_model.song_id,
            name=domain_model.name,
            order=domain_model.order,
        )


@define(frozen=True, slots=True)
class SongSectionHistoryMapper(
    BaseModelMapper[DBSongSectionHistory, SongSectionHistory]
):
    @staticmethod
    async def to_domain(db_model: DBSongSectionHistory) -> SongSectionHistory:
        return SongSectionHistory(
            id=db_model.id,
            section_id=db_model.section_id,
            property=HistoryProperty(db_model.property),
            from_value=db_model.from_value,
            to_value=db_model.to_value,
            created_at=ensure_utc(db_model.created_at),
        )

    @staticmethod
    def to_db(domain_model: SongSectionHistory) -> DBSongSectionHistory:
        return DBSongSectionHistory(
            id=domain_model.id,
            section_id=domain_model.section_id,
            property=str(domain_model.property),
            from_value=domain_model.from_value,
            to_value=domain_model.to_value,
            created_at=domain_model.created_at,
        )


@define(frozen=True, slots=True)
class SongMapper(BaseModelMapper[DBSong, Song]):
    """Maps a song together with its sections and arrangements."""

    @staticmethod
    def get_default_relationships() -> list[Any]:
        return [DBSong.sections, DBSong.arrangements]

    @staticmethod
    async def to_domain(db_model: DBSong) -> Song:
        sections = await fetch_relationship(db_model, "sections")
        arrangements = await fetch_relationship(db_model, "arrangements")
        return Song(
            id=db_model.id,
            user_id=db_model.user_id,
            title=db_model.title,
            description=db_model.description,
            album_id=db_model.album_id,
            album_track_no=db_model.album_track_no,
            artist_id=db_model.artist_id,
            guitar_tuning_id=db_model.guitar_tuning_id,
            sections=await SongSectionMapper.map_collection(sections),
            arrangements=await SongArrangementMapper.map_collection(arrangements),
            confidence=db_model.confidence,
            rehearsals=db_model.rehearsals,
            progress=db_model.progress,
            last_time_played=ensure_utc(db_model.last_time_played),
        )

    @staticmethod
    def to_db(domain_model: Song) -> DBSong:
        return DBSong(
            id=domain_model.id,
            user_id=domain_model.user_id,
            title=domain_model.title,
            description=domain_model.description,
            album_id=domain_model.album_id,
            album_track_no=domain_model.album_track_no,
            artist_id=domain_model.artist_id,
            guitar_tuning_id=domain_model.guitar_tuning_id,
            confidence=domain_model.confidence,
            rehearsals=domain_model.rehearsals,
            progress=domain_model.progress,
            last_time_played=domain_model.last_time_played,
            sections=[SongSectionMapper.to_db(s) for s in domain_model.sections],
            arrangements=[
                SongArrangementMapper.to_db(a) for a in domain_model.arrangements
            ],
        )
