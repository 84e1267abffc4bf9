"""Artist repository, saving artists together with their band members."""

from typing import Any
from uuid import UUID

from attrs import define
from sqlalchemy.ext.asyncio import AsyncSession

from repertoire.domain.entities import Artist, BandMember
from repertoire.infrastructure.persistence.database.db_models import (
    DBArtist,
    DBBandMember,
)
from repertoire.infrastructure.persistence.repositories.base_repo import (
    BaseModelMapper,
    BaseRepository,
    fetch_relationship,
)
from repertoire.infrastructure.persistence.repositories.repo_decorator import (
    db_operation,
)


@define(frozen=True, slots=True)
class BandMemberMapper(BaseModelMapper[DBBandMember, BandMember]):
    @staticmethod
    async def to_domain(db_model: DBBandMember) -> BandMember:
        return BandMember(
            id=db_model.id,
            artist_id=db_model.artist_id,
            name=db_model.name,
            order=db_model.order,
        )

    @staticmethod
    def to_db(domain_model: BandMember) -> DBBandMember:
        return DBBandMember(
            id=domain_model.id,
            artist_id=domain_model.artist_id,
            name=domain_model.name,
            order=domain_model.order,
        )


@define(frozen=True, slots=True)
class ArtistMapper(BaseModelMapper[DBArtist, Artist]):
    @staticmethod
    def get_default_relationships() -> list[Any]:
        return [DBArtist.band_members]

    @staticmethod
    async def to_domain(db_model: DBArtist) -> Artist:
        members = await fetch_relationship(db_model, "band_members")
        return Artist(
            id=db_model.id,
            user_id=db_model.user_id,
            name=db_model.name,
            band_members=await BandMemberMapper.map_collection(members),
        )

    @staticmethod
    def to_db(domain_model: Artist) -> DBArtist:
        return DBArtist(
            id=domain_model.id,
            user_id=domain_model.user_id,
            name=domain_model.name,
            band_members=[BandMemberMapper.to_db(m) for m in domain_model.band_members],
        )


class ArtistRepository(BaseRepository[DBArtist, Artist]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=DBArtist, mapper=ArtistMapper)

    @db_operation("get_artist")
    async def get_artist(self, artist_id: UUID) -> Artist | None:
        return await self.get_by_id(artist_id)

    @db_operation("get_artists_by_ids")
    async def get_artists_by_ids(self, artist_ids: list[UUID]) -> list[Artist]:
        return await self.get_by_ids(artist_ids)

    @db_operation("save_artist")
    async def save_artist(self, artist: Artist) -> Artist:
        return await self.save(artist)
