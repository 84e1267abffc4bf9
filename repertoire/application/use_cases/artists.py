"""Use cases for an artist's band members (0-based order)."""

from uuid import UUID

from attrs import define

from repertoire.config import get_logger
from repertoire.domain.entities import BandMember
from repertoire.domain.ordering import (
    BAND_MEMBERS,
    append_position,
    move_within_collection,
    renumber_after_removal,
)
from repertoire.domain.repositories import RepositoryFactory, UnitOfWorkProtocol

from .common import require_artist, require_ids

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class CreateBandMemberCommand:
    artist_id: UUID
    name: str


@define(slots=True)
class CreateBandMemberUseCase:
    async def execute(
        self, command: CreateBandMemberCommand, uow: UnitOfWorkProtocol
    ) -> BandMember:
        logger.info("Creating band member", artist_id=str(command.artist_id))

        async def work(repos: RepositoryFactory) -> BandMember:
            artist = await require_artist(repos, command.artist_id)
            member = BandMember(
                artist_id=artist.id,
                name=command.name,
                order=append_position(artist.band_members, BAND_MEMBERS),
            )
            await repos.get_artist_repository().save_artist(
                artist.with_band_members([*artist.band_members, member])
            )
            return member

        return await uow.execute(work)


@define(frozen=True, slots=True)
class MoveBandMemberCommand:
    artist_id: UUID
    band_member_id: UUID
    over_band_member_id: UUID


@define(slots=True)
class MoveBandMemberUseCase:
    async def execute(
        self, command: MoveBandMemberCommand, uow: UnitOfWorkProtocol
    ) -> list[BandMember]:
        async def work(repos: RepositoryFactory) -> list[BandMember]:
            artist = await require_artist(repos, command.artist_id)
            require_ids(
                {m.id for m in artist.band_members},
                [command.band_member_id, command.over_band_member_id],
                "Band member",
            )
            members = move_within_collection(
                artist.band_members,
                command.band_member_id,
                command.over_band_member_id,
                BAND_MEMBERS,
            )
            await repos.get_artist_repository().save_artist(
                artist.with_band_members(members)
            )
            return members

        return await uow.execute(work)


@define(frozen=True, slots=True)
class DeleteBandMemberCommand:
    artist_id: UUID
    band_member_id: UUID


@define(slots=True)
class DeleteBandMemberUseCase:
    """Remove a band member; sections assigned to them become unassigned."""

    async def execute(
        self, command: DeleteBandMemberCommand, uow: UnitOfWorkProtocol
    ) -> None:
        logger.info(
            "Deleting band member",
            artist_id=str(command.artist_id),
            band_member_id=str(command.band_member_id),
        )

        async def work(repos: RepositoryFactory) -> None:
            artist = await require_artist(repos, command.artist_id)
            require_ids(
                {m.id for m in artist.band_members},
                [command.band_member_id],
                "Band member",
            )
            members = renumber_after_removal(
                artist.band_members, [command.band_member_id], BAND_MEMBERS
            )
            await repos.get_artist_repository().save_artist(
                artist.with_band_members(members)
            )

        await uow.execute(work)
