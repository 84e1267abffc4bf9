"""Use cases for per-user reference lists.

Band member roles, guitar tunings, section types and instruments are each an
ordered list scoped to the user that owns them.
"""

from uuid import UUID

from attrs import define

from repertoire.config import get_logger
from repertoire.domain.entities import ReferenceItem, ReferenceKind
from repertoire.domain.ordering import (
    REFERENCE_ITEMS,
    append_position,
    move_within_collection,
    renumber_after_removal,
)
from repertoire.domain.repositories import RepositoryFactory, UnitOfWorkProtocol

from .common import require_ids

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class CreateReferenceItemCommand:
    user_id: UUID
    kind: ReferenceKind
    name: str


@define(slots=True)
class CreateReferenceItemUseCase:
    async def execute(
        self, command: CreateReferenceItemCommand, uow: UnitOfWorkProtocol
    ) -> ReferenceItem:
        logger.info("Creating reference item", kind=str(command.kind))

        async def work(repos: RepositoryFactory) -> ReferenceItem:
            repo = repos.get_reference_item_repository()
            items = await repo.get_items(command.user_id, command.kind)
            item = ReferenceItem(
                user_id=command.user_id,
                kind=command.kind,
                name=command.name,
                order=append_position(items, REFERENCE_ITEMS),
            )
            await repo.save_items([item])
            return item

        return await uow.execute(work)


@define(frozen=True, slots=True)
class MoveReferenceItemCommand:
    user_id: UUID
    kind: ReferenceKind
    item_id: UUID
    over_item_id: UUID


@define(slots=True)
class MoveReferenceItemUseCase:
    async def execute(
        self, command: MoveReferenceItemCommand, uow: UnitOfWorkProtocol
    ) -> list[ReferenceItem]:
        async def work(repos: RepositoryFactory) -> list[ReferenceItem]:
            repo = repos.get_reference_item_repository()
            items = await repo.get_items(command.user_id, command.kind)
            require_ids(
                {i.id for i in items},
                [command.item_id, command.over_item_id],
                str(command.kind),
            )
            items = move_within_collection(
                items, command.item_id, command.over_item_id, REFERENCE_ITEMS
            )
            return await repo.save_items(items)

        return await uow.execute(work)


@define(frozen=True, slots=True)
class DeleteReferenceItemCommand:
    user_id: UUID
    kind: ReferenceKind
    item_id: UUID


@define(slots=True)
class DeleteReferenceItemUseCase:
    async def execute(
        self, command: DeleteReferenceItemCommand, uow: UnitOfWorkProtocol
    ) -> None:
        logger.info(
            "Deleting reference item",
            kind=str(command.kind),
            item_id=str(command.item_id),
        )

        async def work(repos: RepositoryFactory) -> None:
            repo = repos.get_reference_item_repository()
            items = await repo.get_items(command.user_id, command.kind)
            require_ids({i.id for i in items}, [command.item_id], str(command.kind))

            await repo.delete_item(command.item_id)
            await repo.save_items(
                renumber_after_removal(items, [command.item_id], REFERENCE_ITEMS)
            )

        await uow.execute(work)
