"""Repository for per-user reference lists."""

from uuid import UUID

from attrs import define
from sqlalchemy.ext.asyncio import AsyncSession

from repertoire.domain.entities import ReferenceItem, ReferenceKind
from repertoire.infrastructure.persistence.database.db_models import DBReferenceItem
from repertoire.infrastructure.persistence.repositories.base_repo import (
    BaseModelMapper,
    BaseRepository,
)
from repertoire.infrastructure.persistence.repositories.repo_decorator import (
    db_operation,
)


@define(frozen=True, slots=True)
class ReferenceItemMapper(BaseModelMapper[DBReferenceItem, ReferenceItem]):
    @staticmethod
    async def to_domain(db_model: DBReferenceItem) -> ReferenceItem:
        return ReferenceItem(
            id=db_model.id,
            user_id=db_model.user_id,
            kind=ReferenceKind(db_model.kind),
            name=db_model.name,
            order=db_model.order,
        )

    @staticmethod
    def to_db(domain_model: ReferenceItem) -> DBReferenceItem:
        return DBReferenceItem(
            id=domain_model.id,
            user_id=domain_model.user_id,
            kind=str(domain_model.kind),
            name=domain_model.name,
            order=domain_model.order,
        )


class ReferenceItemRepository(BaseRepository[DBReferenceItem, ReferenceItem]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(
            session=session, model_class=DBReferenceItem, mapper=ReferenceItemMapper
        )

    @db_operation("get_items")
    async def get_items(
        self, user_id: UUID, kind: ReferenceKind
    ) -> list[ReferenceItem]:
        stmt = (
            self.select()
            .where(
                DBReferenceItem.user_id == user_id,
                DBReferenceItem.kind == str(kind),
            )
            .order_by(DBReferenceItem.order)
        )
        return await self.mapper.map_collection(await self._execute_query(stmt))

    @db_operation("save_items")
    async def save_items(self, items: list[ReferenceItem]) -> list[ReferenceItem]:
        return await self.save_many(items)

    @db_operation("delete_item")
    async def delete_item(self, item_id: UUID) -> int:
        return await self.delete_by_ids([item_id])
