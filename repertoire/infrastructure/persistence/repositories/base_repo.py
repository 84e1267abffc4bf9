"""Shared mapper and repository base classes for SQLAlchemy persistence."""

from typing import Any, Generic, Protocol, TypeVar
from uuid import UUID

from attrs import define
from sqlalchemy import Select, delete, false, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from repertoire.config import get_logger
from repertoire.infrastructure.persistence.database.db_models import RepertoireDBBase
from repertoire.infrastructure.persistence.repositories.repo_decorator import (
    db_operation,
)

logger = get_logger(__name__)

TDBModel = TypeVar("TDBModel", bound=RepertoireDBBase)
TDomainModel = TypeVar("TDomainModel")

# -------------------------------------------------------------------------
# COMMON UTILITIES
# -------------------------------------------------------------------------


async def fetch_relationship(db_model: Any, rel_name: str) -> list[Any]:
    """Load a relationship through AsyncAttrs.awaitable_attrs.

    Always returns a list, empty when nothing is related.
    """
    result = await getattr(db_model.awaitable_attrs, rel_name)
    if result is None:
        return []
    if isinstance(result, list):
        return result
    return [result]


class ModelMapper(Protocol[TDBModel, TDomainModel]):
    """Protocol for bidirectional mapping between models."""

    @staticmethod
    async def to_domain(db_model: TDBModel) -> TDomainModel:
        """Convert database model to domain model."""
        ...

    @staticmethod
    def to_db(domain_model: TDomainModel) -> TDBModel:
        """Convert domain model to database model."""
        ...

    @staticmethod
    def get_default_relationships() -> list[Any]:
        """Get default relationships to load for this model."""
        ...

    @classmethod
    async def map_collection(cls, db_models: list[TDBModel]) -> list[TDomainModel]:
        """Map a collection of DB models to domain models."""
        ...


@define(frozen=True, slots=True)
class BaseModelMapper(Generic[TDBModel, TDomainModel]):
    """Base implementation of ModelMapper with common functionality.

    Usage:
        @define(frozen=True, slots=True)
        class ArtistMapper(BaseModelMapper[DBArtist, Artist]):
            @staticmethod
            async def to_domain(db_model: DBArtist) -> Artist:
                return Artist(...)

            @staticmethod
            def to_db(domain_model: Artist) -> DBArtist:
                return DBArtist(...)

            @staticmethod
            def get_default_relationships() -> list[Any]:
                return [DBArtist.band_members]
    """

    @staticmethod
    async def to_domain(db_model: TDBModel) -> TDomainModel:
        raise NotImplementedError("Subclasses must implement to_domain")

    @staticmethod
    def to_db(domain_model: TDomainModel) -> TDBModel:
        raise NotImplementedError("Subclasses must implement to_db")

    @staticmethod
    def get_default_relationships() -> list[Any]:
        """Define relationships to load for this model."""
        return []

    @classmethod
    async def map_collection(cls, db_models: list[TDBModel]) -> list[TDomainModel]:
        """Map a collection of DB models to domain models.

        Uses cls.to_domain so the subclass implementation is called.
        """
        return [await cls.to_domain(db_model) for db_model in db_models]


class BaseRepository(Generic[TDBModel, TDomainModel]):
    """Generic async repository over one model class and its mapper.

    Reads always repopulate instances already present in the session, so an
    aggregate loaded twice in one unit of work reflects the latest flush.
    """

    def __init__(
        self,
        session: AsyncSession,
        model_class: type[TDBModel],
        mapper: type[ModelMapper[TDBModel, TDomainModel]],
    ) -> None:
        self.session = session
        self.model_class = model_class
        self.mapper = mapper

    # -------------------------------------------------------------------------
    # SELECT STATEMENT BUILDERS
    # -------------------------------------------------------------------------

    def select(self) -> Select[tuple[TDBModel]]:
        """Create select statement loading the mapper's default relationships."""
        stmt = select(self.model_class).execution_options(populate_existing=True)
        relationships = self.mapper.get_default_relationships()
        if relationships:
            stmt = stmt.options(*(self._load_option(rel) for rel in relationships))
        return stmt

    def select_by_id(self, id_: UUID) -> Select[tuple[TDBModel]]:
        return self.select().where(self.model_class.id == id_)

    def select_by_ids(self, ids: list[UUID]) -> Select[tuple[TDBModel]]:
        if not ids:
            return self.select().where(false())
        return self.select().where(self.model_class.id.in_(ids))

    @staticmethod
    def _load_option(rel: Any) -> Any:
        # A tuple describes a chain: (DBAlbum.songs, DBSong.sections)
        if isinstance(rel, tuple):
            head, *rest = rel
            option = selectinload(head)
            for attr in rest:
                option = option.selectinload(attr)
            return option
        return selectinload(rel)

    # -------------------------------------------------------------------------
    # DIRECT DATABASE OPERATIONS (non-decorated helpers)
    # -------------------------------------------------------------------------

    async def _execute_query(self, stmt: Select[tuple[TDBModel]]) -> list[TDBModel]:
        result = await self.session.execute(stmt)
        return list(result.scalars().unique().all())

    async def _execute_query_one(
        self, stmt: Select[tuple[TDBModel]]
    ) -> TDBModel | None:
        result = await self.session.execute(stmt)
        return result.scalars().unique().one_or_none()

    async def _merge(self, entity: TDomainModel) -> TDBModel:
        """Insert or update an entity, including its owned collections."""
        return await self.session.merge(self.mapper.to_db(entity))

    # -------------------------------------------------------------------------
    # DECORATED OPERATIONS
    # -------------------------------------------------------------------------

    @db_operation("get_by_id")
    async def get_by_id(self, id_: UUID) -> TDomainModel | None:
        db_model = await self._execute_query_one(self.select_by_id(id_))
        if db_model is None:
            return None
        return await self.mapper.to_domain(db_model)

    @db_operation("get_by_ids")
    async def get_by_ids(self, ids: list[UUID]) -> list[TDomainModel]:
        db_models = await self._execute_query(self.select_by_ids(ids))
        return await self.mapper.map_collection(db_models)

    @db_operation("save")
    async def save(self, entity: TDomainModel) -> TDomainModel:
        await self._merge(entity)
        await self.session.flush()
        return entity

    @db_operation("save_many")
    async def save_many(self, entities: list[TDomainModel]) -> list[TDomainModel]:
        for entity in entities:
            await self._merge(entity)
        await self.session.flush()
        return list(entities)

    @db_operation("delete_by_ids")
    async def delete_by_ids(self, ids: list[UUID]) -> int:
        """Hard delete rows; owned rows go with them through FK cascades."""
        if not ids:
            return 0
        result = await self.session.execute(
            delete(self.model_class).where(self.model_class.id.in_(ids))
        )
        logger.debug(
            f"Deleted {result.rowcount} {self.model_class.__tablename__} rows",
        )
        return result.rowcount
