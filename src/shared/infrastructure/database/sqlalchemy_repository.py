"""
SQLAlchemy Implementation of Generic Repository
Concrete async repository using SQLAlchemy 2.x
"""
from __future__ import annotations

from typing import Generic, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.infrastructure.database.base_model import Base
from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)

TEntity = TypeVar("TEntity")
TModel = TypeVar("TModel", bound=Base)


class SQLAlchemyRepository(Generic[TEntity, TModel]):
    """
    Generic async SQLAlchemy repository implementation.

    Maps domain entities (plain dataclasses carrying an ``id``) to/from ORM
    models. Writes are flushed, never committed: the Unit of Work owns the
    transaction.

    Type Parameters:
        TEntity: Domain entity type
        TModel: SQLAlchemy ORM model type
    """

    def __init__(
        self,
        session: AsyncSession,
        model_class: Type[TModel],
        entity_class: Type[TEntity],
    ) -> None:
        """
        Initialize repository with session and model mappings.

        Args:
            session: Active async database session
            model_class: SQLAlchemy ORM model class
            entity_class: Domain entity class
        """
        self.session = session
        self.model_class = model_class
        self.entity_class = entity_class

    def _to_entity(self, model: TModel) -> TEntity:
        """
        Convert ORM model to domain entity.

        Must be implemented by subclass to define mapping logic.
        """
        raise NotImplementedError("Subclass must implement _to_entity")

    def _to_model(self, entity: TEntity) -> TModel:
        """
        Convert domain entity to ORM model.

        Must be implemented by subclass to define mapping logic.
        """
        raise NotImplementedError("Subclass must implement _to_model")

    async def add(self, entity: TEntity) -> TEntity:
        """
        Add a new entity to the repository.

        Args:
            entity: Domain entity to persist

        Returns:
            The persisted entity
        """
        try:
            model = self._to_model(entity)
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)

            logger.debug(f"Added {self.entity_class.__name__}", entity_id=str(model.id))

            return self._to_entity(model)
        except Exception as e:
            logger.error(f"Failed to add {self.entity_class.__name__}", error=str(e))
            raise

    async def get_by_id(self, entity_id: UUID) -> TEntity | None:
        """
        Retrieve entity by its unique identifier.

        Args:
            entity_id: UUID of the entity

        Returns:
            Entity if found, None otherwise
        """
        stmt = select(self.model_class).where(self.model_class.id == entity_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            logger.debug(f"{self.entity_class.__name__} not found", entity_id=str(entity_id))
            return None

        return self._to_entity(model)

    async def update(self, entity: TEntity) -> TEntity:
        """
        Update an existing entity.

        Args:
            entity: Domain entity with updated values

        Returns:
            Updated entity
        """
        try:
            model = self._to_model(entity)
            merged = await self.session.merge(model)
            await self.session.flush()
            await self.session.refresh(merged)

            logger.debug(f"Updated {self.entity_class.__name__}", entity_id=str(merged.id))

            return self._to_entity(merged)
        except Exception as e:
            logger.error(f"Failed to update {self.entity_class.__name__}", error=str(e))
            raise
