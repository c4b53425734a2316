"""
Base repository class providing common database operations.

Every write runs inside `storage_error_handler`, so callers never see raw
SQLAlchemy errors for the classified cases (duplicate e-mail, missing record,
unreachable database); anything else reaches them unchanged.

Repositories never commit. The caller (service / request scope) owns the
transaction.
"""
import logging
import time
from typing import Any, Generic, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from candidate_intake.database.base import Base
from candidate_intake.database.session import ensure_connection
from candidate_intake.exceptions.base import RecordNotFoundError
from candidate_intake.exceptions.translator import storage_error_handler

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: The SQLAlchemy model class (e.g. Candidate, not Candidate())
            db: The async database session
        """
        self.model = model
        self.db = db

    @property
    def model_name(self) -> str:
        return self.model.__name__

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def add(self, entity: ModelType) -> ModelType:
        """
        Persist a fully built entity (and its cascaded children) and return it refreshed.

        Logging:
        - DEBUG: start event with the model name.
        - INFO: success event with created id and duration_ms.
        """
        logger.debug("repo.create.start", extra={"model": self.model_name, "operation": "create"})
        start = time.perf_counter()

        async with storage_error_handler(self.db, self.model_name):
            await ensure_connection(self.db)
            self.db.add(entity)
            await self.db.flush()
            # Load server-side defaults (timestamps) while we are still in async context.
            await self.db.refresh(entity)

        logger.info(
            "repo.create.success",
            extra={
                "model": self.model_name,
                "operation": "create",
                "id": getattr(entity, "id", None),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    # =================================================================================================================
    # Read
    # =================================================================================================================

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """Return the entity with this primary key, or None."""
        result = await self.db.execute(select(self.model).where(self.model.id == entity_id))
        return result.scalar_one_or_none()

    async def find_by_field(self, field: str, value: Any) -> ModelType | None:
        column = getattr(self.model, field, None)
        if column is None:
            raise AttributeError(f"{self.model_name} has no field '{field}'")
        result = await self.db.execute(select(self.model).where(column == value).limit(1))
        return result.scalars().first()

    # =================================================================================================================
    # Update
    # =================================================================================================================

    async def update(self, entity_id: int, **kwargs: Any) -> ModelType:
        """
        Update the given attributes of an existing entity.

        Raises:
            RecordNotFoundError: if the entity does not exist.
            DuplicateEmailError: if the update hits the unique e-mail constraint.
        """
        async with storage_error_handler(self.db, self.model_name):
            await ensure_connection(self.db)
            entity = await self.get_by_id(entity_id)
            if entity is None:
                logger.info("repo.update.not_found", extra={"model": self.model_name, "id": entity_id})
                raise RecordNotFoundError()
            for key, value in kwargs.items():
                setattr(entity, key, value)
            await self.db.flush()
            await self.db.refresh(entity)

        logger.info("repo.update.success", extra={"model": self.model_name, "operation": "update", "id": entity_id})
        return entity
