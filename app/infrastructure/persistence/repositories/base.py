"""Base repository: generic CRUD with soft-delete awareness and error translation."""

from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import Executable, Result, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import BackingStoreException
from app.infrastructure.persistence.database import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, create, update_fields and soft_delete.

    Database failures surface as BackingStoreException; IntegrityError is
    re-raised unchanged from writes so subclasses can translate unique
    violations into ConflictException. Rows of soft-deletable models
    (deleted_at column) are invisible once deleted.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    @property
    def _soft_deletable(self) -> bool:
        return hasattr(self.model, "deleted_at")

    def _not_deleted(self) -> list[Any]:
        model: Any = self.model
        return [model.deleted_at.is_(None)] if self._soft_deletable else []

    async def _execute(self, stmt: Executable, operation: str) -> Result[Any]:
        """Run stmt; translate driver/ORM errors into BackingStoreException."""
        try:
            return await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise BackingStoreException(operation, str(e)) from e

    async def _flush(self, operation: str, obj: ModelType | None = None) -> None:
        try:
            await self.db.flush()
            if obj is not None:
                await self.db.refresh(obj)
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            raise BackingStoreException(operation, str(e)) from e

    async def commit(self) -> None:
        """Commit the session's transaction (every repository sharing the session)."""
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            raise BackingStoreException("commit", str(e)) from e

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single (not deleted) record by primary key, or None."""
        model: Any = self.model
        result = await self._execute(
            select(self.model).where(model.id == entity_id, *self._not_deleted()),
            f"get {self.model.__name__}",
        )
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record (flushed, not committed) and reload server defaults."""
        self.db.add(obj)
        await self._flush(f"create {self.model.__name__}", obj)
        return obj

    async def update_fields(self, obj: ModelType, updates: dict[str, Any]) -> ModelType:
        """Set the given attributes on an attached record and flush."""
        for name, value in updates.items():
            if not hasattr(obj, name):
                raise ValueError(f"{self.model.__name__} has no field {name!r}")
            setattr(obj, name, value)
        await self._flush(f"update {self.model.__name__}", obj)
        return obj

    async def soft_delete(self, obj: ModelType) -> None:
        """Stamp deleted_at; hard-deletes models without a deleted_at column."""
        if self._soft_deletable:
            obj_any: Any = obj
            obj_any.deleted_at = datetime.now(UTC)
        else:
            await self.db.delete(obj)
        await self._flush(f"delete {self.model.__name__}")
