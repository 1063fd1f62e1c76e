"""University repository. Returns application DTOs."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.university import UniversityResult
from app.domain.exceptions import ConflictException
from app.infrastructure.persistence.models.university import University
from app.infrastructure.persistence.repositories.base import BaseRepository

_UPDATABLE_FIELDS = frozenset({"name", "location", "contact_email", "is_active"})


def _university_to_result(u: University) -> UniversityResult:
    return UniversityResult(
        id=u.id,
        name=u.name,
        location=u.location,
        contact_email=u.contact_email,
        is_active=u.is_active,
        created_at=u.created_at,
        updated_at=u.updated_at,
    )


def _name_conflict(name: str | None) -> ConflictException:
    return ConflictException(f"University {name!r} already exists", field="name")


class UniversityRepository(BaseRepository[University]):
    """University repository. Universities are deactivated, never deleted."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, University)

    async def get_active(self) -> list[UniversityResult]:
        result = await self._execute(
            select(University).where(University.is_active.is_(True)).order_by(University.name.asc()),
            "list universities",
        )
        return [_university_to_result(u) for u in result.scalars().all()]

    async def get_by_id(self, university_id: str) -> UniversityResult | None:  # type: ignore[override]
        university = await super().get_by_id(university_id)
        return _university_to_result(university) if university else None

    async def create_university(
        self,
        name: str,
        location: str | None = None,
        contact_email: str | None = None,
    ) -> UniversityResult:
        """Create university; raise ConflictException on duplicate name."""
        university = University(name=name, location=location, contact_email=contact_email)
        try:
            created = await self.create(university)
        except IntegrityError as e:
            raise _name_conflict(name) from e
        return _university_to_result(created)

    async def update_university(
        self, university_id: str, **updates: Any
    ) -> UniversityResult | None:
        unknown = set(updates) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update university fields: {', '.join(sorted(unknown))}")
        university = await super().get_by_id(university_id)
        if university is None:
            return None
        try:
            updated = await self.update_fields(university, updates)
        except IntegrityError as e:
            raise _name_conflict(updates.get("name")) from e
        return _university_to_result(updated)

    async def deactivate(self, university_id: str) -> UniversityResult | None:
        return await self.update_university(university_id, is_active=False)
