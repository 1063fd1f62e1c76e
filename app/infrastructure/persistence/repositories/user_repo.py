"""User repository with password helpers. Interface methods return application DTOs."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserResult
from app.domain.enums import UserRole
from app.domain.exceptions import ConflictException
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.security.password import (
    burn_password_check,
    hash_password_async,
    verify_password_async,
)


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult (no password)."""
    return UserResult(
        id=u.id,
        username=u.username,
        email=u.email,
        role=u.role,
        is_active=u.is_active,
    )


class UserRepository(BaseRepository[User]):
    """User repository. Authenticate, create_user, lookups by email/username."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def _get_entity_by_email(self, email: str) -> User | None:
        result = await self._execute(
            select(User).where(User.email == email.lower(), User.deleted_at.is_(None)),
            "get user by email",
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: str) -> UserResult | None:  # type: ignore[override]
        user = await super().get_by_id(user_id)
        return _user_to_result(user) if user else None

    async def get_by_email(self, email: str) -> UserResult | None:
        user = await self._get_entity_by_email(email)
        return _user_to_result(user) if user else None

    async def get_by_username(self, username: str) -> UserResult | None:
        result = await self._execute(
            select(User).where(User.username == username, User.deleted_at.is_(None)),
            "get user by username",
        )
        user = result.scalar_one_or_none()
        return _user_to_result(user) if user else None

    async def authenticate(self, email: str, password: str) -> UserResult | None:
        user = await self._get_entity_by_email(email)
        if not user:
            await burn_password_check(password)
            return None
        if not user.is_active:
            return None
        if not await verify_password_async(password, user.hashed_password):
            return None
        return _user_to_result(user)

    async def create_user(
        self,
        username: str,
        email: str,
        password: str,
        role: str = UserRole.USER.value,
    ) -> UserResult:
        """Create user; raise ConflictException on unique constraint violation."""
        user = User(
            username=username,
            email=email.lower(),
            hashed_password=await hash_password_async(password),
            role=role,
            is_active=True,
        )
        try:
            created = await self.create(user)
        except IntegrityError as e:
            raise ConflictException("Email or username already in use") from e
        return _user_to_result(created)
