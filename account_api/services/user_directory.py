"""
User directory — persistence for user records.

The account handler only knows the UserDirectory protocol below. The
SQLAlchemy implementation is bound to one request's AsyncSession; it is
built per request by the dependency layer and never shared.

Mutations report success as a bool instead of raising:
  - False when the target id does not exist
  - False when the database rejects the write (e.g. the unique email index
    catches a race the handler's lookup-by-email missed)
The handler turns False into an UnprocessableEntityError, and that error
rolls the request's session back in get_db().

Passwords arrive here in plaintext and are hashed immediately before
storage, so the hash format stays an implementation detail of this module
and security.py.
"""

import logging
import uuid
from typing import Protocol, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from account_api.models.user import User
from account_api.security import hash_password


logger = logging.getLogger(__name__)


class UserDirectory(Protocol):
    """Async lookup and mutation of user records."""

    async def list_all(self) -> Sequence[User]:
        ...

    async def get_by_id(self, user_id: uuid.UUID) -> User | None:
        ...

    async def get_by_email(self, email: str) -> User | None:
        ...

    async def create(self, name: str, email: str, password: str) -> bool:
        ...

    async def update(self, user_id: uuid.UUID, name: str, email: str) -> bool:
        ...

    async def set_password(self, user_id: uuid.UUID, new_password: str) -> bool:
        ...

    async def delete(self, user_id: uuid.UUID) -> bool:
        ...


class SqlUserDirectory:
    """UserDirectory over an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.created_at))
        return list(result.scalars().all())

    async def get_by_id(self, user_id: uuid.UUID) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def create(self, name: str, email: str, password: str) -> bool:
        """Insert a new user, hashing the password first."""
        user = User(name=name, email=email, password=hash_password(password))
        self.db.add(user)
        return await self._flush("create")

    async def update(self, user_id: uuid.UUID, name: str, email: str) -> bool:
        user = await self.get_by_id(user_id)
        if user is None:
            return False

        user.name = name
        user.email = email
        return await self._flush("update")

    async def set_password(self, user_id: uuid.UUID, new_password: str) -> bool:
        user = await self.get_by_id(user_id)
        if user is None:
            return False

        user.password = hash_password(new_password)
        return await self._flush("set_password")

    async def delete(self, user_id: uuid.UUID) -> bool:
        user = await self.get_by_id(user_id)
        if user is None:
            return False

        await self.db.delete(user)
        return await self._flush("delete")

    async def _flush(self, operation: str) -> bool:
        # Constraint violations surface here as False, not at commit time
        try:
            await self.db.flush()
        except SQLAlchemyError as exc:
            logger.warning("User directory %s rejected: %s", operation, exc.__class__.__name__)
            return False
        return True
