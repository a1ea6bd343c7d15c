"""User service — account lookups and registration.

Learn: Service layer separates business logic from HTTP routing.
API routes call services, services call the database. The Identity
Resolver only needs get_by_id(), so tests can swap this class for an
in-memory fake without touching a database.
"""

from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from playlist_api.db.models import User

logger = structlog.get_logger()


class EmailTaken(Exception):
    """Raised when registering an email that already has an account."""


class UserService:
    """Business logic for user accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def create(self, email: str, password_hash: str) -> User:
        """Insert a user. The caller hashes the password first.

        Raises EmailTaken if the email is already registered, including
        when a concurrent request wins the race on the unique index.
        """
        if await self.get_by_email(email) is not None:
            raise EmailTaken(email)

        user = User(email=email, password=password_hash)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise EmailTaken(email)
        await self.db.refresh(user)
        logger.info("auth.user_registered", user_id=user.id)
        return user
