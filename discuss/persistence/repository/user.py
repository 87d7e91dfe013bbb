"""PostgreSQL implementation of User repository."""

from typing import Collection, List, Optional

from sqlalchemy import Select, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.error import StorageError
from discuss.domain.model import User
from discuss.domain.repository import UserRepository
from discuss.domain.value import UserId
from discuss.persistence.mappers import row_to_user, user_to_dict
from discuss.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch(self, stmt: Select) -> List[User]:
        try:
            result = await self.session.execute(stmt)
            rows = result.mappings().all()
        except SQLAlchemyError as e:
            raise StorageError("Failed to load users") from e
        return [row_to_user(dict(row)) for row in rows]

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        users = await self._fetch(stmt)
        return users[0] if users else None

    async def find_by_ids(self, user_ids: Collection[UserId]) -> List[User]:
        """Find every user whose ID is in the given collection."""
        if not user_ids:
            return []

        stmt = select(users_table).where(users_table.c.id.in_(list(user_ids)))
        return await self._fetch(stmt)

    async def find_by_usernames(self, usernames: Collection[str]) -> List[User]:
        """Find users by username, ignoring case."""
        if not usernames:
            return []

        lowered = sorted({name.lower() for name in usernames})
        stmt = select(users_table).where(
            func.lower(users_table.c.username).in_(lowered)
        )
        return await self._fetch(stmt)

    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        values = user_to_dict(user)
        stmt = insert(users_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={k: v for k, v in values.items() if k != "id"},
        )
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to save user {user.id}") from e
        return user
