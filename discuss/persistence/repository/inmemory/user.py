"""In-memory user repository for testing."""

from typing import Collection, Optional

from discuss.domain.model.user import User
from discuss.domain.repository.user import UserRepository
from discuss.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Collection[UserId]) -> list[User]:
        """Find every user whose ID is in the given collection."""
        return [self._users[uid] for uid in set(user_ids) if uid in self._users]

    async def find_by_usernames(self, usernames: Collection[str]) -> list[User]:
        """Find users by username, ignoring case."""
        lowered = {name.lower() for name in usernames}
        return [
            user
            for user in self._users.values()
            if user.username.root.lower() in lowered
        ]

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._users[user.id] = user
        return user
