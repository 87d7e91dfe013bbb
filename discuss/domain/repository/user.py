"""User directory repository interface."""

from abc import ABC, abstractmethod
from typing import Collection, List, Optional

from discuss.domain.model.user import User
from discuss.domain.value import UserId


class UserRepository(ABC):
    """Repository for the user directory.

    Defines the contract for user lookups.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Collection[UserId]) -> List[User]:
        """Find every user whose ID is in the given collection.

        Args:
            user_ids: User IDs to look up

        Returns:
            Users that exist (missing IDs are skipped)
        """
        pass

    @abstractmethod
    async def find_by_usernames(self, usernames: Collection[str]) -> List[User]:
        """Find users by username, ignoring case.

        Matching is exact apart from case: "Alice" matches "alice"
        but not "alice2".

        Args:
            usernames: Usernames to look up

        Returns:
            Users whose username matches one of the given names
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass
