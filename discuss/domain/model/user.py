"""User as seen through the user directory.

Accounts are owned by the identity component; the discussion engine
only reads them to resolve mentions and to show who wrote a comment.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel
from discuss.domain.value import PublicId, Role, UserId, Username


class UserProfile(DomainModel):
    """Public profile fields joined onto comments for display."""

    id: UserId
    username: Username
    public_id: PublicId
    avatar_url: Optional[str] = None


class User(DomainModel):
    """User directory entry."""

    id: UserId
    username: Username
    public_id: PublicId
    avatar_url: Optional[str] = None
    role: Role = Role.USER
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def profile(self) -> UserProfile:
        """Public profile projection of this user."""
        return UserProfile(
            id=self.id,
            username=self.username,
            public_id=self.public_id,
            avatar_url=self.avatar_url,
        )
