"""Domain value objects for discussions.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from discuss.domain.value.common import RootValueObject, ValueObject
from discuss.domain.value.identifiers import UserId

# Characters allowed after "@" in a mention token
MENTION_CHARS = r"A-Za-z0-9_.\-"


class Role(str, Enum):
    """Role of an authenticated user."""

    USER = "user"
    ADMIN = "admin"


class Username(RootValueObject[str]):
    """Display name of a user.

    Usernames are matched case-insensitively when resolving mentions.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Username must be 1-255 characters")
        return v


class PublicId(RootValueObject[str]):
    """Public, user-chosen unique identifier.

    This is the token inserted into content when a reply is promoted
    to a sibling, so it must be a valid mention token.
    """

    @field_validator("root")
    @classmethod
    def validate_public_id(cls, v: str) -> str:
        """Validate public id only uses mention characters."""
        if not re.fullmatch(rf"[{MENTION_CHARS}]{{1,64}}", v):
            raise ValueError(
                "Public id must be 1-64 characters of letters, digits, "
                "underscore, hyphen or dot"
            )
        return v

    @property
    def mention(self) -> str:
        """Mention token referencing this public id."""
        return f"@{self.root}"


class Identity(ValueObject):
    """Authenticated caller as yielded by the identity provider."""

    user_id: UserId
    username: str
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
