"""Mention domain service."""

import re
from typing import Iterable

import logfire

from discuss.domain.repository import UserRepository
from discuss.domain.value import MENTION_CHARS, UserId

from .base import Service

MENTION_PATTERN = re.compile(rf"@([{MENTION_CHARS}]+)")


class MentionService(Service):
    """Resolves "@username" mentions in comment text to user IDs."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize mention service.

        Args:
            user_repository: User directory repository
        """
        self.user_repository = user_repository

    def extract_mentions(self, text: str) -> set[str]:
        """Extract candidate usernames from text.

        Every "@" followed by letters, digits, underscore, hyphen or dot is
        a candidate. Candidates differing only by case are collapsed; the
        first spelling seen is kept.

        Args:
            text: Comment text

        Returns:
            Distinct candidate usernames without the leading "@"
        """
        tokens: dict[str, str] = {}
        for match in MENTION_PATTERN.finditer(text):
            token = match.group(1)
            tokens.setdefault(token.lower(), token)
        return set(tokens.values())

    async def resolve(self, tokens: Iterable[str]) -> set[UserId]:
        """Resolve candidate usernames to user IDs.

        Unknown usernames are dropped silently.

        Args:
            tokens: Candidate usernames

        Returns:
            IDs of every user whose username matches a token, ignoring case
        """
        distinct = {token.lower() for token in tokens}
        if not distinct:
            return set()

        with logfire.span("mention_service.resolve", token_count=len(distinct)):
            users = await self.user_repository.find_by_usernames(distinct)
            resolved = {user.id for user in users}
            logfire.info(
                "Mentions resolved",
                token_count=len(distinct),
                resolved_count=len(resolved),
            )
            return resolved

    async def resolve_text(self, text: str) -> set[UserId]:
        """Extract and resolve all mentions in a piece of text.

        Args:
            text: Comment text

        Returns:
            IDs of the mentioned users
        """
        return await self.resolve(self.extract_mentions(text))
