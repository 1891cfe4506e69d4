"""
Identifier generation and validation.

Every entity (user, skill, partnership) is keyed by a 10 character
lowercase hexadecimal string.  ``IdentifierGenerator`` draws random
candidates and asks the owning service whether a candidate is already
taken before handing it out.  The check is only an optimisation: the
primary key on each table is what actually guarantees uniqueness when
two writers race.
"""

import logging
import re
import secrets
from typing import Any, Awaitable, Callable, Optional

from .config import settings
from .errors import GenerationExhausted

logger = logging.getLogger(__name__)

IDENTIFIER_LENGTH = 10
IDENTIFIER_PATTERN = re.compile(r"[0-9a-f]{10}")


def is_valid_identifier(value: Any) -> bool:
    """Return ``True`` when ``value`` has the shape of an identifier."""
    return isinstance(value, str) and IDENTIFIER_PATTERN.fullmatch(value) is not None


def random_token() -> str:
    # 5 random bytes -> 10 hex characters
    return secrets.token_hex(IDENTIFIER_LENGTH // 2)


class IdentifierGenerator:
    """Produce identifiers that are not yet used in a table.

    Parameters
    ----------
    exists : Callable[[str], Awaitable[bool]]
        Coroutine function reporting whether an identifier is taken.
        Called once per candidate.
    max_attempts : Optional[int]
        Number of candidates to try before raising
        ``GenerationExhausted``.  Defaults to
        ``settings.identifier_max_attempts``.
    token_factory : Callable[[], str]
        Source of candidates.  Replaceable so tests can force
        collisions.
    """

    def __init__(
        self,
        exists: Callable[[str], Awaitable[bool]],
        max_attempts: Optional[int] = None,
        token_factory: Callable[[], str] = random_token,
    ) -> None:
        self.exists = exists
        self.max_attempts = max_attempts if max_attempts is not None else settings.identifier_max_attempts
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.token_factory = token_factory

    async def generate(self) -> str:
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.token_factory()
            if not is_valid_identifier(candidate):
                raise GenerationExhausted(f"Token factory produced a malformed identifier {candidate!r}")
            if not await self.exists(candidate):
                return candidate
            logger.debug("Identifier collision on attempt %d: %s", attempt, candidate)
        raise GenerationExhausted(
            f"No free identifier found after {self.max_attempts} attempts"
        )
