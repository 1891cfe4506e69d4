"""
Domain entities passed between the route layer and the services.

These are plain dataclasses: they carry no persistence logic.  The
services build them from ``sqlite3.Row`` objects and the serializers
turn them into JSON‑ready dictionaries.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Set


@dataclass
class Skill:
    id: Optional[str] = None
    name: Optional[str] = None
    authorized: bool = False
    added: Optional[datetime] = None


@dataclass
class User:
    id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    github_handle: Optional[str] = None
    twitter_handle: Optional[str] = None
    irc_nick: Optional[str] = None
    mentor_available: bool = False
    apprentice_available: bool = False
    timezone: Optional[str] = None
    teaching_skills: Set[str] = field(default_factory=set)
    learning_skills: Set[str] = field(default_factory=set)


@dataclass
class Partnership:
    """A directed pairing of a mentor and an apprentice, by user id."""

    id: Optional[str] = None
    mentor: Optional[str] = None
    apprentice: Optional[str] = None


class PartnershipRole(str, Enum):
    """Which side of a partnership a user id should be matched against."""

    MENTOR = "mentor"
    APPRENTICE = "apprentice"

    @classmethod
    def parse(cls, value: Any) -> Optional["PartnershipRole"]:
        """Return the matching role, or ``None`` for anything else.

        Matching is case insensitive and ignores surrounding
        whitespace.  Empty and unknown values yield ``None``.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None
