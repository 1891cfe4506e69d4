"""
Conversion of domain entities into JSON‑ready dictionaries.

The route layer is the only consumer.  Expanded forms (a user with
its skills, a partnership with its users) are assembled by the
endpoints from these building blocks.
"""

from typing import Any, Dict, Optional

from .models import Partnership, Skill, User


def serialize_skill(skill: Skill) -> Dict[str, Any]:
    return {
        "id": skill.id,
        "name": skill.name,
        "authorized": bool(skill.authorized),
        "added": skill.added.isoformat() if skill.added is not None else None,
    }


def serialize_user(user: User) -> Dict[str, Any]:
    """Serialize a user with its skills as sorted lists of skill ids."""
    return {
        "id": user.id,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "email": user.email,
        "github_handle": user.github_handle,
        "twitter_handle": user.twitter_handle,
        "irc_nick": user.irc_nick,
        "mentor_available": bool(user.mentor_available),
        "apprentice_available": bool(user.apprentice_available),
        "timezone": user.timezone,
        "teaching_skills": sorted(user.teaching_skills),
        "learning_skills": sorted(user.learning_skills),
    }


def serialize_partnership(partnership: Partnership) -> Dict[str, Any]:
    return {
        "id": partnership.id,
        "mentor": partnership.mentor,
        "apprentice": partnership.apprentice,
    }


def serialize_partnership_expanded(
    partnership: Partnership,
    mentor: Optional[User],
    apprentice: Optional[User],
) -> Dict[str, Any]:
    """Serialize a partnership with both sides replaced by user objects.

    A side whose user no longer exists is emitted as ``None``; nothing
    removes partnerships when a user is deleted.
    """
    data = serialize_partnership(partnership)
    data["mentor"] = serialize_user(mentor) if mentor is not None else None
    data["apprentice"] = serialize_user(apprentice) if apprentice is not None else None
    return data
