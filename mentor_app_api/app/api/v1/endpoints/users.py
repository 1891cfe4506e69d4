"""
User endpoints for API v1.

Provide registration, profile replacement, deletion and listing of
users.  Single‑user lookups expand the user's skills and list the
partnerships in which the user is mentor or apprentice.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Response, status

from mentor_app_api.app.api.dependencies import (
    get_partnership_manager,
    get_skill_service,
    get_user_service,
)
from mentor_app_api.app.core.config import settings
from mentor_app_api.app.core.errors import InvalidInput, NotFound
from mentor_app_api.app.core.identifiers import is_valid_identifier
from mentor_app_api.app.models import User
from mentor_app_api.app.schemas.user import UserBase, UserCreate, UserUpdate
from mentor_app_api.app.serializers import serialize_partnership, serialize_skill, serialize_user
from mentor_app_api.app.services.partnership_service import PartnershipManager
from mentor_app_api.app.services.skill_service import SkillService
from mentor_app_api.app.services.user_service import UserService

router = APIRouter()


async def _user_from_payload(payload: UserBase, skills: SkillService) -> User:
    """Build a ``User`` from a request body, rejecting unknown skill ids."""
    teaching = set(payload.teaching_skills)
    learning = set(payload.learning_skills)
    requested = teaching | learning
    found = {skill.id for skill in await skills.retrieve_by_ids(requested)}
    missing = requested - found
    if missing:
        raise InvalidInput(f"Unknown skill id(s): {', '.join(sorted(missing))}")
    return User(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        github_handle=payload.github_handle,
        twitter_handle=payload.twitter_handle,
        irc_nick=payload.irc_nick,
        mentor_available=payload.mentor_available,
        apprentice_available=payload.apprentice_available,
        timezone=payload.timezone,
        teaching_skills=teaching,
        learning_skills=learning,
    )


async def _with_skills(user: User, skills: SkillService) -> Dict[str, Any]:
    data = serialize_user(user)
    data["teaching_skills"] = [serialize_skill(s) for s in await skills.retrieve_by_ids(user.teaching_skills)]
    data["learning_skills"] = [serialize_skill(s) for s in await skills.retrieve_by_ids(user.learning_skills)]
    return data


@router.get("", response_model=List[Dict[str, Any]])
async def list_users(
    users: UserService = Depends(get_user_service),
    skills: SkillService = Depends(get_skill_service),
) -> List[Dict[str, Any]]:
    """Return all users with their skills expanded."""
    return [await _with_skills(user, skills) for user in await users.retrieve_all()]


@router.get("/{user_id}", response_model=Dict[str, Any])
async def get_user(
    user_id: str,
    users: UserService = Depends(get_user_service),
    skills: SkillService = Depends(get_skill_service),
    partnerships: PartnershipManager = Depends(get_partnership_manager),
) -> Dict[str, Any]:
    """Return a user with skills and partnerships.

    ``partnerships`` has two keys: ``mentoring`` (the user is the
    mentor) and ``apprenticing`` (the user is the apprentice).
    """
    if not is_valid_identifier(user_id):
        raise NotFound("User not found")
    user = await users.retrieve(user_id)
    if user is None:
        raise NotFound("User not found")
    data = await _with_skills(user, skills)
    data["partnerships"] = {
        "mentoring": [serialize_partnership(p) for p in await partnerships.retrieve_by_mentor(user_id)],
        "apprenticing": [serialize_partnership(p) for p in await partnerships.retrieve_by_apprentice(user_id)],
    }
    return data


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UserCreate,
    response: Response,
    users: UserService = Depends(get_user_service),
    skills: SkillService = Depends(get_skill_service),
) -> Dict[str, str]:
    """Register a new user and return its generated id."""
    user = await _user_from_payload(user_in, skills)
    if not await users.create(user):
        raise InvalidInput("User could not be created")
    response.headers["Location"] = f"{settings.api_prefix}/users/{user.id}"
    return {"id": user.id}


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    user_in: UserUpdate,
    users: UserService = Depends(get_user_service),
    skills: SkillService = Depends(get_skill_service),
) -> Dict[str, str]:
    """Replace a user's profile.  Unknown users are reported as HTTP 400."""
    if not is_valid_identifier(user_id):
        raise InvalidInput("Malformed user id")
    user = await _user_from_payload(user_in, skills)
    user.id = user_id
    if not await users.update(user):
        raise InvalidInput("User could not be updated")
    return {"id": user_id}


@router.delete("/{user_id}")
async def delete_user(user_id: str, users: UserService = Depends(get_user_service)) -> Dict[str, str]:
    """Delete a user.  Partnerships referencing it are kept."""
    if not await users.delete(user_id):
        raise NotFound("User not found")
    return {"id": user_id}
