"""
Skill endpoints for API v1.

These routes expose lookup, search, creation, replacement and deletion
of skills.  Errors raised by ``SkillService`` are turned into JSON
error envelopes by the handlers registered in ``core.errors``.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query, Response, status

from mentor_app_api.app.api.dependencies import get_skill_service
from mentor_app_api.app.core.config import settings
from mentor_app_api.app.core.errors import InvalidInput, NotFound
from mentor_app_api.app.core.identifiers import is_valid_identifier
from mentor_app_api.app.models import Skill
from mentor_app_api.app.schemas.skill import SkillCreate, SkillUpdate
from mentor_app_api.app.serializers import serialize_skill
from mentor_app_api.app.services.skill_service import SkillService

router = APIRouter()


@router.get("", response_model=List[Dict[str, Any]])
async def search_skills(
    term: str = Query(..., description="Substring to look for in skill names"),
    skills: SkillService = Depends(get_skill_service),
) -> List[Dict[str, Any]]:
    """Search skills by name."""
    return [serialize_skill(skill) for skill in await skills.search_by_term(term.strip())]


@router.get("/{skill_id}", response_model=Dict[str, Any])
async def get_skill(skill_id: str, skills: SkillService = Depends(get_skill_service)) -> Dict[str, Any]:
    """Retrieve a single skill by ID.

    Returns HTTP 404 if the id is malformed or the skill does not
    exist.
    """
    if not is_valid_identifier(skill_id):
        raise NotFound("Skill not found")
    skill = await skills.retrieve(skill_id)
    if skill is None:
        raise NotFound("Skill not found")
    return serialize_skill(skill)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_skill(
    skill_in: SkillCreate,
    response: Response,
    skills: SkillService = Depends(get_skill_service),
) -> Dict[str, str]:
    """Create a new skill and return its generated id."""
    skill = Skill(name=skill_in.name, authorized=bool(skill_in.authorized), added=skill_in.added)
    if not await skills.save(skill):
        raise InvalidInput("Skill could not be saved")
    response.headers["Location"] = f"{settings.api_prefix}/skills/{skill.id}"
    return {"id": skill.id}


@router.put("/{skill_id}")
async def save_skill(
    skill_id: str,
    skill_in: SkillUpdate,
    skills: SkillService = Depends(get_skill_service),
) -> Dict[str, str]:
    """Save a skill under ``skill_id``, creating it if needed."""
    if not is_valid_identifier(skill_id):
        raise InvalidInput("Malformed skill id")
    skill = Skill(id=skill_id, name=skill_in.name, authorized=bool(skill_in.authorized), added=skill_in.added)
    if not await skills.save(skill):
        raise InvalidInput("Skill could not be saved")
    return {"id": skill_id}


@router.delete("/{skill_id}")
async def delete_skill(skill_id: str, skills: SkillService = Depends(get_skill_service)) -> Dict[str, str]:
    """Delete a skill.  Returns HTTP 404 if nothing was deleted."""
    if not await skills.delete(skill_id):
        raise NotFound("Skill not found")
    return {"id": skill_id}
