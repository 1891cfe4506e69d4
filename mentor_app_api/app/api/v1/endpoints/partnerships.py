"""
Partnership endpoints for API v1.

``GET /partnerships/{id}`` interprets ``id`` according to the
``role`` query parameter: with ``role=mentor`` or ``role=apprentice``
it is a user id and every matching partnership is returned; without a
role (or with any other value) it is a partnership id.  Mentor and
apprentice are expanded to full user objects in the response.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status

from mentor_app_api.app.api.dependencies import get_partnership_manager, get_user_service
from mentor_app_api.app.core.errors import InvalidInput, NotFound
from mentor_app_api.app.core.identifiers import is_valid_identifier
from mentor_app_api.app.models import User
from mentor_app_api.app.schemas.partnership import PartnershipCreate
from mentor_app_api.app.serializers import serialize_partnership_expanded
from mentor_app_api.app.services.partnership_service import PartnershipManager
from mentor_app_api.app.services.user_service import UserService

router = APIRouter()


@router.get("/{identifier}", response_model=List[Dict[str, Any]])
async def get_partnerships(
    identifier: str,
    role: Optional[str] = Query(None, description="'mentor' or 'apprentice'"),
    partnerships: PartnershipManager = Depends(get_partnership_manager),
    users: UserService = Depends(get_user_service),
) -> List[Dict[str, Any]]:
    """Return the partnerships selected by ``identifier`` and ``role``.

    Returns HTTP 404 when nothing matches.
    """
    found = await partnerships.retrieve_by_role(role, identifier)
    if not found:
        raise NotFound("No partnerships found")
    output = []
    for partnership in found:
        mentor = await users.retrieve(partnership.mentor)
        apprentice = await users.retrieve(partnership.apprentice)
        output.append(serialize_partnership_expanded(partnership, mentor, apprentice))
    return output


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_partnership(
    body: PartnershipCreate,
    partnerships: PartnershipManager = Depends(get_partnership_manager),
    users: UserService = Depends(get_user_service),
) -> Dict[str, str]:
    """Pair a mentor with an apprentice.

    The users are not required to exist; unknown ids are stored as
    given.
    """
    mentor = await users.retrieve(body.mentor) or User(id=body.mentor)
    apprentice = await users.retrieve(body.apprentice) or User(id=body.apprentice)
    if not await partnerships.create(mentor, apprentice):
        raise InvalidInput("Partnership could not be created")
    return {"mentor": mentor.id, "apprentice": apprentice.id}


@router.delete("/{partnership_id}")
async def delete_partnership(
    partnership_id: str,
    partnerships: PartnershipManager = Depends(get_partnership_manager),
) -> Dict[str, str]:
    """Delete a partnership.

    A malformed id is reported as HTTP 404; a well formed id that
    matched nothing as HTTP 400.
    """
    if not is_valid_identifier(partnership_id):
        raise NotFound("Partnership not found")
    if not await partnerships.delete(partnership_id):
        raise InvalidInput("Partnership could not be deleted")
    return {"id": partnership_id}
