"""
API dependencies.

Builds service instances for each request around the connection
yielded by ``core.db.get_db``.  Tests swap the database by overriding
``get_db`` on the application.
"""

import sqlite3

from fastapi import Depends

from mentor_app_api.app.core.db import get_db
from mentor_app_api.app.services.partnership_service import PartnershipManager
from mentor_app_api.app.services.skill_service import SkillService
from mentor_app_api.app.services.user_service import UserService


def get_skill_service(conn: sqlite3.Connection = Depends(get_db)) -> SkillService:
    return SkillService(conn)


def get_user_service(conn: sqlite3.Connection = Depends(get_db)) -> UserService:
    return UserService(conn)


def get_partnership_manager(conn: sqlite3.Connection = Depends(get_db)) -> PartnershipManager:
    return PartnershipManager(conn)
