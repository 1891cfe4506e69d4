"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers (users, skills,
partnerships) under a unified prefix.  When new domains are
introduced, update this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import partnerships, skills, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(skills.router, prefix="/skills", tags=["skills"])
router.include_router(partnerships.router, prefix="/partnerships", tags=["partnerships"])
