"""Pytest configuration and shared fixtures.

This module provides:
- A fresh SQLite database per test, with the schema applied
- Service instances bound to that database
- A FastAPI app whose ``get_db`` dependency points at the test database
- An httpx ``AsyncClient`` for route tests
"""

import sqlite3
from collections.abc import AsyncGenerator, Callable, Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from mentor_app_api.app.core.db import get_connection, get_db, init_db
from mentor_app_api.app.main import create_app
from mentor_app_api.app.models import Skill, User
from mentor_app_api.app.services.partnership_service import PartnershipManager
from mentor_app_api.app.services.skill_service import SkillService
from mentor_app_api.app.services.user_service import UserService


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "mentor_app_test.db")


@pytest.fixture
def conn(db_path: str) -> Generator[sqlite3.Connection]:
    """Connection to a freshly migrated database."""
    connection = get_connection(db_path)
    init_db(connection)
    yield connection
    connection.close()


@pytest.fixture
def statements(conn: sqlite3.Connection) -> Generator[list[str]]:
    """SQL statements executed on ``conn`` while the test runs."""
    executed: list[str] = []
    conn.set_trace_callback(executed.append)
    yield executed
    conn.set_trace_callback(None)


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def skill_service(conn: sqlite3.Connection) -> SkillService:
    return SkillService(conn)


@pytest.fixture
def user_service(conn: sqlite3.Connection) -> UserService:
    return UserService(conn)


@pytest.fixture
def partnership_manager(conn: sqlite3.Connection) -> PartnershipManager:
    return PartnershipManager(conn)


@pytest.fixture
def make_skill(skill_service: SkillService) -> Callable:
    """Persist a skill and return it with its generated id."""

    async def _make(name: str, authorized: bool = False) -> Skill:
        skill = Skill(name=name, authorized=authorized)
        await skill_service.save(skill)
        return skill

    return _make


@pytest.fixture
def make_user(user_service: UserService) -> Callable:
    """Persist a user and return it with its generated id."""

    async def _make(first_name: str = "Ada", last_name: str = "Lovelace", **fields) -> User:
        fields.setdefault("email", f"{first_name.lower()}@example.com")
        user = User(first_name=first_name, last_name=last_name, **fields)
        await user_service.create(user)
        return user

    return _make


# =============================================================================
# App / Client Fixtures
# =============================================================================


@pytest.fixture
def app(conn: sqlite3.Connection) -> FastAPI:
    application = create_app()
    application.dependency_overrides[get_db] = lambda: conn
    return application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client talking to the app in process (lifespan is not run)."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
