"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a per‑request dependency for FastAPI routes
(``get_db``) and the schema bootstrap applied on application start
(``init_db``).  Services never open connections themselves; they are
handed one by the caller, which owns its lifetime.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from pathlib import Path
from typing import Iterator, Optional

from .config import settings

logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: skills
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS skill (
            id TEXT NOT NULL PRIMARY KEY,
            name TEXT NOT NULL UNIQUE,
            authorized INTEGER NOT NULL DEFAULT 0,
            added TIMESTAMP NOT NULL
        );
        """,
    ),
    # Migration 2: users and the skills they teach or learn
    (
        2,
        """
        CREATE TABLE IF NOT EXISTS "user" (
            id TEXT NOT NULL PRIMARY KEY,
            first_name TEXT NOT NULL,
            last_name TEXT NOT NULL,
            email TEXT NOT NULL,
            github_handle TEXT,
            twitter_handle TEXT,
            irc_nick TEXT,
            mentor_available INTEGER NOT NULL DEFAULT 0,
            apprentice_available INTEGER NOT NULL DEFAULT 0,
            timezone TEXT
        );

        CREATE TABLE IF NOT EXISTS user_skill (
            id_user TEXT NOT NULL,
            id_skill TEXT NOT NULL,
            relation TEXT NOT NULL CHECK (relation IN ('teaching', 'learning')),
            PRIMARY KEY (id_user, id_skill, relation)
        );
        CREATE INDEX IF NOT EXISTS idx_user_skill_user ON user_skill(id_user);
        """,
    ),
    # Migration 3: partnerships.  No foreign keys: removing a user leaves
    # its partnerships in place.
    (
        3,
        """
        CREATE TABLE IF NOT EXISTS partnership (
            id TEXT NOT NULL PRIMARY KEY,
            id_mentor TEXT NOT NULL,
            id_apprentice TEXT NOT NULL
        );
        CREATE INDEX IF NOT EXISTS idx_partnership_mentor ON partnership(id_mentor);
        CREATE INDEX IF NOT EXISTS idx_partnership_apprentice ON partnership(id_apprentice);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project package.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # mentor_app_api/
    return str((base_dir / db_url).resolve())


def get_connection(path: Optional[str] = None) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name.  It
    may be used from a different thread than the one that opened it,
    because FastAPI resolves sync dependencies in a worker thread and
    runs async handlers on the event loop.
    """
    conn = sqlite3.connect(path or get_database_path(), check_same_thread=False)
    # Return rows as dict‑like objects keyed by column name
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def get_db() -> Iterator[sqlite3.Connection]:
    """FastAPI dependency yielding a connection scoped to one request."""
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


def init_db(conn: Optional[sqlite3.Connection] = None) -> int:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  When ``conn`` is omitted a connection to the
    configured database is opened and closed here.  Returns the schema
    version after the run.
    """
    owned = conn is None
    if owned:
        conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) AS version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                logger.info("Applied migration %s", version)
                current_version = version
        conn.commit()
        return current_version
    finally:
        if owned:
            conn.close()
