"""
Business logic for users.

A user row holds the profile; the skills a user teaches or learns are
stored as links in ``user_skill`` with a ``relation`` of
``'teaching'`` or ``'learning'``.  Creating or updating a user
rewrites its links.  Deleting a user removes the row and its links
but not the partnerships that reference it.

The service expects its input to have passed the request schemas but
does not depend on it: every statement is parameterized.
"""

import logging
import sqlite3
from typing import Dict, List, Optional, Set, Tuple

from mentor_app_api.app.core.errors import InvalidInput
from mentor_app_api.app.core.identifiers import IdentifierGenerator, is_valid_identifier
from mentor_app_api.app.models import User

logger = logging.getLogger(__name__)

TEACHING = "teaching"
LEARNING = "learning"

_USER_COLUMNS = (
    "first_name",
    "last_name",
    "email",
    "github_handle",
    "twitter_handle",
    "irc_nick",
    "mentor_available",
    "apprentice_available",
    "timezone",
)


class UserService:
    """Service for storing and looking up users."""

    def __init__(self, conn: sqlite3.Connection, generator: Optional[IdentifierGenerator] = None) -> None:
        self.conn = conn
        self.generator = generator or IdentifierGenerator(self.exists)

    async def retrieve(self, user_id: str) -> Optional[User]:
        """Return the user with ``user_id`` or ``None``."""
        if not is_valid_identifier(user_id):
            return None
        row = self.conn.execute('SELECT * FROM "user" WHERE id = ?', (user_id,)).fetchone()
        if not row:
            return None
        links = self._skill_links([user_id])
        return self._row_to_user(row, links.get(user_id))

    async def retrieve_all(self) -> List[User]:
        """Return every user, ordered by last name then first name."""
        rows = self.conn.execute(
            'SELECT * FROM "user" ORDER BY last_name, first_name, id'
        ).fetchall()
        links = self._skill_links()
        return [self._row_to_user(row, links.get(row["id"])) for row in rows]

    async def create(self, user: User) -> bool:
        """Insert a new user and its skill links.

        Assigns a generated identifier when ``user.id`` is ``None``.
        Returns ``True`` when the row was written.
        """
        self._validate(user)
        if user.id is None:
            user.id = await self.generator.generate()
        elif not is_valid_identifier(user.id):
            raise InvalidInput(f"Malformed user id {user.id!r}")
        columns = ("id",) + _USER_COLUMNS
        placeholders = ", ".join("?" for _ in columns)
        try:
            cursor = self.conn.execute(
                f'INSERT INTO "user" ({", ".join(columns)}) VALUES ({placeholders})',
                (user.id,) + self._values(user),
            )
            self._write_skill_links(user)
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise
        logger.info("Created user %s", user.id)
        return cursor.rowcount > 0

    async def update(self, user: User) -> bool:
        """Replace an existing user's profile and skill links.

        ``user.id`` must already be set.  Returns ``False`` when there
        is no user with that id.
        """
        if not user.id:
            raise InvalidInput("User ID is required for an update")
        if not is_valid_identifier(user.id):
            raise InvalidInput(f"Malformed user id {user.id!r}")
        self._validate(user)
        assignments = ", ".join(f"{column} = ?" for column in _USER_COLUMNS)
        try:
            cursor = self.conn.execute(
                f'UPDATE "user" SET {assignments} WHERE id = ?',
                self._values(user) + (user.id,),
            )
            if cursor.rowcount < 1:
                self.conn.rollback()
                return False
            self._write_skill_links(user)
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise
        logger.info("Updated user %s", user.id)
        return True

    async def delete(self, user_id: str) -> bool:
        """Delete a user and its skill links.

        Partnerships referencing the user are left untouched.  Returns
        ``True`` if a user row was deleted.
        """
        if not is_valid_identifier(user_id):
            return False
        cursor = self.conn.execute('DELETE FROM "user" WHERE id = ?', (user_id,))
        affected = cursor.rowcount
        if affected:
            self.conn.execute("DELETE FROM user_skill WHERE id_user = ?", (user_id,))
        self.conn.commit()
        if affected:
            logger.info("Deleted user %s", user_id)
        return affected > 0

    async def exists(self, user_id: str) -> bool:
        if not is_valid_identifier(user_id):
            return False
        row = self.conn.execute('SELECT id FROM "user" WHERE id = ?', (user_id,)).fetchone()
        return row is not None

    @staticmethod
    def _validate(user: User) -> None:
        for field in ("first_name", "last_name", "email"):
            if not getattr(user, field):
                raise InvalidInput(f"User is missing {field.replace('_', ' ')}")

    @staticmethod
    def _values(user: User) -> Tuple:
        return (
            user.first_name,
            user.last_name,
            user.email,
            user.github_handle,
            user.twitter_handle,
            user.irc_nick,
            1 if user.mentor_available else 0,
            1 if user.apprentice_available else 0,
            user.timezone,
        )

    def _write_skill_links(self, user: User) -> None:
        self.conn.execute("DELETE FROM user_skill WHERE id_user = ?", (user.id,))
        links = [(user.id, skill_id, TEACHING) for skill_id in sorted(user.teaching_skills)]
        links += [(user.id, skill_id, LEARNING) for skill_id in sorted(user.learning_skills)]
        if links:
            self.conn.executemany(
                "INSERT INTO user_skill (id_user, id_skill, relation) VALUES (?, ?, ?)",
                links,
            )

    def _skill_links(self, user_ids: Optional[List[str]] = None) -> Dict[str, Dict[str, Set[str]]]:
        """Map user id -> {"teaching": {...}, "learning": {...}}."""
        if user_ids is None:
            rows = self.conn.execute("SELECT id_user, id_skill, relation FROM user_skill").fetchall()
        else:
            placeholders = ", ".join("?" for _ in user_ids)
            rows = self.conn.execute(
                f"SELECT id_user, id_skill, relation FROM user_skill WHERE id_user IN ({placeholders})",
                tuple(user_ids),
            ).fetchall()
        links: Dict[str, Dict[str, Set[str]]] = {}
        for row in rows:
            per_user = links.setdefault(row["id_user"], {TEACHING: set(), LEARNING: set()})
            per_user[row["relation"]].add(row["id_skill"])
        return links

    @staticmethod
    def _row_to_user(row: sqlite3.Row, links: Optional[Dict[str, Set[str]]] = None) -> User:
        links = links or {}
        return User(
            id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            github_handle=row["github_handle"],
            twitter_handle=row["twitter_handle"],
            irc_nick=row["irc_nick"],
            mentor_available=bool(row["mentor_available"]),
            apprentice_available=bool(row["apprentice_available"]),
            timezone=row["timezone"],
            teaching_skills=set(links.get(TEACHING, ())),
            learning_skills=set(links.get(LEARNING, ())),
        )
