"""
Service layer for skills.

Skills are the topics users teach and learn.  This module provides
lookups by id, by a set of ids and by a search term, an upsert
(``save``) and deletion.  Skills are keyed by generated 10 character
hex identifiers; a skill saved without one gets a fresh identifier
from an ``IdentifierGenerator`` bound to this service's ``exists``.

All queries use parameterized statements to avoid SQL injection
vulnerabilities.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from mentor_app_api.app.core.errors import DataAccessFailure, InvalidInput
from mentor_app_api.app.core.identifiers import IdentifierGenerator, is_valid_identifier
from mentor_app_api.app.models import Skill

logger = logging.getLogger(__name__)


class SkillService:
    """Service class for managing skills."""

    def __init__(self, conn: sqlite3.Connection, generator: Optional[IdentifierGenerator] = None) -> None:
        self.conn = conn
        self.generator = generator or IdentifierGenerator(self.exists)

    async def retrieve(self, skill_id: str) -> Optional[Skill]:
        """Retrieve a single skill by its ID.

        Raises ``InvalidInput`` for an empty id.  A malformed id never
        matches, so ``None`` is returned without querying.
        """
        if not skill_id:
            raise InvalidInput("ID cannot be empty")
        if not is_valid_identifier(skill_id):
            return None
        row = self.conn.execute("SELECT * FROM skill WHERE id = ?", (skill_id,)).fetchone()
        if not row:
            return None
        return self._row_to_skill(row)

    async def retrieve_by_ids(self, skill_ids: Iterable[str]) -> List[Skill]:
        """Return the skills matching ``skill_ids``, ordered by name.

        Malformed ids are ignored.  An empty set yields an empty list
        without issuing a query.
        """
        ids = sorted({skill_id for skill_id in skill_ids if is_valid_identifier(skill_id)})
        if not ids:
            return []
        placeholders = ", ".join("?" for _ in ids)
        rows = self.conn.execute(
            f"SELECT * FROM skill WHERE id IN ({placeholders}) ORDER BY name",
            tuple(ids),
        ).fetchall()
        return [self._row_to_skill(row) for row in rows]

    async def search_by_term(self, term: str) -> List[Skill]:
        """Return skills whose name contains ``term``.

        ``%`` and ``_`` in the term are matched literally.  Case
        sensitivity follows SQLite's ``LIKE`` (ASCII case insensitive).
        """
        if not term:
            raise InvalidInput("No search term supplied")
        escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        rows = self.conn.execute(
            "SELECT * FROM skill WHERE name LIKE ? ESCAPE '\\' ORDER BY name",
            (f"%{escaped}%",),
        ).fetchall()
        return [self._row_to_skill(row) for row in rows]

    async def save(self, skill: Skill) -> bool:
        """Insert or update a skill.

        A skill without an id is assigned a generated one (written back
        to ``skill.id``); a skill without ``added`` is stamped with the
        current UTC time.  Saving an existing id updates the name and
        the authorization flag; ``added`` keeps its first value.

        A freshly generated id is inserted without the upsert clause, so
        an id taken by a concurrent writer fails on the primary key
        instead of overwriting that writer's skill.
        """
        if not skill.name:
            raise InvalidInput("Skill is missing a name")
        generated = skill.id is None
        if generated:
            skill.id = await self.generator.generate()
        elif not is_valid_identifier(skill.id):
            raise InvalidInput(f"Malformed skill id {skill.id!r}")
        if skill.added is None:
            skill.added = datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)
        query = "INSERT INTO skill (id, name, authorized, added) VALUES (?, ?, ?, ?)"
        if not generated:
            query += " ON CONFLICT(id) DO UPDATE SET name = excluded.name, authorized = excluded.authorized"
        try:
            cursor = self.conn.execute(
                query,
                (skill.id, skill.name, 1 if skill.authorized else 0, skill.added.isoformat(sep=" ")),
            )
            self.conn.commit()
        except sqlite3.IntegrityError as e:
            self.conn.rollback()
            if generated and "skill.id" in str(e):
                raise DataAccessFailure(f"Generated skill id {skill.id} is already taken") from e
            raise InvalidInput(f"Skill {skill.name!r} already exists") from e
        logger.info("Saved skill %s (%s)", skill.id, skill.name)
        return cursor.rowcount > 0

    async def delete(self, skill_id: str) -> bool:
        """Delete a skill by ID.

        Returns ``True`` if a record was deleted, ``False`` otherwise
        (including for malformed ids).
        """
        if not is_valid_identifier(skill_id):
            return False
        cursor = self.conn.execute("DELETE FROM skill WHERE id = ?", (skill_id,))
        affected = cursor.rowcount
        self.conn.commit()
        if affected:
            logger.info("Deleted skill %s", skill_id)
        return affected > 0

    async def exists(self, skill_id: str) -> bool:
        if not is_valid_identifier(skill_id):
            return False
        row = self.conn.execute("SELECT id FROM skill WHERE id = ?", (skill_id,)).fetchone()
        return row is not None

    @staticmethod
    def _row_to_skill(row: sqlite3.Row) -> Skill:
        """Convert a database row to a ``Skill`` instance."""
        added = row["added"]
        if isinstance(added, str):
            added = datetime.fromisoformat(added)
        return Skill(
            id=row["id"],
            name=row["name"],
            authorized=row["authorized"] == 1,
            added=added,
        )
