"""
Service layer for partnerships.

A partnership pairs a mentor with an apprentice.  The manager does
not check that either user exists: that is the caller's concern, and
the ``partnership`` table carries no foreign keys.  Every lookup
treats a malformed identifier as "no match" instead of raising.
"""

import logging
import sqlite3
from typing import List, Optional

from mentor_app_api.app.core.identifiers import IdentifierGenerator, is_valid_identifier
from mentor_app_api.app.models import Partnership, PartnershipRole, User

logger = logging.getLogger(__name__)


class PartnershipManager:
    """Create, look up and remove mentor/apprentice partnerships."""

    def __init__(self, conn: sqlite3.Connection, generator: Optional[IdentifierGenerator] = None) -> None:
        self.conn = conn
        self.generator = generator or IdentifierGenerator(self.exists)

    async def create(self, mentor: User, apprentice: User) -> bool:
        """Create a partnership between ``mentor`` and ``apprentice``.

        Returns ``False`` when no row was written.
        """
        partnership_id = await self.generator.generate()
        cursor = self.conn.execute(
            """
            INSERT INTO partnership (id, id_mentor, id_apprentice)
            VALUES (?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET id_mentor = excluded.id_mentor
            """,
            (partnership_id, mentor.id, apprentice.id),
        )
        self.conn.commit()
        if cursor.rowcount < 1:
            return False
        logger.info(
            "Created partnership %s (mentor %s, apprentice %s)",
            partnership_id,
            mentor.id,
            apprentice.id,
        )
        return True

    async def delete(self, partnership_id: str) -> bool:
        if not is_valid_identifier(partnership_id):
            return False
        cursor = self.conn.execute("DELETE FROM partnership WHERE id = ?", (partnership_id,))
        affected = cursor.rowcount
        self.conn.commit()
        if affected:
            logger.info("Deleted partnership %s", partnership_id)
        return affected > 0

    async def retrieve_by_id(self, partnership_id: str) -> Optional[Partnership]:
        if not is_valid_identifier(partnership_id):
            return None
        row = self.conn.execute(
            "SELECT * FROM partnership WHERE id = ?", (partnership_id,)
        ).fetchone()
        if not row:
            return None
        return self._row_to_partnership(row)

    async def retrieve_by_mentor(self, mentor_id: str) -> List[Partnership]:
        if not is_valid_identifier(mentor_id):
            return []
        rows = self.conn.execute(
            "SELECT * FROM partnership WHERE id_mentor = ? ORDER BY id", (mentor_id,)
        ).fetchall()
        return [self._row_to_partnership(row) for row in rows]

    async def retrieve_by_apprentice(self, apprentice_id: str) -> List[Partnership]:
        if not is_valid_identifier(apprentice_id):
            return []
        rows = self.conn.execute(
            "SELECT * FROM partnership WHERE id_apprentice = ? ORDER BY id", (apprentice_id,)
        ).fetchall()
        return [self._row_to_partnership(row) for row in rows]

    async def retrieve_by_role(self, role: Optional[str], identifier: str) -> List[Partnership]:
        """Look up partnerships for ``identifier`` according to ``role``.

        ``mentor`` and ``apprentice`` (any case) treat ``identifier`` as
        a user id and match the corresponding side.  Any other role
        treats it as a partnership id and returns that partnership, or
        an empty list.
        """
        parsed = PartnershipRole.parse(role)
        if parsed is PartnershipRole.MENTOR:
            return await self.retrieve_by_mentor(identifier)
        if parsed is PartnershipRole.APPRENTICE:
            return await self.retrieve_by_apprentice(identifier)
        partnership = await self.retrieve_by_id(identifier)
        return [partnership] if partnership is not None else []

    async def exists(self, partnership_id: str) -> bool:
        if not is_valid_identifier(partnership_id):
            return False
        row = self.conn.execute(
            "SELECT id FROM partnership WHERE id = ?", (partnership_id,)
        ).fetchone()
        return row is not None

    @staticmethod
    def _row_to_partnership(row: sqlite3.Row) -> Partnership:
        return Partnership(id=row["id"], mentor=row["id_mentor"], apprentice=row["id_apprentice"])
