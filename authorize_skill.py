#!/usr/bin/env python3
"""
Authorize (or revoke) a skill in the Mentor App SQLite database.

Skills submitted through the API start out unauthorized.  This script
lets an operator flip the flag without going through HTTP.  The skill
is selected by id or by its exact name, and written back through
``SkillService.save`` so the same rules apply as for the API.

Usage:
    python authorize_skill.py --db ./mentor_app_api/mentor_app.db --name Python
    python authorize_skill.py --db ./mentor_app_api/mentor_app.db --id 0a1b2c3d4e --revoke
"""

import argparse
import asyncio
import os
import sys
from typing import List, Optional

from mentor_app_api.app.core.db import get_connection
from mentor_app_api.app.services.skill_service import SkillService


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Authorize or revoke a skill (SQLite).")
    ap.add_argument("--db", required=True, help="Path to SQLite DB file (e.g., ./mentor_app_api/mentor_app.db)")
    target = ap.add_mutually_exclusive_group(required=True)
    target.add_argument("--id", help="Skill id")
    target.add_argument("--name", help="Exact skill name")
    ap.add_argument("--revoke", action="store_true", help="Clear the authorized flag instead of setting it")
    return ap


async def _set_authorized(db_path: str, skill_id: Optional[str], name: Optional[str], authorized: bool) -> int:
    conn = get_connection(db_path)
    try:
        service = SkillService(conn)
        if skill_id is None:
            row = conn.execute("SELECT id FROM skill WHERE name = ?", (name,)).fetchone()
            skill_id = row["id"] if row else None
        skill = await service.retrieve(skill_id) if skill_id else None
        if skill is None:
            print(f"[!] No skill found: {skill_id or name}", file=sys.stderr)
            return 2
        skill.authorized = authorized
        await service.save(skill)
        state = "authorized" if authorized else "revoked"
        print(f"[+] Skill {skill.name} ({skill.id}) {state}")
        return 0
    finally:
        conn.close()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if not os.path.exists(args.db):
        print(f"[!] DB not found: {args.db}", file=sys.stderr)
        return 1

    return asyncio.run(_set_authorized(args.db, args.id, args.name, not args.revoke))


if __name__ == "__main__":
    sys.exit(main())
