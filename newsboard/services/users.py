from __future__ import annotations

from typing import List

import asyncpg

from newsboard.core.errors import ApiError


async def fetch_users(db: asyncpg.Pool) -> List[dict]:
    rows = await db.fetch("SELECT username, name, avatar_url FROM users ORDER BY username")
    return [dict(r) for r in rows]


async def fetch_user(db: asyncpg.Pool, username: str) -> dict:
    row = await db.fetchrow(
        "SELECT username, name, avatar_url FROM users WHERE username = $1",
        username,
    )
    if not row:
        raise ApiError.not_found("User")
    return dict(row)
