from __future__ import annotations

from typing import List

import asyncpg


async def fetch_topics(db: asyncpg.Pool) -> List[dict]:
    rows = await db.fetch("SELECT slug, description FROM topics ORDER BY slug")
    return [dict(r) for r in rows]
