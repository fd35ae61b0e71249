from __future__ import annotations

from typing import Any, List, Optional

import asyncpg

from newsboard.core.errors import ApiError
from newsboard.core.validation import (
    DEFAULT_SORT_COLUMN,
    is_allowed_order,
    is_allowed_sort_column,
    is_valid_id,
    parse_limit,
    resolve_order,
)

# allow-listed sort key -> SQL expression; comment_count sorts by the numeric aggregate
_SORT_EXPRESSIONS = {
    "created_at": "a.created_at",
    "votes": "a.votes",
    "title": "a.title",
    "topic": "a.topic",
    "author": "a.author",
    "comment_count": "COUNT(c.comment_id)",
    "article_id": "a.article_id",
}

_ARTICLE_COLUMNS = """
      a.article_id,
      a.title,
      a.topic,
      a.author,
      a.body,
      a.created_at,
      a.votes,
      COUNT(c.comment_id)::text AS comment_count
"""


async def fetch_all_articles(
    db: asyncpg.Pool,
    sort_by: Optional[str] = None,
    order: Optional[str] = None,
    topic: Optional[str] = None,
    limit: Any = None,
) -> List[dict]:
    """
    Articles with their comment counts, newest first unless `sort_by`/`order` say otherwise.

    Filtering by a topic that does not exist is a 404, not an empty list.
    """
    sort_by = sort_by or DEFAULT_SORT_COLUMN
    if not is_allowed_sort_column(sort_by) or not is_allowed_order(order):
        raise ApiError.invalid_input()
    direction = resolve_order(order)
    limit = parse_limit(limit)

    filters = []
    args: List[Any] = []
    if topic is not None:
        filters.append("a.topic = $%d" % (len(args) + 1))
        args.append(topic)
    where_sql = ("WHERE " + " AND ".join(filters)) if filters else ""
    limit_sql = ""
    if limit is not None:
        limit_sql = "LIMIT $%d" % (len(args) + 1)
        args.append(limit)

    sql = f"""
    SELECT {_ARTICLE_COLUMNS}
    FROM articles a
    LEFT JOIN comments c ON c.article_id = a.article_id
    {where_sql}
    GROUP BY a.article_id
    ORDER BY {_SORT_EXPRESSIONS[sort_by]} {direction}, a.article_id {direction}
    {limit_sql}
    """
    async with db.acquire() as conn:
        if topic is not None:
            exists = await conn.fetchval("SELECT 1 FROM topics WHERE slug = $1", topic)
            if exists is None:
                raise ApiError.not_found("Topic")
        rows = await conn.fetch(sql, *args)
        return [dict(r) for r in rows]


async def fetch_article(db: asyncpg.Pool, article_id: Any) -> dict:
    if not is_valid_id(article_id):
        raise ApiError.invalid_input()
    sql = f"""
    SELECT {_ARTICLE_COLUMNS}
    FROM articles a
    LEFT JOIN comments c ON c.article_id = a.article_id
    WHERE a.article_id = $1
    GROUP BY a.article_id
    """
    row = await db.fetchrow(sql, int(article_id))
    if not row:
        raise ApiError.not_found("Article")
    return dict(row)
