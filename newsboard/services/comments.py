from __future__ import annotations

import logging
from typing import Any, List

import asyncpg

from newsboard.core.errors import ApiError, from_store_error
from newsboard.core.validation import is_valid_id, parse_limit, validate_comment_payload

logger = logging.getLogger("newsboard.comments")


async def fetch_comments_by_article(db: asyncpg.Pool, article_id: Any, limit: Any = None) -> List[dict]:
    """
    Comments for an article, newest first.

    A missing article is a 404; an article without comments gives an empty list.
    """
    if not is_valid_id(article_id):
        raise ApiError.invalid_input()
    limit = parse_limit(limit)

    args: List[Any] = [int(article_id)]
    limit_sql = ""
    if limit is not None:
        limit_sql = "LIMIT $2"
        args.append(limit)
    sql = f"""
    SELECT comment_id, body, article_id, author, votes, created_at
    FROM comments
    WHERE article_id = $1
    ORDER BY created_at DESC, comment_id DESC
    {limit_sql}
    """
    async with db.acquire() as conn:
        exists = await conn.fetchval("SELECT 1 FROM articles WHERE article_id = $1", int(article_id))
        if exists is None:
            raise ApiError.not_found("Article")
        rows = await conn.fetch(sql, *args)
        return [dict(r) for r in rows]


async def create_comment(db: asyncpg.Pool, article_id: Any, payload: Any) -> dict:
    if not is_valid_id(article_id):
        raise ApiError.invalid_input()
    comment = validate_comment_payload(payload)

    sql = """
    INSERT INTO comments (body, article_id, author)
    VALUES ($1, $2, $3)
    RETURNING comment_id, body, article_id, author, votes, created_at
    """
    try:
        # unknown article / author surface as foreign key violations
        row = await db.fetchrow(sql, comment.body, int(article_id), comment.author)
    except (asyncpg.IntegrityConstraintViolationError, asyncpg.DataError) as exc:
        raise from_store_error(exc) from exc
    logger.info(
        "Comment created",
        extra={"event": "comment_created", "comment_id": row["comment_id"], "article_id": row["article_id"]},
    )
    return dict(row)
