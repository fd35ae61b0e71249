from __future__ import annotations

import logging
from typing import Any

import asyncpg

from newsboard.core.errors import ApiError, from_store_error
from newsboard.core.validation import is_valid_id, parse_vote_delta, validate_article_payload

logger = logging.getLogger("newsboard.articles")


async def update_article_by_id(db: asyncpg.Pool, article_id: Any, payload: Any) -> dict:
    """Add `inc_votes` to the stored vote count in one statement and return the row."""
    if not is_valid_id(article_id):
        raise ApiError.invalid_input()
    delta = parse_vote_delta(payload)

    sql = """
    UPDATE articles
    SET votes = votes + $1
    WHERE article_id = $2
    RETURNING article_id, title, topic, author, body, created_at, votes
    """
    try:
        row = await db.fetchrow(sql, delta, int(article_id))
    except asyncpg.DataError as exc:
        raise from_store_error(exc) from exc
    if not row:
        raise ApiError.not_found("Article")
    logger.info(
        "Article votes updated",
        extra={"event": "article_votes_updated", "article_id": row["article_id"], "delta": delta},
    )
    return dict(row)


async def create_article(db: asyncpg.Pool, payload: Any) -> dict:
    """Insert an article; the caller re-reads it through fetch_article for the full shape."""
    article = validate_article_payload(payload)
    sql = """
    INSERT INTO articles (title, topic, author, body)
    VALUES ($1, $2, $3, $4)
    RETURNING article_id, title, topic, author, body, created_at, votes
    """
    try:
        row = await db.fetchrow(sql, article.title, article.topic, article.author, article.body)
    except (asyncpg.IntegrityConstraintViolationError, asyncpg.DataError) as exc:
        raise from_store_error(exc) from exc
    logger.info(
        "Article created",
        extra={"event": "article_created", "article_id": row["article_id"], "topic": row["topic"]},
    )
    return dict(row)
