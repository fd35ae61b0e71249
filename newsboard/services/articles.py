"""Façade that re-exports the article and comment data-access functions.

Routers import this module so tests can patch a single place.
"""

from .articles_read import fetch_all_articles, fetch_article  # noqa: F401
from .articles_write import create_article, update_article_by_id  # noqa: F401
from .comments import create_comment, fetch_comments_by_article  # noqa: F401

__all__ = [
    "fetch_all_articles",
    "fetch_article",
    "create_article",
    "update_article_by_id",
    "create_comment",
    "fetch_comments_by_article",
]
