"""Typed failures raised by the data-access layer and their HTTP translation.

Every failure that reaches a client goes through :func:`translate`, so status
codes and message text stay the same on every route.
"""

from __future__ import annotations

import enum
import re
from typing import Optional, Tuple

import asyncpg


class ErrorKind(str, enum.Enum):
    INVALID_INPUT = "invalid_input"
    INVALID_POST_INPUT = "invalid_post_input"
    INVALID_POST_DATA_TYPE = "invalid_post_data_type"
    NOT_FOUND = "not_found"
    UNHANDLED = "unhandled"


class ApiError(Exception):
    """A failure carrying its kind (and, for NOT_FOUND, the missing resource)."""

    def __init__(self, kind: ErrorKind, resource: Optional[str] = None) -> None:
        self.kind = kind
        self.resource = resource
        super().__init__(kind.value if resource is None else f"{kind.value}: {resource}")

    @classmethod
    def invalid_input(cls) -> "ApiError":
        return cls(ErrorKind.INVALID_INPUT)

    @classmethod
    def invalid_post_input(cls) -> "ApiError":
        return cls(ErrorKind.INVALID_POST_INPUT)

    @classmethod
    def invalid_post_data_type(cls) -> "ApiError":
        return cls(ErrorKind.INVALID_POST_DATA_TYPE)

    @classmethod
    def not_found(cls, resource: str) -> "ApiError":
        return cls(ErrorKind.NOT_FOUND, resource)

    @classmethod
    def unhandled(cls) -> "ApiError":
        return cls(ErrorKind.UNHANDLED)


_TRANSLATIONS = {
    ErrorKind.INVALID_INPUT: (400, "Invalid input"),
    ErrorKind.INVALID_POST_INPUT: (400, "Invalid post input"),
    ErrorKind.INVALID_POST_DATA_TYPE: (400, "Invalid post data type"),
    ErrorKind.NOT_FOUND: (404, "{resource} not found"),
    ErrorKind.UNHANDLED: (500, "Internal server error"),
}

PATH_NOT_FOUND = (404, "Path not found")


def translate(error: ApiError) -> Tuple[int, str]:
    status, message = _TRANSLATIONS[error.kind]
    if error.kind is ErrorKind.NOT_FOUND:
        message = message.format(resource=error.resource or "Resource")
    return status, message


# table (or referencing column) -> resource name used in "<X> not found"
_RESOURCES = {
    "articles": "Article",
    "article_id": "Article",
    "topics": "Topic",
    "topic": "Topic",
    "users": "User",
    "author": "User",
    "username": "User",
}

_DETAIL_TABLE = re.compile(r'table "(?P<table>\w+)"')


def _referenced_resource(exc: asyncpg.ForeignKeyViolationError) -> str:
    # detail: Key (article_id)=(1688) is not present in table "articles".
    match = _DETAIL_TABLE.search(getattr(exc, "detail", None) or "")
    if match and match.group("table") in _RESOURCES:
        return _RESOURCES[match.group("table")]
    # default constraint names look like comments_article_id_fkey
    constraint = getattr(exc, "constraint_name", None) or ""
    for column in ("article_id", "topic", "author", "username"):
        if f"_{column}_" in constraint:
            return _RESOURCES[column]
    return "Resource"


def from_store_error(exc: Exception) -> ApiError:
    """Reclassify an asyncpg error without leaking the store's message."""
    if isinstance(exc, asyncpg.ForeignKeyViolationError):
        return ApiError.not_found(_referenced_resource(exc))
    if isinstance(exc, asyncpg.NotNullViolationError):
        return ApiError.invalid_post_input()
    if isinstance(exc, asyncpg.DataError):
        return ApiError.invalid_input()
    return ApiError.unhandled()
