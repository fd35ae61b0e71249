from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictStr, ValidationError

from newsboard.core.errors import ApiError

# PostgreSQL `integer` columns
PG_INT_MAX = 2_147_483_647
PG_INT_MIN = -2_147_483_648

SORTABLE_COLUMNS = ("created_at", "votes", "title", "topic", "author", "comment_count", "article_id")
SORT_ORDERS = ("asc", "desc")
DEFAULT_SORT_COLUMN = "created_at"
DEFAULT_ORDER = "desc"

_ID_LITERAL = re.compile(r"[0-9]+")


def is_valid_id(value: Any) -> bool:
    """True only for a clean positive integer identifier that fits an `integer` column."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return 0 < value <= PG_INT_MAX
    if not isinstance(value, str) or not _ID_LITERAL.fullmatch(value):
        return False
    return 0 < int(value) <= PG_INT_MAX


def is_allowed_sort_column(name: Any) -> bool:
    return isinstance(name, str) and name in SORTABLE_COLUMNS


def is_allowed_order(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and value.lower() in SORT_ORDERS


def resolve_order(value: Optional[str]) -> str:
    return (value or DEFAULT_ORDER).upper()


def parse_limit(value: Any) -> Optional[int]:
    if value is None:
        return None
    if not is_valid_id(value):
        raise ApiError.invalid_input()
    return int(value)


def parse_vote_delta(payload: Any) -> int:
    if not isinstance(payload, dict):
        raise ApiError.invalid_input()
    delta = payload.get("inc_votes")
    # bool is an int subclass; JSON true/false is not a vote delta
    if isinstance(delta, bool) or not isinstance(delta, int):
        raise ApiError.invalid_input()
    if not PG_INT_MIN <= delta <= PG_INT_MAX:
        raise ApiError.invalid_input()
    return delta


class CommentPayload(BaseModel):
    model_config = ConfigDict(strict=True)

    author: StrictStr = Field(validation_alias=AliasChoices("username", "author"))
    body: StrictStr


class ArticlePayload(BaseModel):
    model_config = ConfigDict(strict=True)

    title: StrictStr
    topic: StrictStr
    author: StrictStr = Field(validation_alias=AliasChoices("author", "username"))
    body: StrictStr


def _validate_post(model: type[BaseModel], payload: Any) -> Any:
    if not isinstance(payload, dict):
        raise ApiError.invalid_post_input()
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        if any(err["type"] == "missing" for err in exc.errors()):
            raise ApiError.invalid_post_input() from exc
        raise ApiError.invalid_post_data_type() from exc


def validate_comment_payload(payload: Any) -> CommentPayload:
    """Missing field -> InvalidPostInput, wrong type -> InvalidPostDataType."""
    return _validate_post(CommentPayload, payload)


def validate_article_payload(payload: Any) -> ArticlePayload:
    return _validate_post(ArticlePayload, payload)
