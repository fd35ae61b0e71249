# newsboard/api/endpoints.py
from fastapi import APIRouter

from newsboard.models.schemas import EndpointList

router = APIRouter(prefix="/api", tags=["meta"])

ENDPOINTS = {
    "GET /api": "this list of endpoints",
    "GET /api/topics": "all topics",
    "GET /api/users": "all users",
    "GET /api/users/:username": "a single user",
    "GET /api/articles": "all articles; queries: sort_by, order, topic, limit",
    "POST /api/articles": "create an article from {title, topic, author, body}",
    "GET /api/articles/:article_id": "a single article with comment_count",
    "PATCH /api/articles/:article_id": "add {inc_votes} to the article's votes",
    "GET /api/articles/:article_id/comments": "comments for an article; queries: limit",
    "POST /api/articles/:article_id/comments": "add a comment from {username, body}",
}


@router.get("", response_model=EndpointList, summary="Описание API")
async def api_endpoints():
    return {"endpoints": ENDPOINTS}
