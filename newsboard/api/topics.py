# newsboard/api/topics.py
import asyncpg
from fastapi import APIRouter, Depends

from newsboard.db.pool import get_db
from newsboard.models.schemas import TopicList
from newsboard.services import topics as svc

router = APIRouter(prefix="/api/topics", tags=["topics"])


@router.get("", response_model=TopicList, summary="Все темы")
async def api_get_topics(db: asyncpg.Pool = Depends(get_db)):
    topics = await svc.fetch_topics(db)
    return {"topics": topics}
