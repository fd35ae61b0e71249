# newsboard/api/articles.py
from typing import Any, Optional

import asyncpg
from fastapi import APIRouter, Body, Depends, Query

from newsboard.db.pool import get_db
from newsboard.models.schemas import ArticleList, ArticleOut, Comment, CommentList
from newsboard.services import articles as svc

router = APIRouter(prefix="/api/articles", tags=["articles"])

# Идентификаторы принимаются строкой: форму id проверяет слой валидации,
# чтобы любая кривая строка давала 400 "Invalid input".

# -----------------------
#  Списки и создание
# -----------------------

@router.get("", response_model=ArticleList, response_model_exclude_none=True,
            summary="Список статей с количеством комментариев")
async def api_list_articles(
    sort_by: Optional[str] = Query(None, description="created_at | votes | title | topic | author | comment_count | article_id"),
    order: Optional[str] = Query(None, description="asc | desc (по умолчанию desc)"),
    topic: Optional[str] = Query(None, description="slug темы"),
    limit: Optional[str] = Query(None),
    db: asyncpg.Pool = Depends(get_db),
):
    articles = await svc.fetch_all_articles(db, sort_by, order, topic, limit)
    return {"articles": articles}


@router.post("", response_model=ArticleOut, status_code=201,
             summary="Создать статью")
async def api_post_article(payload: Any = Body(None), db: asyncpg.Pool = Depends(get_db)):
    created = await svc.create_article(db, payload)
    # перечитываем, чтобы ответ имел ту же форму, что и GET (с comment_count)
    article = await svc.fetch_article(db, created["article_id"])
    return {"article": article}

# -----------------------
#  Одиночная статья
# -----------------------

@router.get("/{article_id}", response_model=ArticleOut,
            summary="Статья по id")
async def api_get_article(article_id: str, db: asyncpg.Pool = Depends(get_db)):
    article = await svc.fetch_article(db, article_id)
    return {"article": article}


@router.patch("/{article_id}", response_model=ArticleOut, response_model_exclude_none=True,
              summary="Изменить голоса статьи на inc_votes")
async def api_patch_article(article_id: str, payload: Any = Body(None), db: asyncpg.Pool = Depends(get_db)):
    article = await svc.update_article_by_id(db, article_id, payload)
    return {"article": article}

# -----------------------
#  Комментарии
# -----------------------

@router.get("/{article_id}/comments", response_model=CommentList,
            summary="Комментарии к статье")
async def api_get_comments(article_id: str, limit: Optional[str] = Query(None), db: asyncpg.Pool = Depends(get_db)):
    comments = await svc.fetch_comments_by_article(db, article_id, limit)
    return {"comments": comments}


@router.post("/{article_id}/comments", response_model=Comment, status_code=201,
             summary="Добавить комментарий (username, body)")
async def api_post_comment(article_id: str, payload: Any = Body(None), db: asyncpg.Pool = Depends(get_db)):
    return await svc.create_comment(db, article_id, payload)
