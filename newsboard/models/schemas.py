# newsboard/models/schemas.py
from pydantic import BaseModel, ConfigDict
from typing import Optional, List, Dict
from datetime import datetime


class Topic(BaseModel):
    slug: str
    description: str


class User(BaseModel):
    username: str
    name: str
    avatar_url: Optional[str] = None


# --- Статья ---
# comment_count приходит только из read-запросов (агрегат, в виде строки);
# PATCH возвращает строку без него
class Article(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    article_id: int
    title: str
    topic: str
    author: str
    body: str
    created_at: datetime
    votes: int
    comment_count: Optional[str] = None


class Comment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    comment_id: int
    body: str
    article_id: int
    author: str
    votes: int
    created_at: datetime


# --- Обёртки ответов ---
class TopicList(BaseModel):
    topics: List[Topic]


class UserList(BaseModel):
    users: List[User]


class UserOut(BaseModel):
    user: User


class ArticleList(BaseModel):
    articles: List[Article]


class ArticleOut(BaseModel):
    article: Article


class CommentList(BaseModel):
    comments: List[Comment]


class ErrorOut(BaseModel):
    msg: str


class EndpointList(BaseModel):
    endpoints: Dict[str, str]
