# newsboard/api/users.py
import asyncpg
from fastapi import APIRouter, Depends

from newsboard.db.pool import get_db
from newsboard.models.schemas import UserList, UserOut
from newsboard.services import users as svc

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=UserList, summary="Все пользователи")
async def api_get_users(db: asyncpg.Pool = Depends(get_db)):
    users = await svc.fetch_users(db)
    return {"users": users}


@router.get("/{username}", response_model=UserOut, summary="Пользователь по username")
async def api_get_user(username: str, db: asyncpg.Pool = Depends(get_db)):
    user = await svc.fetch_user(db, username)
    return {"user": user}
