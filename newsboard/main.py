from contextlib import asynccontextmanager

import logging

from fastapi import FastAPI

from newsboard import config
from newsboard.api import articles, endpoints, topics, users
from newsboard.api.error_handlers import register_error_handlers
from newsboard.db import pool as db_pool


@asynccontextmanager
async def lifespan(app: FastAPI):
    # one asyncpg pool per process, handed to routes through get_db
    app.state.db = await db_pool.connect_db()
    try:
        yield
    finally:
        await db_pool.close_db(app.state.db)
        app.state.db = None


app = FastAPI(
    lifespan=lifespan,
    root_path=config.ROOT_PATH,
)
register_error_handlers(app)
app.include_router(endpoints.router)
app.include_router(topics.router)
app.include_router(users.router)
app.include_router(articles.router)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


# Basic logging configuration (can be overridden by server config)
logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
