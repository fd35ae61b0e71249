from contextlib import asynccontextmanager

import pytest
import sys
from pathlib import Path

# Ensure repository root is on sys.path for `import newsboard`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from fastapi.testclient import TestClient


class FakePool:
    """In-memory stand-in for asyncpg.Pool.

    Responses are registered per method with a substring of the SQL; the
    first matching rule wins. A rule result may be a value, an exception to
    raise, or a callable taking the query arguments.
    """

    def __init__(self):
        self.calls = []
        self._rules = []

    def on(self, needle, method, result):
        self._rules.append((needle, method, result))
        return self

    async def _run(self, method, sql, args):
        self.calls.append((method, " ".join(sql.split()), args))
        for needle, m, result in self._rules:
            if m == method and needle in sql:
                if isinstance(result, BaseException):
                    raise result
                if callable(result):
                    return result(args)
                return result
        return [] if method == "fetch" else None

    async def fetch(self, sql, *args):
        return await self._run("fetch", sql, args)

    async def fetchrow(self, sql, *args):
        return await self._run("fetchrow", sql, args)

    async def fetchval(self, sql, *args):
        return await self._run("fetchval", sql, args)

    @asynccontextmanager
    async def acquire(self):
        yield self

    def sql(self, method=None):
        return [sql for m, sql, _ in self.calls if method is None or m == method]


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def fake_db():
    return FakePool()


@pytest.fixture()
def app(monkeypatch, fake_db):
    # Lifespan hands the fake pool to the routes instead of connecting to Postgres
    import newsboard.db.pool as db_pool

    async def _connect(*args, **kwargs):
        return fake_db

    async def _close(*args, **kwargs):
        return None

    monkeypatch.setattr(db_pool, "connect_db", _connect)
    monkeypatch.setattr(db_pool, "close_db", _close)

    from newsboard import main as main_mod

    return main_mod.app


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def lenient_client(app):
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
