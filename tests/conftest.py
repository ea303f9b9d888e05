"""Shared fixtures: a throwaway SQLite database seeded with the demo catalog."""

import os
import tempfile
from pathlib import Path

# Settings are read once at import time, so configure the environment first
_DB_DIR = Path(tempfile.mkdtemp(prefix="po-api-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR / 'test.db'}"
os.environ["ENABLE_RATE_LIMITER"] = "false"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["EXPOSE_ERROR_DETAILS"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from main import app
from models.base import Base, SessionLocal, engine
from models.seed import seed_demo_data


@pytest_asyncio.fixture
async def database():
    """Fresh schema for every test; IDs start again from 1."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    # pooled connections belong to this test's event loop
    await engine.dispose()


@pytest_asyncio.fixture
async def seeded(database):
    """Demo data: products 1-6, order 1 = products 1,2,3 and order 2 = products 4,5,6."""
    async with SessionLocal() as db:
        await seed_demo_data(db)


@pytest_asyncio.fixture
async def client(seeded):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
