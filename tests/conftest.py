from __future__ import annotations

from dataclasses import asdict
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from agency import phrase_pools
from core.config import env, runtime
from db.models import Base


@pytest.fixture(autouse=True)
def _reset_global_singletons():
    env_snapshot = {
        "db_path": env.db_path,
        "log_level": env.log_level,
        "default_language": env.default_language,
    }
    runtime_snapshot = asdict(runtime)

    yield

    env.db_path = env_snapshot["db_path"]
    env.log_level = env_snapshot["log_level"]
    env.default_language = env_snapshot["default_language"]

    for key, value in runtime_snapshot.items():
        setattr(runtime, key, value)

    phrase_pools._cached_pools.cache_clear()


@pytest.fixture
async def db_engine(tmp_path: Path):
    db_file = tmp_path / "test.sqlite3"
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_file}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(db_session_factory):
    async with db_session_factory() as session:
        yield session
