import os

# 测试时只输出到控制台
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

from bizdash.core.deps import get_db
from bizdash.db.base import Base
from bizdash.db.session import build_engine, build_session_factory
from bizdash.main import app
from bizdash import models  # noqa: F401 - register models
from bizdash.services.cache import listing_cache


@pytest.fixture
def database_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'test.db'}"
    engine = create_engine(url)
    Base.metadata.create_all(engine)
    engine.dispose()
    return url


@pytest.fixture
def session_factory(database_url):
    # NullPool：TestClient 每次请求使用新的事件循环，连接不能复用
    engine = build_engine(database_url, poolclass=NullPool)
    return build_session_factory(engine)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture(autouse=True)
def clear_listing_cache():
    listing_cache.clear()
    yield
    listing_cache.clear()


@pytest.fixture
def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
