from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from bizdash.core.config import settings


def async_database_url(url: str) -> str:
    """sqlite:/// 地址转换为 aiosqlite 驱动地址"""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return url


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite 默认不校验外键，销售单的客户/商品引用依赖此项
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, **kwargs) -> AsyncEngine:
    """创建异步引擎（SQLite 自动开启外键约束）"""
    url = async_database_url(url)
    engine = create_async_engine(url, future=True, **kwargs)
    if url.startswith("sqlite"):
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_session_factory(bind: AsyncEngine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# 创建异步引擎
# 仅在开发环境打印SQL（通过 SQL_DEBUG 控制）
engine = build_engine(settings.DATABASE_URI, echo=settings.SQL_DEBUG)

# 创建异步会话
SessionLocal = build_session_factory(engine)
