"""依赖注入（无认证）"""
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from bizdash.db.session import SessionLocal


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    获取数据库会话依赖
    """
    async with SessionLocal() as session:
        yield session
