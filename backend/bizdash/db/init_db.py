import asyncio
import logging

from bizdash.db.session import engine
from bizdash.db.base import Base

# 导入所有模型，确保表能被创建
from bizdash.models import Customer, Expense, Product, Sale  # noqa: F401

logger = logging.getLogger(__name__)


async def init_db(drop_existing: bool = False) -> None:
    """
    初始化数据库 - 创建所有表

    drop_existing=True 时先删除已有表（会清空数据）
    """
    async with engine.begin() as conn:
        if drop_existing:
            logger.warning("删除已有数据表")
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def ensure_tables_exist() -> None:
    """
    确保数据库表存在（应用启动时调用，不删除数据）
    """
    await init_db(drop_existing=False)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(init_db())
    logger.info("数据库初始化完成")
