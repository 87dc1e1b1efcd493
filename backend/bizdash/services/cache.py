"""
列表缓存
缓存整表读取结果（不可变快照），写操作成功后按 key 失效。
每个 key 带版本号：读取期间若发生失效，读取结果不会写回缓存。
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional, Tuple

from bizdash.core.config import settings

logger = logging.getLogger(__name__)

PRODUCT_LISTING = "products"


class ListingCache:
    """进程内列表快照缓存"""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._snapshots: Dict[str, Tuple[Any, ...]] = {}
        self._versions: Dict[str, int] = {}

    def version(self, key: str) -> int:
        return self._versions.get(key, 0)

    def get(self, key: str) -> Optional[Tuple[Any, ...]]:
        if not self.enabled:
            return None
        return self._snapshots.get(key)

    def set(self, key: str, items: Iterable[Any], version: Optional[int] = None) -> Tuple[Any, ...]:
        snapshot = tuple(items)
        if not self.enabled:
            return snapshot
        if version is not None and version != self.version(key):
            logger.debug(f"缓存 {key} 已失效，丢弃本次读取结果")
            return snapshot
        self._snapshots[key] = snapshot
        return snapshot

    async def get_or_load(
        self, key: str, loader: Callable[[], Awaitable[Iterable[Any]]]
    ) -> Tuple[Any, ...]:
        cached = self.get(key)
        if cached is not None:
            return cached
        version = self.version(key)
        items = await loader()
        return self.set(key, items, version=version)

    def invalidate(self, *keys: str) -> None:
        for key in keys:
            self._snapshots.pop(key, None)
            self._versions[key] = self.version(key) + 1
            logger.debug(f"缓存已失效: {key}")

    def clear(self) -> None:
        self.invalidate(*list(self._snapshots))
        self._snapshots.clear()


listing_cache = ListingCache(enabled=settings.LISTING_CACHE_ENABLED)
