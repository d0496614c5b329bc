"""
Cache Utilities - 缓存工具

提供可注入的缓存后端：
- MemoryCacheBackend: 进程内缓存，带 TTL
- RedisCacheBackend: Redis 缓存，值以 JSON 存储

incr / set_if_unchanged 提供版本号保护的写入：读取数据源之前记下版本号，
失效方先递增版本号，迟到的写入因版本号不匹配而被丢弃。

缓存实例由应用持有（app.state），不使用模块级全局状态。
"""

from abc import ABC, abstractmethod
import asyncio
import json
import time
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import WatchError

from utils.logging import get_logger

logger = get_logger(__name__)


class CacheBackend(ABC):
    """缓存后端接口"""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """获取缓存值，不存在或已过期返回 None"""
        ...

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """设置缓存值，ttl 为 None 表示不过期"""
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """删除缓存"""
        ...

    @abstractmethod
    async def clear(self, prefix: str = "") -> int:
        """删除前缀匹配的全部缓存，返回删除数量"""
        ...

    @abstractmethod
    async def incr(self, key: str) -> int:
        """原子地把计数器加一并返回新值（计数器不过期）"""
        ...

    @abstractmethod
    async def set_if_unchanged(
        self,
        key: str,
        value: Any,
        ttl: int | None,
        version_key: str,
        expected: int,
    ) -> bool:
        """仅当 version_key 的计数器仍等于 expected 时写入，返回是否写入"""
        ...

    async def close(self) -> None:  # noqa: B027
        """释放资源"""


class MemoryCacheBackend(CacheBackend):
    """进程内缓存

    过期时间基于单调时钟；读写由一把异步锁保护。
    """

    def __init__(self) -> None:
        self._entries: dict[str, tuple[Any, float | None]] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Any | None:
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and expires_at <= time.monotonic():
                del self._entries[key]
                return None
            return value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        expires_at = time.monotonic() + ttl if ttl else None
        async with self._lock:
            self._entries[key] = (value, expires_at)

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._entries.pop(key, None)

    async def clear(self, prefix: str = "") -> int:
        async with self._lock:
            keys = [key for key in self._entries if key.startswith(prefix)]
            for key in keys:
                del self._entries[key]
            return len(keys)

    async def incr(self, key: str) -> int:
        async with self._lock:
            value = int(self._entries.get(key, (0, None))[0]) + 1
            self._entries[key] = (value, None)
            return value

    async def set_if_unchanged(
        self,
        key: str,
        value: Any,
        ttl: int | None,
        version_key: str,
        expected: int,
    ) -> bool:
        expires_at = time.monotonic() + ttl if ttl else None
        async with self._lock:
            if int(self._entries.get(version_key, (0, None))[0]) != expected:
                return False
            self._entries[key] = (value, expires_at)
            return True


class RedisCacheBackend(CacheBackend):
    """Redis 缓存后端"""

    def __init__(self, client: Redis, key_prefix: str = "") -> None:
        self.client = client
        self.key_prefix = key_prefix

    @classmethod
    def from_url(
        cls,
        url: str,
        password: str | None = None,
        key_prefix: str = "",
    ) -> "RedisCacheBackend":
        client = Redis.from_url(
            url,
            password=password,
            decode_responses=True,
            max_connections=50,
        )
        return cls(client, key_prefix)

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}:{key}" if self.key_prefix else key

    async def get(self, key: str) -> Any | None:
        value = await self.client.get(self._key(key))
        if value is None:
            return None
        return json.loads(value)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        payload = json.dumps(value, default=str, ensure_ascii=False)
        if ttl:
            await self.client.setex(self._key(key), ttl, payload)
        else:
            await self.client.set(self._key(key), payload)

    async def delete(self, key: str) -> None:
        await self.client.delete(self._key(key))

    async def clear(self, prefix: str = "") -> int:
        count = 0
        async for key in self.client.scan_iter(match=f"{self._key(prefix)}*"):
            await self.client.delete(key)
            count += 1
        return count

    async def incr(self, key: str) -> int:
        return await self.client.incr(self._key(key))

    async def set_if_unchanged(
        self,
        key: str,
        value: Any,
        ttl: int | None,
        version_key: str,
        expected: int,
    ) -> bool:
        payload = json.dumps(value, default=str, ensure_ascii=False)
        async with self.client.pipeline(transaction=True) as pipe:
            try:
                # WATCH 之后版本号被其他连接修改时 EXEC 失败
                await pipe.watch(self._key(version_key))
                current = await pipe.get(self._key(version_key))
                if int(current or 0) != expected:
                    await pipe.unwatch()
                    return False
                pipe.multi()
                if ttl:
                    pipe.setex(self._key(key), ttl, payload)
                else:
                    pipe.set(self._key(key), payload)
                await pipe.execute()
            except WatchError:
                return False
        return True

    async def close(self) -> None:
        await self.client.aclose()


def create_cache_backend(
    backend: str,
    redis_url: str | None = None,
    redis_password: str | None = None,
    key_prefix: str = "",
) -> CacheBackend:
    """按配置创建缓存后端

    Args:
        backend: "memory" 或 "redis"
        redis_url: Redis 地址（backend 为 redis 时必需）
        redis_password: Redis 密码
        key_prefix: 键前缀（仅 Redis 使用，隔离共享实例中的多个服务）
    """
    if backend == "redis":
        if not redis_url:
            raise ValueError("redis_url is required for the redis cache backend")
        logger.info("Using Redis cache backend: %s", redis_url)
        return RedisCacheBackend.from_url(redis_url, redis_password, key_prefix)
    if backend == "memory":
        logger.info("Using in-memory cache backend")
        return MemoryCacheBackend()
    raise ValueError(f"Unknown cache backend: {backend}")


__all__ = [
    "CacheBackend",
    "MemoryCacheBackend",
    "RedisCacheBackend",
    "create_cache_backend",
]
