"""
Roles Cache - 角色缓存

按用户 ID 缓存角色集合。角色写入提交后必须同步调用 remove。

remove 会递增该用户的版本号。从数据库读取角色之前先取版本号，
写回时版本号已变化说明期间发生过撤销或授予，读到的结果不再写入缓存。
"""

from domains.authorization.domain.types import Role
from utils.cache import CacheBackend
from utils.logging import get_logger

logger = get_logger(__name__)


class RolesCache:
    """用户角色缓存"""

    def __init__(self, backend: CacheBackend, ttl: int | None = None) -> None:
        self.backend = backend
        self.ttl = ttl

    @staticmethod
    def _key(user_id: int) -> str:
        return f"roles:{user_id}"

    @staticmethod
    def _version_key(user_id: int) -> str:
        # 不在 roles: 前缀下，clear 不会重置版本号
        return f"roles-version:{user_id}"

    async def get(self, user_id: int) -> list[Role] | None:
        values = await self.backend.get(self._key(user_id))
        if values is None:
            return None
        return [Role(value) for value in values]

    async def version(self, user_id: int) -> int:
        """当前版本号，在读取数据库之前调用"""
        return int(await self.backend.get(self._version_key(user_id)) or 0)

    async def set(self, user_id: int, roles: list[Role], version: int | None = None) -> bool:
        """写入角色集合

        给定 version 时，仅当版本号未变化才写入。返回是否写入。
        """
        values = [role.value for role in roles]
        if version is None:
            await self.backend.set(self._key(user_id), values, self.ttl)
            return True

        stored = await self.backend.set_if_unchanged(
            self._key(user_id), values, self.ttl, self._version_key(user_id), version
        )
        if not stored:
            logger.debug("Discarding stale roles of user %s read at version %s", user_id, version)
        return stored

    async def remove(self, user_id: int) -> None:
        logger.debug("Evicting cached roles for user %s", user_id)
        await self.backend.incr(self._version_key(user_id))
        await self.backend.delete(self._key(user_id))

    async def clear(self) -> None:
        await self.backend.clear("roles:")
