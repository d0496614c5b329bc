"""
Catalog Caches - 参考数据缓存

- CategoryCache: 整棵分类树，任何分类或分类属性写入后整体清除
- AttributeCache: 按 ID 缓存属性，更新时覆盖、删除时移除

缓存值为 JSON 兼容的字典，Redis 与进程内后端通用。
"""

from domains.catalog.presentation.schemas import AttributeResponse, CategoryTreeNode
from utils.cache import CacheBackend


class CategoryCache:
    """分类树缓存"""

    KEY = "categories:tree"

    def __init__(self, backend: CacheBackend, ttl: int | None = None) -> None:
        self.backend = backend
        self.ttl = ttl

    async def get(self) -> list[CategoryTreeNode] | None:
        payload = await self.backend.get(self.KEY)
        if payload is None:
            return None
        return [CategoryTreeNode.model_validate(node) for node in payload]

    async def set(self, tree: list[CategoryTreeNode]) -> None:
        await self.backend.set(self.KEY, [node.model_dump(mode="json") for node in tree], self.ttl)

    async def clear(self) -> None:
        await self.backend.delete(self.KEY)


class AttributeCache:
    """属性缓存"""

    def __init__(self, backend: CacheBackend, ttl: int | None = None) -> None:
        self.backend = backend
        self.ttl = ttl

    @staticmethod
    def _key(attribute_id: int) -> str:
        return f"attributes:{attribute_id}"

    async def get(self, attribute_id: int) -> AttributeResponse | None:
        payload = await self.backend.get(self._key(attribute_id))
        if payload is None:
            return None
        return AttributeResponse.model_validate(payload)

    async def set(self, attribute: AttributeResponse) -> None:
        await self.backend.set(self._key(attribute.id), attribute.model_dump(mode="json"), self.ttl)

    async def remove(self, attribute_id: int) -> None:
        await self.backend.delete(self._key(attribute_id))

    async def clear(self) -> None:
        await self.backend.clear("attributes:")
