"""
Ownership Chains - 所有权链

声明式的所有权链表：资源 -> 有序外键跳转列表 -> 终端所有者字段。
解析算法只实现一次，由数据驱动，不在各实体中重复编写。
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Protocol

from domains.authorization.domain.types import Resource


@dataclass(frozen=True)
class OwnershipHop:
    """一次外键跳转：读取当前实体的 foreign_key，加载 target 资源的对应记录"""

    foreign_key: str
    target: Resource


@dataclass(frozen=True)
class OwnershipChain:
    """从实体到所有者用户 ID 的路径"""

    hops: tuple[OwnershipHop, ...] = ()
    owner_field: str = "user_id"


_TO_STORE = (OwnershipHop("store_id", Resource.STORES),)
_TO_BASE_PRODUCT = (OwnershipHop("base_product_id", Resource.BASE_PRODUCTS), *_TO_STORE)
_TO_PRODUCT = (OwnershipHop("product_id", Resource.PRODUCTS), *_TO_BASE_PRODUCT)

OWNERSHIP_CHAINS: MappingProxyType = MappingProxyType(
    {
        Resource.STORES: OwnershipChain(),
        Resource.BASE_PRODUCTS: OwnershipChain(_TO_STORE),
        Resource.PRODUCTS: OwnershipChain(_TO_BASE_PRODUCT),
        Resource.PRODUCT_ATTRS: OwnershipChain(_TO_PRODUCT),
        Resource.CUSTOM_ATTRIBUTES: OwnershipChain(_TO_BASE_PRODUCT),
        Resource.MODERATOR_PRODUCT_COMMENTS: OwnershipChain(_TO_BASE_PRODUCT),
        Resource.MODERATOR_STORE_COMMENTS: OwnershipChain(_TO_STORE),
        Resource.USER_ROLES: OwnershipChain(),
    }
)


class EntityLoader(Protocol):
    """按主键加载单条记录"""

    async def load(self, resource: Resource, entity_id: Any) -> Any | None: ...


class OwnerResolver:
    """所有权解析器

    沿所有权链逐跳加载父记录，返回终端记录上的所有者 ID。
    任一跳失败（外键为空或记录不存在）则返回 None，没有默认所有者。
    同一个解析器（即同一个请求）内对相同记录的加载会被记忆。
    """

    def __init__(self, loader: EntityLoader) -> None:
        self.loader = loader
        self._loaded: dict[tuple[Resource, Any], Any | None] = {}

    async def _load(self, resource: Resource, entity_id: Any) -> Any | None:
        key = (resource, entity_id)
        if key not in self._loaded:
            self._loaded[key] = await self.loader.load(resource, entity_id)
        return self._loaded[key]

    async def resolve_owner(self, resource: Resource, entity: Any) -> int | None:
        """解析实体的所有者用户 ID

        Args:
            resource: 实体的资源类型
            entity: 具体实体（ORM 对象或新建实体的载荷）

        Returns:
            所有者用户 ID，无法解析时返回 None
        """
        chain = OWNERSHIP_CHAINS.get(resource)
        if chain is None or entity is None:
            return None

        current = entity
        for hop in chain.hops:
            foreign_id = getattr(current, hop.foreign_key, None)
            if foreign_id is None:
                return None
            current = await self._load(hop.target, foreign_id)
            if current is None:
                return None

        return getattr(current, chain.owner_field, None)


__all__ = [
    "OWNERSHIP_CHAINS",
    "EntityLoader",
    "OwnerResolver",
    "OwnershipChain",
    "OwnershipHop",
]
