"""
Store Repository - 店铺仓储实现
"""

from typing import Any

from sqlalchemy import exists, select

from domains.authorization.domain.types import Resource
from domains.stores.infrastructure.models import Store
from libs.db.base_repository import AclRepositoryBase


class StoreRepository(AclRepositoryBase[Store]):
    """店铺仓储

    店铺是所有权链的终端，OWNED 检查直接比较 user_id。
    """

    @property
    def model_class(self) -> type[Store]:
        return Store

    @property
    def resource(self) -> Resource:
        return Resource.STORES

    async def list_from(self, from_id: int, count: int) -> list[Store]:
        """从 from_id 开始按 ID 升序列出活跃店铺"""
        query = (
            select(Store)
            .where(Store.id >= from_id, Store.is_active.is_(True))
            .order_by(Store.id)
            .limit(count)
        )
        return await self._fetch_all(query)

    async def get_by_user(self, user_id: int) -> Store | None:
        query = (
            select(Store)
            .where(Store.user_id == user_id, Store.is_active.is_(True))
            .order_by(Store.id)
        )
        return await self._fetch_one(query)

    async def slug_exists(self, slug: str, exclude_id: int | None = None) -> bool:
        condition = Store.slug == slug
        if exclude_id is not None:
            condition = condition & (Store.id != exclude_id)
        result = await self.db.execute(select(exists().where(condition)))
        return bool(result.scalar())

    async def create(self, user_id: int, **values: Any) -> Store:
        return await self._insert(Store(user_id=user_id, **values))

    async def update(self, store_id: int, **values: Any) -> Store:
        return await self._update(store_id, values)

    async def deactivate(self, store_id: int) -> Store:
        return await self._deactivate(store_id)
