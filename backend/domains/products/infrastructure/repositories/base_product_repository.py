"""
Base Product Repository - 基础商品仓储实现
"""

from typing import Any

from sqlalchemy import select, update

from domains.authorization.domain.types import Action, Resource
from domains.products.infrastructure.models import BaseProduct
from exceptions import NotFoundError
from libs.db.base_repository import AclRepositoryBase


class BaseProductRepository(AclRepositoryBase[BaseProduct]):
    """基础商品仓储"""

    @property
    def model_class(self) -> type[BaseProduct]:
        return BaseProduct

    @property
    def resource(self) -> Resource:
        return Resource.BASE_PRODUCTS

    async def list_from(self, from_id: int, count: int) -> list[BaseProduct]:
        """从 from_id 开始按 ID 升序列出活跃基础商品"""
        query = (
            select(BaseProduct)
            .where(BaseProduct.id >= from_id, BaseProduct.is_active.is_(True))
            .order_by(BaseProduct.id)
            .limit(count)
        )
        return await self._fetch_all(query)

    async def list_by_store(
        self,
        store_id: int,
        exclude_id: int | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> list[BaseProduct]:
        """列出店铺的活跃基础商品，可排除某个基础商品"""
        query = select(BaseProduct).where(
            BaseProduct.store_id == store_id,
            BaseProduct.is_active.is_(True),
        )
        if exclude_id is not None:
            query = query.where(BaseProduct.id != exclude_id)
        query = query.order_by(BaseProduct.id).offset(skip).limit(limit)
        return await self._fetch_all(query)

    async def count_by_store(self, store_id: int) -> int:
        return await self.count(store_id=store_id, is_active=True)

    async def create(self, **values: Any) -> BaseProduct:
        return await self._insert(BaseProduct(**values))

    async def update(self, base_product_id: int, **values: Any) -> BaseProduct:
        return await self._update(base_product_id, values)

    async def increment_views(self, base_product_id: int) -> BaseProduct:
        """浏览量加一（只要求可读）"""
        base_product = await self.get(base_product_id)
        if base_product is None:
            raise NotFoundError(self.resource.value, base_product_id)
        await self.db.execute(
            update(BaseProduct)
            .where(BaseProduct.id == base_product_id)
            .values(views=BaseProduct.views + 1)
        )
        await self.db.refresh(base_product)
        return base_product

    async def deactivate(self, base_product_id: int) -> BaseProduct:
        return await self._deactivate(base_product_id)

    async def deactivate_by_store(self, store_id: int) -> list[BaseProduct]:
        """停用店铺下的全部基础商品"""
        result = await self.db.execute(
            select(BaseProduct).where(
                BaseProduct.store_id == store_id,
                BaseProduct.is_active.is_(True),
            )
        )
        base_products = list(result.scalars().all())
        for base_product in base_products:
            await self._authorize(Action.DELETE, base_product)
            base_product.is_active = False
        await self.db.flush()
        return base_products
