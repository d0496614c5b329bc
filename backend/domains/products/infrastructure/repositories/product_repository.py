"""
Product Repository - 商品变体仓储实现
"""

from typing import Any

from sqlalchemy import exists, select

from domains.authorization.domain.types import Action, Resource
from domains.products.infrastructure.models import BaseProduct, Product
from libs.db.base_repository import AclRepositoryBase


class ProductRepository(AclRepositoryBase[Product]):
    """商品变体仓储"""

    @property
    def model_class(self) -> type[Product]:
        return Product

    @property
    def resource(self) -> Resource:
        return Resource.PRODUCTS

    async def list_from(self, from_id: int, count: int) -> list[Product]:
        query = (
            select(Product)
            .where(Product.id >= from_id, Product.is_active.is_(True))
            .order_by(Product.id)
            .limit(count)
        )
        return await self._fetch_all(query)

    async def list_by_base_product(self, base_product_id: int) -> list[Product]:
        query = (
            select(Product)
            .where(
                Product.base_product_id == base_product_id,
                Product.is_active.is_(True),
            )
            .order_by(Product.id)
        )
        return await self._fetch_all(query)

    async def vendor_code_exists(
        self,
        store_id: int,
        vendor_code: str,
        exclude_id: int | None = None,
    ) -> bool:
        """店铺内是否已有相同货号的活跃变体"""
        condition = (
            (Product.vendor_code == vendor_code)
            & Product.is_active.is_(True)
            & (Product.base_product_id == BaseProduct.id)
            & (BaseProduct.store_id == store_id)
        )
        if exclude_id is not None:
            condition = condition & (Product.id != exclude_id)
        result = await self.db.execute(select(exists().where(condition)))
        return bool(result.scalar())

    async def create(self, **values: Any) -> Product:
        return await self._insert(Product(**values))

    async def update(self, product_id: int, **values: Any) -> Product:
        return await self._update(product_id, values)

    async def deactivate(self, product_id: int) -> Product:
        return await self._deactivate(product_id)

    async def _variants_for_write(self, base_product_id: int, action: Action) -> list[Product]:
        result = await self.db.execute(
            select(Product).where(
                Product.base_product_id == base_product_id,
                Product.is_active.is_(True),
            )
        )
        products = list(result.scalars().all())
        for product in products:
            await self._authorize(action, product)
        return products

    async def update_currency(self, base_product_id: int, currency: str) -> list[Product]:
        """改写基础商品下全部变体的币种"""
        products = await self._variants_for_write(base_product_id, Action.UPDATE)
        for product in products:
            product.currency = currency
        await self.db.flush()
        return products

    async def deactivate_by_base_product(self, base_product_id: int) -> list[Product]:
        products = await self._variants_for_write(base_product_id, Action.DELETE)
        for product in products:
            product.is_active = False
        await self.db.flush()
        return products
