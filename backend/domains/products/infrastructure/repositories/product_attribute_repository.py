"""
Product Attribute Repositories - 商品属性取值与自定义属性仓储实现
"""

from collections.abc import Sequence

from sqlalchemy import select

from domains.authorization.domain.types import Action, Resource
from domains.products.infrastructure.models import CustomAttribute, ProductAttribute
from exceptions import NotFoundError
from libs.db.base_repository import AclRepositoryBase


class ProductAttributeRepository(AclRepositoryBase[ProductAttribute]):
    """商品属性取值仓储"""

    @property
    def model_class(self) -> type[ProductAttribute]:
        return ProductAttribute

    @property
    def resource(self) -> Resource:
        return Resource.PRODUCT_ATTRS

    async def list_by_product(self, product_id: int) -> list[ProductAttribute]:
        query = (
            select(ProductAttribute)
            .where(ProductAttribute.product_id == product_id)
            .order_by(ProductAttribute.id)
        )
        return await self._fetch_all(query)

    async def list_by_base_product(self, base_product_id: int) -> list[ProductAttribute]:
        query = (
            select(ProductAttribute)
            .where(ProductAttribute.base_product_id == base_product_id)
            .order_by(ProductAttribute.id)
        )
        return await self._fetch_all(query)

    async def create(
        self,
        product_id: int,
        base_product_id: int,
        attribute_id: int,
        value: str,
        value_type: str,
        meta_field: str | None = None,
    ) -> ProductAttribute:
        return await self._insert(
            ProductAttribute(
                product_id=product_id,
                base_product_id=base_product_id,
                attribute_id=attribute_id,
                value=value,
                value_type=value_type,
                meta_field=meta_field,
            )
        )

    async def update(
        self,
        product_id: int,
        attribute_id: int,
        value: str,
        meta_field: str | None = None,
    ) -> ProductAttribute:
        """按 (product_id, attribute_id) 更新取值"""
        query = select(ProductAttribute).where(
            ProductAttribute.product_id == product_id,
            ProductAttribute.attribute_id == attribute_id,
        )
        product_attr = await self._fetch_one(query)
        if product_attr is None:
            raise NotFoundError(self.resource.value, f"{product_id}/{attribute_id}")
        return await self._update(product_attr.id, {"value": value, "meta_field": meta_field})

    async def delete_all_for_product(self, product_id: int) -> list[ProductAttribute]:
        return await self._delete_where(ProductAttribute.product_id == product_id)

    async def delete_all_not_in_list(
        self,
        product_id: int,
        attribute_ids: Sequence[int],
    ) -> list[ProductAttribute]:
        """删除不在给定属性列表中的取值"""
        return await self._delete_where(
            (ProductAttribute.product_id == product_id)
            & ProductAttribute.attribute_id.not_in(attribute_ids)
        )

    async def _delete_where(self, condition) -> list[ProductAttribute]:
        result = await self.db.execute(select(ProductAttribute).where(condition))
        product_attrs = list(result.scalars().all())
        for product_attr in product_attrs:
            await self._authorize(Action.DELETE, product_attr)
        for product_attr in product_attrs:
            await self.db.delete(product_attr)
        await self.db.flush()
        return product_attrs


class CustomAttributeRepository(AclRepositoryBase[CustomAttribute]):
    """自定义属性仓储"""

    @property
    def model_class(self) -> type[CustomAttribute]:
        return CustomAttribute

    @property
    def resource(self) -> Resource:
        return Resource.CUSTOM_ATTRIBUTES

    async def list_by_base_product(self, base_product_id: int) -> list[CustomAttribute]:
        query = (
            select(CustomAttribute)
            .where(CustomAttribute.base_product_id == base_product_id)
            .order_by(CustomAttribute.id)
        )
        return await self._fetch_all(query)

    async def create(self, base_product_id: int, attribute_id: int) -> CustomAttribute:
        return await self._insert(
            CustomAttribute(base_product_id=base_product_id, attribute_id=attribute_id)
        )

    async def delete(self, custom_attribute_id: int) -> CustomAttribute:
        custom_attribute = await self.get(custom_attribute_id)
        if custom_attribute is None:
            raise NotFoundError(self.resource.value, custom_attribute_id)
        return await self._delete(custom_attribute)
