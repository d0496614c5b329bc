"""
Custom Attribute Use Case - 自定义属性用例
"""

from sqlalchemy.ext.asyncio import AsyncSession

from domains.products.infrastructure.models import CustomAttribute
from exceptions import NotFoundError
from libs.db.repos_factory import ReposFactory


class CustomAttributeUseCase:
    """基础商品的自定义属性"""

    def __init__(self, db: AsyncSession, repos: ReposFactory) -> None:
        self.db = db
        self.custom_attr_repo = repos.custom_attributes()
        self.base_product_repo = repos.base_products()
        self.attribute_repo = repos.attributes()

    async def list_by_base_product(self, base_product_id: int) -> list[CustomAttribute]:
        return await self.custom_attr_repo.list_by_base_product(base_product_id)

    async def create(self, base_product_id: int, attribute_id: int) -> CustomAttribute:
        if await self.base_product_repo.get(base_product_id) is None:
            raise NotFoundError("base_products", base_product_id)
        if await self.attribute_repo.get(attribute_id) is None:
            raise NotFoundError("attributes", attribute_id)
        custom_attr = await self.custom_attr_repo.create(base_product_id, attribute_id)
        await self.db.commit()
        return custom_attr

    async def delete(self, custom_attribute_id: int) -> CustomAttribute:
        custom_attr = await self.custom_attr_repo.delete(custom_attribute_id)
        await self.db.commit()
        return custom_attr
