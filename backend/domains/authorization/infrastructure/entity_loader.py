"""
Entity Loader - 所有权链的单行加载

按资源类型把主键查询映射到对应 ORM 模型。
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from domains.authorization.domain.types import Resource
from domains.authorization.infrastructure.models.user_role import UserRole
from domains.catalog.infrastructure.models import (
    Attribute,
    Category,
    CategoryAttribute,
    CurrencyExchange,
)
from domains.products.infrastructure.models import (
    BaseProduct,
    CustomAttribute,
    ModeratorProductComment,
    Product,
    ProductAttribute,
)
from domains.stores.infrastructure.models import ModeratorStoreComment, Store

RESOURCE_MODELS: dict[Resource, type] = {
    Resource.STORES: Store,
    Resource.BASE_PRODUCTS: BaseProduct,
    Resource.PRODUCTS: Product,
    Resource.PRODUCT_ATTRS: ProductAttribute,
    Resource.CUSTOM_ATTRIBUTES: CustomAttribute,
    Resource.ATTRIBUTES: Attribute,
    Resource.CATEGORIES: Category,
    Resource.CATEGORY_ATTRS: CategoryAttribute,
    Resource.MODERATOR_PRODUCT_COMMENTS: ModeratorProductComment,
    Resource.MODERATOR_STORE_COMMENTS: ModeratorStoreComment,
    Resource.USER_ROLES: UserRole,
    Resource.CURRENCY_EXCHANGE: CurrencyExchange,
}


class SQLAlchemyEntityLoader:
    """基于 AsyncSession 的实体加载器

    直接按主键读取，不经过访问控制；数据库异常原样向上传播。
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def load(self, resource: Resource, entity_id: Any) -> Any | None:
        return await self.db.get(RESOURCE_MODELS[resource], entity_id)
