"""
Repos Factory - 请求级 Repository 工厂

以同一个会话和同一个 Acl 构建一次请求所需的全部 Repository，
保证同一请求内的所有权解析共享记忆化结果。
"""

from sqlalchemy.ext.asyncio import AsyncSession

from domains.authorization.domain.acl import Acl
from domains.authorization.infrastructure.repositories import SQLAlchemyUserRoleRepository
from domains.catalog.infrastructure.repositories import (
    AttributeRepository,
    CategoryAttributeRepository,
    CategoryRepository,
)
from domains.products.infrastructure.repositories import (
    BaseProductRepository,
    CustomAttributeRepository,
    ModeratorProductCommentRepository,
    ProductAttributeRepository,
    ProductRepository,
)
from domains.stores.infrastructure.repositories import (
    ModeratorStoreCommentRepository,
    StoreRepository,
)


class ReposFactory:
    """Repository 工厂"""

    def __init__(self, db: AsyncSession, acl: Acl) -> None:
        self.db = db
        self.acl = acl

    def stores(self) -> StoreRepository:
        return StoreRepository(self.db, self.acl)

    def base_products(self) -> BaseProductRepository:
        return BaseProductRepository(self.db, self.acl)

    def products(self) -> ProductRepository:
        return ProductRepository(self.db, self.acl)

    def product_attrs(self) -> ProductAttributeRepository:
        return ProductAttributeRepository(self.db, self.acl)

    def custom_attributes(self) -> CustomAttributeRepository:
        return CustomAttributeRepository(self.db, self.acl)

    def attributes(self) -> AttributeRepository:
        return AttributeRepository(self.db, self.acl)

    def categories(self) -> CategoryRepository:
        return CategoryRepository(self.db, self.acl)

    def category_attrs(self) -> CategoryAttributeRepository:
        return CategoryAttributeRepository(self.db, self.acl)

    def moderator_product_comments(self) -> ModeratorProductCommentRepository:
        return ModeratorProductCommentRepository(self.db, self.acl)

    def moderator_store_comments(self) -> ModeratorStoreCommentRepository:
        return ModeratorStoreCommentRepository(self.db, self.acl)

    def user_roles(self) -> SQLAlchemyUserRoleRepository:
        return SQLAlchemyUserRoleRepository(self.db, self.acl)


__all__ = ["ReposFactory"]
