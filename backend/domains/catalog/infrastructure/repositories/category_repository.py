"""
Category Repository - 分类与分类属性仓储实现
"""

from typing import Any

from sqlalchemy import select

from domains.authorization.domain.types import Resource
from domains.catalog.infrastructure.models import Category, CategoryAttribute
from exceptions import NotFoundError
from libs.db.base_repository import AclRepositoryBase


class CategoryRepository(AclRepositoryBase[Category]):
    """分类仓储"""

    @property
    def model_class(self) -> type[Category]:
        return Category

    @property
    def resource(self) -> Resource:
        return Resource.CATEGORIES

    async def list_all(self) -> list[Category]:
        query = select(Category).order_by(Category.level, Category.id)
        return await self._fetch_all(query)

    async def list_children(self, parent_id: int) -> list[Category]:
        query = select(Category).where(Category.parent_id == parent_id).order_by(Category.id)
        return await self._fetch_all(query)

    async def create(
        self,
        name: list[dict[str, Any]],
        parent_id: int | None = None,
        level: int = 1,
        meta_field: str | None = None,
    ) -> Category:
        return await self._insert(
            Category(name=name, parent_id=parent_id, level=level, meta_field=meta_field)
        )

    async def update(self, category_id: int, **values: Any) -> Category:
        return await self._update(category_id, values)


class CategoryAttributeRepository(AclRepositoryBase[CategoryAttribute]):
    """分类属性仓储"""

    @property
    def model_class(self) -> type[CategoryAttribute]:
        return CategoryAttribute

    @property
    def resource(self) -> Resource:
        return Resource.CATEGORY_ATTRS

    async def list_by_category(self, category_id: int) -> list[CategoryAttribute]:
        query = (
            select(CategoryAttribute)
            .where(CategoryAttribute.category_id == category_id)
            .order_by(CategoryAttribute.id)
        )
        return await self._fetch_all(query)

    async def get_by_pair(self, category_id: int, attribute_id: int) -> CategoryAttribute | None:
        query = select(CategoryAttribute).where(
            CategoryAttribute.category_id == category_id,
            CategoryAttribute.attribute_id == attribute_id,
        )
        return await self._fetch_one(query)

    async def create(self, category_id: int, attribute_id: int) -> CategoryAttribute:
        return await self._insert(
            CategoryAttribute(category_id=category_id, attribute_id=attribute_id)
        )

    async def delete(self, category_id: int, attribute_id: int) -> CategoryAttribute:
        category_attr = await self.get_by_pair(category_id, attribute_id)
        if category_attr is None:
            raise NotFoundError("category_attrs", f"{category_id}/{attribute_id}")
        return await self._delete(category_attr)
