"""
Category Use Case - 分类用例

分类树的读取走 CategoryCache；任何分类或分类属性写入提交后整体清除缓存。
"""

from collections import defaultdict

from sqlalchemy.ext.asyncio import AsyncSession

from domains.authorization.domain.acl import Acl
from domains.authorization.domain.types import Action, Resource
from domains.catalog.infrastructure.cache import CategoryCache
from domains.catalog.infrastructure.models import Category, CategoryAttribute
from domains.catalog.infrastructure.repositories import (
    AttributeRepository,
    CategoryAttributeRepository,
    CategoryRepository,
)
from domains.catalog.presentation.schemas import (
    AttributeResponse,
    CategoryCreate,
    CategoryTreeNode,
    CategoryUpdate,
)
from exceptions import ConflictError, NotFoundError, ValidationError
from utils.logging import get_logger

logger = get_logger(__name__)


def build_category_tree(categories: list[Category]) -> list[CategoryTreeNode]:
    """由扁平的分类列表构建分类树（父节点不可见的分类被丢弃）"""
    children: dict[int | None, list[Category]] = defaultdict(list)
    for category in categories:
        children[category.parent_id].append(category)

    def build(category: Category) -> CategoryTreeNode:
        return CategoryTreeNode(
            id=category.id,
            name=category.name,
            parent_id=category.parent_id,
            level=category.level,
            meta_field=category.meta_field,
            children=[build(child) for child in children.get(category.id, [])],
        )

    return [build(root) for root in children.get(None, [])]


def prune_category_tree(
    tree: list[CategoryTreeNode],
    category_ids: set[int],
) -> list[CategoryTreeNode]:
    """只保留给定分类及其祖先（搜索筛选用）"""
    pruned = []
    for node in tree:
        children = prune_category_tree(node.children, category_ids)
        if node.id in category_ids or children:
            pruned.append(node.model_copy(update={"children": children}))
    return pruned


class CategoryUseCase:
    """分类用例"""

    def __init__(
        self,
        db: AsyncSession,
        acl: Acl,
        category_cache: CategoryCache,
        category_repo: CategoryRepository | None = None,
        category_attr_repo: CategoryAttributeRepository | None = None,
        attribute_repo: AttributeRepository | None = None,
    ) -> None:
        self.db = db
        self.acl = acl
        self.category_cache = category_cache
        self.category_repo = category_repo or CategoryRepository(db, acl)
        self.category_attr_repo = category_attr_repo or CategoryAttributeRepository(db, acl)
        self.attribute_repo = attribute_repo or AttributeRepository(db, acl)

    async def get(self, category_id: int) -> Category:
        category = await self.category_repo.get(category_id)
        if category is None:
            raise NotFoundError("categories", category_id)
        return category

    async def get_all(self) -> list[CategoryTreeNode]:
        """获取整棵分类树（缓存优先）"""
        await self.acl.check(Resource.CATEGORIES, Action.READ)

        cached = await self.category_cache.get()
        if cached is not None:
            return cached

        tree = build_category_tree(await self.category_repo.list_all())
        await self.category_cache.set(tree)
        return tree

    async def create(self, payload: CategoryCreate) -> Category:
        """创建分类，层级由父分类推导"""
        level = 1
        if payload.parent_id is not None:
            parent = await self.get(payload.parent_id)
            level = parent.level + 1

        category = await self.category_repo.create(
            name=[t.model_dump() for t in payload.name],
            parent_id=payload.parent_id,
            level=level,
            meta_field=payload.meta_field,
        )
        await self._commit_and_clear()
        return category

    async def update(self, category_id: int, payload: CategoryUpdate) -> Category:
        """更新分类

        修改 parent_id 时拒绝形成环（包括经由祖先的环），并同步下移或上移整棵子树的 level。
        """
        old_level = (await self.get(category_id)).level
        values = payload.changes()
        if "parent_id" in values:
            values["level"] = await self._level_under(category_id, values["parent_id"])

        category = await self.category_repo.update(category_id, **values)
        if category.level != old_level:
            await self._cascade_levels(category)
        await self._commit_and_clear()
        return category

    async def _level_under(self, category_id: int, parent_id: int | None) -> int:
        """返回挂到 parent_id 下之后的层级；parent_id 为自身或后代时报错"""
        if parent_id is None:
            return 1

        parent = await self.get(parent_id)
        ancestor: Category | None = parent
        seen: set[int] = set()
        while ancestor is not None and ancestor.id not in seen:
            if ancestor.id == category_id:
                raise ValidationError(
                    "Category cannot be moved under itself or its descendant",
                    details={"field": "parent_id"},
                )
            seen.add(ancestor.id)
            if ancestor.parent_id is None:
                break
            ancestor = await self.category_repo.get(ancestor.parent_id)
        return parent.level + 1

    async def _cascade_levels(self, root: Category) -> None:
        children: dict[int | None, list[Category]] = defaultdict(list)
        for category in await self.category_repo.list_all():
            children[category.parent_id].append(category)

        stack = [(root.id, root.level)]
        while stack:
            parent_id, parent_level = stack.pop()
            for child in children.get(parent_id, []):
                if child.level != parent_level + 1:
                    await self.category_repo.update(child.id, level=parent_level + 1)
                stack.append((child.id, parent_level + 1))

    async def list_attributes(self, category_id: int) -> list[AttributeResponse]:
        """获取分类下的属性定义"""
        category_attrs = await self.category_attr_repo.list_by_category(category_id)
        attributes = await self.attribute_repo.get_many(
            [category_attr.attribute_id for category_attr in category_attrs]
        )
        return [AttributeResponse.model_validate(attribute) for attribute in attributes]

    async def add_attribute(self, category_id: int, attribute_id: int) -> CategoryAttribute:
        await self.get(category_id)
        if await self.attribute_repo.get(attribute_id) is None:
            raise NotFoundError("attributes", attribute_id)
        if await self.category_attr_repo.get_by_pair(category_id, attribute_id) is not None:
            raise ConflictError(
                f"Attribute {attribute_id} already belongs to category {category_id}",
                resource="category_attrs",
            )

        category_attr = await self.category_attr_repo.create(category_id, attribute_id)
        await self._commit_and_clear()
        return category_attr

    async def delete_attribute(self, category_id: int, attribute_id: int) -> CategoryAttribute:
        category_attr = await self.category_attr_repo.delete(category_id, attribute_id)
        await self._commit_and_clear()
        return category_attr

    async def _commit_and_clear(self) -> None:
        await self.db.commit()
        await self.category_cache.clear()
        logger.debug("Category cache cleared")
