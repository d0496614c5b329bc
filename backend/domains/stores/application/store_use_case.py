"""
Store Use Case - 店铺用例

编排店铺相关的操作：CRUD、级联停用、按名称搜索与搜索筛选。
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from bootstrap.config import settings
from domains.catalog.application.category_use_case import build_category_tree, prune_category_tree
from domains.catalog.presentation.schemas import CategoryTreeNode
from domains.products.infrastructure.models import BaseProduct
from domains.stores.infrastructure.models import Store
from domains.stores.infrastructure.search import StoresSearchOptions, StoresSearchRepository
from domains.stores.presentation.schemas import StoreCreate, StoreUpdate
from exceptions import NotFoundError, ValidationError
from libs.db.repos_factory import ReposFactory
from libs.search.client import SearchClient
from utils.logging import get_logger

logger = get_logger(__name__)


class StoreUseCase:
    """店铺用例"""

    def __init__(
        self,
        db: AsyncSession,
        repos: ReposFactory,
        search_client: SearchClient | None = None,
    ) -> None:
        self.db = db
        self.store_repo = repos.stores()
        self.base_product_repo = repos.base_products()
        self.product_repo = repos.products()
        self.category_repo = repos.categories()
        self.search_repo = StoresSearchRepository(search_client) if search_client else None

    # =========================================================================
    # 查询
    # =========================================================================

    async def get(self, store_id: int) -> Store:
        store = await self.store_repo.get(store_id)
        if store is None:
            raise NotFoundError("stores", store_id)
        return store

    async def list_from(self, from_id: int, count: int) -> list[Store]:
        return await self.store_repo.list_from(from_id, count)

    async def get_by_user(self, user_id: int) -> Store:
        store = await self.store_repo.get_by_user(user_id)
        if store is None:
            raise NotFoundError("stores", f"user:{user_id}")
        return store

    async def list_products(
        self,
        store_id: int,
        skip: int = 0,
        count: int = 10,
        exclude_id: int | None = None,
    ) -> list[BaseProduct]:
        """列出店铺的基础商品"""
        await self.get(store_id)
        return await self.base_product_repo.list_by_store(store_id, exclude_id, skip, count)

    async def count_products(self, store_id: int) -> int:
        await self.get(store_id)
        return await self.base_product_repo.count_by_store(store_id)

    # =========================================================================
    # 写入
    # =========================================================================

    async def create(self, payload: StoreCreate) -> Store:
        """创建店铺

        Raises:
            ValidationError: slug 已被占用
        """
        if await self.store_repo.slug_exists(payload.slug):
            raise ValidationError("Store slug already exists", details={"field": "slug"})

        store = await self.store_repo.create(**payload.model_dump(mode="json"))
        await self.db.commit()
        logger.info("Created store %s for user %s", store.id, store.user_id)
        return store

    async def update(self, store_id: int, payload: StoreUpdate) -> Store:
        values = payload.changes()
        slug = values.get("slug")
        if slug and await self.store_repo.slug_exists(slug, exclude_id=store_id):
            raise ValidationError("Store slug already exists", details={"field": "slug"})

        store = await self.store_repo.update(store_id, **values)
        await self.db.commit()
        return store

    async def deactivate(self, store_id: int) -> Store:
        """停用店铺，并级联停用其基础商品及变体（同一事务）"""
        store = await self.store_repo.deactivate(store_id)
        base_products = await self.base_product_repo.deactivate_by_store(store_id)
        for base_product in base_products:
            await self.product_repo.deactivate_by_base_product(base_product.id)
        await self.db.commit()
        logger.info(
            "Deactivated store %s with %d base products", store_id, len(base_products)
        )
        return store

    # =========================================================================
    # 搜索
    # =========================================================================

    def _search(self) -> StoresSearchRepository:
        if self.search_repo is None:
            raise RuntimeError("Search client is not configured")
        return self.search_repo

    async def search_by_name(
        self,
        name: str,
        count: int,
        offset: int,
        options: StoresSearchOptions | None = None,
    ) -> list[Store]:
        """按名称搜索：先查索引取 ID，再经仓储补全（跳过不可见的行）"""
        store_ids = await self._search().find_by_name(name, count, offset, options)
        stores = await self.store_repo.get_many(store_ids)
        return [store for store in stores if store.is_active]

    async def auto_complete(self, name: str, count: int, offset: int) -> list[str]:
        return await self._search().auto_complete(name, count, offset)

    async def search_filters_count(
        self,
        name: str,
        options: StoresSearchOptions | None = None,
    ) -> int:
        return await self._search().count(name, options)

    async def _filter_hits(
        self,
        name: str,
        options: StoresSearchOptions | None,
    ) -> list[dict[str, Any]]:
        return await self._search().find_documents(
            name, settings.stores_search_max_count, 0, options
        )

    async def search_filters_country(
        self,
        name: str,
        options: StoresSearchOptions | None = None,
    ) -> list[str]:
        """命中店铺所在的国家（去重、排序）"""
        hits = await self._filter_hits(name, options)
        return sorted({hit["country"] for hit in hits if hit.get("country")})

    async def search_filters_category(
        self,
        name: str,
        options: StoresSearchOptions | None = None,
    ) -> list[CategoryTreeNode]:
        """命中店铺在售商品的分类构成的分类树（含祖先）"""
        hits = await self._filter_hits(name, options)
        category_ids = {
            entry["category_id"]
            for hit in hits
            for entry in hit.get("product_categories") or []
            if entry.get("category_id") is not None
        }
        tree = build_category_tree(await self.category_repo.list_all())
        return prune_category_tree(tree, category_ids)
