"""
Base Product Use Case - 基础商品用例

编排基础商品相关的操作：CRUD、币种联动、级联停用、搜索与聚合筛选。
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from bootstrap.config import settings
from domains.catalog.application.category_use_case import build_category_tree, prune_category_tree
from domains.catalog.presentation.schemas import CategoryTreeNode
from domains.products.infrastructure.models import BaseProduct, Product
from domains.products.infrastructure.search import ProductsSearchOptions, ProductsSearchRepository
from domains.products.presentation.schemas import (
    AttributeFilterOption,
    AttrValue,
    BaseProductCreate,
    BaseProductResponse,
    BaseProductUpdate,
    BaseProductWithVariants,
    ProductResponse,
    RangeFilter,
    SearchFilters,
    VariantWithAttributes,
)
from exceptions import NotFoundError
from libs.db.repos_factory import ReposFactory
from libs.search.client import SearchClient
from utils.logging import get_logger

logger = get_logger(__name__)


class BaseProductUseCase:
    """基础商品用例"""

    def __init__(
        self,
        db: AsyncSession,
        repos: ReposFactory,
        search_client: SearchClient | None = None,
    ) -> None:
        self.db = db
        self.base_product_repo = repos.base_products()
        self.product_repo = repos.products()
        self.product_attr_repo = repos.product_attrs()
        self.store_repo = repos.stores()
        self.category_repo = repos.categories()
        self.search_repo = ProductsSearchRepository(search_client) if search_client else None

    # =========================================================================
    # 查询
    # =========================================================================

    async def get(self, base_product_id: int) -> BaseProduct:
        base_product = await self.base_product_repo.get(base_product_id)
        if base_product is None:
            raise NotFoundError("base_products", base_product_id)
        return base_product

    async def list_from(self, from_id: int, count: int) -> list[BaseProduct]:
        return await self.base_product_repo.list_from(from_id, count)

    async def get_with_variants(self, base_product_id: int) -> BaseProductWithVariants:
        """获取基础商品及其全部可见变体和属性取值"""
        base_product = await self.get(base_product_id)
        return await self._with_variants(base_product)

    async def list_with_variants(
        self,
        store_id: int,
        exclude_id: int | None = None,
    ) -> list[BaseProductWithVariants]:
        """店铺内的其他基础商品（含变体）"""
        base_products = await self.base_product_repo.list_by_store(store_id, exclude_id)
        return [await self._with_variants(base_product) for base_product in base_products]

    async def get_by_product(self, product_id: int) -> BaseProductWithVariants:
        """由变体反查基础商品，仅返回该变体"""
        product = await self.product_repo.get(product_id)
        if product is None:
            raise NotFoundError("products", product_id)
        base_product = await self.get(product.base_product_id)
        return BaseProductWithVariants(
            base_product=BaseProductResponse.model_validate(base_product),
            variants=[await self._variant(product)],
        )

    async def _variant(self, product: Product) -> VariantWithAttributes:
        attrs = await self.product_attr_repo.list_by_product(product.id)
        return VariantWithAttributes(
            product=ProductResponse.model_validate(product),
            attrs=[AttrValue.model_validate(attr) for attr in attrs],
        )

    async def _with_variants(
        self,
        base_product: BaseProduct,
        products: list[Product] | None = None,
    ) -> BaseProductWithVariants:
        if products is None:
            products = await self.product_repo.list_by_base_product(base_product.id)
        return BaseProductWithVariants(
            base_product=BaseProductResponse.model_validate(base_product),
            variants=[await self._variant(product) for product in products],
        )

    # =========================================================================
    # 写入
    # =========================================================================

    async def create(self, payload: BaseProductCreate) -> BaseProduct:
        """创建基础商品

        Raises:
            NotFoundError: 店铺或分类不存在（或不可见）
        """
        if await self.store_repo.get(payload.store_id) is None:
            raise NotFoundError("stores", payload.store_id)
        if await self.category_repo.get(payload.category_id) is None:
            raise NotFoundError("categories", payload.category_id)

        base_product = await self.base_product_repo.create(**payload.model_dump(mode="json"))
        await self.db.commit()
        return base_product

    async def update(self, base_product_id: int, payload: BaseProductUpdate) -> BaseProduct:
        """更新基础商品；币种变化时同步改写全部变体的币种"""
        values: dict[str, Any] = payload.changes()
        if values.get("category_id") is not None:
            if await self.category_repo.get(values["category_id"]) is None:
                raise NotFoundError("categories", values["category_id"])

        original = await self.get(base_product_id)
        previous_currency = original.currency

        base_product = await self.base_product_repo.update(base_product_id, **values)
        if values.get("currency") and values["currency"] != previous_currency:
            products = await self.product_repo.update_currency(base_product_id, values["currency"])
            logger.info(
                "Base product %s currency changed to %s, %d variants updated",
                base_product_id,
                values["currency"],
                len(products),
            )

        await self.db.commit()
        return base_product

    async def deactivate(self, base_product_id: int) -> BaseProduct:
        """停用基础商品，并级联停用其变体（同一事务）"""
        base_product = await self.base_product_repo.deactivate(base_product_id)
        await self.product_repo.deactivate_by_base_product(base_product_id)
        await self.db.commit()
        return base_product

    async def update_views(self, base_product_id: int) -> BaseProduct:
        base_product = await self.base_product_repo.increment_views(base_product_id)
        await self.db.commit()
        return base_product

    # =========================================================================
    # 搜索
    # =========================================================================

    def _search(self) -> ProductsSearchRepository:
        if self.search_repo is None:
            raise RuntimeError("Search client is not configured")
        return self.search_repo

    async def _hydrate(self, hits: list[dict[str, Any]]) -> list[BaseProduct]:
        """按命中顺序补全基础商品，跳过不可见或已停用的行"""
        ids = [hit["id"] for hit in hits if "id" in hit]
        base_products = await self.base_product_repo.get_many(ids)
        return [base_product for base_product in base_products if base_product.is_active]

    async def search_by_name(
        self,
        name: str,
        count: int,
        offset: int,
        options: ProductsSearchOptions | None = None,
    ) -> list[BaseProductWithVariants]:
        hits = await self._search().search_by_name(name, count, offset, options)
        return [await self._with_variants(bp) for bp in await self._hydrate(hits)]

    async def most_viewed(
        self,
        count: int,
        offset: int,
        options: ProductsSearchOptions | None = None,
    ) -> list[BaseProductWithVariants]:
        """浏览量最高的商品，每个基础商品只带第一个变体"""
        hits = await self._search().most_viewed(count, offset, options)
        results = []
        for base_product in await self._hydrate(hits):
            products = await self.product_repo.list_by_base_product(base_product.id)
            if products:
                results.append(await self._with_variants(base_product, products[:1]))
        return results

    async def most_discount(
        self,
        count: int,
        offset: int,
        options: ProductsSearchOptions | None = None,
    ) -> list[BaseProductWithVariants]:
        """折扣最大的商品，每个基础商品只带折扣最大的变体"""
        hits = await self._search().most_discount(count, offset, options)
        results = []
        for base_product in await self._hydrate(hits):
            products = [
                product
                for product in await self.product_repo.list_by_base_product(base_product.id)
                if product.discount is not None
            ]
            if products:
                best = max(products, key=lambda product: product.discount)
                results.append(await self._with_variants(base_product, [best]))
        return results

    async def auto_complete(self, name: str, count: int, offset: int) -> list[str]:
        return await self._search().auto_complete(name, count, offset)

    async def _filter_hits(
        self,
        name: str,
        options: ProductsSearchOptions | None = None,
    ) -> list[dict[str, Any]]:
        return await self._search().search_by_name(
            name, settings.products_search_max_count, 0, options
        )

    async def search_filters(self, name: str) -> SearchFilters:
        """汇总名称搜索结果上的分类、价格区间和属性筛选条件"""
        return aggregate_search_filters(await self._filter_hits(name))

    async def search_filters_count(
        self,
        name: str,
        options: ProductsSearchOptions | None = None,
    ) -> int:
        return await self._search().count(name, options)

    async def search_filters_price(
        self,
        name: str,
        options: ProductsSearchOptions | None = None,
    ) -> RangeFilter:
        filters = aggregate_search_filters(await self._filter_hits(name, options))
        return filters.price_filter or RangeFilter()

    async def search_filters_category(
        self,
        name: str,
        options: ProductsSearchOptions | None = None,
    ) -> list[CategoryTreeNode]:
        """命中商品所属分类构成的分类树（含祖先）"""
        filters = aggregate_search_filters(await self._filter_hits(name, options))
        tree = build_category_tree(await self.category_repo.list_all())
        return prune_category_tree(tree, set(filters.categories_ids))

    async def search_filters_attributes(
        self,
        name: str,
        options: ProductsSearchOptions | None = None,
    ) -> list[AttributeFilterOption]:
        filters = aggregate_search_filters(await self._filter_hits(name, options))
        return filters.attr_filters


def aggregate_search_filters(hits: list[dict[str, Any]]) -> SearchFilters:
    """由索引文档聚合筛选条件"""
    categories: set[int] = set()
    equal_attrs: dict[int, set[str]] = {}
    range_attrs: dict[int, RangeFilter] = {}
    price_filter = RangeFilter()

    for hit in hits:
        if hit.get("category_id") is not None:
            categories.add(hit["category_id"])
        for variant in hit.get("variants", []):
            if variant.get("price") is not None:
                price_filter.add_value(variant["price"])
            for attr in variant.get("attrs", []):
                attr_id = attr.get("attr_id")
                if attr_id is None:
                    continue
                if attr.get("str_val") is not None:
                    equal_attrs.setdefault(attr_id, set()).add(attr["str_val"])
                if attr.get("float_val") is not None:
                    range_attrs.setdefault(attr_id, RangeFilter()).add_value(attr["float_val"])

    attr_filters = [
        AttributeFilterOption(id=attr_id, equal=sorted(values))
        for attr_id, values in sorted(equal_attrs.items())
    ]
    attr_filters += [
        AttributeFilterOption(id=attr_id, range=value_range)
        for attr_id, value_range in sorted(range_attrs.items())
    ]
    return SearchFilters(
        categories_ids=sorted(categories),
        attr_filters=attr_filters,
        price_filter=price_filter,
    )
