"""
Products Search - 商品搜索查询

构建商品索引的查询体。命中文档只用于取得基础商品 ID 和聚合筛选条件，
行数据由仓储按 ACL 补全。

索引文档结构（由外部导入流程写入）::

    {
        "id": 1,
        "category_id": 3,
        "store_id": 7,
        "views": 120,
        "name": [{"lang": "en", "text": "..."}],
        "variants": [
            {"prod_id": 10, "price": 9.5, "discount": 0.1,
             "attrs": [{"attr_id": 1, "str_val": "red", "float_val": null}]}
        ],
        "suggest": {"input": ["..."]}
    }
"""

from typing import Any

from pydantic import BaseModel, Field

from libs.search.client import SearchClient

PRODUCTS_INDEX = "products"


class AttributeFilter(BaseModel):
    """属性筛选：等值集合或数值区间"""

    id: int
    equal: list[str] | None = None
    range: dict[str, float] | None = None


class ProductsSearchOptions(BaseModel):
    """商品搜索选项"""

    category_id: int | None = None
    store_id: int | None = None
    price_min: float | None = Field(default=None, ge=0)
    price_max: float | None = Field(default=None, ge=0)
    attr_filters: list[AttributeFilter] = Field(default_factory=list)

    def to_filters(self) -> list[dict[str, Any]]:
        """转换为 bool 查询的 filter 子句"""
        filters: list[dict[str, Any]] = []
        if self.category_id is not None:
            filters.append({"term": {"category_id": self.category_id}})
        if self.store_id is not None:
            filters.append({"term": {"store_id": self.store_id}})

        price_range: dict[str, float] = {}
        if self.price_min is not None:
            price_range["gte"] = self.price_min
        if self.price_max is not None:
            price_range["lte"] = self.price_max
        if price_range:
            filters.append(
                {
                    "nested": {
                        "path": "variants",
                        "query": {"range": {"variants.price": price_range}},
                    }
                }
            )

        for attr_filter in self.attr_filters:
            attr_query: list[dict[str, Any]] = [
                {"term": {"variants.attrs.attr_id": attr_filter.id}}
            ]
            if attr_filter.equal:
                attr_query.append({"terms": {"variants.attrs.str_val": attr_filter.equal}})
            if attr_filter.range:
                attr_query.append({"range": {"variants.attrs.float_val": attr_filter.range}})
            filters.append(
                {
                    "nested": {
                        "path": "variants.attrs",
                        "query": {"bool": {"must": attr_query}},
                    }
                }
            )
        return filters


def _name_query(name: str, options: ProductsSearchOptions | None) -> dict[str, Any]:
    return {
        "bool": {
            "must": {
                "nested": {
                    "path": "name",
                    "query": {"match": {"name.text": name}},
                }
            },
            "filter": options.to_filters() if options else [],
        }
    }


class ProductsSearchRepository:
    """商品搜索"""

    def __init__(self, client: SearchClient) -> None:
        self.client = client

    async def search_by_name(
        self,
        name: str,
        count: int,
        offset: int,
        options: ProductsSearchOptions | None = None,
    ) -> list[dict[str, Any]]:
        """按名称全文搜索，返回命中的索引文档"""
        query: dict[str, Any] = {
            "from": offset,
            "size": count,
            "query": _name_query(name, options),
        }
        return await self.client.search(PRODUCTS_INDEX, query)

    async def count(self, name: str, options: ProductsSearchOptions | None = None) -> int:
        """按名称搜索的命中总数"""
        return await self.client.count(PRODUCTS_INDEX, {"query": _name_query(name, options)})

    async def most_viewed(
        self,
        count: int,
        offset: int,
        options: ProductsSearchOptions | None = None,
    ) -> list[dict[str, Any]]:
        """按浏览量降序"""
        query: dict[str, Any] = {
            "from": offset,
            "size": count,
            "query": {"bool": {"filter": options.to_filters() if options else []}},
            "sort": [{"views": {"order": "desc"}}],
        }
        return await self.client.search(PRODUCTS_INDEX, query)

    async def most_discount(
        self,
        count: int,
        offset: int,
        options: ProductsSearchOptions | None = None,
    ) -> list[dict[str, Any]]:
        """按变体最大折扣降序，仅包含有折扣的商品"""
        filters = options.to_filters() if options else []
        filters.append(
            {
                "nested": {
                    "path": "variants",
                    "query": {"exists": {"field": "variants.discount"}},
                }
            }
        )
        query: dict[str, Any] = {
            "from": offset,
            "size": count,
            "query": {"bool": {"filter": filters}},
            "sort": [
                {
                    "variants.discount": {
                        "order": "desc",
                        "mode": "max",
                        "nested": {"path": "variants"},
                    }
                }
            ],
        }
        return await self.client.search(PRODUCTS_INDEX, query)

    async def auto_complete(self, name: str, count: int, offset: int) -> list[str]:
        """商品名称补全"""
        query: dict[str, Any] = {
            "suggest": {
                "name_suggest": {
                    "prefix": name,
                    "completion": {"field": "suggest", "size": offset + count},
                }
            }
        }
        names = await self.client.suggest(PRODUCTS_INDEX, query, "name_suggest")
        return names[offset : offset + count]
