"""
Stores Search - 店铺搜索查询

构建店铺索引的查询体并返回命中的店铺 ID；行数据由仓储按 ACL 补全。

索引文档结构（由外部导入流程写入）::

    {
        "id": 7,
        "name": [{"lang": "en", "text": "..."}],
        "country": "Russia",
        "product_categories": [{"category_id": 3, "count": 12}],
        "suggest": {"input": ["..."]}
    }
"""

from typing import Any

from pydantic import BaseModel

from libs.search.client import SearchClient

STORES_INDEX = "stores"


class StoresSearchOptions(BaseModel):
    """店铺搜索选项"""

    category_id: int | None = None
    country: str | None = None

    def to_filters(self) -> list[dict[str, Any]]:
        filters: list[dict[str, Any]] = []
        if self.country:
            filters.append({"term": {"country": self.country}})
        if self.category_id is not None:
            filters.append(
                {
                    "nested": {
                        "path": "product_categories",
                        "query": {"term": {"product_categories.category_id": self.category_id}},
                    }
                }
            )
        return filters


def _name_query(name: str, options: StoresSearchOptions | None) -> dict[str, Any]:
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


class StoresSearchRepository:
    """店铺搜索"""

    def __init__(self, client: SearchClient) -> None:
        self.client = client

    async def find_documents(
        self,
        name: str,
        count: int,
        offset: int = 0,
        options: StoresSearchOptions | None = None,
    ) -> list[dict[str, Any]]:
        """按名称全文搜索，返回命中的索引文档"""
        query: dict[str, Any] = {
            "from": offset,
            "size": count,
            "query": _name_query(name, options),
        }
        return await self.client.search(STORES_INDEX, query)

    async def find_by_name(
        self,
        name: str,
        count: int,
        offset: int,
        options: StoresSearchOptions | None = None,
    ) -> list[int]:
        """按名称全文搜索，返回店铺 ID 列表"""
        hits = await self.find_documents(name, count, offset, options)
        return [hit["id"] for hit in hits if "id" in hit]

    async def count(self, name: str, options: StoresSearchOptions | None = None) -> int:
        """按名称搜索的命中总数"""
        return await self.client.count(STORES_INDEX, {"query": _name_query(name, options)})

    async def auto_complete(self, name: str, count: int, offset: int) -> list[str]:
        """店铺名称补全"""
        query: dict[str, Any] = {
            "suggest": {
                "name_suggest": {
                    "prefix": name,
                    "completion": {"field": "suggest", "size": offset + count},
                }
            }
        }
        names = await self.client.suggest(STORES_INDEX, query, "name_suggest")
        return names[offset : offset + count]
