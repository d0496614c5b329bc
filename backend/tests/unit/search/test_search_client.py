"""
搜索客户端与查询构建测试

使用 httpx.MockTransport 模拟搜索索引。
"""

import json

import httpx
import pytest

from domains.products.infrastructure.search import (
    AttributeFilter,
    ProductsSearchOptions,
    ProductsSearchRepository,
)
from domains.stores.infrastructure.search import StoresSearchOptions, StoresSearchRepository
from exceptions import ExternalServiceError
from libs.search import SearchClient


class RecordingHandler:
    """记录请求体并返回预置响应"""

    def __init__(self, payload: dict, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code
        self.requests: list[tuple[str, dict]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.url.path, json.loads(request.content)))
        return httpx.Response(self.status_code, json=self.payload)


def _client(handler) -> SearchClient:
    return SearchClient("http://search.test", transport=httpx.MockTransport(handler))


@pytest.mark.unit
class TestSearchClient:
    """搜索客户端测试"""

    async def test_search_returns_sources(self):
        """测试: 返回命中文档的 _source"""
        handler = RecordingHandler({"hits": {"hits": [{"_source": {"id": 1}}, {"_source": {"id": 2}}]}})
        client = _client(handler)

        hits = await client.search("stores", {"query": {"match_all": {}}})

        assert hits == [{"id": 1}, {"id": 2}]
        assert handler.requests[0][0] == "/stores/_search"
        await client.close()

    async def test_suggest_deduplicates(self):
        """测试: 补全建议去重且保持顺序"""
        handler = RecordingHandler(
            {
                "suggest": {
                    "name_suggest": [
                        {"options": [{"text": "phone"}, {"text": "phone case"}, {"text": "phone"}]}
                    ]
                }
            }
        )
        client = _client(handler)

        texts = await client.suggest("products", {}, "name_suggest")

        assert texts == ["phone", "phone case"]
        await client.close()

    async def test_error_status_is_external_service_error(self):
        """测试: 非 2xx 响应转换为外部服务错误"""
        client = _client(RecordingHandler({"error": "boom"}, status_code=500))
        with pytest.raises(ExternalServiceError) as exc_info:
            await client.search("stores", {})
        assert exc_info.value.service == "elasticsearch"
        await client.close()

    async def test_transport_error_is_external_service_error(self):
        """测试: 连接失败转换为外部服务错误"""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = _client(handler)
        with pytest.raises(ExternalServiceError):
            await client.search("stores", {})
        await client.close()

    async def test_invalid_json_is_external_service_error(self):
        """测试: 2xx 但响应体不是 JSON 时转换为外部服务错误"""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>gateway</html>")

        client = _client(handler)
        with pytest.raises(ExternalServiceError) as exc_info:
            await client.search("stores", {})
        assert exc_info.value.message == "Search index returned an invalid response"
        await client.close()

    async def test_non_object_json_is_external_service_error(self):
        """测试: 响应体是 JSON 数组时同样视为无效响应"""
        client = _client(RecordingHandler([1, 2, 3]))
        with pytest.raises(ExternalServiceError):
            await client.suggest("products", {}, "name_suggest")
        await client.close()


@pytest.mark.unit
class TestStoresSearchRepository:
    """店铺搜索测试"""

    async def test_find_by_name_returns_ids(self):
        """测试: 返回命中的店铺 ID，并按分页参数构建查询"""
        handler = RecordingHandler({"hits": {"hits": [{"_source": {"id": 3}}, {"_source": {}}]}})
        repo = StoresSearchRepository(_client(handler))

        ids = await repo.find_by_name("shop", count=5, offset=10)

        assert ids == [3]
        body = handler.requests[0][1]
        assert body["from"] == 10
        assert body["size"] == 5
        assert body["query"]["bool"]["must"]["nested"]["query"]["match"]["name.text"] == "shop"
        assert body["query"]["bool"]["filter"] == []

    async def test_auto_complete_applies_offset(self):
        """测试: 补全结果按 offset 截取"""
        handler = RecordingHandler(
            {"suggest": {"name_suggest": [{"options": [{"text": "a"}, {"text": "b"}, {"text": "c"}]}]}}
        )
        repo = StoresSearchRepository(_client(handler))

        assert await repo.auto_complete("x", count=1, offset=1) == ["b"]

    def test_options_to_filters(self):
        """测试: 国家为精确匹配，分类为 product_categories 上的嵌套查询"""
        filters = StoresSearchOptions(category_id=3, country="Russia").to_filters()

        assert {"term": {"country": "Russia"}} in filters
        nested = next(f["nested"] for f in filters if "nested" in f)
        assert nested["path"] == "product_categories"
        assert nested["query"] == {"term": {"product_categories.category_id": 3}}
        assert StoresSearchOptions().to_filters() == []

    async def test_count_uses_count_endpoint(self):
        """测试: 命中总数请求 _count 接口，查询体不带分页"""
        handler = RecordingHandler({"count": 42})
        repo = StoresSearchRepository(_client(handler))

        total = await repo.count("shop", StoresSearchOptions(country="Russia"))

        assert total == 42
        path, body = handler.requests[0]
        assert path == "/stores/_count"
        assert set(body) == {"query"}
        assert body["query"]["bool"]["filter"] == [{"term": {"country": "Russia"}}]


@pytest.mark.unit
class TestProductsSearch:
    """商品搜索测试"""

    def test_options_to_filters(self):
        """测试: 搜索选项转换为 filter 子句"""
        options = ProductsSearchOptions(
            category_id=3,
            price_min=1.0,
            price_max=9.0,
            attr_filters=[AttributeFilter(id=7, equal=["red"])],
        )

        filters = options.to_filters()

        assert {"term": {"category_id": 3}} in filters
        price = next(f for f in filters if f.get("nested", {}).get("path") == "variants")
        assert price["nested"]["query"]["range"]["variants.price"] == {"gte": 1.0, "lte": 9.0}
        attr = next(f for f in filters if f.get("nested", {}).get("path") == "variants.attrs")
        must = attr["nested"]["query"]["bool"]["must"]
        assert {"term": {"variants.attrs.attr_id": 7}} in must
        assert {"terms": {"variants.attrs.str_val": ["red"]}} in must

    def test_empty_options_have_no_filters(self):
        """测试: 空选项不产生 filter"""
        assert ProductsSearchOptions().to_filters() == []

    async def test_most_discount_sorts_by_nested_max(self):
        """测试: 折扣排序使用变体折扣的最大值"""
        handler = RecordingHandler({"hits": {"hits": []}})
        repo = ProductsSearchRepository(_client(handler))

        await repo.most_discount(count=10, offset=0)

        body = handler.requests[0][1]
        sort = body["sort"][0]["variants.discount"]
        assert sort["mode"] == "max"
        assert sort["order"] == "desc"

    async def test_most_viewed_sorts_by_views(self):
        """测试: 浏览量排序"""
        handler = RecordingHandler({"hits": {"hits": [{"_source": {"id": 1, "views": 9}}]}})
        repo = ProductsSearchRepository(_client(handler))

        hits = await repo.most_viewed(count=10, offset=0)

        assert hits == [{"id": 1, "views": 9}]
        assert handler.requests[0][1]["sort"] == [{"views": {"order": "desc"}}]
