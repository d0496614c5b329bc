"""
Search Client - 搜索索引客户端

通过 httpx.AsyncClient 访问 Elasticsearch HTTP API。
传输错误与非 2xx 响应统一转换为 ExternalServiceError。
"""

from typing import Any

import httpx

from exceptions import ExternalServiceError
from utils.logging import get_logger

logger = get_logger(__name__)

SERVICE_NAME = "elasticsearch"


class SearchClient:
    """Elasticsearch 客户端

    由应用持有（app.state），整个进程共享一个连接池。

    Example:
        client = SearchClient("http://localhost:9200", timeout=10.0)
        hits = await client.search("stores", {"query": {"match_all": {}}})
        await client.close()
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._client.post(path, json=body)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Search index returned %s for %s: %s",
                e.response.status_code,
                path,
                e.response.text[:500],
            )
            raise ExternalServiceError(
                SERVICE_NAME,
                f"Search index request failed with status {e.response.status_code}",
            ) from e
        except httpx.HTTPError as e:
            logger.error("Search index request to %s failed: %s", path, e)
            raise ExternalServiceError(SERVICE_NAME, "Search index is unavailable") from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Search index returned invalid JSON for %s: %s", path, response.text[:500])
            raise ExternalServiceError(
                SERVICE_NAME, "Search index returned an invalid response"
            ) from e
        if not isinstance(data, dict):
            logger.error("Search index returned a non-object body for %s", path)
            raise ExternalServiceError(SERVICE_NAME, "Search index returned an invalid response")
        return data

    async def search(self, index: str, query: dict[str, Any]) -> list[dict[str, Any]]:
        """执行搜索，返回命中文档的 _source 列表"""
        data = await self._post(f"/{index}/_search", query)
        return [hit.get("_source", {}) for hit in data.get("hits", {}).get("hits", [])]

    async def count(self, index: str, query: dict[str, Any]) -> int:
        """统计匹配查询的文档数"""
        data = await self._post(f"/{index}/_count", query)
        return int(data.get("count", 0))

    async def suggest(
        self,
        index: str,
        query: dict[str, Any],
        suggestion: str,
    ) -> list[str]:
        """执行补全建议，返回建议文本列表"""
        data = await self._post(f"/{index}/_search", query)
        texts: list[str] = []
        for entry in data.get("suggest", {}).get(suggestion, []):
            for option in entry.get("options", []):
                text = option.get("text")
                if text and text not in texts:
                    texts.append(text)
        return texts

    async def close(self) -> None:
        await self._client.aclose()


__all__ = ["SearchClient"]
