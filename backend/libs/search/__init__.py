"""
Search Module

提供搜索索引（Elasticsearch）访问的基础设施。
"""

from libs.search.client import SearchClient

__all__ = ["SearchClient"]
