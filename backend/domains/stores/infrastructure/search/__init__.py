"""Stores Domain - Search Index Queries"""

from domains.stores.infrastructure.search.stores_search import (
    StoresSearchOptions,
    StoresSearchRepository,
)

__all__ = ["StoresSearchOptions", "StoresSearchRepository"]
