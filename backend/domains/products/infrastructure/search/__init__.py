"""Products Domain - Search Index Queries"""

from domains.products.infrastructure.search.products_search import (
    AttributeFilter,
    ProductsSearchOptions,
    ProductsSearchRepository,
)

__all__ = ["AttributeFilter", "ProductsSearchOptions", "ProductsSearchRepository"]
