"""Catalog Domain - Repository Implementations"""

from domains.catalog.infrastructure.repositories.attribute_repository import AttributeRepository
from domains.catalog.infrastructure.repositories.category_repository import (
    CategoryAttributeRepository,
    CategoryRepository,
)
from domains.catalog.infrastructure.repositories.currency_exchange_repository import (
    CurrencyExchangeRepository,
)

__all__ = [
    "AttributeRepository",
    "CategoryAttributeRepository",
    "CategoryRepository",
    "CurrencyExchangeRepository",
]
