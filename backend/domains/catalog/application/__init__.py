"""Catalog Domain - Application Layer"""

from domains.catalog.application.attribute_use_case import AttributeUseCase
from domains.catalog.application.category_use_case import (
    CategoryUseCase,
    build_category_tree,
    prune_category_tree,
)
from domains.catalog.application.currency_exchange_use_case import CurrencyExchangeUseCase

__all__ = [
    "AttributeUseCase",
    "CategoryUseCase",
    "CurrencyExchangeUseCase",
    "build_category_tree",
    "prune_category_tree",
]
