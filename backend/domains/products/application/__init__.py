"""Products Domain - Application Layer"""

from domains.products.application.base_product_use_case import (
    BaseProductUseCase,
    aggregate_search_filters,
)
from domains.products.application.custom_attribute_use_case import CustomAttributeUseCase
from domains.products.application.price_converter import PriceConverter, recalc_currencies
from domains.products.application.product_use_case import ProductUseCase, has_duplicate_variant

__all__ = [
    "BaseProductUseCase",
    "CustomAttributeUseCase",
    "PriceConverter",
    "ProductUseCase",
    "aggregate_search_filters",
    "has_duplicate_variant",
    "recalc_currencies",
]
