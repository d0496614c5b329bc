"""Catalog Domain - ORM Models"""

from domains.catalog.infrastructure.models.attribute import Attribute
from domains.catalog.infrastructure.models.category import Category, CategoryAttribute
from domains.catalog.infrastructure.models.currency_exchange import CurrencyExchange, ExchangeRates

__all__ = ["Attribute", "Category", "CategoryAttribute", "CurrencyExchange", "ExchangeRates"]
