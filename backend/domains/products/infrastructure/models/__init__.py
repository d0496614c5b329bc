"""Products Domain - ORM Models"""

from domains.products.infrastructure.models.base_product import BaseProduct
from domains.products.infrastructure.models.moderator_product_comment import (
    ModeratorProductComment,
)
from domains.products.infrastructure.models.product import Product
from domains.products.infrastructure.models.product_attribute import (
    CustomAttribute,
    ProductAttribute,
)

__all__ = [
    "BaseProduct",
    "CustomAttribute",
    "ModeratorProductComment",
    "Product",
    "ProductAttribute",
]
