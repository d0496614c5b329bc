"""Products Domain - Repository Implementations"""

from domains.products.infrastructure.repositories.base_product_repository import (
    BaseProductRepository,
)
from domains.products.infrastructure.repositories.moderator_product_comment_repository import (
    ModeratorProductCommentRepository,
)
from domains.products.infrastructure.repositories.product_attribute_repository import (
    CustomAttributeRepository,
    ProductAttributeRepository,
)
from domains.products.infrastructure.repositories.product_repository import ProductRepository

__all__ = [
    "BaseProductRepository",
    "CustomAttributeRepository",
    "ModeratorProductCommentRepository",
    "ProductAttributeRepository",
    "ProductRepository",
]
