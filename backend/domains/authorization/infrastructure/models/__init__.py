"""Authorization Domain - ORM Models"""

from domains.authorization.infrastructure.models.user_role import UserRole

__all__ = ["UserRole"]
