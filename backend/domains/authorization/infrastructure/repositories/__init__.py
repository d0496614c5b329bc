"""Authorization Domain - Repository Implementations"""

from domains.authorization.infrastructure.repositories.user_role_repository import (
    SQLAlchemyUserRoleRepository,
)

__all__ = ["SQLAlchemyUserRoleRepository"]
