"""Authorization Domain - Repository Interfaces"""

from domains.authorization.domain.repositories.user_role_repository import (
    UserRoleEntity,
    UserRoleRepository,
)

__all__ = ["UserRoleEntity", "UserRoleRepository"]
