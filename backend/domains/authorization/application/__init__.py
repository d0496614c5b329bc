"""Authorization Domain - Application Layer"""

from domains.authorization.application.acl_factory import AclFactory
from domains.authorization.application.user_role_use_case import UserRoleUseCase

__all__ = ["AclFactory", "UserRoleUseCase"]
