"""
Authorization Domain - 授权领域

包含领域模型、值对象和业务规则：
- types: 角色、资源、动作、作用域
- permissions: 静态权限表
- ownership: 声明式所有权链
- acl: 访问控制评估器
"""

from domains.authorization.domain.acl import Acl, ApplicationAcl, SystemAcl, UnauthorizedAcl
from domains.authorization.domain.ownership import (
    OWNERSHIP_CHAINS,
    EntityLoader,
    OwnerResolver,
    OwnershipChain,
    OwnershipHop,
)
from domains.authorization.domain.permissions import (
    PERMISSIONS,
    PUBLIC_RULES,
    effective_scope,
    is_public,
    scope_for,
)
from domains.authorization.domain.types import Action, Resource, Role, Scope

__all__ = [
    "OWNERSHIP_CHAINS",
    "PERMISSIONS",
    "PUBLIC_RULES",
    "Acl",
    "Action",
    "ApplicationAcl",
    "EntityLoader",
    "OwnerResolver",
    "OwnershipChain",
    "OwnershipHop",
    "Resource",
    "Role",
    "Scope",
    "SystemAcl",
    "UnauthorizedAcl",
    "effective_scope",
    "is_public",
    "scope_for",
]
