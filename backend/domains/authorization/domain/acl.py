"""
Access Control - 访问控制评估器

给定操作者、资源、动作以及（可选的）具体实体，判定允许或拒绝。

三种评估器：
- ApplicationAcl: 已认证用户，按角色的静态权限表评估
- UnauthorizedAcl: 匿名用户，仅允许公开规则
- SystemAcl: 内部操作（如为 ACL 本身查询角色），允许一切
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from domains.authorization.domain.ownership import OwnerResolver
from domains.authorization.domain.permissions import effective_scope, is_public
from domains.authorization.domain.types import Action, Resource, Role, Scope
from exceptions import AccessDeniedError, OwnershipResolutionError
from utils.logging import get_logger

logger = get_logger(__name__)


def _entity_id(entity: Any) -> Any:
    return getattr(entity, "id", None) if entity is not None else None


class Acl(ABC):
    """访问控制评估器接口"""

    user_id: int | None = None

    @abstractmethod
    async def check(
        self,
        resource: Resource,
        action: Action,
        entity: Any = None,
    ) -> None:
        """检查权限

        Raises:
            AccessDeniedError: 拒绝时抛出（包括所有权链解析失败）
        """
        ...

    async def is_allowed(
        self,
        resource: Resource,
        action: Action,
        entity: Any = None,
    ) -> bool:
        """检查权限，以布尔值返回"""
        try:
            await self.check(resource, action, entity)
        except AccessDeniedError:
            return False
        return True

    def _deny(self, resource: Resource, action: Action, entity: Any) -> AccessDeniedError:
        logger.debug(
            "ACL denied: user=%s resource=%s action=%s entity=%s",
            self.user_id,
            resource.value,
            action.value,
            _entity_id(entity),
        )
        return AccessDeniedError(resource.value, action.value, _entity_id(entity), self.user_id)


class ApplicationAcl(Acl):
    """已认证用户的评估器

    有效作用域取所有角色授权中最宽松者：
    - ALL: 直接允许
    - OWNED: 解析实体所有者，与 user_id 相等时允许
    - 以上均不满足时，公开规则仍然生效，否则拒绝
    """

    def __init__(
        self,
        roles: Iterable[Role],
        user_id: int,
        owner_resolver: OwnerResolver,
    ) -> None:
        self.roles = frozenset(roles)
        self.user_id = user_id
        self.owner_resolver = owner_resolver

    async def check(
        self,
        resource: Resource,
        action: Action,
        entity: Any = None,
    ) -> None:
        scope = effective_scope(self.roles, resource, action)

        if scope is Scope.ALL:
            return

        unresolved = False
        if scope is Scope.OWNED and entity is not None:
            owner_id = await self.owner_resolver.resolve_owner(resource, entity)
            if owner_id is not None and owner_id == self.user_id:
                return
            unresolved = owner_id is None

        if is_public(resource, action):
            return

        if unresolved:
            logger.debug(
                "Ownership chain unresolved: user=%s resource=%s entity=%s",
                self.user_id,
                resource.value,
                _entity_id(entity),
            )
            raise OwnershipResolutionError(
                resource.value, action.value, _entity_id(entity), self.user_id
            )
        raise self._deny(resource, action, entity)


class UnauthorizedAcl(Acl):
    """匿名用户评估器：仅允许公开规则"""

    async def check(
        self,
        resource: Resource,
        action: Action,
        entity: Any = None,
    ) -> None:
        if is_public(resource, action):
            return
        raise self._deny(resource, action, entity)


class SystemAcl(Acl):
    """系统评估器：无条件允许

    仅用于内部/引导操作，例如在常规评估器可用之前读取用户自己的角色。
    """

    async def check(
        self,
        resource: Resource,
        action: Action,
        entity: Any = None,
    ) -> None:
        return None


__all__ = ["Acl", "ApplicationAcl", "SystemAcl", "UnauthorizedAcl"]
