"""
Permission Table - 静态权限表

(Role, Resource, Action) -> Scope 的不可变映射，进程启动时构建一次。
未出现在表中的组合即为隐式拒绝。
"""

from collections.abc import Iterable
from types import MappingProxyType

from domains.authorization.domain.types import Action, Resource, Role, Scope

PermissionKey = tuple[Role, Resource, Action]

# 店主可以管理的资源（按所有权链限定）
_OWNED_CATALOG = (
    Resource.STORES,
    Resource.BASE_PRODUCTS,
    Resource.PRODUCTS,
    Resource.PRODUCT_ATTRS,
    Resource.CUSTOM_ATTRIBUTES,
)

# 对所有人公开可读的资源
_PUBLIC_READABLE = (
    *_OWNED_CATALOG,
    Resource.ATTRIBUTES,
    Resource.CATEGORIES,
    Resource.CATEGORY_ATTRS,
    Resource.CURRENCY_EXCHANGE,
)

_MODERATOR_COMMENTS = (
    Resource.MODERATOR_PRODUCT_COMMENTS,
    Resource.MODERATOR_STORE_COMMENTS,
)

_WRITE_ACTIONS = (Action.CREATE, Action.UPDATE, Action.DELETE)


def _grant(
    table: dict[PermissionKey, Scope],
    role: Role,
    resources: Iterable[Resource],
    actions: Iterable[Action],
    scope: Scope,
) -> None:
    actions = tuple(actions)
    for resource in resources:
        for action in actions:
            key = (role, resource, action)
            if key in table:
                raise ValueError(f"Duplicate permission rule: {key}")
            table[key] = scope


def _build_permissions() -> MappingProxyType:
    table: dict[PermissionKey, Scope] = {}

    # 超级管理员：全部资源、全部动作
    _grant(table, Role.SUPERUSER, Resource, Action, Scope.ALL)

    # 普通用户
    _grant(table, Role.USER, _PUBLIC_READABLE, [Action.READ], Scope.ALL)
    _grant(table, Role.USER, _OWNED_CATALOG, _WRITE_ACTIONS, Scope.OWNED)
    _grant(table, Role.USER, [Resource.USER_ROLES, *_MODERATOR_COMMENTS], [Action.READ], Scope.OWNED)

    # 审核员
    _grant(
        table,
        Role.MODERATOR,
        [*_OWNED_CATALOG, *_MODERATOR_COMMENTS],
        [Action.READ],
        Scope.ALL,
    )
    _grant(table, Role.MODERATOR, _MODERATOR_COMMENTS, [Action.CREATE, Action.UPDATE], Scope.ALL)

    return MappingProxyType(table)


PERMISSIONS: MappingProxyType = _build_permissions()

# 公开规则：适用于任何操作者（包括匿名用户）
PUBLIC_RULES: frozenset[tuple[Resource, Action]] = frozenset(
    (resource, Action.READ) for resource in _PUBLIC_READABLE
)


def scope_for(role: Role, resource: Resource, action: Action) -> Scope | None:
    """查询单个角色的授权作用域"""
    return PERMISSIONS.get((role, resource, action))


def effective_scope(
    roles: Iterable[Role],
    resource: Resource,
    action: Action,
) -> Scope | None:
    """计算操作者的有效作用域

    取所有角色授权中最宽松的作用域：任一角色授予 ALL 即为 ALL，
    否则任一角色授予 OWNED 即为 OWNED，否则返回 None（拒绝）。
    """
    best: Scope | None = None
    for role in roles:
        scope = scope_for(role, resource, action)
        if scope is None:
            continue
        if best is None or scope.rank > best.rank:
            best = scope
        if best is Scope.ALL:
            break
    return best


def is_public(resource: Resource, action: Action) -> bool:
    """是否为公开规则"""
    return (resource, action) in PUBLIC_RULES


__all__ = [
    "PERMISSIONS",
    "PUBLIC_RULES",
    "effective_scope",
    "is_public",
    "scope_for",
]
