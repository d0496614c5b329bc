"""
Acl Factory - 访问控制评估器工厂

为每个请求构建操作者的 Acl：匿名用户得到 UnauthorizedAcl，
已认证用户先解析角色（缓存优先），再得到 ApplicationAcl。
"""

from sqlalchemy.ext.asyncio import AsyncSession

from domains.authorization.domain.acl import Acl, ApplicationAcl, SystemAcl, UnauthorizedAcl
from domains.authorization.domain.ownership import OwnerResolver
from domains.authorization.domain.types import Role
from domains.authorization.infrastructure.entity_loader import SQLAlchemyEntityLoader
from domains.authorization.infrastructure.repositories import SQLAlchemyUserRoleRepository
from domains.authorization.infrastructure.roles_cache import RolesCache
from utils.logging import get_logger

logger = get_logger(__name__)


class AclFactory:
    """访问控制评估器工厂"""

    def __init__(self, roles_cache: RolesCache) -> None:
        self.roles_cache = roles_cache

    async def get_roles(self, db: AsyncSession, user_id: int) -> list[Role]:
        """获取用户角色

        缓存未命中时以 SystemAcl 读取角色仓储，结果写回缓存。
        读取期间角色被修改（版本号变化）时不写回，本次请求仍使用读到的结果。
        """
        cached = await self.roles_cache.get(user_id)
        if cached is not None:
            return cached

        version = await self.roles_cache.version(user_id)

        repo = SQLAlchemyUserRoleRepository(db, SystemAcl())
        roles: list[Role] = []
        for user_role in await repo.list_for_user(user_id):
            try:
                roles.append(Role(user_role.role))
            except ValueError:
                logger.warning("Ignoring unknown role %r of user %s", user_role.role, user_id)

        await self.roles_cache.set(user_id, roles, version)
        return roles

    async def for_user(self, db: AsyncSession, user_id: int | None) -> Acl:
        """为操作者构建 Acl"""
        if user_id is None:
            return UnauthorizedAcl()

        roles = await self.get_roles(db, user_id)
        return ApplicationAcl(roles, user_id, OwnerResolver(SQLAlchemyEntityLoader(db)))


__all__ = ["AclFactory"]
