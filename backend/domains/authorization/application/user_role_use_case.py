"""
User Role Use Case - 用户角色用例

角色写入在返回前提交事务并同步清除该用户的角色缓存，
保证响应之后发出的请求能看到新角色。
"""

from sqlalchemy.ext.asyncio import AsyncSession

from domains.authorization.domain.acl import Acl
from domains.authorization.domain.repositories import UserRoleRepository
from domains.authorization.domain.types import Role
from domains.authorization.infrastructure.models.user_role import UserRole
from domains.authorization.infrastructure.repositories import SQLAlchemyUserRoleRepository
from domains.authorization.infrastructure.roles_cache import RolesCache
from exceptions import ConflictError, NotFoundError
from utils.logging import get_logger

logger = get_logger(__name__)


class UserRoleUseCase:
    """用户角色用例"""

    def __init__(
        self,
        db: AsyncSession,
        acl: Acl,
        roles_cache: RolesCache,
        user_role_repo: UserRoleRepository | None = None,
    ) -> None:
        self.db = db
        self.roles_cache = roles_cache
        self.user_role_repo = user_role_repo or SQLAlchemyUserRoleRepository(db, acl)

    async def list_for_user(self, user_id: int) -> list[UserRole]:
        """获取用户的角色（仅返回操作者可见的记录）"""
        return await self.user_role_repo.list_for_user(user_id)

    async def create(self, user_id: int, role: Role) -> UserRole:
        """为用户添加角色

        Raises:
            ConflictError: 用户已拥有该角色
        """
        existing = await self.user_role_repo.list_for_user(user_id)
        if any(user_role.role == role.value for user_role in existing):
            raise ConflictError(f"User {user_id} already has role {role.value}", resource="user_roles")

        user_role = await self.user_role_repo.create(user_id, role)
        await self._commit_and_evict(user_id)
        logger.info("Granted role %s to user %s", role.value, user_id)
        return user_role

    async def delete(self, user_id: int, role: Role) -> UserRole:
        """移除用户的某个角色

        Raises:
            NotFoundError: 用户没有该角色（或对操作者不可见）
        """
        user_role = await self.user_role_repo.delete(user_id, role)
        if user_role is None:
            raise NotFoundError("user_roles", f"{user_id}/{role.value}")
        await self._commit_and_evict(user_id)
        logger.info("Revoked role %s from user %s", role.value, user_id)
        return user_role

    async def delete_all(self, user_id: int) -> list[UserRole]:
        """移除用户的全部角色"""
        user_roles = await self.user_role_repo.delete_all_for_user(user_id)
        await self._commit_and_evict(user_id)
        return user_roles

    async def create_default(self, user_id: int) -> UserRole:
        """为新用户授予默认的 user 角色（已存在时直接返回）"""
        for user_role in await self.user_role_repo.list_for_user(user_id):
            if user_role.role == Role.USER.value:
                return user_role
        return await self.create(user_id, Role.USER)

    async def _commit_and_evict(self, user_id: int) -> None:
        await self.db.commit()
        await self.roles_cache.remove(user_id)


__all__ = ["UserRoleUseCase"]
