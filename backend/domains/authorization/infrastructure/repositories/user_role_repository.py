"""
User Role Repository - 用户角色仓储实现
"""

from sqlalchemy import select

from domains.authorization.domain.repositories.user_role_repository import (
    UserRoleRepository as UserRoleRepositoryInterface,
)
from domains.authorization.domain.types import Action, Resource, Role
from domains.authorization.infrastructure.models.user_role import UserRole
from libs.db.base_repository import AclRepositoryBase


class SQLAlchemyUserRoleRepository(AclRepositoryBase[UserRole], UserRoleRepositoryInterface):
    """用户角色仓储

    为 AclFactory 读取角色时运行在 SystemAcl 下，避免循环依赖。
    """

    @property
    def model_class(self) -> type[UserRole]:
        return UserRole

    @property
    def resource(self) -> Resource:
        return Resource.USER_ROLES

    async def list_for_user(self, user_id: int) -> list[UserRole]:
        query = select(UserRole).where(UserRole.user_id == user_id).order_by(UserRole.id)
        return await self._fetch_all(query)

    async def get_by_user_and_role(self, user_id: int, role: Role) -> UserRole | None:
        query = select(UserRole).where(
            UserRole.user_id == user_id,
            UserRole.role == role.value,
        )
        return await self._fetch_one(query)

    async def create(self, user_id: int, role: Role) -> UserRole:
        return await self._insert(UserRole(user_id=user_id, role=role.value))

    async def delete(self, user_id: int, role: Role) -> UserRole | None:
        user_role = await self.get_by_user_and_role(user_id, role)
        if user_role is None:
            return None
        return await self._delete(user_role)

    async def delete_all_for_user(self, user_id: int) -> list[UserRole]:
        user_roles = await self.list_for_user(user_id)
        for user_role in user_roles:
            await self._authorize(Action.DELETE, user_role)
        for user_role in user_roles:
            await self.db.delete(user_role)
        await self.db.flush()
        return user_roles
