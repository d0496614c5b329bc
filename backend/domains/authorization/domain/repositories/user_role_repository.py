"""
User Role Repository Interface - 用户角色仓储接口

定义 (user_id -> [role]) 关联的数据访问抽象接口
"""

from abc import ABC, abstractmethod
from typing import Protocol

from domains.authorization.domain.types import Role


class UserRoleEntity(Protocol):
    """用户角色实体协议"""

    id: int
    user_id: int
    role: str


class UserRoleRepository(ABC):
    """用户角色仓储接口"""

    @abstractmethod
    async def list_for_user(self, user_id: int) -> list[UserRoleEntity]:
        """获取用户的全部角色"""
        ...

    @abstractmethod
    async def create(self, user_id: int, role: Role) -> UserRoleEntity:
        """为用户添加角色"""
        ...

    @abstractmethod
    async def delete(self, user_id: int, role: Role) -> UserRoleEntity | None:
        """移除用户的某个角色"""
        ...

    @abstractmethod
    async def delete_all_for_user(self, user_id: int) -> list[UserRoleEntity]:
        """移除用户的全部角色"""
        ...
