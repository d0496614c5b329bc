"""
Authorization Presentation Schemas - 授权表示层模式
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from domains.authorization.domain.types import Role


class UserRoleCreate(BaseModel):
    """授予角色请求"""

    user_id: int
    role: Role


class UserRoleDelete(BaseModel):
    """撤销角色请求"""

    user_id: int
    role: Role


class UserRoleResponse(BaseModel):
    """用户角色响应"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    role: Role
    created_at: datetime | None = None
