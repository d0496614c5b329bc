"""
User Role Model - 用户角色模型

user 与 role 的多对多关联表（一个用户可拥有多个角色）。
"""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from libs.orm.base import BaseModel


class UserRole(BaseModel):
    """用户角色模型"""

    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_roles_user_id_role"),)

    user_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<UserRole(user_id={self.user_id}, role={self.role})>"
