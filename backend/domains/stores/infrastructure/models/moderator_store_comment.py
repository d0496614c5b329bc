"""
Moderator Store Comment Model - 店铺审核意见模型
"""

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from libs.orm.base import BaseModel


class ModeratorStoreComment(BaseModel):
    """审核员对店铺的审核意见"""

    __tablename__ = "moderator_store_comments"

    moderator_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    store_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("stores.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    comments: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
