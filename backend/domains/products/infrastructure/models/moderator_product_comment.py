"""
Moderator Product Comment Model - 商品审核意见模型
"""

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from libs.orm.base import BaseModel


class ModeratorProductComment(BaseModel):
    __tablename__ = "moderator_product_comments"

    moderator_id: Mapped[int] = mapped_column(Integer, nullable=False)
    base_product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("base_products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    comments: Mapped[str] = mapped_column(Text, nullable=False)
