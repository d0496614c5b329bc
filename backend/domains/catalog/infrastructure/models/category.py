"""
Category Models - 分类与分类属性模型
"""

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from libs.orm.base import ActiveMixin, BaseModel, Translations, translations_column


class Category(ActiveMixin, BaseModel):
    """分类树节点

    level 从 1 开始；根节点 parent_id 为空。
    """

    __tablename__ = "categories"

    name: Mapped[Translations] = translations_column()
    parent_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("categories.id"),
        nullable=True,
        index=True,
    )
    level: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    meta_field: Mapped[str | None] = mapped_column(String(255), nullable=True)


class CategoryAttribute(BaseModel):
    """分类下可用的属性"""

    __tablename__ = "category_attrs"
    __table_args__ = (UniqueConstraint("category_id", "attribute_id"),)

    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    attribute_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("attributes.id", ondelete="CASCADE"),
        nullable=False,
    )
