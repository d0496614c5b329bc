"""
Base Product Model - 基础商品模型
"""

from sqlalchemy import Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from libs.orm.base import ActiveMixin, BaseModel, Translations, translations_column


class BaseProduct(ActiveMixin, BaseModel):
    """基础商品模型

    一个基础商品属于一个店铺，拥有若干变体（Product）。
    """

    __tablename__ = "base_products"

    store_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("stores.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[Translations] = translations_column()
    short_description: Mapped[Translations] = translations_column()
    long_description: Mapped[Translations | None] = translations_column(nullable=True)
    seo_title: Mapped[Translations | None] = translations_column(nullable=True)
    seo_description: Mapped[Translations | None] = translations_column(nullable=True)
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id"),
        nullable=False,
        index=True,
    )
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    rating: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    slug: Mapped[str | None] = mapped_column(String(100), nullable=True)
    currency: Mapped[str] = mapped_column(String(10), nullable=False)

    def __repr__(self) -> str:
        return f"<BaseProduct(id={self.id}, store_id={self.store_id})>"
