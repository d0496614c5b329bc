"""
Store Model - 店铺模型
"""

from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from libs.orm.base import ActiveMixin, BaseModel, Translations, translations_column


class Store(ActiveMixin, BaseModel):
    """店铺模型

    所有权链的终端：user_id 即店主。
    """

    __tablename__ = "stores"

    user_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
    )
    name: Mapped[Translations] = translations_column()
    short_description: Mapped[Translations] = translations_column()
    long_description: Mapped[Translations | None] = translations_column(nullable=True)
    slug: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
    )
    cover: Mapped[str | None] = mapped_column(String(500), nullable=True)
    logo: Mapped[str | None] = mapped_column(String(500), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    default_language: Mapped[str] = mapped_column(
        String(10),
        default="en",
        nullable=False,
    )
    slogan: Mapped[str | None] = mapped_column(String(255), nullable=True)
    rating: Mapped[float] = mapped_column(
        Float,
        default=0.0,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Store(id={self.id}, slug={self.slug}, user_id={self.user_id})>"
