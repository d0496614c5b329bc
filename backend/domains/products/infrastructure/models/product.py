"""
Product Model - 商品变体模型
"""

from sqlalchemy import JSON, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from libs.orm.base import ActiveMixin, BaseModel


class Product(ActiveMixin, BaseModel):
    """商品变体：具体的可售单元，币种跟随基础商品"""

    __tablename__ = "products"

    base_product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("base_products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    discount: Mapped[float | None] = mapped_column(Float, nullable=True)
    photo_main: Mapped[str | None] = mapped_column(String(500), nullable=True)
    additional_photos: Mapped[list[str] | None] = mapped_column(
        JSON,
        nullable=True,
    )
    vendor_code: Mapped[str] = mapped_column(String(100), nullable=False)
    cashback: Mapped[float | None] = mapped_column(Float, nullable=True)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[str] = mapped_column(String(10), nullable=False)
