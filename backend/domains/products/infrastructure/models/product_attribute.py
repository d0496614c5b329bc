"""
Product Attribute Models - 商品属性取值与自定义属性
"""

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from libs.orm.base import BaseModel


class ProductAttribute(BaseModel):
    """商品变体的属性取值"""

    __tablename__ = "product_attributes"
    __table_args__ = (UniqueConstraint("product_id", "attribute_id"),)

    product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    base_product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("base_products.id", ondelete="CASCADE"),
        nullable=False,
    )
    attribute_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("attributes.id"),
        nullable=False,
    )
    value: Mapped[str] = mapped_column(String(255), nullable=False)
    value_type: Mapped[str] = mapped_column(String(20), nullable=False)
    meta_field: Mapped[str | None] = mapped_column(String(255), nullable=True)


class CustomAttribute(BaseModel):
    """基础商品声明的变体属性（各变体需为其赋值）"""

    __tablename__ = "custom_attributes"
    __table_args__ = (UniqueConstraint("base_product_id", "attribute_id"),)

    base_product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("base_products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    attribute_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("attributes.id"),
        nullable=False,
    )
