"""
Attribute Model - 属性定义模型
"""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from libs.orm.base import BaseModel, Translations, translations_column


class Attribute(BaseModel):
    """全局属性定义（如颜色、尺码），由超级管理员维护"""

    __tablename__ = "attributes"

    name: Mapped[Translations] = translations_column()
    value_type: Mapped[str] = mapped_column(String(20), nullable=False)  # str | float
    meta_field: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
