"""
Base Model - 模型基类

- BaseModel: 整型自增主键 + 创建/更新时间
- ActiveMixin: 软停用标记（店铺、基础商品、商品变体、分类）
- Translations: 多语言文本列的类型
"""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from libs.db.database import Base

# 多语言文本：[{"lang": "en", "text": "..."}]，以 JSON 存储
Translations = list[dict[str, Any]]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def translations_column(nullable: bool = False) -> Mapped[Any]:
    """多语言文本列"""
    return mapped_column(JSON, nullable=nullable)


class ActiveMixin:
    """软停用标记

    停用的行仍保留，查询时由仓储或用例按需过滤。
    """

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class BaseModel(Base):
    """模型基类"""

    __abstract__ = True

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
        onupdate=_utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
