"""
Shared Types - 跨领域的通用值类型

- Translation: 多语言文本条目
- Currency: 支持的币种
- ValueType: 属性取值类型
- PartialUpdate: 部分更新请求的基类
"""

from enum import Enum
from typing import Any, ClassVar, Self

from pydantic import BaseModel, Field, model_validator


class Translation(BaseModel):
    """多语言文本条目"""

    lang: str = Field(..., min_length=2, max_length=10, description="语言代码")
    text: str = Field(..., description="文本")


class Currency(str, Enum):
    """币种"""

    STQ = "STQ"
    ETH = "ETH"
    BTC = "BTC"
    EUR = "EUR"
    USD = "USD"
    RUB = "RUB"


class ValueType(str, Enum):
    """属性取值类型"""

    STR = "str"
    FLOAT = "float"


class PartialUpdate(BaseModel):
    """部分更新请求

    未提供的字段保持不变。non_nullable 中的字段可以省略，但不能显式置为 null，
    否则校验失败（400），不会把 NULL 写入非空列。
    """

    non_nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_explicit_nulls(self) -> Self:
        nulls = sorted(
            field
            for field in self.non_nullable & self.model_fields_set
            if getattr(self, field) is None
        )
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self

    def changes(self) -> dict[str, Any]:
        """已提供字段的 JSON 兼容取值"""
        return self.model_dump(mode="json", exclude_unset=True)


__all__ = ["Currency", "PartialUpdate", "Translation", "ValueType"]
