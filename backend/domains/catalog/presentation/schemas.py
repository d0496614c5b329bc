"""
Catalog Presentation Schemas - 目录表示层模式

属性、分类、分类属性与汇率的请求响应模式
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from libs.types import Currency, PartialUpdate, Translation, ValueType

# =============================================================================
# 属性
# =============================================================================


class AttributeCreate(BaseModel):
    """创建属性请求"""

    name: list[Translation] = Field(..., min_length=1)
    value_type: ValueType
    meta_field: dict[str, Any] | None = None


class AttributeUpdate(PartialUpdate):
    """更新属性请求"""

    non_nullable = frozenset({"name"})

    name: list[Translation] | None = Field(default=None, min_length=1)
    meta_field: dict[str, Any] | None = None


class AttributeResponse(BaseModel):
    """属性响应"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: list[Translation]
    value_type: ValueType
    meta_field: dict[str, Any] | None = None


# =============================================================================
# 分类
# =============================================================================


class CategoryCreate(BaseModel):
    """创建分类请求"""

    name: list[Translation] = Field(..., min_length=1)
    parent_id: int | None = None
    meta_field: str | None = None


class CategoryUpdate(PartialUpdate):
    """更新分类请求（parent_id 为 null 表示移到根）"""

    non_nullable = frozenset({"name", "is_active"})

    name: list[Translation] | None = Field(default=None, min_length=1)
    parent_id: int | None = None
    meta_field: str | None = None
    is_active: bool | None = None


class CategoryResponse(BaseModel):
    """分类响应"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: list[Translation]
    parent_id: int | None = None
    level: int
    meta_field: str | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CategoryTreeNode(BaseModel):
    """分类树节点"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: list[Translation]
    parent_id: int | None = None
    level: int
    meta_field: str | None = None
    children: list["CategoryTreeNode"] = Field(default_factory=list)


class CategoryAttributeRequest(BaseModel):
    """分类属性增删请求"""

    category_id: int
    attribute_id: int


class CategoryAttributeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    category_id: int
    attribute_id: int


# =============================================================================
# 汇率
# =============================================================================

ExchangeRate = Annotated[float, Field(gt=0)]


class CurrencyExchangeUpdate(BaseModel):
    """更新汇率请求

    rates[目标币种][原币种] 为原币种价格换算到目标币种的乘数。
    """

    rates: dict[Currency, dict[Currency, ExchangeRate]] = Field(..., min_length=1)


class CurrencyExchangeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    rates: dict[Currency, dict[Currency, float]]
    created_at: datetime
