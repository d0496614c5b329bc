"""
Products Presentation Schemas - 商品表示层模式
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, HttpUrl

from domains.products.infrastructure.search import ProductsSearchOptions
from libs.types import Currency, PartialUpdate, Translation

# =============================================================================
# 基础商品
# =============================================================================


class BaseProductCreate(BaseModel):
    """创建基础商品请求"""

    store_id: int
    name: list[Translation] = Field(..., min_length=1)
    short_description: list[Translation] = Field(..., min_length=1)
    long_description: list[Translation] | None = None
    seo_title: list[Translation] | None = None
    seo_description: list[Translation] | None = None
    category_id: int
    slug: str | None = Field(default=None, max_length=100)
    currency: Currency


class BaseProductUpdate(PartialUpdate):
    """更新基础商品请求"""

    non_nullable = frozenset({"name", "short_description", "category_id", "currency", "rating"})

    name: list[Translation] | None = Field(default=None, min_length=1)
    short_description: list[Translation] | None = Field(default=None, min_length=1)
    long_description: list[Translation] | None = None
    seo_title: list[Translation] | None = None
    seo_description: list[Translation] | None = None
    category_id: int | None = None
    slug: str | None = Field(default=None, max_length=100)
    currency: Currency | None = None
    rating: float | None = Field(default=None, ge=0, le=5)


class BaseProductResponse(BaseModel):
    """基础商品响应"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    store_id: int
    is_active: bool
    name: list[Translation]
    short_description: list[Translation]
    long_description: list[Translation] | None = None
    seo_title: list[Translation] | None = None
    seo_description: list[Translation] | None = None
    category_id: int
    views: int
    rating: float
    slug: str | None = None
    currency: str
    created_at: datetime
    updated_at: datetime


# =============================================================================
# 商品变体与属性取值
# =============================================================================


class AttrValue(BaseModel):
    """属性取值"""

    model_config = ConfigDict(from_attributes=True)

    attr_id: int = Field(..., validation_alias=AliasChoices("attr_id", "attribute_id"))
    value: str
    meta_field: str | None = None


class ProductCreate(BaseModel):
    """创建变体请求（币种取自基础商品）"""

    base_product_id: int
    discount: float | None = Field(default=None, ge=0, le=1)
    photo_main: str | None = Field(default=None, max_length=500)
    additional_photos: list[HttpUrl] | None = None
    vendor_code: str = Field(..., min_length=1, max_length=100)
    cashback: float | None = Field(default=None, ge=0, le=1)
    price: float = Field(..., ge=0)


class ProductUpdate(PartialUpdate):
    non_nullable = frozenset({"vendor_code", "price"})

    discount: float | None = Field(default=None, ge=0, le=1)
    photo_main: str | None = Field(default=None, max_length=500)
    additional_photos: list[HttpUrl] | None = None
    vendor_code: str | None = Field(default=None, min_length=1, max_length=100)
    cashback: float | None = Field(default=None, ge=0, le=1)
    price: float | None = Field(default=None, ge=0)


class ProductWithAttributesCreate(BaseModel):
    product: ProductCreate
    attributes: list[AttrValue] = Field(default_factory=list)


class ProductWithAttributesUpdate(BaseModel):
    product: ProductUpdate | None = None
    attributes: list[AttrValue] | None = None


class ProductResponse(BaseModel):
    """变体响应"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    base_product_id: int
    is_active: bool
    discount: float | None = None
    photo_main: str | None = None
    additional_photos: list[str] | None = None
    vendor_code: str
    cashback: float | None = None
    price: float
    currency: str
    created_at: datetime
    updated_at: datetime


class VariantWithAttributes(BaseModel):
    product: ProductResponse
    attrs: list[AttrValue]


class BaseProductWithVariants(BaseModel):
    """基础商品及其变体（含属性取值）"""

    base_product: BaseProductResponse
    variants: list[VariantWithAttributes]


class StoreIdResponse(BaseModel):
    store_id: int


# =============================================================================
# 搜索
# =============================================================================


class SearchProductsByName(BaseModel):
    name: str = Field(..., min_length=1)
    options: ProductsSearchOptions | None = None


class MostViewedProducts(BaseModel):
    options: ProductsSearchOptions | None = None


class MostDiscountProducts(BaseModel):
    options: ProductsSearchOptions | None = None


class AutoCompleteRequest(BaseModel):
    name: str = Field(..., min_length=1)


class RangeFilter(BaseModel):
    min_value: float | None = None
    max_value: float | None = None

    def add_value(self, value: float) -> None:
        self.min_value = value if self.min_value is None else min(self.min_value, value)
        self.max_value = value if self.max_value is None else max(self.max_value, value)


class AttributeFilterOption(BaseModel):
    id: int
    equal: list[str] | None = None
    range: RangeFilter | None = None


class SearchFilters(BaseModel):
    """搜索结果上可用的筛选条件"""

    categories_ids: list[int]
    attr_filters: list[AttributeFilterOption]
    price_filter: RangeFilter | None = None


# =============================================================================
# 自定义属性与审核意见
# =============================================================================


class CustomAttributeCreate(BaseModel):
    base_product_id: int
    attribute_id: int


class CustomAttributeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    base_product_id: int
    attribute_id: int


class ModeratorProductCommentCreate(BaseModel):
    base_product_id: int
    comments: str = Field(..., min_length=1)


class ModeratorProductCommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    moderator_id: int
    base_product_id: int
    comments: str
    created_at: datetime


__all__ = [
    "AttrValue",
    "AttributeFilterOption",
    "AutoCompleteRequest",
    "BaseProductCreate",
    "BaseProductResponse",
    "BaseProductUpdate",
    "BaseProductWithVariants",
    "CustomAttributeCreate",
    "CustomAttributeResponse",
    "ModeratorProductCommentCreate",
    "ModeratorProductCommentResponse",
    "MostDiscountProducts",
    "MostViewedProducts",
    "ProductCreate",
    "ProductResponse",
    "ProductUpdate",
    "ProductWithAttributesCreate",
    "ProductWithAttributesUpdate",
    "RangeFilter",
    "SearchFilters",
    "SearchProductsByName",
    "StoreIdResponse",
    "VariantWithAttributes",
]
