"""
Stores Presentation Schemas - 店铺表示层模式
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from domains.stores.infrastructure.search import StoresSearchOptions
from libs.types import PartialUpdate, Translation

# =============================================================================
# 店铺请求模式
# =============================================================================


class StoreCreate(BaseModel):
    """创建店铺请求"""

    user_id: int
    name: list[Translation] = Field(..., min_length=1)
    short_description: list[Translation] = Field(..., min_length=1)
    long_description: list[Translation] | None = None
    slug: str = Field(..., min_length=1, max_length=100, pattern=r"^[a-z0-9-]+$")
    cover: str | None = Field(default=None, max_length=500)
    logo: str | None = Field(default=None, max_length=500)
    phone: str | None = Field(default=None, max_length=50)
    email: EmailStr | None = None
    address: str | None = None
    country: str | None = Field(default=None, max_length=100)
    default_language: str = Field(default="en", min_length=2, max_length=10)
    slogan: str | None = Field(default=None, max_length=255)


class StoreUpdate(PartialUpdate):
    """更新店铺请求（仅更新提供的字段）"""

    non_nullable = frozenset(
        {"name", "short_description", "slug", "default_language", "rating"}
    )

    name: list[Translation] | None = Field(default=None, min_length=1)
    short_description: list[Translation] | None = Field(default=None, min_length=1)
    long_description: list[Translation] | None = None
    slug: str | None = Field(default=None, min_length=1, max_length=100, pattern=r"^[a-z0-9-]+$")
    cover: str | None = Field(default=None, max_length=500)
    logo: str | None = Field(default=None, max_length=500)
    phone: str | None = Field(default=None, max_length=50)
    email: EmailStr | None = None
    address: str | None = None
    country: str | None = Field(default=None, max_length=100)
    default_language: str | None = Field(default=None, min_length=2, max_length=10)
    slogan: str | None = Field(default=None, max_length=255)
    rating: float | None = Field(default=None, ge=0, le=5)


class StoreSearchRequest(BaseModel):
    """按名称搜索店铺"""

    name: str = Field(..., min_length=1)
    options: StoresSearchOptions | None = None


# =============================================================================
# 店铺响应模式
# =============================================================================


class StoreResponse(BaseModel):
    """店铺响应"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    is_active: bool
    name: list[Translation]
    short_description: list[Translation]
    long_description: list[Translation] | None = None
    slug: str
    cover: str | None = None
    logo: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    country: str | None = None
    default_language: str
    slogan: str | None = None
    rating: float
    created_at: datetime
    updated_at: datetime


class CountResponse(BaseModel):
    count: int


# =============================================================================
# 审核意见
# =============================================================================


class ModeratorStoreCommentCreate(BaseModel):
    store_id: int
    comments: str = Field(..., min_length=1)


class ModeratorStoreCommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    moderator_id: int
    store_id: int
    comments: str
    created_at: datetime
