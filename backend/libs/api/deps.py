"""
API Dependencies - 共享 API 依赖注入

提供跨领域共享的 FastAPI 依赖：
- 数据库会话
- 操作者身份与 Acl
- 应用持有的缓存与搜索客户端
- 用例工厂
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from domains.authorization.application import AclFactory, UserRoleUseCase
from domains.authorization.domain.acl import Acl
from domains.catalog.application import (
    AttributeUseCase,
    CategoryUseCase,
    CurrencyExchangeUseCase,
)
from domains.products.application import (
    BaseProductUseCase,
    CustomAttributeUseCase,
    PriceConverter,
    ProductUseCase,
)
from domains.stores.application import ModeratorCommentUseCase, StoreUseCase
from exceptions import AuthenticationError, ValidationError
from libs.db.database import get_session
from libs.db.repos_factory import ReposFactory
from libs.types import Currency

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from domains.authorization.infrastructure.roles_cache import RolesCache
    from domains.catalog.infrastructure.cache import AttributeCache, CategoryCache
    from libs.search.client import SearchClient

__all__ = [
    "CurrentAcl",
    "CurrentUserId",
    "DbSession",
    "Repos",
    "get_acl",
    "get_attribute_service",
    "get_base_product_service",
    "get_category_service",
    "get_currency_exchange_service",
    "get_current_user_id",
    "get_custom_attribute_service",
    "get_db",
    "get_moderator_comment_service",
    "get_price_converter",
    "get_product_service",
    "get_repos",
    "get_request_currency",
    "get_store_service",
    "get_user_role_service",
]


# =============================================================================
# 数据库会话依赖
# =============================================================================


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """获取数据库会话"""
    async for session in get_session():
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db)]


# =============================================================================
# 操作者依赖
# =============================================================================


def get_current_user_id(
    authorization: Annotated[str | None, Header()] = None,
) -> int | None:
    """从 Authorization 头读取操作者用户 ID

    由上游网关写入整数用户 ID；缺省为匿名用户。

    Raises:
        AuthenticationError: 头部存在但不是合法的用户 ID
    """
    if authorization is None or not authorization.strip():
        return None
    try:
        return int(authorization.strip())
    except ValueError as e:
        raise AuthenticationError("Invalid Authorization header") from e


CurrentUserId = Annotated[int | None, Depends(get_current_user_id)]


def get_request_currency(
    currency: Annotated[str | None, Header()] = None,
) -> Currency | None:
    """从 Currency 头读取展示币种，缺省时不换算价格

    Raises:
        ValidationError: 不支持的币种
    """
    if currency is None or not currency.strip():
        return None
    try:
        return Currency(currency.strip().upper())
    except ValueError as e:
        raise ValidationError(
            f"Unsupported currency: {currency}", details={"header": "Currency"}
        ) from e


RequestCurrency = Annotated[Currency | None, Depends(get_request_currency)]


def get_roles_cache(request: Request) -> RolesCache:
    return request.app.state.roles_cache


def get_category_cache(request: Request) -> CategoryCache:
    return request.app.state.category_cache


def get_attribute_cache(request: Request) -> AttributeCache:
    return request.app.state.attribute_cache


def get_search_client(request: Request) -> SearchClient:
    return request.app.state.search_client


async def get_acl(
    request: Request,
    db: DbSession,
    user_id: CurrentUserId,
) -> Acl:
    """为当前请求构建 Acl"""
    acl_factory: AclFactory = request.app.state.acl_factory
    return await acl_factory.for_user(db, user_id)


CurrentAcl = Annotated[Acl, Depends(get_acl)]


async def get_repos(db: DbSession, acl: CurrentAcl) -> ReposFactory:
    return ReposFactory(db, acl)


Repos = Annotated[ReposFactory, Depends(get_repos)]


# =============================================================================
# 服务依赖
# =============================================================================


async def get_store_service(
    db: DbSession,
    repos: Repos,
    request: Request,
) -> StoreUseCase:
    """获取店铺服务"""
    return StoreUseCase(db, repos, get_search_client(request))


async def get_base_product_service(
    db: DbSession,
    repos: Repos,
    request: Request,
) -> BaseProductUseCase:
    """获取基础商品服务"""
    return BaseProductUseCase(db, repos, get_search_client(request))


async def get_product_service(db: DbSession, repos: Repos) -> ProductUseCase:
    """获取商品变体服务"""
    return ProductUseCase(db, repos)


async def get_custom_attribute_service(db: DbSession, repos: Repos) -> CustomAttributeUseCase:
    return CustomAttributeUseCase(db, repos)


async def get_moderator_comment_service(db: DbSession, repos: Repos) -> ModeratorCommentUseCase:
    return ModeratorCommentUseCase(db, repos)


async def get_attribute_service(
    db: DbSession,
    acl: CurrentAcl,
    request: Request,
) -> AttributeUseCase:
    """获取属性服务"""
    return AttributeUseCase(db, acl, get_attribute_cache(request))


async def get_category_service(
    db: DbSession,
    acl: CurrentAcl,
    request: Request,
) -> CategoryUseCase:
    """获取分类服务"""
    return CategoryUseCase(db, acl, get_category_cache(request))


async def get_user_role_service(
    db: DbSession,
    acl: CurrentAcl,
    request: Request,
) -> UserRoleUseCase:
    """获取用户角色服务"""
    return UserRoleUseCase(db, acl, get_roles_cache(request))


async def get_currency_exchange_service(db: DbSession, acl: CurrentAcl) -> CurrencyExchangeUseCase:
    """获取汇率服务"""
    return CurrencyExchangeUseCase(db, acl)


async def get_price_converter(
    currency: RequestCurrency,
    currency_exchange_service: CurrencyExchangeUseCase = Depends(get_currency_exchange_service),
) -> PriceConverter:
    """按 Currency 头构建价格换算器；没有该头时不读取汇率"""
    if currency is None:
        return PriceConverter()
    return PriceConverter(currency, await currency_exchange_service.rates_for(currency))
