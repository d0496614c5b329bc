"""
Stores Backend - Main Application

FastAPI 应用入口点
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import exc as sa_exc

from bootstrap.config import settings
from domains.authorization.application import AclFactory
from domains.authorization.infrastructure.roles_cache import RolesCache
from domains.authorization.presentation.router import router as user_roles_router
from domains.catalog.infrastructure.cache import AttributeCache, CategoryCache
from domains.catalog.presentation.router import (
    attributes_router,
    categories_router,
    currency_exchange_router,
)
from domains.products.presentation.custom_attribute_router import (
    router as custom_attributes_router,
)
from domains.products.presentation.product_router import router as products_router
from domains.products.presentation.router import router as base_products_router
from domains.stores.presentation.comments_router import router as comments_router
from domains.stores.presentation.router import router as stores_router
from exceptions import (
    AccessDeniedError,
    AuthenticationError,
    ConflictError,
    DatabaseConnectionError,
    ExternalServiceError,
    NotFoundError,
    PermissionDeniedError,
    StoresError,
    ValidationError,
)
from libs.db.database import close_db, create_tables, init_db
from libs.middleware import TraceIdMiddleware
from libs.search import SearchClient
from utils.cache import create_cache_backend
from utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_fastapi_app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理"""
    setup_logging(
        log_level=settings.log_level,
        log_format=settings.log_format,
        is_development=settings.is_development,
    )
    logger.info("=" * 60)
    logger.info("启动 Stores Backend")
    logger.info("  APP_ENV: %s (is_development=%s)", settings.app_env, settings.is_development)
    logger.info("  CACHE_BACKEND: %s", settings.cache_backend)
    logger.info("=" * 60)

    # 初始化数据库
    await init_db()
    if settings.create_tables_on_startup:
        await create_tables()

    # 缓存与搜索客户端由应用持有，请求通过依赖注入取用
    cache_backend = create_cache_backend(
        settings.cache_backend,
        redis_url=settings.redis_url,
        redis_password=settings.redis_password,
        key_prefix=settings.cache_key_prefix,
    )
    roles_cache = RolesCache(cache_backend, settings.roles_cache_ttl)
    _fastapi_app.state.roles_cache = roles_cache
    _fastapi_app.state.category_cache = CategoryCache(cache_backend, settings.reference_cache_ttl)
    _fastapi_app.state.attribute_cache = AttributeCache(cache_backend, settings.reference_cache_ttl)
    _fastapi_app.state.acl_factory = AclFactory(roles_cache)
    _fastapi_app.state.search_client = SearchClient(settings.elastic_url, settings.elastic_timeout)

    yield

    # 关闭时
    await _fastapi_app.state.search_client.close()
    await cache_backend.close()
    await close_db()
    logger.info("Stores Backend stopped")


# 创建 FastAPI 应用
app = FastAPI(
    title=settings.app_name,
    description="店铺与商品目录后端 API",
    version="0.1.0",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

# CORS 中间件
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 链路追踪中间件（最后添加，最先执行）
app.add_middleware(TraceIdMiddleware)


# =============================================================================
# 全局异常处理器
# =============================================================================


def _error_response(
    status_code: int,
    message: str,
    code: str | None = None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """构建错误响应"""
    content: dict[str, Any] = {"detail": message}
    if code:
        content["code"] = code
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(ValidationError)
async def validation_error_handler(
    _request: Request,
    exc: ValidationError,
) -> JSONResponse:
    """处理业务校验错误"""
    logger.warning("Validation error: %s", exc.message)
    return _error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        message=exc.message,
        code=exc.code,
        details=exc.details,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    _request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """处理请求体/参数校验错误"""
    logger.warning("Request validation failed: %s", exc.errors())
    return _error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        message="Request validation failed",
        code="VALIDATION_ERROR",
        details={"errors": _jsonable_errors(exc)},
    )


def _jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """只保留可序列化的错误字段"""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type")}
        for error in exc.errors()
    ]


@app.exception_handler(NotFoundError)
async def not_found_error_handler(
    _request: Request,
    exc: NotFoundError,
) -> JSONResponse:
    """处理资源不存在错误"""
    logger.warning("Resource not found: %s", exc.message)
    return _error_response(
        status_code=status.HTTP_404_NOT_FOUND,
        message=exc.message,
        code=exc.code,
        details=exc.details,
    )


@app.exception_handler(AccessDeniedError)
async def access_denied_error_handler(
    _request: Request,
    exc: AccessDeniedError,
) -> JSONResponse:
    """处理 ACL 拒绝

    资源、动作和实体 ID 只写日志，响应体保持通用。
    """
    logger.warning(
        "Access denied: user=%s action=%s resource=%s entity=%s (%s)",
        exc.user_id,
        exc.action,
        exc.resource,
        exc.entity_id,
        exc.code,
    )
    return _error_response(
        status_code=status.HTTP_403_FORBIDDEN,
        message="Forbidden",
        code="FORBIDDEN",
    )


@app.exception_handler(PermissionDeniedError)
async def permission_denied_error_handler(
    _request: Request,
    exc: PermissionDeniedError,
) -> JSONResponse:
    """处理权限不足错误"""
    logger.warning("Permission denied: %s", exc.message)
    return _error_response(
        status_code=status.HTTP_403_FORBIDDEN,
        message="Forbidden",
        code=exc.code,
    )


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(
    _request: Request,
    exc: AuthenticationError,
) -> JSONResponse:
    """处理认证错误"""
    logger.warning("Authentication failed: %s", exc.message)
    return _error_response(
        status_code=status.HTTP_401_UNAUTHORIZED,
        message=exc.message,
        code=exc.code,
    )


@app.exception_handler(ConflictError)
async def conflict_error_handler(
    _request: Request,
    exc: ConflictError,
) -> JSONResponse:
    """处理资源冲突错误"""
    logger.warning("Resource conflict: %s", exc.message)
    return _error_response(
        status_code=status.HTTP_409_CONFLICT,
        message=exc.message,
        code=exc.code,
        details=exc.details,
    )


@app.exception_handler(ExternalServiceError)
async def external_service_error_handler(
    _request: Request,
    exc: ExternalServiceError,
) -> JSONResponse:
    """处理外部服务错误"""
    logger.error("External service error: %s - %s", exc.service, exc.message)
    return _error_response(
        status_code=status.HTTP_502_BAD_GATEWAY,
        message=exc.message,
        code=exc.code,
        details=exc.details,
    )


@app.exception_handler(DatabaseConnectionError)
async def database_connection_error_handler(
    _request: Request,
    exc: DatabaseConnectionError,
) -> JSONResponse:
    """处理数据库不可用"""
    logger.error("Database unavailable: %s", exc.message)
    return _error_response(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        message=exc.message,
        code=exc.code,
    )


@app.exception_handler(sa_exc.OperationalError)
@app.exception_handler(sa_exc.InterfaceError)
async def database_driver_error_handler(
    _request: Request,
    exc: sa_exc.DBAPIError,
) -> JSONResponse:
    """驱动层连接故障与授权拒绝区分，返回 503"""
    logger.error("Database driver error: %s", exc)
    return _error_response(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        message="Database unavailable",
        code="DATABASE_UNAVAILABLE",
    )


@app.exception_handler(StoresError)
async def stores_error_handler(
    _request: Request,
    exc: StoresError,
) -> JSONResponse:
    """处理其余业务错误"""
    logger.error("Stores error: %s", exc.message)
    return _error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message=exc.message,
        code=exc.code,
        details=exc.details,
    )


@app.exception_handler(Exception)
async def general_exception_handler(
    _request: Request,
    exc: Exception,
) -> JSONResponse:
    """处理未捕获的异常"""
    logger.exception("Unhandled exception: %s", exc)
    return _error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message="Internal server error",
        code="INTERNAL_ERROR",
    )


# =============================================================================
# API 路由
# =============================================================================

api_prefix = settings.api_prefix

# 店铺
app.include_router(stores_router, prefix=f"{api_prefix}/stores", tags=["Stores"])
# 基础商品
app.include_router(
    base_products_router, prefix=f"{api_prefix}/base_products", tags=["Base Products"]
)
# 商品变体
app.include_router(products_router, prefix=f"{api_prefix}/products", tags=["Products"])
# 自定义属性
app.include_router(
    custom_attributes_router,
    prefix=f"{api_prefix}/custom_attributes",
    tags=["Custom Attributes"],
)
# 属性
app.include_router(attributes_router, prefix=f"{api_prefix}/attributes", tags=["Attributes"])
# 分类
app.include_router(categories_router, prefix=f"{api_prefix}/categories", tags=["Categories"])
# 汇率
app.include_router(
    currency_exchange_router,
    prefix=f"{api_prefix}/currency_exchange",
    tags=["Currency Exchange"],
)
# 审核意见
app.include_router(comments_router, prefix=api_prefix, tags=["Moderator Comments"])
# 用户角色
app.include_router(user_roles_router, prefix=api_prefix, tags=["User Roles"])


@app.get("/")
async def root() -> dict[str, str]:
    """根端点"""
    return {
        "message": "Stores API",
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """健康检查"""
    return {"status": "healthy"}


def run() -> None:
    """以 uvicorn 启动服务（stores-api 命令）"""
    import uvicorn

    uvicorn.run(
        "bootstrap.main:app",
        host=settings.host,
        port=settings.port,
        workers=settings.workers,
        reload=settings.is_development and settings.workers == 1,
        log_level=settings.log_level.lower(),
    )
