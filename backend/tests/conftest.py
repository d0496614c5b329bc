"""
Pytest Configuration - 测试配置

提供测试所需的 fixtures：
- 内存 SQLite 数据库（aiosqlite，每个测试函数独立建表）
- 进程内缓存
- 挂载了依赖覆盖与 app.state 的 HTTP 客户端
"""

from collections.abc import AsyncGenerator, Callable

import httpx
from httpx import ASGITransport, AsyncClient
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# 导入应用会注册全部 ORM 模型
from bootstrap.main import app
from domains.authorization.application import AclFactory
from domains.authorization.infrastructure.roles_cache import RolesCache
from domains.catalog.infrastructure.cache import AttributeCache, CategoryCache
from libs.api.deps import get_db
from libs.db.database import Base
from libs.search import SearchClient
from utils.cache import MemoryCacheBackend

TEST_DATABASE_URL = "sqlite+aiosqlite://"
SEARCH_BASE_URL = "http://search.test"


def pytest_configure(config):
    """注册测试标记"""
    config.addinivalue_line("markers", "unit: 单元测试")
    config.addinivalue_line("markers", "integration: 集成测试")


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """内存数据库引擎（StaticPool 保证所有连接共享同一个库）"""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """数据库会话 fixture"""
    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def cache_backend() -> MemoryCacheBackend:
    return MemoryCacheBackend()


@pytest.fixture
def roles_cache(cache_backend: MemoryCacheBackend) -> RolesCache:
    return RolesCache(cache_backend)


@pytest.fixture
def category_cache(cache_backend: MemoryCacheBackend) -> CategoryCache:
    return CategoryCache(cache_backend)


@pytest.fixture
def attribute_cache(cache_backend: MemoryCacheBackend) -> AttributeCache:
    return AttributeCache(cache_backend)


def _empty_search(_request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"hits": {"hits": []}, "suggest": {}})


@pytest.fixture
def search_handler() -> Callable[[httpx.Request], httpx.Response]:
    """搜索索引的模拟响应，测试可覆盖此 fixture"""
    return _empty_search


@pytest_asyncio.fixture
async def search_client(search_handler) -> AsyncGenerator[SearchClient, None]:
    client = SearchClient(SEARCH_BASE_URL, transport=httpx.MockTransport(search_handler))
    yield client
    await client.close()


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    roles_cache: RolesCache,
    category_cache: CategoryCache,
    attribute_cache: AttributeCache,
    search_client: SearchClient,
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP 客户端 fixture

    ASGITransport 不触发 lifespan，因此这里手动装配 app.state。
    """

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.state.roles_cache = roles_cache
    app.state.category_cache = category_cache
    app.state.attribute_cache = attribute_cache
    app.state.acl_factory = AclFactory(roles_cache)
    app.state.search_client = search_client

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
