"""
Ownership Chains 单元测试

使用内存加载器测试所有权链解析与记忆化。
"""

from types import SimpleNamespace
from typing import Any

import pytest

from domains.authorization.domain.ownership import OWNERSHIP_CHAINS, OwnerResolver
from domains.authorization.domain.types import Resource


class FakeLoader:
    """按 (资源, ID) 返回预置记录，并记录加载次数"""

    def __init__(self, rows: dict[tuple[Resource, int], Any]) -> None:
        self.rows = rows
        self.calls: list[tuple[Resource, int]] = []

    async def load(self, resource: Resource, entity_id: Any) -> Any | None:
        self.calls.append((resource, entity_id))
        return self.rows.get((resource, entity_id))


@pytest.fixture
def loader() -> FakeLoader:
    return FakeLoader(
        {
            (Resource.STORES, 1): SimpleNamespace(id=1, user_id=42),
            (Resource.BASE_PRODUCTS, 10): SimpleNamespace(id=10, store_id=1),
            (Resource.BASE_PRODUCTS, 11): SimpleNamespace(id=11, store_id=999),
            (Resource.PRODUCTS, 100): SimpleNamespace(id=100, base_product_id=10),
        }
    )


@pytest.mark.unit
class TestOwnershipChains:
    """所有权链表测试"""

    def test_reference_resources_have_no_chain(self):
        """测试: 属性和分类没有所有权链"""
        for resource in (Resource.ATTRIBUTES, Resource.CATEGORIES, Resource.CATEGORY_ATTRS):
            assert resource not in OWNERSHIP_CHAINS

    def test_product_attrs_chain_reaches_store(self):
        """测试: 商品属性经过变体和基础商品到达店铺"""
        chain = OWNERSHIP_CHAINS[Resource.PRODUCT_ATTRS]
        assert [hop.target for hop in chain.hops] == [
            Resource.PRODUCTS,
            Resource.BASE_PRODUCTS,
            Resource.STORES,
        ]
        assert chain.owner_field == "user_id"


@pytest.mark.unit
class TestOwnerResolver:
    """所有权解析测试"""

    async def test_terminal_resource_reads_owner_directly(self, loader):
        """测试: 店铺直接返回 user_id"""
        resolver = OwnerResolver(loader)
        owner = await resolver.resolve_owner(Resource.STORES, SimpleNamespace(user_id=42))
        assert owner == 42
        assert loader.calls == []

    async def test_resolves_multi_hop_chain(self, loader):
        """测试: 商品属性沿链解析到店主"""
        resolver = OwnerResolver(loader)
        product_attr = SimpleNamespace(product_id=100)

        owner = await resolver.resolve_owner(Resource.PRODUCT_ATTRS, product_attr)

        assert owner == 42

    async def test_unsaved_payload_resolves_through_foreign_key(self, loader):
        """测试: 未持久化的预映像也能通过外键解析"""
        resolver = OwnerResolver(loader)
        payload = SimpleNamespace(base_product_id=10, vendor_code="X")
        assert await resolver.resolve_owner(Resource.PRODUCTS, payload) == 42

    async def test_missing_foreign_key_returns_none(self, loader):
        """测试: 外键为空时解析失败"""
        resolver = OwnerResolver(loader)
        owner = await resolver.resolve_owner(Resource.BASE_PRODUCTS, SimpleNamespace(store_id=None))
        assert owner is None

    async def test_missing_parent_returns_none(self, loader):
        """测试: 父记录不存在时解析失败（没有默认所有者）"""
        resolver = OwnerResolver(loader)
        owner = await resolver.resolve_owner(Resource.PRODUCTS, SimpleNamespace(base_product_id=11))
        assert owner is None

    async def test_resource_without_chain_returns_none(self, loader):
        """测试: 没有所有权链的资源返回 None"""
        resolver = OwnerResolver(loader)
        assert await resolver.resolve_owner(Resource.ATTRIBUTES, SimpleNamespace(id=1)) is None

    async def test_loads_are_memoized(self, loader):
        """测试: 同一解析器内相同记录只加载一次"""
        resolver = OwnerResolver(loader)
        variant = SimpleNamespace(base_product_id=10)

        await resolver.resolve_owner(Resource.PRODUCTS, variant)
        await resolver.resolve_owner(Resource.PRODUCTS, variant)

        assert loader.calls.count((Resource.BASE_PRODUCTS, 10)) == 1
        assert loader.calls.count((Resource.STORES, 1)) == 1
