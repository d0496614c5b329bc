"""
角色缓存一致性集成测试

- 读取角色期间发生撤销时，迟到的读取结果不能重新写入缓存
- 授予再撤销角色后，重建的 Acl 与授予前的决策完全一致
"""

import asyncio
from types import SimpleNamespace

import pytest

from domains.authorization.application.acl_factory import AclFactory
from domains.authorization.application.user_role_use_case import UserRoleUseCase
from domains.authorization.domain.acl import Acl
from domains.authorization.domain.types import Action, Resource, Role
from domains.authorization.infrastructure.repositories import SQLAlchemyUserRoleRepository
from tests.factories import (
    attach_attribute,
    grant_role,
    make_attribute,
    make_base_product,
    make_category,
    make_custom_attribute,
    make_product,
    make_product_attribute,
    make_store,
)

USER_ID = 7
ADMIN_ID = 100


async def _owned_entities(db) -> dict:
    """USER_ID 名下（或无所有者）的每类资源各一条"""
    store = await make_store(db, USER_ID)
    category = await make_category(db)
    attribute = await make_attribute(db)
    base_product = await make_base_product(db, store, category)
    product = await make_product(db, base_product)
    return {
        Resource.STORES: store,
        Resource.BASE_PRODUCTS: base_product,
        Resource.PRODUCTS: product,
        Resource.PRODUCT_ATTRS: await make_product_attribute(db, product, attribute, "red"),
        Resource.CUSTOM_ATTRIBUTES: await make_custom_attribute(db, base_product, attribute),
        Resource.ATTRIBUTES: attribute,
        Resource.CATEGORIES: category,
        Resource.CATEGORY_ATTRS: await attach_attribute(db, category, attribute),
        Resource.MODERATOR_PRODUCT_COMMENTS: SimpleNamespace(base_product_id=base_product.id),
        Resource.MODERATOR_STORE_COMMENTS: SimpleNamespace(store_id=store.id),
        Resource.USER_ROLES: SimpleNamespace(user_id=USER_ID),
        Resource.CURRENCY_EXCHANGE: SimpleNamespace(rates={}),
    }


async def _decisions(acl: Acl, entities: dict) -> dict:
    decisions = {}
    for resource in Resource:
        for action in Action:
            decisions[resource, action, "none"] = await acl.is_allowed(resource, action)
            decisions[resource, action, "owned"] = await acl.is_allowed(
                resource, action, entities[resource]
            )
    return decisions


@pytest.mark.integration
class TestRolesCacheRace:
    """角色读取与撤销的并发测试"""

    async def test_revoke_during_read_is_not_cached(self, db_session, roles_cache, monkeypatch):
        """测试: 读取挂起期间发生撤销，恢复后的旧结果不写回缓存"""
        await grant_role(db_session, USER_ID, Role.MODERATOR)
        factory = AclFactory(roles_cache)
        read_done = asyncio.Event()
        resume = asyncio.Event()
        list_for_user = SQLAlchemyUserRoleRepository.list_for_user

        async def suspended_list_for_user(self, user_id):
            rows = await list_for_user(self, user_id)
            read_done.set()
            await resume.wait()
            return rows

        monkeypatch.setattr(SQLAlchemyUserRoleRepository, "list_for_user", suspended_list_for_user)

        reader = asyncio.create_task(factory.get_roles(db_session, USER_ID))
        await read_done.wait()
        await roles_cache.remove(USER_ID)
        resume.set()

        # 本次请求仍使用读到的结果，但缓存保持为空
        assert await reader == [Role.MODERATOR]
        assert await roles_cache.get(USER_ID) is None

    async def test_read_without_revoke_is_cached(self, db_session, roles_cache):
        """测试: 期间没有撤销时读取结果写入缓存"""
        await grant_role(db_session, USER_ID, Role.MODERATOR)

        roles = await AclFactory(roles_cache).get_roles(db_session, USER_ID)

        assert roles == [Role.MODERATOR]
        assert await roles_cache.get(USER_ID) == [Role.MODERATOR]

    async def test_read_after_revoke_is_cached_again(self, db_session, roles_cache):
        """测试: 撤销之后开始的读取使用新版本号，可以正常写入缓存"""
        await grant_role(db_session, USER_ID, Role.USER)
        await roles_cache.remove(USER_ID)

        await AclFactory(roles_cache).get_roles(db_session, USER_ID)

        assert await roles_cache.get(USER_ID) == [Role.USER]


@pytest.mark.integration
class TestGrantRevokeDecisions:
    """授予并撤销角色后的决策一致性测试"""

    async def test_decisions_restored_after_revoke(self, db_session, roles_cache):
        """测试: 授予审核员再撤销后，全部资源和动作的决策与授予前一致"""
        await grant_role(db_session, USER_ID, Role.USER)
        await grant_role(db_session, ADMIN_ID, Role.SUPERUSER)
        entities = await _owned_entities(db_session)
        factory = AclFactory(roles_cache)
        use_case = UserRoleUseCase(
            db_session, await factory.for_user(db_session, ADMIN_ID), roles_cache
        )

        before = await _decisions(await factory.for_user(db_session, USER_ID), entities)

        await use_case.create(USER_ID, Role.MODERATOR)
        granted = await _decisions(await factory.for_user(db_session, USER_ID), entities)
        assert set(await roles_cache.get(USER_ID)) == {Role.USER, Role.MODERATOR}

        await use_case.delete(USER_ID, Role.MODERATOR)
        assert await roles_cache.get(USER_ID) is None
        after = await _decisions(await factory.for_user(db_session, USER_ID), entities)

        assert granted != before
        assert granted[Resource.MODERATOR_STORE_COMMENTS, Action.CREATE, "none"] is True
        assert after == before
        assert len(after) == len(Resource) * len(Action) * 2

    async def test_owned_entity_decisions_for_plain_user(self, db_session, roles_cache):
        """测试: 普通用户可以修改自己名下的商品，但不能修改分类"""
        await grant_role(db_session, USER_ID, Role.USER)
        entities = await _owned_entities(db_session)

        acl = await AclFactory(roles_cache).for_user(db_session, USER_ID)
        decisions = await _decisions(acl, entities)

        assert decisions[Resource.PRODUCTS, Action.UPDATE, "owned"] is True
        assert decisions[Resource.PRODUCTS, Action.UPDATE, "none"] is False
        assert decisions[Resource.CATEGORIES, Action.UPDATE, "owned"] is False
