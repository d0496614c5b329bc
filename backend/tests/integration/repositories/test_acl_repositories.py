"""
受访问控制约束的仓储集成测试

使用内存 SQLite 验证读取过滤、写前写后检查与所有权链。
"""

import pytest

from domains.authorization.domain.acl import ApplicationAcl, SystemAcl, UnauthorizedAcl
from domains.authorization.domain.ownership import OwnerResolver
from domains.authorization.domain.types import Role
from domains.authorization.infrastructure.entity_loader import SQLAlchemyEntityLoader
from domains.authorization.infrastructure.repositories import SQLAlchemyUserRoleRepository
from domains.products.infrastructure.repositories import (
    ProductAttributeRepository,
    ProductRepository,
)
from domains.stores.infrastructure.repositories import StoreRepository
from exceptions import AccessDeniedError, NotFoundError
from tests.factories import (
    grant_role,
    make_attribute,
    make_base_product,
    make_category,
    make_product,
    make_product_attribute,
    make_store,
    translation,
)

OWNER_ID = 1
OTHER_ID = 2


def _acl(db, user_id: int, *roles: Role) -> ApplicationAcl:
    return ApplicationAcl(roles, user_id, OwnerResolver(SQLAlchemyEntityLoader(db)))


@pytest.mark.integration
class TestStoreRepository:
    """店铺仓储测试"""

    async def test_owner_creates_store(self, db_session):
        """测试: 用户为自己创建店铺"""
        repo = StoreRepository(db_session, _acl(db_session, OWNER_ID, Role.USER))

        store = await repo.create(
            OWNER_ID,
            name=translation("Mine"),
            short_description=translation("Short"),
            slug="mine",
        )

        assert store.id is not None
        assert store.user_id == OWNER_ID

    async def test_create_for_other_user_is_denied(self, db_session):
        """测试: 用户不能以他人名义创建店铺（预映像检查）"""
        repo = StoreRepository(db_session, _acl(db_session, OWNER_ID, Role.USER))

        with pytest.raises(AccessDeniedError):
            await repo.create(
                OTHER_ID,
                name=translation("Not mine"),
                short_description=translation("Short"),
                slug="not-mine",
            )

    async def test_anonymous_reads_public_stores(self, db_session):
        """测试: 匿名用户可以读取店铺"""
        store = await make_store(db_session, OWNER_ID)
        repo = StoreRepository(db_session, UnauthorizedAcl())

        assert (await repo.get(store.id)).id == store.id
        assert [s.id for s in await repo.list_from(0, 10)] == [store.id]

    async def test_update_by_non_owner_is_denied(self, db_session):
        """测试: 非店主修改被拒绝"""
        store = await make_store(db_session, OWNER_ID)
        repo = StoreRepository(db_session, _acl(db_session, OTHER_ID, Role.USER))

        with pytest.raises(AccessDeniedError):
            await repo.update(store.id, slogan="hacked")

    async def test_transfer_to_other_user_is_denied(self, db_session):
        """测试: 店主不能把店铺转给他人（写后检查）"""
        store = await make_store(db_session, OWNER_ID)
        repo = StoreRepository(db_session, _acl(db_session, OWNER_ID, Role.USER))

        with pytest.raises(AccessDeniedError):
            await repo.update(store.id, user_id=OTHER_ID)

    async def test_deactivate_missing_store_is_not_found(self, db_session):
        """测试: 停用不存在的店铺报 NotFound"""
        repo = StoreRepository(db_session, SystemAcl())
        with pytest.raises(NotFoundError):
            await repo.deactivate(404)

    async def test_deactivated_store_is_hidden_from_list(self, db_session):
        """测试: 停用的店铺不出现在列表中"""
        store = await make_store(db_session, OWNER_ID)
        repo = StoreRepository(db_session, _acl(db_session, OWNER_ID, Role.USER))

        await repo.deactivate(store.id)

        assert await repo.list_from(0, 10) == []

    async def test_get_many_keeps_input_order(self, db_session):
        """测试: 批量获取保持入参顺序并跳过缺失的 ID"""
        first = await make_store(db_session, OWNER_ID, slug="first")
        second = await make_store(db_session, OTHER_ID, slug="second")
        repo = StoreRepository(db_session, UnauthorizedAcl())

        stores = await repo.get_many([second.id, 999, first.id])

        assert [s.id for s in stores] == [second.id, first.id]


@pytest.mark.integration
class TestProductRepository:
    """商品变体仓储测试（多跳所有权链）"""

    async def test_owner_updates_variant_through_chain(self, db_session):
        """测试: 店主可以修改自己店铺下的变体"""
        store = await make_store(db_session, OWNER_ID)
        base_product = await make_base_product(db_session, store, await make_category(db_session))
        product = await make_product(db_session, base_product)
        repo = ProductRepository(db_session, _acl(db_session, OWNER_ID, Role.USER))

        updated = await repo.update(product.id, price=99.0)

        assert updated.price == 99.0

    async def test_non_owner_cannot_update_variant(self, db_session):
        """测试: 其他用户不能修改变体"""
        store = await make_store(db_session, OWNER_ID)
        base_product = await make_base_product(db_session, store, await make_category(db_session))
        product = await make_product(db_session, base_product)
        repo = ProductRepository(db_session, _acl(db_session, OTHER_ID, Role.USER))

        with pytest.raises(AccessDeniedError):
            await repo.update(product.id, price=1.0)

    async def test_create_under_foreign_base_product_is_denied(self, db_session):
        """测试: 不能在他人的基础商品下创建变体"""
        store = await make_store(db_session, OWNER_ID)
        base_product = await make_base_product(db_session, store, await make_category(db_session))
        repo = ProductRepository(db_session, _acl(db_session, OTHER_ID, Role.USER))

        with pytest.raises(AccessDeniedError):
            await repo.create(
                base_product_id=base_product.id,
                vendor_code="X",
                price=1.0,
                currency="USD",
            )

    async def test_vendor_code_exists_is_scoped_to_store(self, db_session):
        """测试: 货号唯一性只在同一店铺内判断"""
        category = await make_category(db_session)
        store = await make_store(db_session, OWNER_ID, slug="a")
        other_store = await make_store(db_session, OTHER_ID, slug="b")
        base_product = await make_base_product(db_session, store, category)
        product = await make_product(db_session, base_product, vendor_code="SKU-1")
        repo = ProductRepository(db_session, SystemAcl())

        assert await repo.vendor_code_exists(store.id, "SKU-1")
        assert not await repo.vendor_code_exists(other_store.id, "SKU-1")
        assert not await repo.vendor_code_exists(store.id, "SKU-1", exclude_id=product.id)


@pytest.mark.integration
class TestUserRoleRepository:
    """用户角色仓储测试"""

    async def test_user_sees_only_own_roles(self, db_session):
        """测试: 用户读取他人的角色得到空列表"""
        await grant_role(db_session, OWNER_ID, Role.USER)
        await grant_role(db_session, OTHER_ID, Role.MODERATOR)
        repo = SQLAlchemyUserRoleRepository(db_session, _acl(db_session, OWNER_ID, Role.USER))

        assert [r.role for r in await repo.list_for_user(OWNER_ID)] == ["user"]
        assert await repo.list_for_user(OTHER_ID) == []

    async def test_user_cannot_grant_roles(self, db_session):
        """测试: 普通用户不能授予角色"""
        repo = SQLAlchemyUserRoleRepository(db_session, _acl(db_session, OWNER_ID, Role.USER))
        with pytest.raises(AccessDeniedError):
            await repo.create(OWNER_ID, Role.SUPERUSER)


@pytest.mark.integration
class TestProductAttributeRepository:
    """商品属性取值仓储测试"""

    async def _variant_with_attrs(self, db_session):
        store = await make_store(db_session, OWNER_ID)
        base_product = await make_base_product(db_session, store, await make_category(db_session))
        product = await make_product(db_session, base_product)
        color = await make_attribute(db_session, "Color")
        size = await make_attribute(db_session, "Size")
        await make_product_attribute(db_session, product, color, "red")
        await make_product_attribute(db_session, product, size, "XL")
        return product, color, size

    async def test_update_by_product_and_attribute(self, db_session):
        """测试: 按 (变体, 属性) 更新取值"""
        product, color, _ = await self._variant_with_attrs(db_session)
        repo = ProductAttributeRepository(db_session, _acl(db_session, OWNER_ID, Role.USER))

        updated = await repo.update(product.id, color.id, "blue", meta_field="#0000ff")

        assert updated.value == "blue"
        assert updated.meta_field == "#0000ff"

    async def test_update_missing_pair_is_not_found(self, db_session):
        """测试: 变体没有该属性时报 NotFound"""
        product, _, _ = await self._variant_with_attrs(db_session)
        repo = ProductAttributeRepository(db_session, SystemAcl())

        with pytest.raises(NotFoundError):
            await repo.update(product.id, 999, "x")

    async def test_delete_all_not_in_list(self, db_session):
        """测试: 只保留列表中的属性取值"""
        product, color, size = await self._variant_with_attrs(db_session)
        repo = ProductAttributeRepository(db_session, _acl(db_session, OWNER_ID, Role.USER))

        removed = await repo.delete_all_not_in_list(product.id, [color.id])

        assert [attr.attribute_id for attr in removed] == [size.id]
        assert [attr.attribute_id for attr in await repo.list_by_product(product.id)] == [color.id]

    async def test_non_owner_cannot_delete(self, db_session):
        """测试: 其他用户删除取值被拒绝"""
        product, _, _ = await self._variant_with_attrs(db_session)
        repo = ProductAttributeRepository(db_session, _acl(db_session, OTHER_ID, Role.USER))

        with pytest.raises(AccessDeniedError):
            await repo.delete_all_for_product(product.id)
