"""
Stores API 集成测试
"""

import pytest

from domains.authorization.domain.types import Role
from domains.products.infrastructure.models import BaseProduct, Product
from tests.factories import (
    auth,
    grant_role,
    make_base_product,
    make_category,
    make_product,
    make_store,
    translation,
)

OWNER_ID = 1
OTHER_ID = 2


def _store_payload(user_id: int = OWNER_ID, slug: str = "my-store") -> dict:
    return {
        "user_id": user_id,
        "name": translation("My store"),
        "short_description": translation("Best goods"),
        "slug": slug,
        "email": "shop@example.com",
    }


@pytest.mark.integration
class TestStoresApi:
    """店铺接口测试"""

    async def test_health(self, client):
        """测试: 健康检查"""
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    async def test_user_creates_own_store(self, client, db_session):
        """测试: 用户创建自己的店铺"""
        await grant_role(db_session, OWNER_ID, Role.USER)

        response = await client.post("/api/v1/stores", json=_store_payload(), headers=auth(OWNER_ID))

        assert response.status_code == 201
        data = response.json()
        assert data["user_id"] == OWNER_ID
        assert data["slug"] == "my-store"
        assert data["is_active"] is True

    async def test_anonymous_create_is_forbidden(self, client):
        """测试: 匿名用户创建店铺被拒绝，响应不泄露细节"""
        response = await client.post("/api/v1/stores", json=_store_payload())

        assert response.status_code == 403
        assert response.json() == {"detail": "Forbidden", "code": "FORBIDDEN"}

    async def test_create_for_other_user_is_forbidden(self, client, db_session):
        """测试: 不能以他人名义创建店铺"""
        await grant_role(db_session, OWNER_ID, Role.USER)

        response = await client.post(
            "/api/v1/stores", json=_store_payload(user_id=OTHER_ID), headers=auth(OWNER_ID)
        )

        assert response.status_code == 403

    async def test_duplicate_slug_is_rejected(self, client, db_session):
        """测试: slug 重复返回 400 并指明字段"""
        await grant_role(db_session, OWNER_ID, Role.USER)
        await make_store(db_session, OTHER_ID, slug="taken")

        response = await client.post(
            "/api/v1/stores", json=_store_payload(slug="taken"), headers=auth(OWNER_ID)
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "slug"

    async def test_invalid_slug_is_rejected(self, client, db_session):
        """测试: slug 格式不合法返回 400"""
        await grant_role(db_session, OWNER_ID, Role.USER)

        response = await client.post(
            "/api/v1/stores", json=_store_payload(slug="Bad Slug!"), headers=auth(OWNER_ID)
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    async def test_malformed_authorization_is_unauthorized(self, client):
        """测试: Authorization 头不是用户 ID 时返回 401"""
        response = await client.get("/api/v1/stores", headers={"Authorization": "Bearer x"})
        assert response.status_code == 401

    async def test_anonymous_lists_and_gets_stores(self, client, db_session):
        """测试: 匿名用户可以浏览店铺"""
        first = await make_store(db_session, OWNER_ID, slug="first")
        second = await make_store(db_session, OTHER_ID, slug="second")

        listed = await client.get("/api/v1/stores", params={"from": second.id, "count": 10})
        single = await client.get(f"/api/v1/stores/{first.id}")

        assert [s["id"] for s in listed.json()] == [second.id]
        assert single.json()["slug"] == "first"

    async def test_get_missing_store_is_not_found(self, client):
        """测试: 店铺不存在返回 404"""
        response = await client.get("/api/v1/stores/404")
        assert response.status_code == 404

    async def test_get_by_user_id(self, client, db_session):
        """测试: 按店主获取店铺"""
        store = await make_store(db_session, OWNER_ID)
        response = await client.get(f"/api/v1/stores/by_user_id/{OWNER_ID}")
        assert response.json()["id"] == store.id

    async def test_owner_updates_store(self, client, db_session):
        """测试: 店主更新店铺"""
        await grant_role(db_session, OWNER_ID, Role.USER)
        store = await make_store(db_session, OWNER_ID)

        response = await client.put(
            f"/api/v1/stores/{store.id}", json={"slogan": "Cheap!"}, headers=auth(OWNER_ID)
        )

        assert response.status_code == 200
        assert response.json()["slogan"] == "Cheap!"

    async def test_non_owner_update_is_forbidden(self, client, db_session):
        """测试: 其他用户更新店铺被拒绝"""
        await grant_role(db_session, OTHER_ID, Role.USER)
        store = await make_store(db_session, OWNER_ID)

        response = await client.put(
            f"/api/v1/stores/{store.id}", json={"slogan": "Mine now"}, headers=auth(OTHER_ID)
        )

        assert response.status_code == 403

    async def test_null_required_field_is_rejected(self, client, db_session):
        """测试: 非空字段显式置为 null 返回 400，可空字段可以清空"""
        await grant_role(db_session, OWNER_ID, Role.USER)
        store = await make_store(db_session, OWNER_ID, slogan="Cheap!")

        rejected = await client.put(
            f"/api/v1/stores/{store.id}", json={"name": None}, headers=auth(OWNER_ID)
        )
        cleared = await client.put(
            f"/api/v1/stores/{store.id}", json={"slogan": None}, headers=auth(OWNER_ID)
        )

        assert rejected.status_code == 400
        assert rejected.json()["code"] == "VALIDATION_ERROR"
        assert cleared.status_code == 200
        assert cleared.json()["slogan"] is None
        assert cleared.json()["name"][0]["text"]

    async def test_deactivate_cascades_to_products(self, client, db_session):
        """测试: 停用店铺级联停用基础商品和变体"""
        await grant_role(db_session, OWNER_ID, Role.USER)
        store = await make_store(db_session, OWNER_ID)
        base_product = await make_base_product(db_session, store, await make_category(db_session))
        product = await make_product(db_session, base_product)

        response = await client.delete(f"/api/v1/stores/{store.id}", headers=auth(OWNER_ID))

        assert response.status_code == 200
        assert response.json()["is_active"] is False
        assert (await db_session.get(BaseProduct, base_product.id)).is_active is False
        assert (await db_session.get(Product, product.id)).is_active is False

    async def test_store_products_and_count(self, client, db_session):
        """测试: 店铺商品列表可跳过指定商品，计数包含全部"""
        store = await make_store(db_session, OWNER_ID)
        category = await make_category(db_session)
        first = await make_base_product(db_session, store, category)
        second = await make_base_product(db_session, store, category)

        listed = await client.get(
            f"/api/v1/stores/{store.id}/products", params={"skip_base_product_id": first.id}
        )
        counted = await client.get(f"/api/v1/stores/{store.id}/products/count")

        assert [bp["id"] for bp in listed.json()] == [second.id]
        assert counted.json() == {"count": 2}
