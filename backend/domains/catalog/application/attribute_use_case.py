"""
Attribute Use Case - 属性用例

单个属性的读取走 AttributeCache；写入提交后同步覆盖或移除缓存条目。
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from domains.authorization.domain.acl import Acl
from domains.authorization.domain.types import Action, Resource
from domains.catalog.infrastructure.cache import AttributeCache
from domains.catalog.infrastructure.repositories import AttributeRepository
from domains.catalog.presentation.schemas import (
    AttributeCreate,
    AttributeResponse,
    AttributeUpdate,
)
from exceptions import NotFoundError


class AttributeUseCase:
    """属性用例"""

    def __init__(
        self,
        db: AsyncSession,
        acl: Acl,
        attribute_cache: AttributeCache,
        attribute_repo: AttributeRepository | None = None,
    ) -> None:
        self.db = db
        self.acl = acl
        self.attribute_cache = attribute_cache
        self.attribute_repo = attribute_repo or AttributeRepository(db, acl)

    async def get(self, attribute_id: int) -> AttributeResponse:
        """获取属性（缓存优先）"""
        await self.acl.check(Resource.ATTRIBUTES, Action.READ)

        cached = await self.attribute_cache.get(attribute_id)
        if cached is not None:
            return cached

        attribute = await self.attribute_repo.get(attribute_id)
        if attribute is None:
            raise NotFoundError("attributes", attribute_id)

        response = AttributeResponse.model_validate(attribute)
        await self.attribute_cache.set(response)
        return response

    async def list_all(self) -> list[AttributeResponse]:
        attributes = await self.attribute_repo.list_all()
        return [AttributeResponse.model_validate(attribute) for attribute in attributes]

    async def create(self, payload: AttributeCreate) -> AttributeResponse:
        data = payload.model_dump(mode="json")
        attribute = await self.attribute_repo.create(**data)
        await self.db.commit()
        return AttributeResponse.model_validate(attribute)

    async def update(self, attribute_id: int, payload: AttributeUpdate) -> AttributeResponse:
        values: dict[str, Any] = payload.changes()
        attribute = await self.attribute_repo.update(attribute_id, **values)
        response = AttributeResponse.model_validate(attribute)
        await self.db.commit()
        await self.attribute_cache.set(response)
        return response

    async def delete(self, attribute_id: int) -> AttributeResponse:
        attribute = await self.attribute_repo.delete(attribute_id)
        response = AttributeResponse.model_validate(attribute)
        await self.db.commit()
        await self.attribute_cache.remove(attribute_id)
        return response
