"""
Attribute Repository - 属性仓储实现
"""

from typing import Any

from domains.authorization.domain.types import Resource
from domains.catalog.infrastructure.models import Attribute
from exceptions import NotFoundError
from libs.db.base_repository import AclRepositoryBase


class AttributeRepository(AclRepositoryBase[Attribute]):
    """属性仓储"""

    @property
    def model_class(self) -> type[Attribute]:
        return Attribute

    @property
    def resource(self) -> Resource:
        return Resource.ATTRIBUTES

    async def list_all(self) -> list[Attribute]:
        return await self.find(limit=None)

    async def create(
        self,
        name: list[dict[str, Any]],
        value_type: str,
        meta_field: dict[str, Any] | None = None,
    ) -> Attribute:
        return await self._insert(
            Attribute(name=name, value_type=value_type, meta_field=meta_field)
        )

    async def update(self, attribute_id: int, **values: Any) -> Attribute:
        return await self._update(attribute_id, values)

    async def delete(self, attribute_id: int) -> Attribute:
        attribute = await self.get(attribute_id)
        if attribute is None:
            raise NotFoundError("attributes", attribute_id)
        return await self._delete(attribute)
