"""
Base Repository - Repository 基类

提供受访问控制约束的 Repository 基类：每次数据访问都交给当前操作者的 Acl 评估。
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from domains.authorization.domain.acl import Acl
from domains.authorization.domain.types import Action, Resource
from exceptions import NotFoundError

T = TypeVar("T")


class AclRepositoryBase(ABC, Generic[T]):
    """受访问控制约束的 Repository 基类

    - 读取：逐行检查 READ，未通过的行视为不存在（不泄露存在性）
    - 创建：插入前以新实体的预映像检查 CREATE
    - 更新/停用：变更前以现有行检查，变更后再以新状态检查

    子类需要实现：
    - model_class: 返回模型类
    - resource: 返回资源类型

    Example:
        class StoreRepository(AclRepositoryBase[Store]):
            @property
            def model_class(self) -> type[Store]:
                return Store

            @property
            def resource(self) -> Resource:
                return Resource.STORES
    """

    def __init__(self, db: AsyncSession, acl: Acl) -> None:
        self.db = db
        self.acl = acl

    @property
    @abstractmethod
    def model_class(self) -> type[T]:
        """返回模型类"""
        ...

    @property
    @abstractmethod
    def resource(self) -> Resource:
        """返回资源类型"""
        ...

    # =========================================================================
    # 访问控制辅助
    # =========================================================================

    async def _authorize(self, action: Action, entity: Any = None) -> None:
        """检查权限，拒绝时抛出 AccessDeniedError"""
        await self.acl.check(self.resource, action, entity)

    async def _can_read(self, entity: T) -> bool:
        return await self.acl.is_allowed(self.resource, Action.READ, entity)

    async def _visible(self, entity: T | None) -> T | None:
        """对当前操作者不可见的行按不存在处理"""
        if entity is None:
            return None
        return entity if await self._can_read(entity) else None

    async def _visible_many(self, entities: Iterable[T]) -> list[T]:
        return [entity for entity in entities if await self._can_read(entity)]

    async def _fetch_all(self, query: Select) -> list[T]:
        result = await self.db.execute(query)
        return await self._visible_many(result.scalars().all())

    async def _fetch_one(self, query: Select) -> T | None:
        result = await self.db.execute(query)
        return await self._visible(result.scalars().first())

    async def _get_for_write(self, entity_id: int, action: Action) -> T:
        """加载待修改的行并检查权限

        不可见的行与不存在的行一样报 NotFoundError。
        """
        entity = await self._visible(await self.db.get(self.model_class, entity_id))
        if entity is None:
            raise NotFoundError(self.resource.value, entity_id)
        await self._authorize(action, entity)
        return entity

    # =========================================================================
    # 通用 CRUD
    # =========================================================================

    async def get(self, entity_id: int) -> T | None:
        """按主键获取（不存在或不可见时返回 None）"""
        return await self._visible(await self.db.get(self.model_class, entity_id))

    async def get_many(self, entity_ids: Sequence[int]) -> list[T]:
        """按主键批量获取，保持入参顺序，跳过不存在或不可见的行"""
        if not entity_ids:
            return []
        model = self.model_class
        result = await self.db.execute(select(model).where(model.id.in_(entity_ids)))
        by_id = {row.id: row for row in result.scalars().all()}
        rows = [by_id[entity_id] for entity_id in entity_ids if entity_id in by_id]
        return await self._visible_many(rows)

    async def find(
        self,
        skip: int = 0,
        limit: int | None = 20,
        order_by: str = "id",
        order_desc: bool = False,
        **filters: Any,
    ) -> list[T]:
        """分页查询（可见性过滤在分页之后进行）

        Args:
            skip: 跳过记录数
            limit: 返回记录数
            order_by: 排序字段名
            order_desc: 是否降序
            **filters: 等值过滤条件，值为 None 的条件被忽略
        """
        query = self._apply_filters(select(self.model_class), filters)

        if hasattr(self.model_class, order_by):
            order_column = getattr(self.model_class, order_by)
            query = query.order_by(order_column.desc() if order_desc else order_column.asc())

        query = query.offset(skip).limit(limit)
        return await self._fetch_all(query)

    async def count(self, **filters: Any) -> int:
        """统计行数（需要 READ 权限）"""
        await self._authorize(Action.READ)
        query = self._apply_filters(select(func.count()).select_from(self.model_class), filters)
        result = await self.db.execute(query)
        return result.scalar() or 0

    async def _insert(self, entity: T) -> T:
        await self._authorize(Action.CREATE, entity)
        self.db.add(entity)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def _update(self, entity_id: int, values: dict[str, Any]) -> T:
        entity = await self._get_for_write(entity_id, Action.UPDATE)
        for field, value in values.items():
            if hasattr(entity, field):
                setattr(entity, field, value)
        # 外键可能被改写，新状态同样需要满足权限
        await self._authorize(Action.UPDATE, entity)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def _deactivate(self, entity_id: int) -> T:
        entity = await self._get_for_write(entity_id, Action.DELETE)
        entity.is_active = False  # type: ignore[attr-defined]
        await self.db.flush()
        return entity

    async def _delete(self, entity: T) -> T:
        await self._authorize(Action.DELETE, entity)
        await self.db.delete(entity)
        await self.db.flush()
        return entity

    def _apply_filters(self, query: Select, filters: dict[str, Any]) -> Select:
        for field, value in filters.items():
            if value is not None:
                query = query.where(getattr(self.model_class, field) == value)
        return query


__all__ = ["AclRepositoryBase"]
