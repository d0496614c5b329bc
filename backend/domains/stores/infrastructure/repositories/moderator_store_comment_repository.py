"""
Moderator Store Comment Repository - 店铺审核意见仓储实现
"""

from sqlalchemy import select

from domains.authorization.domain.types import Resource
from domains.stores.infrastructure.models import ModeratorStoreComment
from libs.db.base_repository import AclRepositoryBase


class ModeratorStoreCommentRepository(AclRepositoryBase[ModeratorStoreComment]):
    @property
    def model_class(self) -> type[ModeratorStoreComment]:
        return ModeratorStoreComment

    @property
    def resource(self) -> Resource:
        return Resource.MODERATOR_STORE_COMMENTS

    async def find_latest(self, store_id: int) -> ModeratorStoreComment | None:
        """获取店铺最新的一条审核意见"""
        query = (
            select(ModeratorStoreComment)
            .where(ModeratorStoreComment.store_id == store_id)
            .order_by(ModeratorStoreComment.id.desc())
            .limit(1)
        )
        return await self._fetch_one(query)

    async def create(self, moderator_id: int, store_id: int, comments: str) -> ModeratorStoreComment:
        return await self._insert(
            ModeratorStoreComment(moderator_id=moderator_id, store_id=store_id, comments=comments)
        )
