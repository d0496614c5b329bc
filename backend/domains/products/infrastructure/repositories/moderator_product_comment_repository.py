"""
Moderator Product Comment Repository - 商品审核意见仓储实现
"""

from sqlalchemy import select

from domains.authorization.domain.types import Resource
from domains.products.infrastructure.models import ModeratorProductComment
from libs.db.base_repository import AclRepositoryBase


class ModeratorProductCommentRepository(AclRepositoryBase[ModeratorProductComment]):
    @property
    def model_class(self) -> type[ModeratorProductComment]:
        return ModeratorProductComment

    @property
    def resource(self) -> Resource:
        return Resource.MODERATOR_PRODUCT_COMMENTS

    async def find_latest(self, base_product_id: int) -> ModeratorProductComment | None:
        """获取基础商品最新的一条审核意见"""
        query = (
            select(ModeratorProductComment)
            .where(ModeratorProductComment.base_product_id == base_product_id)
            .order_by(ModeratorProductComment.id.desc())
            .limit(1)
        )
        return await self._fetch_one(query)

    async def create(
        self,
        moderator_id: int,
        base_product_id: int,
        comments: str,
    ) -> ModeratorProductComment:
        return await self._insert(
            ModeratorProductComment(
                moderator_id=moderator_id,
                base_product_id=base_product_id,
                comments=comments,
            )
        )
