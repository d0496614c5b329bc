"""
Moderator Comment Use Case - 审核意见用例

审核员对店铺和基础商品给出的审核意见；店主可读取自己店铺/商品上的意见。
"""

from sqlalchemy.ext.asyncio import AsyncSession

from domains.products.infrastructure.models import ModeratorProductComment
from domains.stores.infrastructure.models import ModeratorStoreComment
from exceptions import AuthenticationError, NotFoundError
from libs.db.repos_factory import ReposFactory


class ModeratorCommentUseCase:
    """审核意见用例"""

    def __init__(self, db: AsyncSession, repos: ReposFactory) -> None:
        self.db = db
        self.acl = repos.acl
        self.store_comment_repo = repos.moderator_store_comments()
        self.product_comment_repo = repos.moderator_product_comments()
        self.store_repo = repos.stores()
        self.base_product_repo = repos.base_products()

    def _moderator_id(self) -> int:
        if self.acl.user_id is None:
            raise AuthenticationError("Authentication required")
        return self.acl.user_id

    async def get_for_store(self, store_id: int) -> ModeratorStoreComment:
        comment = await self.store_comment_repo.find_latest(store_id)
        if comment is None:
            raise NotFoundError("moderator_store_comments", store_id)
        return comment

    async def create_for_store(self, store_id: int, comments: str) -> ModeratorStoreComment:
        if await self.store_repo.get(store_id) is None:
            raise NotFoundError("stores", store_id)
        comment = await self.store_comment_repo.create(self._moderator_id(), store_id, comments)
        await self.db.commit()
        return comment

    async def get_for_base_product(self, base_product_id: int) -> ModeratorProductComment:
        comment = await self.product_comment_repo.find_latest(base_product_id)
        if comment is None:
            raise NotFoundError("moderator_product_comments", base_product_id)
        return comment

    async def create_for_base_product(
        self,
        base_product_id: int,
        comments: str,
    ) -> ModeratorProductComment:
        if await self.base_product_repo.get(base_product_id) is None:
            raise NotFoundError("base_products", base_product_id)
        comment = await self.product_comment_repo.create(
            self._moderator_id(), base_product_id, comments
        )
        await self.db.commit()
        return comment
