"""
Moderator Comments API - 审核意见接口
"""

from fastapi import APIRouter, Depends, status

from domains.products.presentation.schemas import (
    ModeratorProductCommentCreate,
    ModeratorProductCommentResponse,
)
from domains.stores.application import ModeratorCommentUseCase
from domains.stores.presentation.schemas import (
    ModeratorStoreCommentCreate,
    ModeratorStoreCommentResponse,
)
from libs.api.deps import get_moderator_comment_service

router = APIRouter()


@router.post(
    "/moderator_product_comments",
    response_model=ModeratorProductCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_product_comment(
    data: ModeratorProductCommentCreate,
    comment_service: ModeratorCommentUseCase = Depends(get_moderator_comment_service),
) -> ModeratorProductCommentResponse:
    comment = await comment_service.create_for_base_product(data.base_product_id, data.comments)
    return ModeratorProductCommentResponse.model_validate(comment)


@router.get(
    "/moderator_product_comments/{base_product_id}",
    response_model=ModeratorProductCommentResponse,
)
async def get_product_comment(
    base_product_id: int,
    comment_service: ModeratorCommentUseCase = Depends(get_moderator_comment_service),
) -> ModeratorProductCommentResponse:
    """获取基础商品最新的审核意见"""
    comment = await comment_service.get_for_base_product(base_product_id)
    return ModeratorProductCommentResponse.model_validate(comment)


@router.post(
    "/moderator_store_comments",
    response_model=ModeratorStoreCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_store_comment(
    data: ModeratorStoreCommentCreate,
    comment_service: ModeratorCommentUseCase = Depends(get_moderator_comment_service),
) -> ModeratorStoreCommentResponse:
    comment = await comment_service.create_for_store(data.store_id, data.comments)
    return ModeratorStoreCommentResponse.model_validate(comment)


@router.get(
    "/moderator_store_comments/{store_id}",
    response_model=ModeratorStoreCommentResponse,
)
async def get_store_comment(
    store_id: int,
    comment_service: ModeratorCommentUseCase = Depends(get_moderator_comment_service),
) -> ModeratorStoreCommentResponse:
    """获取店铺最新的审核意见"""
    comment = await comment_service.get_for_store(store_id)
    return ModeratorStoreCommentResponse.model_validate(comment)
