"""
User Roles API - 用户角色接口
"""

from fastapi import APIRouter, Depends, status

from domains.authorization.application import UserRoleUseCase
from domains.authorization.presentation.schemas import (
    UserRoleCreate,
    UserRoleDelete,
    UserRoleResponse,
)
from libs.api.deps import get_user_role_service

router = APIRouter()


@router.get("/user_roles/{user_id}", response_model=list[UserRoleResponse])
async def list_user_roles(
    user_id: int,
    user_role_service: UserRoleUseCase = Depends(get_user_role_service),
) -> list[UserRoleResponse]:
    roles = await user_role_service.list_for_user(user_id)
    return [UserRoleResponse.model_validate(r) for r in roles]


@router.post("/user_roles", response_model=UserRoleResponse, status_code=status.HTTP_201_CREATED)
async def create_user_role(
    data: UserRoleCreate,
    user_role_service: UserRoleUseCase = Depends(get_user_role_service),
) -> UserRoleResponse:
    """授予角色"""
    user_role = await user_role_service.create(data.user_id, data.role)
    return UserRoleResponse.model_validate(user_role)


@router.delete("/user_roles", response_model=UserRoleResponse)
async def delete_user_role(
    data: UserRoleDelete,
    user_role_service: UserRoleUseCase = Depends(get_user_role_service),
) -> UserRoleResponse:
    """撤销角色"""
    user_role = await user_role_service.delete(data.user_id, data.role)
    return UserRoleResponse.model_validate(user_role)


@router.delete("/user_roles/{user_id}", response_model=list[UserRoleResponse])
async def delete_all_user_roles(
    user_id: int,
    user_role_service: UserRoleUseCase = Depends(get_user_role_service),
) -> list[UserRoleResponse]:
    """撤销用户的全部角色"""
    roles = await user_role_service.delete_all(user_id)
    return [UserRoleResponse.model_validate(r) for r in roles]


@router.post(
    "/roles/default/{user_id}",
    response_model=UserRoleResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_default_role(
    user_id: int,
    user_role_service: UserRoleUseCase = Depends(get_user_role_service),
) -> UserRoleResponse:
    """为新用户授予默认角色（重复调用返回已有角色）"""
    user_role = await user_role_service.create_default(user_id)
    return UserRoleResponse.model_validate(user_role)
