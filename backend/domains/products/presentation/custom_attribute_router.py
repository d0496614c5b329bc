"""
Custom Attributes API - 自定义属性接口
"""

from fastapi import APIRouter, Depends, status

from domains.products.application import CustomAttributeUseCase
from domains.products.presentation.schemas import CustomAttributeCreate, CustomAttributeResponse
from libs.api.deps import get_custom_attribute_service

router = APIRouter()


@router.post("", response_model=CustomAttributeResponse, status_code=status.HTTP_201_CREATED)
async def create_custom_attribute(
    data: CustomAttributeCreate,
    custom_attribute_service: CustomAttributeUseCase = Depends(get_custom_attribute_service),
) -> CustomAttributeResponse:
    custom_attr = await custom_attribute_service.create(data.base_product_id, data.attribute_id)
    return CustomAttributeResponse.model_validate(custom_attr)


@router.get("/by_base_product/{base_product_id}", response_model=list[CustomAttributeResponse])
async def list_custom_attributes(
    base_product_id: int,
    custom_attribute_service: CustomAttributeUseCase = Depends(get_custom_attribute_service),
) -> list[CustomAttributeResponse]:
    custom_attrs = await custom_attribute_service.list_by_base_product(base_product_id)
    return [CustomAttributeResponse.model_validate(c) for c in custom_attrs]


@router.delete("/{custom_attribute_id}", response_model=CustomAttributeResponse)
async def delete_custom_attribute(
    custom_attribute_id: int,
    custom_attribute_service: CustomAttributeUseCase = Depends(get_custom_attribute_service),
) -> CustomAttributeResponse:
    custom_attr = await custom_attribute_service.delete(custom_attribute_id)
    return CustomAttributeResponse.model_validate(custom_attr)
