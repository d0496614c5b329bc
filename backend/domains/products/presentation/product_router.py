"""
Products API - 商品变体接口
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from domains.products.application import PriceConverter, ProductUseCase
from domains.products.presentation.schemas import (
    AttrValue,
    ProductResponse,
    ProductWithAttributesCreate,
    ProductWithAttributesUpdate,
    StoreIdResponse,
)
from libs.api.deps import get_price_converter, get_product_service

router = APIRouter()


@router.get("", response_model=list[ProductResponse])
async def list_products(
    product_service: ProductUseCase = Depends(get_product_service),
    converter: PriceConverter = Depends(get_price_converter),
    from_id: Annotated[int, Query(alias="from", ge=0)] = 0,
    count: Annotated[int, Query(ge=1, le=100)] = 20,
) -> list[ProductResponse]:
    """变体列表，带 Currency 头时价格换算到该币种"""
    products = await product_service.list_from(from_id, count)
    return converter.convert_many([ProductResponse.model_validate(p) for p in products])


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    data: ProductWithAttributesCreate,
    product_service: ProductUseCase = Depends(get_product_service),
) -> ProductResponse:
    """创建变体及其属性取值"""
    product = await product_service.create(data)
    return ProductResponse.model_validate(product)


@router.get("/by_base_product/{base_product_id}", response_model=list[ProductResponse])
async def list_by_base_product(
    base_product_id: int,
    product_service: ProductUseCase = Depends(get_product_service),
    converter: PriceConverter = Depends(get_price_converter),
) -> list[ProductResponse]:
    products = await product_service.list_by_base_product(base_product_id)
    return converter.convert_many([ProductResponse.model_validate(p) for p in products])


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    product_service: ProductUseCase = Depends(get_product_service),
    converter: PriceConverter = Depends(get_price_converter),
) -> ProductResponse:
    product = await product_service.get(product_id)
    return converter.convert(ProductResponse.model_validate(product))


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    data: ProductWithAttributesUpdate,
    product_service: ProductUseCase = Depends(get_product_service),
) -> ProductResponse:
    product = await product_service.update(product_id, data)
    return ProductResponse.model_validate(product)


@router.delete("/{product_id}", response_model=ProductResponse)
async def deactivate_product(
    product_id: int,
    product_service: ProductUseCase = Depends(get_product_service),
) -> ProductResponse:
    product = await product_service.deactivate(product_id)
    return ProductResponse.model_validate(product)


@router.get("/{product_id}/attributes", response_model=list[AttrValue])
async def get_product_attributes(
    product_id: int,
    product_service: ProductUseCase = Depends(get_product_service),
) -> list[AttrValue]:
    attrs = await product_service.get_attributes(product_id)
    return [AttrValue.model_validate(attr) for attr in attrs]


@router.get("/{product_id}/store_id", response_model=StoreIdResponse)
async def get_product_store_id(
    product_id: int,
    product_service: ProductUseCase = Depends(get_product_service),
) -> StoreIdResponse:
    return StoreIdResponse(store_id=await product_service.get_store_id(product_id))
