"""
Catalog API - 属性、分类与汇率接口
"""

from fastapi import APIRouter, Depends, status

from domains.catalog.application import AttributeUseCase, CategoryUseCase, CurrencyExchangeUseCase
from domains.catalog.presentation.schemas import (
    AttributeCreate,
    AttributeResponse,
    AttributeUpdate,
    CategoryAttributeRequest,
    CategoryAttributeResponse,
    CategoryCreate,
    CategoryResponse,
    CategoryTreeNode,
    CategoryUpdate,
    CurrencyExchangeResponse,
    CurrencyExchangeUpdate,
)
from libs.api.deps import (
    get_attribute_service,
    get_category_service,
    get_currency_exchange_service,
)

attributes_router = APIRouter()
categories_router = APIRouter()
currency_exchange_router = APIRouter()


# =============================================================================
# 属性
# =============================================================================


@attributes_router.get("", response_model=list[AttributeResponse])
async def list_attributes(
    attribute_service: AttributeUseCase = Depends(get_attribute_service),
) -> list[AttributeResponse]:
    return await attribute_service.list_all()


@attributes_router.post("", response_model=AttributeResponse, status_code=status.HTTP_201_CREATED)
async def create_attribute(
    data: AttributeCreate,
    attribute_service: AttributeUseCase = Depends(get_attribute_service),
) -> AttributeResponse:
    return await attribute_service.create(data)


@attributes_router.get("/{attribute_id}", response_model=AttributeResponse)
async def get_attribute(
    attribute_id: int,
    attribute_service: AttributeUseCase = Depends(get_attribute_service),
) -> AttributeResponse:
    return await attribute_service.get(attribute_id)


@attributes_router.put("/{attribute_id}", response_model=AttributeResponse)
async def update_attribute(
    attribute_id: int,
    data: AttributeUpdate,
    attribute_service: AttributeUseCase = Depends(get_attribute_service),
) -> AttributeResponse:
    return await attribute_service.update(attribute_id, data)


@attributes_router.delete("/{attribute_id}", response_model=AttributeResponse)
async def delete_attribute(
    attribute_id: int,
    attribute_service: AttributeUseCase = Depends(get_attribute_service),
) -> AttributeResponse:
    return await attribute_service.delete(attribute_id)


# =============================================================================
# 分类
# =============================================================================


@categories_router.get("", response_model=list[CategoryTreeNode])
async def get_category_tree(
    category_service: CategoryUseCase = Depends(get_category_service),
) -> list[CategoryTreeNode]:
    """完整分类树（根节点列表）"""
    return await category_service.get_all()


@categories_router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    category_service: CategoryUseCase = Depends(get_category_service),
) -> CategoryResponse:
    category = await category_service.create(data)
    return CategoryResponse.model_validate(category)


@categories_router.post(
    "/attributes",
    response_model=CategoryAttributeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_category_attribute(
    data: CategoryAttributeRequest,
    category_service: CategoryUseCase = Depends(get_category_service),
) -> CategoryAttributeResponse:
    """为分类挂载属性"""
    category_attr = await category_service.add_attribute(data.category_id, data.attribute_id)
    return CategoryAttributeResponse.model_validate(category_attr)


@categories_router.delete("/attributes", response_model=CategoryAttributeResponse)
async def delete_category_attribute(
    data: CategoryAttributeRequest,
    category_service: CategoryUseCase = Depends(get_category_service),
) -> CategoryAttributeResponse:
    category_attr = await category_service.delete_attribute(data.category_id, data.attribute_id)
    return CategoryAttributeResponse.model_validate(category_attr)


@categories_router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int,
    category_service: CategoryUseCase = Depends(get_category_service),
) -> CategoryResponse:
    category = await category_service.get(category_id)
    return CategoryResponse.model_validate(category)


@categories_router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    data: CategoryUpdate,
    category_service: CategoryUseCase = Depends(get_category_service),
) -> CategoryResponse:
    category = await category_service.update(category_id, data)
    return CategoryResponse.model_validate(category)


@categories_router.get("/{category_id}/attributes", response_model=list[AttributeResponse])
async def list_category_attributes(
    category_id: int,
    category_service: CategoryUseCase = Depends(get_category_service),
) -> list[AttributeResponse]:
    return await category_service.list_attributes(category_id)


# =============================================================================
# 汇率
# =============================================================================


@currency_exchange_router.get("", response_model=CurrencyExchangeResponse)
async def get_currency_exchange(
    currency_exchange_service: CurrencyExchangeUseCase = Depends(get_currency_exchange_service),
) -> CurrencyExchangeResponse:
    """最新汇率快照"""
    return await currency_exchange_service.get_latest()


@currency_exchange_router.post(
    "", response_model=CurrencyExchangeResponse, status_code=status.HTTP_201_CREATED
)
async def update_currency_exchange(
    data: CurrencyExchangeUpdate,
    currency_exchange_service: CurrencyExchangeUseCase = Depends(get_currency_exchange_service),
) -> CurrencyExchangeResponse:
    return await currency_exchange_service.update(data)
