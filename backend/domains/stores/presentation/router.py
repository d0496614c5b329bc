"""
Stores API - 店铺接口
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from domains.catalog.presentation.schemas import CategoryTreeNode
from domains.products.presentation.schemas import BaseProductResponse
from domains.stores.application import StoreUseCase
from domains.stores.presentation.schemas import (
    CountResponse,
    StoreCreate,
    StoreResponse,
    StoreSearchRequest,
    StoreUpdate,
)
from libs.api.deps import get_store_service

router = APIRouter()


@router.get("", response_model=list[StoreResponse])
async def list_stores(
    store_service: StoreUseCase = Depends(get_store_service),
    from_id: Annotated[int, Query(alias="from", ge=0)] = 0,
    count: Annotated[int, Query(ge=1, le=100)] = 20,
) -> list[StoreResponse]:
    """按 ID 升序列出店铺"""
    stores = await store_service.list_from(from_id, count)
    return [StoreResponse.model_validate(s) for s in stores]


@router.post("", response_model=StoreResponse, status_code=status.HTTP_201_CREATED)
async def create_store(
    data: StoreCreate,
    store_service: StoreUseCase = Depends(get_store_service),
) -> StoreResponse:
    """创建店铺"""
    store = await store_service.create(data)
    return StoreResponse.model_validate(store)


@router.post("/search", response_model=list[StoreResponse])
async def search_stores(
    data: StoreSearchRequest,
    store_service: StoreUseCase = Depends(get_store_service),
    count: Annotated[int, Query(ge=1, le=100)] = 20,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> list[StoreResponse]:
    """按名称搜索店铺"""
    stores = await store_service.search_by_name(data.name, count, offset, data.options)
    return [StoreResponse.model_validate(s) for s in stores]


@router.post("/search/filters/count", response_model=CountResponse)
async def search_filters_count(
    data: StoreSearchRequest,
    store_service: StoreUseCase = Depends(get_store_service),
) -> CountResponse:
    """搜索命中总数"""
    count = await store_service.search_filters_count(data.name, data.options)
    return CountResponse(count=count)


@router.post("/search/filters/country", response_model=list[str])
async def search_filters_country(
    data: StoreSearchRequest,
    store_service: StoreUseCase = Depends(get_store_service),
) -> list[str]:
    """命中店铺所在的国家"""
    return await store_service.search_filters_country(data.name, data.options)


@router.post("/search/filters/category", response_model=list[CategoryTreeNode])
async def search_filters_category(
    data: StoreSearchRequest,
    store_service: StoreUseCase = Depends(get_store_service),
) -> list[CategoryTreeNode]:
    """命中店铺在售商品的分类树"""
    return await store_service.search_filters_category(data.name, data.options)


@router.post("/auto_complete", response_model=list[str])
async def auto_complete_stores(
    data: StoreSearchRequest,
    store_service: StoreUseCase = Depends(get_store_service),
    count: Annotated[int, Query(ge=1, le=100)] = 10,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> list[str]:
    """店铺名称补全"""
    return await store_service.auto_complete(data.name, count, offset)


@router.get("/by_user_id/{user_id}", response_model=StoreResponse)
async def get_store_by_user(
    user_id: int,
    store_service: StoreUseCase = Depends(get_store_service),
) -> StoreResponse:
    """获取用户的店铺"""
    store = await store_service.get_by_user(user_id)
    return StoreResponse.model_validate(store)


@router.get("/{store_id}", response_model=StoreResponse)
async def get_store(
    store_id: int,
    store_service: StoreUseCase = Depends(get_store_service),
) -> StoreResponse:
    store = await store_service.get(store_id)
    return StoreResponse.model_validate(store)


@router.put("/{store_id}", response_model=StoreResponse)
async def update_store(
    store_id: int,
    data: StoreUpdate,
    store_service: StoreUseCase = Depends(get_store_service),
) -> StoreResponse:
    store = await store_service.update(store_id, data)
    return StoreResponse.model_validate(store)


@router.delete("/{store_id}", response_model=StoreResponse)
async def deactivate_store(
    store_id: int,
    store_service: StoreUseCase = Depends(get_store_service),
) -> StoreResponse:
    """停用店铺（级联停用其商品）"""
    store = await store_service.deactivate(store_id)
    return StoreResponse.model_validate(store)


@router.get("/{store_id}/products", response_model=list[BaseProductResponse])
async def list_store_products(
    store_id: int,
    store_service: StoreUseCase = Depends(get_store_service),
    skip_base_product_id: int | None = None,
    offset: Annotated[int, Query(ge=0)] = 0,
    count: Annotated[int, Query(ge=1, le=100)] = 10,
) -> list[BaseProductResponse]:
    """列出店铺的基础商品"""
    base_products = await store_service.list_products(
        store_id, offset, count, exclude_id=skip_base_product_id
    )
    return [BaseProductResponse.model_validate(bp) for bp in base_products]


@router.get("/{store_id}/products/count", response_model=CountResponse)
async def count_store_products(
    store_id: int,
    store_service: StoreUseCase = Depends(get_store_service),
) -> CountResponse:
    return CountResponse(count=await store_service.count_products(store_id))
