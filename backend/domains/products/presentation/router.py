"""
Base Products API - 基础商品接口
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from domains.catalog.presentation.schemas import CategoryTreeNode
from domains.products.application import BaseProductUseCase, PriceConverter
from domains.products.presentation.schemas import (
    AttributeFilterOption,
    AutoCompleteRequest,
    BaseProductCreate,
    BaseProductResponse,
    BaseProductUpdate,
    BaseProductWithVariants,
    MostDiscountProducts,
    MostViewedProducts,
    RangeFilter,
    SearchFilters,
    SearchProductsByName,
)
from domains.stores.presentation.schemas import CountResponse
from libs.api.deps import get_base_product_service, get_price_converter

router = APIRouter()

Count = Annotated[int, Query(ge=1, le=100)]
Offset = Annotated[int, Query(ge=0)]


@router.get("", response_model=list[BaseProductResponse])
async def list_base_products(
    base_product_service: BaseProductUseCase = Depends(get_base_product_service),
    from_id: Annotated[int, Query(alias="from", ge=0)] = 0,
    count: Count = 20,
) -> list[BaseProductResponse]:
    base_products = await base_product_service.list_from(from_id, count)
    return [BaseProductResponse.model_validate(bp) for bp in base_products]


@router.post("", response_model=BaseProductResponse, status_code=status.HTTP_201_CREATED)
async def create_base_product(
    data: BaseProductCreate,
    base_product_service: BaseProductUseCase = Depends(get_base_product_service),
) -> BaseProductResponse:
    base_product = await base_product_service.create(data)
    return BaseProductResponse.model_validate(base_product)


# =============================================================================
# 搜索
# =============================================================================


@router.post("/search", response_model=list[BaseProductWithVariants])
async def search_base_products(
    data: SearchProductsByName,
    base_product_service: BaseProductUseCase = Depends(get_base_product_service),
    count: Count = 20,
    offset: Offset = 0,
) -> list[BaseProductWithVariants]:
    """按名称搜索商品"""
    return await base_product_service.search_by_name(data.name, count, offset, data.options)


@router.post("/search/filters", response_model=SearchFilters)
async def search_filters(
    data: AutoCompleteRequest,
    base_product_service: BaseProductUseCase = Depends(get_base_product_service),
) -> SearchFilters:
    """名称搜索结果上可用的筛选条件"""
    return await base_product_service.search_filters(data.name)


@router.post("/search/filters/count", response_model=CountResponse)
async def search_filters_count(
    data: SearchProductsByName,
    base_product_service: BaseProductUseCase = Depends(get_base_product_service),
) -> CountResponse:
    """搜索命中总数"""
    count = await base_product_service.search_filters_count(data.name, data.options)
    return CountResponse(count=count)


@router.post("/search/filters/price", response_model=RangeFilter)
async def search_filters_price(
    data: SearchProductsByName,
    base_product_service: BaseProductUseCase = Depends(get_base_product_service),
) -> RangeFilter:
    """命中商品变体的价格区间"""
    return await base_product_service.search_filters_price(data.name, data.options)


@router.post("/search/filters/category", response_model=list[CategoryTreeNode])
async def search_filters_category(
    data: SearchProductsByName,
    base_product_service: BaseProductUseCase = Depends(get_base_product_service),
) -> list[CategoryTreeNode]:
    """命中商品所属分类构成的分类树"""
    return await base_product_service.search_filters_category(data.name, data.options)


@router.post("/search/filters/attributes", response_model=list[AttributeFilterOption])
async def search_filters_attributes(
    data: SearchProductsByName,
    base_product_service: BaseProductUseCase = Depends(get_base_product_service),
) -> list[AttributeFilterOption]:
    """命中商品变体上的属性筛选条件"""
    return await base_product_service.search_filters_attributes(data.name, data.options)


@router.post("/auto_complete", response_model=list[str])
async def auto_complete_base_products(
    data: AutoCompleteRequest,
    base_product_service: BaseProductUseCase = Depends(get_base_product_service),
    count: Count = 10,
    offset: Offset = 0,
) -> list[str]:
    return await base_product_service.auto_complete(data.name, count, offset)


@router.post("/most_viewed", response_model=list[BaseProductWithVariants])
async def most_viewed(
    data: MostViewedProducts,
    base_product_service: BaseProductUseCase = Depends(get_base_product_service),
    count: Count = 20,
    offset: Offset = 0,
) -> list[BaseProductWithVariants]:
    return await base_product_service.most_viewed(count, offset, data.options)


@router.post("/most_discount", response_model=list[BaseProductWithVariants])
async def most_discount(
    data: MostDiscountProducts,
    base_product_service: BaseProductUseCase = Depends(get_base_product_service),
    count: Count = 20,
    offset: Offset = 0,
) -> list[BaseProductWithVariants]:
    return await base_product_service.most_discount(count, offset, data.options)


# =============================================================================
# 单个基础商品
# =============================================================================


@router.get("/with_variants", response_model=list[BaseProductWithVariants])
async def list_with_variants(
    store_id: int,
    base_product_service: BaseProductUseCase = Depends(get_base_product_service),
    converter: PriceConverter = Depends(get_price_converter),
    skip_base_product_id: int | None = None,
) -> list[BaseProductWithVariants]:
    """店铺内其他基础商品（含变体）"""
    items = await base_product_service.list_with_variants(store_id, skip_base_product_id)
    return [converter.convert_variants(item) for item in items]


@router.get("/by_product/{product_id}", response_model=BaseProductWithVariants)
async def get_by_product(
    product_id: int,
    base_product_service: BaseProductUseCase = Depends(get_base_product_service),
    converter: PriceConverter = Depends(get_price_converter),
) -> BaseProductWithVariants:
    return converter.convert_variants(await base_product_service.get_by_product(product_id))


@router.get("/{base_product_id}", response_model=BaseProductResponse)
async def get_base_product(
    base_product_id: int,
    base_product_service: BaseProductUseCase = Depends(get_base_product_service),
) -> BaseProductResponse:
    base_product = await base_product_service.get(base_product_id)
    return BaseProductResponse.model_validate(base_product)


@router.get("/{base_product_id}/with_variants", response_model=BaseProductWithVariants)
async def get_with_variants(
    base_product_id: int,
    base_product_service: BaseProductUseCase = Depends(get_base_product_service),
    converter: PriceConverter = Depends(get_price_converter),
) -> BaseProductWithVariants:
    item = await base_product_service.get_with_variants(base_product_id)
    return converter.convert_variants(item)


@router.put("/{base_product_id}", response_model=BaseProductResponse)
async def update_base_product(
    base_product_id: int,
    data: BaseProductUpdate,
    base_product_service: BaseProductUseCase = Depends(get_base_product_service),
) -> BaseProductResponse:
    base_product = await base_product_service.update(base_product_id, data)
    return BaseProductResponse.model_validate(base_product)


@router.post("/{base_product_id}/update_view", response_model=BaseProductResponse)
async def update_view(
    base_product_id: int,
    base_product_service: BaseProductUseCase = Depends(get_base_product_service),
) -> BaseProductResponse:
    """浏览量加一"""
    base_product = await base_product_service.update_views(base_product_id)
    return BaseProductResponse.model_validate(base_product)


@router.delete("/{base_product_id}", response_model=BaseProductResponse)
async def deactivate_base_product(
    base_product_id: int,
    base_product_service: BaseProductUseCase = Depends(get_base_product_service),
) -> BaseProductResponse:
    """停用基础商品（级联停用其变体）"""
    base_product = await base_product_service.deactivate(base_product_id)
    return BaseProductResponse.model_validate(base_product)
