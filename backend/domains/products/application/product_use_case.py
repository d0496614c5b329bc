"""
Product Use Case - 商品变体用例

变体与其属性取值总在同一事务内写入：
先删除变体现有的取值，再校验同一基础商品下没有其他变体拥有完全相同的取值组合。
"""

from collections import defaultdict

from sqlalchemy.ext.asyncio import AsyncSession

from domains.products.infrastructure.models import Product, ProductAttribute
from domains.products.presentation.schemas import (
    AttrValue,
    ProductWithAttributesCreate,
    ProductWithAttributesUpdate,
)
from exceptions import ConflictError, NotFoundError, ValidationError
from libs.db.repos_factory import ReposFactory
from utils.logging import get_logger

logger = get_logger(__name__)


def has_duplicate_variant(
    base_attrs: list[ProductAttribute],
    attributes: list[AttrValue],
    custom_attribute_ids: list[int],
) -> bool:
    """同一基础商品下是否已有变体具有完全相同的取值组合

    未赋值的自定义属性按空字符串参与比较。
    """
    by_product: dict[int, dict[int, str]] = defaultdict(
        lambda: {attribute_id: "" for attribute_id in custom_attribute_ids}
    )
    for attr in base_attrs:
        by_product[attr.product_id][attr.attribute_id] = attr.value

    return any(
        all(values.get(attr.attr_id) == attr.value for attr in attributes)
        for values in by_product.values()
    )


class ProductUseCase:
    """商品变体用例"""

    def __init__(self, db: AsyncSession, repos: ReposFactory) -> None:
        self.db = db
        self.product_repo = repos.products()
        self.base_product_repo = repos.base_products()
        self.product_attr_repo = repos.product_attrs()
        self.custom_attr_repo = repos.custom_attributes()
        self.attribute_repo = repos.attributes()

    # =========================================================================
    # 查询
    # =========================================================================

    async def get(self, product_id: int) -> Product:
        product = await self.product_repo.get(product_id)
        if product is None:
            raise NotFoundError("products", product_id)
        return product

    async def list_from(self, from_id: int, count: int) -> list[Product]:
        return await self.product_repo.list_from(from_id, count)

    async def list_by_base_product(self, base_product_id: int) -> list[Product]:
        return await self.product_repo.list_by_base_product(base_product_id)

    async def get_attributes(self, product_id: int) -> list[ProductAttribute]:
        await self.get(product_id)
        return await self.product_attr_repo.list_by_product(product_id)

    async def get_store_id(self, product_id: int) -> int:
        product = await self.get(product_id)
        base_product = await self.base_product_repo.get(product.base_product_id)
        if base_product is None:
            raise NotFoundError("base_products", product.base_product_id)
        return base_product.store_id

    # =========================================================================
    # 写入
    # =========================================================================

    async def create(self, payload: ProductWithAttributesCreate) -> Product:
        """创建变体及其属性取值

        币种取自基础商品；货号在店铺内唯一。
        """
        data = payload.product.model_dump(mode="json")
        base_product = await self.base_product_repo.get(data["base_product_id"])
        if base_product is None:
            raise NotFoundError("base_products", data["base_product_id"])

        await self._check_vendor_code(base_product.store_id, data["vendor_code"])

        product = await self.product_repo.create(currency=base_product.currency, **data)
        await self._write_attributes(product, payload.attributes)
        await self.db.commit()
        logger.info("Created product %s of base product %s", product.id, base_product.id)
        return product

    async def update(self, product_id: int, payload: ProductWithAttributesUpdate) -> Product:
        """更新变体和/或其属性取值"""
        product = await self.get(product_id)

        if payload.product is not None:
            values = payload.product.changes()
            vendor_code = values.get("vendor_code")
            if vendor_code and vendor_code != product.vendor_code:
                base_product = await self.base_product_repo.get(product.base_product_id)
                if base_product is None:
                    raise NotFoundError("base_products", product.base_product_id)
                await self._check_vendor_code(base_product.store_id, vendor_code, product_id)
            product = await self.product_repo.update(product_id, **values)

        if payload.attributes is not None:
            await self._write_attributes(product, payload.attributes)

        await self.db.commit()
        return product

    async def deactivate(self, product_id: int) -> Product:
        """停用变体并删除其属性取值"""
        product = await self.product_repo.deactivate(product_id)
        await self.product_attr_repo.delete_all_for_product(product_id)
        await self.db.commit()
        return product

    async def _check_vendor_code(
        self,
        store_id: int,
        vendor_code: str,
        exclude_id: int | None = None,
    ) -> None:
        if await self.product_repo.vendor_code_exists(store_id, vendor_code, exclude_id):
            raise ValidationError(
                f"Vendor code '{vendor_code}' already exists for store {store_id}",
                details={"field": "vendor_code"},
            )

    async def _write_attributes(self, product: Product, attributes: list[AttrValue]) -> None:
        base_product_id = product.base_product_id
        await self.product_attr_repo.delete_all_for_product(product.id)

        base_attrs = await self.product_attr_repo.list_by_base_product(base_product_id)
        custom_attrs = await self.custom_attr_repo.list_by_base_product(base_product_id)
        if attributes and has_duplicate_variant(
            base_attrs,
            attributes,
            [custom_attr.attribute_id for custom_attr in custom_attrs],
        ):
            raise ConflictError(
                "Product with the same attribute values already exists",
                resource="products",
            )

        for attr_value in attributes:
            attribute = await self.attribute_repo.get(attr_value.attr_id)
            if attribute is None:
                raise NotFoundError("attributes", attr_value.attr_id)
            await self.product_attr_repo.create(
                product_id=product.id,
                base_product_id=base_product_id,
                attribute_id=attr_value.attr_id,
                value=attr_value.value,
                value_type=attribute.value_type,
                meta_field=attr_value.meta_field,
            )
