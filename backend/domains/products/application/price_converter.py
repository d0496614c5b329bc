"""
Price Converter - 按请求币种换算变体价格

只处理响应副本，不修改 ORM 对象。
"""

from domains.products.presentation.schemas import (
    BaseProductWithVariants,
    ProductResponse,
    VariantWithAttributes,
)
from libs.types import Currency
from utils.logging import get_logger

logger = get_logger(__name__)


def recalc_currencies(
    product: ProductResponse,
    rates: dict[str, float] | None,
    currency: Currency,
) -> ProductResponse:
    """把变体价格换算到 currency

    没有汇率快照或缺少原币种的汇率时原样返回。
    """
    if rates is None or product.currency == currency.value:
        return product
    rate = rates.get(product.currency)
    if rate is None:
        logger.warning("No exchange rate from %s to %s", product.currency, currency.value)
        return product
    return product.model_copy(update={"price": product.price * rate, "currency": currency.value})


class PriceConverter:
    """请求级的价格换算器

    currency 为空时不做任何换算。
    """

    def __init__(
        self,
        currency: Currency | None = None,
        rates: dict[str, float] | None = None,
    ) -> None:
        self.currency = currency
        self.rates = rates

    def convert(self, product: ProductResponse) -> ProductResponse:
        if self.currency is None:
            return product
        return recalc_currencies(product, self.rates, self.currency)

    def convert_many(self, products: list[ProductResponse]) -> list[ProductResponse]:
        return [self.convert(product) for product in products]

    def convert_variants(self, item: BaseProductWithVariants) -> BaseProductWithVariants:
        if self.currency is None:
            return item
        variants = [
            VariantWithAttributes(product=self.convert(variant.product), attrs=variant.attrs)
            for variant in item.variants
        ]
        return item.model_copy(update={"variants": variants})
