"""
Currency Exchange Repository - 汇率仓储实现
"""

from sqlalchemy import select

from domains.authorization.domain.types import Resource
from domains.catalog.infrastructure.models import CurrencyExchange, ExchangeRates
from libs.db.base_repository import AclRepositoryBase


class CurrencyExchangeRepository(AclRepositoryBase[CurrencyExchange]):
    """汇率仓储"""

    @property
    def model_class(self) -> type[CurrencyExchange]:
        return CurrencyExchange

    @property
    def resource(self) -> Resource:
        return Resource.CURRENCY_EXCHANGE

    async def get_latest(self) -> CurrencyExchange | None:
        query = select(CurrencyExchange).order_by(CurrencyExchange.id.desc()).limit(1)
        return await self._fetch_one(query)

    async def create(self, rates: ExchangeRates) -> CurrencyExchange:
        return await self._insert(CurrencyExchange(rates=rates))
