"""
Currency Exchange Use Case - 汇率用例

汇率以快照方式保存，更新即插入新快照；读取取最新快照。
"""

from sqlalchemy.ext.asyncio import AsyncSession

from domains.authorization.domain.acl import Acl
from domains.catalog.infrastructure.repositories import CurrencyExchangeRepository
from domains.catalog.presentation.schemas import CurrencyExchangeResponse, CurrencyExchangeUpdate
from exceptions import NotFoundError
from libs.types import Currency
from utils.logging import get_logger

logger = get_logger(__name__)


class CurrencyExchangeUseCase:
    """汇率用例"""

    def __init__(
        self,
        db: AsyncSession,
        acl: Acl,
        currency_exchange_repo: CurrencyExchangeRepository | None = None,
    ) -> None:
        self.db = db
        self.currency_exchange_repo = currency_exchange_repo or CurrencyExchangeRepository(db, acl)

    async def get_latest(self) -> CurrencyExchangeResponse:
        latest = await self.currency_exchange_repo.get_latest()
        if latest is None:
            raise NotFoundError("currency_exchange")
        return CurrencyExchangeResponse.model_validate(latest)

    async def update(self, payload: CurrencyExchangeUpdate) -> CurrencyExchangeResponse:
        rates = payload.model_dump(mode="json")["rates"]
        snapshot = await self.currency_exchange_repo.create(rates)
        await self.db.commit()
        logger.info("Saved currency exchange snapshot %s", snapshot.id)
        return CurrencyExchangeResponse.model_validate(snapshot)

    async def rates_for(self, currency: Currency) -> dict[str, float] | None:
        """换算到 currency 的乘数表（原币种 -> 乘数），没有快照时返回 None"""
        latest = await self.currency_exchange_repo.get_latest()
        if latest is None:
            return None
        return latest.rates.get(currency.value, {})
