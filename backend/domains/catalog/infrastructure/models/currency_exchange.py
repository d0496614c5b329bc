"""
Currency Exchange Model - 汇率快照模型
"""

from sqlalchemy import JSON
from sqlalchemy.orm import Mapped, mapped_column

from libs.orm.base import BaseModel

# rates[目标币种][原币种] = 乘数
ExchangeRates = dict[str, dict[str, float]]


class CurrencyExchange(BaseModel):
    """汇率快照

    每次更新插入新行，读取时以最新一行为准。
    """

    __tablename__ = "currency_exchange"

    rates: Mapped[ExchangeRates] = mapped_column(JSON, nullable=False)
