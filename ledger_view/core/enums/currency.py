# ledger_view/core/enums/currency.py

from enum import Enum

class Currency(str, Enum):
    """
    Defines the fixed set of currencies a transaction can be denominated in.
    """
    USD = "USD"
    EUR = "EUR"
    RUB = "RUB"
    BTC = "BTC"
    ETH = "ETH"

    @classmethod
    def list(cls):
        return list(map(lambda c: c.value, cls))

    @classmethod
    def is_valid(cls, currency_str: str) -> bool:
        return currency_str in cls.list()
