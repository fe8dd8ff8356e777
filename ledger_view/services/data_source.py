# ledger_view/services/data_source.py

import asyncio
import logging
import random
import time
from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path
from typing import Any, Awaitable, Optional, Protocol, Sequence, Union

from pydantic_core import from_json, to_json

from ledger_view.core.config.settings import Settings
from ledger_view.core.enums.currency import Currency
from ledger_view.core.enums.transaction_type import TransactionType
from ledger_view.logic.parser import RawTransaction

logger = logging.getLogger(__name__)

# --- Data Source Protocol ---

class TransactionDataSource(Protocol):
    """
    Anything that can hand over up to `count` raw transaction records,
    either directly or as an awaitable.
    """
    def fetch_transactions(
        self, count: int
    ) -> Union[Sequence[RawTransaction], Awaitable[Sequence[RawTransaction]]]:
        ...

# --- Synthetic Generator ---

DESCRIPTIONS: dict[TransactionType, list[str]] = {
    TransactionType.DEPOSIT: [
        "Card top-up",
        "Bank transfer",
        "PayPal top-up",
        "Salary payment",
        "Refund",
        "Crypto wallet top-up",
    ],
    TransactionType.WITHDRAW: [
        "Card withdrawal",
        "Bank transfer",
        "PayPal withdrawal",
        "Purchase",
        "Service payment",
        "Crypto wallet withdrawal",
    ],
    TransactionType.TRANSFER: [
        "Transfer to another user",
        "Internal transfer",
        "Currency exchange",
        "Transfer to savings account",
        "Investment transfer",
    ],
}

# (low, high) range of a single amount, in units of the currency
AMOUNT_RANGES: dict[Currency, tuple[float, float]] = {
    Currency.USD: (10, 5000),
    Currency.EUR: (10, 5000),
    Currency.RUB: (500, 300000),
    Currency.BTC: (0.001, 1),
    Currency.ETH: (0.01, 10),
}

AMOUNT_PRECISION: dict[Currency, Decimal] = {
    Currency.USD: Decimal("0.01"),
    Currency.EUR: Decimal("0.01"),
    Currency.RUB: Decimal("1"),
    Currency.BTC: Decimal("0.00001"),
    Currency.ETH: Decimal("0.00001"),
}

class MockTransactionGenerator:
    """
    Produces a plausible year of synthetic transactions, weighted towards
    recent dates. Pass a seeded `random.Random` for reproducible output.
    """
    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def generate(self, count: int, now: Optional[datetime] = None) -> list[dict[str, Any]]:
        now = now or datetime.now(timezone.utc)
        transactions = [
            self._generate_transaction(index, self._pick_date(now))
            for index in range(1, count + 1)
        ]
        # Newest first, the order a statement would list them
        transactions.sort(key=lambda txn: txn["date"], reverse=True)
        return [{**txn, "date": txn["date"].isoformat()} for txn in transactions]

    def _pick_date(self, now: datetime) -> datetime:
        weight = self._rng.random()
        if weight < 0.4:
            return self._random_between(now - timedelta(days=90), now)
        if weight < 0.7:
            return self._random_between(now - timedelta(days=180), now - timedelta(days=90))
        return self._random_between(now - timedelta(days=365), now - timedelta(days=180))

    def _random_between(self, start: datetime, end: datetime) -> datetime:
        return start + (end - start) * self._rng.random()

    def _generate_amount(self, transaction_type: TransactionType, currency: Currency) -> Decimal:
        low, high = AMOUNT_RANGES[currency]
        amount = self._rng.uniform(low, high)
        if transaction_type == TransactionType.DEPOSIT and self._rng.random() < 0.2:
            amount *= self._rng.uniform(2, 10)
        return Decimal(str(amount)).quantize(AMOUNT_PRECISION[currency], rounding=ROUND_HALF_UP)

    def _generate_transaction(self, index: int, moment: datetime) -> dict[str, Any]:
        transaction_type = self._rng.choice(list(TransactionType))
        currency = self._rng.choice(list(Currency))
        return {
            "id": f"t{index:06d}",
            "type": transaction_type.value,
            "amount": self._generate_amount(transaction_type, currency),
            "currency": currency.value,
            "date": moment,
            "description": self._rng.choice(DESCRIPTIONS[transaction_type]),
        }

# --- File Cache ---

class TransactionCache:
    """
    Opaque JSON file cache of raw transaction records. Entries older than
    `max_age` are discarded on read. Cache problems are never fatal: they are
    logged and treated as a cache miss.
    """
    def __init__(self, path: Path, max_age: timedelta, clock=time.time):
        self._path = Path(path)
        self._max_age = max_age
        self._clock = clock

    def load(self) -> Optional[list[dict[str, Any]]]:
        if not self._path.exists():
            return None
        try:
            payload = from_json(self._path.read_bytes())
            age_seconds = self._clock() - float(payload["timestamp"])
            records = payload["transactions"]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Ignoring unreadable transaction cache {self._path}: {e}")
            return None

        if age_seconds > self._max_age.total_seconds():
            logger.info(f"Transaction cache {self._path} expired ({age_seconds:.0f}s old), discarding.")
            self.clear()
            return None
        return records

    def save(self, records: Sequence[dict[str, Any]]):
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_bytes(to_json({"timestamp": self._clock(), "transactions": list(records)}))
        except OSError as e:
            logger.warning(f"Could not write transaction cache {self._path}: {e}")

    def clear(self):
        try:
            self._path.unlink()
        except FileNotFoundError:
            pass

# --- Default Data Source ---

class CachedMockDataSource:
    """
    Serves synthetic transactions, reusing cached ones when the cache holds
    at least as many as requested.
    """
    def __init__(
        self,
        generator: MockTransactionGenerator,
        cache: Optional[TransactionCache] = None,
        delay_seconds: float = 0.0
    ):
        self._generator = generator
        self._cache = cache
        self._delay_seconds = delay_seconds

    async def fetch_transactions(self, count: int) -> list[dict[str, Any]]:
        if self._delay_seconds > 0:
            await asyncio.sleep(self._delay_seconds)

        cached = self._cache.load() if self._cache else None
        if cached and len(cached) >= count:
            logger.info(f"Serving {count} transactions from cache.")
            return cached[:count]

        logger.info(f"Generating {count} transactions...")
        records = self._generator.generate(count)
        if self._cache:
            self._cache.save(records)
        return records

def build_default_data_source(settings: Settings) -> CachedMockDataSource:
    cache = None
    if settings.CACHE_ENABLED:
        cache = TransactionCache(settings.CACHE_FILE, timedelta(hours=settings.CACHE_MAX_AGE_HOURS))
    return CachedMockDataSource(
        generator=MockTransactionGenerator(),
        cache=cache,
        delay_seconds=settings.LOAD_DELAY_SECONDS
    )
