"""Domain models for TickrShell.

Quotes arrive from the DataService and are validated with Pydantic; the
per-symbol cache entry is a plain dataclass owned by the session state.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

MAX_HISTORY = 15
MAX_SYMBOL_LENGTH = 5
DEFAULT_CURRENCY = "USD"


def is_valid_symbol(symbol: str) -> bool:
    """Return True for 1-5 uppercase ASCII letters."""
    if not symbol or len(symbol) > MAX_SYMBOL_LENGTH:
        return False
    return all("A" <= c <= "Z" for c in symbol)


class Quote(BaseModel):
    """One price observation for a symbol.

    Attributes:
        symbol: Ticker the quote is for.
        price: Positive price in ``currency``.
        change_percent: Percent change against the service's reference, if known.
        currency: Three letter currency code.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    price: float = Field(gt=0)
    change_percent: float | None = None
    currency: str = DEFAULT_CURRENCY


@dataclass
class StockData:
    """Cached state for one tracked symbol.

    Attributes:
        current_price: Last observed price.
        change_percent: Last observed change, 0.0 when the service sent none.
        currency: Currency of the last observed quote.
        price_history: Recent prices, oldest first, bounded by ``maxlen``.
    """

    current_price: float = 0.0
    change_percent: float = 0.0
    currency: str = DEFAULT_CURRENCY
    price_history: deque[float] = field(default_factory=lambda: deque(maxlen=MAX_HISTORY))

    def copy(self) -> StockData:
        return StockData(
            current_price=self.current_price,
            change_percent=self.change_percent,
            currency=self.currency,
            price_history=deque(self.price_history, maxlen=self.price_history.maxlen),
        )
