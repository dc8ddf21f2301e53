"""Thread-safe in-memory session state.

Holds the symbol -> StockData cache and the display currency. Both the input
thread (unsubscribe, currency) and the receive thread (every inbound data
event) write here, so every access goes through one lock and readers get
copies rather than live entries.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from threading import Lock

from system.tickr_shell.domain.models import DEFAULT_CURRENCY, MAX_HISTORY, Quote, StockData


class SessionState:
    """Per-symbol quote cache with a bounded price history.

    Writers: receive loop (quotes, history, restoration, subscribe acks) and
    input loop (unsubscribe, display currency).
    Readers: list and graph rendering.
    """

    def __init__(self, history_size: int = MAX_HISTORY, display_currency: str = DEFAULT_CURRENCY):
        self.history_size = history_size
        self._stocks: dict[str, StockData] = {}
        self._display_currency = display_currency
        self._lock = Lock()

    def _new_entry(self) -> StockData:
        return StockData(price_history=deque(maxlen=self.history_size))

    def _entry(self, symbol: str) -> StockData:
        data = self._stocks.get(symbol)
        if data is None:
            data = self._new_entry()
            self._stocks[symbol] = data
        return data

    def upsert_quote(self, quote: Quote) -> StockData:
        """Record a quote for its symbol, creating the entry if needed.

        The oldest price is evicted once the history is full. Returns a copy
        of the updated entry.
        """
        with self._lock:
            data = self._entry(quote.symbol)
            self._apply(data, quote)
            return data.copy()

    def update_if_tracked(self, quote: Quote) -> StockData | None:
        """Apply ``quote`` only when its symbol is already tracked.

        Check and update happen under one lock so a concurrent ``forget``
        cannot resurrect the entry. Returns a copy of the entry, or None.
        """
        with self._lock:
            data = self._stocks.get(quote.symbol)
            if data is None:
                return None
            self._apply(data, quote)
            return data.copy()

    @staticmethod
    def _apply(data: StockData, quote: Quote) -> None:
        data.current_price = quote.price
        data.change_percent = quote.change_percent if quote.change_percent is not None else 0.0
        data.currency = quote.currency
        data.price_history.append(quote.price)

    def replace_history(self, symbol: str, quotes: Iterable[Quote]) -> StockData:
        """Replace the local window with a service-provided history.

        Quotes are oldest first; only the newest ``history_size`` are kept.
        Returns a copy of the updated entry.
        """
        with self._lock:
            data = self._entry(symbol)
            data.price_history.clear()
            for quote in quotes:
                data.price_history.append(quote.price)
            return data.copy()

    def restore(self, symbols: Iterable[str]) -> list[str]:
        """Add an empty entry for every symbol not already tracked.

        Returns:
            Newly added symbols, in input order.
        """
        added: list[str] = []
        with self._lock:
            for symbol in symbols:
                if symbol not in self._stocks:
                    self._stocks[symbol] = self._new_entry()
                    added.append(symbol)
        return added

    def track(self, symbol: str) -> bool:
        """Add an empty entry for ``symbol``. Returns False if already tracked."""
        return bool(self.restore([symbol]))

    def forget(self, symbol: str) -> None:
        """Remove ``symbol`` if present."""
        with self._lock:
            self._stocks.pop(symbol, None)

    def is_tracked(self, symbol: str) -> bool:
        with self._lock:
            return symbol in self._stocks

    def get(self, symbol: str) -> StockData | None:
        """Copy of one entry, or None if untracked."""
        with self._lock:
            data = self._stocks.get(symbol)
            return data.copy() if data is not None else None

    def snapshot(self) -> list[tuple[str, StockData]]:
        """Consistent copy of every (symbol, StockData) pair."""
        with self._lock:
            return [(symbol, data.copy()) for symbol, data in self._stocks.items()]

    @property
    def display_currency(self) -> str:
        with self._lock:
            return self._display_currency

    @display_currency.setter
    def display_currency(self, currency: str) -> None:
        with self._lock:
            self._display_currency = currency

    def __len__(self) -> int:
        with self._lock:
            return len(self._stocks)

    def __contains__(self, symbol: str) -> bool:
        return self.is_tracked(symbol)
