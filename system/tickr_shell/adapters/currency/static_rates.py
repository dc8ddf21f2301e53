"""Static-rate currency converter.

Converts through USD using a fixed table of units-per-dollar. Rates come
from configuration; there is no live FX feed.
"""

from __future__ import annotations

from system.tickr_shell.errors import InputFormatError


class StaticRateCurrencyService:
    """CurrencyPort implementation backed by a fixed rate table."""

    def __init__(self, rates: dict[str, float]):
        self.rates = {code.upper(): rate for code, rate in rates.items()}

    def supports(self, currency: str) -> bool:
        return currency.upper() in self.rates

    def convert(self, amount: float, from_currency: str, to_currency: str) -> float:
        source = from_currency.upper()
        target = to_currency.upper()
        if source == target:
            return amount
        for code in (source, target):
            if code not in self.rates:
                raise InputFormatError(f"Unsupported currency: {code}")
        return amount / self.rates[source] * self.rates[target]

    def currencies(self) -> list[str]:
        return sorted(self.rates)
