"""Currency port interface.

Defines the converter the session uses to show prices in the user's
display currency.
"""

from __future__ import annotations

from typing import Protocol


class CurrencyPort(Protocol):
    """Protocol for currency conversion."""

    def supports(self, currency: str) -> bool:
        """Return True if ``currency`` can be converted to and from."""
        ...

    def convert(self, amount: float, from_currency: str, to_currency: str) -> float:
        """Convert ``amount`` between two supported currencies."""
        ...

    def currencies(self) -> list[str]:
        """Supported currency codes, sorted."""
        ...
