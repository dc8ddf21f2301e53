"""Text rendering for the list view and the ASCII price chart."""

from __future__ import annotations

from collections.abc import Sequence

AXIS_INDENT = " " * 7


def format_price(amount: float, currency: str) -> str:
    return f"{amount:.2f} {currency}"


def format_change(change_percent: float | None) -> str:
    return f"({(change_percent or 0.0):.2f}% change)"


def chart_levels(prices: Sequence[float], height: int) -> list[float]:
    """Lower bounds of the ``height + 1`` chart rows, lowest first."""
    low = min(prices)
    span = max(prices) - low
    return [low + span * i / height for i in range(height + 1)]


def render_chart(symbol: str, prices: Sequence[float], height: int = 10) -> list[str]:
    """Render prices (oldest first) as rows of stars, top row first.

    A price lands in row ``i`` when ``levels[i] <= price < levels[i + 1]``;
    the top row is open up to ``max + 1`` so the maximum always has a row.
    """
    if not prices:
        return [f"No data available for {symbol}"]

    levels = chart_levels(prices, height)
    top = max(prices) + 1
    lines = [f"Stock Price Graph for {symbol}:"]

    for i in range(height, -1, -1):
        upper = top if i == height else levels[i + 1]
        row = "".join("*" if levels[i] <= price < upper else " " for price in prices)
        lines.append(f"{levels[i]:6.2f} | {row}")

    lines.append(AXIS_INDENT + "-" * len(prices))
    lines.append(AXIS_INDENT + "Time ->")
    return lines
