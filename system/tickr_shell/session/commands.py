"""Command table and parser for the interactive shell."""

from __future__ import annotations

from dataclasses import dataclass

from system.tickr_shell.errors import InputFormatError


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """Static description of one verb."""

    verb: str
    takes_argument: bool
    argument_name: str
    description: str

    @property
    def usage(self) -> str:
        if self.takes_argument:
            return f"{self.verb} <{self.argument_name}>"
        return self.verb


@dataclass(frozen=True, slots=True)
class Command:
    """A parsed input line."""

    verb: str
    argument: str | None = None


COMMANDS: dict[str, CommandSpec] = {
    spec.verb: spec
    for spec in (
        CommandSpec("subscribe", True, "symbol", "Subscribe to stock updates"),
        CommandSpec("unsubscribe", True, "symbol", "Unsubscribe from stock"),
        CommandSpec("query", True, "symbol", "Get current price for a stock"),
        CommandSpec("graph", True, "symbol", "Show graph of recent prices (history needed)"),
        CommandSpec("history", True, "symbol", "Fetch price history of a stock"),
        CommandSpec("list", False, "", "Show all subscribed stocks"),
        CommandSpec("help", False, "", "Show this help"),
        CommandSpec("clear", False, "", "Clear the terminal"),
        CommandSpec("currency", True, "code", "Set display currency (e.g. EUR)"),
        CommandSpec("exit", False, "", "Exit application"),
    )
}

BANNER = (
    "=====================================",
    "  Welcome to TickrShell",
    "=====================================",
    "Track stock prices in real time.",
    "Subscribe to stock updates, query the latest prices, or view price history graphs.",
    "Type 'help' to see the list of available commands.",
    "-------------------------------------",
)

SAFETY_TIPS = (
    "",
    "Safety Tips:",
    "1. Always verify stock symbols before subscribing",
    "2. Use 'query' to check prices before subscribing",
    "3. Review 'history' to understand price volatility",
    "4. Use 'list' regularly to track your subscriptions",
    "5. Clear the screen with 'clear' if it gets cluttered",
    "",
)


def help_lines() -> list[str]:
    width = max(len(spec.usage) for spec in COMMANDS.values())
    lines = ["Commands:"]
    lines.extend(f"  {spec.usage.ljust(width)} - {spec.description}" for spec in COMMANDS.values())
    lines.extend(SAFETY_TIPS)
    return lines


def parse_command(line: str) -> Command | None:
    """Split a line into verb and optional argument.

    Extra tokens after the argument are ignored. Blank lines yield None.

    Raises:
        InputFormatError: For an unknown verb or a missing argument.
    """
    tokens = line.split()
    if not tokens:
        return None

    verb = tokens[0]
    spec = COMMANDS.get(verb)
    if spec is None:
        raise InputFormatError(
            f"Unknown command: {verb}\nType 'help' for available commands and safety tips."
        )

    argument = tokens[1] if len(tokens) > 1 else None
    if spec.takes_argument and argument is None:
        raise InputFormatError(f"Usage: {spec.usage}")

    return Command(verb=verb, argument=argument if spec.takes_argument else None)
