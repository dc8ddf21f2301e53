"""Interactive session engine for TickrShell.

Two cooperating threads share one SessionState:

- the input loop (caller's thread) reads commands, publishes intents and
  renders local views;
- the receive loop (managed thread ``receive``) polls the bus and reconciles
  inbound messages into the cache.

Local subscription membership is driven by the service: the ``subscribe``
verb only publishes a request, and the symbol enters the cache when the
service echoes the Subscribe message back.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from infrastructure.logging.logger import get_logger
from infrastructure.threads.thread_manager import ThreadManager
from system.tickr_shell.adapters.currency.static_rates import StaticRateCurrencyService
from system.tickr_shell.config import TickrShellConfig
from system.tickr_shell.domain.messages import (
    Message,
    MessageType,
    price_history_request,
    query_message,
    subscribe_message,
    subscriptions_request,
    unsubscribe_message,
)
from system.tickr_shell.domain.models import Quote, is_valid_symbol
from system.tickr_shell.errors import InputFormatError, TickrShellError, TransportError
from system.tickr_shell.ports.bus import BusPort
from system.tickr_shell.ports.currency import CurrencyPort
from system.tickr_shell.session.commands import BANNER, help_lines, parse_command
from system.tickr_shell.session.console import Console
from system.tickr_shell.session.render import format_change, format_price, render_chart
from system.tickr_shell.session.state import SessionState

RECEIVE_THREAD = "receive"
PROMPT = "\n> "


class SessionEngine:
    """Drives one interactive TickrShell session.

    Attributes:
        bus: Transport endpoint to the DataService.
        config: Session configuration.
        state: Shared symbol cache.
        console: Shared terminal.
        currency: Converter used for every printed price.
        thread_manager: Runs the receive loop.
        running: Set while the session is live; cleared by ``stop``.
    """

    def __init__(
        self,
        bus: BusPort,
        config: TickrShellConfig | None = None,
        state: SessionState | None = None,
        console: Console | None = None,
        currency: CurrencyPort | None = None,
        thread_manager: ThreadManager | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.logger = get_logger(self.__class__.__name__)
        self.bus = bus
        self.config = config or TickrShellConfig()
        self.state = state or SessionState(
            history_size=self.config.history_size,
            display_currency=self.config.display_currency,
        )
        self.console = console or Console()
        self.currency = currency or StaticRateCurrencyService(self.config.currency_rates)
        self.thread_manager = thread_manager or ThreadManager(config=self.config.threads)
        self._clock = clock
        self._sleep = sleep

        self.running = threading.Event()
        self.running.set()
        self._started = False

        self._subscriptions_received = threading.Event()
        self._handshake_attempts = 0
        self._next_handshake_at = 0.0
        self._handshake_abandoned = False

        self._handlers: dict[str, Callable[..., None]] = {
            "subscribe": self.subscribe,
            "unsubscribe": self.unsubscribe,
            "query": self.query,
            "graph": self.graph,
            "history": self.history,
            "list": self.list_stocks,
            "help": self.show_help,
            "clear": self.clear_screen,
            "currency": self.set_currency,
            "exit": self.stop,
        }
        self._inbound: dict[MessageType, Callable[[Message], None]] = {
            MessageType.QUOTE_UPDATE: self._on_quote_update,
            MessageType.PRICE_HISTORY_RESPONSE: self._on_price_history,
            MessageType.SUBSCRIPTIONS_LIST: self._on_subscriptions_list,
            MessageType.SUBSCRIBE: self._on_subscribe_ack,
            MessageType.ERROR: self._on_error,
        }

    # Lifecycle
    # --------------------------------------------

    def start(self) -> None:
        """Wait for the service, request the persisted subscriptions and
        start the receive loop. Idempotent."""
        if self._started:
            return
        self._started = True

        if self.config.startup_delay:
            self._sleep(self.config.startup_delay)
        self._request_subscriptions()
        self.thread_manager.start_thread(self._receive_loop, name=RECEIVE_THREAD)

    def run(self) -> None:
        """Run the input loop until ``exit`` or end of input.

        Raises:
            TickrShellError: If the receive loop died with an exception.
        """
        self.start()
        try:
            while self.running.is_set():
                try:
                    line = self.console.read_line(PROMPT)
                except EOFError:
                    self.logger.debug("Input closed")
                    break
                if self.running.is_set():
                    self.handle_command(line)
        finally:
            self.stop()
            self.thread_manager.wait_for_thread(RECEIVE_THREAD, timeout=self._join_timeout())

        status = self.thread_manager.get_thread_status(RECEIVE_THREAD)
        if status and status["status"] == "error":
            raise TickrShellError(f"Receive loop failed: {status['exception']}")

    def stop(self) -> None:
        self.running.clear()
        self.thread_manager.request_shutdown()

    def _live(self) -> bool:
        return self.running.is_set() and not self.thread_manager.shutdown_event.is_set()

    def _join_timeout(self) -> float:
        return self.config.receive_timeout + self.config.poll_interval + 1.0

    # Command handling
    # --------------------------------------------

    def handle_command(self, line: str) -> None:
        """Parse and execute one input line. Bad input is reported, never raised."""
        try:
            command = parse_command(line)
        except InputFormatError as e:
            self.console.print(str(e))
            return

        if command is None:
            return

        handler = self._handlers[command.verb]
        if command.argument is None:
            handler()
        else:
            handler(command.argument)

    def subscribe(self, symbol: str) -> None:
        if not self._check_symbol(symbol):
            return
        if not self._confirm("subscribe to", symbol):
            self.console.print("Subscription cancelled.")
            return
        if self._send(subscribe_message(symbol)):
            self.console.print(f"Subscribing to {symbol}")

    def unsubscribe(self, symbol: str) -> None:
        if not self._check_symbol(symbol):
            return
        self._send(unsubscribe_message(symbol))
        self.state.forget(symbol)
        self.console.print(f"Unsubscribed from {symbol}")

    def query(self, symbol: str) -> None:
        if self._check_symbol(symbol):
            self._send(query_message(symbol))

    def history(self, symbol: str) -> None:
        if self._check_symbol(symbol):
            self._send(price_history_request(symbol))

    def graph(self, symbol: str) -> None:
        data = self.state.get(symbol)
        if data is None or not data.price_history:
            self.console.print(f"No data available for {symbol}")
            return

        target = self.state.display_currency
        prices = [self._convert(p, data.currency, target)[0] for p in data.price_history]
        self.console.print(*render_chart(symbol, prices, height=self.config.chart_height))

    def list_stocks(self) -> None:
        entries = self.state.snapshot()
        if not entries:
            self.console.print("No stocks subscribed.")
            return

        lines = ["Subscribed stocks:"]
        for symbol, data in sorted(entries):
            price = self._display_price(data.current_price, data.currency)
            lines.append(f"{symbol}: {price} {format_change(data.change_percent)}")
        self.console.print(*lines)

    def show_help(self) -> None:
        self.console.print(*help_lines())

    def clear_screen(self) -> None:
        self.console.clear()
        self.print_banner()

    def print_banner(self) -> None:
        self.console.print(*BANNER)

    def set_currency(self, code: str) -> None:
        code = code.upper()
        if not self.currency.supports(code):
            self.console.print(
                f"Unsupported currency: {code}",
                f"Supported currencies: {', '.join(self.currency.currencies())}",
            )
            return
        self.state.display_currency = code
        self.console.print(f"Display currency set to {code}")

    def _check_symbol(self, symbol: str) -> bool:
        if is_valid_symbol(symbol):
            return True
        self.console.print("Invalid symbol format. Symbols should be 1-5 uppercase letters.")
        return False

    def _confirm(self, action: str, symbol: str) -> bool:
        try:
            reply = self.console.read_line(f"Are you sure you want to {action} {symbol}? (y/n): ")
        except EOFError:
            return False
        return reply.strip() in ("y", "Y")

    def _send(self, message: Message) -> bool:
        """Publish a message; failures are logged and reported, never raised."""
        try:
            self.bus.send(message)
        except TransportError as e:
            self.logger.error(f"Send failed: {e}")
            self.console.print(f"Could not send {message.type.value} request, please retry.")
            return False
        return True

    # Inbound reconciliation
    # --------------------------------------------

    def _receive_loop(self) -> None:
        try:
            while self._live():
                message = self.bus.receive()
                if message is not None:
                    self.handle_message(message)
                self._retry_handshake_if_due()
                self._sleep(self.config.poll_interval)
        except BaseException:
            # The input loop notices on its next line.
            self.running.clear()
            self.console.print("", "Lost connection to the DataService. Press Enter to exit.")
            raise
        self.logger.debug("Receive loop stopped")

    def handle_message(self, message: Message) -> None:
        """Reconcile one inbound message into the session state."""
        handler = self._inbound.get(message.type)
        if handler is None:
            self.logger.warning(f"Ignoring unexpected inbound {message.type.value} message")
            return
        handler(message)

    def _on_quote_update(self, message: Message) -> None:
        quote = message.quote
        data = self.state.update_if_tracked(quote)
        if data is not None:
            self.console.print(f"Received stock update: {self._describe(quote)}")
        else:
            self.console.print(f"Queried stock: {self._describe(quote)}")

    def _on_price_history(self, message: Message) -> None:
        symbol = message.symbol
        data = self.state.replace_history(symbol, message.price_history)
        kept = message.price_history[-len(data.price_history):] if data.price_history else []

        lines = [f"Price history for: {symbol}"]
        lines.extend(f"  {self._display_price(q.price, q.currency)}" for q in kept)
        self.console.print(*lines)

    def _on_subscriptions_list(self, message: Message) -> None:
        self._subscriptions_received.set()
        added = self.state.restore(message.subscriptions)
        for symbol in added:
            self.console.print(f"Restored subscription to stock: {symbol}")
            self._send(query_message(symbol))
        self.console.print(f"Number of subscribed stocks in local cache: {len(self.state)}")
        self.console.write(PROMPT)

    def _on_subscribe_ack(self, message: Message) -> None:
        if self.state.track(message.symbol):
            self.console.print(f"Subscribed to stock: {message.symbol}")

    def _on_error(self, message: Message) -> None:
        self.console.print(f"Error: {message.error}")

    # Subscription handshake
    # --------------------------------------------

    def _request_subscriptions(self) -> None:
        self._handshake_attempts += 1
        self._next_handshake_at = self._clock() + self.config.handshake_interval
        self.logger.debug(f"Requesting subscriptions (attempt {self._handshake_attempts})")
        self._send(subscriptions_request())

    def _retry_handshake_if_due(self) -> None:
        if self._subscriptions_received.is_set() or self._handshake_abandoned:
            return
        if self._clock() < self._next_handshake_at:
            return
        if self._handshake_attempts > self.config.handshake_retries:
            self._handshake_abandoned = True
            self.logger.warning("DataService never sent the subscription list; continuing without it")
            return
        self._request_subscriptions()

    # Formatting
    # --------------------------------------------

    def _convert(self, amount: float, currency: str, target: str) -> tuple[float, str]:
        try:
            return self.currency.convert(amount, currency, target), target
        except InputFormatError:
            return amount, currency

    def _display_price(self, amount: float, currency: str) -> str:
        converted, shown = self._convert(amount, currency, self.state.display_currency)
        return format_price(converted, shown)

    def _describe(self, quote: Quote) -> str:
        price = self._display_price(quote.price, quote.currency)
        return f"{quote.symbol} - {price} {format_change(quote.change_percent)}"
