"""Message envelope exchanged with the DataService, plus its JSON codec.

Every frame on the bus is one UTF-8 JSON object::

    {"type": "...", "symbol": ..., "quote": ..., "priceHistory": [...],
     "subscriptions": [...], "error": "..."}

``type`` is the variant tag; payload fields that a variant does not carry are
omitted rather than sent as null.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from system.tickr_shell.domain.models import Quote
from system.tickr_shell.errors import DecodeError


class MessageType(str, Enum):
    """Variant tags carried in the ``type`` field."""

    SUBSCRIBE = "Subscribe"
    UNSUBSCRIBE = "Unsubscribe"
    QUERY = "Query"
    REQUEST_PRICE_HISTORY = "RequestPriceHistory"
    REQUEST_SUBSCRIPTIONS = "RequestSubscriptions"
    QUOTE_UPDATE = "QuoteUpdate"
    PRICE_HISTORY_RESPONSE = "PriceHistoryResponse"
    SUBSCRIPTIONS_LIST = "SubscriptionsList"
    ERROR = "Error"


_SYMBOL_TYPES = {
    MessageType.SUBSCRIBE,
    MessageType.UNSUBSCRIBE,
    MessageType.QUERY,
    MessageType.REQUEST_PRICE_HISTORY,
    MessageType.PRICE_HISTORY_RESPONSE,
}


class Message(BaseModel):
    """Tagged message. Only the fields relevant to ``type`` are set."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: MessageType
    symbol: str | None = None
    quote: Quote | None = None
    price_history: list[Quote] | None = Field(default=None, alias="priceHistory")
    subscriptions: list[str] | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _check_payload(self) -> Message:
        if self.type in _SYMBOL_TYPES and not self.symbol:
            raise ValueError(f"{self.type.value} requires a symbol")
        if self.type is MessageType.QUOTE_UPDATE and self.quote is None:
            raise ValueError("QuoteUpdate requires a quote")
        if self.type is MessageType.PRICE_HISTORY_RESPONSE and self.price_history is None:
            raise ValueError("PriceHistoryResponse requires priceHistory")
        if self.type is MessageType.SUBSCRIPTIONS_LIST and self.subscriptions is None:
            raise ValueError("SubscriptionsList requires subscriptions")
        if self.type is MessageType.ERROR and self.error is None:
            raise ValueError("Error requires an error text")
        return self


def subscribe_message(symbol: str) -> Message:
    return Message(type=MessageType.SUBSCRIBE, symbol=symbol)


def unsubscribe_message(symbol: str) -> Message:
    return Message(type=MessageType.UNSUBSCRIBE, symbol=symbol)


def query_message(symbol: str) -> Message:
    return Message(type=MessageType.QUERY, symbol=symbol)


def price_history_request(symbol: str) -> Message:
    return Message(type=MessageType.REQUEST_PRICE_HISTORY, symbol=symbol)


def subscriptions_request() -> Message:
    return Message(type=MessageType.REQUEST_SUBSCRIPTIONS)


def quote_update(quote: Quote) -> Message:
    return Message(type=MessageType.QUOTE_UPDATE, quote=quote)


def price_history_response(symbol: str, quotes: list[Quote]) -> Message:
    return Message(type=MessageType.PRICE_HISTORY_RESPONSE, symbol=symbol, price_history=quotes)


def subscriptions_list(symbols: list[str]) -> Message:
    return Message(type=MessageType.SUBSCRIPTIONS_LIST, subscriptions=symbols)


def error_message(text: str) -> Message:
    return Message(type=MessageType.ERROR, error=text)


def encode(message: Message) -> bytes:
    """Serialize a message to its wire frame."""
    return message.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


def decode(frame: bytes | str) -> Message:
    """Parse a wire frame.

    Raises:
        DecodeError: If the frame is not valid JSON, carries an unknown
            ``type`` or lacks the payload its type requires.
    """
    try:
        return Message.model_validate_json(frame)
    except ValidationError as e:
        raise DecodeError(f"Undecodable frame: {e.error_count()} validation error(s)") from e
