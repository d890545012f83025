"""Market and user data streams decoded into typed events."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, TypeVar

from binance_spot.websocket import ErrHandler, WsConfig, WsHandler, ws_serve

BASE_URL = "wss://stream.binance.com:9443/ws"
BASE_FUTURE_URL = "wss://fstream.binance.com/ws"
COMBINED_BASE_URL = "wss://stream.binance.com:9443/stream?streams="

Serve = Callable[[WsConfig, WsHandler, ErrHandler], Any]

_T = TypeVar("_T")

# Errors that mean a message could not be decoded into an event.
_DECODE_ERRORS = (ValueError, TypeError, KeyError, IndexError, AttributeError)


@dataclass
class PriceLevel:
    """A price and the quantity offered at it, on the bid or the ask side."""

    price: str = ""
    quantity: str = ""


@dataclass
class WsPartialDepthEvent:
    """Snapshot of the top levels of an order book."""

    symbol: str = ""
    last_update_id: int = 0
    bids: list[PriceLevel] = field(default_factory=list)
    asks: list[PriceLevel] = field(default_factory=list)


@dataclass
class WsDepthEvent:
    """Incremental update of an order book."""

    event: str = ""
    time: int = 0
    symbol: str = ""
    update_id: int = 0
    first_update_id: int = 0
    bids: list[PriceLevel] = field(default_factory=list)
    asks: list[PriceLevel] = field(default_factory=list)


@dataclass
class WsKline:
    """One candlestick."""

    start_time: int = 0
    end_time: int = 0
    symbol: str = ""
    interval: str = ""
    first_trade_id: int = 0
    last_trade_id: int = 0
    open: str = ""
    close: str = ""
    high: str = ""
    low: str = ""
    volume: str = ""
    trade_num: int = 0
    is_final: bool = False
    quote_volume: str = ""
    active_buy_volume: str = ""
    active_buy_quote_volume: str = ""


def _kline_from_dict(data: Mapping[str, Any]) -> WsKline:
    return WsKline(
        start_time=data.get("t", 0),
        end_time=data.get("T", 0),
        symbol=data.get("s", ""),
        interval=data.get("i", ""),
        first_trade_id=data.get("f", 0),
        last_trade_id=data.get("L", 0),
        open=data.get("o", ""),
        close=data.get("c", ""),
        high=data.get("h", ""),
        low=data.get("l", ""),
        volume=data.get("v", ""),
        trade_num=data.get("n", 0),
        is_final=data.get("x", False),
        quote_volume=data.get("q", ""),
        active_buy_volume=data.get("V", ""),
        active_buy_quote_volume=data.get("Q", ""),
    )


@dataclass
class WsKlineEvent:
    """Candlestick update."""

    event: str = ""
    time: int = 0
    symbol: str = ""
    kline: WsKline = field(default_factory=WsKline)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WsKlineEvent:
        return cls(
            event=data.get("e", ""),
            time=data.get("E", 0),
            symbol=data.get("s", ""),
            kline=_kline_from_dict(_object(data.get("k") or {})),
        )


@dataclass
class WsAggTradeEvent:
    """Aggregate trade."""

    event: str = ""
    time: int = 0
    symbol: str = ""
    agg_trade_id: int = 0
    price: str = ""
    quantity: str = ""
    first_breakdown_trade_id: int = 0
    last_breakdown_trade_id: int = 0
    trade_time: int = 0
    is_buyer_maker: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WsAggTradeEvent:
        return cls(
            event=data.get("e", ""),
            time=data.get("E", 0),
            symbol=data.get("s", ""),
            agg_trade_id=data.get("a", 0),
            price=data.get("p", ""),
            quantity=data.get("q", ""),
            first_breakdown_trade_id=data.get("f", 0),
            last_breakdown_trade_id=data.get("l", 0),
            trade_time=data.get("T", 0),
            is_buyer_maker=data.get("m", False),
        )


@dataclass
class WsTradeEvent:
    """Single trade."""

    event: str = ""
    time: int = 0
    symbol: str = ""
    trade_id: int = 0
    price: str = ""
    quantity: str = ""
    buyer_order_id: int = 0
    seller_order_id: int = 0
    trade_time: int = 0
    is_buyer_maker: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WsTradeEvent:
        return cls(
            event=data.get("e", ""),
            time=data.get("E", 0),
            symbol=data.get("s", ""),
            trade_id=data.get("t", 0),
            price=data.get("p", ""),
            quantity=data.get("q", ""),
            buyer_order_id=data.get("b", 0),
            seller_order_id=data.get("a", 0),
            trade_time=data.get("T", 0),
            is_buyer_maker=data.get("m", False),
        )


@dataclass
class WsMarketStatEvent:
    """24 hour statistics of one market."""

    event: str = ""
    time: int = 0
    symbol: str = ""
    price_change: str = ""
    price_change_percent: str = ""
    weighted_avg_price: str = ""
    prev_close_price: str = ""
    last_price: str = ""
    close_qty: str = ""
    bid_price: str = ""
    bid_qty: str = ""
    ask_price: str = ""
    ask_qty: str = ""
    open_price: str = ""
    high_price: str = ""
    low_price: str = ""
    base_volume: str = ""
    quote_volume: str = ""
    open_time: int = 0
    close_time: int = 0
    first_id: int = 0
    last_id: int = 0
    count: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WsMarketStatEvent:
        return cls(
            event=data.get("e", ""),
            time=data.get("E", 0),
            symbol=data.get("s", ""),
            price_change=data.get("p", ""),
            price_change_percent=data.get("P", ""),
            weighted_avg_price=data.get("w", ""),
            prev_close_price=data.get("x", ""),
            last_price=data.get("c", ""),
            close_qty=data.get("Q", ""),
            bid_price=data.get("b", ""),
            bid_qty=data.get("B", ""),
            ask_price=data.get("a", ""),
            ask_qty=data.get("A", ""),
            open_price=data.get("o", ""),
            high_price=data.get("h", ""),
            low_price=data.get("l", ""),
            base_volume=data.get("v", ""),
            quote_volume=data.get("q", ""),
            open_time=data.get("O", 0),
            close_time=data.get("C", 0),
            first_id=data.get("F", 0),
            last_id=data.get("L", 0),
            count=data.get("n", 0),
        )


@dataclass
class WsMiniMarketStatEvent:
    """Condensed 24 hour statistics of one market."""

    event: str = ""
    time: int = 0
    symbol: str = ""
    last_price: str = ""
    open_price: str = ""
    high_price: str = ""
    low_price: str = ""
    base_volume: str = ""
    quote_volume: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WsMiniMarketStatEvent:
        return cls(
            event=data.get("e", ""),
            time=data.get("E", 0),
            symbol=data.get("s", ""),
            last_price=data.get("c", ""),
            open_price=data.get("o", ""),
            high_price=data.get("h", ""),
            low_price=data.get("l", ""),
            base_volume=data.get("v", ""),
            quote_volume=data.get("q", ""),
        )


def _object(document: Any) -> Mapping[str, Any]:
    if not isinstance(document, dict):
        raise ValueError("expected a JSON object")
    return document


def _array(document: Any) -> list[Any]:
    if not isinstance(document, list):
        raise ValueError("expected a JSON array")
    return document


def _int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0


def _text_at(item: Any, index: int) -> str:
    if isinstance(item, list) and len(item) > index and isinstance(item[index], str):
        return item[index]
    return ""


def _levels(items: Any) -> list[PriceLevel]:
    if not isinstance(items, list):
        return []
    return [PriceLevel(_text_at(item, 0), _text_at(item, 1)) for item in items]


def _partial_depth(data: Mapping[str, Any], symbol: str) -> WsPartialDepthEvent:
    return WsPartialDepthEvent(
        symbol=symbol,
        last_update_id=_int(data, "lastUpdateId"),
        bids=_levels(data.get("bids")),
        asks=_levels(data.get("asks")),
    )


def _depth(data: Mapping[str, Any]) -> WsDepthEvent:
    event = data.get("e")
    symbol = data.get("s")
    return WsDepthEvent(
        event=event if isinstance(event, str) else "",
        time=_int(data, "E"),
        symbol=symbol if isinstance(symbol, str) else "",
        update_id=_int(data, "u"),
        first_update_id=_int(data, "U"),
        bids=_levels(data.get("b")),
        asks=_levels(data.get("a")),
    )


def _combined_partial_depth(data: Mapping[str, Any]) -> WsPartialDepthEvent:
    stream = data.get("stream")
    stream = stream if isinstance(stream, str) else ""
    symbol = stream.split("@")[0].upper()
    return _partial_depth(_object(data.get("data")), symbol)


def _decoding_handler(
    parse: Callable[[Any], _T],
    handler: Callable[[_T], None],
    err_handler: ErrHandler,
) -> WsHandler:
    def on_message(message: bytes) -> None:
        try:
            event = parse(json.loads(message))
        except _DECODE_ERRORS as exc:
            err_handler(exc)
            return
        handler(event)

    return on_message


def _serve(
    endpoint: str,
    parse: Callable[[Any], _T],
    handler: Callable[[_T], None],
    err_handler: ErrHandler,
    serve: Serve,
) -> Any:
    return serve(WsConfig(endpoint), _decoding_handler(parse, handler, err_handler), err_handler)


def ws_partial_depth_serve(
    symbol: str,
    levels: str,
    handler: Callable[[WsPartialDepthEvent], None],
    err_handler: ErrHandler,
    serve: Serve = ws_serve,
) -> Any:
    """Stream the top ``levels`` of the order book of ``symbol``, updated every second."""
    endpoint = f"{BASE_URL}/{symbol.lower()}@depth{levels}"
    return _serve(
        endpoint, lambda doc: _partial_depth(_object(doc), symbol), handler, err_handler, serve
    )


def ws_partial_depth_serve_100ms(
    symbol: str,
    levels: str,
    handler: Callable[[WsPartialDepthEvent], None],
    err_handler: ErrHandler,
    serve: Serve = ws_serve,
) -> Any:
    """Stream the top ``levels`` of the order book of ``symbol``, updated every 100 ms."""
    endpoint = f"{BASE_URL}/{symbol.lower()}@depth{levels}@100ms"
    return _serve(
        endpoint, lambda doc: _partial_depth(_object(doc), symbol), handler, err_handler, serve
    )


def ws_combined_partial_depth_serve(
    symbol_levels: Mapping[str, str],
    handler: Callable[[WsPartialDepthEvent], None],
    err_handler: ErrHandler,
    serve: Serve = ws_serve,
) -> Any:
    """Stream partial order books of several symbols over one connection."""
    streams = "/".join(f"{symbol.lower()}@depth{level}" for symbol, level in symbol_levels.items())
    endpoint = COMBINED_BASE_URL + streams
    return _serve(
        endpoint,
        lambda doc: _combined_partial_depth(_object(doc)),
        handler,
        err_handler,
        serve,
    )


def ws_depth_serve(
    symbol: str,
    handler: Callable[[WsDepthEvent], None],
    err_handler: ErrHandler,
    serve: Serve = ws_serve,
) -> Any:
    """Stream order book updates of ``symbol``, every second."""
    endpoint = f"{BASE_URL}/{symbol.lower()}@depth"
    return _serve(endpoint, lambda doc: _depth(_object(doc)), handler, err_handler, serve)


def ws_depth_serve_100ms(
    symbol: str,
    handler: Callable[[WsDepthEvent], None],
    err_handler: ErrHandler,
    serve: Serve = ws_serve,
) -> Any:
    """Stream order book updates of ``symbol``, every 100 ms."""
    endpoint = f"{BASE_URL}/{symbol.lower()}@depth@100ms"
    return _serve(endpoint, lambda doc: _depth(_object(doc)), handler, err_handler, serve)


def ws_kline_serve(
    symbol: str,
    interval: str,
    handler: Callable[[WsKlineEvent], None],
    err_handler: ErrHandler,
    serve: Serve = ws_serve,
) -> Any:
    """Stream candlesticks of ``symbol`` for an interval such as ``1m`` or ``15m``."""
    endpoint = f"{BASE_URL}/{symbol.lower()}@kline_{interval}"
    return _serve(
        endpoint, lambda doc: WsKlineEvent.from_dict(_object(doc)), handler, err_handler, serve
    )


def ws_agg_trade_serve(
    symbol: str,
    handler: Callable[[WsAggTradeEvent], None],
    err_handler: ErrHandler,
    serve: Serve = ws_serve,
) -> Any:
    """Stream aggregate trades of ``symbol``."""
    endpoint = f"{BASE_URL}/{symbol.lower()}@aggTrade"
    return _serve(
        endpoint, lambda doc: WsAggTradeEvent.from_dict(_object(doc)), handler, err_handler, serve
    )


def ws_trade_serve(
    symbol: str,
    handler: Callable[[WsTradeEvent], None],
    err_handler: ErrHandler,
    serve: Serve = ws_serve,
) -> Any:
    """Stream single trades of ``symbol``."""
    endpoint = f"{BASE_URL}/{symbol.lower()}@trade"
    return _serve(
        endpoint, lambda doc: WsTradeEvent.from_dict(_object(doc)), handler, err_handler, serve
    )


def ws_user_data_serve(
    listen_key: str,
    handler: WsHandler,
    err_handler: ErrHandler,
    serve: Serve = ws_serve,
) -> Any:
    """Stream raw user data messages for ``listen_key``."""
    return serve(WsConfig(f"{BASE_URL}/{listen_key}"), handler, err_handler)


def ws_future_user_data_serve(
    listen_key: str,
    handler: WsHandler,
    err_handler: ErrHandler,
    config: WsConfig | None = None,
    serve: Serve = ws_serve,
) -> Any:
    """Stream raw futures user data messages; ``config`` replaces the base endpoint."""
    base = config.endpoint if config is not None else BASE_FUTURE_URL
    return serve(WsConfig(f"{base}/{listen_key}"), handler, err_handler)


def ws_market_stat_serve(
    symbol: str,
    handler: Callable[[WsMarketStatEvent], None],
    err_handler: ErrHandler,
    serve: Serve = ws_serve,
) -> Any:
    """Stream 24 hour statistics of ``symbol`` every second."""
    endpoint = f"{BASE_URL}/{symbol.lower()}@ticker"
    return _serve(
        endpoint,
        lambda doc: WsMarketStatEvent.from_dict(_object(doc)),
        handler,
        err_handler,
        serve,
    )


def ws_all_markets_stat_serve(
    handler: Callable[[list[WsMarketStatEvent]], None],
    err_handler: ErrHandler,
    serve: Serve = ws_serve,
) -> Any:
    """Stream 24 hour statistics of all markets every second."""
    endpoint = f"{BASE_URL}/!ticker@arr"
    return _serve(
        endpoint,
        lambda doc: [WsMarketStatEvent.from_dict(_object(item)) for item in _array(doc)],
        handler,
        err_handler,
        serve,
    )


def ws_all_mini_markets_stat_serve(
    handler: Callable[[list[WsMiniMarketStatEvent]], None],
    err_handler: ErrHandler,
    serve: Serve = ws_serve,
) -> Any:
    """Stream condensed 24 hour statistics of all markets every second."""
    endpoint = f"{BASE_URL}/!miniTicker@arr"
    return _serve(
        endpoint,
        lambda doc: [WsMiniMarketStatEvent.from_dict(_object(item)) for item in _array(doc)],
        handler,
        err_handler,
        serve,
    )