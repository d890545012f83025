# binance_spot

A small Python library for the spot trading API of a cryptocurrency
exchange: server checks, orders, OCO orders, withdrawals, user data stream
listen keys and live websocket feeds.

Every REST call is a plain function that takes a client as its first
argument and returns dataclasses built from the JSON response. Errors raised
by the client, and JSON that cannot be decoded, propagate as exceptions.

## The client

The functions do not open HTTP connections themselves. They build a
`binance_spot.request.Request` and pass it to a client that follows the
`binance_spot.request.APIClient` protocol: an object with a `time_offset`
attribute and a `call_api(request, *args)` method that signs and sends the
request and returns the response body as bytes. You supply this client;
transport, signing and retries live there. A fake client is all that tests
need.

A `Request` records the HTTP method, the endpoint, the query and form
parameters (each a list of strings per key), and its `SecurityType`:
`NONE`, `API_KEY`, or `SIGNED`. Values are rendered with `format_value`
(booleans as `true`/`false`, enum members by their value). Per-call options
such as `with_recv_window(5000)` are passed as positional arguments after
the client and reach `call_api(request, *args)` unchanged; each option is a
callable that adjusts the `Request`.

## Server

```python
from binance_spot.server_service import ping, server_time, set_server_time

ping(client)
print(server_time(client))        # milliseconds; 0 if the reply holds none
offset = set_server_time(client)  # also stored in client.time_offset
```

## Orders

```python
from binance_spot.orders import create_order, create_test_order, create_oco
from binance_spot.order_queries import (
    list_open_orders, get_order, list_orders, cancel_order, cancel_open_orders,
)
from binance_spot.request import with_recv_window

create_test_order(client, "LTCBTC", "BUY", "LIMIT",
                  time_in_force="GTC", quantity="12.00", price="0.0001")

response = create_order(client, "LTCBTC", "BUY", "LIMIT",
                        time_in_force="GTC", quantity="12.00", price="0.0001",
                        new_order_resp_type="FULL")
for fill in response.fills:
    print(fill.price, fill.quantity, fill.commission_asset)

oco = create_oco(client, "LTCBTC", "SELL", "10", "3", "3.1",
                 stop_limit_price="3.2", stop_limit_time_in_force="GTC")
print(oco.order_list_id, [report.type for report in oco.order_reports])

open_orders = list_open_orders(client, with_recv_window(1000), symbol="LTCBTC")
order = get_order(client, "LTCBTC", order_id=open_orders[0].order_id)
history = list_orders(client, "LTCBTC", limit=3)
cancel_order(client, "LTCBTC", order_id=order.order_id)

result = cancel_open_orders(client, "BTCUSDT")
print(len(result.orders), "orders and", len(result.oco_orders), "OCO lists cancelled")
```

Optional parameters left as `None` are not sent. `cancel_open_orders`
sorts what comes back into plain orders (`CancelOrderResponse`, those whose
order list id is `-1`) and OCO order lists (`CancelOCOResponse`).

## Withdrawals

```python
from binance_spot.withdraw_service import create_withdraw, list_withdraws, get_withdraw_fee

create_withdraw(client, "USDT", "myaddress", "0.01", network="ETH")
for withdraw in list_withdraws(client, asset="USDT"):
    print(withdraw.id, withdraw.amount, withdraw.status)
print(get_withdraw_fee(client, "BTC").fee)
```

## User data stream listen keys

```python
from binance_spot.user_stream_service import (
    start_user_stream, keepalive_user_stream, close_user_stream,
)

listen_key = start_user_stream(client)
keepalive_user_stream(client, listen_key)
close_user_stream(client, listen_key)
```

## Websocket streams

Each `ws_*_serve` function in `binance_spot.websocket_service` connects to
one stream and, with the default `serve`, returns a
`binance_spot.websocket.WsConnection`. Messages are read on a background
thread; each is decoded into an event and passed to your handler. A message
that cannot be decoded, and any read error, goes to the error handler. A
failure to connect is raised from the call itself. After `stop()`, the
closing of the socket is not reported as an error; `wait(timeout)` blocks
until the reader has finished.

```python
from binance_spot.websocket_service import ws_kline_serve, ws_combined_partial_depth_serve

def on_kline(event):
    print(event.symbol, event.kline.close, event.kline.is_final)

def on_error(error):
    print("stream error:", error)

connection = ws_kline_serve("ETHBTC", "1m", on_kline, on_error)
...
connection.stop()
connection.wait()

depth = ws_combined_partial_depth_serve(
    {"BTCUSDT": "5", "ETHUSDT": "5"},
    lambda event: print(event.symbol, event.bids[:1], event.asks[:1]),
    on_error,
)
```

The other streams are `ws_partial_depth_serve`, `ws_depth_serve` (each also
has a `_100ms` variant), `ws_agg_trade_serve`, `ws_trade_serve`,
`ws_market_stat_serve`, `ws_all_markets_stat_serve`,
`ws_all_mini_markets_stat_serve`, `ws_user_data_serve` and
`ws_future_user_data_serve`. The two user data streams pass the raw message
bytes to the handler; `ws_future_user_data_serve` takes an optional
`WsConfig` whose endpoint replaces the default futures base address.

`binance_spot.websocket.ws_serve` can send periodic pings: with
`keepalive=True` it pings every `timeout` seconds (60 by default) and closes
a connection that has sent no pong for longer than that. Each stream
function also accepts a `serve` callable in place of `ws_serve`, which lets
tests feed it canned messages.

## What this package does not do

- It sends no HTTP requests and does no signing: you must provide the
  `APIClient` that does.
- It has no REST lookups of prices, book tickers, 24-hour statistics,
  average prices, or public and account trade history. Live prices, trades
  and statistics are available only through the websocket streams above.
- It has no command-line program.