"""Looking up, listing and cancelling orders."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from binance_spot.orders import OCOOrder, OCOOrderReport
from binance_spot.request import APIClient, Request, RequestOption, SecurityType

# Orders that are not part of an OCO list carry this order list id.
_NO_ORDER_LIST = -1


def _json_object(data: bytes) -> dict[str, Any]:
    document = json.loads(data)
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError("expected a JSON object")
    return document


def _json_list(data: bytes) -> list[Any]:
    document = json.loads(data)
    if document is None:
        return []
    if not isinstance(document, list):
        raise ValueError("expected a JSON array")
    return document


@dataclass
class Order:
    """State of an order."""

    symbol: str = ""
    order_id: int = 0
    client_order_id: str = ""
    price: str = ""
    orig_quantity: str = ""
    executed_quantity: str = ""
    cummulative_quote_quantity: str = ""
    status: str = ""
    time_in_force: str = ""
    type: str = ""
    side: str = ""
    stop_price: str = ""
    iceberg_quantity: str = ""
    time: int = 0
    update_time: int = 0
    is_working: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Order:
        return cls(
            symbol=data.get("symbol", ""),
            order_id=data.get("orderId", 0),
            client_order_id=data.get("clientOrderId", ""),
            price=data.get("price", ""),
            orig_quantity=data.get("origQty", ""),
            executed_quantity=data.get("executedQty", ""),
            cummulative_quote_quantity=data.get("cummulativeQuoteQty", ""),
            status=data.get("status", ""),
            time_in_force=data.get("timeInForce", ""),
            type=data.get("type", ""),
            side=data.get("side", ""),
            stop_price=data.get("stopPrice", ""),
            iceberg_quantity=data.get("icebergQty", ""),
            time=data.get("time", 0),
            update_time=data.get("updateTime", 0),
            is_working=data.get("isWorking", False),
        )


@dataclass
class CancelOrderResponse:
    """Reply to cancelling a single order."""

    symbol: str = ""
    orig_client_order_id: str = ""
    order_id: int = 0
    order_list_id: int = 0
    client_order_id: str = ""
    transact_time: int = 0
    price: str = ""
    orig_quantity: str = ""
    executed_quantity: str = ""
    cummulative_quote_quantity: str = ""
    status: str = ""
    time_in_force: str = ""
    type: str = ""
    side: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CancelOrderResponse:
        return cls(
            symbol=data.get("symbol", ""),
            orig_client_order_id=data.get("origClientOrderId", ""),
            order_id=data.get("orderId", 0),
            order_list_id=data.get("orderListId", 0),
            client_order_id=data.get("clientOrderId", ""),
            transact_time=data.get("transactTime", 0),
            price=data.get("price", ""),
            orig_quantity=data.get("origQty", ""),
            executed_quantity=data.get("executedQty", ""),
            cummulative_quote_quantity=data.get("cummulativeQuoteQty", ""),
            status=data.get("status", ""),
            time_in_force=data.get("timeInForce", ""),
            type=data.get("type", ""),
            side=data.get("side", ""),
        )


@dataclass
class CancelOCOResponse:
    """Reply to cancelling an OCO order list."""

    order_list_id: int = 0
    contingency_type: str = ""
    list_status_type: str = ""
    list_order_status: str = ""
    list_client_order_id: str = ""
    transaction_time: int = 0
    symbol: str = ""
    orders: list[OCOOrder] = field(default_factory=list)
    order_reports: list[OCOOrderReport] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CancelOCOResponse:
        return cls(
            order_list_id=data.get("orderListId", 0),
            contingency_type=data.get("contingencyType", ""),
            list_status_type=data.get("listStatusType", ""),
            list_order_status=data.get("listOrderStatus", ""),
            list_client_order_id=data.get("listClientOrderId", ""),
            transaction_time=data.get("transactionTime", 0),
            symbol=data.get("symbol", ""),
            orders=[OCOOrder.from_dict(item) for item in data.get("orders") or []],
            order_reports=[
                OCOOrderReport.from_dict(item) for item in data.get("orderReports") or []
            ],
        )


@dataclass
class CancelOpenOrdersResponse:
    """Everything cancelled on a symbol: plain orders and OCO order lists."""

    orders: list[CancelOrderResponse] = field(default_factory=list)
    oco_orders: list[CancelOCOResponse] = field(default_factory=list)


def _set_optional(request: Request, **params: Any) -> None:
    for key, value in params.items():
        if value is not None:
            request.set_param(key, value)


def list_open_orders(
    client: APIClient, *args: RequestOption, symbol: str | None = None
) -> list[Order]:
    """Open orders on ``symbol``, or on all symbols when none is given."""
    request = Request("GET", "/api/v3/openOrders", SecurityType.SIGNED)
    if symbol:
        request.set_param("symbol", symbol)
    data = client.call_api(request, *args)
    return [Order.from_dict(item) for item in _json_list(data)]


def get_order(
    client: APIClient,
    symbol: str,
    *args: RequestOption,
    order_id: int | None = None,
    orig_client_order_id: str | None = None,
) -> Order:
    """Look up one order by its id or by its client order id."""
    request = Request("GET", "/api/v3/order", SecurityType.SIGNED)
    request.set_param("symbol", symbol)
    _set_optional(request, orderId=order_id, origClientOrderId=orig_client_order_id)
    data = client.call_api(request, *args)
    return Order.from_dict(_json_object(data))


def list_orders(
    client: APIClient,
    symbol: str,
    *args: RequestOption,
    order_id: int | None = None,
    start_time: int | None = None,
    end_time: int | None = None,
    limit: int | None = None,
) -> list[Order]:
    """All orders of the account on ``symbol``: active, cancelled or filled."""
    request = Request("GET", "/api/v3/allOrders", SecurityType.SIGNED)
    request.set_param("symbol", symbol)
    _set_optional(
        request, orderId=order_id, startTime=start_time, endTime=end_time, limit=limit
    )
    data = client.call_api(request, *args)
    return [Order.from_dict(item) for item in _json_list(data)]


def cancel_order(
    client: APIClient,
    symbol: str,
    *args: RequestOption,
    order_id: int | None = None,
    orig_client_order_id: str | None = None,
    new_client_order_id: str | None = None,
) -> CancelOrderResponse:
    """Cancel an active order."""
    request = Request("DELETE", "/api/v3/order", SecurityType.SIGNED)
    request.set_form_param("symbol", symbol)
    optional = {
        "orderId": order_id,
        "origClientOrderId": orig_client_order_id,
        "newClientOrderId": new_client_order_id,
    }
    request.set_form_params({key: value for key, value in optional.items() if value is not None})
    data = client.call_api(request, *args)
    return CancelOrderResponse.from_dict(_json_object(data))


def cancel_open_orders(
    client: APIClient, symbol: str, *args: RequestOption
) -> CancelOpenOrdersResponse:
    """Cancel every active order on ``symbol``, OCO order lists included."""
    request = Request("DELETE", "/api/v3/openOrders", SecurityType.SIGNED)
    request.set_param("symbol", symbol)
    data = client.call_api(request, *args)
    result = CancelOpenOrdersResponse()
    for entry in _json_list(data):
        if not isinstance(entry, dict):
            raise ValueError("expected a JSON object")
        order = CancelOrderResponse.from_dict(entry)
        if order.order_list_id == _NO_ORDER_LIST:
            result.orders.append(order)
        else:
            result.oco_orders.append(CancelOCOResponse.from_dict(entry))
    return result