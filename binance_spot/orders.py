"""Placing orders: single orders, test orders and OCO order pairs."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from binance_spot.request import APIClient, Request, RequestOption, SecurityType


def _json_object(data: bytes) -> dict[str, Any]:
    document = json.loads(data)
    if not isinstance(document, dict):
        raise ValueError("expected a JSON object")
    return document


@dataclass
class Fill:
    """One partial fill reported with a newly placed order."""

    price: str = ""
    quantity: str = ""
    commission: str = ""
    commission_asset: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Fill:
        return cls(
            price=data.get("price", ""),
            quantity=data.get("qty", ""),
            commission=data.get("commission", ""),
            commission_asset=data.get("commissionAsset", ""),
        )


@dataclass
class CreateOrderResponse:
    """Reply to placing an order."""

    symbol: str = ""
    order_id: int = 0
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
    fills: list[Fill] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CreateOrderResponse:
        return cls(
            symbol=data.get("symbol", ""),
            order_id=data.get("orderId", 0),
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
            fills=[Fill.from_dict(item) for item in data.get("fills") or []],
        )


@dataclass
class OCOOrder:
    """Identifies one order of an OCO order list."""

    symbol: str = ""
    order_id: int = 0
    client_order_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OCOOrder:
        return cls(
            symbol=data.get("symbol", ""),
            order_id=data.get("orderId", 0),
            client_order_id=data.get("clientOrderId", ""),
        )


@dataclass
class OCOOrderReport:
    """State of one order of an OCO order list."""

    symbol: str = ""
    order_id: int = 0
    order_list_id: int = 0
    client_order_id: str = ""
    orig_client_order_id: str = ""
    transaction_time: int = 0
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

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OCOOrderReport:
        return cls(
            symbol=data.get("symbol", ""),
            order_id=data.get("orderId", 0),
            order_list_id=data.get("orderListId", 0),
            client_order_id=data.get("clientOrderId", ""),
            orig_client_order_id=data.get("origClientOrderId", ""),
            transaction_time=data.get("transactionTime", 0),
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
        )


@dataclass
class CreateOCOResponse:
    """Reply to placing an OCO order pair."""

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
    def from_dict(cls, data: dict[str, Any]) -> CreateOCOResponse:
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


def _signed_post(endpoint: str, required: dict[str, Any], optional: dict[str, Any]) -> Request:
    request = Request("POST", endpoint, SecurityType.SIGNED)
    request.set_form_params(required)
    request.set_form_params({key: value for key, value in optional.items() if value is not None})
    return request


def _order_request(
    endpoint: str,
    symbol: str,
    side: Any,
    order_type: Any,
    *,
    time_in_force: Any,
    quantity: str | None,
    quote_order_qty: str | None,
    price: str | None,
    new_client_order_id: str | None,
    stop_price: str | None,
    iceberg_quantity: str | None,
    new_order_resp_type: Any,
) -> Request:
    return _signed_post(
        endpoint,
        {"symbol": symbol, "side": side, "type": order_type},
        {
            "quantity": quantity,
            "quoteOrderQty": quote_order_qty,
            "timeInForce": time_in_force,
            "price": price,
            "newClientOrderId": new_client_order_id,
            "stopPrice": stop_price,
            "icebergQty": iceberg_quantity,
            "newOrderRespType": new_order_resp_type,
        },
    )


def create_order(
    client: APIClient,
    symbol: str,
    side: Any,
    order_type: Any,
    *args: RequestOption,
    time_in_force: Any = None,
    quantity: str | None = None,
    quote_order_qty: str | None = None,
    price: str | None = None,
    new_client_order_id: str | None = None,
    stop_price: str | None = None,
    iceberg_quantity: str | None = None,
    new_order_resp_type: Any = None,
) -> CreateOrderResponse:
    """Place an order."""
    request = _order_request(
        "/api/v3/order",
        symbol,
        side,
        order_type,
        time_in_force=time_in_force,
        quantity=quantity,
        quote_order_qty=quote_order_qty,
        price=price,
        new_client_order_id=new_client_order_id,
        stop_price=stop_price,
        iceberg_quantity=iceberg_quantity,
        new_order_resp_type=new_order_resp_type,
    )
    data = client.call_api(request, *args)
    return CreateOrderResponse.from_dict(_json_object(data))


def create_test_order(
    client: APIClient,
    symbol: str,
    side: Any,
    order_type: Any,
    *args: RequestOption,
    time_in_force: Any = None,
    quantity: str | None = None,
    quote_order_qty: str | None = None,
    price: str | None = None,
    new_client_order_id: str | None = None,
    stop_price: str | None = None,
    iceberg_quantity: str | None = None,
    new_order_resp_type: Any = None,
) -> None:
    """Validate an order with the exchange without placing it."""
    request = _order_request(
        "/api/v3/order/test",
        symbol,
        side,
        order_type,
        time_in_force=time_in_force,
        quantity=quantity,
        quote_order_qty=quote_order_qty,
        price=price,
        new_client_order_id=new_client_order_id,
        stop_price=stop_price,
        iceberg_quantity=iceberg_quantity,
        new_order_resp_type=new_order_resp_type,
    )
    client.call_api(request, *args)


def create_oco(
    client: APIClient,
    symbol: str,
    side: Any,
    quantity: str,
    price: str,
    stop_price: str,
    *args: RequestOption,
    list_client_order_id: str | None = None,
    limit_client_order_id: str | None = None,
    limit_iceberg_qty: str | None = None,
    stop_client_order_id: str | None = None,
    stop_limit_price: str | None = None,
    stop_iceberg_qty: str | None = None,
    stop_limit_time_in_force: Any = None,
    new_order_resp_type: Any = None,
) -> CreateOCOResponse:
    """Place a one-cancels-the-other pair of a limit order and a stop order."""
    request = _signed_post(
        "/api/v3/order/oco",
        {
            "symbol": symbol,
            "side": side,
            "quantity": quantity,
            "price": price,
            "stopPrice": stop_price,
        },
        {
            "listClientOrderId": list_client_order_id,
            "limitClientOrderId": limit_client_order_id,
            "limitIcebergQty": limit_iceberg_qty,
            "stopClientOrderId": stop_client_order_id,
            "stopLimitPrice": stop_limit_price,
            "stopIcebergQty": stop_iceberg_qty,
            "stopLimitTimeInForce": stop_limit_time_in_force,
            "newOrderRespType": new_order_resp_type,
        },
    )
    data = client.call_api(request, *args)
    return CreateOCOResponse.from_dict(_json_object(data))