import json

import pytest

from binance_spot.orders import (
    CreateOCOResponse,
    CreateOrderResponse,
    Fill,
    OCOOrder,
    OCOOrderReport,
    create_oco,
    create_order,
    create_test_order,
)
from binance_spot.request import SecurityType, with_recv_window


class FakeClient:
    def __init__(self, data):
        self.data = data
        self.requests = []
        self.time_offset = 0

    def call_api(self, request, *args):
        for option in args:
            option(request)
        self.requests.append(request)
        if isinstance(self.data, Exception):
            raise self.data
        return self.data


ORDER_DATA = b"""{
    "symbol": "LTCBTC",
    "orderId": 1,
    "clientOrderId": "myOrder1",
    "transactTime": 1499827319559,
    "price": "0.0001",
    "origQty": "12.00",
    "executedQty": "10.00",
    "cummulativeQuoteQty": "10.00",
    "status": "FILLED",
    "timeInForce": "GTC",
    "type": "LIMIT",
    "side": "BUY"
}"""

ORDER_FULL_DATA = b"""{
    "symbol": "LTCBTC",
    "orderId": 1,
    "clientOrderId": "myOrder1",
    "transactTime": 1499827319559,
    "price": "0.0001",
    "origQty": "12.00",
    "executedQty": "10.00",
    "cummulativeQuoteQty": "10.00",
    "status": "FILLED",
    "timeInForce": "GTC",
    "type": "LIMIT",
    "side": "BUY",
    "fills": [
        {
            "price": "0.00002991",
            "qty": "344.00000000",
            "commission": "0.00332384",
            "commissionAsset": "BNB",
            "tradeId": 1566397
        }
    ]
}"""

OCO_DATA = b"""{
    "orderListId": 0,
    "contingencyType": "OCO",
    "listStatusType": "EXEC_STARTED",
    "listOrderStatus": "EXECUTING",
    "listClientOrderId": "C3wyj4WVEktd7u9aVBRXcN",
    "transactionTime": 1574040868128,
    "symbol": "LTCBTC",
    "orders": [
        {"symbol": "LTCBTC", "orderId": 2, "clientOrderId": "pO9ufTiFGg3nw2fOdgeOXa"},
        {"symbol": "LTCBTC", "orderId": 3, "clientOrderId": "TXOvglzXuaubXAaENpaRCB"}
    ],
    "orderReports": [
        {
            "symbol": "LTCBTC",
            "origClientOrderId": "pO9ufTiFGg3nw2fOdgeOXa",
            "orderId": 2,
            "orderListId": 0,
            "clientOrderId": "unfWT8ig8i0uj6lPuYLez6",
            "price": "1.00000000",
            "origQty": "10.00000000",
            "executedQty": "0.00000000",
            "cummulativeQuoteQty": "0.00000000",
            "status": "NEW",
            "timeInForce": "GTC",
            "type": "STOP_LOSS",
            "side": "SELL",
            "stopPrice": "1.00000000"
        },
        {
            "symbol": "LTCBTC",
            "origClientOrderId": "TXOvglzXuaubXAaENpaRCB",
            "orderId": 3,
            "orderListId": 0,
            "clientOrderId": "unfWT8ig8i0uj6lPuYLez6",
            "price": "3.00000000",
            "origQty": "10.00000000",
            "executedQty": "0.00000000",
            "cummulativeQuoteQty": "0.00000000",
            "status": "NEW",
            "timeInForce": "GTC",
            "type": "LIMIT_MAKER",
            "side": "SELL"
        }
    ]
}"""

ORDER_ARGS = dict(
    time_in_force="GTC",
    quantity="12.00",
    quote_order_qty="10.00",
    price="0.0001",
    new_client_order_id="myOrder1",
)

EXPECTED_ORDER_FORM = {
    "symbol": ["LTCBTC"],
    "side": ["BUY"],
    "type": ["LIMIT"],
    "timeInForce": ["GTC"],
    "quantity": ["12.00"],
    "quoteOrderQty": ["10.00"],
    "price": ["0.0001"],
    "newClientOrderId": ["myOrder1"],
}

EXPECTED_ORDER = CreateOrderResponse(
    symbol="LTCBTC",
    order_id=1,
    client_order_id="myOrder1",
    transact_time=1499827319559,
    price="0.0001",
    orig_quantity="12.00",
    executed_quantity="10.00",
    cummulative_quote_quantity="10.00",
    status="FILLED",
    time_in_force="GTC",
    type="LIMIT",
    side="BUY",
)


def test_create_order():
    client = FakeClient(ORDER_DATA)
    res = create_order(client, "LTCBTC", "BUY", "LIMIT", **ORDER_ARGS)
    assert res == EXPECTED_ORDER
    assert res.fills == []
    request = client.requests[0]
    assert request.method == "POST"
    assert request.endpoint == "/api/v3/order"
    assert request.sec_type == SecurityType.SIGNED
    assert request.form == EXPECTED_ORDER_FORM
    assert request.query == {}


def test_create_test_order():
    client = FakeClient(ORDER_DATA)
    assert create_test_order(client, "LTCBTC", "BUY", "LIMIT", **ORDER_ARGS) is None
    request = client.requests[0]
    assert request.endpoint == "/api/v3/order/test"
    assert request.method == "POST"
    assert request.sec_type == SecurityType.SIGNED
    assert request.form == EXPECTED_ORDER_FORM


def test_create_order_full():
    client = FakeClient(ORDER_FULL_DATA)
    res = create_order(
        client, "LTCBTC", "BUY", "LIMIT", new_order_resp_type="FULL", **ORDER_ARGS
    )
    assert res.symbol == "LTCBTC"
    assert res.order_id == 1
    assert res.status == "FILLED"
    assert res.fills == [
        Fill(
            price="0.00002991",
            quantity="344.00000000",
            commission="0.00332384",
            commission_asset="BNB",
        )
    ]
    assert client.requests[0].form == {**EXPECTED_ORDER_FORM, "newOrderRespType": ["FULL"]}


def test_create_test_order_full():
    client = FakeClient(b"{}")
    create_test_order(
        client, "LTCBTC", "BUY", "LIMIT", new_order_resp_type="FULL", **ORDER_ARGS
    )
    assert client.requests[0].form == {**EXPECTED_ORDER_FORM, "newOrderRespType": ["FULL"]}


def test_create_order_optional_stop_and_iceberg():
    client = FakeClient(ORDER_DATA)
    create_order(
        client,
        "LTCBTC",
        "SELL",
        "STOP_LOSS_LIMIT",
        stop_price="0.5",
        iceberg_quantity="1.5",
    )
    assert client.requests[0].form == {
        "symbol": ["LTCBTC"],
        "side": ["SELL"],
        "type": ["STOP_LOSS_LIMIT"],
        "stopPrice": ["0.5"],
        "icebergQty": ["1.5"],
    }


def test_create_order_applies_options():
    client = FakeClient(ORDER_DATA)
    create_order(client, "LTCBTC", "BUY", "MARKET", with_recv_window(1000), quantity="1")
    assert client.requests[0].recv_window == 1000


def test_create_order_propagates_client_error():
    client = FakeClient(RuntimeError("dummy error"))
    with pytest.raises(RuntimeError, match="dummy error"):
        create_order(client, "LTCBTC", "BUY", "LIMIT")


def test_create_order_invalid_body():
    client = FakeClient(b"")
    with pytest.raises(json.JSONDecodeError):
        create_order(client, "LTCBTC", "BUY", "LIMIT")


def test_create_order_non_object_body():
    client = FakeClient(b"[]")
    with pytest.raises(ValueError):
        create_order(client, "LTCBTC", "BUY", "LIMIT")


def test_create_oco():
    client = FakeClient(OCO_DATA)
    res = create_oco(
        client,
        "LTCBTC",
        "BUY",
        "10",
        "3",
        "3.1",
        stop_limit_price="3.2",
        stop_limit_time_in_force="GTC",
        limit_client_order_id="myOrder1",
        new_order_resp_type="FULL",
    )
    request = client.requests[0]
    assert request.method == "POST"
    assert request.endpoint == "/api/v3/order/oco"
    assert request.sec_type == SecurityType.SIGNED
    assert request.form == {
        "symbol": ["LTCBTC"],
        "side": ["BUY"],
        "quantity": ["10"],
        "price": ["3"],
        "stopPrice": ["3.1"],
        "stopLimitPrice": ["3.2"],
        "stopLimitTimeInForce": ["GTC"],
        "limitClientOrderId": ["myOrder1"],
        "newOrderRespType": ["FULL"],
    }

    assert res.order_list_id == 0
    assert res.contingency_type == "OCO"
    assert res.list_status_type == "EXEC_STARTED"
    assert res.list_order_status == "EXECUTING"
    assert res.list_client_order_id == "C3wyj4WVEktd7u9aVBRXcN"
    assert res.transaction_time == 1574040868128
    assert res.symbol == "LTCBTC"
    assert res.orders == [
        OCOOrder(symbol="LTCBTC", order_id=2, client_order_id="pO9ufTiFGg3nw2fOdgeOXa"),
        OCOOrder(symbol="LTCBTC", order_id=3, client_order_id="TXOvglzXuaubXAaENpaRCB"),
    ]
    assert res.order_reports == [
        OCOOrderReport(
            symbol="LTCBTC",
            order_id=2,
            order_list_id=0,
            client_order_id="unfWT8ig8i0uj6lPuYLez6",
            orig_client_order_id="pO9ufTiFGg3nw2fOdgeOXa",
            price="1.00000000",
            orig_quantity="10.00000000",
            executed_quantity="0.00000000",
            cummulative_quote_quantity="0.00000000",
            status="NEW",
            time_in_force="GTC",
            type="STOP_LOSS",
            side="SELL",
            stop_price="1.00000000",
        ),
        OCOOrderReport(
            symbol="LTCBTC",
            order_id=3,
            order_list_id=0,
            client_order_id="unfWT8ig8i0uj6lPuYLez6",
            orig_client_order_id="TXOvglzXuaubXAaENpaRCB",
            price="3.00000000",
            orig_quantity="10.00000000",
            executed_quantity="0.00000000",
            cummulative_quote_quantity="0.00000000",
            status="NEW",
            time_in_force="GTC",
            type="LIMIT_MAKER",
            side="SELL",
        ),
    ]


def test_create_oco_optional_ids_and_iceberg():
    client = FakeClient(b"{}")
    res = create_oco(
        client,
        "LTCBTC",
        "SELL",
        "10",
        "3",
        "2",
        list_client_order_id="list1",
        limit_iceberg_qty="1",
        stop_client_order_id="stop1",
        stop_iceberg_qty="2",
    )
    assert client.requests[0].form == {
        "symbol": ["LTCBTC"],
        "side": ["SELL"],
        "quantity": ["10"],
        "price": ["3"],
        "stopPrice": ["2"],
        "listClientOrderId": ["list1"],
        "limitIcebergQty": ["1"],
        "stopClientOrderId": ["stop1"],
        "stopIcebergQty": ["2"],
    }
    assert res == CreateOCOResponse()


def test_oco_response_from_dict_missing_lists():
    res = CreateOCOResponse.from_dict({"orderListId": 7, "orders": None})
    assert res.order_list_id == 7
    assert res.orders == []
    assert res.order_reports == []
    assert res.symbol == ""


def test_create_oco_propagates_client_error():
    client = FakeClient(RuntimeError("dummy error"))
    with pytest.raises(RuntimeError, match="dummy error"):
        create_oco(client, "LTCBTC", "BUY", "1", "2", "3")