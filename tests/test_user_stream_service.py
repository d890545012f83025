from unittest import mock

import pytest

from binance_spot.request import SecurityType
from binance_spot.user_stream_service import (
    close_user_stream,
    keepalive_user_stream,
    start_user_stream,
)

LISTEN_KEY = "pqia91ma19a5s61cv6a81va65sdf19v8a65a1a5s61cv6a81va65sdf19v8a65a1"


def stream_client(body=b"{}"):
    client = mock.Mock(time_offset=0)
    client.call_api.return_value = body
    return client


def test_start_user_stream():
    client = stream_client(('{\n    "listenKey": "%s"\n}' % LISTEN_KEY).encode())
    assert start_user_stream(client) == LISTEN_KEY
    request = client.call_api.call_args.args[0]
    assert (request.method, request.endpoint) == ("POST", "/api/v3/userDataStream")
    assert request.sec_type is SecurityType.API_KEY
    assert (request.query, request.form) == ({}, {})


def test_start_user_stream_without_key():
    assert start_user_stream(stream_client()) == ""


@pytest.mark.parametrize(
    "service, method", [(keepalive_user_stream, "PUT"), (close_user_stream, "DELETE")]
)
def test_listen_key_requests(service, method):
    client = stream_client()
    assert service(client, "dummykey") is None
    request = client.call_api.call_args.args[0]
    assert (request.method, request.endpoint) == (method, "/api/v3/userDataStream")
    assert request.sec_type is SecurityType.API_KEY
    assert request.form == {"listenKey": ["dummykey"]}
    assert request.query == {}