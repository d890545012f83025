"""Withdrawals: submitting them, listing their history and querying fees."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from binance_spot.request import APIClient, Request, RequestOption, SecurityType


def _json_object(data: bytes) -> dict[str, Any]:
    document = json.loads(data)
    if not isinstance(document, dict):
        raise ValueError("expected a JSON object")
    return document


@dataclass
class CreateWithdrawResponse:
    """Reply to a withdraw request."""

    id: str = ""
    msg: str = ""
    success: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CreateWithdrawResponse:
        return cls(
            id=data.get("id", ""),
            msg=data.get("msg", ""),
            success=data.get("success", False),
        )


@dataclass
class Withdraw:
    """One entry of the withdraw history."""

    id: str = ""
    withdraw_order_id: str = ""
    amount: float = 0.0
    transaction_fee: float = 0.0
    address: str = ""
    address_tag: str = ""
    tx_id: str = ""
    asset: str = ""
    apply_time: int = 0
    network: str = ""
    status: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Withdraw:
        return cls(
            id=data.get("id", ""),
            withdraw_order_id=data.get("withdrawOrderID", ""),
            amount=float(data.get("amount") or 0),
            transaction_fee=float(data.get("transactionFee") or 0),
            address=data.get("address", ""),
            address_tag=data.get("addressTag", ""),
            tx_id=data.get("txId", ""),
            asset=data.get("asset", ""),
            apply_time=data.get("applyTime", 0),
            network=data.get("network", ""),
            status=data.get("status", 0),
        )


@dataclass
class WithdrawFee:
    """Fee charged for withdrawing an asset."""

    fee: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WithdrawFee:
        return cls(fee=float(data.get("withdrawFee") or 0))


def create_withdraw(
    client: APIClient,
    asset: str,
    address: str,
    amount: str,
    *,
    withdraw_order_id: str | None = None,
    network: str | None = None,
    address_tag: str | None = None,
    transaction_fee_flag: bool | None = None,
    name: str | None = None,
) -> CreateWithdrawResponse:
    """Submit a withdraw request."""
    request = Request("POST", "/wapi/v3/withdraw.html", SecurityType.SIGNED)
    request.set_params({"asset": asset, "address": address, "amount": amount})
    optional = {
        "withdrawOrderId": withdraw_order_id,
        "network": network,
        "addressTag": address_tag,
        "transactionFeeFlag": transaction_fee_flag,
        "name": name,
    }
    request.set_params({key: value for key, value in optional.items() if value is not None})
    data = client.call_api(request)
    return CreateWithdrawResponse.from_dict(_json_object(data))


def list_withdraws(
    client: APIClient,
    *,
    asset: str | None = None,
    status: int | None = None,
    start_time: int | None = None,
    end_time: int | None = None,
) -> list[Withdraw]:
    """Withdraw history; start and end time, when given, must be 0 to 90 days apart."""
    request = Request("GET", "/wapi/v3/withdrawHistory.html", SecurityType.SIGNED)
    optional = {
        "asset": asset,
        "status": status,
        "startTime": start_time,
        "endTime": end_time,
    }
    request.set_params({key: value for key, value in optional.items() if value is not None})
    data = client.call_api(request)
    entries = _json_object(data).get("withdrawList") or []
    return [Withdraw.from_dict(entry) for entry in entries]


def get_withdraw_fee(client: APIClient, asset: str, *args: RequestOption) -> WithdrawFee:
    """Fee for withdrawing ``asset``."""
    request = Request("GET", "/wapi/v3/withdrawFee.html", SecurityType.SIGNED)
    request.set_param("asset", asset)
    data = client.call_api(request, *args)
    return WithdrawFee.from_dict(_json_object(data))