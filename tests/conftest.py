"""Pytest fixtures: a BTZPayClient wired to an in-process fake gateway."""

from __future__ import annotations

import json
from typing import Any, Callable, List, Tuple, Union

import pytest
import requests
from requests.adapters import BaseAdapter

from btzpay import BTZPayClient

BASE_URL = "https://gateway.test"

HandlerResult = Union[Tuple[int, Any], Exception]
Handler = Callable[[requests.PreparedRequest], HandlerResult]


class FakeGatewayAdapter(BaseAdapter):
    """Transport adapter that answers requests from a handler function.

    The handler returns ``(status, body)`` or an exception to raise. A ``str``
    body is sent as-is; anything else is JSON-encoded.
    """

    def __init__(self, handler: Handler) -> None:
        super().__init__()
        self.handler = handler
        self.requests: List[requests.PreparedRequest] = []
        self.timeouts: List[Any] = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        self.timeouts.append(timeout)
        result = self.handler(request)
        if isinstance(result, Exception):
            raise result
        status, body = result
        resp = requests.Response()
        resp.status_code = status
        resp.request = request
        resp.url = request.url
        resp.encoding = "utf-8"
        if isinstance(body, str):
            resp._content = body.encode("utf-8")
            resp.headers["Content-Type"] = "text/plain"
        else:
            resp._content = json.dumps(body).encode("utf-8")
            resp.headers["Content-Type"] = "application/json"
        return resp

    def close(self) -> None:
        pass

    @property
    def last_json(self) -> Any:
        return json.loads(self.requests[-1].body)


@pytest.fixture()
def fake_gateway():
    """Returns ``make(handler) -> (client, adapter)``."""

    def make(handler: Handler, **client_kwargs: Any):
        adapter = FakeGatewayAdapter(handler)
        session = requests.Session()
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        client = BTZPayClient("test-key", base_url=BASE_URL, session=session, **client_kwargs)
        return client, adapter

    return make


@pytest.fixture()
def offline_client(fake_gateway):
    """Client whose transport fails the test if any request is sent."""

    def handler(request):
        pytest.fail(f"unexpected request: {request.method} {request.url}")

    client, adapter = fake_gateway(handler)
    return client


def _transaction_data(**overrides: Any) -> dict:
    data = {
        "transactionId": "TRX1",
        "accessKey": "K1",
        "amount": 50000,
        "fee": 0,
        "totalAmount": 50000,
        "status": "pending",
        "paymentUrl": f"{BASE_URL}/transaction/TRX1?key=K1",
        "createdAt": "2026-10-19T10:00:00.000Z",
        "expiredAt": "2026-10-19T10:15:00.000Z",
        "metadata": {},
    }
    data.update(overrides)
    return data


@pytest.fixture()
def transaction_data():
    """Factory for a gateway transaction ``data`` object."""
    return _transaction_data
