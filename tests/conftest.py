import json
from typing import Any, Dict, List, Tuple

import httpx
import pytest

from oneepay.providers.oneepay.client import OneEpayClient

API_URL = "https://api.test.oneepay.com"
CLIENT_ID = "client-123"
CLIENT_SECRET = "s3cret"


class FakeGateway:
    """Serves canned JSON responses per path and records every request."""

    def __init__(self) -> None:
        self.routes: Dict[str, Tuple[int, Any]] = {
            "/v1/oauth/access-token": (200, {"access_token": "tok-1", "expires_in": 3600}),
            "/v1/payments/transactions": (200, {"txid": "tx-1", "state": "pending", "uid": "X1"}),
            "/v1/payments/transactions/commit": (200, {"uid": "X1", "state": "completed"}),
        }
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes[request.url.path]
        if isinstance(body, Exception):
            raise body
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]

    def last_body(self, path: str) -> Dict[str, Any]:
        matching = [r for r in self.requests if r.url.path == path]
        return json.loads(matching[-1].content)

    def last_headers(self, path: str) -> httpx.Headers:
        matching = [r for r in self.requests if r.url.path == path]
        return matching[-1].headers


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def client(gateway):
    return OneEpayClient(
        client_id=CLIENT_ID,
        client_secret=CLIENT_SECRET,
        api_url=API_URL,
        transport=gateway.transport,
    )
