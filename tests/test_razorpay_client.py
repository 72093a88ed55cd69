from __future__ import annotations

import base64
from datetime import datetime, timezone
import json

import httpx
import pytest

from app.application.dto.subscriptions import CreateSubscriptionInput
from app.application.use_cases.create_subscription import CreateSubscriptionUseCase
from app.domain.exceptions import SubscriptionCreationError, UpstreamUnavailableError
from app.infrastructure.clients.razorpay_client import RazorpayClient, RazorpayClientSettings


def _client(handler) -> RazorpayClient:
    return RazorpayClient(
        RazorpayClientSettings(
            api_base="https://api.razorpay.test/v1",
            key_id="rzp_test_key",
            key_secret="rzp_test_secret",
            timeout_seconds=2,
        ),
        transport=httpx.MockTransport(handler),
    )


def test_create_subscription_posts_plan_and_notes_with_basic_auth():
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "id": "sub_1",
                "plan_id": "fin-gold",
                "status": "created",
                "notes": {"customerId": "cust-1", "planId": "fin-gold", "interval": "monthly"},
                "current_start": None,
                "current_end": None,
                "auth_attempts": 0,
            },
        )

    output = _client(handler).create_subscription(
        plan_id="fin-gold",
        total_count=12,
        customer_notify=True,
        notes={"customerId": "cust-1", "planId": "fin-gold", "interval": "monthly"},
    )

    expected_auth = base64.b64encode(b"rzp_test_key:rzp_test_secret").decode("ascii")
    assert seen["url"] == "https://api.razorpay.test/v1/subscriptions"
    assert seen["auth"] == f"Basic {expected_auth}"
    assert seen["body"] == {
        "plan_id": "fin-gold",
        "customer_notify": 1,
        "quantity": 1,
        "total_count": 12,
        "notes": {"customerId": "cust-1", "planId": "fin-gold", "interval": "monthly"},
    }
    assert output.record.customer_id == "cust-1"
    assert output.raw["id"] == "sub_1"


def test_list_subscriptions_reads_items_and_maps_records():
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(
            200,
            json={
                "entity": "collection",
                "count": 2,
                "items": [
                    {
                        "id": "sub_1",
                        "plan_id": "fin-gold",
                        "status": "active",
                        "notes": {"customerId": "cust-1"},
                        "current_start": 1767225600,
                        "current_end": 1769904000,
                        "auth_attempts": 1,
                    },
                    {"id": "sub_2", "plan_id": "fin-silver", "status": "created", "notes": []},
                ],
            },
        )

    created_from = datetime(2026, 1, 1, tzinfo=timezone.utc)
    items = _client(handler).list_subscriptions(created_from=created_from, count=100)

    assert seen["params"] == {"from": str(int(created_from.timestamp())), "count": "100"}
    assert [item.record.id for item in items] == ["sub_1", "sub_2"]
    assert items[0].record.current_period_start == datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert items[0].record.attempt_count == 1
    assert items[1].record.customer_id is None
    assert items[1].record.notes == {}


def test_gateway_rejection_raises_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"code": "BAD_REQUEST_ERROR"}})

    with pytest.raises(UpstreamUnavailableError):
        _client(handler).create_subscription(
            plan_id="fin-gold",
            total_count=12,
            customer_notify=True,
            notes={},
        )


def test_timeout_raises_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(UpstreamUnavailableError):
        _client(handler).list_subscriptions(created_from=datetime.now(timezone.utc), count=10)


def test_customer_is_matched_on_notes_only():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "items": [
                    {"id": "sub_1", "status": "active", "customer_id": "cust_Razorpay1", "notes": []},
                    {"id": "sub_2", "status": "active", "customer_id": "cust_Razorpay2", "notes": {"customerId": 42}},
                ]
            },
        )

    items = _client(handler).list_subscriptions(created_from=datetime.now(timezone.utc), count=10)

    assert items[0].record.customer_id is None
    assert items[1].record.customer_id == "42"


def test_malformed_subscription_fields_raise_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"id": "sub_1", "status": "created", "auth_attempts": "n/a", "current_start": "soon"},
        )

    with pytest.raises(UpstreamUnavailableError):
        _client(handler).create_subscription(
            plan_id="fin-gold",
            total_count=12,
            customer_notify=True,
            notes={},
        )


def test_malformed_subscription_surfaces_as_creation_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"id": "sub_1", "status": "created", "auth_attempts": "n/a"})

    use_case = CreateSubscriptionUseCase(gateway_port=_client(handler))

    with pytest.raises(SubscriptionCreationError):
        use_case.execute(CreateSubscriptionInput(plan_id="fin-gold", interval="monthly", customer_id="cust-1"))
