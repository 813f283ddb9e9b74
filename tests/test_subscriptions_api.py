"""
Subscription and pricing endpoint tests.
"""

from decimal import Decimal

import pytest


@pytest.mark.asyncio
async def test_subscription_summary(test_client, auth_headers):
    response = await test_client.get("/api/v1/clients/c1/subscription/summary", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["client_id"] == "c1"
    assert data["plan"]["name"] == "Pro"
    assert data["status"] == "active"
    assert data["urgency"] == "ok"
    assert 0 <= data["progress_percent"] <= 100
    assert data["days_remaining"] > 30
    assert Decimal(data["base_price"]) == Decimal("100.00")
    assert Decimal(data["discount_amount"]) == Decimal("20.00")
    assert Decimal(data["final_price"]) == Decimal("80.00")


@pytest.mark.asyncio
async def test_summary_of_client_without_subscription(test_client, auth_headers):
    response = await test_client.get("/api/v1/clients/c3/subscription/summary", headers=auth_headers)

    data = response.json()
    assert data["plan"] == "basic"
    assert data["status"] == "cancelled"
    assert data["progress_percent"] == 0
    assert Decimal(data["final_price"]) == Decimal("0")


@pytest.mark.asyncio
async def test_summary_of_unknown_client(test_client, auth_headers):
    response = await test_client.get("/api/v1/clients/nope/subscription/summary", headers=auth_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_assign_subscription_forwards_camel_case(test_client, auth_headers, fake_backend):
    response = await test_client.post(
        "/api/v1/clients/c2/subscription/assign",
        json={"planId": "p1", "customPrice": 75, "discount": 10, "billingCycle": "quarterly"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["client_id"] == "c2"
    assert data["notification"]["description"] == "Subscription assigned successfully"

    name, client_id, payload, token = fake_backend.calls[-1]
    assert (name, client_id, token) == ("assign_subscription", "c2", "test-token")
    assert payload == {
        "planId": "p1",
        "customPrice": 75,
        "discount": 10,
        "billingCycle": "quarterly",
        "generateInvoice": False,
    }


@pytest.mark.asyncio
async def test_assign_subscription_validates_discount(test_client, auth_headers, fake_backend):
    response = await test_client.post(
        "/api/v1/clients/c2/subscription/assign",
        json={"planId": "p1", "discount": 150},
        headers=auth_headers,
    )

    assert response.status_code == 422
    assert response.json()["error"]["message"] == "Validation error"
    assert fake_backend.calls == []


@pytest.mark.asyncio
async def test_renew_subscription(test_client, auth_headers, fake_backend):
    response = await test_client.patch(
        "/api/v1/clients/c1/subscription/renew",
        json={"months": 6},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["result"] == {"months": 6}
    assert fake_backend.calls == [("renew_subscription", "c1", 6, "test-token")]


@pytest.mark.asyncio
async def test_renew_subscription_validates_months(test_client, auth_headers):
    response = await test_client.patch(
        "/api/v1/clients/c1/subscription/renew",
        json={"months": 0},
        headers=auth_headers,
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_cancel_subscription(test_client, auth_headers, fake_backend):
    with_reason = await test_client.request(
        "DELETE",
        "/api/v1/clients/c1/subscription/cancel",
        json={"reason": "Budget cuts"},
        headers=auth_headers,
    )
    without_body = await test_client.delete("/api/v1/clients/c1/subscription/cancel", headers=auth_headers)

    assert with_reason.status_code == 200
    assert without_body.status_code == 200
    assert without_body.json()["notification"]["description"] == "Subscription cancelled successfully"
    assert fake_backend.calls == [
        ("cancel_subscription", "c1", "Budget cuts", "test-token"),
        ("cancel_subscription", "c1", None, "test-token"),
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body, expected",
    [
        ({"plan_price": 100, "discount": 20}, {"base": "100.00", "amount": "20.00", "final": "80.00"}),
        ({"plan_price": 100, "custom_price": 60, "discount": 50}, {"base": "60.00", "amount": "30.00", "final": "30.00"}),
        ({"plan_price": 100, "discount": 150}, {"base": "100.00", "amount": "100.00", "final": "0.00"}),
        ({"plan_price": 100, "discount": -10}, {"base": "100.00", "amount": "0.00", "final": "100.00"}),
    ],
)
async def test_price_preview(test_client, auth_headers, body, expected):
    response = await test_client.post("/api/v1/pricing/preview", json=body, headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["base_price"]) == Decimal(expected["base"])
    assert Decimal(data["discount_amount"]) == Decimal(expected["amount"])
    assert Decimal(data["final_price"]) == Decimal(expected["final"])


@pytest.mark.asyncio
async def test_price_preview_requires_token(test_client):
    response = await test_client.post("/api/v1/pricing/preview", json={"plan_price": 100})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_assign_subscription_accepts_yearly_cycle(test_client, auth_headers, fake_backend):
    response = await test_client.post(
        "/api/v1/clients/c2/subscription/assign",
        json={"planId": "p1", "billingCycle": "yearly"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert fake_backend.calls[-1][2]["billingCycle"] == "annually"


@pytest.mark.asyncio
async def test_invoice_totals(test_client, auth_headers):
    response = await test_client.post(
        "/api/v1/pricing/invoice-totals",
        json={
            "items": [
                {"description": "Website care", "quantity": 3, "unitPrice": 19.99, "taxRate": 8.25},
                {"description": "Setup", "quantity": 1, "unitPrice": 150, "taxRate": 120},
            ]
        },
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["subtotal"]) == Decimal("209.97")
    assert Decimal(data["tax"]) == Decimal("154.95")
    assert Decimal(data["total"]) == Decimal("364.92")
