"""
Pytest configuration and fixtures.
Provides a test app client wired to an in-memory fake of the backend API.
"""

import copy

import pytest
from dependency_injector import providers
from httpx import ASGITransport, AsyncClient

from clientdesk.core.exceptions import UpstreamError
from clientdesk.deps import di_container
from clientdesk.deps.di_container import build_container
from clientdesk.main import app


AUTH_HEADERS = {"Authorization": "Bearer test-token"}


def sample_clients() -> dict:
    """Backend-shaped records covering the populated, pending and bare-id cases."""
    return {
        "c1": {
            "_id": "c1",
            "user": {
                "_id": "u1",
                "email": "ana@acme.test",
                "fName": "Ana",
                "lName": "Lopez",
                "phone": "555-0101",
                "isApproved": True,
                "status": "active",
            },
            "companyName": "Acme Corp",
            "isActive": True,
            "createdAt": "2024-01-01T00:00:00.000Z",
            "updatedAt": "2024-01-05T00:00:00.000Z",
            "subscription": {
                "plan": {"_id": "p1", "name": "Pro", "price": 100},
                "status": "active",
                "amount": 80,
                "startDate": "2024-01-01T00:00:00.000Z",
                "expiresAt": "2099-01-01T00:00:00.000Z",
                "discount": 20,
                "billingCycle": "monthly",
            },
        },
        "c2": {
            "_id": "c2",
            "user": {
                "_id": "u2",
                "email": "ben@bolt.test",
                "fName": "Ben",
                "lName": "Ng",
                "isApproved": False,
            },
            "companyName": "Bolt LLC",
            "createdAt": "2024-02-01T00:00:00.000Z",
        },
        "c3": {
            "_id": "c3",
            "user": "u3",
            "email": "cy@coil.test",
            "companyName": "Coil Inc",
            "isActive": False,
            "createdAt": "2024-03-01T00:00:00.000Z",
        },
    }


class FakeBackendApi:
    """In-memory stand-in for BackendApiClient."""

    def __init__(self):
        self.clients = sample_clients()
        self.extra_records = []
        self.calls = []
        self.healthy = True

    def _get(self, client_id):
        if client_id not in self.clients:
            raise UpstreamError("Client not found", upstream_status=404)
        return self.clients[client_id]

    async def check_health(self):
        if not self.healthy:
            raise UpstreamError("Backend request failed: Connection refused")
        return True

    async def list_clients(self, token=None):
        self.calls.append(("list_clients", token))
        return copy.deepcopy(list(self.clients.values()) + self.extra_records)

    async def get_client(self, client_id, token=None):
        self.calls.append(("get_client", client_id, token))
        return copy.deepcopy(self._get(client_id))

    async def toggle_client_status(self, client_id, token=None):
        self.calls.append(("toggle_client_status", client_id, token))
        client = self._get(client_id)
        client["isActive"] = not client.get("isActive", True)
        return copy.deepcopy(client)

    async def approve_client(self, client_id, token=None):
        self.calls.append(("approve_client", client_id, token))
        client = self._get(client_id)
        client["user"]["isApproved"] = True
        client["isActive"] = True
        return copy.deepcopy(client)

    async def reject_client(self, client_id, reason=None, token=None):
        self.calls.append(("reject_client", client_id, reason, token))
        client = self._get(client_id)
        client["status"] = "blocked"
        return copy.deepcopy(client)

    async def assign_subscription(self, client_id, data, token=None):
        self.calls.append(("assign_subscription", client_id, data, token))
        self._get(client_id)
        return {"subscription": dict(data, status="active")}

    async def renew_subscription(self, client_id, months, token=None):
        self.calls.append(("renew_subscription", client_id, months, token))
        self._get(client_id)
        return {"months": months}

    async def cancel_subscription(self, client_id, reason=None, token=None):
        self.calls.append(("cancel_subscription", client_id, reason, token))
        self._get(client_id)
        return {"status": "success", "message": "Subscription cancelled"}


@pytest.fixture
def fake_backend():
    return FakeBackendApi()


@pytest.fixture
def container(fake_backend):
    """
    Fresh DI container with the backend client replaced by the fake.
    """
    container = build_container()
    container.backend_client.override(providers.Object(fake_backend))
    previous = di_container._container
    di_container.set_container(container)

    yield container

    container.backend_client.reset_override()
    di_container.set_container(previous)


@pytest.fixture
async def test_client(container):
    """
    Create a test HTTP client.
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers():
    return dict(AUTH_HEADERS)
