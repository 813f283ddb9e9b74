"""
Client for the upstream REST backend that owns clients, users and subscriptions.
Unwraps the backend's response envelopes; records are returned raw (not normalized).
"""

import logging
from typing import Any, Dict, List, Optional

from clientdesk.core.exceptions import UpstreamError
from clientdesk.core.integrations.http.http_client import HttpClient

logger = logging.getLogger(__name__)


def _auth_headers(token: Optional[str]) -> Optional[Dict[str, str]]:
    if not token:
        return None
    return {"Authorization": f"Bearer {token}"}


def extract_client_list(payload: Any) -> List[Dict[str, Any]]:
    """
    Pull the client array out of a list response.

    Accepts ``{"data": {"clients": [...]}}``, ``{"clients": [...]}`` or a bare list.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, dict) and isinstance(data.get("clients"), list):
            return data["clients"]
        if isinstance(data, list):
            return data
        if isinstance(payload.get("clients"), list):
            return payload["clients"]
    raise UpstreamError("Unexpected client list format from backend", details=payload)


def extract_client(payload: Any) -> Dict[str, Any]:
    """
    Pull a single client out of a detail/mutation response.

    Accepts ``{"data": {"client": {...}}}``, ``{"data": {...}}`` or a bare object.
    """
    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, dict):
            client = data.get("client")
            return client if isinstance(client, dict) else data
        client = payload.get("client")
        if isinstance(client, dict):
            return client
        return payload
    raise UpstreamError("No client data received from backend", details=payload)


class BackendApiClient:
    """Thin wrapper over the backend's client and subscription endpoints."""

    def __init__(self, http_client: HttpClient):
        self.http = http_client

    async def check_health(self) -> bool:
        """Single-attempt reachability probe used by the health check."""
        await self.http.get("/health", retries=1)
        return True

    async def list_clients(self, token: Optional[str] = None) -> List[Dict[str, Any]]:
        payload = await self.http.get("/clients", headers=_auth_headers(token))
        clients = extract_client_list(payload)
        logger.info(f"Fetched {len(clients)} client(s) from backend")
        return clients

    async def get_client(self, client_id: str, token: Optional[str] = None) -> Dict[str, Any]:
        payload = await self.http.get(f"/clients/{client_id}", headers=_auth_headers(token))
        return extract_client(payload)

    async def toggle_client_status(self, client_id: str, token: Optional[str] = None) -> Dict[str, Any]:
        payload = await self.http.patch(f"/clients/{client_id}/toggle-status", headers=_auth_headers(token))
        return extract_client(payload)

    async def approve_client(self, client_id: str, token: Optional[str] = None) -> Dict[str, Any]:
        payload = await self.http.patch(f"/clients/{client_id}/approve", headers=_auth_headers(token))
        return extract_client(payload)

    async def reject_client(
        self,
        client_id: str,
        reason: Optional[str] = None,
        token: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = await self.http.patch(
            f"/clients/{client_id}/reject",
            json={"reason": reason},
            headers=_auth_headers(token),
        )
        return extract_client(payload)

    async def assign_subscription(
        self,
        client_id: str,
        data: Dict[str, Any],
        token: Optional[str] = None,
    ) -> Any:
        payload = await self.http.post(
            f"/admin/clients/{client_id}/subscription/assign",
            json=data,
            headers=_auth_headers(token),
        )
        return payload.get("data", payload) if isinstance(payload, dict) else payload

    async def renew_subscription(
        self,
        client_id: str,
        months: int,
        token: Optional[str] = None,
    ) -> Any:
        payload = await self.http.patch(
            f"/admin/clients/{client_id}/subscription/renew",
            json={"months": months},
            headers=_auth_headers(token),
        )
        return payload.get("data", payload) if isinstance(payload, dict) else payload

    async def cancel_subscription(
        self,
        client_id: str,
        reason: Optional[str] = None,
        token: Optional[str] = None,
    ) -> Any:
        return await self.http.delete(
            f"/admin/clients/{client_id}/subscription/cancel",
            json={"reason": reason},
            headers=_auth_headers(token),
        )
