"""
Client controller.
"""

from typing import Optional

from clientdesk.controllers.base_controller import BaseController
from clientdesk.schemas.client import (
    ClientListResponse,
    ClientMutationResponse,
    ClientRecord,
    ClientStatsResponse,
)
from clientdesk.schemas.notification import success
from clientdesk.services.client_service import ClientService


class ClientController(BaseController):
    """Controller for client operations."""

    def __init__(self, client_service: ClientService):
        self.client_service = client_service

    async def list_clients(
        self,
        token: Optional[str] = None,
        page: int = 1,
        page_size: Optional[int] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> ClientListResponse:
        """List clients with optional filters."""
        result = await self.client_service.list_clients(
            token=token,
            page=page,
            page_size=page_size,
            status=status,
            search=search,
        )
        return ClientListResponse(
            items=result.items,
            total=result.total,
            page=result.page,
            page_size=result.page_size,
            total_pages=result.total_pages,
        )

    async def get_stats(self, token: Optional[str] = None) -> ClientStatsResponse:
        return await self.client_service.get_stats(token=token)

    async def get_client(self, client_id: str, token: Optional[str] = None) -> ClientRecord:
        """Get client by ID."""
        return await self.client_service.get_client(client_id, token=token)

    async def toggle_client_status(self, client_id: str, token: Optional[str] = None) -> ClientMutationResponse:
        client = await self.client_service.toggle_client_status(client_id, token=token)
        state = "activated" if client.is_active else "deactivated"
        return ClientMutationResponse(
            client=client,
            notification=success(f"Client {state} successfully"),
        )

    async def approve_client(self, client_id: str, token: Optional[str] = None) -> ClientMutationResponse:
        client = await self.client_service.approve_client(client_id, token=token)
        return ClientMutationResponse(
            client=client,
            notification=success("Client approved successfully"),
        )

    async def reject_client(
        self,
        client_id: str,
        reason: Optional[str] = None,
        token: Optional[str] = None,
    ) -> ClientMutationResponse:
        client = await self.client_service.reject_client(client_id, reason=reason, token=token)
        return ClientMutationResponse(
            client=client,
            notification=success("Client rejected"),
        )
