"""
Client API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from clientdesk.core.config import settings
from clientdesk.core.rate_limit import MUTATION_LIMIT, limiter
from clientdesk.deps.auth import require_bearer_token
from clientdesk.deps.di_container import get_container
from clientdesk.models.client import ClientStatus
from clientdesk.schemas.client import (
    ClientListResponse,
    ClientMutationResponse,
    ClientRecord,
    ClientRejectRequest,
    ClientStatsResponse,
)

router = APIRouter()


@router.get("", response_model=ClientListResponse)
async def list_clients(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    status: Optional[ClientStatus] = Query(None),
    search: Optional[str] = Query(None, max_length=200),
    token: str = Depends(require_bearer_token),
) -> ClientListResponse:
    """List normalized clients with optional status and text filters."""
    controller = get_container().client_controller()
    return await controller.list_clients(
        token=token,
        page=page,
        page_size=page_size,
        status=status.value if status else None,
        search=search,
    )


@router.get("/stats", response_model=ClientStatsResponse)
async def get_client_stats(
    token: str = Depends(require_bearer_token),
) -> ClientStatsResponse:
    """Client counts and recurring revenue."""
    controller = get_container().client_controller()
    return await controller.get_stats(token=token)


@router.get("/{client_id}", response_model=ClientRecord)
async def get_client(
    client_id: str,
    token: str = Depends(require_bearer_token),
) -> ClientRecord:
    """Get client by ID."""
    controller = get_container().client_controller()
    return await controller.get_client(client_id, token=token)


@router.patch("/{client_id}/toggle-status", response_model=ClientMutationResponse)
@limiter.limit(MUTATION_LIMIT)
async def toggle_client_status(
    request: Request,
    client_id: str,
    token: str = Depends(require_bearer_token),
) -> ClientMutationResponse:
    """Activate or deactivate a client."""
    controller = get_container().client_controller()
    return await controller.toggle_client_status(client_id, token=token)


@router.patch("/{client_id}/approve", response_model=ClientMutationResponse)
@limiter.limit(MUTATION_LIMIT)
async def approve_client(
    request: Request,
    client_id: str,
    token: str = Depends(require_bearer_token),
) -> ClientMutationResponse:
    """Approve a pending client."""
    controller = get_container().client_controller()
    return await controller.approve_client(client_id, token=token)


@router.patch("/{client_id}/reject", response_model=ClientMutationResponse)
@limiter.limit(MUTATION_LIMIT)
async def reject_client(
    request: Request,
    client_id: str,
    body: ClientRejectRequest,
    token: str = Depends(require_bearer_token),
) -> ClientMutationResponse:
    """Reject a pending client."""
    controller = get_container().client_controller()
    return await controller.reject_client(client_id, reason=body.reason, token=token)
