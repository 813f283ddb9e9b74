"""
Client subscription API endpoints.
"""

from fastapi import APIRouter, Depends, Request

from clientdesk.core.rate_limit import MUTATION_LIMIT, limiter
from clientdesk.deps.auth import require_bearer_token
from clientdesk.deps.di_container import get_container
from clientdesk.schemas.subscription import (
    SubscriptionAssign,
    SubscriptionCancel,
    SubscriptionMutationResponse,
    SubscriptionRenew,
    SubscriptionSummaryResponse,
)

router = APIRouter()


@router.get("/{client_id}/subscription/summary", response_model=SubscriptionSummaryResponse)
async def get_subscription_summary(
    client_id: str,
    token: str = Depends(require_bearer_token),
) -> SubscriptionSummaryResponse:
    """Progress, days remaining and effective price of a client's subscription."""
    controller = get_container().subscription_controller()
    return await controller.get_summary(client_id, token=token)


@router.post("/{client_id}/subscription/assign", response_model=SubscriptionMutationResponse)
@limiter.limit(MUTATION_LIMIT)
async def assign_subscription(
    request: Request,
    client_id: str,
    body: SubscriptionAssign,
    token: str = Depends(require_bearer_token),
) -> SubscriptionMutationResponse:
    """Assign a plan to a client."""
    controller = get_container().subscription_controller()
    return await controller.assign_subscription(client_id, body, token=token)


@router.patch("/{client_id}/subscription/renew", response_model=SubscriptionMutationResponse)
@limiter.limit(MUTATION_LIMIT)
async def renew_subscription(
    request: Request,
    client_id: str,
    body: SubscriptionRenew,
    token: str = Depends(require_bearer_token),
) -> SubscriptionMutationResponse:
    """Extend a client's subscription by a number of months."""
    controller = get_container().subscription_controller()
    return await controller.renew_subscription(client_id, body.months, token=token)


@router.delete("/{client_id}/subscription/cancel", response_model=SubscriptionMutationResponse)
@limiter.limit(MUTATION_LIMIT)
async def cancel_subscription(
    request: Request,
    client_id: str,
    body: SubscriptionCancel = SubscriptionCancel(),
    token: str = Depends(require_bearer_token),
) -> SubscriptionMutationResponse:
    """Cancel a client's subscription."""
    controller = get_container().subscription_controller()
    return await controller.cancel_subscription(client_id, reason=body.reason, token=token)
