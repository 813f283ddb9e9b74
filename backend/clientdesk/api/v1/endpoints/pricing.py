"""
Pricing endpoints used by the subscription assignment and invoice forms.
"""

from fastapi import APIRouter, Depends, Request

from clientdesk.core.rate_limit import MUTATION_LIMIT, limiter
from clientdesk.deps.auth import require_bearer_token
from clientdesk.deps.di_container import get_container
from clientdesk.schemas.subscription import (
    InvoiceTotalsRequest,
    InvoiceTotalsResponse,
    PricePreviewRequest,
    PricePreviewResponse,
)

router = APIRouter()


@router.post("/preview", response_model=PricePreviewResponse)
@limiter.limit(MUTATION_LIMIT)
async def preview_price(
    request: Request,
    body: PricePreviewRequest,
    token: str = Depends(require_bearer_token),
) -> PricePreviewResponse:
    """Base price, discount and final price for the given inputs."""
    controller = get_container().subscription_controller()
    return controller.preview_price(body)


@router.post("/invoice-totals", response_model=InvoiceTotalsResponse)
@limiter.limit(MUTATION_LIMIT)
async def invoice_totals(
    request: Request,
    body: InvoiceTotalsRequest,
    token: str = Depends(require_bearer_token),
) -> InvoiceTotalsResponse:
    """Subtotal, tax and total of invoice line items."""
    controller = get_container().subscription_controller()
    return controller.invoice_totals(body)
