"""
Subscription service: derived figures, price previews and backend mutations.
"""

import logging
from typing import Any, Optional

from clientdesk.core.integrations.backend_api import BackendApiClient
from clientdesk.schemas.subscription import (
    InvoiceTotalsRequest,
    InvoiceTotalsResponse,
    PricePreviewRequest,
    PricePreviewResponse,
    SubscriptionAssign,
    SubscriptionSummaryResponse,
)
from clientdesk.services.base_service import BaseService
from clientdesk.utils.client_transform import normalize_client
from clientdesk.utils.dates import utc_now
from clientdesk.utils.pricing import (
    clamp_discount,
    discount_amount,
    effective_price,
    invoice_totals,
    select_base_price,
    to_cents,
)
from clientdesk.utils.subscription_summary import summarize_subscription

logger = logging.getLogger(__name__)


class SubscriptionService(BaseService):
    """Service for subscription operations."""

    def __init__(self, backend: BackendApiClient):
        self.backend = backend

    async def get_summary(self, client_id: str, token: Optional[str] = None) -> SubscriptionSummaryResponse:
        """
        Progress, time left and price of a client's subscription.

        Clients without a subscription get the synthesized default one.
        """
        now = utc_now()
        client = normalize_client(await self.backend.get_client(client_id, token=token), now=now)
        subscription = client["subscription"]
        return SubscriptionSummaryResponse(
            client_id=str(client["_id"]),
            plan=subscription.get("plan"),
            **summarize_subscription(subscription, now),
        )

    def preview_price(self, request: PricePreviewRequest) -> PricePreviewResponse:
        base = select_base_price(request.custom_price, request.plan_price)
        return PricePreviewResponse(
            base_price=to_cents(base),
            discount_percent=clamp_discount(request.discount),
            discount_amount=discount_amount(base, request.discount),
            final_price=effective_price(base, request.discount),
        )

    def invoice_totals(self, request: InvoiceTotalsRequest) -> InvoiceTotalsResponse:
        return InvoiceTotalsResponse(**invoice_totals(item.model_dump(by_alias=True) for item in request.items))

    async def assign_subscription(
        self,
        client_id: str,
        data: SubscriptionAssign,
        token: Optional[str] = None,
    ) -> Any:
        payload = data.model_dump(by_alias=True, exclude_none=True, mode="json")
        result = await self.backend.assign_subscription(client_id, payload, token=token)
        logger.info(
            f"Assigned plan {data.plan_id} to client {client_id}",
            extra={"billing_cycle": data.billing_cycle.value, "discount": data.discount},
        )
        return result

    async def renew_subscription(self, client_id: str, months: int, token: Optional[str] = None) -> Any:
        result = await self.backend.renew_subscription(client_id, months, token=token)
        logger.info(f"Renewed subscription of client {client_id} for {months} month(s)")
        return result

    async def cancel_subscription(
        self,
        client_id: str,
        reason: Optional[str] = None,
        token: Optional[str] = None,
    ) -> Any:
        result = await self.backend.cancel_subscription(client_id, reason=reason, token=token)
        logger.info(f"Cancelled subscription of client {client_id}", extra={"reason": reason})
        return result
