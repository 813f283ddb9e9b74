"""
Subscription controller.
"""

from typing import Optional

from clientdesk.controllers.base_controller import BaseController
from clientdesk.schemas.notification import success
from clientdesk.schemas.subscription import (
    InvoiceTotalsRequest,
    InvoiceTotalsResponse,
    PricePreviewRequest,
    PricePreviewResponse,
    SubscriptionAssign,
    SubscriptionMutationResponse,
    SubscriptionSummaryResponse,
)
from clientdesk.services.subscription_service import SubscriptionService


class SubscriptionController(BaseController):
    """Controller for subscription operations."""

    def __init__(self, subscription_service: SubscriptionService):
        self.subscription_service = subscription_service

    async def get_summary(self, client_id: str, token: Optional[str] = None) -> SubscriptionSummaryResponse:
        return await self.subscription_service.get_summary(client_id, token=token)

    def preview_price(self, request: PricePreviewRequest) -> PricePreviewResponse:
        return self.subscription_service.preview_price(request)

    def invoice_totals(self, request: InvoiceTotalsRequest) -> InvoiceTotalsResponse:
        return self.subscription_service.invoice_totals(request)

    async def assign_subscription(
        self,
        client_id: str,
        data: SubscriptionAssign,
        token: Optional[str] = None,
    ) -> SubscriptionMutationResponse:
        result = await self.subscription_service.assign_subscription(client_id, data, token=token)
        return SubscriptionMutationResponse(
            client_id=client_id,
            result=result,
            notification=success("Subscription assigned successfully"),
        )

    async def renew_subscription(
        self,
        client_id: str,
        months: int,
        token: Optional[str] = None,
    ) -> SubscriptionMutationResponse:
        result = await self.subscription_service.renew_subscription(client_id, months, token=token)
        return SubscriptionMutationResponse(
            client_id=client_id,
            result=result,
            notification=success("Subscription renewed successfully"),
        )

    async def cancel_subscription(
        self,
        client_id: str,
        reason: Optional[str] = None,
        token: Optional[str] = None,
    ) -> SubscriptionMutationResponse:
        result = await self.subscription_service.cancel_subscription(client_id, reason=reason, token=token)
        return SubscriptionMutationResponse(
            client_id=client_id,
            result=result,
            notification=success("Subscription cancelled successfully"),
        )
