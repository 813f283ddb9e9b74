"""
Subscription and pricing Pydantic schemas.
"""

from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Any, List, Optional

from clientdesk.models.client import BillingCycle, ExpiryUrgency, SubscriptionDisplayStatus
from clientdesk.schemas.notification import Notification


class SubscriptionAssign(BaseModel):
    """Schema for assigning a plan to a client, optionally at a custom price."""
    plan_id: str = Field(..., min_length=1)
    custom_price: Optional[float] = Field(None, ge=0)
    discount: Optional[float] = Field(None, ge=0, le=100)
    billing_cycle: BillingCycle = BillingCycle.MONTHLY
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    generate_invoice: bool = False
    custom_features: Optional[List[str]] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class SubscriptionRenew(BaseModel):
    """Schema for renewing a subscription."""
    months: int = Field(1, ge=1, le=36)


class SubscriptionCancel(BaseModel):
    """Schema for cancelling a subscription."""
    reason: Optional[str] = Field(None, max_length=500)


class SubscriptionSummaryResponse(BaseModel):
    """Derived subscription figures for a client profile."""
    client_id: str
    plan: Any
    status: SubscriptionDisplayStatus
    progress_percent: int = Field(..., ge=0, le=100)
    days_remaining: Optional[int] = None
    urgency: ExpiryUrgency
    next_billing_date: Optional[datetime] = None
    base_price: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    final_price: Decimal


class SubscriptionMutationResponse(BaseModel):
    """Backend result of a subscription change, with the notification to show."""
    client_id: str
    result: Any = None
    notification: Notification


class PricePreviewRequest(BaseModel):
    """
    Inputs of the assignment form's price preview.
    Out-of-range discounts are clamped, not rejected.
    """
    plan_price: Optional[Decimal] = None
    custom_price: Optional[Decimal] = None
    discount: Decimal = Decimal("0")


class PricePreviewResponse(BaseModel):
    """Price breakdown for the assignment form."""
    base_price: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    final_price: Decimal


class InvoiceLineItem(BaseModel):
    """One line of an invoice being drafted."""
    description: Optional[str] = None
    quantity: Decimal = Decimal("1")
    unit_price: Decimal = Decimal("0")
    tax_rate: Decimal = Decimal("0")

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class InvoiceTotalsRequest(BaseModel):
    """Line items of the invoice form. Out-of-range tax rates are clamped."""
    items: List[InvoiceLineItem] = Field(default_factory=list)


class InvoiceTotalsResponse(BaseModel):
    """Invoice footer figures."""
    subtotal: Decimal
    tax: Decimal
    total: Decimal
