"""
Client Pydantic schemas.
Field names are snake_case in Python and camelCase on the wire, matching the backend.
"""

from decimal import Decimal
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Any, List, Optional, Union

from clientdesk.models.client import ClientStatus
from clientdesk.schemas.notification import Notification


class CamelModel(BaseModel):
    """Base for backend-shaped models; unknown fields are kept."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "allow"


class UserRef(CamelModel):
    """Populated user embedded in a client record."""
    id: str = Field(..., alias="_id")
    email: Optional[str] = ""
    f_name: Optional[str] = ""
    l_name: Optional[str] = ""
    phone: Optional[str] = ""
    status: Optional[str] = None
    is_approved: Optional[bool] = None
    is_active: Optional[bool] = None


class PlanRef(CamelModel):
    """Populated plan."""
    id: Optional[str] = Field(None, alias="_id")
    name: str = ""
    price: Optional[float] = 0
    description: Optional[str] = None
    features: Optional[List[str]] = None
    is_active: Optional[bool] = None


class Subscription(CamelModel):
    """Subscription embedded in (or synthesized for) a client record."""
    plan: Optional[Union[PlanRef, str]] = None
    status: Optional[str] = None
    amount: Optional[float] = 0
    start_date: Optional[str] = None
    expires_at: Optional[str] = None
    custom_price: Optional[float] = None
    discount: Optional[float] = None
    billing_cycle: Optional[str] = None


class ClientRecord(CamelModel):
    """Normalized client view model."""
    id: str = Field(..., alias="_id")
    user: UserRef
    status: ClientStatus
    is_active: bool
    is_client: bool
    name: str
    email: str = ""
    phone: str = ""
    company_name: Optional[str] = None
    business_location: Optional[Any] = None
    tax_id: Optional[str] = None
    notes: Optional[str] = None
    old_website: Optional[str] = None
    current_plan: Optional[Union[PlanRef, str]] = None
    subscription: Subscription
    created_at: str
    updated_at: str
    last_active: str
    revenue: float = 0


class ClientListResponse(BaseModel):
    """Schema for a page of clients."""
    items: List[ClientRecord]
    total: int
    page: int
    page_size: int
    total_pages: int


class ClientStatsResponse(BaseModel):
    """Headline numbers for the clients page."""
    total: int
    active: int
    pending: int
    recurring_revenue: Decimal
    average_value: Decimal


class ClientRejectRequest(BaseModel):
    """Schema for rejecting a pending client."""
    reason: Optional[str] = Field(None, max_length=500)


class ClientMutationResponse(BaseModel):
    """Client as returned after a mutation, with the notification to show."""
    client: ClientRecord
    notification: Notification
