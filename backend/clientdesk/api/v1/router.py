"""
API v1 router that aggregates all endpoint routers.
Everything except health requires a bearer token, which is forwarded to the backend.
"""

from fastapi import APIRouter

from clientdesk.api.v1.endpoints import (
    health,
    clients,
    subscriptions,
    pricing,
)

api_router = APIRouter()

# Public routes
api_router.include_router(health.router, tags=["health"])

# Protected routes (each endpoint depends on require_bearer_token)
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(subscriptions.router, prefix="/clients", tags=["subscriptions"])
api_router.include_router(pricing.router, prefix="/pricing", tags=["pricing"])
