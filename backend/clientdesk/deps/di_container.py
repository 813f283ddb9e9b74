"""
Dependency injection container using dependency-injector.
Wires the backend HTTP client, services and controllers.
"""

from dependency_injector import containers, providers

from clientdesk.controllers.client_controller import ClientController
from clientdesk.controllers.health_controller import HealthController
from clientdesk.controllers.subscription_controller import SubscriptionController
from clientdesk.core.config import settings
from clientdesk.core.integrations.backend_api import BackendApiClient
from clientdesk.core.integrations.http.http_client import HttpClient
from clientdesk.services.client_service import ClientService
from clientdesk.services.health_service import HealthService
from clientdesk.services.subscription_service import SubscriptionService


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Configuration
    config = providers.Configuration()

    # One aiohttp session per process
    http_client = providers.Singleton(
        HttpClient,
        base_url=config.backend_api_url,
        timeout=config.backend_timeout_seconds,
        max_retries=config.backend_max_retries,
        retry_delay=config.backend_retry_delay,
    )

    backend_client = providers.Singleton(
        BackendApiClient,
        http_client=http_client,
    )

    # Services
    health_service = providers.Singleton(
        HealthService,
        backend=backend_client,
    )

    client_service = providers.Factory(
        ClientService,
        backend=backend_client,
    )

    subscription_service = providers.Factory(
        SubscriptionService,
        backend=backend_client,
    )

    # Controllers
    health_controller = providers.Factory(
        HealthController,
        health_service=health_service,
    )

    client_controller = providers.Factory(
        ClientController,
        client_service=client_service,
    )

    subscription_controller = providers.Factory(
        SubscriptionController,
        subscription_service=subscription_service,
    )


def build_container() -> Container:
    """Create a container configured from settings."""
    container = Container()
    container.config.from_dict({
        "backend_api_url": settings.BACKEND_API_URL,
        "backend_timeout_seconds": settings.BACKEND_TIMEOUT_SECONDS,
        "backend_max_retries": settings.BACKEND_MAX_RETRIES,
        "backend_retry_delay": settings.BACKEND_RETRY_DELAY,
    })
    return container


# Global container instance
_container: Container = None


def get_container() -> Container:
    """Get the global dependency injection container."""
    global _container
    if _container is None:
        _container = build_container()
    return _container


def set_container(container: Container) -> None:
    """Replace the global container (application startup and tests)."""
    global _container
    _container = container
