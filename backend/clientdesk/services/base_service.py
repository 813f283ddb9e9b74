"""
Base service class.
Services hold the business logic and talk to the backend API client.
"""

from abc import ABC


class BaseService(ABC):
    """Base service class for all services."""
    pass
