"""
Client service with business logic.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from clientdesk.core.config import settings
from clientdesk.core.exceptions import InvalidRecord
from clientdesk.core.integrations.backend_api import BackendApiClient
from clientdesk.schemas.client import ClientRecord, ClientStatsResponse
from clientdesk.services.base_service import BaseService
from clientdesk.utils.client_transform import normalize_client
from clientdesk.utils.dates import utc_now
from clientdesk.utils.listing import Page, client_matches, filter_items, paginate
from clientdesk.utils.subscription_summary import summarize_clients

logger = logging.getLogger(__name__)


def _as_view(record: ClientRecord) -> Dict[str, Any]:
    """Wire-shaped dict of a record, as the filters and summaries read it."""
    return record.model_dump(by_alias=True, mode="json")


class ClientService(BaseService):
    """Service for client operations."""

    def __init__(self, backend: BackendApiClient):
        self.backend = backend

    @staticmethod
    def to_record(raw: Any, now=None) -> ClientRecord:
        """
        Normalize a backend record and validate it into the view model.

        Raises:
            InvalidRecord: if the record cannot be shown even after normalization
        """
        normalized = normalize_client(raw, now=now)
        try:
            return ClientRecord.model_validate(normalized)
        except ValidationError as e:
            raise InvalidRecord(
                f"Client {normalized['_id']} does not match the client view model",
                details=e.errors(include_url=False, include_context=False),
            ) from e

    async def _fetch_records(self, token: Optional[str]) -> List[ClientRecord]:
        now = utc_now()
        records = []
        for raw in await self.backend.list_clients(token=token):
            try:
                records.append(self.to_record(raw, now=now))
            except InvalidRecord as e:
                # one bad record should not take down the whole list
                logger.warning(f"Skipping client record: {e.message}", extra={"details": e.details})
        return records

    async def list_clients(
        self,
        token: Optional[str] = None,
        page: int = 1,
        page_size: Optional[int] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Page[ClientRecord]:
        """List normalized clients, filtered and paginated locally."""
        records = await self._fetch_records(token)
        matches = client_matches(search=search, status=status)
        matching = filter_items(records, lambda record: matches(_as_view(record)))
        return paginate(matching, page, page_size or settings.DEFAULT_PAGE_SIZE)

    async def get_stats(self, token: Optional[str] = None) -> ClientStatsResponse:
        """Aggregate headline numbers over all clients."""
        records = await self._fetch_records(token)
        return ClientStatsResponse(**summarize_clients(_as_view(record) for record in records))

    async def get_client(self, client_id: str, token: Optional[str] = None) -> ClientRecord:
        """Get client by ID."""
        raw = await self.backend.get_client(client_id, token=token)
        return self.to_record(raw)

    async def toggle_client_status(self, client_id: str, token: Optional[str] = None) -> ClientRecord:
        raw = await self.backend.toggle_client_status(client_id, token=token)
        logger.info(f"Toggled status of client {client_id}")
        return self.to_record(raw)

    async def approve_client(self, client_id: str, token: Optional[str] = None) -> ClientRecord:
        raw = await self.backend.approve_client(client_id, token=token)
        logger.info(f"Approved client {client_id}")
        return self.to_record(raw)

    async def reject_client(
        self,
        client_id: str,
        reason: Optional[str] = None,
        token: Optional[str] = None,
    ) -> ClientRecord:
        raw = await self.backend.reject_client(client_id, reason=reason, token=token)
        logger.info(f"Rejected client {client_id}", extra={"reason": reason})
        return self.to_record(raw)
