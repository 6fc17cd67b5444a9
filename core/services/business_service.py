# =============================================================================
# core/services/business_service.py - Business Table Operations
# =============================================================================
# Inserts new listings and reads the public directory.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
from typing import Any

from pydantic import ValidationError

from app.exceptions import BusinessFetchError, ListingInsertError
from core.models.business import BusinessInsertPayload, BusinessRecord
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

BUSINESSES_TABLE = "businesses"
PUBLIC_BUSINESSES_RPC = "get_public_businesses"


class BusinessService:
    """Service for the businesses table and its public listing function."""

    @staticmethod
    def create_business(payload: BusinessInsertPayload) -> dict[str, Any]:
        """
        Insert one business listing.

        Args:
            payload: Fully assembled row

        Returns:
            The inserted row (may be empty if the backend returns no representation)

        Raises:
            ListingInsertError: If the backend rejects the row
        """
        try:
            row = SupabaseClient.insert_row(BUSINESSES_TABLE, payload.model_dump())
        except SupabaseClientError as e:
            logger.error(f"Failed to insert business '{payload.name}': {e.message}")
            raise ListingInsertError(e.message)

        logger.info(f"Created business '{payload.name}' for owner: {payload.owner_id}")
        return row

    @staticmethod
    def fetch_public_businesses() -> list[BusinessRecord]:
        """
        Fetch the publicly visible businesses, in the order the backend returns.

        Raises:
            BusinessFetchError: If the call fails or returns malformed rows
        """
        try:
            rows = SupabaseClient.call_rpc(PUBLIC_BUSINESSES_RPC)
        except SupabaseClientError as e:
            raise BusinessFetchError(e.message)

        try:
            return [BusinessRecord.model_validate(row) for row in rows]
        except ValidationError as e:
            raise BusinessFetchError(f"unexpected row shape: {e.error_count()} errors")
