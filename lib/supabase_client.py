# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for the three backend capabilities the
# directory depends on:
# - Object storage: upload an image, derive its public URL
# - Relational insert: add one row to a table
# - Remote query: call a Postgres function (RPC)
#
# It implements the singleton pattern to reuse a single client connection.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   rows = SupabaseClient.call_rpc("get_public_businesses")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    `message` holds the backend's own wording so it can be shown to the user.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def backend_message(exc: BaseException) -> str:
    """
    Extract the message the backend reported for an error.

    postgrest's APIError and storage3's StorageException both expose a
    `message` attribute; older storage3 releases pass a dict as the first arg.
    """
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    if exc.args and isinstance(exc.args[0], dict):
        message = exc.args[0].get("message")
        if message:
            return str(message)
    return str(exc)


class SupabaseClient:
    """
    Typed wrapper for Supabase operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        path = SupabaseClient.upload_object(
            bucket="business-assets",
            path="logos/<user>/1700000000000_logo.png",
            content=b"...",
            content_type="image/png",
        )
        url = SupabaseClient.get_public_url("business-assets", path)
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    # -------------------------------------------------------------------------
    # Object Storage
    # -------------------------------------------------------------------------

    @classmethod
    def upload_object(
        cls,
        bucket: str,
        path: str,
        content: bytes,
        content_type: str | None = None,
        cache_control: str = "3600",
    ) -> str:
        """
        Upload bytes to a storage bucket without overwriting.

        upsert is always disabled, so an existing object at `path` makes the
        upload fail instead of replacing it.

        Args:
            bucket: Storage bucket name
            path: Object path inside the bucket
            content: File bytes
            content_type: MIME type sent with the object
            cache_control: Cache-Control max-age in seconds

        Returns:
            The stored object path as reported by the backend

        Raises:
            SupabaseClientError: If the backend rejects the upload
        """
        client = cls.get_client()

        file_options = {"cache-control": cache_control, "upsert": "false"}
        if content_type:
            file_options["content-type"] = content_type

        try:
            response = client.storage.from_(bucket).upload(
                path=path,
                file=content,
                file_options=file_options,
            )
        except Exception as e:
            raise SupabaseClientError(
                message=backend_message(e),
                code="UPLOAD_FAILED",
                details={"bucket": bucket, "path": path},
            )

        stored_path = getattr(response, "path", None) or path
        logger.debug(f"Uploaded object to {bucket}/{stored_path}")
        return stored_path

    @classmethod
    def get_public_url(cls, bucket: str, path: str) -> str:
        """
        Derive the public URL for a stored object.

        Pure URL construction on the client side; no request is made.
        """
        client = cls.get_client()
        return client.storage.from_(bucket).get_public_url(path)

    # -------------------------------------------------------------------------
    # Relational Insert
    # -------------------------------------------------------------------------

    @classmethod
    def insert_row(cls, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a single row.

        Args:
            table: Table name
            row: Column -> value mapping

        Returns:
            The inserted row if the backend returned it, else an empty dict

        Raises:
            SupabaseClientError: If the insert is rejected
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .insert(row)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=backend_message(e),
                code="INSERT_FAILED",
                details={"table": table},
            )

        if response.data:
            return response.data[0]
        return {}

    # -------------------------------------------------------------------------
    # Remote Query
    # -------------------------------------------------------------------------

    @classmethod
    def call_rpc(
        cls,
        function_name: str,
        params: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Call a Postgres function and return its rows in order.

        Raises:
            SupabaseClientError: If the call fails
        """
        client = cls.get_client()

        try:
            response = client.rpc(function_name, params or {}).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=backend_message(e),
                code="RPC_FAILED",
                details={"function": function_name},
            )

        rows = response.data or []
        logger.debug(f"RPC {function_name} returned {len(rows)} rows")
        return rows
