# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides a mocked Supabase client shaped like supabase-py's Client
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-0123456789abcdef")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from types import SimpleNamespace
from unittest.mock import MagicMock, patch
from uuid import UUID

import pytest

from app.auth.models import AuthUser
from core.models.business import BusinessListingDraft, ImageFile

PUBLIC_URL_PREFIX = "https://test-project.supabase.co/storage/v1/object/public/business-assets/"
USER_ID = "6f1c2f9e-0d7b-4c55-9a43-2f1f6c3a9b10"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def backend():
    """
    Patch SupabaseClient.get_client with a MagicMock client.

    - storage uploads echo back the requested path
    - get_public_url prefixes the path with the bucket's public URL
    - inserts succeed and return the inserted row
    - the public businesses RPC returns no rows
    """
    client = MagicMock()

    storage = client.storage.from_.return_value
    storage.upload.side_effect = lambda path, file, file_options: SimpleNamespace(path=path)
    storage.get_public_url.side_effect = lambda path: PUBLIC_URL_PREFIX + path

    insert = client.table.return_value.insert
    insert.side_effect = lambda row: MagicMock(
        execute=MagicMock(return_value=SimpleNamespace(data=[{"id": "biz-1", **row}]))
    )

    client.rpc.return_value.execute.return_value = SimpleNamespace(data=[])

    with patch("lib.supabase_client.SupabaseClient.get_client", return_value=client):
        yield client


@pytest.fixture
def user():
    """A signed-in merchant."""
    return AuthUser(id=UUID(USER_ID), email="owner@example.com")


@pytest.fixture
def joes_cafe_draft():
    """Required fields filled, nothing optional, no files."""
    draft = BusinessListingDraft()
    draft.set_field("name", "Joe's Cafe")
    draft.set_field("category", "Restaurant")
    draft.set_field("description", "Coffee shop")
    draft.set_field("phone", "555-1111")
    draft.set_field("address", "1 Main St")
    draft.set_field("city", "Springfield")
    draft.set_field("state", "IL")
    draft.set_field("zip_code", "62701")
    return draft


def make_image(name: str = "photo.png", size: int = 16) -> ImageFile:
    """Small in-memory PNG stand-in."""
    return ImageFile(filename=name, content=b"\x89PNG" + b"\x00" * size, content_type="image/png")


@pytest.fixture
def image_factory():
    return make_image
