# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    This is the minimal identity available from the token itself; it becomes
    the owner_id of any listing the user submits.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None


class AuthSession(BaseModel):
    """Who the caller is, as the front end's auth provider sees it."""
    authenticated: bool
    user_id: Optional[str] = None
    email: Optional[str] = None
