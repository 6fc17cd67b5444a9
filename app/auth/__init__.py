# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication using Supabase Auth.
#
# Usage:
#   from app.auth import get_current_user_optional, AuthUser
#
#   @router.post("/listings")
#   async def submit(user: AuthUser | None = Depends(get_current_user_optional)):
#       ...
# =============================================================================

from app.auth.dependencies import decode_user, get_current_user_optional
from app.auth.models import AuthSession, AuthUser

__all__ = [
    "decode_user",
    "get_current_user_optional",
    "AuthSession",
    "AuthUser",
]
