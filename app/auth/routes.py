# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Sign-up and sign-in happen client-side with Supabase Auth. This route only
# reports which identity (if any) the API sees for the current token.
# =============================================================================

from typing import Optional

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user_optional
from app.auth.models import AuthSession, AuthUser

router = APIRouter()


@router.get("/session", response_model=AuthSession)
async def get_session(
    user: Optional[AuthUser] = Depends(get_current_user_optional),
) -> AuthSession:
    """
    Report the current identity.

    Never returns 401; an anonymous caller gets authenticated=false.
    """
    if user is None:
        return AuthSession(authenticated=False)

    return AuthSession(
        authenticated=True,
        user_id=str(user.id),
        email=user.email,
    )
