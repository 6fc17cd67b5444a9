# =============================================================================
# core/models/routes.py - Front-end Routes
# =============================================================================
# Screens the API can send the client to. Responses carry one of these in a
# `redirect_to` field; the client performs the navigation.
# =============================================================================


class Route:
    """Client-side paths for the screens the directory links between."""

    HOME = "/"
    SIGN_IN = "/auth/signin"
    DASHBOARD = "/dashboard"

    @staticmethod
    def business_detail(business_id: str) -> str:
        return f"/business/{business_id}"
