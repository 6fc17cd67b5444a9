# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - listings.py: Listing form and submission
# - directory.py: Public business gallery
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import directory
from . import health
from . import listings

__all__ = [
    "directory",
    "health",
    "listings",
]
