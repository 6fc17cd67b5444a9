# =============================================================================
# core/models/ - Data Models
# =============================================================================
# This package contains the schemas shared by the services and the API:
# - business.py: listing draft, insert payload, business read model
# - submission.py: submission state machine and outcome models
# - gallery.py: directory gallery card view models
# - routes.py: client-side screens responses can redirect to
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Business Models - Listing form and stored rows
# -----------------------------------------------------------------------------
from .business import (
    BUSINESS_CATEGORIES,
    BUSINESS_OPTIONS,
    MAX_PRODUCT_IMAGES,
    BusinessInsertPayload,
    BusinessListingDraft,
    BusinessRecord,
    ImageFile,
    build_insert_payload,
)

# -----------------------------------------------------------------------------
# Submission Models - Per-attempt state machine
# -----------------------------------------------------------------------------
from .submission import (
    InvalidTransitionError,
    Notification,
    SubmissionClosedError,
    SubmissionEvent,
    SubmissionResult,
    SubmissionState,
    transition,
)

# -----------------------------------------------------------------------------
# Gallery Models - Directory cards
# -----------------------------------------------------------------------------
from .gallery import (
    STATIC_BADGES,
    BusinessCard,
    CardAction,
    GalleryView,
    build_business_card,
    render_stars,
)

from .routes import Route

__all__ = [
    # Business
    "BUSINESS_CATEGORIES",
    "BUSINESS_OPTIONS",
    "MAX_PRODUCT_IMAGES",
    "BusinessInsertPayload",
    "BusinessListingDraft",
    "BusinessRecord",
    "ImageFile",
    "build_insert_payload",
    # Submission
    "InvalidTransitionError",
    "Notification",
    "SubmissionClosedError",
    "SubmissionEvent",
    "SubmissionResult",
    "SubmissionState",
    "transition",
    # Gallery
    "STATIC_BADGES",
    "BusinessCard",
    "CardAction",
    "GalleryView",
    "build_business_card",
    "render_stars",
    # Routes
    "Route",
]
