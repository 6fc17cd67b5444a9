# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .business_service import BusinessService
from .directory_service import DirectoryGallery
from .listing_service import GENERIC_FAILURE_MESSAGE, ListingSubmission, user_facing_message
from .storage_service import StorageService

__all__ = [
    "BusinessService",
    "DirectoryGallery",
    "GENERIC_FAILURE_MESSAGE",
    "ListingSubmission",
    "StorageService",
    "user_facing_message",
]
