# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Business Directory API:
# - test_models.py: draft, payload, state machine and card models
# - test_listing_service.py: the listing submission workflow
# - test_directory_service.py: the directory gallery
# - test_storage_service.py: storage paths and upload errors
# - test_api.py: HTTP endpoints via TestClient
#
# Run tests with: pytest
# =============================================================================
