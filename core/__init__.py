# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: listing, submission and gallery schemas
# - services/: storage uploads, business table access, the submission
#   workflow and the directory gallery
#
# Code in this package should NOT import from FastAPI routers.
# This keeps the logic testable and reusable.
# =============================================================================
