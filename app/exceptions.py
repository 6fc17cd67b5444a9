# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class DirectoryException(Exception):
    """
    Base exception for the business directory API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "DIRECTORY_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Image Exceptions
# =============================================================================

class InvalidImageError(DirectoryException):
    """Raised when a selected file is not an accepted image."""

    def __init__(self, filename: str, content_type: str | None, allowed: list[str]):
        super().__init__(
            message=f"Invalid image file: {filename}",
            code="INVALID_IMAGE",
            status_code=400,
            suggestion=f"Only these content types are supported: {', '.join(allowed)}",
            details={"filename": filename, "content_type": content_type},
        )


class ImageTooLargeError(DirectoryException):
    """Raised when a selected image exceeds the size limit."""

    def __init__(self, filename: str, size_mb: float, max_mb: int):
        super().__init__(
            message=f"Image too large: {filename} ({size_mb:.1f}MB, max: {max_mb}MB)",
            code="IMAGE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload an image smaller than {max_mb}MB",
            details={"filename": filename, "size_mb": size_mb, "max_mb": max_mb},
        )


class InvalidOptionError(DirectoryException):
    """Raised when a submitted business option is not one of the offered labels."""

    def __init__(self, option: str, allowed: list[str]):
        super().__init__(
            message=f"Unknown business option: {option}",
            code="INVALID_OPTION",
            status_code=400,
            suggestion=f"Choose from: {', '.join(allowed)}",
            details={"option": option},
        )


# =============================================================================
# Backend Exceptions
# =============================================================================

class StorageUploadError(DirectoryException):
    """Raised when an image upload to storage fails."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message=error,
            code="STORAGE_UPLOAD_ERROR",
            status_code=502,
            suggestion="Rename the file or try again; existing objects are never overwritten",
            details={"path": path},
        )


class ListingInsertError(DirectoryException):
    """Raised when the businesses table rejects a new listing."""

    def __init__(self, error: str):
        super().__init__(
            message=error,
            code="LISTING_INSERT_ERROR",
            status_code=502,
            suggestion="Check the listing fields and that you are signed in as the owner",
        )


class BusinessFetchError(DirectoryException):
    """Raised when the public business list cannot be fetched."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Failed to fetch businesses: {error}",
            code="BUSINESS_FETCH_ERROR",
            status_code=502,
            suggestion="Try again later or contact support if the issue persists",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def directory_exception_handler(
    request: Request,
    exc: DirectoryException
) -> JSONResponse:
    """
    Convert DirectoryException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
