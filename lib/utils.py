# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import time
from pathlib import PurePosixPath
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Handles both string and UUID objects, ensuring consistent string output.

    Example:
        owner_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        owner_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Storage Path Utilities
# =============================================================================

def now_millis() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def safe_filename(filename: str | None, default: str = "image") -> str:
    """
    Reduce a client-supplied filename to its final path component.

    Browsers send bare names, but other clients may send "a/b/logo.png";
    a slash would otherwise create extra folders in the bucket.
    """
    if not filename:
        return default
    name = PurePosixPath(filename.replace("\\", "/")).name
    return name or default
