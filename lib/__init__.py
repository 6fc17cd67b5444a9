# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for storage, insert and RPC
# - utils.py: Shared utilities (UUID normalization, timestamps, filenames)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError, backend_message
from lib.utils import normalize_uuid, now_millis, safe_filename

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    "backend_message",
    # Utils
    "normalize_uuid",
    "now_millis",
    "safe_filename",
]
