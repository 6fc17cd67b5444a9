# =============================================================================
# core/services/storage_service.py - Business Asset Storage
# =============================================================================
# Uploads listing images to the business-assets bucket and turns the stored
# paths into public URLs.
#
# Path layout (per uploader, never overwritten):
#   logos/{user_id}/{timestamp}_{filename}
#   products/{user_id}/{timestamp}_{index}_{filename}
# =============================================================================

import logging

from app.config import settings
from app.exceptions import StorageUploadError
from core.models.business import ImageFile
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import now_millis, safe_filename

logger = logging.getLogger(__name__)


class StorageService:
    """
    Service for business asset uploads.

    upsert is disabled on every upload, so a name collision comes back as
    a StorageUploadError rather than replacing someone else's image.
    """

    @staticmethod
    def logo_path(user_id: str, filename: str, timestamp: int | None = None) -> str:
        """Storage path for a business logo."""
        ts = timestamp if timestamp is not None else now_millis()
        return f"logos/{user_id}/{ts}_{safe_filename(filename)}"

    @staticmethod
    def product_image_path(
        user_id: str,
        index: int,
        filename: str,
        timestamp: int | None = None,
    ) -> str:
        """Storage path for the product image at `index` in the selection."""
        ts = timestamp if timestamp is not None else now_millis()
        return f"products/{user_id}/{ts}_{index}_{safe_filename(filename)}"

    @staticmethod
    def upload_image(path: str, image: ImageFile) -> str:
        """
        Upload an image and return its public URL.

        Args:
            path: Object path inside the business assets bucket
            image: The selected file

        Returns:
            Public URL of the stored object

        Raises:
            StorageUploadError: If the backend rejects the upload
        """
        bucket = settings.BUSINESS_ASSETS_BUCKET

        try:
            stored_path = SupabaseClient.upload_object(
                bucket=bucket,
                path=path,
                content=image.content,
                content_type=image.content_type,
                cache_control=settings.STORAGE_CACHE_CONTROL,
            )
        except SupabaseClientError as e:
            logger.error(f"Storage upload failed for {path}: {e.message}")
            raise StorageUploadError(path, e.message)

        logger.info(f"Uploaded image to storage: {stored_path} ({image.size} bytes)")
        return SupabaseClient.get_public_url(bucket, stored_path)
