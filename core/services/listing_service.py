# =============================================================================
# core/services/listing_service.py - Listing Submission Workflow
# =============================================================================
# Runs one submission attempt for a business listing:
#   1. refuse (and send to sign-in) when nobody is signed in
#   2. upload the logo, alone, if one was picked
#   3. upload product images concurrently, all-or-nothing
#   4. insert the businesses row
#
# Any failure ends the attempt with the draft handed back for a retry.
# Nothing is retried automatically and uploaded objects are never cleaned up.
# =============================================================================

from __future__ import annotations

import asyncio
import logging

from app.auth.models import AuthUser
from app.exceptions import DirectoryException
from core.models.business import BusinessListingDraft, ImageFile, build_insert_payload
from core.models.routes import Route
from core.models.submission import (
    Notification,
    SubmissionClosedError,
    SubmissionEvent,
    SubmissionResult,
    SubmissionState,
    transition,
)
from core.services.business_service import BusinessService
from core.services.storage_service import StorageService
from lib.supabase_client import backend_message
from lib.utils import normalize_uuid, now_millis

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Failed to list business. Please try again."


def user_facing_message(exc: BaseException) -> str:
    """Message to show in the failure toast: the backend's words, else a generic one."""
    if isinstance(exc, DirectoryException):
        message = exc.message
    else:
        message = backend_message(exc)
    return message or GENERIC_FAILURE_MESSAGE


class ListingSubmission:
    """
    A single attempt to list a business.

    Create one per submit. After run() the attempt is in a terminal state
    and cannot be run again.

    Example:
        attempt = ListingSubmission(draft, user)
        result = await attempt.run()
        if result.redirect_to:
            ...
    """

    def __init__(self, draft: BusinessListingDraft, user: AuthUser | None):
        self.draft: BusinessListingDraft | None = draft
        self.user = user
        self.state = SubmissionState.IDLE

    @property
    def submit_disabled(self) -> bool:
        """True while uploads or the insert are running."""
        return self.state.is_in_flight

    def _apply(self, event: SubmissionEvent) -> None:
        previous = self.state
        self.state = transition(self.state, event)
        logger.debug(f"Submission {previous.value} -> {self.state.value} ({event.value})")

    async def run(self) -> SubmissionResult:
        """
        Run the attempt to completion.

        Returns:
            SubmissionResult in BLOCKED, SUCCEEDED or FAILED state

        Raises:
            SubmissionClosedError: If this attempt was already started
        """
        if self.state is not SubmissionState.IDLE:
            raise SubmissionClosedError(self.state)

        draft = self.draft

        if self.user is None:
            self._apply(SubmissionEvent.SUBMIT_UNAUTHENTICATED)
            logger.info("Listing submission blocked: no authenticated user")
            return SubmissionResult(
                state=self.state,
                notification=Notification(
                    title="Authentication Required",
                    description="Please sign in to list your business.",
                    variant="destructive",
                ),
                redirect_to=Route.SIGN_IN,
                draft=draft.snapshot(),
            )

        owner_id = normalize_uuid(self.user.id)

        if draft.has_uploads:
            self._apply(SubmissionEvent.SUBMIT_WITH_UPLOADS)
        else:
            self._apply(SubmissionEvent.SUBMIT_WITHOUT_UPLOADS)

        try:
            logo_url = None
            image_urls: list[str] = []

            if self.state is SubmissionState.UPLOADING:
                logo_url, image_urls = await self._upload_images(draft, owner_id)
                self._apply(SubmissionEvent.UPLOADS_COMPLETE)

            payload = build_insert_payload(
                draft,
                owner_id=owner_id,
                logo_url=logo_url,
                product_image_urls=image_urls,
            )
            business = await asyncio.to_thread(BusinessService.create_business, payload)

        except Exception as e:
            self._apply(SubmissionEvent.FAILURE)
            logger.error(f"Error listing business for {owner_id}: {e}")
            return SubmissionResult(
                state=self.state,
                notification=Notification(
                    title="Error",
                    description=user_facing_message(e),
                    variant="destructive",
                ),
                draft=draft.snapshot(),
            )

        self._apply(SubmissionEvent.INSERT_ACCEPTED)
        self.draft = None

        return SubmissionResult(
            state=self.state,
            notification=Notification(
                title="Success!",
                description="Your business has been listed successfully.",
            ),
            redirect_to=Route.DASHBOARD,
            business=business or None,
        )

    async def _upload_images(
        self,
        draft: BusinessListingDraft,
        owner_id: str,
    ) -> tuple[str | None, list[str]]:
        """
        Upload the logo, then the product images as one group.

        A failed logo upload raises before any product image is sent. In the
        product group the first failure is raised while the other uploads are
        left to finish; their URLs are dropped.
        """
        timestamp = now_millis()
        logo_url = None

        if draft.logo is not None:
            path = StorageService.logo_path(owner_id, draft.logo.filename, timestamp)
            logo_url = await asyncio.to_thread(StorageService.upload_image, path, draft.logo)

        image_urls: list[str] = []
        if draft.product_images:
            image_urls = list(await asyncio.gather(*(
                self._upload_product_image(owner_id, index, image, timestamp)
                for index, image in enumerate(draft.product_images)
            )))

        return logo_url, image_urls

    @staticmethod
    async def _upload_product_image(
        owner_id: str,
        index: int,
        image: ImageFile,
        timestamp: int,
    ) -> str:
        path = StorageService.product_image_path(owner_id, index, image.filename, timestamp)
        return await asyncio.to_thread(StorageService.upload_image, path, image)
