# =============================================================================
# app/routers/listings.py - Business Listing Endpoints
# =============================================================================
# The "List Your Business" screen:
# - GET  /listings/form  what the form needs (or a sign-in prompt)
# - POST /listings       run one submission attempt
#
# A blocked or failed attempt is a normal 200 response describing what to
# show the user; only malformed input is rejected with 4xx.
# =============================================================================

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from pydantic import BaseModel, Field

from app.auth import AuthUser, get_current_user_optional
from app.config import settings
from app.exceptions import ImageTooLargeError, InvalidImageError, InvalidOptionError
from core.models.business import (
    BUSINESS_CATEGORIES,
    BUSINESS_OPTIONS,
    BusinessListingDraft,
    ImageFile,
)
from core.models.routes import Route
from core.models.submission import SubmissionResult, SubmissionState
from core.services.listing_service import ListingSubmission

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class ListingFormView(BaseModel):
    """Everything the listing form needs to render."""
    sign_in_required: bool
    sign_in_url: str = Route.SIGN_IN
    cancel_url: str = Route.HOME
    categories: list[str] = Field(default_factory=list)
    options: list[str] = Field(default_factory=list)
    max_product_images: int = 0


# =============================================================================
# Helper Functions
# =============================================================================

async def _read_image(upload: UploadFile) -> ImageFile:
    """Read an uploaded file into memory after checking type and size."""
    filename = upload.filename or "image"
    content_type = (upload.content_type or "").lower()
    allowed = settings.allowed_image_types_list

    if not any(content_type.startswith(prefix) for prefix in allowed):
        raise InvalidImageError(filename, upload.content_type, allowed)

    content = await upload.read()
    if len(content) > settings.max_image_size_bytes:
        raise ImageTooLargeError(filename, len(content) / (1024 * 1024), settings.MAX_IMAGE_SIZE_MB)

    return ImageFile(filename=filename, content=content, content_type=upload.content_type)


def _picked(upload: UploadFile | None) -> bool:
    # An untouched <input type="file"> still posts a part with an empty filename
    return upload is not None and bool(upload.filename)


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/form", response_model=ListingFormView)
async def get_listing_form(
    user: Optional[AuthUser] = Depends(get_current_user_optional),
):
    """
    Describe the listing form.

    Anonymous callers get sign_in_required=true and no form data.
    """
    if user is None:
        return ListingFormView(sign_in_required=True)

    return ListingFormView(
        sign_in_required=False,
        categories=list(BUSINESS_CATEGORIES),
        options=list(BUSINESS_OPTIONS),
        max_product_images=settings.MAX_PRODUCT_IMAGES,
    )


@router.post("", response_model=SubmissionResult)
async def submit_listing(
    response: Response,
    name: Annotated[str, Form(min_length=1)],
    description: Annotated[str, Form(min_length=1)],
    category: Annotated[str, Form(min_length=1)],
    phone: Annotated[str, Form(min_length=1)],
    address: Annotated[str, Form(min_length=1)],
    city: Annotated[str, Form(min_length=1)],
    state: Annotated[str, Form(min_length=1)],
    zip_code: Annotated[str, Form(min_length=1)],
    website: Annotated[str, Form()] = "",
    facebook_page: Annotated[str, Form()] = "",
    tiktok_url: Annotated[str, Form()] = "",
    starting_price: Annotated[str, Form()] = "",
    products_catalog: Annotated[str, Form()] = "",
    license_expired_date: Annotated[str, Form()] = "",
    options: Annotated[list[str] | None, Form()] = None,
    logo: Annotated[UploadFile | None, File()] = None,
    product_images: Annotated[list[UploadFile] | None, File()] = None,
    user: Optional[AuthUser] = Depends(get_current_user_optional),
):
    """
    Submit a business listing.

    Uploads the logo and up to three product images (extra images are
    ignored), then inserts the listing. The response says which toast to
    show and where to navigate:
    - blocked: not signed in, redirect to sign-in
    - succeeded: redirect to the dashboard
    - failed: stay on the form; `draft` holds the submitted values
    """
    draft = BusinessListingDraft()
    for field_name, value in (
        ("name", name),
        ("description", description),
        ("category", category),
        ("phone", phone),
        ("address", address),
        ("city", city),
        ("state", state),
        ("zip_code", zip_code),
        ("website", website),
        ("facebook_page", facebook_page),
        ("tiktok_url", tiktok_url),
        ("starting_price", starting_price),
        ("products_catalog", products_catalog),
        ("license_expired_date", license_expired_date),
    ):
        draft.set_field(field_name, value)

    for option in options or []:
        try:
            draft.set_option(option, True)
        except ValueError:
            raise InvalidOptionError(option, list(BUSINESS_OPTIONS))

    # Anonymous callers never reach storage, so skip reading their files
    if user is not None:
        if _picked(logo):
            draft.set_logo(await _read_image(logo))

        picked = [f for f in (product_images or []) if _picked(f)]
        draft.set_product_images([
            await _read_image(f) for f in picked[:settings.MAX_PRODUCT_IMAGES]
        ])

    result = await ListingSubmission(draft, user).run()

    if result.state is SubmissionState.SUCCEEDED:
        response.status_code = status.HTTP_201_CREATED

    return result
