# =============================================================================
# core/models/business.py - Business Listing Schemas
# =============================================================================
# These models describe a business on its way into and out of the backend:
# - BusinessListingDraft: mutable form state for one submission
# - BusinessInsertPayload: the exact row sent to the businesses table
# - BusinessRecord: a row returned by get_public_businesses
#
# build_insert_payload() is the only bridge from draft to payload. It is a
# pure function so the normalization rules can be tested without a backend.
# =============================================================================

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Checkbox labels offered on the listing form, in display order
BUSINESS_OPTIONS: tuple[str, ...] = (
    "Cash on Delivery",
    "Pickup In-Store",
    "Digital Payments",
    "Next-Day Delivery",
)

BUSINESS_CATEGORIES: tuple[str, ...] = (
    "Restaurant",
    "Retail Store",
    "Service Business",
    "Healthcare",
    "Beauty & Salon",
    "Technology",
    "Automotive",
    "Real Estate",
    "Education",
    "Entertainment",
    "Other",
)

MAX_PRODUCT_IMAGES = 3

# Copied into the payload exactly as typed
REQUIRED_TEXT_FIELDS: tuple[str, ...] = (
    "name",
    "description",
    "category",
    "phone",
    "address",
    "city",
    "state",
    "zip_code",
)

# Empty string becomes None in the payload
OPTIONAL_TEXT_FIELDS: tuple[str, ...] = (
    "website",
    "facebook_page",
    "tiktok_url",
    "starting_price",
    "products_catalog",
    "license_expired_date",
)

TEXT_FIELDS: tuple[str, ...] = REQUIRED_TEXT_FIELDS + OPTIONAL_TEXT_FIELDS


# =============================================================================
# Draft (form state)
# =============================================================================

@dataclass
class ImageFile:
    """A file the user picked in the form, held in memory until upload."""
    filename: str
    content: bytes
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class BusinessListingDraft:
    """
    Form state for one business listing.

    Starts with every field empty and is mutated one field at a time.
    Never persisted; a successful submission discards it.
    """
    name: str = ""
    description: str = ""
    category: str = ""
    phone: str = ""
    license_expired_date: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    website: str = ""
    facebook_page: str = ""
    tiktok_url: str = ""
    starting_price: str = ""
    products_catalog: str = ""
    options: list[str] = field(default_factory=list)
    logo: ImageFile | None = None
    product_images: list[ImageFile] = field(default_factory=list)

    def set_field(self, name: str, value: str) -> None:
        """Set one text field by name."""
        if name not in TEXT_FIELDS:
            raise KeyError(f"Unknown listing field: {name}")
        setattr(self, name, value)

    def set_option(self, option: str, checked: bool) -> None:
        """Check or uncheck a business option."""
        if option not in BUSINESS_OPTIONS:
            raise ValueError(f"Unknown business option: {option}")
        if checked:
            if option not in self.options:
                self.options.append(option)
        else:
            self.options = [o for o in self.options if o != option]

    def set_logo(self, file: ImageFile | None) -> None:
        self.logo = file

    def set_product_images(self, files: list[ImageFile]) -> None:
        """Replace the product image selection, keeping only the first three."""
        self.product_images = list(files)[:MAX_PRODUCT_IMAGES]

    @property
    def has_uploads(self) -> bool:
        return self.logo is not None or bool(self.product_images)

    def snapshot(self) -> dict[str, Any]:
        """
        JSON-friendly view of the draft for sending back to the form.

        File contents are left out; only the selected filenames are kept.
        """
        data: dict[str, Any] = {name: getattr(self, name) for name in TEXT_FIELDS}
        data["options"] = list(self.options)
        data["logo"] = self.logo.filename if self.logo else None
        data["product_images"] = [f.filename for f in self.product_images]
        return data


# =============================================================================
# Insert Payload
# =============================================================================

class BusinessInsertPayload(BaseModel):
    """
    Row inserted into the businesses table.

    owner_id must be the authenticated caller; the backend's row-level
    policies reject anything else.
    """

    owner_id: str
    name: str
    description: str
    category: str
    phone: str
    address: str
    city: str
    state: str
    zip_code: str
    website: str | None = None
    image_url: str | None = None
    facebook_page: str | None = None
    tiktok_url: str | None = None
    starting_price: str | None = None
    business_options: list[str] | None = None
    products_catalog: str | None = None
    license_expired_date: str | None = None
    product_images: Annotated[list[str], Field(max_length=MAX_PRODUCT_IMAGES)] | None = None


def build_insert_payload(
    draft: BusinessListingDraft,
    owner_id: str,
    logo_url: str | None = None,
    product_image_urls: list[str] | None = None,
) -> BusinessInsertPayload:
    """
    Assemble the businesses row from a draft and the uploaded image URLs.

    Rules:
    - optional text fields left empty are sent as None
    - business_options is None when nothing is checked
    - image_url / product_images are None when nothing was uploaded
    """
    row: dict[str, Any] = {"owner_id": owner_id}

    for name in REQUIRED_TEXT_FIELDS:
        row[name] = getattr(draft, name)

    for name in OPTIONAL_TEXT_FIELDS:
        row[name] = getattr(draft, name) or None

    row["image_url"] = logo_url or None
    row["business_options"] = list(draft.options) if draft.options else None
    row["product_images"] = list(product_image_urls) if product_image_urls else None

    return BusinessInsertPayload(**row)


# =============================================================================
# Read Model
# =============================================================================

class BusinessRecord(BaseModel):
    """
    A business row as returned by get_public_businesses.

    The function may return more or fewer columns than the table has, so
    everything except id and name is optional and unknown keys are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    owner_id: str | None = None
    description: str | None = None
    category: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    website: str | None = None
    facebook_page: str | None = None
    tiktok_url: str | None = None
    rating: float = 0.0
    image_url: str | None = None
    product_images: list[str] | None = None
    products_catalog: str | None = None
    business_options: list[str] | None = None
    starting_price: str | None = None
    license_expired_date: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("rating", mode="before")
    @classmethod
    def _null_rating_is_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("rating")
    @classmethod
    def _non_finite_rating_is_zero(cls, value: float) -> float:
        # numeric columns can hold NaN / Infinity, which PostgREST sends as strings
        return value if math.isfinite(value) else 0.0

    @field_validator("id", "owner_id", "starting_price", "license_expired_date", mode="before")
    @classmethod
    def _coerce_to_text(cls, value: Any) -> Any:
        # uuid / numeric / date columns may arrive as non-strings
        return None if value is None else str(value)
