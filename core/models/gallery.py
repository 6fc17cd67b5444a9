# =============================================================================
# core/models/gallery.py - Directory Gallery View Models
# =============================================================================
# A BusinessCard is everything the "Popular Businesses" grid needs to draw one
# business. Cards are derived from BusinessRecord rows by build_business_card().
#
# The option badges are a fixed set shown on every card; they do not reflect
# the record's own business_options.
# =============================================================================

import math

from pydantic import BaseModel, Field

from app.config import settings
from core.models.business import BusinessRecord
from core.models.routes import Route

STAR_COUNT = 5

STATIC_BADGES: tuple[str, ...] = (
    "Cash on Delivery",
    "Pickup In-Store",
    "Digital Payments",
    "Next-Day Delivery",
)

STATIC_PRICE_LABEL = "From $5"


class CardAction(BaseModel):
    """A button on a card. url is None when the button goes nowhere."""
    label: str
    url: str | None = None
    new_tab: bool = False


class BusinessCard(BaseModel):
    """One card in the directory gallery."""

    id: str
    name: str
    primary_image: str = Field(..., description="First product image or placeholder")
    logo_image: str = Field(..., description="Business logo or placeholder")
    verified: bool = True
    stars: list[bool] = Field(..., description="Filled flag for each of the five stars")
    rating_label: str
    price_label: str = STATIC_PRICE_LABEL
    location: str
    full_address: str | None = None
    category: str | None = None
    phone: str | None = None
    description: str | None = None
    badges: list[str] = Field(default_factory=lambda: list(STATIC_BADGES))
    catalog_action: CardAction
    website_action: CardAction | None = None
    detail_url: str


class GalleryView(BaseModel):
    """Response for the gallery endpoint."""
    loading: bool
    cards: list[BusinessCard] = Field(default_factory=list)


def render_stars(rating: float) -> list[bool]:
    """
    Filled flags for the five star positions.

    Position i is filled when i < floor(rating), so 3.7 gives three filled.
    """
    filled = math.floor(rating)
    return [i < filled for i in range(STAR_COUNT)]


def _full_address(record: BusinessRecord) -> str | None:
    if not record.address:
        return None
    return f"{record.address}, {record.city or ''}, {record.state or ''} {record.zip_code or ''}".strip()


def build_business_card(record: BusinessRecord) -> BusinessCard:
    """Map a business row to its gallery card."""
    primary_image = (
        record.product_images[0]
        if record.product_images
        else settings.PRODUCT_PLACEHOLDER_URL
    )

    website_action = None
    if record.website:
        website_action = CardAction(label="Visit Website", url=record.website, new_tab=True)

    return BusinessCard(
        id=record.id,
        name=record.name,
        primary_image=primary_image,
        logo_image=record.image_url or settings.LOGO_PLACEHOLDER_URL,
        stars=render_stars(record.rating),
        rating_label=f"{record.rating:.1f}",
        location=f"{record.city or ''}, {record.state or ''}",
        full_address=_full_address(record),
        category=record.category,
        phone=record.phone,
        description=record.description or None,
        # No catalog destination exists yet
        catalog_action=CardAction(label="See Products Catalog"),
        website_action=website_action,
        detail_url=Route.business_detail(record.id),
    )
