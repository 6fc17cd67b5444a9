# =============================================================================
# core/services/directory_service.py - Directory Gallery
# =============================================================================
# Backs the "Popular Businesses" grid: one fetch per mount, then cards.
# A failed fetch is logged and the gallery keeps whatever it had (nothing on
# first load). No retry, no polling.
# =============================================================================

import asyncio
import logging

from core.models.business import BusinessRecord
from core.models.gallery import BusinessCard, GalleryView, build_business_card
from core.services.business_service import BusinessService

logger = logging.getLogger(__name__)


class DirectoryGallery:
    """
    State of one mounted gallery.

    loading is True until the first fetch settles, success or not.
    """

    def __init__(self):
        self.businesses: list[BusinessRecord] = []
        self.loading = True
        self._mounted = False

    async def mount(self) -> None:
        """Fetch the public business list. Only the first call does anything."""
        if self._mounted:
            return
        self._mounted = True

        try:
            self.businesses = await asyncio.to_thread(BusinessService.fetch_public_businesses)
            logger.debug(f"Gallery loaded {len(self.businesses)} businesses")
        except Exception as e:
            logger.error(f"Error fetching businesses: {e}")
        finally:
            self.loading = False

    def cards(self) -> list[BusinessCard]:
        return [build_business_card(record) for record in self.businesses]

    def view(self) -> GalleryView:
        return GalleryView(loading=self.loading, cards=[] if self.loading else self.cards())
