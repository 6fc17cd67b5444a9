# =============================================================================
# app/routers/directory.py - Directory Gallery Endpoint
# =============================================================================
# Public "Popular Businesses" grid. No authentication required.
# =============================================================================

from fastapi import APIRouter

from core.models.gallery import GalleryView
from core.services.directory_service import DirectoryGallery

router = APIRouter()


@router.get("/popular", response_model=GalleryView)
async def get_popular_businesses():
    """
    List public businesses as gallery cards.

    Each request mounts a fresh gallery, which fetches once. If the backend
    call fails the response is simply an empty card list.
    """
    gallery = DirectoryGallery()
    await gallery.mount()
    return gallery.view()
