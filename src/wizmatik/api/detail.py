import re

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse

from wizmatik.dependencies import get_sanity_client
from wizmatik.logger import logger
from wizmatik.rendering import render_detail_page
from wizmatik.sanity_client import AsyncSanityClient, ContentAPIError
from wizmatik.sanity_utils import GallerySettings, get_gallery_settings

# Sanity slugs are lowercase words joined by dashes; anything with a dot or other
# punctuation (favicon.ico, robots.txt) never names an image.
SLUG_RE = re.compile(r"[A-Za-z0-9_-]+")

router = APIRouter(tags=["detail"])


@router.get("/{slug}", response_class=HTMLResponse)
async def image_detail(
    slug: str,
    sanity: AsyncSanityClient = Depends(get_sanity_client),
    settings: GallerySettings = Depends(get_gallery_settings),
) -> HTMLResponse:
    """Detail page for a single image, linked from the gallery grid"""
    if not SLUG_RE.fullmatch(slug):
        raise HTTPException(status_code=404, detail="Image not found")
    try:
        image = await sanity.fetch_image_by_slug(slug)
    except ContentAPIError as e:
        raise HTTPException(status_code=502, detail="Content API unavailable") from e
    if image is None:
        raise HTTPException(status_code=404, detail="Image not found")

    logger.log_event("view_image", slug=slug, image_id=image.id)
    return HTMLResponse(render_detail_page(image, site_name=settings.site_name))
