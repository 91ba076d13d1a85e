"""
Gallery page controller

Holds the transient state of one gallery page visit and drives it: paginated
fetching with de-duplication, the one-time hero pick, scroll-triggered
pagination and the render state the page is drawn from.
"""

import logging
import random
import uuid
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol

from wizmatik.logger import logger as event_logger
from wizmatik.sanity_client import ContentAPIError
from wizmatik.schemas.image import ImagePage, ImageRecord

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 2
DEFAULT_SCROLL_THRESHOLD = 500


class ImageSource(Protocol):
    async def fetch_images_page(self, page: int, page_size: int) -> ImagePage: ...


class RenderState(StrEnum):
    LOADING = "loading"
    ERROR = "error"
    LOADED = "loaded"


@dataclass
class GalleryState:
    images: list[ImageRecord] = field(default_factory=list)
    seen_ids: set[str] = field(default_factory=set)
    hero: ImageRecord | None = None
    page: int = 0
    loading: bool = True
    is_loading_more: bool = False
    exhausted: bool = False
    last_error: str | None = None

    @property
    def render_state(self) -> RenderState:
        if self.loading and not self.images:
            return RenderState.LOADING
        if not self.images:
            return RenderState.ERROR
        return RenderState.LOADED

    def merge(self, batch: list[ImageRecord]) -> list[ImageRecord]:
        """Append records with unseen ids in batch order and return the ones added."""
        added = []
        for image in batch:
            if image.id in self.seen_ids:
                continue
            self.seen_ids.add(image.id)
            self.images.append(image)
            added.append(image)
        return added


def is_near_bottom(inner_height: float, scroll_y: float, document_height: float, threshold: float = DEFAULT_SCROLL_THRESHOLD) -> bool:
    return inner_height + scroll_y >= document_height - threshold


class GalleryController:
    """Page controller for one gallery visit.

    ``mount`` loads page 0. Each scroll report close enough to the bottom of the
    document advances the page by one and loads it, unless a fetch is already in
    flight or the content API has run out of images.
    """

    def __init__(
        self,
        source: ImageSource,
        page_size: int = DEFAULT_PAGE_SIZE,
        scroll_threshold: int = DEFAULT_SCROLL_THRESHOLD,
        rng: random.Random | None = None,
        session_id: str | None = None,
    ):
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.source = source
        self.page_size = page_size
        self.scroll_threshold = scroll_threshold
        self.rng = rng or random.Random()
        self.session_id = session_id or str(uuid.uuid4())
        self.state = GalleryState()
        self.events = event_logger.bind(session_id=self.session_id)

    async def mount(self) -> GalleryState:
        await self.fetch_images(0)
        return self.state

    async def fetch_images(self, page: int = 0) -> list[ImageRecord]:
        """Fetch one page and merge it into the state.

        Returns the newly added records; an empty list when the page brought
        nothing new or the fetch failed.
        """
        state = self.state
        state.is_loading_more = True
        try:
            result = await self.source.fetch_images_page(page, self.page_size)
        except ContentAPIError as e:
            state.last_error = str(e)
            logger.error(f"Error fetching images (session={self.session_id}, page={page}): {e}")
            return []
        finally:
            state.loading = False
            state.is_loading_more = False

        added = state.merge(result.records)
        if state.hero is None and added:
            state.hero = self.rng.choice(added)

        self.events.log_event("images_fetched", page=page, received=result.received, added=len(added), total=len(state.images))

        # Judged on the raw count: a page of dropped drafts is not the end of the data
        if result.received < self.page_size and not state.exhausted:
            state.exhausted = True
            self.events.log_event("gallery_exhausted", page=page, total=len(state.images))
        return added

    def should_load_more(self, inner_height: float, scroll_y: float, document_height: float) -> bool:
        state = self.state
        if state.is_loading_more or state.exhausted:
            return False
        return is_near_bottom(inner_height, scroll_y, document_height, self.scroll_threshold)

    def advance_page(self) -> int:
        # The guard is raised before any await so overlapping scroll reports see it.
        self.state.page += 1
        self.state.is_loading_more = True
        self.events.log_event("page_advanced", page=self.state.page)
        return self.state.page

    async def on_scroll(self, inner_height: float, scroll_y: float, document_height: float) -> list[ImageRecord] | None:
        """Handle one scroll report.

        Returns None when the report did not trigger a fetch, otherwise the
        records the new page added.
        """
        if not self.should_load_more(inner_height, scroll_y, document_height):
            return None
        page = self.advance_page()
        return await self.fetch_images(page)
