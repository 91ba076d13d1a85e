"""
Dependency Injection for the content API client and gallery sessions

Both objects are created once during application startup (see the lifespan in
``wizmatik.main``) and shared across all requests.
"""

import logging
from collections.abc import AsyncGenerator

from wizmatik.sanity_client import AsyncSanityClient
from wizmatik.session_store import GallerySessionStore

logger = logging.getLogger(__name__)

_sanity_client_instance: AsyncSanityClient | None = None
_session_store_instance: GallerySessionStore | None = None


async def get_sanity_client() -> AsyncGenerator[AsyncSanityClient]:
    """Dependency injection function for AsyncSanityClient.

    Example:
        @router.get("/{slug}")
        async def detail(slug: str, sanity: AsyncSanityClient = Depends(get_sanity_client)):
            return await sanity.fetch_image_by_slug(slug)
    """
    yield get_sanity_client_instance()


def set_sanity_client_instance(client: AsyncSanityClient | None) -> None:
    global _sanity_client_instance
    _sanity_client_instance = client
    logger.info("Sanity client instance set globally")


def get_sanity_client_instance() -> AsyncSanityClient:
    """Get the global Sanity client without dependency injection.

    Raises:
        RuntimeError: If the client is not initialized
    """
    if _sanity_client_instance is None:
        raise RuntimeError("Sanity client not initialized. Make sure the application lifespan is properly configured.")
    return _sanity_client_instance


def get_session_store() -> GallerySessionStore:
    if _session_store_instance is None:
        raise RuntimeError("Gallery session store not initialized. Make sure the application lifespan is properly configured.")
    return _session_store_instance


def set_session_store_instance(store: GallerySessionStore | None) -> None:
    global _session_store_instance
    _session_store_instance = store
