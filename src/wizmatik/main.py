import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from wizmatik.api.detail import router as detail_router
from wizmatik.api.gallery import router as gallery_router
from wizmatik.dependencies import get_sanity_client_instance, set_sanity_client_instance, set_session_store_instance
from wizmatik.metrics import setup_metrics
from wizmatik.sanity_client import AsyncSanityClient
from wizmatik.sanity_utils import get_gallery_settings
from wizmatik.session_store import GallerySessionStore

from .logging_config import configure_logging

# uvicorn imports this module when starting the app, so this also covers uvicorn loggers
configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the shared content API client and session store on startup and
    close the client on shutdown.
    """
    logger.info("Starting up application...")
    try:
        sanity_client = AsyncSanityClient()
        set_sanity_client_instance(sanity_client)
        set_session_store_instance(GallerySessionStore(ttl_seconds=get_gallery_settings().session_ttl_seconds))
        logger.info("Sanity client initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize Sanity client: {e}")
        raise

    yield

    logger.info("Shutting down application...")
    try:
        await get_sanity_client_instance().close()
        logger.info("Sanity client closed successfully")
    except RuntimeError as e:
        logger.error(f"Error during Sanity client shutdown: {e}")
    finally:
        set_sanity_client_instance(None)
        set_session_store_instance(None)


app = FastAPI(docs_url=None, redoc_url=None, redirect_slashes=False, lifespan=lifespan)

app.include_router(gallery_router)


@app.get("/health")
def health():
    return {"status": "ok"}


setup_metrics(app)

# The detail route matches any single path segment, so it is registered last
app.include_router(detail_router)
