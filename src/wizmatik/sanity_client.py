"""
Asynchronous Sanity Client

This module provides an async client for the Sanity GROQ query endpoint built
on httpx. The client is designed to be used as an application singleton via
dependency injection; one ``httpx.AsyncClient`` is shared by all requests.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from wizmatik.sanity_utils import SanitySettings, build_image_by_slug_query, build_images_query, encode_query_params, page_window
from wizmatik.schemas.image import ImagePage, ImageQueryResponse, ImageRecord, SingleImageQueryResponse

logger = logging.getLogger(__name__)


class ContentAPIError(Exception):
    """Raised when the content API cannot be reached or returns an unusable response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AsyncSanityClient:
    """Asynchronous Sanity Client

    The underlying ``httpx.AsyncClient`` is created lazily on first use and
    kept open until :meth:`close` is called during application shutdown.
    """

    def __init__(self, settings: SanitySettings | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings or SanitySettings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        logger.info(f"AsyncSanityClient initialized: endpoint={self.settings.query_url}, dataset={self.settings.dataset}")

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the shared httpx client."""
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self.settings.api_token:
                headers["Authorization"] = f"Bearer {self.settings.api_token}"
            self._client = httpx.AsyncClient(headers=headers, timeout=self.settings.timeout, transport=self._transport)
        return self._client

    async def query(self, groq: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a GROQ query and return the decoded response body.

        Args:
            groq: GROQ query string
            params: Optional query parameters referenced as ``$name`` in the query

        Returns:
            Decoded JSON body (``{"result": ...}``)

        Raises:
            ContentAPIError: On transport errors, non-2xx responses or non-JSON bodies
        """
        request_params = {"query": groq}
        if params:
            request_params.update(encode_query_params(params))

        try:
            response = await self.client.get(self.settings.query_url, params=request_params)
        except httpx.HTTPError as e:
            logger.error(f"Content API request failed: {e}")
            raise ContentAPIError(f"Content API request failed: {e}") from e

        if not response.is_success:
            logger.error(f"Content API returned HTTP {response.status_code}")
            raise ContentAPIError(f"Failed to fetch images (HTTP {response.status_code})", status_code=response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            logger.error(f"Content API returned a non-JSON body: {e}")
            raise ContentAPIError("Content API returned a non-JSON body", status_code=response.status_code) from e
        if not isinstance(body, dict):
            raise ContentAPIError("Content API returned an unexpected body", status_code=response.status_code)
        return body

    async def fetch_images_page(self, page: int, page_size: int) -> ImagePage:
        """Fetch one page of images ordered by upload date, newest first.

        Documents that fail validation (drafts without a slug, unparseable dates)
        are logged and left out; the rest of the page is kept.
        """
        start, end = page_window(page, page_size)
        body = await self.query(build_images_query(start, end, self.settings.document_type))
        try:
            documents = ImageQueryResponse.model_validate(body).result
        except ValidationError as e:
            logger.error(f"Malformed image result for page {page}: {e}")
            raise ContentAPIError(f"Malformed image result for page {page}") from e

        records = []
        for document in documents:
            try:
                records.append(ImageRecord.model_validate(document))
            except ValidationError as e:
                document_id = document.get("_id") if isinstance(document, dict) else None
                logger.warning(f"Skipping malformed image {document_id!r} on page {page}: {e.error_count()} validation errors")
        logger.info(f"Fetched {len(records)} of {len(documents)} images for page {page} (start={start}, end={end})")
        return ImagePage(records=records, received=len(documents))

    async def fetch_image_by_slug(self, slug: str) -> ImageRecord | None:
        """Fetch a single image by its slug; returns None when no document matches."""
        body = await self.query(build_image_by_slug_query(self.settings.document_type), {"slug": slug})
        try:
            return SingleImageQueryResponse.model_validate(body).result
        except ValidationError as e:
            logger.error(f"Malformed image record for slug {slug!r}: {e}")
            raise ContentAPIError(f"Malformed image record for slug {slug!r}") from e

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
