import json
from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

IMAGE_PROJECTION = """{
  _id,
  Title,
  Description,
  "imageUrl": image.asset->url,
  slug,
  dateUploaded,
}"""


class SanitySettings(BaseSettings):
    """Configuration for the Sanity content API"""

    api_url: str = Field(validation_alias=AliasChoices("SANITY_API_URL", "NEXT_PUBLIC_SANITY_API_URL", "api_url"))
    api_token: str = Field("", validation_alias=AliasChoices("SANITY_API_TOKEN", "NEXT_PUBLIC_SANITY_API_TOKEN", "api_token"))
    api_version: str = "v2022-03-07"
    dataset: str = "production"
    document_type: str = "images"
    timeout: float = 10.0

    model_config = SettingsConfigDict(
        env_prefix="SANITY_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def query_url(self) -> str:
        return f"{self.api_url.rstrip('/')}/{self.api_version}/data/query/{self.dataset}"


class GallerySettings(BaseSettings):
    """Settings for the gallery page, loaded from environment variables."""

    page_size: int = Field(2, ge=1)
    scroll_threshold: int = Field(500, ge=0)
    session_ttl_seconds: int = Field(1800, ge=1)
    site_name: str = "wizmatik"

    model_config = SettingsConfigDict(env_prefix="GALLERY_", env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache(maxsize=1)
def get_gallery_settings() -> GallerySettings:
    return GallerySettings()


def page_window(page: int, page_size: int) -> tuple[int, int]:
    """Return the [start, end) slice bounds for a zero-based page."""
    if page < 0:
        raise ValueError(f"page must be non-negative, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    start = page * page_size
    return start, start + page_size


def build_images_query(start: int, end: int, document_type: str = "images") -> str:
    """GROQ query for images ordered by upload date (newest first), sliced to [start...end]."""
    return f'*[_type == "{document_type}"] | order(dateUploaded desc) [{start}...{end}] {IMAGE_PROJECTION}'


def build_image_by_slug_query(document_type: str = "images") -> str:
    """GROQ query for a single image; expects a ``$slug`` parameter."""
    return f'*[_type == "{document_type}" && slug.current == $slug][0] {IMAGE_PROJECTION}'


def encode_query_params(params: dict[str, object]) -> dict[str, str]:
    """Encode GROQ parameters the way the query endpoint expects them (``$name=<json>``)."""
    return {f"${name}": json.dumps(value) for name, value in params.items()}
