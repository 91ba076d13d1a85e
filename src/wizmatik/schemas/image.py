from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ImageRecord(BaseModel):
    """An image document as returned by the content API.

    Wire names follow the Sanity document (``_id``, ``Title``, ``imageUrl`` ...);
    the Python side uses snake_case. Records are immutable once fetched and are
    identified by ``id``.
    """

    id: str = Field(alias="_id")
    title: str = Field("", alias="Title")
    description: str = Field("", alias="Description")
    image_url: str | None = Field(None, alias="imageUrl")
    slug: str
    date_uploaded: datetime | None = Field(None, alias="dateUploaded")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("title", "description", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("slug", mode="before")
    @classmethod
    def unwrap_slug(cls, value: Any) -> Any:
        # Sanity slugs arrive as {"_type": "slug", "current": "..."}
        if isinstance(value, dict):
            return value.get("current")
        return value

    @field_validator("date_uploaded", mode="before")
    @classmethod
    def accept_plain_date(cls, value: Any) -> Any:
        if isinstance(value, str) and len(value) == 10:
            return f"{value}T00:00:00"
        return value

    @property
    def year(self) -> int | None:
        return self.date_uploaded.year if self.date_uploaded else None

    @property
    def href(self) -> str:
        return f"/{self.slug}"


class ImageQueryResponse(BaseModel):
    result: list[Any] = Field(default_factory=list)


class ImagePage(BaseModel):
    """One page of images.

    ``received`` counts every document the API returned for the page, including
    the ones dropped as malformed, so end-of-data is judged on the raw batch.
    """

    records: list[ImageRecord] = Field(default_factory=list)
    received: int = 0


class SingleImageQueryResponse(BaseModel):
    result: ImageRecord | None = None
