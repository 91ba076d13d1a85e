from pydantic import BaseModel, Field

from wizmatik.schemas.image import ImageRecord


class ScrollReport(BaseModel):
    inner_height: float = Field(..., ge=0, description="Viewport height (window.innerHeight)")
    scroll_y: float = Field(..., ge=0, description="Vertical scroll offset (window.scrollY)")
    document_height: float = Field(..., ge=0, description="Document height (document.body.offsetHeight)")


class ScrollResponse(BaseModel):
    triggered: bool
    page: int
    exhausted: bool
    added: int = 0
    html: str = ""


class GallerySnapshot(BaseModel):
    session_id: str
    state: str
    page: int
    exhausted: bool
    is_loading_more: bool
    hero: ImageRecord | None = None
    images: list[ImageRecord]
    last_error: str | None = None
