from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from wizmatik.gallery import GalleryState, RenderState
from wizmatik.schemas.image import ImageRecord

TEMPLATE_DIR = Path(__file__).parent / "templates"

LOADING_TEXT = "wizmatik . . ."
ERROR_TEXT = "Error loading images. Please try again later."
LOADING_MORE_TEXT = "Loading more images..."

_env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)), autoescape=select_autoescape(["html"]))


def hero_caption(image: ImageRecord, site_name: str = "wizmatik") -> tuple[str, str]:
    """Heading lines for the hero section: "<title>, <description>, " and "<year> © <site>"."""
    year = image.year if image.year is not None else ""
    return f"{image.title}, {image.description}, ", f"{year} © {site_name}"


def render_gallery_page(state: GalleryState, session_id: str, site_name: str = "wizmatik", scroll_threshold: int = 500) -> str:
    template = _env.get_template("gallery.html")
    return template.render(
        state=state,
        images=state.images,
        render_state=state.render_state.value,
        RenderState=RenderState,
        session_id=session_id,
        site_name=site_name,
        scroll_threshold=scroll_threshold,
        hero_lines=hero_caption(state.hero, site_name) if state.hero else None,
        loading_text=LOADING_TEXT,
        error_text=ERROR_TEXT,
        loading_more_text=LOADING_MORE_TEXT,
    )


def render_grid_items(images: list[ImageRecord]) -> str:
    return _env.get_template("_grid_items.html").render(images=images)


def render_detail_page(image: ImageRecord, site_name: str = "wizmatik") -> str:
    return _env.get_template("detail.html").render(image=image, site_name=site_name, caption=hero_caption(image, site_name))
