from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import HTMLResponse

from wizmatik.dependencies import get_sanity_client, get_session_store
from wizmatik.gallery import GalleryController, RenderState
from wizmatik.logger import logger
from wizmatik.rendering import render_gallery_page, render_grid_items
from wizmatik.sanity_client import AsyncSanityClient
from wizmatik.sanity_utils import GallerySettings, get_gallery_settings
from wizmatik.schemas.gallery import GallerySnapshot, ScrollReport, ScrollResponse
from wizmatik.session_store import GallerySessionStore

router = APIRouter(tags=["gallery"])


def get_gallery_controller(session_id: str, store: GallerySessionStore = Depends(get_session_store)) -> GalleryController:
    controller = store.get(session_id)
    if controller is None:
        raise HTTPException(status_code=404, detail="Gallery session not found")
    return controller


@router.get("/", response_class=HTMLResponse)
async def gallery_page(
    sanity: AsyncSanityClient = Depends(get_sanity_client),
    store: GallerySessionStore = Depends(get_session_store),
    settings: GallerySettings = Depends(get_gallery_settings),
) -> HTMLResponse:
    controller = GalleryController(sanity, page_size=settings.page_size, scroll_threshold=settings.scroll_threshold)
    state = await controller.mount()

    # Nothing to scroll through on the error screen, so the session is not kept
    if state.render_state == RenderState.LOADED:
        store.add(controller)
    else:
        logger.warning("Gallery page rendered without images (session=%s): %s", controller.session_id, state.last_error)

    html = render_gallery_page(state, controller.session_id, site_name=settings.site_name, scroll_threshold=settings.scroll_threshold)
    return HTMLResponse(html)


@router.post("/gallery/{session_id}/scroll", response_model=ScrollResponse)
async def report_scroll(report: ScrollReport, controller: GalleryController = Depends(get_gallery_controller)) -> ScrollResponse:
    added = await controller.on_scroll(report.inner_height, report.scroll_y, report.document_height)
    state = controller.state
    if added is None:
        return ScrollResponse(triggered=False, page=state.page, exhausted=state.exhausted)
    return ScrollResponse(
        triggered=True,
        page=state.page,
        exhausted=state.exhausted,
        added=len(added),
        html=render_grid_items(added) if added else "",
    )


@router.get("/gallery/{session_id}", response_model=GallerySnapshot)
def get_gallery_snapshot(controller: GalleryController = Depends(get_gallery_controller)) -> GallerySnapshot:
    state = controller.state
    return GallerySnapshot(
        session_id=controller.session_id,
        state=state.render_state.value,
        page=state.page,
        exhausted=state.exhausted,
        is_loading_more=state.is_loading_more,
        hero=state.hero,
        images=state.images,
        last_error=state.last_error,
    )


@router.delete("/gallery/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def close_gallery_session(session_id: str, store: GallerySessionStore = Depends(get_session_store)) -> Response:
    if not store.close(session_id):
        raise HTTPException(status_code=404, detail="Gallery session not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
