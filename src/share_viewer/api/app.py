"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, Response, status

from share_viewer.api.models import GuardSignalRequest, ViewerCommand
from share_viewer.app_logging import configure_logging
from share_viewer.containers import AppContainer
from share_viewer.domain.content import Category
from share_viewer.domain.input_events import WheelEvent
from share_viewer.services.content_types import download_permitted
from share_viewer.services.viewer_session import ViewerSession
from share_viewer.viewers.dispatch import ContentView
from share_viewer.viewers.image import ImageViewerEngine
from share_viewer.viewers.paged import PagedDocumentViewerEngine


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to close resources")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/sessions")
    async def open_session(request: Request) -> dict[str, object]:
        """Open a viewer session for the share in the query string."""
        state_container: AppContainer = request.app.state.container
        origin = str(request.base_url).rstrip("/")
        session = state_container.session_registry.create(origin)
        await session.open(dict(request.query_params))
        return session.snapshot()

    @app.get("/sessions/{session_id}")
    async def get_session(session_id: str, request: Request) -> dict[str, object]:
        """Return the current state of a session."""
        return _get_session(request, session_id).snapshot()

    @app.post("/sessions/{session_id}/retry")
    async def retry_session(session_id: str, request: Request) -> dict[str, object]:
        """Re-run the access sequence when the current error allows it."""
        session = _get_session(request, session_id)
        await session.retry()
        return session.snapshot()

    @app.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def close_session(session_id: str, request: Request) -> Response:
        """Close a session and release its watchers."""
        state_container: AppContainer = request.app.state.container
        if not state_container.session_registry.close(session_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get("/sessions/{session_id}/content")
    async def session_content(session_id: str, request: Request) -> Response:
        """Serve the loaded document bytes while the session is ready."""
        session = _get_session(request, session_id)
        record = session.record
        content = session.content
        if record is None or content is None:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT)
        if content.category is Category.UNSUPPORTED and not download_permitted(
            content.category, record
        ):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
        disposition = "inline"
        if content.category is Category.UNSUPPORTED:
            disposition = "attachment"
        headers = {"Content-Disposition": disposition}
        if record.no_download:
            headers["Cache-Control"] = "no-store"
        return Response(
            content=content.data, media_type=content.media_type, headers=headers
        )

    @app.post("/sessions/{session_id}/viewer/commands")
    async def viewer_command(
        session_id: str, command: ViewerCommand, request: Request
    ) -> dict[str, object]:
        """Apply an interaction to the session's viewer engine."""
        session = _get_session(request, session_id)
        if command.action == "reload":
            session.reload_view()
            return session.snapshot()
        if session.view is None:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT)
        handled = _apply_viewer_command(session.view, command)
        if not handled:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"{command.action} is not supported by this viewer",
            )
        return session.snapshot()

    @app.post("/sessions/{session_id}/guard")
    async def guard_signal(
        session_id: str, body: GuardSignalRequest, request: Request
    ) -> dict[str, object]:
        """Feed a screenshot guard signal from the host UI."""
        session = _get_session(request, session_id)
        guard = session.screenshot_guard
        if guard is None:
            return {"blanked": False, "prevent_default": False}
        key = body.key.to_event() if body.key else None
        reaction = guard.handle(body.signal, key)
        return {
            "blanked": reaction.blanked,
            "prevent_default": reaction.prevent_default,
        }

    return app


def _get_session(request: Request, session_id: str) -> ViewerSession:
    container: AppContainer = request.app.state.container
    session = container.session_registry.get(session_id)
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return session


def _apply_viewer_command(view: ContentView, command: ViewerCommand) -> bool:
    """Dispatch a command to an engine; returns False if it does not apply."""
    if isinstance(view, ImageViewerEngine):
        return _apply_image_command(view, command)
    if isinstance(view, PagedDocumentViewerEngine):
        return _apply_paged_command(view, command)
    return False


def _apply_image_command(  # noqa: PLR0911, PLR0912
    view: ImageViewerEngine, command: ViewerCommand
) -> bool:
    pointer = command.pointer_event()
    if command.action == "zoom_in":
        view.zoom_in()
    elif command.action == "zoom_out":
        view.zoom_out()
    elif command.action == "reset":
        view.reset_view()
    elif command.action == "rotate":
        view.rotate_clockwise()
    elif command.action == "loaded":
        view.image_loaded()
    elif command.action == "load_failed":
        view.image_failed(command.reason or "Failed to load image")
    elif command.action == "wheel" and command.delta_y is not None:
        view.wheel(WheelEvent(delta_y=command.delta_y))
    elif command.action == "key" and command.key is not None:
        view.key_down(command.key.to_event())
    elif command.action == "pointer_down" and pointer is not None:
        view.pointer_down(pointer)
    elif command.action == "pointer_move" and pointer is not None:
        view.pointer_move(pointer)
    elif command.action == "pointer_up":
        view.pointer_up()
    elif command.action == "pointer_leave":
        view.pointer_leave()
    elif command.action == "touch_start":
        view.touch_start(command.touch_event())
    elif command.action == "touch_move":
        view.touch_move(command.touch_event())
    elif command.action == "touch_end":
        view.touch_end()
    else:
        return False
    return True


def _apply_paged_command(  # noqa: PLR0911, PLR0912
    view: PagedDocumentViewerEngine, command: ViewerCommand
) -> bool:
    if command.action == "zoom_in":
        view.zoom_in()
    elif command.action == "zoom_out":
        view.zoom_out()
    elif command.action == "reset":
        view.reset_zoom()
    elif command.action == "fit_to_width":
        view.fit_to_width(command.viewport_width)
    elif command.action == "resize" and command.viewport_width is not None:
        view.viewport_resized(command.viewport_width)
    elif command.action == "next_page":
        view.next_page()
    elif command.action == "prev_page":
        view.prev_page()
    elif command.action == "go_to_page" and command.page is not None:
        view.go_to_page(command.page)
    elif command.action == "visibility" and command.visibility is not None:
        view.update_visibility(command.visibility)
    elif command.action == "loaded" and command.page_count is not None:
        view.document_loaded(command.page_count)
    elif command.action == "load_failed":
        view.document_failed(command.reason or "Failed to load PDF document")
    elif command.action == "page_failed" and isinstance(command.page, int):
        view.page_failed(command.page)
    elif command.action == "key" and command.key is not None:
        view.key_down(command.key.to_event())
    else:
        return False
    return True
