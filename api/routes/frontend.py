"""
Frontend HTML routes.

Serves the single viewer page and the HTMX partial that a sidebar click
swaps in.

Routes:
    GET /                           → index.html (fresh load, all regions)
    GET /partials/detail/{name}     → partials/detail.html (detail panel +
                                      out-of-band sidebar with the new
                                      active entry)
    GET /data_semantic_map.json     → the configured local document
"""

from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import FileResponse, HTMLResponse
from fastapi.templating import Jinja2Templates

from api.viewer import ViewerSession, get_viewer
from utils.config import DOCUMENT_NAME, is_url
from viewer.controller import Page, Phase
from viewer.nodes import render_html

router = APIRouter(tags=["frontend"])

# Templates instance is set by create_app() after mounting.
_templates: Jinja2Templates | None = None


def set_templates(t: Jinja2Templates) -> None:
    global _templates
    _templates = t


def _tmpl() -> Jinja2Templates:
    if _templates is None:
        raise RuntimeError("Templates not initialised — call set_templates() first")
    return _templates


def _region_context(page: Page) -> dict[str, Any]:
    """Rendered HTML and visibility for every page region."""
    ctx: dict[str, Any] = {}
    for region in (page.loading, page.error, page.groups, page.content, page.header_meta):
        ctx[f"{region.name}_html"] = render_html(region.children)
        ctx[f"{region.name}_visible"] = region.visible
    return ctx


# ── Routes ────────────────────────────────────────────────────────────────────

@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index(request: Request, viewer: ViewerSession = Depends(get_viewer)) -> HTMLResponse:
    """Viewer page.  Every visit reloads the document and resets selection."""
    with viewer.locked() as controller:
        state = controller.load_and_render()
        ctx = _region_context(controller.page)

    return _tmpl().TemplateResponse(
        request,
        "index.html",
        {"phase": state.phase.value, "selected": state.selected, **ctx},
    )


@router.get("/partials/detail/{var_name:path}", response_class=HTMLResponse,
            include_in_schema=False)
def detail_partial(
    var_name: str,
    request: Request,
    viewer: ViewerSession = Depends(get_viewer),
) -> HTMLResponse:
    """HTMX partial: detail panel for one variable."""
    with viewer.locked() as controller:
        if controller.state.phase is not Phase.SUCCESS:
            raise HTTPException(status_code=409, detail="No semantic map loaded")
        try:
            controller.select(var_name)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Variable {var_name!r} not found")
        ctx = _region_context(controller.page)

    return _tmpl().TemplateResponse(
        request,
        "partials/detail.html",
        {"selected": var_name, **ctx},
    )


@router.get(f"/{DOCUMENT_NAME}", include_in_schema=False)
def semantic_map_document(viewer: ViewerSession = Depends(get_viewer)) -> FileResponse:
    """Serve the local document under its well-known name."""
    source = viewer.controller.loader.source
    path = Path(source)
    if is_url(source) or not path.is_file():
        raise HTTPException(status_code=404, detail=f"{DOCUMENT_NAME} is not served locally")
    return FileResponse(path, media_type="application/json")
