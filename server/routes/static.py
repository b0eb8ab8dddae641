"""
Serve the built web UI.

Registered last. Unknown ``/api/*`` paths get a JSON 404 whatever the
method; any other GET that no route claimed is a file from the static
directory or, failing that, the application shell (index.html) so that
client-side routes survive a page reload.
"""

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import FileResponse

from ..app import error_body
from ..state import get_static_dir

API_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]
INDEX_FILE = "index.html"

router = APIRouter()


def _resolve_static_file(static_dir: Path, relative: str) -> Path | None:
    root = static_dir.resolve()
    candidate = (root / relative).resolve()
    if not candidate.is_relative_to(root) or not candidate.is_file():
        return None
    return candidate


@router.api_route("/api", methods=API_METHODS, include_in_schema=False)
@router.api_route("/api/{rest:path}", methods=API_METHODS, include_in_schema=False)
async def unknown_api_route(request: Request) -> None:
    raise HTTPException(
        status_code=404,
        detail=error_body("API endpoint not found", path=request.url.path),
    )


@router.get("/{full_path:path}", include_in_schema=False)
async def serve_app(full_path: str, static_dir: Path = Depends(get_static_dir)) -> FileResponse:
    """Static file or application shell for every non-API GET."""
    if full_path:
        static_file = _resolve_static_file(static_dir, full_path)
        if static_file is not None:
            return FileResponse(static_file)

    index = static_dir / INDEX_FILE
    if not index.is_file():
        raise HTTPException(
            status_code=404,
            detail=error_body("Application shell not found", path=str(index)),
        )
    return FileResponse(index)
