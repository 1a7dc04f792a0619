"""Static frontend serving with a single-page-app fallback."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, status
from fastapi.responses import FileResponse, JSONResponse, Response


def mount_frontend(app: FastAPI, static_dir: Path) -> None:
    """Serve files from ``static_dir`` and fall back to its ``index.html``.

    Paths beginning with ``api`` are never answered from disk. Register this
    after every other route, since the catch-all matches any GET path.
    """
    root = static_dir.resolve()
    index = root / "index.html"

    @app.get("/{path:path}", include_in_schema=False)
    def serve_frontend(path: str) -> Response:
        if path.startswith("api"):
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Not found"})
        if path:
            candidate = (root / path).resolve()
            if candidate.is_relative_to(root) and candidate.is_file():
                return FileResponse(candidate)
        if not index.is_file():
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Not found"})
        return FileResponse(index)
