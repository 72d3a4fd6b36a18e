"""Status API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from jelly_snippets.app import JellySnippets
from jelly_snippets.constants import VERSION
from jelly_snippets.web.api.deps import get_snippet_app

router = APIRouter(tags=["status"])


@router.get("/status")
async def get_status(app: JellySnippets = Depends(get_snippet_app)) -> dict:
    """Get application status and version info."""
    return {
        "version": VERSION,
        "status": "running",
        "app_name": "Jelly Snippets",
        "snippets": len(app.table),
        "generation": app.table.generation,
    }
