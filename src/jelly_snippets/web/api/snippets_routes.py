"""Snippets API routes."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from jelly_snippets.app import JellySnippets
from jelly_snippets.dispatcher import KEY_ENTER, KEY_SPACE, KEY_TAB, KeyEvent
from jelly_snippets.editor import TextDocument, press_key
from jelly_snippets.snippets.model import classify
from jelly_snippets.snippets.registry import SnippetTable
from jelly_snippets.web.api.deps import get_snippet_app

router = APIRouter(tags=["snippets"])


class ExpandRequest(BaseModel):
    text: str
    cursor: int | None = None  # defaults to the end of the text
    key: str | None = None  # "space" | "tab" | "enter"; None = explicit trigger
    shift: bool = False


class ExpandResponse(BaseModel):
    text: str
    cursor: int
    triggered: bool
    lhs: str | None = None
    snippet_type: str | None = None


def _table_to_dict(table: SnippetTable) -> dict:
    return {
        "generation": table.generation,
        "snippets": [
            {
                "lhs": lhs,
                "data": rhs.data,
                "cursor_end": rhs.info.cursor_end,
                "has_newline": rhs.info.has_newline,
            }
            for lhs, rhs in table.snippets.items()
        ],
        "diagnostics": [asdict(d) for d in table.diagnostics],
    }


@router.get("/snippets")
async def get_snippets(app: JellySnippets = Depends(get_snippet_app)) -> dict:
    """Get the compiled snippet table and any parse diagnostics."""
    return _table_to_dict(app.table)


@router.post("/snippets/reload")
async def reload_snippets(app: JellySnippets = Depends(get_snippet_app)) -> dict:
    """Rebuild the snippet table from the current configuration."""
    table = app.reload()
    return {"status": "ok", **_table_to_dict(table)}


@router.post("/expand")
async def expand(req: ExpandRequest, app: JellySnippets = Depends(get_snippet_app)) -> ExpandResponse:
    """Run a trigger against ``text`` and return the edited text."""
    document = TextDocument(req.text, req.cursor)

    if req.key is None:
        snippet = app.trigger(document)
    elif req.key in (KEY_SPACE, KEY_TAB, KEY_ENTER):
        snippet = press_key(document, app.dispatcher, KeyEvent(req.key, req.shift)).snippet
    else:
        return ExpandResponse(text=req.text, cursor=document.get_cursor(), triggered=False)

    return ExpandResponse(
        text=document.text,
        cursor=document.get_cursor(),
        triggered=snippet is not None,
        lhs=snippet.lhs if snippet else None,
        snippet_type=classify(snippet).name if snippet else None,
    )
