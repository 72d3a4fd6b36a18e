"""FastAPI web server for trying snippets over HTTP."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jelly_snippets.constants import VERSION, WEB_DEFAULT_HOST, WEB_DEFAULT_PORT
from jelly_snippets.web.api.snippets_routes import router as snippets_router
from jelly_snippets.web.api.status_routes import router as status_router

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Jelly Snippets",
    version=VERSION,
    docs_url="/api/docs",
    redoc_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(status_router, prefix="/api")
app.include_router(snippets_router, prefix="/api")


def run_server(host: str = WEB_DEFAULT_HOST, port: int = WEB_DEFAULT_PORT) -> None:
    """Start the web API server."""
    import uvicorn

    logger.info("Starting Jelly Snippets API on http://%s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_level="info")
