from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import Response

from . import __version__

FEED_MEDIA_TYPE = "application/xml"


def create_app(payload: str) -> FastAPI:
    """Build an app answering every path and method with ``payload``."""
    app = FastAPI(
        title="OKO.press RSS bridge",
        version=__version__,
        description="Serves a pre-built RSS 2.0 feed of OKO.press articles.",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # Mounted as a raw ASGI endpoint, so the route has no method restriction.
    feed = Response(content=payload.encode("utf-8"), media_type=FEED_MEDIA_TYPE)
    app.add_route("/{path:path}", feed, include_in_schema=False)

    return app
