from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from triproute.adapters.api.controllers.routes import router as routes_router
from triproute.adapters.api.controllers.transit import router as transit_router
from triproute.domain.exceptions import FeedUnavailable, RoutingError

logging.basicConfig(level=(os.getenv("LOG_LEVEL") or "INFO").upper())

logger = logging.getLogger(__name__)

app = FastAPI(title="TripRoute")
app.include_router(routes_router)
app.include_router(transit_router)


def _reveal_errors() -> bool:
    value = (os.getenv("TRIPROUTE_REVEAL_ERRORS") or "").strip().lower()
    return value in {"1", "true", "yes", "on"}


@app.exception_handler(RoutingError)
async def routing_error_handler(request: Request, exc: RoutingError) -> JSONResponse:
    """An upstream dependency (routing engine or feed host) failed."""

    logger.warning(
        "Routing dependency failed",
        extra={"path": request.url.path, "error": str(exc)},
    )
    kind = "feed" if isinstance(exc, FeedUnavailable) else "routing engine"
    return JSONResponse(
        status_code=502,
        content={"detail": str(exc) or f"Upstream {kind} unavailable"},
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    return JSONResponse(
        status_code=422, content={"detail": str(exc) or "Invalid request"}
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """JSON 500 for anything else; the message is hidden unless revealed."""

    logger.exception("Unhandled exception", extra={"path": request.url.path})
    detail = (str(exc) or exc.__class__.__name__) if _reveal_errors() else None
    return JSONResponse(
        status_code=500, content={"detail": detail or "Internal Server Error"}
    )


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
