from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from stopmatch.adapters.api.controllers.checkpoints import router as checkpoints_router
from stopmatch.adapters.api.controllers.routes import router as routes_router
from stopmatch.adapters.api.controllers.stops import router as stops_router
from stopmatch.adapters.api.dependencies import build_transit_store
from stopmatch.adapters.aws import env_bool
from stopmatch.domain.exceptions import (
    Conflict,
    InvalidInput,
    NotFound,
    StopMatchError,
    StoreError,
)

logger = logging.getLogger("uvicorn.error")

# 400 messages for bodies/queries FastAPI rejects before the handler runs.
_REQUIRED_FIELDS_MESSAGES = {
    "/route": "Source and destination coordinates are required",
    "/addbusstop": "Latitude and longitude are required",
    "/checkbusstop": "Latitude and longitude are required",
    "/deletebus": "Latitude and longitude are required",
    "/addcheckpoint": "Latitude, longitude, and name are required",
    "/checkcheckpoint": "Checkpoint name is required",
    "/addroute": "markerPosition and polyLines are required",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One store handle per process, injected into handlers via Depends.
    app.state.transit_store = build_transit_store()
    yield


app = FastAPI(title="stopmatch", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        o.strip()
        for o in (os.getenv("CORS_ORIGINS") or "http://localhost:5173").split(",")
        if o.strip()
    ],
    allow_credentials=True,
    allow_methods=["GET", "PUT", "POST", "DELETE"],
    allow_headers=["*"],
)

app.include_router(routes_router)
app.include_router(stops_router)
app.include_router(checkpoints_router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        f"{' -> '.join(str(x) for x in e.get('loc', ()))}: {e.get('msg')}"
        for e in exc.errors()
    ]
    logger.info("Rejected %s %s: %s", request.method, request.url.path, errors)
    message = _REQUIRED_FIELDS_MESSAGES.get(request.url.path, "Invalid request data")
    return JSONResponse(status_code=400, content={"error": message, "errors": errors})


@app.exception_handler(StopMatchError)
async def stopmatch_error_handler(request: Request, exc: StopMatchError) -> JSONResponse:
    if isinstance(exc, InvalidInput):
        return JSONResponse(status_code=400, content={"error": str(exc)})
    if isinstance(exc, NotFound):
        return JSONResponse(status_code=404, content={"error": str(exc)})
    if isinstance(exc, Conflict):
        return JSONResponse(status_code=409, content={"message": str(exc)})

    if isinstance(exc, StoreError):
        logger.error(
            "Store failure on %s %s: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=exc,
        )
    else:
        logger.error("Unhandled domain error", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Keep 500s JSON shaped like every other error body."""

    logger.exception("Unhandled exception", extra={"path": str(request.url.path)})

    if env_bool("STOPMATCH_REVEAL_ERRORS", False):
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(status_code=500, content={"error": detail})


@app.get("/", response_class=PlainTextResponse)
def index() -> str:
    return "Hello, World!"


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "stopmatch.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
