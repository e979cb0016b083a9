"""
FastAPI Backend for the Portfolio Presenter

Provides REST APIs for:
- Reading and saving the presentation content document
- Admin login (shared password, session cookie) and image uploads
- Timeline / strategy canvas layouts, the rendered timeline SVG and
  server-held interactive canvas sessions
"""

from __future__ import annotations

from dotenv import load_dotenv
load_dotenv()

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from api.platform.env import (
    get_api_host,
    get_api_port,
    get_content_file,
    get_cors_origins,
    get_upload_dir,
    is_production,
)
from api.platform.observability.request_logging import (
    RequestTimer,
    http_context,
    new_request_id,
    set_request_id,
)
from api.platform.observability.smart_logger import SmartLogger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Make sure the upload directory exists before the first request."""
    upload_dir = get_upload_dir()
    upload_dir.mkdir(parents=True, exist_ok=True)
    SmartLogger.log(
        "INFO",
        "Starting API (lifespan init)",
        category="api.lifespan",
        params={
            "logger_impl": getattr(SmartLogger, "impl_source", "unknown"),
            "content_file": str(get_content_file()),
            "upload_dir": str(upload_dir),
            "production": is_production(),
        },
    )
    yield
    SmartLogger.log("INFO", "API stopped", category="api.lifespan")


app = FastAPI(
    title="Portfolio Presenter API",
    description="API for the career portfolio presentation and its admin editor",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------------------------------------------------------------
# Request Correlation + Narrative Logging
# -----------------------------------------------------------------------------

@app.middleware("http")
async def _request_id_middleware(request: Request, call_next):
    """
    Assign a request_id to every inbound HTTP request and emit start/end logs.
    """
    rid = request.headers.get("x-request-id") or new_request_id()
    set_request_id(rid)
    timer = RequestTimer()

    SmartLogger.log(
        "INFO",
        "HTTP request received: starting route execution.",
        category="api.http.start",
        params=http_context(request),
    )

    try:
        response: Response = await call_next(request)
        SmartLogger.log(
            "INFO",
            "HTTP request completed.",
            category="api.http.end",
            params={
                **http_context(request),
                "result": {
                    "status_code": response.status_code,
                    "duration_ms": timer.ms(),
                },
            },
        )
        response.headers["X-Request-Id"] = rid
        return response
    except Exception as e:
        SmartLogger.log(
            "ERROR",
            "HTTP request failed: route raised an exception.",
            category="api.http.error",
            params={
                **http_context(request),
                "error": {"type": type(e).__name__, "message": str(e)},
                "duration_ms": timer.ms(),
            },
        )
        raise
    finally:
        # Avoid leaking request_id into unrelated async contexts.
        set_request_id(None)


# -----------------------------------------------------------------------------
# Error bodies: {"error": "..."}
# -----------------------------------------------------------------------------

@app.exception_handler(HTTPException)
async def _http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    SmartLogger.log(
        "WARNING",
        "Request rejected: body or parameters failed validation.",
        category="api.http.validation",
        params={**http_context(request), "errors": len(exc.errors())},
    )
    return JSONResponse(
        status_code=422,
        content={"error": "Invalid request", "detail": jsonable_encoder(exc.errors())},
    )


"""
Feature routers (business capabilities)
"""
from api.features.health.router import router as health_router
from api.features.content.router import router as content_router
from api.features.auth.router import router as auth_router
from api.features.uploads.router import router as uploads_router
from api.features.canvas.router import router as canvas_router

app.include_router(health_router)
app.include_router(content_router)
app.include_router(auth_router)
app.include_router(uploads_router)
app.include_router(canvas_router)


if __name__ == "__main__":
    import uvicorn

    HOST = get_api_host()
    PORT = get_api_port()

    SmartLogger.log("INFO", "Starting API", category="api.main", params={"host": HOST, "port": PORT})
    uvicorn.run("api.main:app", host=HOST, port=PORT, reload=not is_production())
