# backend/archive_api/main.py
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from archive_api.core.config import settings
from archive_api.logger import get_logger
from archive_api.middleware.request_logger import RequestLoggerMiddleware
from archive_api.routers import nytimes
from archive_api.services.archive_client import UpstreamError, UpstreamTimeout
from archive_api.utils.validators import InvalidQuery

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log configuration on startup; nothing to tear down."""
    log.info("Starting archive API (env=%s, upstream=%s)", settings.ENV, settings.ARCHIVE_BASE_URL)
    if not settings.ARCHIVE_API_KEY:
        log.warning("ARCHIVE_API_KEY is not set; archive requests will fail upstream")
    yield
    log.info("Archive API shut down")


app = FastAPI(
    title="NYTimes Archive API",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggerMiddleware)

app.include_router(nytimes.router)


# ========== ERROR MAPPING ==========
@app.exception_handler(InvalidQuery)
async def invalid_query_handler(request: Request, exc: InvalidQuery):
    log.info("Rejected query %s: %s", request.url.query, exc)
    return JSONResponse(status_code=400, content={"message": "Invalid Query"})


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    if isinstance(exc, UpstreamTimeout):
        return JSONResponse(status_code=504, content={"message": "Archive request timed out"})
    if exc.status_code == 429:
        return JSONResponse(status_code=429, content={"message": "Rate limited by archive service"})
    return JSONResponse(status_code=502, content={"message": "Archive service unavailable"})


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return HTMLResponse("<h1>404</h1>", status_code=404)
    return await http_exception_handler(request, exc)


# ========== ROOT ENDPOINTS ==========
@app.get("/", include_in_schema=False)
async def root():
    return RedirectResponse(url="/nytimes")


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("archive_api.main:app", host=settings.HOST, port=settings.PORT, reload=settings.RELOAD)
