import logging
import logging.config
import os

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.errors import NotFoundError, RuntimeLoopError, UpstreamError
from app.limits import limiter
from app.routers.map import router as map_router
from app.routers.posts import router as posts_router
from app.routers.sitemap import router as sitemap_router
from app.routers.taxonomy import router as taxonomy_router
from app.templating import templates

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "root": {"level": os.getenv("LOG_LEVEL", "INFO").upper(), "handlers": ["console"]},
    }
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="WordPress Headless Blog",
    description="Renders blog pages, taxonomy listings and a sitemap from a WordPress REST API.",
    version="1.0.0",
)

# Rate-limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


def _error_page(request: Request, status_code: int, heading: str, message: str) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "error.html",
        {"seo": None, "heading": heading, "message": message},
        status_code=status_code,
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> HTMLResponse:
    logger.info("Not found for %s: %s", request.url.path, exc)
    heading = "Post Not Found" if exc.kind == "post" else "Not Found"
    return _error_page(request, 404, heading, str(exc))


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError) -> HTMLResponse:
    logger.error(
        "Content API failure rendering %s: HTTP %d (%s)", request.url.path, exc.status_code, exc.url
    )
    return _error_page(request, 502, "Error", "Error loading content. Please try again later.")


@app.exception_handler(RuntimeLoopError)
async def runaway_walk_handler(request: Request, exc: RuntimeLoopError) -> HTMLResponse:
    logger.error("Catalog walk aborted rendering %s: %s", request.url.path, exc)
    return _error_page(request, 503, "Error", "This page is temporarily unavailable.")


@app.exception_handler(httpx.TimeoutException)
async def timeout_handler(request: Request, exc: httpx.TimeoutException) -> HTMLResponse:
    logger.error("Content API timed out rendering %s", request.url.path)
    return _error_page(request, 504, "Error", "The content service timed out.")


@app.exception_handler(httpx.RequestError)
async def transport_error_handler(request: Request, exc: httpx.RequestError) -> HTMLResponse:
    logger.error("Content API unreachable rendering %s: %s", request.url.path, exc)
    return _error_page(request, 502, "Error", "Error loading content. Please try again later.")


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


app.include_router(posts_router)
app.include_router(taxonomy_router)
app.include_router(map_router)
app.include_router(sitemap_router)


@app.get("/", summary="Health check")
async def root() -> dict:
    return {"message": "Hello from the blog frontend"}
