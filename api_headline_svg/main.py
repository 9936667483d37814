"""
Headline SVG API
Renders a headline into a 1080x1080 HTML/SVG share image, memoized in a
key-value cache for 30 days.
Port: 8006

Two calling conventions share one endpoint:
- internal services send `x-service-binding: true` and a JSON body {"headline": ...}
- everyone else passes ?headline=...
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import BaseModel, ValidationError
from typing import Optional
from contextlib import asynccontextmanager
from dotenv import load_dotenv
import logging
import os

from api_headline_svg.cache_store import (
    CACHE_TTL_SECONDS,
    DEFAULT_CACHE_PREFIX,
    CacheStore,
    build_cache_store,
    cache_key,
)
from headline_generator.config import LayoutSettings
from headline_generator.generator import generate

load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SERVICE_BINDING_HEADER = "x-service-binding"
CACHE_PREFIX = os.getenv("SVG_CACHE_PREFIX", DEFAULT_CACHE_PREFIX)

RESPONSE_HEADERS = {
    "Cache-Control": "public, max-age=86400",
    "Access-Control-Allow-Origin": "*",
}


class HeadlineRequestError(Exception):
    error_type = "bad-request"
    message = "Bad request"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class MissingHeadlineError(HeadlineRequestError):
    error_type = "missing-headline"
    message = "Headline is required"


class InternalCallParseError(HeadlineRequestError):
    error_type = "service-binding-parse-error"
    message = "Invalid service binding request"


class InternalHeadlineRequest(BaseModel):
    headline: Optional[str] = None


def is_internal_call(request: Request) -> bool:
    return request.headers.get(SERVICE_BINDING_HEADER) == "true"


async def read_internal_headline(request: Request) -> Optional[str]:
    """Headline from the JSON body of a service-to-service call"""
    try:
        body = await request.json()
        payload = InternalHeadlineRequest.model_validate(body)
        # JSON allows lone surrogate escapes, which the HTML response cannot encode
        if payload.headline is not None:
            payload.headline.encode("utf-8")
    except (ValueError, ValidationError) as e:
        logger.error(f"[SVG] Failed to parse service binding request: {e}")
        raise InternalCallParseError() from e

    logger.info(f"[SVG] Headline from service binding: {payload.headline}")
    return payload.headline


async def read_query_headline(request: Request) -> Optional[str]:
    return request.query_params.get("headline")


async def read_headline(request: Request, allow_internal_calls: bool = True) -> str:
    if allow_internal_calls and is_internal_call(request):
        logger.info("[SVG] Service binding call detected")
        headline = await read_internal_headline(request)
    else:
        logger.info("[SVG] HTTP request detected")
        headline = await read_query_headline(request)

    # Whitespace-only headlines would wrap to blank lines, so treat them as absent
    if headline is None or not headline.strip():
        logger.error("[SVG] No headline provided")
        raise MissingHeadlineError()
    return headline


async def read_cached(store: CacheStore, key: str) -> Optional[str]:
    try:
        return await store.get(key)
    except Exception as e:
        logger.error(f"[SVG] Failed to read cache: {e}")
        return None


async def write_cached(store: CacheStore, key: str, html: str) -> bool:
    try:
        await store.put(key, html, CACHE_TTL_SECONDS)
    except Exception as e:
        logger.error(f"[SVG] Failed to cache SVG: {e}")
        return False

    logger.info("[SVG] Successfully cached new SVG")
    return True


def html_response(html: str, cache_status: str) -> HTMLResponse:
    return HTMLResponse(html, headers={**RESPONSE_HEADERS, "x-cache-status": cache_status})


def create_app(
        cache_store: Optional[CacheStore] = None,
        *,
        allow_internal_calls: bool = True,
        layout_settings: Optional[LayoutSettings] = None,
        cache_prefix: str = CACHE_PREFIX,
) -> FastAPI:
    """
    Build the headline API.

    allow_internal_calls=False gives the public-only variant, where the
    service binding header is ignored and only ?headline= is read.
    """
    if cache_store is None:
        cache_store = build_cache_store(os.getenv("REDIS_URL"))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await cache_store.close()
        logger.info(f"[SVG] Closed {cache_store.name} cache")

    app = FastAPI(title="Headline SVG API", lifespan=lifespan)
    app.state.cache_store = cache_store
    app.state.layout_settings = layout_settings or LayoutSettings.from_env()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(HeadlineRequestError)
    async def headline_request_error(request: Request, exc: HeadlineRequestError):
        return PlainTextResponse(exc.message, status_code=400, headers={"x-error-type": exc.error_type})

    @app.api_route("/", methods=["GET", "POST"])
    async def headline_svg(request: Request):
        logger.info(f"[SVG] Request: {request.method} {request.url}")
        headline = await read_headline(request, allow_internal_calls)

        store = app.state.cache_store
        key = cache_key(headline, cache_prefix)

        cached_html = await read_cached(store, key)
        if cached_html:
            logger.info("[SVG] Cache hit for headline")
            return html_response(cached_html, "hit")

        logger.info("[SVG] Cache miss - generating new SVG")
        html = generate(headline, app.state.layout_settings)
        await write_cached(store, key, html)

        return html_response(html, "miss")

    @app.get("/health")
    async def health():
        store = app.state.cache_store
        try:
            reachable = await store.ping()
        except Exception as e:
            logger.error(f"[SVG] Cache ping failed: {e}")
            reachable = False

        return {
            "status": "ok" if reachable else "degraded",
            "cache": store.name,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=os.getenv("HEADLINE_SVG_HOST", "127.0.0.1"),
        port=int(os.getenv("HEADLINE_SVG_PORT", "8006")),
    )
