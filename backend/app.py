"""FastAPI application entry point for the YouTube search API."""

import asyncio
import contextlib
import logging
import sys

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings, settings
from errors import RateLimitExceededError, register_error_handlers
from services.cache import QueryCache
from services.rate_limit import RateLimiter
from services.search import SearchHandler, SearchProvider

# Structured logging: JSON for production, human-readable for local
if settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)

RATE_LIMIT_EXEMPT = {"/health", "/ready"}


async def _sweep_periodically(cache: QueryCache, period: int) -> None:
    while True:
        await asyncio.sleep(period)
        removed = cache.sweep()
        if removed:
            logger.debug("Swept %d expired cache entries", removed)


def create_app(
    app_settings: Settings | None = None,
    provider: SearchProvider | None = None,
    cache: QueryCache | None = None,
) -> FastAPI:
    app_settings = app_settings or settings
    app = FastAPI(title="YouTube Search API", version="1.0.0")

    if provider is None:
        from services.youtube import YouTubeSearchProvider

        provider = YouTubeSearchProvider(limit=app_settings.search_fetch_limit)

    query_cache = cache or QueryCache(
        ttl_seconds=app_settings.cache_ttl_seconds,
        max_entries=app_settings.cache_max_entries,
    )
    app.state.settings = app_settings
    app.state.query_cache = query_cache
    app.state.search_handler = SearchHandler(
        provider,
        query_cache,
        default_max_results=app_settings.default_max_results,
        max_results_limit=app_settings.max_results_limit,
    )

    # Rate limiting
    if app_settings.rate_limit_requests > 0:
        limiter = RateLimiter(app_settings.rate_limit_requests, app_settings.rate_limit_window_seconds)
        app.state.rate_limiter = limiter

        @app.middleware("http")
        async def rate_limit(request: Request, call_next):
            if request.url.path in RATE_LIMIT_EXEMPT:
                return await call_next(request)
            client_id = request.client.host if request.client else "unknown"
            try:
                quota = limiter.hit(client_id)
            except RateLimitExceededError as exc:
                logger.warning("Rate limit exceeded for %s", client_id)
                return JSONResponse(
                    exc.to_payload(),
                    status_code=exc.status_code,
                    headers={
                        "Retry-After": str(exc.retry_after),
                        "RateLimit-Limit": str(limiter.limit),
                        "RateLimit-Remaining": "0",
                        "RateLimit-Reset": str(exc.retry_after),
                    },
                )
            response: Response = await call_next(request)
            response.headers["RateLimit-Limit"] = str(quota.limit)
            response.headers["RateLimit-Remaining"] = str(quota.remaining)
            response.headers["RateLimit-Reset"] = str(quota.reset_seconds)
            return response

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        if app_settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # CORS (outermost, so rate-limited responses carry it too)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Centralized error handlers
    register_error_handlers(app)

    from routes.health import router as health_router
    from routes.search import router as search_router

    app.include_router(health_router)
    app.include_router(search_router)

    @app.on_event("startup")
    async def _startup() -> None:
        for problem in app_settings.validate():
            logger.warning("Config: %s", problem)
        if app_settings.cache_check_period_seconds > 0:
            app.state.sweeper = asyncio.create_task(
                _sweep_periodically(query_cache, app_settings.cache_check_period_seconds)
            )

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        sweeper = getattr(app.state, "sweeper", None)
        if sweeper is not None:
            sweeper.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sweeper

    return app


app = create_app()


def main() -> None:
    import uvicorn

    logger.info("Server listening on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
