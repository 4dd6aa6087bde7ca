"""Root, health and readiness routes."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

router = APIRouter()

USAGE = "YouTube Music Search API — use /search?q=... or POST /search with body { search: \"...\" }"


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return USAGE


@router.get("/health")
async def health() -> dict:
    """Liveness check — no external calls."""
    return {"ok": True, "time": datetime.now(timezone.utc).isoformat()}


@router.get("/ready")
async def ready(request: Request) -> dict:
    return {
        "status": "ok",
        "service": "ytsearch-api",
        "commit": request.app.state.settings.git_sha,
        "cache_entries": len(request.app.state.query_cache),
    }
