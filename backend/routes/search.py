"""Search routes — GET with query params, POST with a JSON or form body."""

import json
import logging

from fastapi import APIRouter, Depends, Request

from errors import ValidationError
from services.search import SearchHandler

logger = logging.getLogger(__name__)

router = APIRouter()


def get_search_handler(request: Request) -> SearchHandler:
    return request.app.state.search_handler


async def _read_body(request: Request) -> dict:
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            body = await request.json()
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON body: {e.msg}") from e
        if not isinstance(body, dict):
            raise ValidationError("JSON body must be an object")
        return body
    form = await request.form()
    return dict(form)


@router.get("/search")
async def search_get(request: Request, handler: SearchHandler = Depends(get_search_handler)):
    """Search via `?q=` (or `?search=`) plus maxResults, filter, format, single."""
    return await handler.handle(request.query_params, query_fields=("q", "search"))


@router.post("/search")
async def search_post(request: Request, handler: SearchHandler = Depends(get_search_handler)):
    """Search with the same fields as GET, sent as JSON or form data."""
    body = await _read_body(request)
    return await handler.handle(body, query_fields=("search", "q"))
