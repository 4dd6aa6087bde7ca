"""Response envelopes for mapped search results."""

from enum import Enum
from typing import Sequence

from services.mapper import Item


class ResponseFormat(str, Enum):
    ARRAY = "array"
    SINGLE = "single"
    OBJECT = "object"


def parse_format(value) -> ResponseFormat:
    """Map a free-text `format` parameter to a ResponseFormat, defaulting to ARRAY."""
    try:
        return ResponseFormat(("" if value is None else str(value)).strip().lower())
    except ValueError:
        return ResponseFormat.ARRAY


def format_items(items: Sequence[Item], mode: ResponseFormat) -> list | dict:
    """Shape items into a JSON-ready envelope.

    OBJECT with exactly one item returns that item unwrapped; clients of the
    original endpoint rely on that shape.
    """
    if mode is ResponseFormat.SINGLE:
        return items[0].to_dict() if items else {}

    if mode is ResponseFormat.OBJECT:
        if len(items) == 1:
            return items[0].to_dict()
        by_id: dict[str, dict] = {}
        for item in items:
            if item.id:
                key = item.id
            else:
                # Positional key; probe upward if an earlier id already took it.
                n = len(by_id)
                while str(n) in by_id:
                    n += 1
                key = str(n)
            by_id[key] = item.to_dict()
        return by_id

    return [item.to_dict() for item in items]
