"""Search orchestration: validate → cache → provider → map → format."""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable

from errors import SearchFailedError, ValidationError
from services.cache import QueryCache, QueryKey
from services.formatter import ResponseFormat, format_items, parse_format
from services.mapper import Item, RawResult, map_result

logger = logging.getLogger(__name__)

SearchProvider = Callable[[str], Sequence[RawResult]]

MUSIC_FILTER = "music"
TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class SearchParams:
    key: QueryKey
    format: ResponseFormat
    single: bool = False

    @property
    def effective_format(self) -> ResponseFormat:
        return ResponseFormat.SINGLE if self.single else self.format


def _first(source: Mapping, names: tuple[str, ...]) -> Any:
    for name in names:
        value = source.get(name)
        if value is not None and str(value).strip() != "":
            return value
    return None


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in TRUTHY


class SearchHandler:
    def __init__(
        self,
        provider: SearchProvider,
        cache: QueryCache,
        default_max_results: int = 10,
        max_results_limit: int = 50,
    ):
        self.provider = provider
        self.cache = cache
        self.default_max_results = default_max_results
        self.max_results_limit = max_results_limit

    def parse_params(self, source: Mapping, query_fields: tuple[str, ...] = ("q", "search")) -> SearchParams:
        """Validate and normalize raw request fields.

        Raises ValidationError when the query text is missing or blank.
        """
        query = str(_first(source, query_fields) or "").strip()
        if not query:
            raise ValidationError(f"{' or '.join(query_fields)} is required")

        raw_max = source.get("maxResults", self.default_max_results)
        try:
            max_results = int(raw_max)
        except (TypeError, ValueError):
            max_results = self.default_max_results
        except OverflowError:
            # +/-inf from a JSON body such as 1e400; clamped below
            max_results = self.max_results_limit if raw_max > 0 else 1

        single = _parse_bool(source.get("single"))
        if single:
            max_results = 1

        key = QueryKey.normalize(
            query,
            max_results,
            str(source.get("filter") or ""),
            limit=self.max_results_limit,
        )
        return SearchParams(key=key, format=parse_format(source.get("format")), single=single)

    @staticmethod
    def provider_query(key: QueryKey) -> str:
        if key.filter_mode == MUSIC_FILTER:
            return f"{key.query_text} music"
        return key.query_text

    async def handle(self, source: Mapping, query_fields: tuple[str, ...] = ("q", "search")) -> list | dict:
        params = self.parse_params(source, query_fields)
        return await self.search(params)

    async def search(self, params: SearchParams) -> list | dict:
        items = await self.get_items(params.key)
        return format_items(items, params.effective_format)

    async def get_items(self, key: QueryKey) -> list[Item]:
        cached = self._cache_get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key)
            return cached

        logger.debug("Cache miss for %s", key)
        text = self.provider_query(key)
        try:
            raw_results = await asyncio.to_thread(self.provider, text)
        except Exception as e:
            logger.exception("Search provider failed for %r", text)
            raise SearchFailedError(str(e)) from e

        if isinstance(raw_results, (str, bytes)) or not isinstance(raw_results, Sequence):
            raise SearchFailedError(f"provider returned {type(raw_results).__name__}, expected a sequence")
        if not all(isinstance(raw, RawResult) for raw in raw_results):
            raise SearchFailedError("provider returned records that are not RawResult")

        items = [map_result(raw) for raw in raw_results[: key.max_results]]
        self._cache_put(key, items)
        return items

    def _cache_get(self, key: QueryKey) -> list[Item] | None:
        try:
            return self.cache.get(key)
        except Exception:
            logger.warning("Cache lookup failed for %s, treating as miss", key, exc_info=True)
            return None

    def _cache_put(self, key: QueryKey, items: list[Item]) -> None:
        try:
            self.cache.put(key, items)
        except Exception:
            logger.warning("Cache store failed for %s", key, exc_info=True)
