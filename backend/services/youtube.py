"""Default search provider backed by yt-dlp.

Runs a flat `ytsearchN:` extraction (metadata only, no downloads) and
converts each entry into a RawResult. Everything the service knows about
YouTube search lives behind this one call.
"""

import logging

from yt_dlp import YoutubeDL

from services.mapper import Author, RawResult

logger = logging.getLogger(__name__)

YDL_OPTIONS = {
    "quiet": True,
    "no_warnings": True,
    "skip_download": True,
    "extract_flat": True,
}


def format_duration(seconds) -> str | None:
    """Render seconds as M:SS or H:MM:SS, the way YouTube labels durations."""
    if seconds is None:
        return None
    try:
        total = int(seconds)
    except (TypeError, ValueError, OverflowError):
        return None
    hours, rem = divmod(max(total, 0), 3600)
    minutes, secs = divmod(rem, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def _thumbnail(entry: dict) -> str | None:
    if entry.get("thumbnail"):
        return entry["thumbnail"]
    thumbnails = entry.get("thumbnails") or []
    # yt-dlp orders thumbnails from smallest to largest
    for thumb in reversed(thumbnails):
        if thumb.get("url"):
            return thumb["url"]
    return None


def entry_to_raw(entry: dict) -> RawResult:
    """Convert one yt-dlp info dict into a RawResult."""
    author_name = entry.get("channel") or entry.get("uploader")
    author_url = entry.get("channel_url") or entry.get("uploader_url")
    author = Author(name=author_name, url=author_url) if (author_name or author_url) else None

    url = entry.get("webpage_url") or entry.get("url")
    if url and not url.startswith("http"):
        url = None

    return RawResult(
        video_id=entry.get("id"),
        title=entry.get("title"),
        description=entry.get("description"),
        duration_text=entry.get("duration_string") or format_duration(entry.get("duration")),
        duration_seconds=entry.get("duration"),
        views=entry.get("view_count"),
        author=author,
        url=url,
        thumbnail=_thumbnail(entry),
        uploaded_at=entry.get("upload_date"),
    )


class YouTubeSearchProvider:
    """Callable provider: `provider(query) -> list[RawResult]`."""

    def __init__(self, limit: int = 50, options: dict | None = None):
        self.limit = limit
        self.options = {**YDL_OPTIONS, **(options or {})}

    def __call__(self, query: str) -> list[RawResult]:
        logger.info("yt-dlp search: %r (limit=%d)", query, self.limit)
        with YoutubeDL(self.options) as ydl:
            info = ydl.extract_info(f"ytsearch{self.limit}:{query}", download=False)

        entries = (info or {}).get("entries") or []
        return [entry_to_raw(entry) for entry in entries if entry]
