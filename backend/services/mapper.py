"""Map raw provider results onto the public Item shape.

Mapping never fails: anything the provider left out becomes an empty
string, 0 or None.
"""

from dataclasses import dataclass

WATCH_URL = "https://www.youtube.com/watch?v={id}"
MUSIC_URL = "https://music.youtube.com/watch?v={id}"
SHORT_URL = "https://youtu.be/{id}"
THUMBNAIL_URL = "https://i.ytimg.com/vi/{id}/hqdefault.jpg"
THUMBNAIL_HQ_URL = "https://i.ytimg.com/vi/{id}/maxresdefault.jpg"


@dataclass(frozen=True)
class Author:
    name: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class RawResult:
    """One record from the search provider. Every field is optional."""

    video_id: str | None = None
    title: str | None = None
    description: str | None = None
    duration_text: str | None = None
    duration_seconds: int | float | None = None
    views: int | float | None = None
    author: Author | None = None
    url: str | None = None
    thumbnail: str | None = None
    uploaded_at: str | None = None


@dataclass(frozen=True)
class Item:
    id: str
    title: str
    description: str
    duration_text: str
    duration_seconds: int
    views: int
    author: Author | None
    canonical_url: str
    watch_url: str
    music_url: str
    short_url: str
    thumbnail_url: str
    thumbnail_hq_url: str
    uploaded_at: str | None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "durationText": self.duration_text,
            "durationSeconds": self.duration_seconds,
            "views": self.views,
            "author": {"name": self.author.name, "url": self.author.url} if self.author else None,
            "canonicalUrl": self.canonical_url,
            "watchUrl": self.watch_url,
            "musicUrl": self.music_url,
            "shortUrl": self.short_url,
            "thumbnailUrl": self.thumbnail_url,
            "thumbnailHqUrl": self.thumbnail_hq_url,
            "uploadedAt": self.uploaded_at,
        }


def _count(value) -> int:
    """Coerce a provider count to a non-negative int, 0 when unusable."""
    try:
        n = int(value or 0)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(n, 0)


def _text(value) -> str:
    return str(value) if value is not None else ""


def map_result(raw: RawResult) -> Item:
    video_id = _text(raw.video_id).strip()

    if video_id:
        watch_url = WATCH_URL.format(id=video_id)
        music_url = MUSIC_URL.format(id=video_id)
        short_url = SHORT_URL.format(id=video_id)
        default_thumbnail = THUMBNAIL_URL.format(id=video_id)
        thumbnail_hq_url = THUMBNAIL_HQ_URL.format(id=video_id)
    else:
        watch_url = music_url = short_url = default_thumbnail = thumbnail_hq_url = ""

    return Item(
        id=video_id,
        title=_text(raw.title),
        description=_text(raw.description),
        duration_text=_text(raw.duration_text),
        duration_seconds=_count(raw.duration_seconds),
        views=_count(raw.views),
        author=raw.author,
        canonical_url=raw.url or watch_url,
        watch_url=watch_url,
        music_url=music_url,
        short_url=short_url,
        thumbnail_url=raw.thumbnail or default_thumbnail,
        thumbnail_hq_url=thumbnail_hq_url,
        uploaded_at=raw.uploaded_at or None,
    )
