"""Shared pytest fixtures: a scripted search provider and a manual clock."""

from __future__ import annotations

import pytest

from services.mapper import Author, RawResult


def make_raw(n: int) -> RawResult:
    return RawResult(
        video_id=f"vid{n:08d}",
        title=f"Result {n}",
        description=f"Description {n}",
        duration_text="3:25",
        duration_seconds=205,
        views=1000 + n,
        author=Author(name=f"Channel {n}", url=f"https://www.youtube.com/@channel{n}"),
        url=f"https://www.youtube.com/watch?v=vid{n:08d}",
        uploaded_at="2 years ago",
    )


class FakeProvider:
    def __init__(self, results: list[RawResult] | None = None, error: Exception | None = None) -> None:
        self.results = results if results is not None else [make_raw(i) for i in range(5)]
        self.error = error
        self.calls: list[str] = []

    def __call__(self, query: str) -> list[RawResult]:
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        return self.results


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
