"""Response envelope shaping."""

from __future__ import annotations

import pytest

from services.formatter import ResponseFormat, format_items, parse_format
from services.mapper import RawResult, map_result


def _items(*ids: str):
    return [map_result(RawResult(video_id=i, title=f"t-{i}")) for i in ids]


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, ResponseFormat.ARRAY),
        ("", ResponseFormat.ARRAY),
        ("Array", ResponseFormat.ARRAY),
        ("SINGLE", ResponseFormat.SINGLE),
        (" object ", ResponseFormat.OBJECT),
        ("xml", ResponseFormat.ARRAY),
    ],
)
def test_parse_format(value, expected):
    assert parse_format(value) is expected


def test_array_returns_all_items_in_order():
    items = _items("a", "b", "c")
    assert format_items(items, ResponseFormat.ARRAY) == [i.to_dict() for i in items]
    assert format_items([], ResponseFormat.ARRAY) == []


def test_single_returns_first_item():
    items = _items("a", "b")
    assert format_items(items, ResponseFormat.SINGLE) == items[0].to_dict()


def test_single_on_empty_returns_empty_object():
    result = format_items([], ResponseFormat.SINGLE)
    assert result == {}
    assert isinstance(result, dict)


def test_object_with_one_item_returns_it_unwrapped():
    items = _items("a")
    assert format_items(items, ResponseFormat.OBJECT) == items[0].to_dict()


def test_object_keys_by_id_in_encounter_order():
    items = _items("a", "b", "c")
    result = format_items(items, ResponseFormat.OBJECT)
    assert list(result) == ["a", "b", "c"]
    assert result["b"]["title"] == "t-b"


def test_object_uses_positional_keys_for_missing_ids():
    items = _items("", "", "")
    result = format_items(items, ResponseFormat.OBJECT)
    assert list(result) == ["0", "1", "2"]


def test_object_positional_keys_do_not_collide_with_ids():
    items = _items("1", "", "")
    result = format_items(items, ResponseFormat.OBJECT)
    assert list(result) == ["1", "2", "3"]
    assert len(result) == 3


def test_object_duplicate_ids_keep_last():
    items = [
        map_result(RawResult(video_id="a", title="first")),
        map_result(RawResult(video_id="a", title="second")),
    ]
    result = format_items(items, ResponseFormat.OBJECT)
    assert list(result) == ["a"]
    assert result["a"]["title"] == "second"


def test_object_on_empty_returns_empty_map():
    assert format_items([], ResponseFormat.OBJECT) == {}
