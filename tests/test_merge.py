"""Unit tests for structural merges of style/setting trees and data sections."""

from __future__ import annotations

import copy

import pytest

from core.charting.merge import merge_chart_data_configs, merge_chart_style_configs

pytestmark = pytest.mark.unit


STYLE_MERGE_CASES = [
    ([{}], [{}], [{}]),
    ([{}], [None], [{}]),
    ([{"a": 1}], [{"a": 2}], [{"a": 1}]),
    ([{"value": 1}], [{"value": 2}], [{"value": 2}]),
    ([{"value": 1}], [{"value": 2, "b": 1}], [{"value": 2}]),
    ([{"value": 1}], [{"value": 2, "b": 1}, {"value": 3}], [{"value": 2}]),
    ([{"value": 1, "default": "no change"}], [{"value": 2, "default": 2}], [{"value": 2, "default": "no change"}]),
    ([{"value": 1}, {"value": 1}], [{"value": 2, "b": 1}], [{"value": 2}, {"value": 1}]),
    ([{"value": 1}, {"value": 1}], [{"value": 2}, {"value": 2, "b": 1}], [{"value": 2}, {"value": 2}]),
    (
        [{"value": 1, "rows": [{"value": 1}]}],
        [{"value": 2}, {"value": 3, "rows": [{"value": 3}]}],
        [{"value": 2, "rows": [{"value": 1}]}],
    ),
    (
        [{"value": 1, "rows": [{"value": 1}]}],
        [{"value": 2, "rows": [{"value": 2, "b": 2}]}, {"value": 3, "rows": [{"value": 3}]}],
        [{"value": 2, "rows": [{"value": 2}]}],
    ),
    (
        [{"value": 1, "rows": None}],
        [{"value": 2, "rows": [{"value": 2, "b": 2}]}, {"value": 3, "rows": [{"value": 3}]}],
        [{"value": 2, "rows": [{"value": 2, "b": 2}]}],
    ),
    (
        [{"value": 1, "rows": []}],
        [{"value": 2, "rows": [{"value": 2, "b": 2, "c": 2}]}],
        [{"value": 2, "rows": [{"value": 2, "b": 2, "c": 2}]}],
    ),
    ([{"key": "a", "value": 1}], [{"key": "a", "value": 2}], [{"key": "a", "value": 2}]),
    ([{"key": "a", "value": 1}], [{"key": "b", "value": 2}], [{"key": "a", "value": 1}]),
    ([{"key": "a", "value": 1}], [{"key": "b", "value": 2}, {"key": "a", "value": 3}], [{"key": "a", "value": 3}]),
    ([{"key": "a", "value": 1}], [{"value": 2}, {"value": 3}], [{"key": "a", "value": 1}]),
    (
        [{"key": "a", "value": 1, "rows": [{"key": "aa", "value": 1}]}],
        [{"key": "b", "value": 2, "rows": [{"key": "aa", "value": 2}]}, {"key": "a", "value": 3, "rows": [{"key": "aa", "value": 3}]}],
        [{"key": "a", "value": 3, "rows": [{"key": "aa", "value": 3}]}],
    ),
    (
        [{"key": "a", "value": 1, "rows": [{"key": "aa", "value": 1, "rows": [{"key": "aaa", "value": 1}]}]}],
        [
            {"key": "b", "value": 2, "rows": [{"key": "aa", "value": 2}]},
            {"key": "a", "value": 3, "rows": [{"key": "aa", "value": 3, "rows": [{"key": "aaa", "value": 3}]}]},
        ],
        [{"key": "a", "value": 3, "rows": [{"key": "aa", "value": 3, "rows": [{"key": "aaa", "value": 3}]}]}],
    ),
]


@pytest.mark.parametrize(("target", "source", "expected"), STYLE_MERGE_CASES)
def test_merge_chart_style_configs(target, source, expected) -> None:
    """Values come from the matched source node; every other attribute from the target."""

    assert merge_chart_style_configs(target, source) == expected


def test_merge_chart_style_configs_uses_default_only_when_value_is_missing() -> None:
    """An explicit None value is kept; a missing value takes the target default."""

    assert merge_chart_style_configs([{"key": "a", "value": None, "default": 0}], [], use_default=True) == [
        {"key": "a", "value": None, "default": 0}
    ]
    assert merge_chart_style_configs([{"key": "a", "default": 0}], [], use_default=True) == [
        {"key": "a", "value": 0, "default": 0}
    ]
    assert merge_chart_style_configs(
        [{"key": "a", "value": None, "default": 0}],
        [{"key": "b", "value": 2, "default": "n"}, {"key": "a", "value": 3, "default": "m"}],
        use_default=True,
    ) == [{"key": "a", "value": 3, "default": 0}]


def test_merge_chart_style_configs_applies_defaults_recursively() -> None:
    """Defaults fill nested rows too."""

    target = [{"key": "a", "default": 0, "rows": [{"default": 0}]}]
    assert merge_chart_style_configs(target, [], use_default=True) == [
        {"key": "a", "value": 0, "default": 0, "rows": [{"value": 0, "default": 0}]}
    ]


@pytest.mark.parametrize("options", [{"use_default": False}, {}])
def test_merge_chart_style_configs_leaves_value_missing_without_default_policy(options) -> None:
    """Without the default policy a node with no value stays without one."""

    target = [{"key": "a", "default": 0, "rows": [{"default": 0}]}]
    merged = merge_chart_style_configs(target, [], **options)
    assert merged == target
    assert "value" not in merged[0]


def test_merge_chart_style_configs_enable_flag_default() -> None:
    """A checkbox missing its source value falls back to its default only when asked."""

    target = [{"key": "enable", "default": False}]
    source = [{"key": "enable"}]
    assert merge_chart_style_configs(target, source, use_default=True)[0]["value"] is False
    assert "value" not in merge_chart_style_configs(target, source, use_default=False)[0]


def test_merge_chart_style_configs_is_idempotent_and_pure() -> None:
    """Merging a tree into its own merge result changes nothing; inputs stay intact."""

    target = [
        {
            "key": "stack",
            "label": "stack.title",
            "comType": "group",
            "rows": [
                {"key": "enable", "label": "stack.enable", "default": False, "comType": "checkbox"},
                {"key": "fontColor", "label": "common.fontColor", "default": "#495057", "comType": "fontColor"},
            ],
        }
    ]
    source = [{"key": "stack", "rows": [{"key": "fontColor", "value": "#333333", "comType": "other"}]}]
    target_before = copy.deepcopy(target)
    source_before = copy.deepcopy(source)

    for use_default in (True, False):
        once = merge_chart_style_configs(target, source, use_default=use_default)
        assert merge_chart_style_configs(target, once, use_default=use_default) == once

    merged = merge_chart_style_configs(target, source, use_default=True)
    assert merged[0]["rows"][1] == {
        "key": "fontColor",
        "label": "common.fontColor",
        "default": "#495057",
        "comType": "fontColor",
        "value": "#333333",
    }
    assert target == target_before
    assert source == source_before


def test_merge_chart_style_configs_handles_missing_sides() -> None:
    """A missing target yields the source; a missing source keeps the target."""

    assert merge_chart_style_configs(None, [{"value": 1}]) == [{"value": 1}]
    assert merge_chart_style_configs([{"value": 1}], None) == [{"value": 1}]
    assert merge_chart_style_configs(None, None) is None


DATA_MERGE_CASES = [
    (
        [{"key": "a", "type": "t1", "rows": []}],
        [{"key": "a", "type": "t1", "rows": [{"colName": "aa", "type": "STRING", "category": "field"}]}],
        [{"key": "a", "type": "t1", "rows": [{"colName": "aa", "type": "STRING", "category": "field"}]}],
    ),
    (
        [{"key": "a", "type": "t1", "rows": []}],
        [{"key": "a", "type": "t2", "rows": [{"colName": "aa", "type": "STRING", "category": "field"}]}],
        [{"key": "a", "type": "t1", "rows": []}],
    ),
    (
        [{"key": "a", "type": "t1", "rows": []}],
        [{"key": "b", "type": "t1", "rows": [{"colName": "aa", "type": "STRING", "category": "field"}]}],
        [{"key": "a", "type": "t1", "rows": []}],
    ),
    (
        [{"key": "a", "type": "t1", "rows": [{"colName": "keep"}]}],
        [{"key": "a", "type": "t1", "rows": []}],
        [{"key": "a", "type": "t1", "rows": [{"colName": "keep"}]}],
    ),
    ([{"key": "a", "rows": []}], [], [{"key": "a", "rows": []}]),
]


@pytest.mark.parametrize(("target", "source", "expected"), DATA_MERGE_CASES)
def test_merge_chart_data_configs(target, source, expected) -> None:
    """Rows are copied only from a same-key, same-type source section with rows."""

    assert merge_chart_data_configs(target, source) == expected


def test_merge_chart_data_configs_is_idempotent() -> None:
    """Merging a data tree into an identical copy of itself yields the same tree."""

    sections = [
        {"key": "group", "type": "group", "limit": [0, 2], "rows": [{"colName": "a", "uid": "1"}]},
        {"key": "aggregate", "type": "aggregate", "rows": []},
    ]
    assert merge_chart_data_configs(sections, copy.deepcopy(sections)) == sections
