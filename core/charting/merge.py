"""Structural merge of SOURCE config trees into TARGET-shaped trees.

The TARGET owns the shape of every node (key, label, comType, default,
watcher, static children). Only `value` leaves (and, for data sections, the
assigned `rows`) are imported from the SOURCE. Nodes are matched by `key` when
the target node declares one, otherwise by position.

Inputs are never mutated; every merge returns a fresh tree.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Sequence

from .schema import DataSection, StyleNode

NodeMerger = Callable[[dict[str, Any], dict[str, Any] | None], dict[str, Any]]
NodeMatcher = Callable[[dict[str, Any], int, Sequence[Any]], dict[str, Any] | None]


def match_by_key_or_index(node: dict[str, Any], index: int, candidates: Sequence[Any]) -> dict[str, Any] | None:
    """Find the counterpart of `node` in `candidates`.

    Args:
        node: Target node being merged.
        index: Position of `node` within its target sequence.
        candidates: Source sequence at the same depth.

    Returns:
        The first candidate with the same `key` when `node` declares a key,
        otherwise the candidate at `index`. None when nothing matches.
    """

    if "key" in node:
        key = node["key"]
        return next(
            (candidate for candidate in candidates if isinstance(candidate, dict) and candidate.get("key") == key),
            None,
        )
    if index < len(candidates) and isinstance(candidates[index], dict):
        return candidates[index]
    return None


def merge_sequences(
    target: Sequence[Any],
    source: Sequence[Any],
    *,
    merge_node: NodeMerger,
    match: NodeMatcher = match_by_key_or_index,
) -> list[Any]:
    """Merge two sequences of config nodes pairwise.

    Args:
        target: Target nodes; their order and shape are kept.
        source: Source nodes providing values.
        merge_node: Builds the merged node from a target node and its match.
        match: Locates the source counterpart of a target node.

    Returns:
        New list with one merged node per target node.
    """

    merged: list[Any] = []
    for index, node in enumerate(target):
        if not isinstance(node, dict):
            merged.append(copy.deepcopy(node))
            continue
        merged.append(merge_node(node, match(node, index, source)))
    return merged


def merge_chart_style_configs(
    target: Sequence[StyleNode] | None,
    source: Sequence[StyleNode] | None,
    *,
    use_default: bool = False,
) -> list[StyleNode] | None:
    """Merge SOURCE style/setting values into the TARGET style tree.

    Args:
        target: Target style or setting nodes (shape owner).
        source: Source nodes carrying user-edited `value`s.
        use_default: When True, nodes left without a `value` take their own
            `default`. An explicit `None` value is kept as is.

    Returns:
        Merged node list. A copy of `source` when `target` is None.
    """

    if target is None:
        return copy.deepcopy(list(source)) if source is not None else None

    def merge_node(node: dict[str, Any], counterpart: dict[str, Any] | None) -> dict[str, Any]:
        merged = copy.deepcopy(node)
        if counterpart is not None and "value" in counterpart:
            merged["value"] = copy.deepcopy(counterpart["value"])
        if use_default and "value" not in merged and "default" in merged:
            merged["value"] = copy.deepcopy(merged["default"])

        rows = node.get("rows")
        source_rows = counterpart.get("rows") if counterpart is not None else None
        if isinstance(rows, list) and rows:
            merged["rows"] = merge_sequences(
                rows,
                source_rows if isinstance(source_rows, list) else [],
                merge_node=merge_node,
            )
        elif isinstance(source_rows, list) and source_rows:
            # Target declares no children: keep every source child.
            merged["rows"] = copy.deepcopy(source_rows)
        return merged

    return merge_sequences(target, source or [], merge_node=merge_node)


def merge_chart_data_configs(
    target: Sequence[DataSection] | None,
    source: Sequence[DataSection] | None,
) -> list[DataSection] | None:
    """Copy assigned rows from SOURCE data sections onto matching TARGET sections.

    Rows are copied verbatim, without limit filtering, when the matched source
    section has the same `type` as the target section and non-empty rows.

    Args:
        target: Target data sections.
        source: Source data sections carrying assigned fields.

    Returns:
        Merged section list. A copy of `source` when `target` is None.
    """

    if target is None:
        return copy.deepcopy(list(source)) if source is not None else None

    def merge_node(section: dict[str, Any], counterpart: dict[str, Any] | None) -> dict[str, Any]:
        merged = copy.deepcopy(section)
        if counterpart is None or counterpart.get("type") != section.get("type"):
            return merged
        rows = counterpart.get("rows")
        if isinstance(rows, list) and rows:
            merged["rows"] = copy.deepcopy(rows)
        return merged

    return merge_sequences(target, source or [], merge_node=merge_node)
