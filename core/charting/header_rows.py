"""Helpers for pivoted-table header trees.

The rendering layer keeps the header layout of a table between renders and
only rebuilds it when the set of header columns changes.
"""

from __future__ import annotations

from typing import Sequence

from .schema import HeaderRow


def diff_header_rows(old_rows: Sequence[HeaderRow] | None, new_rows: Sequence[HeaderRow] | None) -> bool:
    """Return True when two header row sequences are different.

    Order is ignored: rows are compared as sets of `colName`.

    Args:
        old_rows: Header rows of the previous layout.
        new_rows: Header rows of the candidate layout.

    Returns:
        True when the lengths differ or a `colName` is present on one side only.
    """

    old_rows = old_rows or ()
    new_rows = new_rows or ()
    if len(old_rows) != len(new_rows):
        return True
    old_names = {row.get("colName") for row in old_rows}
    new_names = {row.get("colName") for row in new_rows}
    return old_names != new_names


def flatten_header_rows_without_group_row(root: HeaderRow) -> list[HeaderRow]:
    """Return the non-group leaves under `root`, pre-order, left to right.

    Group rows (`isGroup` truthy) are replaced by their flattened children;
    any other row is returned as is. Header trees are finite and acyclic.
    """

    if not root.get("isGroup"):
        return [root]
    leaves: list[HeaderRow] = []
    for child in root.get("children") or ():
        leaves.extend(flatten_header_rows_without_group_row(child))
    return leaves
