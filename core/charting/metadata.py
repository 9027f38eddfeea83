"""Normalize persisted data-view models into flat field descriptors.

A data-view model is persisted as a JSON string in one of two shapes:

- a flat mapping of column name to column descriptor, where a column may carry
  a `children` list;
- an object with a `hierarchy` mapping (hierarchy groups and plain columns)
  and a `columns` mapping (the ungrouped column list).

The hierarchy tree editor produces and consumes the flat descriptor lists
built here; reordering, renaming and combining hierarchies stay with the
editor.
"""

from __future__ import annotations

from typing import Any

from .schema import ColumnRole, FieldCategory, FieldDescriptor
from .snapshot_codec import decode_json_object

HIERARCHY_KEY = "hierarchy"
COLUMNS_KEY = "columns"
UNKNOWN_COLUMN_NAME = "[unknown]"


def transform_meta(model: str | None) -> list[FieldDescriptor] | None:
    """Flatten a persisted model into selectable field descriptors.

    Hierarchy groups are replaced by their children, so every descriptor
    returned is tagged `category="field"`.

    Args:
        model: JSON string of the persisted data-view model.

    Returns:
        Field descriptors in model order, or None when no model is given.
    """

    if not model:
        return None
    payload = decode_json_object(model)
    if HIERARCHY_KEY in payload:
        columns = _model_columns(payload)
    else:
        columns = payload

    metas: list[FieldDescriptor] = []
    for key, column in columns.items():
        children = _children(column)
        if children:
            metas.extend(_as_field(child, child.get("name")) for child in children)
        else:
            metas.append(_as_field(column, key))
    return metas


def transform_hierarchy_meta(model: str | None) -> list[FieldDescriptor]:
    """Normalize a persisted model keeping hierarchy groups intact.

    Args:
        model: JSON string of the persisted data-view model.

    Returns:
        One descriptor per top-level entry. Hierarchy groups are tagged
        `category="hierarchy"` and own a normalized `children` list; other
        entries are tagged `category="field"`. Empty when no model is given.
    """

    if not model:
        return []
    payload = decode_json_object(model)
    return [_hierarchy_meta(key, column) for key, column in _model_columns(payload).items()]


def get_column_render_origin_name(field: FieldDescriptor | Any) -> str:
    """Return the display name of a field, wrapped in its aggregate when set.

    Args:
        field: Field descriptor assigned to a data section.

    Returns:
        `"SUM(amount)"` style names for aggregated fields, the bare column name
        otherwise, and `"[unknown]"` when no field is given or the row is not
        a descriptor object.
    """

    if not isinstance(field, dict) or not field:
        return UNKNOWN_COLUMN_NAME
    col_name = field.get("colName")
    aggregate = field.get("aggregate")
    if aggregate:
        return f"{aggregate}({col_name})"
    return str(col_name)


def _model_columns(payload: dict[str, Any]) -> dict[str, Any]:
    """Return the hierarchy mapping, or `columns` when the hierarchy is empty."""

    hierarchy = payload.get(HIERARCHY_KEY)
    if isinstance(hierarchy, dict) and hierarchy:
        return hierarchy
    columns = payload.get(COLUMNS_KEY)
    if isinstance(columns, dict):
        return columns
    return {}


def _hierarchy_meta(key: Any, column: Any) -> FieldDescriptor:
    """Normalize one model entry, recursing into hierarchy children."""

    column = column if isinstance(column, dict) else {}
    children = _children(column)
    is_hierarchy = bool(children) or column.get("role") == ColumnRole.hierarchy

    meta = dict(column)
    meta["id"] = key
    meta["subType"] = column.get("category")
    if is_hierarchy:
        meta["category"] = FieldCategory.hierarchy.value
        meta["children"] = [_hierarchy_meta(child.get("name"), child) for child in children]
    else:
        meta["category"] = FieldCategory.field.value
        meta.pop("children", None)
    return meta


def _as_field(column: Any, identifier: Any) -> FieldDescriptor:
    """Copy a column descriptor and tag it as a plain field."""

    meta = dict(column) if isinstance(column, dict) else {}
    meta["id"] = identifier
    meta["category"] = FieldCategory.field.value
    return meta


def _children(column: Any) -> list[dict[str, Any]]:
    """Return the dict children of a column, ignoring malformed entries."""

    if not isinstance(column, dict):
        return []
    children = column.get("children")
    if not isinstance(children, list):
        return []
    return [child for child in children if isinstance(child, dict)]
