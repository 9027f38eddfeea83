"""Schema types for reconcilable chart configuration trees.

Chart configurations are persisted as JSON and edited by the UI layer, so the
reconciliation engine works on the plain dict/list trees produced by
`json.loads` rather than on bespoke classes. A JavaScript-style "undefined"
attribute is a missing dict key; JSON `null` is `None`. The two are kept
distinct everywhere in this package.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal, TypeAlias

ChartConfig: TypeAlias = dict[str, Any]
DataSection: TypeAlias = dict[str, Any]
FieldDescriptor: TypeAlias = dict[str, Any]
StyleNode: TypeAlias = dict[str, Any]
HeaderRow: TypeAlias = dict[str, Any]

ConfigBranch = Literal["datas", "styles", "settings"]

CONFIG_BRANCHES: tuple[ConfigBranch, ...] = ("datas", "styles", "settings")


class ChartDataSectionType(StrEnum):
    """Type of a chart data section.

    `mixed` is the catch-all section type that accepts fields of any origin.
    """

    group = "group"
    aggregate = "aggregate"
    color = "color"
    info = "info"
    size = "size"
    filter = "filter"
    mixed = "mixed"


class FieldCategory(StrEnum):
    """Category tag attached to normalized field descriptors."""

    field = "field"
    hierarchy = "hierarchy"


class ColumnRole(StrEnum):
    """Role of an entry in a persisted data-view model."""

    hierarchy = "hierarchy"
