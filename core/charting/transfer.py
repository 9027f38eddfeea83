"""Reconcile a SOURCE chart config against a TARGET chart schema.

Switching chart type, reloading a saved chart or editing a data-view schema
all produce the same problem: the fields and style values the user already
chose (SOURCE) must be carried into a configuration tree of a possibly
different shape (TARGET). Data sections are redistributed by section type and
row-count limit; style and setting trees are merged structurally.

Redistribution is a deterministic two pass, first-fit heuristic:

1. Same-type pass: each SOURCE field is offered to the TARGET sections whose
   type equals the type of the section it came from.
2. Spillover pass: fields still unplaced are offered, in source
   order, to every typed TARGET section with room, then to `mixed` sections.

Fields that fit nowhere are dropped. Within a candidate list, sections whose
lower bound is still unmet are served first (largest need first); all other
ties resolve left to right.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from .bounds import Bounds, parse_limit
from .merge import merge_chart_style_configs
from .metadata import get_column_render_origin_name
from .schema import CONFIG_BRANCHES, ChartConfig, ChartDataSectionType, DataSection, FieldDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SourceField:
    """A SOURCE field annotated with the type of the section it came from.

    Args:
        descriptor: The field descriptor as assigned in the SOURCE section.
        origin_type: `type` of the SOURCE section holding the field.
        origin_key: `key` of the SOURCE section holding the field.
    """

    descriptor: FieldDescriptor
    origin_type: Any
    origin_key: Any = None


@dataclass(frozen=True, slots=True)
class TransferResult:
    """Outcome of redistributing SOURCE fields over TARGET data sections.

    Args:
        sections: New TARGET data sections holding the placed fields.
        dropped: Field descriptors that fit in no TARGET section.
    """

    sections: list[DataSection]
    dropped: list[FieldDescriptor] = field(default_factory=list)


@dataclass(slots=True)
class _SectionSlot:
    """Mutable accumulator for one TARGET section during redistribution."""

    position: int
    section_type: Any
    bounds: Bounds
    rows: list[FieldDescriptor] = field(default_factory=list)

    def has_room(self) -> bool:
        return len(self.rows) + 1 <= self.bounds.upper

    def need(self) -> float:
        if not self.bounds.declared:
            return 0
        return max(self.bounds.lower - len(self.rows), 0)


def flatten_source_fields(sections: Iterable[DataSection]) -> list[SourceField]:
    """Flatten every assigned field of the SOURCE sections, keeping order.

    Args:
        sections: SOURCE data sections.

    Returns:
        Fields in section order, then row order, tagged with their origin type.
    """

    fields: list[SourceField] = []
    for section in sections:
        if not isinstance(section, dict):
            continue
        rows = section.get("rows")
        if not isinstance(rows, list):
            continue
        for row in rows:
            fields.append(SourceField(descriptor=row, origin_type=section.get("type"), origin_key=section.get("key")))
    return fields


def redistribute_sections(
    target_sections: Sequence[DataSection],
    source_sections: Sequence[DataSection],
) -> TransferResult:
    """Assign SOURCE fields to TARGET data sections.

    Args:
        target_sections: TARGET data sections (type and limit owners).
        source_sections: SOURCE data sections carrying assigned fields.

    Returns:
        TransferResult with new TARGET sections (in TARGET order) and the
        fields that could not be placed.
    """

    slots = [
        _SectionSlot(position=position, section_type=section.get("type"), bounds=parse_limit(section.get("limit")))
        for position, section in enumerate(target_sections)
        if isinstance(section, dict)
    ]
    typed_slots = [slot for slot in slots if slot.section_type != ChartDataSectionType.mixed]
    mixed_slots = [slot for slot in slots if slot.section_type == ChartDataSectionType.mixed]

    held_back: list[SourceField] = []
    for source_field in flatten_source_fields(source_sections):
        same_type = [slot for slot in slots if slot.section_type == source_field.origin_type]
        if not _place(source_field, same_type):
            held_back.append(source_field)

    dropped: list[FieldDescriptor] = []
    for source_field in held_back:
        if _place(source_field, typed_slots) or _place(source_field, mixed_slots):
            continue
        dropped.append(copy.deepcopy(source_field.descriptor))
        logger.debug(
            "Dropped field %s from %s section %r: no target section has room.",
            get_column_render_origin_name(source_field.descriptor),
            source_field.origin_type,
            source_field.origin_key,
        )

    rows_by_position = {slot.position: slot.rows for slot in slots}
    sections: list[DataSection] = []
    for position, section in enumerate(target_sections):
        merged = copy.deepcopy(section)
        if isinstance(merged, dict):
            merged["rows"] = rows_by_position[position]
        sections.append(merged)

    if dropped:
        logger.info("Chart config transfer dropped %d field(s).", len(dropped))
    return TransferResult(sections=sections, dropped=dropped)


@dataclass(frozen=True, slots=True)
class ChartConfigTransfer:
    """A reconciled chart config with the fields that had to be dropped.

    Args:
        config: The reconciled chart config (None only when both inputs were None).
        dropped: SOURCE field descriptors that fit in no TARGET data section.
    """

    config: ChartConfig | None
    dropped: list[FieldDescriptor] = field(default_factory=list)


def transfer_chart_data_configs(
    target: Sequence[DataSection] | None,
    source: Sequence[DataSection] | None,
) -> list[DataSection] | None:
    """Return TARGET data sections filled with the redistributed SOURCE fields.

    TARGET sections are returned unchanged (copied) when the SOURCE has no
    sections.
    """

    if target is None:
        return copy.deepcopy(list(source)) if source is not None else None
    if not source:
        return copy.deepcopy(list(target))
    return redistribute_sections(target, source).sections


def reconcile_chart_configs(
    target: ChartConfig | None,
    source: ChartConfig | None,
    *,
    use_default: bool = True,
) -> ChartConfigTransfer:
    """Reconcile two chart configs and report the fields that were dropped.

    See `transfer_chart_configs` for the reconciliation rules.
    """

    if target is None:
        return ChartConfigTransfer(config=copy.deepcopy(source))
    if source is None:
        return ChartConfigTransfer(config=copy.deepcopy(target))

    result: ChartConfig = copy.deepcopy({key: value for key, value in target.items() if key not in CONFIG_BRANCHES})
    dropped: list[FieldDescriptor] = []
    if "datas" in target:
        target_datas, source_datas = target["datas"], _branch(source, "datas")
        if isinstance(target_datas, list) and source_datas:
            redistributed = redistribute_sections(target_datas, source_datas)
            result["datas"] = redistributed.sections
            dropped = redistributed.dropped
        else:
            result["datas"] = transfer_chart_data_configs(target_datas, source_datas)
    for branch in ("styles", "settings"):
        if branch in target:
            result[branch] = merge_chart_style_configs(
                target[branch],
                _branch(source, branch),
                use_default=use_default,
            )
    return ChartConfigTransfer(config=result, dropped=dropped)


def transfer_chart_configs(
    target: ChartConfig | None,
    source: ChartConfig | None,
    *,
    use_default: bool = True,
) -> ChartConfig | None:
    """Reconcile a SOURCE chart config against a TARGET chart config.

    Data sections are redistributed (see module docstring); style and setting
    trees are merged with `merge_chart_style_configs`.

    Args:
        target: Freshly instantiated config of the new chart type (shape owner).
        source: Previously built or persisted config.
        use_default: Fill style and setting nodes left without a value with
            their TARGET `default`.

    Returns:
        A new chart config holding exactly the branches present on TARGET.
        When either side is None, a copy of the other side is returned.
    """

    return reconcile_chart_configs(target, source, use_default=use_default).config


def _place(source_field: SourceField, candidates: list[_SectionSlot]) -> bool:
    """Append the field to the best candidate with room; return whether it was placed."""

    open_slots = [slot for slot in candidates if slot.has_room()]
    if not open_slots:
        return False
    best = min(open_slots, key=lambda slot: (-slot.need(), slot.position))
    best.rows.append(copy.deepcopy(source_field.descriptor))
    return True


def _branch(config: ChartConfig, name: str) -> list[Any] | None:
    """Return a config branch when it is a list."""

    value = config.get(name)
    return value if isinstance(value, list) else None
