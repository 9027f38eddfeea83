"""Row-count limit parsing and bound arithmetic for chart data sections.

A section `limit` arrives in several persisted shapes:

- absent (`None`): no constraint;
- a number or numeric string (`2`, `"2"`): an exact row count;
- a two element list of numbers or numeric strings (`[1, 999]`,
  `["1", "999"]`): an inclusive range;
- a string-encoded two element list (`"[1, 999]"`): same as the list form.

`parse_limit` resolves any of these once into `Bounds`; the predicates below
never branch on the raw representation. Malformed limits resolve to the
unbounded `Bounds` and never raise, so redistribution cannot halt on bad
metadata.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Final


@dataclass(frozen=True, slots=True)
class Bounds:
    """Resolved inclusive row-count bounds.

    Args:
        lower: Minimum row count.
        upper: Maximum row count (`math.inf` when unbounded).
        declared: False when the limit was absent or could not be parsed.
    """

    lower: float
    upper: float
    declared: bool = True


UNBOUNDED: Final[Bounds] = Bounds(lower=0, upper=math.inf, declared=False)


def parse_limit(limit: Any) -> Bounds:
    """Resolve a raw section limit into `Bounds`.

    Args:
        limit: Raw `limit` value from a data section.

    Returns:
        Bounds for the limit; `UNBOUNDED` when absent or malformed.
    """

    if limit is None:
        return UNBOUNDED

    if isinstance(limit, str):
        text = limit.strip()
        if text.startswith("["):
            try:
                limit = json.loads(text)
            except ValueError:
                return UNBOUNDED
        else:
            value = _to_number(text)
            if value is None:
                return UNBOUNDED
            return Bounds(lower=value, upper=value)

    if isinstance(limit, (list, tuple)):
        if len(limit) != 2:
            return UNBOUNDED
        first, second = _to_number(limit[0]), _to_number(limit[1])
        if first is None or second is None:
            return UNBOUNDED
        return Bounds(lower=min(first, second), upper=max(first, second))

    value = _to_number(limit)
    if value is None:
        return UNBOUNDED
    return Bounds(lower=value, upper=value)


def resolve_bounds(limit: Any) -> tuple[float, float]:
    """Return the `(lower, upper)` pair for a raw limit."""

    bounds = parse_limit(limit)
    return bounds.lower, bounds.upper


def is_in_range(limit: Any, count: int = 0) -> bool:
    """Return True when `count` rows satisfy both bounds of `limit`."""

    bounds = parse_limit(limit)
    return bounds.lower <= count <= bounds.upper


def is_under_upper_bound(limit: Any, count: int = 0) -> bool:
    """Return True when `count` rows do not exceed the upper bound of `limit`."""

    return count <= parse_limit(limit).upper


def reach_lower_bound_count(limit: Any, count: int = 0) -> int | float:
    """Return how many more rows are needed to reach the lower bound.

    Args:
        limit: Raw `limit` value from a data section.
        count: Current row count.

    Returns:
        `lower - count`. Positive values mean the section still needs that many
        rows; zero or negative values mean the lower bound is met. An absent or
        malformed limit returns 0.
    """

    bounds = parse_limit(limit)
    if not bounds.declared:
        return 0
    return _as_int(bounds.lower - count)


def _to_number(value: object) -> float | None:
    """Best-effort numeric coercion for limit elements."""

    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
    if math.isnan(number):
        return None
    return _as_int(number)


def _as_int(value: float) -> int | float:
    """Return integral floats as ints so counts compare and print naturally."""

    if math.isfinite(value) and float(value).is_integer():
        return int(value)
    return value
