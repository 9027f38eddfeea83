"""Validation for chart data sections against their row-count limits.

Redistribution only enforces upper bounds. Lower bounds are informational: a
section with fewer rows than it needs is still a valid intermediate state
while the user edits the chart, so it is reported as a warning, not an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .bounds import parse_limit, reach_lower_bound_count
from .schema import DataSection


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of validating chart data sections."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def validate_chart_data_section(section: DataSection) -> ValidationResult:
    """Validate a single data section against its limit.

    Args:
        section: Data section with `key`, `type`, `limit` and `rows`.

    Returns:
        ValidationResult containing errors and warnings.
    """

    errors: list[str] = []
    warnings: list[str] = []

    key = section.get("key")
    if not isinstance(key, str) or not key.strip():
        errors.append("DataSection.key must be a non-empty string.")

    rows = section.get("rows")
    if rows is None:
        rows = []
    if not isinstance(rows, list):
        errors.append(f"DataSection[{key}].rows must be a list.")
        return ValidationResult(is_valid=False, errors=tuple(errors), warnings=tuple(warnings))

    limit = section.get("limit")
    bounds = parse_limit(limit)
    if limit is not None and not bounds.declared:
        warnings.append(f"DataSection[{key}].limit={limit!r} is not a valid limit and is ignored.")

    count = len(rows)
    if count > bounds.upper:
        errors.append(f"DataSection[{key}] holds {count} field(s); at most {bounds.upper} allowed.")

    missing = reach_lower_bound_count(limit, count)
    if missing > 0:
        warnings.append(f"DataSection[{key}] needs {missing} more field(s) to reach its minimum of {bounds.lower}.")

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def validate_chart_data_configs(sections: Iterable[DataSection]) -> ValidationResult:
    """Validate a collection of data sections, enforcing key uniqueness.

    Args:
        sections: Data sections of one chart config.

    Returns:
        ValidationResult covering all sections.
    """

    errors: list[str] = []
    warnings: list[str] = []

    seen: set[str] = set()
    for index, section in enumerate(sections):
        if not isinstance(section, dict):
            errors.append(f"DataSection[{index}] must be an object.")
            continue
        key = section.get("key")
        if isinstance(key, str):
            if key in seen:
                errors.append(f"Duplicate DataSection.key: {key!r}.")
            else:
                seen.add(key)
        result = validate_chart_data_section(section)
        errors.extend(result.errors)
        warnings.extend(result.warnings)

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))
