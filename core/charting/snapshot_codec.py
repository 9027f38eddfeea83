"""Snapshot encoding/decoding helpers for persisted chart configuration payloads."""

from __future__ import annotations

import json
from typing import Any, cast

from .schema import CONFIG_BRANCHES, ChartConfig


def decode_json_object(payload: str | bytes | dict[str, Any]) -> dict[str, Any]:
    """Decode a JSON object payload.

    Args:
        payload: JSON text, or an already decoded dictionary.

    Returns:
        The decoded dictionary.

    Raises:
        ValueError: When the payload is not valid JSON or not a JSON object.
    """

    if isinstance(payload, dict):
        return payload
    try:
        decoded = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON payload: {exc.msg} (line {exc.lineno}, column {exc.colno}).") from exc
    if not isinstance(decoded, dict):
        raise ValueError(f"Expected a JSON object payload, got {type(decoded).__name__}.")
    return cast(dict[str, Any], decoded)


def decode_chart_config(payload: str | bytes | dict[str, Any] | None) -> ChartConfig | None:
    """Decode a chart config from a stored payload.

    Only the `datas`, `styles` and `settings` branches are kept, and only when
    they hold lists; other keys are dropped.

    Args:
        payload: JSON text or dictionary previously produced by `encode_chart_config`.

    Returns:
        Chart config dictionary, or None when the payload is empty.

    Raises:
        ValueError: When the payload is not a JSON object.
    """

    if payload is None or payload == "" or payload == b"":
        return None
    raw = decode_json_object(payload)
    config: ChartConfig = {}
    for branch in CONFIG_BRANCHES:
        value = raw.get(branch)
        if isinstance(value, list):
            config[branch] = value
    return config


def encode_chart_config(config: ChartConfig | None, *, indent: int | None = None) -> str:
    """Encode a chart config as JSON text for storage.

    Args:
        config: Chart config dictionary.
        indent: Optional indentation for human-readable output.

    Returns:
        JSON string; `"null"` when no config is given.
    """

    return json.dumps(config, ensure_ascii=False, indent=indent, default=_encode_default)


def _encode_default(value: object) -> Any:
    """Encode values `json` does not handle natively (callables such as watcher actions)."""

    if callable(value):
        return None
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
