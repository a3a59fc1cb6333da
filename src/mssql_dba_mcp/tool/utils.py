"""Utility functions for MCP tools."""

from __future__ import annotations

import json
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any
from uuid import UUID


def decode_bytes_to_utf8(obj: Any) -> Any:  # noqa: ANN401
    """Recursively decode bytes to UTF-8 strings for JSON serialization.

    Args:
        obj: Object that may contain bytes (dict, list, bytes, str, etc.)

    Returns:
        Object with bytes decoded to strings.
    """
    if isinstance(obj, bytes | bytearray | memoryview):
        raw = bytes(obj)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            # latin-1 decodes any byte sequence
            return raw.decode("latin-1")
    if isinstance(obj, dict):
        return {key: decode_bytes_to_utf8(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [decode_bytes_to_utf8(item) for item in obj]
    if isinstance(obj, tuple):
        return tuple(decode_bytes_to_utf8(item) for item in obj)
    return obj


def json_default(value: Any) -> Any:  # noqa: ANN401
    """Convert driver scalar types that ``json`` cannot serialize.

    Args:
        value: Column value.

    Returns:
        A JSON-serializable equivalent.

    Raises:
        TypeError: If the value has no known conversion.
    """
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, datetime | date | time):
        return value.isoformat()
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, bytes | bytearray | memoryview):
        return decode_bytes_to_utf8(value)
    error_msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(error_msg)


def format_rows(rows: list[dict[str, Any]]) -> str:
    """Serialize result rows as pretty-printed JSON (two-space indent).

    Args:
        rows: Rows keyed by column label.

    Returns:
        JSON array text, column order preserved.
    """
    return json.dumps(rows, indent=2, ensure_ascii=False, default=json_default)
