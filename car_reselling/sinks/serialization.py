"""Shared serialization utilities for sinks.

Money stays exact: ``Decimal`` is written as its string form, never as float.
"""

import json
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any


def to_dict(obj: Any) -> dict:
    """Convert a record (dataclass, dict or scalar) to a JSON-ready dict."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return {k: serialize_value(v) for k, v in obj.items()}
    else:
        return {"value": serialize_value(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert a dataclass, including nested report rows, to a dict."""
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj) if not f.name.startswith("_")}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if is_dataclass(value) and not isinstance(value, type):
        return dataclass_to_dict(value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return _serialize_scalar(value)


def to_json(obj: Any, pretty: bool = False) -> str:
    """Serialize a record to a JSON string."""
    if pretty:
        return json.dumps(to_dict(obj), indent=2, ensure_ascii=False)
    return json.dumps(to_dict(obj), ensure_ascii=False)


def _serialize_scalar(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, (datetime, date)):
        return value.isoformat()
    return value
