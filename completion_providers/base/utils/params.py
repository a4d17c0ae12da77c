"""Parameter resolution helpers.

Request-level values override the backend's configured defaults. ``None``
means "not set"; falsy values such as ``temperature=0`` are honoured.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, TypeVar

T = TypeVar("T")


def pick(value: Optional[T], default: T) -> T:
    """Return ``value`` unless it is ``None``."""
    return default if value is None else value


def compact(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is ``None`` (parameters the caller did not set)."""
    return {k: v for k, v in params.items() if v is not None}


def merge_extra(payload: Dict[str, Any], extra: Mapping[str, Any], *, reserved: tuple = ()) -> Dict[str, Any]:
    """Merge backend-specific ``extra`` parameters last, skipping ``reserved`` keys."""
    for k, v in extra.items():
        if k in reserved:
            continue
        payload[k] = v
    return payload


__all__ = ["pick", "compact", "merge_extra"]
