"""Lookup helpers for loosely typed carrier JSON."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

TRACKING_ID_FIELDS = ("tracking_id", "id", "order_id")
STATUS_FIELDS = ("status",)
VENDOR_RETURN_FIELDS = ("vendor_return",)
OCCURRED_AT_FIELDS = ("updated_at", "timestamp")
LOCATION_FIELDS = ("location", "branch")


def first_present(payload: Mapping[str, Any] | None, *fields: str) -> Any:
    """Return the first truthy value among ``fields``, or ``None``.

    Empty strings, zero and ``None`` are skipped, so ``{"tracking_id": "",
    "id": 42}`` resolves to ``42``.
    """
    if not payload:
        return None
    for field in fields:
        value = payload.get(field)
        if value:
            return value
    return None


def tracking_id_of(payload: Mapping[str, Any] | None) -> str | None:
    value = first_present(payload, *TRACKING_ID_FIELDS)
    return None if value is None else str(value)
