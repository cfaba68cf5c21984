"""Fire-and-forget activity logging."""

from __future__ import annotations

import logging
from typing import Any

from litestar_ncm.protocols import ActivityLog

logger = logging.getLogger(__name__)


class LoggingActivityLog:
    """Activity sink that writes entries to the application log."""

    async def record(
        self,
        action: str,
        entity_type: str,
        entity_id: str | None,
        entity_name: str | None,
        details: dict[str, Any] | None,
    ) -> None:
        logger.info(
            "%s %s %s (%s): %s",
            action,
            entity_type,
            entity_id,
            entity_name,
            details,
        )


async def record_activity(
    sink: ActivityLog | None,
    *,
    action: str,
    entity_type: str,
    entity_id: str | None = None,
    entity_name: str | None = None,
    details: dict[str, Any] | None = None,
) -> None:
    """Record an activity entry, never letting the sink fail the caller."""
    if sink is None:
        return
    try:
        await sink.record(action, entity_type, entity_id, entity_name, details)
    except Exception:
        logger.exception(
            "Failed to log activity %s for %s %s",
            action,
            entity_type,
            entity_id,
        )
