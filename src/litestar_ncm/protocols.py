"""Storage and side-effect collaborators of the reconciliation flow."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from litestar_ncm.cache import CacheBackend
from litestar_ncm.types import OrderInfo

__all__ = [
    "ActivityLog",
    "CacheBackend",
    "OrderStore",
    "ShipmentRepository",
]


@runtime_checkable
class ShipmentRepository(Protocol):
    """Persistence for shipments and their append-only event history."""

    async def get_by_tracking_id(self, tracking_id: str) -> Any:
        """Get a shipment by tracking ID. Raises KeyError if not found."""
        ...

    async def get_by_order_id(self, order_id: str) -> Any | None:
        """Get the shipment of an order, or None."""
        ...

    async def create(self, **fields: Any) -> Any:
        """Create a shipment record."""
        ...

    async def update_status(self, shipment_id: str, system_status: str) -> Any:
        """Set a new system status and bump ``updated_at``."""
        ...

    async def add_event(self, shipment_id: str, **fields: Any) -> Any:
        """Append a shipment event."""
        ...

    async def list_events(self, shipment_id: str) -> list[Any]:
        """List events of a shipment, newest first."""
        ...

    async def list_recent(self, limit: int = 50) -> list[Any]:
        """List shipments, newest first."""
        ...


@runtime_checkable
class OrderStore(Protocol):
    """Read/update access to orders owned by the host application."""

    async def get_order(self, order_id: str) -> OrderInfo | None:
        """Load an order with its customer and items."""
        ...

    async def update_status(self, order_id: str, status: str) -> None:
        """Persist a new order status."""
        ...


@runtime_checkable
class ActivityLog(Protocol):
    """Audit sink for user-visible activity entries."""

    async def record(
        self,
        action: str,
        entity_type: str,
        entity_id: str | None,
        entity_name: str | None,
        details: dict[str, Any] | None,
    ) -> None:
        """Write one activity entry."""
        ...
