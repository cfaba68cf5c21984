# src/litestar_ncm/__init__.py
"""Litestar integration for Nepal Can Move (NCM) delivery tracking."""

from typing import TYPE_CHECKING

__version__ = "0.1.0"

__all__ = [
    "ActivityLog",
    "ConflictError",
    "CreateShipmentRequest",
    "NcmClient",
    "NcmConfig",
    "NotFoundError",
    "OrderStatus",
    "OrderStore",
    "ShipmentFlow",
    "ShipmentRepository",
    "ShipmentResponse",
    "ShipmentStatus",
    "UpstreamError",
    "ValidationError",
    "WebhookResponse",
    "__version__",
    "create_ncm_router",
    "map_carrier_status",
    "map_carrier_status_to_order_status",
]

if TYPE_CHECKING:
    from litestar_ncm.client import NcmClient
    from litestar_ncm.config import NcmConfig
    from litestar_ncm.enums import OrderStatus, ShipmentStatus
    from litestar_ncm.exceptions import (
        ConflictError,
        NotFoundError,
        UpstreamError,
        ValidationError,
    )
    from litestar_ncm.flow import ShipmentFlow
    from litestar_ncm.mapping import (
        map_carrier_status,
        map_carrier_status_to_order_status,
    )
    from litestar_ncm.plugin import create_ncm_router
    from litestar_ncm.protocols import (
        ActivityLog,
        OrderStore,
        ShipmentRepository,
    )
    from litestar_ncm.schemas import (
        CreateShipmentRequest,
        ShipmentResponse,
        WebhookResponse,
    )

_LAZY = {
    "NcmClient": "litestar_ncm.client",
    "NcmConfig": "litestar_ncm.config",
    "OrderStatus": "litestar_ncm.enums",
    "ShipmentStatus": "litestar_ncm.enums",
    "ConflictError": "litestar_ncm.exceptions",
    "NotFoundError": "litestar_ncm.exceptions",
    "UpstreamError": "litestar_ncm.exceptions",
    "ValidationError": "litestar_ncm.exceptions",
    "ShipmentFlow": "litestar_ncm.flow",
    "map_carrier_status": "litestar_ncm.mapping",
    "map_carrier_status_to_order_status": "litestar_ncm.mapping",
    "create_ncm_router": "litestar_ncm.plugin",
    "ActivityLog": "litestar_ncm.protocols",
    "OrderStore": "litestar_ncm.protocols",
    "ShipmentRepository": "litestar_ncm.protocols",
    "CreateShipmentRequest": "litestar_ncm.schemas",
    "ShipmentResponse": "litestar_ncm.schemas",
    "WebhookResponse": "litestar_ncm.schemas",
}


def __getattr__(name: str):
    # Lazy imports to avoid loading all submodules on package import.
    module_name = _LAZY.get(name)
    if module_name is None:
        raise AttributeError(
            f"module 'litestar_ncm' has no attribute {name!r}"
        )
    from importlib import import_module

    return getattr(import_module(module_name), name)
