"""Router factory for litestar-ncm."""

from __future__ import annotations

from litestar import Router
from litestar.di import Provide

from litestar_ncm.activity import LoggingActivityLog
from litestar_ncm.cache import CacheBackend, InMemoryCache
from litestar_ncm.client import NcmClient
from litestar_ncm.config import NcmConfig
from litestar_ncm.exceptions import EXCEPTION_HANDLERS
from litestar_ncm.flow import ShipmentFlow
from litestar_ncm.protocols import ActivityLog, OrderStore, ShipmentRepository
from litestar_ncm.routes.carrier import CarrierController
from litestar_ncm.routes.orders import OrderShipmentController
from litestar_ncm.routes.shipments import ShipmentController
from litestar_ncm.routes.webhooks import WebhookController


def create_ncm_router(
    *,
    config: NcmConfig,
    repository: ShipmentRepository,
    order_store: OrderStore,
    client: NcmClient | None = None,
    activity_log: ActivityLog | None = None,
    cache: CacheBackend | None = None,
) -> Router:
    """Create a configured Litestar router.

    Args:
        config: NCM configuration.
        repository: Shipment persistence backend.
        order_store: Access to the host application's orders.
        client: NCM API client. Built from ``config`` if not provided.
        activity_log: Activity sink. Logs entries if not provided.
        cache: Cache backend for branch lists and rates. In-memory if not
            provided.

    Returns:
        A Litestar Router with all NCM endpoints.
    """
    actual_client = client or NcmClient(
        config.api_url, config.api_key, timeout=config.timeout
    )
    actual_activity_log = activity_log or LoggingActivityLog()
    actual_cache = cache if cache is not None else InMemoryCache()

    def provide_flow() -> ShipmentFlow:
        return ShipmentFlow(
            client=actual_client,
            repository=repository,
            order_store=order_store,
            config=config,
            activity_log=actual_activity_log,
            cache=actual_cache,
        )

    return Router(
        path="/",
        route_handlers=[
            CarrierController,
            ShipmentController,
            WebhookController,
            OrderShipmentController,
        ],
        dependencies={
            "config": Provide(lambda: config, sync_to_thread=False),
            "repository": Provide(lambda: repository, sync_to_thread=False),
            "order_store": Provide(lambda: order_store, sync_to_thread=False),
            "flow": Provide(provide_flow, sync_to_thread=False),
        },
        exception_handlers=EXCEPTION_HANDLERS,
    )
