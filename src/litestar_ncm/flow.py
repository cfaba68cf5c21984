"""Shipment reconciliation between NCM and local orders.

``ShipmentFlow`` owns the three workflows that move a shipment through its
states: creation, status refresh (pull) and webhook delivery (push). All of
them derive statuses through :mod:`litestar_ncm.mapping`; the flow only
orchestrates the carrier call, persistence, the order transition and the
activity log.

Writes are committed one at a time. A failure halfway through leaves the
earlier writes in place, and the next refresh or webhook moves the shipment
forward again.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from litestar_ncm.activity import record_activity
from litestar_ncm.cache import CacheBackend, InMemoryCache, cached
from litestar_ncm.client import NcmClient, build_order_payload
from litestar_ncm.config import NcmConfig
from litestar_ncm.enums import (
    TERMINAL_ORDER_STATUSES,
    OrderStatus,
    PaymentMethod,
    ShipmentStatus,
)
from litestar_ncm.exceptions import (
    ConfigurationError,
    ConflictError,
    OrderNotFoundError,
    ShipmentNotFoundError,
    UpstreamError,
    ValidationError,
)
from litestar_ncm.mapping import DROP_OFF_CREATED, resolve_status
from litestar_ncm.payloads import (
    LOCATION_FIELDS,
    OCCURRED_AT_FIELDS,
    first_present,
    tracking_id_of,
)
from litestar_ncm.phone import (
    clean_phone_for_carrier,
    format_phone_with_country_code,
)
from litestar_ncm.protocols import ActivityLog, OrderStore, ShipmentRepository
from litestar_ncm.types import OrderInfo

logger = logging.getLogger(__name__)

PACKAGE_DESCRIPTION_LIMIT = 50
BRANCH_LIST_CACHE_KEY = "ncm:branchlist"


@dataclass
class CreatedShipment:
    shipment_id: str
    tracking_id: str
    system_status: ShipmentStatus
    shipping_charge: float
    ncm_response: Any


@dataclass
class ShipmentDetail:
    """A shipment together with its events, newest first."""

    shipment: Any
    events: list[Any] = field(default_factory=list)


@dataclass
class TrackingResult:
    shipment: Any
    events: list[Any]
    ncm_status: Any = None
    cached: bool = False


@dataclass
class WebhookResult:
    tracking_id: str
    system_status: ShipmentStatus | None = None
    order_status: OrderStatus | None = None
    order_status_changed: bool = False
    ignored: bool = False


def _now_iso() -> str:
    return datetime.now(tz=UTC).isoformat()


def _field(payload: Any, *fields: str) -> Any:
    if not isinstance(payload, Mapping):
        return None
    return first_present(payload, *fields)


def package_description(order: OrderInfo) -> str:
    """Summarize line items as ``"<product> x<qty>, ..."``."""
    text = ", ".join(
        f"{item.product_name} x{item.quantity}" for item in order.items
    )
    return text[:PACKAGE_DESCRIPTION_LIMIT]


def cod_amount(order: OrderInfo) -> float:
    """Amount NCM must collect from the recipient.

    Partial payments are not subtracted; a COD order collects its total.
    """
    if order.payment_method == PaymentMethod.CASH_ON_DELIVERY:
        return order.total_amount or 0
    return 0


class ShipmentFlow:
    """Orchestrates NCM shipment creation and status reconciliation."""

    def __init__(
        self,
        *,
        client: NcmClient,
        repository: ShipmentRepository,
        order_store: OrderStore,
        config: NcmConfig,
        activity_log: ActivityLog | None = None,
        cache: CacheBackend | None = None,
    ) -> None:
        self.client = client
        self.repository = repository
        self.order_store = order_store
        self.config = config
        self.activity_log = activity_log
        self.cache = cache if cache is not None else InMemoryCache()

    # -- carrier reference data -------------------------------------------

    def _require_api_key(self) -> None:
        if not self.config.api_key:
            raise ConfigurationError("NCM API key not configured")

    async def branch_list(self) -> Any:
        """Branch list, cached for ``branch_cache_ttl`` seconds."""
        self._require_api_key()
        return await cached(
            self.cache,
            BRANCH_LIST_CACHE_KEY,
            self.config.branch_cache_ttl,
            self.client.branch_list,
        )

    async def shipping_rate(self, destination: str | None) -> Any:
        """Rate quote from the origin branch, cached per destination."""
        if not destination or not isinstance(destination, str):
            raise ValidationError("destination parameter is required")
        self._require_api_key()
        destination = destination.upper()
        return await cached(
            self.cache,
            f"ncm:rate:{destination}",
            self.config.rate_cache_ttl,
            lambda: self._quote(destination),
        )

    async def _quote(self, destination: str) -> Any:
        return await self.client.shipping_rate(
            creation=self.config.origin_branch,
            destination=destination,
            type=self.config.service_type,
        )

    # -- creation ----------------------------------------------------------

    async def create_shipment(
        self, order_id: str | None, destination_city: str | None
    ) -> CreatedShipment:
        """Register an order with NCM and persist its shipment."""
        if not order_id or not isinstance(order_id, str):
            raise ValidationError("orderId is required")
        if not destination_city or not isinstance(destination_city, str):
            raise ValidationError("destinationCity is required")

        order = await self.order_store.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        if await self.repository.get_by_order_id(order_id) is not None:
            raise ConflictError("Shipment already exists for this order")

        destination = destination_city.upper()
        origin = self.config.origin_branch
        rate = await self._quote(destination)

        cod = cod_amount(order)
        package = package_description(order)
        customer = order.customer
        payload = build_order_payload(
            name=customer.name,
            phone=clean_phone_for_carrier(customer.phone),
            phone2=clean_phone_for_carrier(customer.secondary_phone),
            address=customer.delivery_address,
            cod_charge=cod,
            fbranch=origin,
            branch=destination,
            package=package,
        )
        response = await self.client.create_order(payload)

        tracking_id = tracking_id_of(
            response if isinstance(response, Mapping) else None
        )
        if tracking_id is None:
            tracking_id = f"NCM_{uuid.uuid4()}"
            logger.warning(
                "NCM response for order %s had no tracking id, using %s",
                order_id,
                tracking_id,
            )
        carrier_status = _field(response, "status") or DROP_OFF_CREATED
        system_status = resolve_status(carrier_status).shipment_status
        shipping_charge = (
            _field(rate, "charge") or order.delivery_charge or 0
        )
        ncm_order_id = _field(response, "order_id")

        shipment = await self.repository.create(
            order_id=order.id,
            partner=self.config.partner_name,
            ncm_order_id=None if ncm_order_id is None else str(ncm_order_id),
            tracking_id=tracking_id,
            system_status=str(system_status),
            shipping_charge=shipping_charge,
            cod_amount=cod,
            recipient_name=customer.name,
            recipient_phone=format_phone_with_country_code(customer.phone),
            recipient_address=customer.delivery_address,
            destination_city=destination,
            origin_city=origin,
            package_description=package,
            ncm_response=response,
        )
        logger.info(
            "Created NCM shipment %s for order %s (%s)",
            tracking_id,
            order.id,
            system_status,
        )

        if order.status == OrderStatus.PENDING:
            await self.order_store.update_status(
                order.id, str(OrderStatus.CONFIRMED)
            )

        await record_activity(
            self.activity_log,
            action="created",
            entity_type="shipment",
            entity_id=str(shipment.id),
            entity_name=f"NCM Shipment {tracking_id}",
            details={
                "orderId": order.id,
                "orderNumber": order.order_number,
                "trackingId": tracking_id,
                "destinationCity": destination_city,
                "codAmount": cod,
            },
        )

        return CreatedShipment(
            shipment_id=str(shipment.id),
            tracking_id=tracking_id,
            system_status=system_status,
            shipping_charge=shipping_charge,
            ncm_response=response,
        )

    # -- pull --------------------------------------------------------------

    async def _get_shipment(self, tracking_id: str) -> Any:
        try:
            return await self.repository.get_by_tracking_id(tracking_id)
        except KeyError as exc:
            raise ShipmentNotFoundError(tracking_id) from exc

    async def refresh_status(self, tracking_id: str | None) -> TrackingResult:
        """Poll NCM for a shipment and record any status change.

        When NCM cannot be reached the stored shipment is returned with
        ``cached=True`` and nothing is written.
        """
        if not tracking_id or not isinstance(tracking_id, str):
            raise ValidationError("trackingId parameter is required")

        shipment = await self._get_shipment(tracking_id)

        try:
            ncm_status = await self.client.order_status(tracking_id)
        except UpstreamError as exc:
            logger.error(
                "Error fetching NCM status for %s, serving stored data: %s",
                tracking_id,
                exc,
            )
            events = await self.repository.list_events(str(shipment.id))
            return TrackingResult(shipment=shipment, events=events, cached=True)

        partner_status = str(_field(ncm_status, "status") or "")
        vendor_return = _field(ncm_status, "vendor_return") or ""
        rule = resolve_status(partner_status, vendor_return)

        if rule.shipment_status != shipment.system_status:
            await self.repository.update_status(
                str(shipment.id), str(rule.shipment_status)
            )
            await self.repository.add_event(
                str(shipment.id),
                partner_status=partner_status,
                vendor_return=str(vendor_return),
                system_status=str(rule.shipment_status),
                occurred_at=_field(ncm_status, "updated_at") or _now_iso(),
                location=_field(ncm_status, *LOCATION_FIELDS),
                raw=ncm_status,
            )
            if await self._may_update_order(shipment.order_id):
                await self.order_store.update_status(
                    shipment.order_id, str(rule.order_status)
                )
            logger.info(
                "Shipment %s moved %s -> %s",
                tracking_id,
                shipment.system_status,
                rule.shipment_status,
            )
            shipment = await self._get_shipment(tracking_id)

        events = await self.repository.list_events(str(shipment.id))
        return TrackingResult(
            shipment=shipment, events=events, ncm_status=ncm_status
        )

    async def _may_update_order(self, order_id: str) -> bool:
        if not self.config.protect_terminal_orders:
            return True
        order = await self.order_store.get_order(order_id)
        return order is None or order.status not in TERMINAL_ORDER_STATUSES

    # -- push --------------------------------------------------------------

    async def handle_webhook(self, payload: Mapping[str, Any]) -> WebhookResult:
        """Apply a status update pushed by NCM.

        Every delivery appends an event, duplicates included. Tracking IDs
        that are not ours are acknowledged and ignored.
        """
        tracking_id = tracking_id_of(payload)
        if tracking_id is None:
            raise ValidationError("tracking_id is required")

        partner_status = str(first_present(payload, "status") or "")
        vendor_return = first_present(payload, "vendor_return") or ""
        occurred_at = first_present(payload, *OCCURRED_AT_FIELDS) or _now_iso()
        location = first_present(payload, *LOCATION_FIELDS) or ""

        try:
            shipment = await self.repository.get_by_tracking_id(tracking_id)
        except KeyError:
            logger.warning(
                "Webhook received for unknown tracking ID: %s", tracking_id
            )
            return WebhookResult(tracking_id=tracking_id, ignored=True)

        rule = resolve_status(partner_status, vendor_return)
        system_status = rule.shipment_status
        order_status = rule.order_status

        await self.repository.add_event(
            str(shipment.id),
            partner_status=partner_status,
            vendor_return=str(vendor_return),
            system_status=str(system_status),
            occurred_at=occurred_at,
            location=location,
            raw=dict(payload),
        )
        await self.repository.update_status(str(shipment.id), str(system_status))

        order = await self.order_store.get_order(shipment.order_id)
        previous_status = order.status if order is not None else None
        order_number = order.order_number if order is not None else None
        changed = order is not None and previous_status != order_status
        if (
            changed
            and self.config.protect_terminal_orders
            and previous_status in TERMINAL_ORDER_STATUSES
        ):
            logger.info(
                "Order %s is %s, ignoring NCM status %r",
                shipment.order_id,
                previous_status,
                partner_status,
            )
            changed = False
        if order is None:
            logger.warning(
                "Shipment %s references missing order %s",
                tracking_id,
                shipment.order_id,
            )

        if changed:
            await self.order_store.update_status(
                shipment.order_id, str(order_status)
            )
            await record_activity(
                self.activity_log,
                action="updated",
                entity_type="order",
                entity_id=shipment.order_id,
                entity_name=order_number,
                details={
                    "field": "status",
                    "oldValue": previous_status,
                    "newValue": str(order_status),
                    "reason": "NCM delivery status update",
                    "ncmStatus": partner_status,
                    "trackingId": tracking_id,
                },
            )

        await record_activity(
            self.activity_log,
            action="updated",
            entity_type="shipment",
            entity_id=str(shipment.id),
            entity_name=f"NCM Shipment {tracking_id}",
            details={
                "orderId": shipment.order_id,
                "orderNumber": order_number,
                "partnerStatus": partner_status,
                "systemStatus": str(system_status),
                "location": location,
                "orderStatusChanged": changed,
            },
        )

        return WebhookResult(
            tracking_id=tracking_id,
            system_status=system_status,
            order_status=order_status,
            order_status_changed=changed,
        )

    # -- lookups -----------------------------------------------------------

    async def get_order_shipment(self, order_id: str) -> ShipmentDetail | None:
        """Shipment of an order with its full event history, if any."""
        if not order_id:
            raise ValidationError("Order ID is required")
        shipment = await self.repository.get_by_order_id(order_id)
        if shipment is None:
            return None
        events = await self.repository.list_events(str(shipment.id))
        return ShipmentDetail(shipment=shipment, events=events)

    async def list_shipments(self, limit: int | None = None) -> list[Any]:
        """Most recently created shipments first."""
        return await self.repository.list_recent(
            limit or self.config.shipments_list_limit
        )
