"""Translation of NCM status strings into internal shipment/order states.

The carrier reports progress as free text ("Dispatched to Kathmandu Hub",
"Delivered", ...) plus a ``vendor_return`` flag that marks return-to-origin
traffic. Both mappers walk the same ordered rule table, so the first rule
that matches decides the shipment status and the order status together.
Unknown strings fall through to the in-transit defaults.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import NamedTuple

from litestar_ncm.enums import OrderStatus, ShipmentStatus

__all__ = [
    "STATUS_RULES",
    "StatusRule",
    "is_return_to_origin",
    "map_carrier_status",
    "map_carrier_status_to_order_status",
    "resolve_status",
]

# Raw NCM vocabulary
DROP_OFF_CREATED = "Drop off Order Created"
DROP_OFF_COLLECTED = "Drop off Order Collected"
DISPATCHED_PREFIX = "Dispatched to"
ARRIVED_PREFIX = "Arrived at"
SENT_FOR_DELIVERY = "Sent for Delivery"
DELIVERED = "Delivered"
DELIVERY_FAILED = "Delivery Failed"
RETURNED_TO_SENDER = "Returned to Sender"


class StatusRule(NamedTuple):
    """A single row of the mapping table."""

    matches: Callable[[str, bool], bool]
    shipment_status: ShipmentStatus
    order_status: OrderStatus


def _rto(predicate: Callable[[str], bool]) -> Callable[[str, bool], bool]:
    return lambda status, rto: rto and predicate(status)


def _forward(predicate: Callable[[str], bool]) -> Callable[[str, bool], bool]:
    return lambda status, rto: not rto and predicate(status)


def _equals(value: str) -> Callable[[str], bool]:
    return lambda status: status == value


def _starts_with(prefix: str) -> Callable[[str], bool]:
    return lambda status: status.startswith(prefix)


def _any(status: str) -> bool:
    return True


STATUS_RULES: tuple[StatusRule, ...] = (
    # Return-to-origin traffic
    StatusRule(
        _rto(_starts_with(DISPATCHED_PREFIX)),
        ShipmentStatus.RTO_IN_TRANSIT,
        OrderStatus.PROCESSING,
    ),
    StatusRule(
        _rto(_starts_with(ARRIVED_PREFIX)),
        ShipmentStatus.RTO_IN_TRANSIT,
        OrderStatus.PROCESSING,
    ),
    StatusRule(
        _rto(_equals(RETURNED_TO_SENDER)),
        ShipmentStatus.RETURNED_TO_SENDER,
        OrderStatus.CANCELLED,
    ),
    StatusRule(
        _rto(_any),
        ShipmentStatus.RTO_IN_TRANSIT,
        OrderStatus.PROCESSING,
    ),
    # Forward delivery
    StatusRule(
        _forward(_equals(DROP_OFF_CREATED)),
        ShipmentStatus.ORDER_CREATED,
        OrderStatus.CONFIRMED,
    ),
    StatusRule(
        _forward(_equals(DROP_OFF_COLLECTED)),
        ShipmentStatus.PICKED_UP,
        OrderStatus.PROCESSING,
    ),
    StatusRule(
        _forward(_starts_with(DISPATCHED_PREFIX)),
        ShipmentStatus.IN_TRANSIT,
        OrderStatus.PROCESSING,
    ),
    StatusRule(
        _forward(_starts_with(ARRIVED_PREFIX)),
        ShipmentStatus.ARRIVED_AT_DESTINATION_HUB,
        OrderStatus.PROCESSING,
    ),
    StatusRule(
        _forward(_equals(SENT_FOR_DELIVERY)),
        ShipmentStatus.OUT_FOR_DELIVERY,
        OrderStatus.PROCESSING,
    ),
    StatusRule(
        _forward(_equals(DELIVERED)),
        ShipmentStatus.DELIVERED,
        OrderStatus.COMPLETED,
    ),
    StatusRule(
        _forward(_equals(DELIVERY_FAILED)),
        ShipmentStatus.DELIVERY_FAILED,
        OrderStatus.DELIVERY_FAILED,
    ),
)

# Unknown vocabulary must never look like a terminal state.
FALLBACK = StatusRule(_any, ShipmentStatus.IN_TRANSIT, OrderStatus.PROCESSING)


def is_return_to_origin(value: object) -> bool:
    """Interpret the carrier's ``vendor_return`` flag.

    NCM sends ``"True"``/``"False"`` strings, other payloads carry real
    booleans. Anything else counts as forward traffic.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def resolve_status(
    raw_status: object, vendor_return: object = False
) -> StatusRule:
    """Return the first rule matching the carrier status."""
    if isinstance(raw_status, str):
        status = raw_status
    else:
        status = "" if raw_status is None else str(raw_status)
    rto = is_return_to_origin(vendor_return)
    for rule in STATUS_RULES:
        if rule.matches(status, rto):
            return rule
    return FALLBACK


def map_carrier_status(
    raw_status: object, vendor_return: object = False
) -> ShipmentStatus:
    """Map an NCM status string to a :class:`ShipmentStatus`."""
    return resolve_status(raw_status, vendor_return).shipment_status


def map_carrier_status_to_order_status(
    raw_status: object, vendor_return: object = False
) -> OrderStatus:
    """Map an NCM status string to the :class:`OrderStatus` it implies."""
    return resolve_status(raw_status, vendor_return).order_status
