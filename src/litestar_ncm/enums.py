"""Closed status vocabularies used by the reconciliation flow."""

from enum import StrEnum


class ShipmentStatus(StrEnum):
    """Internal shipment states derived from the carrier vocabulary."""

    ORDER_CREATED = "ORDER_CREATED"
    PICKED_UP = "PICKED_UP"
    IN_TRANSIT = "IN_TRANSIT"
    ARRIVED_AT_DESTINATION_HUB = "ARRIVED_AT_DESTINATION_HUB"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    DELIVERED = "DELIVERED"
    DELIVERY_FAILED = "DELIVERY_FAILED"
    RTO_IN_TRANSIT = "RTO_IN_TRANSIT"
    RETURNED_TO_SENDER = "RETURNED_TO_SENDER"


class OrderStatus(StrEnum):
    """Order lifecycle states; shipments drive a subset of them."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    DELIVERY_FAILED = "delivery_failed"


class PaymentMethod(StrEnum):
    BANK = "bank"
    CASH = "cash"
    CASH_ON_DELIVERY = "cash_on_delivery"


TERMINAL_ORDER_STATUSES = frozenset(
    {OrderStatus.COMPLETED, OrderStatus.CANCELLED}
)
