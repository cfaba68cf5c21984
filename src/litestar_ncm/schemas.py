"""Request/response schemas for HTTP endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CreateShipmentRequest(BaseModel):
    """Payload for shipment creation.

    Accepts ``orderId``/``destinationCity`` as well as snake_case keys.
    Presence is checked by the flow so that a missing field is reported
    with the same message as an empty one.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    order_id: str | None = None
    destination_city: str | None = None


class ShipmentEventResponse(BaseModel):
    """One entry of a shipment's tracking history."""

    id: str
    partner_status: str
    vendor_return: str | None
    system_status: str
    occurred_at: str | None
    location: str | None
    raw: Any = None
    created_at: datetime | None = None

    @classmethod
    def from_event(cls, event):
        return cls(
            id=str(event.id),
            partner_status=str(event.partner_status),
            vendor_return=event.vendor_return,
            system_status=str(event.system_status),
            occurred_at=event.occurred_at,
            location=event.location,
            raw=event.raw,
            created_at=event.created_at,
        )


class ShipmentResponse(BaseModel):
    """Serialized shipment, optionally with its events."""

    id: str
    order_id: str
    partner: str
    ncm_order_id: str | None
    tracking_id: str
    system_status: str
    shipping_charge: float
    cod_amount: float
    recipient_name: str
    recipient_phone: str
    recipient_address: str
    destination_city: str
    origin_city: str
    package_description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    events: list[ShipmentEventResponse] = []

    @classmethod
    def from_shipment(cls, shipment, events=None):
        return cls(
            id=str(shipment.id),
            order_id=str(shipment.order_id),
            partner=str(shipment.partner),
            ncm_order_id=shipment.ncm_order_id,
            tracking_id=str(shipment.tracking_id),
            system_status=str(shipment.system_status),
            shipping_charge=float(shipment.shipping_charge or 0),
            cod_amount=float(shipment.cod_amount or 0),
            recipient_name=str(shipment.recipient_name),
            recipient_phone=str(shipment.recipient_phone),
            recipient_address=str(shipment.recipient_address),
            destination_city=str(shipment.destination_city),
            origin_city=str(shipment.origin_city),
            package_description=shipment.package_description,
            created_at=shipment.created_at,
            updated_at=shipment.updated_at,
            events=[ShipmentEventResponse.from_event(e) for e in events or []],
        )


class CreatedShipmentResponse(BaseModel):
    """Summary returned after an NCM order is placed."""

    shipment_id: str
    tracking_id: str
    system_status: str
    shipping_charge: float
    ncm_response: Any = None

    @classmethod
    def from_result(cls, result):
        return cls(
            shipment_id=result.shipment_id,
            tracking_id=result.tracking_id,
            system_status=str(result.system_status),
            shipping_charge=float(result.shipping_charge or 0),
            ncm_response=result.ncm_response,
        )


class TrackingResponse(BaseModel):
    """Refreshed shipment; ``cached`` is set when NCM was unreachable."""

    shipment: ShipmentResponse
    ncm_status: Any = None
    cached: bool = False

    @classmethod
    def from_result(cls, result):
        return cls(
            shipment=ShipmentResponse.from_shipment(
                result.shipment, result.events
            ),
            ncm_status=result.ncm_status,
            cached=result.cached,
        )


class WebhookResponse(BaseModel):
    """Webhook acknowledgement payload."""

    success: bool = True
    message: str
    tracking_id: str
    system_status: str | None = None
    order_status: str | None = None
    order_status_changed: bool = False

    @classmethod
    def from_result(cls, result):
        if result.ignored:
            return cls(
                message="Tracking ID not found, ignored",
                tracking_id=result.tracking_id,
            )
        return cls(
            message="Webhook processed successfully",
            tracking_id=result.tracking_id,
            system_status=str(result.system_status),
            order_status=str(result.order_status),
            order_status_changed=result.order_status_changed,
        )


class CarrierDataResponse(BaseModel):
    """Pass-through wrapper for NCM reference data."""

    data: Any = None


class OrderShipmentResponse(BaseModel):
    shipment: ShipmentResponse | None = None


class NcmConfigResponse(BaseModel):
    """Non-secret view of the NCM settings."""

    api_key_set: bool
    api_key_masked: str
    api_url: str
    origin_branch: str
