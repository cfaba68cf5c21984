"""Schema tests."""

from litestar_ncm.enums import OrderStatus, ShipmentStatus
from litestar_ncm.flow import CreatedShipment, TrackingResult, WebhookResult
from litestar_ncm.schemas import (
    CreatedShipmentResponse,
    CreateShipmentRequest,
    ShipmentResponse,
    TrackingResponse,
    WebhookResponse,
)

from conftest import DemoEvent, DemoShipment


def _shipment() -> DemoShipment:
    return DemoShipment(
        id="s-1",
        order_id="ORD-1",
        tracking_id="T-1",
        system_status="IN_TRANSIT",
        shipping_charge=150,
        recipient_name="Sita Sharma",
        recipient_phone="+9779800000000",
        destination_city="POKHARA",
        origin_city="BIRGUNJ",
    )


def test_create_request_accepts_camel_case():
    req = CreateShipmentRequest.model_validate(
        {"orderId": "ORD-1", "destinationCity": "POKHARA"}
    )
    assert req.order_id == "ORD-1"
    assert req.destination_city == "POKHARA"


def test_create_request_fields_are_optional():
    req = CreateShipmentRequest.model_validate({})
    assert req.order_id is None
    assert req.destination_city is None


def test_shipment_response_from_shipment():
    event = DemoEvent(
        id="e-1",
        shipment_id="s-1",
        partner_status="Dispatched to Pokhara",
        system_status="IN_TRANSIT",
        vendor_return="False",
    )
    resp = ShipmentResponse.from_shipment(_shipment(), [event])

    assert resp.id == "s-1"
    assert resp.partner == "NCM"
    assert resp.shipping_charge == 150.0
    assert resp.ncm_order_id is None
    [event_resp] = resp.events
    assert event_resp.partner_status == "Dispatched to Pokhara"
    assert event_resp.vendor_return == "False"


def test_created_shipment_response():
    resp = CreatedShipmentResponse.from_result(
        CreatedShipment(
            shipment_id="s-1",
            tracking_id="T-1",
            system_status=ShipmentStatus.ORDER_CREATED,
            shipping_charge=150,
            ncm_response={"order_id": 1},
        )
    )
    assert resp.system_status == "ORDER_CREATED"


def test_tracking_response_carries_cached_flag():
    resp = TrackingResponse.from_result(
        TrackingResult(shipment=_shipment(), events=[], cached=True)
    )
    assert resp.cached is True
    assert resp.ncm_status is None
    assert resp.shipment.tracking_id == "T-1"


def test_webhook_response_ignored():
    resp = WebhookResponse.from_result(
        WebhookResult(tracking_id="X", ignored=True)
    )
    assert resp.success is True
    assert resp.message == "Tracking ID not found, ignored"
    assert resp.system_status is None


def test_webhook_response_processed():
    resp = WebhookResponse.from_result(
        WebhookResult(
            tracking_id="T-1",
            system_status=ShipmentStatus.DELIVERED,
            order_status=OrderStatus.COMPLETED,
            order_status_changed=True,
        )
    )
    assert resp.message == "Webhook processed successfully"
    assert resp.system_status == "DELIVERED"
    assert resp.order_status == "completed"
    assert resp.order_status_changed is True
