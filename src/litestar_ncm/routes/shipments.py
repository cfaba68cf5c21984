"""Shipment endpoints."""

from __future__ import annotations

from typing import Annotated, ClassVar

from litestar import Controller, get, post
from litestar.params import Dependency, Parameter

from litestar_ncm.flow import ShipmentFlow
from litestar_ncm.schemas import (
    CreatedShipmentResponse,
    CreateShipmentRequest,
    ShipmentResponse,
    TrackingResponse,
)


class ShipmentController(Controller):
    """Create, list and track NCM shipments."""

    path = "/ncm"
    tags: ClassVar[list[str]] = ["shipments"]

    @post("/create")
    async def create_shipment(
        self,
        data: CreateShipmentRequest,
        flow: Annotated[ShipmentFlow, Dependency(skip_validation=True)],
    ) -> CreatedShipmentResponse:
        """Place an NCM delivery order for an existing order."""
        result = await flow.create_shipment(
            data.order_id, data.destination_city
        )
        return CreatedShipmentResponse.from_result(result)

    @get("/shipments")
    async def list_shipments(
        self,
        flow: Annotated[ShipmentFlow, Dependency(skip_validation=True)],
    ) -> list[ShipmentResponse]:
        """Most recent shipments first."""
        shipments = await flow.list_shipments()
        return [ShipmentResponse.from_shipment(s) for s in shipments]

    @get("/track")
    async def track(
        self,
        flow: Annotated[ShipmentFlow, Dependency(skip_validation=True)],
        tracking_id: Annotated[
            str | None, Parameter(query="trackingId")
        ] = None,
    ) -> TrackingResponse:
        """Refresh a shipment from NCM and return it with its history."""
        result = await flow.refresh_status(tracking_id)
        return TrackingResponse.from_result(result)
