"""Order-scoped shipment lookup."""

from __future__ import annotations

from typing import Annotated, ClassVar

from litestar import Controller, get
from litestar.params import Dependency

from litestar_ncm.flow import ShipmentFlow
from litestar_ncm.schemas import OrderShipmentResponse, ShipmentResponse


class OrderShipmentController(Controller):
    path = "/orders"
    tags: ClassVar[list[str]] = ["shipments"]

    @get("/{order_id:str}/shipment")
    async def order_shipment(
        self,
        order_id: str,
        flow: Annotated[ShipmentFlow, Dependency(skip_validation=True)],
    ) -> OrderShipmentResponse:
        """Shipment of an order with its events, or ``shipment: null``."""
        detail = await flow.get_order_shipment(order_id)
        if detail is None:
            return OrderShipmentResponse(shipment=None)
        return OrderShipmentResponse(
            shipment=ShipmentResponse.from_shipment(
                detail.shipment, detail.events
            )
        )
