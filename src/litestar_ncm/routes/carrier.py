"""NCM reference data endpoints."""

from __future__ import annotations

from typing import Annotated, ClassVar

from litestar import Controller, get
from litestar.params import Dependency

from litestar_ncm.config import NcmConfig
from litestar_ncm.flow import ShipmentFlow
from litestar_ncm.schemas import CarrierDataResponse, NcmConfigResponse


class CarrierController(Controller):
    """Cached branch list and rate quotes."""

    path = "/ncm"
    tags: ClassVar[list[str]] = ["ncm"]

    @get("/cities")
    async def cities(
        self,
        flow: Annotated[ShipmentFlow, Dependency(skip_validation=True)],
    ) -> CarrierDataResponse:
        """List NCM branch/city locations."""
        return CarrierDataResponse(data=await flow.branch_list())

    @get("/shipping-cost")
    async def shipping_cost(
        self,
        flow: Annotated[ShipmentFlow, Dependency(skip_validation=True)],
        destination: str | None = None,
    ) -> CarrierDataResponse:
        """Quote delivery from the origin branch to ``destination``."""
        return CarrierDataResponse(data=await flow.shipping_rate(destination))

    @get("/config")
    async def ncm_config(
        self,
        config: Annotated[NcmConfig, Dependency(skip_validation=True)],
    ) -> NcmConfigResponse:
        """Show which NCM settings are active, with the key masked."""
        return NcmConfigResponse(
            api_key_set=bool(config.api_key),
            api_key_masked=config.masked_api_key,
            api_url=config.api_url,
            origin_branch=config.origin_branch,
        )
