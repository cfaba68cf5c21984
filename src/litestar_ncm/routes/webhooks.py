"""NCM webhook endpoint."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from litestar import Controller, post
from litestar.params import Dependency

from litestar_ncm.flow import ShipmentFlow
from litestar_ncm.schemas import WebhookResponse

logger = logging.getLogger(__name__)


class WebhookController(Controller):
    """Status updates pushed by NCM."""

    path = "/ncm/webhook"
    tags = ["webhooks"]

    @post("/", status_code=200)
    async def handle_webhook(
        self,
        data: dict[str, Any],
        flow: Annotated[ShipmentFlow, Dependency(skip_validation=True)],
    ) -> WebhookResponse:
        """Apply an NCM status update.

        Unknown tracking IDs are acknowledged so NCM stops redelivering.
        """
        logger.debug("NCM webhook payload: %s", data)
        result = await flow.handle_webhook(data)
        return WebhookResponse.from_result(result)
