"""HTTP client for the Nepal Can Move (NCM) API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from litestar_ncm.exceptions import UpstreamError

logger = logging.getLogger(__name__)


def build_order_payload(
    *,
    name: str,
    phone: str,
    phone2: str,
    address: str,
    cod_charge: float,
    fbranch: str,
    branch: str,
    package: str,
) -> dict[str, Any]:
    """Build the ``/order/create`` request body.

    Field names are fixed by the NCM API; ``cod_charge`` must be an integer.
    """
    return {
        "name": name,
        "phone": phone,
        "phone2": phone2,
        "address": address,
        "cod_charge": round(cod_charge),
        "fbranch": fbranch,
        "branch": branch,
        "package": package,
    }


class NcmClient:
    """Thin request layer over the NCM REST API.

    Every call returns the decoded JSON body untouched. Transport errors
    and non-2xx responses are raised as :class:`UpstreamError`.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        *,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = api_url.rstrip("/")
        self.headers = {"Authorization": f"Token {api_key}"}
        self._owns_client = client is None
        if client is None:
            client = (
                httpx.AsyncClient()
                if timeout is None
                else httpx.AsyncClient(timeout=timeout)
            )
        self._client = client

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> NcmClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = await self._client.request(
                method, url, headers=self.headers, params=params, json=json
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "NCM %s %s failed with status %s",
                method,
                path,
                exc.response.status_code,
            )
            raise UpstreamError(
                f"NCM API returned {exc.response.status_code} for {path}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("NCM %s %s failed: %s", method, path, exc)
            raise UpstreamError(f"NCM API request to {path} failed") from exc
        except ValueError as exc:
            logger.error("NCM %s %s returned invalid JSON", method, path)
            raise UpstreamError(
                f"NCM API returned invalid JSON for {path}"
            ) from exc

    async def branch_list(self) -> Any:
        """List NCM branch/city locations."""
        return await self._request("GET", "/branchlist")

    async def shipping_rate(
        self, *, creation: str, destination: str, type: str
    ) -> Any:
        """Quote the delivery charge between two branches."""
        return await self._request(
            "GET",
            "/shipping-rate",
            params={
                "creation": creation,
                "destination": destination,
                "type": type,
            },
        )

    async def create_order(self, payload: dict[str, Any]) -> Any:
        """Create a delivery order with NCM."""
        return await self._request("POST", "/order/create", json=payload)

    async def order_status(self, tracking_id: str) -> Any:
        """Fetch the current status of an NCM order."""
        return await self._request(
            "GET", "/order/status", params={"id": tracking_id}
        )
