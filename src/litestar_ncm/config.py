"""Litestar adapter configuration."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://portal.nepalcanmove.com/api/v1"


class NcmConfig(BaseSettings):
    """Runtime config for the NCM integration.

    Reads from environment variables with NCM_ prefix.
    """

    model_config = SettingsConfigDict(env_prefix="NCM_")

    api_key: str = ""
    api_url: str = DEFAULT_API_URL
    origin_branch: str = "BIRGUNJ"
    service_type: str = "Pickup/Collect"
    partner_name: str = "NCM"
    timeout: float | None = None

    # Cache lifetimes in seconds
    branch_cache_ttl: int = 7 * 24 * 60 * 60
    rate_cache_ttl: int = 24 * 60 * 60

    shipments_list_limit: int = 50

    # Keep carrier updates from reopening completed or cancelled orders
    protect_terminal_orders: bool = False

    @property
    def masked_api_key(self) -> str:
        if not self.api_key:
            return "Not Configured"
        return f"{self.api_key[:4]}...{self.api_key[-4:]}"
