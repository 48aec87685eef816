"""Application configuration using Pydantic Settings."""

from pydantic import Field, RedisDsn
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageLinkSettings(BaseSettings):
    """Application configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="STORAGELINK_",
    )

    # Store
    redis_url: RedisDsn | None = Field(
        default=None,
        description="Redis connection URL (in-memory store when unset)",
    )
    store_prefix: str = Field(
        default="storagelink",
        description="Key prefix for link and verifier records",
    )

    # Identity
    resolver_address: str = Field(
        default="0x0000000000000000000000000000000000000001",
        description="Address the name registry lists as resolver for linked nodes",
    )
    owner_address: str | None = Field(
        default=None,
        description="Privileged owner allowed to set default verifiers",
    )

    # Name registry
    rpc_url: str | None = Field(
        default=None,
        description="JSON-RPC endpoint for registry ownership reads (optional)",
    )
    ens_registry_address: str = Field(
        default="0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e",
        description="ENS registry contract address",
    )
    name_wrapper_address: str = Field(
        default="0xD4416b13d2b3a9aBae7AcD5D6C2BbDBE25686401",
        description="NameWrapper contract address",
    )

    # Proof gateways
    gateway_urls: list[str] = Field(
        default_factory=list,
        description="Gateways used when a link lists none",
    )
    gateway_timeout: float = Field(
        default=30.0,
        gt=0.0,
        description="Timeout for a single gateway request in seconds",
    )

    # App settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
