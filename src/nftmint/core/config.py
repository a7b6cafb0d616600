"""Configuration management for the NFT Mint service.

This module provides centralized configuration management using Pydantic Settings.
Values are loaded from environment variables (optionally through a ``.env``
file) and collected into a single immutable :class:`NftMintConfig` instance
that is handed to the application factory at startup.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Keyword arguments passed to ``NftMintConfig(...)``
2. Environment variables
3. .env file in the working directory
4. Default values defined in NftMintConfig

Provider credentials keep their conventional unprefixed names so that an
existing ``.env`` keeps working; every other setting uses the ``NFTMINT_``
prefix.

Example .env file:
    AI_API_KEY=sk-...
    PINATA_API_KEY=...
    PINATA_SECRET_API_KEY=...
    NFTMINT_SERVER_PORT=8000

Usage Example
-------------
    from nftmint.core.config import config

    print(config.stability_url)
    print(config.has_pinata_credentials)

Credentials
-----------
None of the credentials is required at startup.  A missing generation key is
reported by the provider itself (401) and surfaces as a failed ``/generate``
call; missing storage credentials fail ``/makeNFT`` before any upload.
"""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Package-relative asset directories (``src/nftmint/static`` etc.).
_PACKAGE_DIR = Path(__file__).resolve().parent.parent


class NftMintConfig(BaseSettings):
    """Main configuration for the NFT Mint service.

    Attributes
    ----------
    Provider credentials:
        ai_api_key : str | None
            Stability AI API key (``AI_API_KEY``)
        pinata_api_key : str | None
            Pinata public API key (``PINATA_API_KEY``)
        pinata_secret_api_key : str | None
            Pinata secret API key (``PINATA_SECRET_API_KEY``)

    Provider endpoints:
        stability_url : str
            Full URL of the image-generation endpoint
        pinata_base_url : str
            Base URL of the Pinata pinning API
        gateway_url : str
            Public IPFS gateway prefix used by the page to build links

    Transport:
        request_timeout : float | None
            Timeout in seconds for outbound calls; ``None`` waits forever
        max_body_bytes : int
            Largest accepted request body (inline base64 images)

    Server:
        server_host : str
            Bind address
        server_port : int
            Port (1024-65535)
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
            Root log level used by the CLI entry point
        static_dir : Path
            Directory served under ``/static``
        templates_dir : Path
            Directory holding ``index.html``
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="NFTMINT_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Provider credentials
    ai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ai_api_key", "nftmint_ai_api_key"),
        description="Stability AI API key",
    )
    pinata_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("pinata_api_key", "nftmint_pinata_api_key"),
        description="Pinata public API key",
    )
    pinata_secret_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("pinata_secret_api_key", "nftmint_pinata_secret_api_key"),
        description="Pinata secret API key",
    )

    # Provider endpoints
    stability_url: str = Field(
        default="https://api.stability.ai/v2beta/stable-image/generate/core",
        description="Stability AI image generation endpoint",
    )
    pinata_base_url: str = Field(
        default="https://api.pinata.cloud",
        description="Pinata pinning API base URL",
    )
    gateway_url: str = Field(
        default="https://gateway.pinata.cloud/ipfs",
        description="Public IPFS gateway used for display links",
    )

    # Transport
    request_timeout: float | None = Field(
        default=None,
        description="Outbound request timeout in seconds (None = no timeout)",
    )
    max_body_bytes: int = Field(
        default=50 * 1024 * 1024,
        description="Maximum accepted request body size in bytes",
        ge=1,
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address",
    )
    server_port: int = Field(
        default=8000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level for the CLI entry point",
    )

    # Paths
    static_dir: Path = Field(
        default=_PACKAGE_DIR / "static",
        description="Directory served under /static",
    )
    templates_dir: Path = Field(
        default=_PACKAGE_DIR / "templates",
        description="Directory containing index.html",
    )

    @property
    def has_pinata_credentials(self) -> bool:
        """Return ``True`` when both Pinata keys are set and non-empty."""
        return bool(self.pinata_api_key) and bool(self.pinata_secret_api_key)


# Global configuration instance
# Created at import time from the process environment; the application
# factory receives it explicitly and never reads the environment again.
config = NftMintConfig()
