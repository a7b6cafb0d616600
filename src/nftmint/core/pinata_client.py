"""Pinata IPFS pinning client.

Two calls are exposed, matching the two Pinata endpoints the service uses:

- :meth:`PinataClient.pin_file` — ``POST /pinning/pinFileToIPFS`` with the
  raw bytes as multipart field ``file``.
- :meth:`PinataClient.pin_json` — ``POST /pinning/pinJSONToIPFS`` with a
  JSON document as the body.

Both authenticate with the ``pinata_api_key`` / ``pinata_secret_api_key``
header pair and return the ``IpfsHash`` (CID) from the response.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from nftmint.core.config import NftMintConfig
from nftmint.core.errors import ConfigurationError, ProviderError
from nftmint.core.stability_client import response_details

logger = logging.getLogger(__name__)

PIN_FILE_PATH = "/pinning/pinFileToIPFS"
PIN_JSON_PATH = "/pinning/pinJSONToIPFS"


class PinataClient:
    """Async client for the Pinata pinning API.

    Args:
        config: Service configuration (base URL and key pair).
        http_client: Shared ``httpx.AsyncClient`` owned by the application.
    """

    def __init__(self, config: NftMintConfig, http_client: httpx.AsyncClient):
        self.base_url = config.pinata_base_url.rstrip("/")
        self._config = config
        self._api_key = config.pinata_api_key
        self._secret_api_key = config.pinata_secret_api_key
        self._http = http_client

    def ensure_credentials(self) -> None:
        """Raise :class:`ConfigurationError` unless both keys are configured."""
        if not self._config.has_pinata_credentials:
            raise ConfigurationError("Pinata API credentials are not set in environment variables.")

    def _auth_headers(self) -> dict[str, str]:
        self.ensure_credentials()
        return {
            "pinata_api_key": self._api_key,
            "pinata_secret_api_key": self._secret_api_key,
        }

    async def pin_file(self, content: bytes, filename: str) -> str:
        """Pin raw file bytes and return their CID."""
        files = {"file": (filename, content)}
        return await self._post(PIN_FILE_PATH, files=files)

    async def pin_json(self, document: dict[str, Any]) -> str:
        """Pin a JSON document and return its CID."""
        return await self._post(PIN_JSON_PATH, json=document)

    async def _post(self, path: str, **kwargs: Any) -> str:
        headers = self._auth_headers()
        url = f"{self.base_url}{path}"

        try:
            response = await self._http.post(url, headers=headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            details = response_details(e.response)
            logger.error(f"Pinata error on {path} ({e.response.status_code}): {details}")
            raise ProviderError(
                f"Pinata request to {path} failed with status {e.response.status_code}",
                details=details,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Pinata transport error on {path}: {e}")
            raise ProviderError(f"Pinata request to {path} failed: {e}", details=str(e)) from e

        try:
            data = response.json()
        except ValueError:
            data = None

        cid = data.get("IpfsHash") if isinstance(data, dict) else None
        if not cid:
            raise ProviderError(f"Pinata response from {path} did not include an IpfsHash")
        return cid
