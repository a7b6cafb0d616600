"""Stability AI image-generation client.

Processing flow:
    1. Build a ``multipart/form-data`` body with ``prompt`` and
       ``output_format=png``.
    2. POST it to the configured generation endpoint with a bearer token,
       asking for a JSON response.
    3. Return the base64 ``image`` field of the response.

Error handling:
    Every failure is raised as :class:`~nftmint.core.errors.ProviderError`.
    Non-success responses carry the provider's body as ``details`` (parsed
    JSON when possible); transport failures carry the transport message.
    Nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from nftmint.core.config import NftMintConfig
from nftmint.core.errors import ProviderError

logger = logging.getLogger(__name__)

OUTPUT_FORMAT = "png"


def response_details(response: httpx.Response) -> Any:
    """Return a provider response body as JSON when it parses, else as text."""
    try:
        return response.json()
    except ValueError:
        return response.text


class StabilityClient:
    """Thin async wrapper around the Stability "stable-image" endpoint.

    Args:
        config: Service configuration (endpoint URL and API key).
        http_client: Shared ``httpx.AsyncClient`` owned by the application.
    """

    def __init__(self, config: NftMintConfig, http_client: httpx.AsyncClient):
        self.url = config.stability_url
        self._api_key = config.ai_api_key
        self._http = http_client

    async def generate(self, prompt: str) -> str:
        """Generate one PNG for *prompt* and return it base64-encoded.

        Args:
            prompt: Free-text prompt, forwarded without validation.

        Returns:
            The base64 string from the provider's ``image`` field.

        Raises:
            ProviderError: On transport failure, non-success status, or a
                response without image data.
        """
        # (None, value) tuples make httpx emit plain form fields while still
        # encoding the body as multipart/form-data.
        files = {
            "prompt": (None, prompt),
            "output_format": (None, OUTPUT_FORMAT),
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }

        try:
            response = await self._http.post(self.url, files=files, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            details = response_details(e.response)
            logger.error(f"Stability API error ({e.response.status_code}): {details}")
            raise ProviderError(
                "Error generating image", details=details, status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Stability API transport error: {e}")
            raise ProviderError("Error generating image", details=str(e)) from e

        try:
            data = response.json()
        except ValueError:
            data = None

        image = data.get("image") if isinstance(data, dict) else None
        if not image:
            logger.error("No image received from Stability AI")
            raise ProviderError("No image returned from Stability AI")

        logger.info("Generated image received from Stability AI.")
        return image
