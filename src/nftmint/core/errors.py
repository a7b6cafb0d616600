"""Exception types raised by the provider clients and the publisher.

Route handlers in :mod:`nftmint.api.main` translate these into the JSON
error bodies returned to the page; nothing here is fatal to the process.
"""

from __future__ import annotations

from typing import Any


class NftMintError(Exception):
    """Base class for all service errors."""


class ProviderError(NftMintError):
    """An upstream provider call failed or returned an unusable response.

    Attributes:
        message: Short human-readable summary.
        details: Best available detail: the provider's response body (parsed
            JSON when possible, otherwise text), or the transport error
            message.  ``None`` when the provider answered but the payload was
            unusable.
        status_code: HTTP status returned by the provider, if any.
    """

    def __init__(self, message: str, details: Any = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.status_code = status_code


class ConfigurationError(NftMintError):
    """A credential required for this request is not configured."""


class InvalidImageError(NftMintError, ValueError):
    """The submitted image payload is absent or not valid base64."""
