"""Core functionality for NFT minting.

This package holds everything that talks to the outside world, independent
of the HTTP layer:

- **NftMintConfig** / **config**: configuration using Pydantic Settings
- **StabilityClient**: text-to-image generation (Stability AI)
- **PinataClient**: IPFS pinning of files and JSON documents (Pinata)
- **NFTPublisher**: the image + metadata publication workflow
- **errors**: exception types translated into HTTP responses by the API

Usage Example
-------------
    import httpx
    from nftmint.core import NFTPublisher, PinataClient, config

    async with httpx.AsyncClient() as http:
        publisher = NFTPublisher(PinataClient(config, http))
        result = await publisher.publish("Fox #1", "A fox.", image_b64)
"""

from .config import NftMintConfig, config
from .errors import ConfigurationError, InvalidImageError, NftMintError, ProviderError
from .pinata_client import PinataClient
from .publisher import NFTMetadata, NFTPublisher, PublicationResult, decode_image_base64
from .stability_client import StabilityClient

__all__ = [
    "NftMintConfig",
    "config",
    "NftMintError",
    "ProviderError",
    "ConfigurationError",
    "InvalidImageError",
    "PinataClient",
    "StabilityClient",
    "NFTMetadata",
    "NFTPublisher",
    "PublicationResult",
    "decode_image_base64",
]
