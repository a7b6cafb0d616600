"""NFT publication workflow: image + metadata to IPFS.

The workflow is strictly sequential and has no compensation step:

1. Check that Pinata credentials are configured.
2. Strip an optional ``data:image/<fmt>;base64,`` prefix and decode the image.
3. Pin the image bytes and build an :class:`NFTMetadata` document pointing at
   ``ipfs://<image cid>``.
4. Pin the metadata document.
5. Draw a random token id and build a one-row CSV summary.

A failure at any step aborts the remaining steps.  Content already pinned is
left in place; IPFS content is immutable, so a retry simply re-pins the same
CIDs.
"""

from __future__ import annotations

import base64
import binascii
import logging
import random
import re
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict

from nftmint.core.errors import InvalidImageError
from nftmint.core.pinata_client import PinataClient

logger = logging.getLogger(__name__)

DATA_URL_PREFIX = re.compile(r"^data:image/\w+;base64,")
IMAGE_FILENAME = "nftImage.png"
IPFS_SCHEME = "ipfs://"
TOKEN_ID_MIN = 1
TOKEN_ID_MAX = 1000
CSV_HEADER = "tokenID,name,description,file_name,metadata_CID"


class NFTMetadata(BaseModel):
    """Metadata document pinned alongside the image."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    image: str


@dataclass(frozen=True)
class PublicationResult:
    """Identifiers and summary produced by :meth:`NFTPublisher.publish`."""

    token_id: int
    image_cid: str
    metadata_cid: str
    csv: str

    @property
    def image_uri(self) -> str:
        return f"{IPFS_SCHEME}{self.image_cid}"

    @property
    def metadata_uri(self) -> str:
        return f"{IPFS_SCHEME}{self.metadata_cid}"


def decode_image_base64(image_base64: Any) -> bytes:
    """Decode a base64 image, accepting an optional data-URL prefix.

    Args:
        image_base64: Base64 text, optionally prefixed with
            ``data:image/<fmt>;base64,``.

    Returns:
        The raw image bytes.

    Raises:
        InvalidImageError: If the value is missing, not a string, or not
            valid base64.
    """
    if image_base64 is None or image_base64 == "":
        raise InvalidImageError("imageBase64 is required")
    if not isinstance(image_base64, str):
        raise InvalidImageError(
            f"imageBase64 must be a base64 string, got {type(image_base64).__name__}"
        )

    stripped = DATA_URL_PREFIX.sub("", image_base64, count=1)
    try:
        return base64.b64decode(stripped)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageError(f"imageBase64 is not valid base64: {e}") from e


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def build_csv(token_id: int, name: str, description: str, metadata_cid: str) -> str:
    """Build the header plus single data row of the NFT summary CSV."""
    row = ",".join(
        [
            str(token_id),
            _quote(name),
            _quote(description),
            f"{token_id}.png",
            metadata_cid,
        ]
    )
    return f"{CSV_HEADER}\n{row}"


class NFTPublisher:
    """Pins an image and its metadata document to IPFS.

    Args:
        pinata: Pinata client used for both uploads.
        rng: Random source for token ids.  Tests pass a seeded
            :class:`random.Random`; the default is an unseeded one.
    """

    def __init__(self, pinata: PinataClient, rng: random.Random | None = None):
        self.pinata = pinata
        self.rng = rng or random.Random()

    def next_token_id(self) -> int:
        """Draw a display-only token id; collisions across calls are allowed."""
        return self.rng.randint(TOKEN_ID_MIN, TOKEN_ID_MAX)

    async def publish(self, name: Any, description: Any, image_base64: Any) -> PublicationResult:
        """Run the full publication workflow.

        Raises:
            ConfigurationError: Pinata credentials are missing (no upload is
                attempted).
            InvalidImageError: The image could not be decoded (no upload is
                attempted).
            ProviderError: Either Pinata upload failed.
        """
        self.pinata.ensure_credentials()
        image_bytes = decode_image_base64(image_base64)
        name = _as_text(name)
        description = _as_text(description)

        image_cid = await self.pinata.pin_file(image_bytes, IMAGE_FILENAME)
        logger.info(f"Image CID: {image_cid}")

        metadata = NFTMetadata(
            name=name,
            description=description,
            image=f"{IPFS_SCHEME}{image_cid}",
        )
        metadata_cid = await self.pinata.pin_json(metadata.model_dump())
        logger.info(f"Metadata CID: {metadata_cid}")

        token_id = self.next_token_id()
        csv = build_csv(token_id, name, description, metadata_cid)
        logger.info(f"CSV Output:\n{csv}")

        return PublicationResult(
            token_id=token_id,
            image_cid=image_cid,
            metadata_cid=metadata_cid,
            csv=csv,
        )
