"""Pydantic request and response models for the NFT Mint API.

These models define the JSON schema for every API endpoint.  FastAPI uses
them for request parsing, serialisation, and OpenAPI documentation.  Wire
names follow the page's camelCase keys (``imageBase64``, ``ipfsHash`` ...)
through field aliases; Python code uses the snake_case attribute names.

Models
------
GenerateRequest
    Payload for ``POST /generate``.
GenerateResponse
    Success body for ``POST /generate``.
GenerateError
    Failure body for ``POST /generate``.
MakeNFTRequest
    Payload for ``POST /makeNFT``.
MakeNFTResponse
    Success body for ``POST /makeNFT``.
MakeNFTError
    Failure body for ``POST /makeNFT``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GenerateRequest(BaseModel):
    """Request body for the ``POST /generate`` endpoint.

    Attributes:
        prompt: Free-text prompt.  Forwarded to the provider as-is; no length
            or content validation is applied.
    """

    prompt: str = Field(
        default="",
        description="Text prompt forwarded to the image generation provider.",
    )


class GenerateResponse(BaseModel):
    """Success body for ``POST /generate``.

    Attributes:
        images: Base64-encoded PNG images.  The current provider always
            yields exactly one.
    """

    images: list[str] = Field(
        ...,
        description="Base64-encoded PNG images (currently always one).",
    )


class GenerateError(BaseModel):
    """Failure body for ``POST /generate``."""

    error: str
    details: Any = None


class MakeNFTRequest(BaseModel):
    """Request body for the ``POST /makeNFT`` endpoint.

    Fields are optional and untyped: a missing or malformed value is
    reported by the publication workflow as a regular failure body rather
    than a validation error.  Non-string names and descriptions are
    stringified.

    Attributes:
        name: NFT name.
        description: NFT description.
        image_base64: Base64 image, optionally prefixed with
            ``data:image/<fmt>;base64,`` (wire name ``imageBase64``).
    """

    model_config = ConfigDict(populate_by_name=True)

    name: Any = Field(default=None, description="NFT name.")
    description: Any = Field(default=None, description="NFT description.")
    image_base64: Any = Field(
        default=None,
        alias="imageBase64",
        description="Base64 image, optionally with a data-URL prefix.",
    )


class MakeNFTResponse(BaseModel):
    """Success body for ``POST /makeNFT``.

    Attributes:
        success: Always ``True``.
        ipfs_hash: Metadata CID (wire name ``ipfsHash``).
        image_cid: ``ipfs://`` URI of the image (wire name ``imageCid``).
        metadata_url: ``ipfs://`` URI of the metadata (wire name
            ``metadataUrl``); references the same CID as ``ipfs_hash``.
        csv: Header plus one row summarising the NFT.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    ipfs_hash: str = Field(..., alias="ipfsHash")
    image_cid: str = Field(..., alias="imageCid")
    metadata_url: str = Field(..., alias="metadataUrl")
    csv: str


class MakeNFTError(BaseModel):
    """Failure body for ``POST /makeNFT``."""

    success: bool = False
    error: str
