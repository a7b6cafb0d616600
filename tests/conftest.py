"""Shared pytest fixtures for NFT Mint tests."""

import base64
import json
import random
import shutil
import tempfile
from io import BytesIO
from pathlib import Path
from typing import Generator

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from nftmint.api.main import create_app
from nftmint.core.config import NftMintConfig

STABILITY_URL = "https://stability.test/v2beta/stable-image/generate/core"
PINATA_BASE_URL = "https://pinata.test"


class FakeProviders:
    """Programmable stand-in for the Stability and Pinata HTTP APIs.

    Every request is recorded in ``requests``.  Responses are controlled by
    the public attributes; by default generation returns ``image`` and the
    two pin endpoints return the next CIDs from ``file_cids`` / ``json_cids``.
    """

    def __init__(self, image: str = "Zm9v"):
        self.requests: list[httpx.Request] = []
        self.generate_response = httpx.Response(200, json={"image": image})
        self.file_cids = ["Qimg"]
        self.json_cids = ["Qmeta"]
        self.pin_file_response: httpx.Response | None = None
        self.pin_json_response: httpx.Response | None = None
        self.raise_on: str | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if self.raise_on and path.endswith(self.raise_on):
            raise httpx.ConnectError("connection refused", request=request)

        if str(request.url) == STABILITY_URL:
            return self.generate_response
        if path == "/pinning/pinFileToIPFS":
            if self.pin_file_response is not None:
                return self.pin_file_response
            return httpx.Response(200, json={"IpfsHash": self.file_cids.pop(0)})
        if path == "/pinning/pinJSONToIPFS":
            if self.pin_json_response is not None:
                return self.pin_json_response
            return httpx.Response(200, json={"IpfsHash": self.json_cids.pop(0)})
        return httpx.Response(404, text="not found")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def json_body(self, index: int) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config() -> NftMintConfig:
    """Create a test configuration pointing at fake provider hosts.

    Returns:
        NftMintConfig with all credentials set
    """
    return NftMintConfig(
        _env_file=None,
        ai_api_key="test-ai-key",
        pinata_api_key="test-pinata-key",
        pinata_secret_api_key="test-pinata-secret",
        stability_url=STABILITY_URL,
        pinata_base_url=PINATA_BASE_URL,
        gateway_url="https://gateway.test/ipfs",
    )


@pytest.fixture
def no_pinata_config() -> NftMintConfig:
    """Create a test configuration without Pinata credentials."""
    return NftMintConfig(
        _env_file=None,
        ai_api_key="test-ai-key",
        pinata_api_key=None,
        pinata_secret_api_key=None,
        stability_url=STABILITY_URL,
        pinata_base_url=PINATA_BASE_URL,
    )


@pytest.fixture
def providers() -> FakeProviders:
    """Fake Stability/Pinata backends with default successful responses."""
    return FakeProviders()


@pytest.fixture
def png_base64() -> str:
    """A small real PNG, base64-encoded."""
    buffer = BytesIO()
    Image.new("RGB", (4, 4), color=(200, 40, 40)).save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


@pytest.fixture
def test_client(
    test_config: NftMintConfig, providers: FakeProviders
) -> Generator[TestClient, None, None]:
    """TestClient for an app wired to the fake providers.

    The client is used as a context manager so the application lifespan
    (shared ``httpx.AsyncClient``) runs for the duration of the test.
    """
    app = create_app(test_config, transport=providers.transport, rng=random.Random(1234))
    with TestClient(app) as client:
        yield client


@pytest.fixture
def no_pinata_client(
    no_pinata_config: NftMintConfig, providers: FakeProviders
) -> Generator[TestClient, None, None]:
    """TestClient for an app with no Pinata credentials configured."""
    app = create_app(no_pinata_config, transport=providers.transport)
    with TestClient(app) as client:
        yield client
