"""NFT Mint — FastAPI Application.

This module is the single entry point for the web application.  It defines
the application factory, all REST API routes, and the ``main()`` CLI function
that launches the uvicorn server.

Architecture
------------
The application is a stateless proxy in front of two providers:

- **Configuration** is an :class:`~nftmint.core.config.NftMintConfig`
  built once and passed to :func:`create_app`; handlers never read the
  environment.
- **Image generation** is delegated to
  :class:`~nftmint.core.stability_client.StabilityClient`.
- **Publication** is delegated to
  :class:`~nftmint.core.publisher.NFTPublisher`, which pins the image and
  its metadata through :class:`~nftmint.core.pinata_client.PinataClient`.
- **The HTML page** is served as a raw ``HTMLResponse``; its script fetches
  ``/api/config`` on load and talks to the two POST endpoints.

Endpoints
---------
========  ==================  ==========================================
Method    Path                Purpose
========  ==================  ==========================================
GET       ``/``               Serve the main HTML page
GET       ``/api/config``     Version and public gateway URL
POST      ``/generate``       Generate one image from a prompt
POST      ``/makeNFT``        Pin image + metadata, return CIDs and CSV
========  ==================  ==========================================

Usage
-----
CLI (installed entry point)::

    nftmint

Direct invocation::

    python -m nftmint.api.main
"""

from __future__ import annotations

import logging
import random
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from nftmint import __version__
from nftmint.api.middleware import BodySizeLimitMiddleware
from nftmint.api.models import (
    GenerateError,
    GenerateRequest,
    GenerateResponse,
    MakeNFTError,
    MakeNFTRequest,
    MakeNFTResponse,
)
from nftmint.core.config import NftMintConfig, config
from nftmint.core.errors import NftMintError, ProviderError
from nftmint.core.pinata_client import PinataClient
from nftmint.core.publisher import NFTPublisher
from nftmint.core.stability_client import StabilityClient

logger = logging.getLogger(__name__)

router = APIRouter()


def _describe_validation_errors(exc: RequestValidationError) -> str:
    """Render FastAPI validation errors as one line, e.g. ``body: Field required``."""
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ()))
        parts.append(f"{loc}: {error.get('msg', 'invalid')}")
    return "; ".join(parts)


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@router.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    """Serve the main application HTML page.

    Raises:
        HTTPException: 404 if ``index.html`` is not found.
    """
    index_path = request.app.state.config.templates_dir / "index.html"
    if index_path.exists():
        return HTMLResponse(content=index_path.read_text(encoding="utf-8"))
    raise HTTPException(status_code=404, detail="index.html not found")


@router.get("/api/config")
async def get_config(request: Request) -> dict:
    """Return the settings the page needs to render links.

    Returns:
        Dictionary with ``version`` and ``gateway_url``.
    """
    app_config: NftMintConfig = request.app.state.config
    return {
        "version": __version__,
        "gateway_url": app_config.gateway_url.rstrip("/"),
    }


@router.post(
    "/generate",
    response_model=GenerateResponse,
    responses={500: {"model": GenerateError}},
)
async def generate_image(req: GenerateRequest, request: Request):
    """Generate one image for the prompt.

    Returns:
        ``{"images": [<base64 png>]}`` on success, otherwise a 500 with
        ``error`` and, when the provider supplied one, ``details``.
    """
    stability: StabilityClient = request.app.state.stability
    try:
        image = await stability.generate(req.prompt)
    except ProviderError as e:
        body = GenerateError(error=e.message, details=e.details)
        return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))

    return GenerateResponse(images=[image])


@router.post(
    "/makeNFT",
    response_model=MakeNFTResponse,
    responses={500: {"model": MakeNFTError}},
)
async def make_nft(req: MakeNFTRequest, request: Request):
    """Pin the image and its metadata document to IPFS.

    Returns:
        ``MakeNFTResponse`` on success, otherwise a 500 with
        ``{"success": false, "error": <message>}``.
    """
    publisher: NFTPublisher = request.app.state.publisher
    try:
        result = await publisher.publish(req.name, req.description, req.image_base64)
    except NftMintError as e:
        logger.error(f"Error creating NFT via Pinata: {e}")
        return JSONResponse(status_code=500, content=MakeNFTError(error=str(e)).model_dump())
    except Exception as e:
        logger.error(f"Unexpected error creating NFT: {e}", exc_info=True)
        return JSONResponse(status_code=500, content=MakeNFTError(error=str(e)).model_dump())

    return MakeNFTResponse(
        ipfs_hash=result.metadata_cid,
        image_cid=result.image_uri,
        metadata_url=result.metadata_uri,
        csv=result.csv,
    )


# ---------------------------------------------------------------------------
# Application factory.
# ---------------------------------------------------------------------------


def create_app(
    app_config: NftMintConfig | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    rng: random.Random | None = None,
) -> FastAPI:
    """Build the FastAPI application around an explicit configuration.

    Args:
        app_config: Configuration to use.  Defaults to the global
            :data:`~nftmint.core.config.config`.
        transport: Optional ``httpx`` transport for outbound calls (tests
            pass an ``httpx.MockTransport``).
        rng: Optional random source for NFT token ids.

    Returns:
        A configured FastAPI application.
    """
    app_config = app_config or config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Open the shared HTTP client on startup and close it on shutdown."""
        # --- Startup -------------------------------------------------------
        timeout = httpx.Timeout(app_config.request_timeout)
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as http_client:
            app.state.stability = StabilityClient(app_config, http_client)
            app.state.publisher = NFTPublisher(PinataClient(app_config, http_client), rng=rng)
            if not app_config.has_pinata_credentials:
                logger.warning("Pinata credentials are not configured; /makeNFT will fail.")
            logger.info("Provider clients initialised.")

            yield  # Application runs here.

        # --- Shutdown ------------------------------------------------------
        logger.info("HTTP client closed on shutdown.")

    app = FastAPI(
        title="NFT Mint",
        description="AI image generation and IPFS publication for NFT metadata.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = app_config

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Fold malformed /makeNFT bodies into its regular failure body."""
        if request.url.path == "/makeNFT":
            message = f"Invalid request body: {_describe_validation_errors(exc)}"
            logger.error(f"Error creating NFT via Pinata: {message}")
            return JSONResponse(status_code=500, content=MakeNFTError(error=message).model_dump())
        return await request_validation_exception_handler(request, exc)

    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=app_config.max_body_bytes)

    # The page may be served from a different origin during development.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.mount("/static", StaticFiles(directory=str(app_config.static_dir)), name="static")
    app.include_router(router)
    return app


app = create_app()


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port, and log level from :data:`~nftmint.core.config.config`
    (``NFTMINT_SERVER_HOST``, ``NFTMINT_SERVER_PORT``, ``NFTMINT_LOG_LEVEL``).
    Defaults to ``0.0.0.0:8000``.

    This function is registered as the ``nftmint`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "nftmint.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
