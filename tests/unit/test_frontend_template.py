"""Tests for the real frontend template shipped with the package.

These checks complement the FastAPI integration suite by reading the
repository's actual ``index.html`` and ``app.js`` so that renamed element ids
or broken endpoint wiring are caught without a browser.
"""

from __future__ import annotations

from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parents[2] / "src" / "nftmint"


def test_index_template_includes_form_controls() -> None:
    """The page should expose the prompt, NFT form, and result elements."""
    html = (PACKAGE_DIR / "templates" / "index.html").read_text(encoding="utf-8")

    assert 'id="prompt-input"' in html
    assert 'id="btn-generate"' in html
    assert 'id="image-gallery"' in html
    assert 'id="nft-controls" hidden' in html
    assert 'id="nft-name"' in html
    assert 'id="nft-description"' in html
    assert "Name and Description must be filled!" in html
    assert 'id="cid-display"' in html
    assert 'type="module" src="/static/js/app.js"' in html


def test_app_script_calls_both_endpoints() -> None:
    """The script should call /generate, /makeNFT, and /api/config."""
    js = (PACKAGE_DIR / "static" / "js" / "app.js").read_text(encoding="utf-8")

    assert 'fetch("/generate"' in js
    assert 'fetch("/makeNFT"' in js
    assert 'fetch("/api/config")' in js
    assert "imageBase64" in js


def test_app_script_derives_visibility_from_state() -> None:
    """NFT controls should be toggled from the image list in render()."""
    js = (PACKAGE_DIR / "static" / "js" / "app.js").read_text(encoding="utf-8")

    assert '$("nft-controls").hidden = state.images.length === 0;' in js
