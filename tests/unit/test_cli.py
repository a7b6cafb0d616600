"""Tests for nftmint.api.main.main — the ``nftmint`` console script."""

from __future__ import annotations

import uvicorn

from nftmint.api import main as api_main
from nftmint.core.config import NftMintConfig


class TestMain:
    """Test that the server is launched from configuration."""

    def _run_main(self, monkeypatch, cfg: NftMintConfig) -> tuple[list, list]:
        runs: list = []
        logging_calls: list = []
        monkeypatch.setattr(api_main, "config", cfg)
        monkeypatch.setattr(uvicorn, "run", lambda *args, **kwargs: runs.append((args, kwargs)))
        monkeypatch.setattr(
            api_main.logging, "basicConfig", lambda **kwargs: logging_calls.append(kwargs)
        )
        api_main.main()
        return runs, logging_calls

    def test_host_and_port_from_config(self, monkeypatch):
        cfg = NftMintConfig(_env_file=None, server_host="127.0.0.1", server_port=9100)
        runs, _ = self._run_main(monkeypatch, cfg)

        assert runs == [
            (("nftmint.api.main:app",), {"host": "127.0.0.1", "port": 9100, "reload": False})
        ]

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("NFTMINT_SERVER_HOST", raising=False)
        monkeypatch.delenv("NFTMINT_SERVER_PORT", raising=False)
        runs, _ = self._run_main(monkeypatch, NftMintConfig(_env_file=None))

        _, kwargs = runs[0]
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 8000

    def test_log_level_from_config(self, monkeypatch):
        cfg = NftMintConfig(_env_file=None, log_level="DEBUG")
        _, logging_calls = self._run_main(monkeypatch, cfg)

        assert logging_calls[0]["level"] == "DEBUG"
