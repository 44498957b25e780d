"""Tests for server configuration and lifespan."""

import logging

import pytest

from actions_models.context import DEFAULT_MAX_DOCUMENT_BYTES, AppContext
from actions_models.server import (
    MAX_DOCUMENT_BYTES,
    MIN_DOCUMENT_BYTES,
    app_lifespan,
    configure_logging,
    get_max_document_bytes,
    mcp,
)


class TestMaxDocumentBytes:
    """ACTIONS_MODELS_MAX_DOCUMENT_BYTES handling."""

    def test_default(self, monkeypatch) -> None:
        """Test the default when unset."""
        monkeypatch.delenv("ACTIONS_MODELS_MAX_DOCUMENT_BYTES", raising=False)
        assert get_max_document_bytes() == DEFAULT_MAX_DOCUMENT_BYTES

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("4096", 4096),
            ("1", MIN_DOCUMENT_BYTES),
            (str(10**12), MAX_DOCUMENT_BYTES),
            ("lots", DEFAULT_MAX_DOCUMENT_BYTES),
        ],
    )
    def test_clamped(self, monkeypatch, value: str, expected: int) -> None:
        """Test values are clamped and invalid values fall back to the default."""
        monkeypatch.setenv("ACTIONS_MODELS_MAX_DOCUMENT_BYTES", value)
        assert get_max_document_bytes() == expected


class TestAppContext:
    """Document size checks."""

    def test_within_limit(self) -> None:
        """Test small documents pass."""
        assert AppContext(max_document_bytes=1024).check_document_size("on: push") is None

    def test_counts_encoded_bytes(self) -> None:
        """Test the limit applies to UTF-8 bytes, not characters."""
        error = AppContext(max_document_bytes=1024).check_document_size("é" * 600)
        assert error is not None
        assert "1200 bytes" in error


class TestLifespan:
    """Server lifespan."""

    @pytest.mark.asyncio
    async def test_yields_configured_context(self, monkeypatch) -> None:
        """Test the lifespan yields an AppContext with the configured limit."""
        monkeypatch.setenv("ACTIONS_MODELS_MAX_DOCUMENT_BYTES", "2048")

        async with app_lifespan(mcp) as app_ctx:
            assert app_ctx == AppContext(max_document_bytes=2048)

    @pytest.mark.asyncio
    async def test_tools_registered(self) -> None:
        """Test every tool is registered on the server."""
        import actions_models.tools  # noqa: F401

        names = {tool.name for tool in await mcp.list_tools()}
        assert names == {
            "validate_workflow",
            "validate_action",
            "validate_dependabot",
            "parse_uses",
            "validate_workflow_directory",
        }


class TestConfigureLogging:
    """ACTIONS_MODELS_LOG_LEVEL handling."""

    def test_invalid_level_warns(self, monkeypatch, capsys) -> None:
        """Test an invalid level is reported on stderr and INFO is used."""
        monkeypatch.setenv("ACTIONS_MODELS_LOG_LEVEL", "chatty")
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: kwargs)

        configure_logging()

        assert "Invalid ACTIONS_MODELS_LOG_LEVEL 'CHATTY'" in capsys.readouterr().err

    def test_level_applied(self, monkeypatch) -> None:
        """Test the configured level reaches basicConfig."""
        calls = []
        monkeypatch.setenv("ACTIONS_MODELS_LOG_LEVEL", "debug")
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        configure_logging()

        assert calls[0]["level"] == logging.DEBUG
