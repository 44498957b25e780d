"""FastMCP server initialization for actions-models.

This module initializes the MCP server and manages shared resources via lifespan context.
All tool implementations are in the tools module.

Following the official Anthropic Python SDK patterns:
- Lifespan context manager for resource initialization and cleanup
- Context injection for tool access to shared resources
- FastMCP server with stdio transport
"""

import logging
import os
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from mcp.server.fastmcp import FastMCP

from .context import DEFAULT_MAX_DOCUMENT_BYTES, AppContext, AppContextType

logger = logging.getLogger(__name__)

MIN_DOCUMENT_BYTES = 1024
MAX_DOCUMENT_BYTES = 64 * 1024 * 1024

# =============================================================================
# Shared Resources and Lifespan Management
# =============================================================================


def get_max_document_bytes() -> int:
    """Get the largest accepted YAML document size from environment.

    Reads ACTIONS_MODELS_MAX_DOCUMENT_BYTES environment variable.
    Default: 1 MiB, Valid range: 1 KiB - 64 MiB (clamped automatically)

    Returns:
        Maximum document size in bytes
    """
    try:
        size = int(os.getenv("ACTIONS_MODELS_MAX_DOCUMENT_BYTES", str(DEFAULT_MAX_DOCUMENT_BYTES)))
        return max(MIN_DOCUMENT_BYTES, min(MAX_DOCUMENT_BYTES, size))
    except ValueError:
        return DEFAULT_MAX_DOCUMENT_BYTES


@asynccontextmanager
async def app_lifespan(_server: FastMCP) -> AsyncIterator[AppContext]:
    """Manage application lifecycle.

    Environment Variables:
        ACTIONS_MODELS_MAX_DOCUMENT_BYTES: Largest YAML document the tools accept
            (default: 1048576, range: 1024-67108864)

    Args:
        _server: FastMCP server instance (unused, required by FastMCP signature)

    Yields:
        AppContext with the resolved configuration
    """
    logger.info("Initializing MCP server resources...")

    max_document_bytes = get_max_document_bytes()
    if max_document_bytes != DEFAULT_MAX_DOCUMENT_BYTES:
        logger.info(f"Using max document size: {max_document_bytes} bytes")

    try:
        yield AppContext(max_document_bytes=max_document_bytes)
    finally:
        # Nothing to release: decoding is pure and in-memory.
        logger.info("Shutting down MCP server...")


# Initialize MCP server with lifespan management
# Following Python MCP naming convention: {service}_mcp
mcp = FastMCP("actions_models_mcp", lifespan=app_lifespan)


# =============================================================================
# Server Entry Point
# =============================================================================


def configure_logging() -> None:
    """Configure root logging to stderr from ACTIONS_MODELS_LOG_LEVEL (default INFO)."""
    valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    log_level_str = os.getenv("ACTIONS_MODELS_LOG_LEVEL", "INFO").upper()

    if log_level_str not in valid_log_levels:
        print(
            f"Warning: Invalid ACTIONS_MODELS_LOG_LEVEL '{log_level_str}'. "
            f"Valid levels: {', '.join(sorted(valid_log_levels))}. "
            "Using INFO.",
            file=sys.stderr,
        )
        log_level_str = "INFO"

    # stdout carries the MCP protocol, so logs go to stderr.
    logging.basicConfig(
        level=getattr(logging, log_level_str),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    """Entry point for running the MCP server.

    This function is called when the server is run directly via:
    - python -m actions_models
    - actions-models-mcp (console script)

    Defaults to stdio transport for MCP protocol communication.
    """
    configure_logging()

    logger.info("Starting MCP server (press Ctrl+C to stop)...")

    try:
        mcp.run()
    except KeyboardInterrupt:
        logger.info("Received interrupt signal, shutting down gracefully...")
    except Exception as e:
        logger.exception(f"Server error: {e}")
        sys.exit(1)

    logger.info("Server shutdown complete")


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "mcp",
    "main",
    "configure_logging",
    "get_max_document_bytes",
    "AppContext",
    "AppContextType",
]
