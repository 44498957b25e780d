"""Shared context types for the MCP server.

This module contains context types used across server and tools modules,
separated to avoid circular imports.
"""

from dataclasses import dataclass

from mcp.server.fastmcp import Context
from mcp.server.session import ServerSession

DEFAULT_MAX_DOCUMENT_BYTES = 1024 * 1024


@dataclass
class AppContext:
    """Application context shared by all MCP tools.

    Created once during server startup and made available to tools through
    the Context parameter.
    """

    max_document_bytes: int = DEFAULT_MAX_DOCUMENT_BYTES  # Largest YAML document accepted

    def check_document_size(self, yaml_content: str) -> str | None:
        """Return an error message if the document exceeds the size limit."""
        size = len(yaml_content.encode("utf-8"))
        if size > self.max_document_bytes:
            return (
                f"Document is {size} bytes, larger than the {self.max_document_bytes} byte limit "
                "(ACTIONS_MODELS_MAX_DOCUMENT_BYTES)"
            )
        return None


# Type alias for MCP tool context parameter
AppContextType = Context[ServerSession, AppContext]


__all__ = ["AppContext", "AppContextType", "DEFAULT_MAX_DOCUMENT_BYTES"]
