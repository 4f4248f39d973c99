"""MCP (Model Context Protocol) server for capsule-forge.

This module provides the MCP server implementation that exposes the
generation engine to editor backends and LLM clients.

Example:
    # Start server in STDIO mode
    >>> from forge.mcp.server import run_server
    >>> run_server()

    # Start server in HTTP mode
    >>> from forge.mcp import run_server, TransportType
    >>> run_server(transport=TransportType.HTTP, port=18080)

Available Tools:
    - generate: One target's complete source tree
    - generate_multi: Several targets concurrently
    - validate_project: Validation report without generating
    - schema: Capsule catalog
    - list_targets: Target catalog
    - status: Engine readiness
"""

from .lib import (
    ServerConfig,
    TransportType,
    error_envelope,
    get_compiler,
    get_registry,
    get_server_capabilities,
    get_server_version,
)
from .server import create_server, mcp, run_server

__all__ = [
    # Server instance
    "mcp",
    "create_server",
    "run_server",
    # Configuration
    "ServerConfig",
    "TransportType",
    # Engine
    "get_registry",
    "get_compiler",
    "error_envelope",
    # Utilities
    "get_server_version",
    "get_server_capabilities",
]
