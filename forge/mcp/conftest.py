"""Pytest fixtures for MCP server tests.

This module provides:
- Server and client fixtures for protocol testing
- A sample project in the persisted JSON shape
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, AsyncGenerator

import pytest
from fastmcp import Client

if TYPE_CHECKING:
    from fastmcp import FastMCP


# =============================================================================
# Server Fixtures
# =============================================================================


@pytest.fixture
def mcp_server() -> FastMCP:
    """Create MCP server instance for testing."""
    from .server import create_server

    return create_server()


@pytest.fixture
async def mcp_client(mcp_server: FastMCP) -> AsyncGenerator[Client, None]:
    """Create connected MCP client for testing.

    Args:
        mcp_server: The MCP server instance.

    Yields:
        Connected Client instance (in-memory transport).
    """
    async with Client(mcp_server) as client:
        yield client


# =============================================================================
# Data Fixtures
# =============================================================================


@pytest.fixture
def sign_in_project() -> dict[str, Any]:
    """Persisted sign-in project."""
    return {
        "id": "sign-in",
        "name": "Sign In Demo",
        "capsules": [
            {
                "id": "form",
                "type": "stack",
                "children": [
                    {"id": "title", "type": "text", "props": {"content": "Welcome back"}},
                    {"id": "email", "type": "input", "props": {"label": "Email"}},
                    {"id": "submit", "type": "button", "props": {"label": "Sign In"}},
                ],
            }
        ],
        "theme": {"colors": {"primary": "#3b82f6"}},
        "targets": ["web", "ios"],
    }
