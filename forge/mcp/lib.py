"""Core MCP server logic for capsule-forge.

Provides server configuration, the shared compiler used by every tool, and
the response envelopes tools return.
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from forge.compiler import ProjectCompiler
from forge.config import EnvVar, get_environment
from forge.ir import Project
from forge.registry import CapsuleRegistry, build_default_registry


class TransportType(str, Enum):
    """Supported MCP transport types."""

    STDIO = "stdio"
    HTTP = "http"
    SSE = "sse"


@dataclass
class ServerConfig:
    """Configuration for MCP server.

    Attributes:
        name: Server display name.
        transport: Transport type for communication.
        host: Bind address for HTTP/SSE transports.
        port: Port for HTTP/SSE transports.
        path: URL path for HTTP transport.
    """

    name: str = "capsule-forge"
    transport: TransportType = TransportType.STDIO
    host: str = "0.0.0.0"
    port: int = 18080
    path: str = "/mcp"

    @classmethod
    def from_env(
        cls,
        transport: TransportType | None = None,
    ) -> "ServerConfig":
        """Create config from environment variables.

        Args:
            transport: Override transport type (default: STDIO).

        Returns:
            ServerConfig with values from environment.
        """
        return cls(
            name="capsule-forge",
            transport=transport or TransportType.STDIO,
            host=get_environment(EnvVar.MCP_HOST),
            port=get_environment(EnvVar.MCP_PORT),
        )


def get_server_version() -> str:
    """Get server version string."""
    from forge import __version__

    return __version__


def get_server_capabilities() -> dict:
    """Get server capabilities for MCP protocol.

    Returns:
        Dictionary of capability flags.
    """
    return {
        "tools": True,
        "resources": True,
        "prompts": False,
        "logging": True,
    }


# =============================================================================
# Shared engine
# =============================================================================


@lru_cache(maxsize=1)
def get_registry() -> CapsuleRegistry:
    """Frozen registry of built-in capsules, built once per process."""
    return build_default_registry()


@lru_cache(maxsize=1)
def get_compiler() -> ProjectCompiler:
    """Compiler shared by every tool call."""
    return ProjectCompiler(get_registry())


# =============================================================================
# Envelopes
# =============================================================================


class ToolError(Exception):
    """Error a tool reports through the error envelope.

    Attributes:
        code: Machine-readable code (e.g. "InvalidProject").
        details: Structured details.
    """

    def __init__(self, code: str, message: str, details: list[dict[str, Any]] | None = None):
        self.code = code
        self.details = details or []
        super().__init__(message)


def error_envelope(code: str, message: str, details: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    """Build `{success: false, error: {code, message, details}}`."""
    return {
        "success": False,
        "error": {"code": code, "message": message, "details": details or []},
    }


def parse_project(data: dict[str, Any] | Project) -> Project:
    """Parse the persisted project shape.

    Raises:
        ToolError: With code "InvalidProject" and one detail per schema error.
    """
    if isinstance(data, Project):
        return data
    try:
        return Project.model_validate(data)
    except PydanticValidationError as e:
        details = [
            {"path": ".".join(str(x) for x in err["loc"]) or "project", "message": err["msg"]}
            for err in e.errors()
        ]
        raise ToolError("InvalidProject", f"Invalid project: {len(details)} error(s)", details) from e


__all__ = [
    "TransportType",
    "ServerConfig",
    "get_server_version",
    "get_server_capabilities",
    "get_registry",
    "get_compiler",
    "ToolError",
    "error_envelope",
    "parse_project",
]
