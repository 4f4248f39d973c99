"""FastMCP server instance for capsule-forge.

This module provides the MCP server that exposes the generation engine
to editor backends and LLM clients:

    1. validate_project: check a project before generating
    2. generate: project JSON → one target's complete source tree
    3. generate_multi: several targets concurrently, with a summary

Usage:
    # STDIO mode
    python -m forge.mcp.server

    # HTTP mode
    python -m forge.mcp.server --transport http --port 18080

    # Via CLI
    python . mcp run
    python . mcp serve --port 18080
"""

import argparse
import json
import logging
import sys
from typing import Any

from fastmcp import FastMCP

from forge.core.log import setup_logging
from forge.ir import Project

from .lib import (
    TransportType,
    get_server_version,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Server Instructions (LLM Guidance)
# =============================================================================

SERVER_INSTRUCTIONS = """\
## Capsule Forge Server

Turns a platform-neutral capsule project into complete source projects for
React (web), Tauri and Electron (desktop), SwiftUI and UIKit (iOS), and
Jetpack Compose and XML views (Android).

### Quick Start
1. `status()` → check readiness
2. `schema()` → capsule types and their properties
3. `validate_project(project)` → fix fatal errors first
4. `generate(project, target)` → files for one target
5. `generate_multi(project, targets)` → several targets at once

### Project Shape
```
{"id": "demo", "name": "Demo",
 "capsules": [{"id": "b1", "type": "button", "props": {"label": "Sign In"}}],
 "theme": {"colors": {"primary": "#3b82f6"}}}
```

### Warnings
Unknown capsule types and types without an emitter for a target are rendered
as visible placeholders and reported in `warnings`; generation still succeeds.
"""

# =============================================================================
# Server Instance
# =============================================================================

mcp = FastMCP(
    name="capsule-forge",
    instructions=SERVER_INSTRUCTIONS,
)


# =============================================================================
# Generation Tools
# =============================================================================


@mcp.tool
def generate(
    project: dict[str, Any],
    target: str | None = None,
    options: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Generate the complete source tree of a project for one target.

    Args:
        project: Project JSON with id, capsules and theme.
        target: One of web-react, desktop-tauri, desktop-electron,
            ios-swiftui, ios-uikit, android-compose, android-xml, or a
            platform alias (web, desktop, ios, android).
        options: Optional appName, packageName, bundleId, minSdk,
            iosVersion and extraFiles ([{path, content}]).

    Returns:
        Dictionary with:
        - success, status ("succeeded" or "succeeded_with_warnings"), target
        - files: [{path, content, language, kind}]
        - dependencies, entry, warnings
        or `{success: false, error: {code, message, details}}`.
    """
    from .tools.generate import generate_project as _generate

    return _generate(project=project, target=target, options=options)


@mcp.tool
def generate_multi(
    project: dict[str, Any],
    targets: list[dict[str, Any] | str],
    include_files: bool = False,
) -> dict[str, Any]:
    """Generate several targets concurrently.

    One target failing never aborts the others.

    Args:
        project: Project JSON.
        targets: Target ids, or objects `{platform, options}`.
        include_files: Also return each successful target's files.

    Returns:
        Dictionary with:
        - success: True only if every target succeeded
        - exports: [{platform, success, fileCount, totalSize, errors?, warnings?}]
        - summary: {totalPlatforms, successfulPlatforms, failedPlatforms,
          totalFiles, totalSize}
    """
    from .tools.generate import generate_multi as _generate_multi

    return _generate_multi(project=project, targets=targets, include_files=include_files)


@mcp.tool
def validate_project(project: dict[str, Any]) -> dict[str, Any]:
    """Validate a project without generating files.

    Returns:
        Dictionary with valid, errors (fatal), warnings and stats.
    """
    from .tools.validate import validate_project as _validate

    return _validate(project=project)


# =============================================================================
# Catalog Tools
# =============================================================================


@mcp.tool
def schema() -> list[dict[str, Any]]:
    """List capsule types with their property schemas.

    Returns:
        [{typeId, displayName, category, description, tags, acceptsChildren,
          version, targets, schema: [{name, kind, required, default?, ...}]}]
    """
    from .tools.schema import export_schema

    return export_schema()


@mcp.tool
def list_targets() -> dict[str, Any]:
    """List generation targets.

    Returns:
        Dictionary with the default target and, per target, its platform,
        emitter family, base dependencies and supported capsules.
    """
    from .tools.schema import list_targets as _list_targets

    return _list_targets()


@mcp.tool
def status() -> dict[str, Any]:
    """Check engine readiness.

    Returns:
        Dictionary with status ("healthy"/"degraded"), version, capsules,
        targets and effective configuration.
    """
    from .tools.status import get_status

    return get_status()


# =============================================================================
# Resources (Schema Reference)
# =============================================================================


@mcp.resource("schema://capsules")
def get_capsule_schema() -> str:
    """Get the capsule catalog as JSON."""
    from .tools.schema import export_schema

    return json.dumps(export_schema(), indent=2)


@mcp.resource("schema://project")
def get_project_schema() -> str:
    """Get the Project JSON schema."""
    return json.dumps(Project.model_json_schema(), indent=2)


# =============================================================================
# Server Factory & Runner
# =============================================================================


def create_server() -> FastMCP:
    """Create and configure the MCP server instance.

    Returns:
        Configured FastMCP server instance.
    """
    return mcp


def run_server(
    transport: TransportType = TransportType.STDIO,
    host: str = "0.0.0.0",
    port: int = 18080,
) -> None:
    """Run the MCP server with specified transport.

    Args:
        transport: Transport type (stdio, http, sse).
        host: Bind address for HTTP/SSE.
        port: Port for HTTP/SSE.
    """
    logger.info("Starting capsule-forge server v%s", get_server_version())
    logger.info("Transport: %s", transport.value)

    if transport == TransportType.STDIO:
        mcp.run()
    elif transport == TransportType.HTTP:
        logger.info("Running in HTTP mode at http://%s:%d/mcp", host, port)
        mcp.run(
            transport="http",
            host=host,
            port=port,
            path="/mcp",
        )
    elif transport == TransportType.SSE:
        logger.info("Running in SSE mode at http://%s:%d", host, port)
        mcp.run(
            transport="sse",
            host=host,
            port=port,
        )
    else:
        raise ValueError(f"Unknown transport: {transport}")


# =============================================================================
# CLI Entry Point
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for MCP server.

    Args:
        argv: Command line arguments (uses sys.argv if None).

    Returns:
        Exit code (0 for success).
    """
    parser = argparse.ArgumentParser(
        prog="capsule-forge",
        description="MCP server for multi-platform UI code generation",
    )
    parser.add_argument(
        "--transport",
        "-t",
        type=str,
        choices=["stdio", "http", "sse"],
        default="stdio",
        help="Transport type (default: stdio)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="0.0.0.0",
        help="Bind address for HTTP/SSE (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=18080,
        help="Port for HTTP/SSE (default: 18080)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, stream=sys.stderr)

    try:
        run_server(
            transport=TransportType(args.transport),
            host=args.host,
            port=args.port,
        )
        return 0
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        return 0
    except Exception as e:
        logger.error("Server error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
