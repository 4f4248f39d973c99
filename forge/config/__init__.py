"""Centralized configuration management for capsule-forge.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from forge.config import EnvVar, get_environment
    >>>
    >>> workers = get_environment(EnvVar.FORGE_MAX_WORKERS)  # Returns int: 4
    >>> workers = get_environment(EnvVar.FORGE_MAX_WORKERS, override=8)

Environment Variable Categories:
    engine: Default target, worker count, package prefix, log level
    output: Output directory for the CLI
    service: MCP server host and port
"""

from .lib import (
    # Core types
    EnvConfig,
    EnvVar,
    # Main interface
    get_environment,
    get_environment_info,
    get_max_workers,
    get_output_dir,
    get_package_prefix,
    # Introspection
    list_environment_variables,
)

__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_output_dir",
    "get_max_workers",
    "get_package_prefix",
    # Introspection
    "list_environment_variables",
]
