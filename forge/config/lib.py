"""Centralized environment configuration management for capsule-forge.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from forge.config import EnvVar, get_environment
    >>>
    >>> workers = get_environment(EnvVar.FORGE_MAX_WORKERS)  # Returns int
    >>> target = get_environment(EnvVar.FORGE_DEFAULT_TARGET)  # Returns str
    >>>
    >>> # Override at runtime
    >>> workers = get_environment(EnvVar.FORGE_MAX_WORKERS, override=2)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, overload

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "FORGE_MAX_WORKERS").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str, int, bool, Path).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by capsule-forge.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - engine: Generation engine behaviour
        - output: Where and how generated projects are written
        - service: MCP server bind address and port
    """

    # -------------------------------------------------------------------------
    # Engine
    # -------------------------------------------------------------------------
    FORGE_DEFAULT_TARGET = EnvConfig(
        name="FORGE_DEFAULT_TARGET",
        default="web-react",
        var_type=str,
        description="Target used when a request does not name one",
        category="engine",
    )
    FORGE_MAX_WORKERS = EnvConfig(
        name="FORGE_MAX_WORKERS",
        default=4,
        var_type=int,
        description="Worker threads for multi-target generation",
        category="engine",
    )
    FORGE_PACKAGE_PREFIX = EnvConfig(
        name="FORGE_PACKAGE_PREFIX",
        default="com.forge",
        var_type=str,
        description="Reverse-DNS prefix for Android packages and iOS bundle ids",
        category="engine",
    )
    FORGE_LOG_LEVEL = EnvConfig(
        name="FORGE_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level for the CLI and MCP server",
        category="engine",
    )

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------
    FORGE_OUTPUT_DIR = EnvConfig(
        name="FORGE_OUTPUT_DIR",
        default=None,  # Computed from cwd
        var_type=Path,
        description="Directory the CLI writes generated projects to",
        category="output",
    )

    # -------------------------------------------------------------------------
    # Service Configuration
    # -------------------------------------------------------------------------
    MCP_HOST = EnvConfig(
        name="MCP_HOST",
        default="0.0.0.0",
        var_type=str,
        description="MCP server bind address",
        category="service",
    )
    MCP_PORT = EnvConfig(
        name="MCP_PORT",
        default=18080,
        var_type=int,
        description="MCP server port (avoids 8080)",
        category="service",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _parse_bool(value: str) -> bool | None:
    """Parse string to boolean.

    Recognizes: true/false, 1/0, yes/no (case-insensitive).
    Returns None for unrecognized values.
    """
    normalized = value.lower().strip()
    if normalized in ("true", "1", "yes"):
        return True
    if normalized in ("false", "0", "no"):
        return False
    return None


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None:
        return default

    if var_type is str:
        return value

    if var_type is int:
        try:
            return int(value)
        except ValueError:
            return default

    if var_type is bool:
        result = _parse_bool(value)
        return result if result is not None else default

    if var_type is Path:
        return Path(value)

    # Unknown type, return as-is
    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: bool) -> bool: ...
@overload
def get_environment(env_var: EnvVar, override: Path) -> Path: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type (str, int, bool, or Path).

    Example:
        >>> get_environment(EnvVar.MCP_PORT)
        18080
        >>> get_environment(EnvVar.MCP_PORT, override=9000)
        9000
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


# =============================================================================
# Convenience Functions
# =============================================================================


def get_output_dir(override: Path | str | None = None) -> Path:
    """Get the directory generated projects are written to.

    Resolution: override > FORGE_OUTPUT_DIR > {cwd}/build
    """
    if override is not None:
        return Path(override)

    env_path = get_environment(EnvVar.FORGE_OUTPUT_DIR)
    if env_path:
        return env_path

    return Path.cwd() / "build"


def get_max_workers(override: int | None = None) -> int:
    """Get the worker count for multi-target generation (at least 1)."""
    return max(1, get_environment(EnvVar.FORGE_MAX_WORKERS, override=override))


def get_package_prefix(override: str | None = None) -> str:
    """Get the reverse-DNS prefix, without trailing dots."""
    prefix = get_environment(EnvVar.FORGE_PACKAGE_PREFIX, override=override)
    return prefix.strip().strip(".") or "com.forge"


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (engine, output, service).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


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
