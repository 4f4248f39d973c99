"""Validate project tool for MCP server.

This tool checks a project against the capsule registry without
generating any files.
"""

import logging
from typing import Any

from forge.validation import check_project

from ..lib import ToolError, error_envelope, get_registry, parse_project

logger = logging.getLogger(__name__)


def _count_instances(project) -> tuple[int, int, set[str]]:
    """Count instances, max depth, and capsule types in a project."""
    count = 0
    max_depth = 0
    types: set[str] = set()
    for instance, path in project.walk():
        count += 1
        max_depth = max(max_depth, path.count(".children") + 1)
        types.add(instance.type_id)
    return count, max_depth, types


def validate_project(
    project: dict[str, Any],
) -> dict[str, Any]:
    """Validate a project for errors.

    Args:
        project: Persisted project JSON.

    Returns:
        Dictionary containing:
        - valid: True when nothing blocks generation
        - errors: Fatal records ({code, severity, instanceId, message, path?})
        - warnings: Non-blocking records
        - stats: instance_count, max_depth, capsule_types

    Example:
        >>> result = validate_project({"id": "demo", "capsules": [...]})
        >>> if not result["valid"]:
        ...     for error in result["errors"]:
        ...         print(f"{error['instanceId']}: {error['message']}")
    """
    try:
        parsed = parse_project(project)
    except ToolError as e:
        return error_envelope(e.code, str(e), e.details)

    report = check_project(parsed, get_registry())
    instance_count, max_depth, capsule_types = _count_instances(parsed)
    logger.debug(
        "validate %s: %d errors, %d warnings",
        parsed.id,
        len(report.fatal),
        len(report.warnings),
    )
    return {
        "valid": report.ok,
        "errors": [e.to_dict() for e in report.fatal],
        "warnings": [e.to_dict() for e in report.warnings],
        "stats": {
            "instance_count": instance_count,
            "max_depth": max_depth,
            "capsule_types": sorted(capsule_types),
        },
    }


__all__ = ["validate_project"]
