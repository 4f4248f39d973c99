"""Generate tools for MCP server.

These tools compile a project snapshot into target source files and
return them inline for the caller to package.
"""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from forge.compiler import GenerationResult, coerce_options
from forge.config import EnvVar, get_environment
from forge.ir import TargetOptions
from forge.schema import Target

from ..lib import ToolError, error_envelope, get_compiler, parse_project

logger = logging.getLogger(__name__)


def _parse_target(target: str | None) -> Target:
    try:
        return Target.parse(target or get_environment(EnvVar.FORGE_DEFAULT_TARGET))
    except ValueError as e:
        raise ToolError("InvalidTarget", str(e)) from e


def _parse_options(options: dict[str, Any] | None) -> TargetOptions:
    try:
        return coerce_options(options)
    except PydanticValidationError as e:
        details = [
            {"path": ".".join(str(x) for x in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        raise ToolError("InvalidOptions", "Invalid target options", details) from e


def result_to_dict(result: GenerationResult, include_files: bool = True) -> dict[str, Any]:
    """Convert a generation result to the response envelope."""
    if not result.success:
        error = result.error
        return error_envelope(error.code, error.message, error.details)

    manifest = result.manifest
    data: dict[str, Any] = {
        "success": True,
        "status": result.status.value,
        "target": manifest.target.value,
        "entry": manifest.entry,
        "fileCount": manifest.file_count,
        "totalSize": manifest.total_size,
        "dependencies": manifest.dependencies,
        "warnings": [w.to_dict() for w in manifest.warnings],
    }
    if include_files:
        data["files"] = [f.to_dict() for f in manifest.files]
    return data


def generate_project(
    project: dict[str, Any],
    target: str | None = None,
    options: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Generate the complete source tree of a project for one target.

    Args:
        project: Persisted project JSON ({id, capsules, theme, targets}).
        target: Target id or platform alias. Defaults to FORGE_DEFAULT_TARGET.
        options: Target options (appName, packageName, bundleId, minSdk,
            iosVersion, extraFiles).

    Returns:
        Success envelope with files, dependencies and warnings, or
        `{success: false, error: {code, message, details}}`.
    """
    try:
        parsed = parse_project(project)
        target_id = _parse_target(target)
        target_options = _parse_options(options)
    except ToolError as e:
        return error_envelope(e.code, str(e), e.details)

    result = get_compiler().compile(parsed, target_id, target_options)
    logger.info(
        "generate %s for %s: %s (%.1f ms)",
        target_id.value,
        parsed.id,
        result.status.value,
        result.duration_ms,
    )
    return result_to_dict(result)


def generate_multi(
    project: dict[str, Any],
    targets: list[dict[str, Any] | str],
    include_files: bool = False,
) -> dict[str, Any]:
    """Generate several targets concurrently.

    Args:
        project: Persisted project JSON.
        targets: Targets as ids or `{platform, options}` objects.
        include_files: Also return each target's files.

    Returns:
        `{success, exports: [...], summary: {...}}` where success is true
        only if every target succeeded, or an error envelope if the request
        itself is invalid.
    """
    if not targets:
        return error_envelope("InvalidTarget", "At least one target is required")
    try:
        parsed = parse_project(project)
        requests = []
        for item in targets:
            if isinstance(item, str):
                requests.append((_parse_target(item), None))
            elif not item.get("platform"):
                raise ToolError("InvalidTarget", "Each target object needs a platform", [{"target": item}])
            else:
                requests.append((_parse_target(item["platform"]), _parse_options(item.get("options"))))
    except ToolError as e:
        return error_envelope(e.code, str(e), e.details)

    multi = get_compiler().generate_multi(parsed, requests)
    exports = []
    for target, summary in multi.per_target.items():
        export = summary.to_dict()
        if include_files and multi.results[target].success:
            export["files"] = [f.to_dict() for f in multi.results[target].manifest.files]
        exports.append(export)

    return {
        "success": multi.success,
        "exports": exports,
        "summary": multi.summary.to_dict(),
    }


__all__ = ["generate_project", "generate_multi", "result_to_dict"]
