"""Schema and target catalog tools for MCP server."""

from typing import Any

from forge.config import EnvVar, get_environment
from forge.schema import Target
from forge.targets import get_assembler, list_assemblers

from ..lib import get_registry


def export_schema() -> list[dict[str, Any]]:
    """Export every capsule definition: `[{typeId, displayName, category, schema, ...}]`."""
    return get_registry().export_schema()


def list_targets() -> dict[str, Any]:
    """List generation targets with their platform, family and base dependencies."""
    default = Target.parse(get_environment(EnvVar.FORGE_DEFAULT_TARGET))
    targets = []
    for target in list_assemblers():
        assembler = get_assembler(target)
        targets.append(
            {
                "id": target.value,
                "platform": target.platform.value,
                "family": target.family.value,
                "dependencies": list(assembler.base_dependencies),
                "capsules": [
                    d.type_id for d in get_registry() if d.emitter_for(target) is not None
                ],
            }
        )
    return {"default": default.value, "targets": targets}


__all__ = ["export_schema", "list_targets"]
