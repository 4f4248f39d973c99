"""MCP tools for capsule-forge.

Tools:
    - generate_project: Generate one target's source tree
    - generate_multi: Generate several targets concurrently
    - validate_project: Validate a project without generating
    - export_schema: Capsule catalog for editors
    - list_targets: Target catalog
    - get_status: Engine readiness
"""

from .generate import generate_multi, generate_project
from .schema import export_schema, list_targets
from .status import get_status
from .validate import validate_project

__all__ = [
    "generate_project",
    "generate_multi",
    "validate_project",
    "export_schema",
    "list_targets",
    "get_status",
]
