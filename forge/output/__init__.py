"""Output module for generated projects.

Provides human-readable trees of projects and manifests, and a minimal
directory writer used by the CLI.
"""

from forge.output.lib import (
    format_manifest_tree,
    format_project_tree,
    format_warnings,
    write_manifest,
)

__all__ = [
    "format_project_tree",
    "format_manifest_tree",
    "format_warnings",
    "write_manifest",
]
