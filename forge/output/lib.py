"""Output formatting and writing for generated projects.

Produces human-readable trees of projects and manifests for CLI feedback,
and writes manifests to a directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from forge.ir import ComponentInstance, Project, ProjectManifest

logger = logging.getLogger(__name__)


# =============================================================================
# Trees
# =============================================================================


def format_project_tree(project: Project) -> str:
    """Format a project's instance tree.

    Example output:
        Sign In Demo
        └── form [stack]
            ├── title [text] "Welcome back"
            └── submit [button] "Sign In"

    Args:
        project: Project to format.

    Returns:
        Formatted tree string.
    """
    lines = [project.display_name]
    for i, instance in enumerate(project.capsules):
        _format_instance(instance, lines, "", i == len(project.capsules) - 1)
    return "\n".join(lines)


def _format_instance(
    instance: ComponentInstance,
    lines: list[str],
    prefix: str,
    is_last: bool,
) -> None:
    """Recursively format an instance and its children."""
    connector = "└── " if is_last else "├── "
    child_prefix = prefix + ("    " if is_last else "│   ")

    text = next(
        (
            instance.properties[key]
            for key in ("label", "content", "title")
            if isinstance(instance.properties.get(key), str)
        ),
        None,
    )
    node_str = f"{instance.id} [{instance.type_id}]"
    if text:
        node_str += f' "{text}"'
    lines.append(f"{prefix}{connector}{node_str}")

    for i, child in enumerate(instance.children):
        _format_instance(child, lines, child_prefix, i == len(instance.children) - 1)


def format_manifest_tree(manifest: ProjectManifest) -> str:
    """Format a manifest as a directory tree with file sizes.

    Example output:
        web-react (3 files, 1,204 bytes)
        ├── package.json (412 B)
        └── src
            ├── main.tsx (310 B) *
            └── App.tsx (482 B)

    The entry file is marked with `*`. Directories keep the order in which
    their first file appears in the manifest.
    """
    root: dict = {}
    sizes: dict[str, int] = {}
    for manifest_file in manifest.files:
        parts = manifest_file.path.split("/")
        node = root
        for part in parts[:-1]:
            node = node.setdefault(part + "/", {})
        node[parts[-1]] = None
        sizes[manifest_file.path] = manifest_file.size

    lines = [
        f"{manifest.target.value} ({manifest.file_count} files, {manifest.total_size:,} bytes)"
    ]
    _format_dir(root, "", "", lines, sizes, manifest.entry)
    return "\n".join(lines)


def _format_dir(
    node: dict,
    path: str,
    prefix: str,
    lines: list[str],
    sizes: dict[str, int],
    entry: str,
) -> None:
    items = list(node.items())
    for i, (name, children) in enumerate(items):
        is_last = i == len(items) - 1
        connector = "└── " if is_last else "├── "
        if children is None:
            file_path = path + name
            marker = " *" if file_path == entry else ""
            lines.append(f"{prefix}{connector}{name} ({sizes[file_path]:,} B){marker}")
        else:
            lines.append(f"{prefix}{connector}{name.rstrip('/')}")
            _format_dir(
                children,
                path + name,
                prefix + ("    " if is_last else "│   "),
                lines,
                sizes,
                entry,
            )


def format_warnings(manifest: ProjectManifest) -> str:
    """One line per warning, e.g. `UnknownComponentType (c1): ...`."""
    lines = []
    for warning in manifest.warnings:
        where = f" ({warning.instance_id})" if warning.instance_id else ""
        lines.append(f"{warning.code}{where}: {warning.message}")
    return "\n".join(lines)


# =============================================================================
# Writing
# =============================================================================


def write_manifest(manifest: ProjectManifest, out_dir: Path | str) -> list[Path]:
    """Write every manifest file below a directory.

    Args:
        manifest: Generated file set.
        out_dir: Destination directory (created if missing).

    Returns:
        Written paths, in manifest order.

    Raises:
        ValueError: If a file path escapes the destination directory.
    """
    out_dir = Path(out_dir).resolve()
    targets: list[tuple[Path, str]] = []
    for manifest_file in manifest.files:
        destination = (out_dir / manifest_file.path).resolve()
        if not destination.is_relative_to(out_dir):
            raise ValueError(f"File path escapes output directory: '{manifest_file.path}'")
        targets.append((destination, manifest_file.content))

    written: list[Path] = []
    for destination, content in targets:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(content, encoding="utf-8", newline="\n")
        written.append(destination)

    logger.info("Wrote %d files to %s", len(written), out_dir)
    return written


__all__ = [
    "format_project_tree",
    "format_manifest_tree",
    "format_warnings",
    "write_manifest",
]
