"""Target assembler abstraction and registry.

An assembler turns the deduplicated units of one generation run into a
complete project for its target: scaffold files (entry, theme, support,
configuration, dependency manifest) plus one file per unit.
"""

from __future__ import annotations

import importlib
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from forge.ir import FileKind, ManifestFile, Project, TargetOptions
from forge.schema import Target
from forge.theme import ResolvedStyle

# =============================================================================
# Assembly input and output
# =============================================================================


@dataclass(frozen=True)
class UnitSource:
    """One deduplicated unit ready to be written.

    Attributes:
        name: Unit name (component, view or class name).
        body: Complete unit file content.
        type_id: Capsule type the unit was emitted for.
        placeholder: True when the unit is the fallback placeholder.
    """

    name: str
    body: str
    type_id: str = ""
    placeholder: bool = False


@dataclass(frozen=True)
class AssemblyInput:
    """Everything an assembler needs for one target.

    Attributes:
        project: Project being generated.
        target: Target being generated.
        theme: Theme resolved for the target.
        options: Target options.
        app_name: PascalCase application identifier.
        display_name: Human-readable application name.
        namespace: Android package / code namespace.
        bundle_id: Application identifier for iOS and desktop bundles.
        units: Units in first-seen order.
        usages: Usages of the top-level instances, in sibling order.
        imports: Union of fragment dependencies, in first-seen order.
    """

    project: Project
    target: Target
    theme: ResolvedStyle
    options: TargetOptions
    app_name: str
    display_name: str
    namespace: str
    bundle_id: str
    units: tuple[UnitSource, ...] = ()
    usages: tuple[str, ...] = ()
    imports: tuple[str, ...] = ()

    @property
    def unit_names(self) -> list[str]:
        return [unit.name for unit in self.units]

    @property
    def namespace_path(self) -> str:
        """Namespace as a source directory, e.g. com/forge/demo."""
        return self.namespace.replace(".", "/")


@dataclass
class Assembly:
    """Files produced by an assembler.

    Attributes:
        files: Scaffold files followed by unit files.
        dependencies: Scaffold dependencies plus fragment imports.
        entry: Path of the entry file.
    """

    files: list[ManifestFile]
    dependencies: list[str] = field(default_factory=list)
    entry: str = ""


def unique(items) -> list[str]:
    """Deduplicate while keeping first-seen order."""
    seen: dict[str, None] = {}
    for item in items:
        seen.setdefault(item, None)
    return list(seen)


def json_document(data: Any) -> str:
    """Pretty JSON document with a trailing newline."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


# =============================================================================
# Assembler base class
# =============================================================================


class TargetAssembler(ABC):
    """Abstract base class for target project assemblers.

    Subclasses must implement:
        - target: Target this assembler builds projects for
        - base_dependencies: Dependencies every project of the target needs
        - entry_path: Path of the entry file
        - unit_path: Where a unit's file lives
        - scaffold: The target's fixed project files

    Example:
        >>> class NotesAssembler(TargetAssembler):
        ...     target = Target.WEB_REACT
        ...     base_dependencies = ("react@^18.2.0",)
        ...     def entry_path(self, inp): return "src/main.tsx"
        ...     def unit_path(self, inp, unit): return f"src/{unit.name}.tsx"
        ...     def scaffold(self, inp, dependencies): return []
    """

    target: Target
    base_dependencies: tuple[str, ...] = ()

    @abstractmethod
    def entry_path(self, inp: AssemblyInput) -> str:
        """Path of the entry file."""
        ...

    @abstractmethod
    def unit_path(self, inp: AssemblyInput, unit: UnitSource) -> str:
        """Path of a unit's source file."""
        ...

    @abstractmethod
    def scaffold(self, inp: AssemblyInput, dependencies: list[str]) -> list[ManifestFile]:
        """Fixed project files.

        Args:
            inp: Assembly input.
            dependencies: Resolved dependency list for the manifest files.

        Returns:
            Scaffold files in a deterministic order.
        """
        ...

    def dependencies(self, inp: AssemblyInput) -> list[str]:
        return unique([*self.base_dependencies, *inp.imports])

    def assemble(self, inp: AssemblyInput) -> Assembly:
        """Build the complete file set for one target."""
        if inp.target != self.target:
            raise ValueError(
                f"{type(self).__name__} cannot assemble {inp.target.value}"
            )
        dependencies = self.dependencies(inp)
        files = self.scaffold(inp, dependencies)
        files.extend(
            ManifestFile(self.unit_path(inp, unit), unit.body, FileKind.COMPONENT)
            for unit in inp.units
        )
        return Assembly(files=files, dependencies=dependencies, entry=self.entry_path(inp))


# =============================================================================
# Registry
# =============================================================================

# Populated by the target modules on import
_registry: dict[Target, type[TargetAssembler]] = {}

_MODULES = ("web", "desktop", "ios", "android")


def register_assembler(assembler_cls: type[TargetAssembler]) -> type[TargetAssembler]:
    """Register an assembler class for its target.

    Example:
        >>> @register_assembler
        ... class ReactAssembler(TargetAssembler):
        ...     target = Target.WEB_REACT
        ...     ...
    """
    _registry[assembler_cls.target] = assembler_cls
    return assembler_cls


def _import_assemblers() -> None:
    """Import target modules to trigger registration."""
    for module_name in _MODULES:
        importlib.import_module(f"forge.targets.{module_name}")


def get_assembler(target: Target | str) -> TargetAssembler:
    """Get an assembler instance for a target.

    Raises:
        ValueError: If the target is unknown.
        KeyError: If no assembler is registered for the target.
    """
    target = Target.parse(target)
    if target not in _registry:
        _import_assemblers()
        if target not in _registry:
            raise KeyError(f"No assembler registered for '{target.value}'")
    return _registry[target]()


def list_assemblers() -> list[Target]:
    """List all targets with a registered assembler, in enum order."""
    _import_assemblers()
    return [t for t in Target if t in _registry]


__all__ = [
    "UnitSource",
    "AssemblyInput",
    "Assembly",
    "TargetAssembler",
    "register_assembler",
    "get_assembler",
    "list_assemblers",
    "unique",
    "json_document",
]
