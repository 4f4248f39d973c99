"""Capsule definition registry.

Maps capsule type ids to their immutable definitions. A registry is built
once (construct-then-freeze) and then shared read-only by every generation
pipeline, including concurrent multi-target runs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from forge.schema import CapsuleCategory, PropertySchema, Target

if TYPE_CHECKING:
    from forge.emitters import Emitter

logger = logging.getLogger(__name__)


class DuplicateTypeError(ValueError):
    """Raised when a type id is registered twice."""


class RegistryFrozenError(RuntimeError):
    """Raised when registering into a frozen registry."""


@dataclass(frozen=True)
class CapsuleDefinition:
    """Immutable description of a capsule type.

    Attributes:
        type_id: Unique identifier (e.g., "button").
        display_name: Editor-facing name.
        category: Palette grouping.
        tags: Search tags.
        description: Editor-facing help text.
        schema: Ordered property schemas.
        emitters: Per-target emitters; read-only after construction.
        accepts_children: Whether instances may contain child instances.
        version: Definition version, bumped when templates change.
    """

    type_id: str
    display_name: str
    category: CapsuleCategory
    schema: tuple[PropertySchema, ...] = ()
    emitters: Mapping[Target, Emitter] = field(default_factory=dict)
    tags: tuple[str, ...] = ()
    description: str = ""
    accepts_children: bool = False
    version: str = "1.0.0"

    def __post_init__(self) -> None:
        if not self.type_id:
            raise ValueError("Capsule type_id must not be empty")
        names = [prop.name for prop in self.schema]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(
                f"Capsule '{self.type_id}' declares duplicate properties: {duplicates}"
            )
        # Freeze containers handed in by callers
        object.__setattr__(self, "schema", tuple(self.schema))
        object.__setattr__(self, "tags", tuple(self.tags))
        object.__setattr__(self, "emitters", MappingProxyType(dict(self.emitters)))

    def get_property(self, name: str) -> PropertySchema | None:
        """Look up a property schema by name."""
        for prop in self.schema:
            if prop.name == name:
                return prop
        return None

    def emitter_for(self, target: Target) -> Emitter | None:
        """Get the emitter for a target, or None if unsupported."""
        return self.emitters.get(target)

    @property
    def targets(self) -> tuple[Target, ...]:
        """Targets this capsule can be emitted for, in enum order."""
        return tuple(t for t in Target if t in self.emitters)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the schema export shape."""
        return {
            "typeId": self.type_id,
            "displayName": self.display_name,
            "category": self.category.value,
            "description": self.description,
            "tags": list(self.tags),
            "acceptsChildren": self.accepts_children,
            "version": self.version,
            "targets": [t.value for t in self.targets],
            "schema": [prop.to_dict() for prop in self.schema],
        }


class CapsuleRegistry:
    """Registry of capsule definitions keyed by type id.

    Registration order is preserved. Once frozen the registry is immutable
    and safe to share between threads.

    Example:
        >>> registry = CapsuleRegistry()
        >>> registry.register(definition)
        >>> registry.freeze()
        >>> registry.lookup("button")
    """

    def __init__(self) -> None:
        self._definitions: dict[str, CapsuleDefinition] = {}
        self._frozen = False

    @classmethod
    def from_definitions(
        cls, definitions: Iterable[CapsuleDefinition]
    ) -> CapsuleRegistry:
        """Build a frozen registry from definitions.

        Raises:
            DuplicateTypeError: If two definitions share a type id.
        """
        registry = cls()
        for definition in definitions:
            registry.register(definition)
        return registry.freeze()

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, definition: CapsuleDefinition) -> CapsuleDefinition:
        """Register a definition.

        Returns:
            The definition (for chaining).

        Raises:
            RegistryFrozenError: If the registry is frozen.
            DuplicateTypeError: If the type id is already registered.
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register '{definition.type_id}': registry is frozen"
            )
        if definition.type_id in self._definitions:
            raise DuplicateTypeError(
                f"Capsule type '{definition.type_id}' is already registered"
            )
        self._definitions[definition.type_id] = definition
        logger.debug("Registered capsule %s", definition.type_id)
        return definition

    def freeze(self) -> CapsuleRegistry:
        """Make the registry immutable. Idempotent."""
        if not self._frozen:
            self._definitions = MappingProxyType(dict(self._definitions))  # type: ignore[assignment]
            self._frozen = True
        return self

    def lookup(self, type_id: str) -> CapsuleDefinition | None:
        """Get a definition by type id. Never raises."""
        return self._definitions.get(type_id)

    def definitions(self) -> list[CapsuleDefinition]:
        """All definitions in registration order."""
        return list(self._definitions.values())

    def type_ids(self) -> list[str]:
        return list(self._definitions)

    def supports(self, type_id: str, target: Target | str) -> bool:
        """Check whether a type has a dedicated emitter for a target."""
        definition = self.lookup(type_id)
        if definition is None:
            return False
        return Target.parse(target) in definition.emitters

    def by_category(self, category: CapsuleCategory | str) -> list[CapsuleDefinition]:
        """Definitions in one category, in registration order."""
        category = CapsuleCategory(category)
        return [d for d in self._definitions.values() if d.category == category]

    def export_schema(self) -> list[dict[str, Any]]:
        """Export every definition for the editor palette."""
        return [d.to_dict() for d in self._definitions.values()]

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[CapsuleDefinition]:
        return iter(self._definitions.values())


def build_default_registry() -> CapsuleRegistry:
    """Build the frozen registry of built-in capsules."""
    from forge.capsules import ALL_CAPSULES

    return CapsuleRegistry.from_definitions(ALL_CAPSULES)


__all__ = [
    "CapsuleDefinition",
    "CapsuleRegistry",
    "DuplicateTypeError",
    "RegistryFrozenError",
    "build_default_registry",
]
