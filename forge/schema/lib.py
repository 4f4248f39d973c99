"""Authoritative Schema Module for capsule property definitions and targets.

This module is the single source of truth for the vocabulary shared by the
registry, the validator, the emitters and the project compiler:
- Property kinds and the immutable PropertySchema record
- Capsule categories
- Output targets, their platform and their emitter family

Everything here is target-independent data; nothing in this module knows
how a capsule is rendered.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PropertyKind(str, Enum):
    """Value kinds a capsule property can hold.

    - STRING: Free text, escaped per target on emission
    - NUMBER: int or float (booleans are rejected)
    - BOOLEAN: True/False
    - ENUM: One of the schema's options
    - ARRAY: List of JSON-like values
    - OBJECT: Mapping of string keys to JSON-like values
    - ACTION: Name of an action dispatched through the generated action bus
    - COLOR: Hex color or the name of a theme palette token
    - ICON: Icon name (SF Symbol / Material icon / text glyph)
    """

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"
    ARRAY = "array"
    OBJECT = "object"
    ACTION = "action"
    COLOR = "color"
    ICON = "icon"


class CapsuleCategory(str, Enum):
    """High-level capsule groupings used by the editor palette."""

    UI = "ui"
    LAYOUT = "layout"
    NAVIGATION = "navigation"
    FORMS = "forms"
    DATA = "data"
    MEDIA = "media"
    FEEDBACK = "feedback"
    FEATURE = "feature"


class Platform(str, Enum):
    """Ecosystem a target belongs to."""

    IOS = "ios"
    ANDROID = "android"
    WEB = "web"
    DESKTOP = "desktop"


class TargetFamily(str, Enum):
    """Emitter families.

    Targets in the same family share unit templates and the usage
    serializer. The desktop shells host a React frontend, so they
    belong to the REACT family.
    """

    REACT = "react"
    SWIFTUI = "swiftui"
    UIKIT = "uikit"
    COMPOSE = "compose"
    ANDROID_VIEW = "android_view"


class Target(str, Enum):
    """Output targets the engine can generate a project for."""

    IOS_SWIFTUI = "ios-swiftui"
    IOS_UIKIT = "ios-uikit"
    ANDROID_COMPOSE = "android-compose"
    ANDROID_XML = "android-xml"
    WEB_REACT = "web-react"
    DESKTOP_TAURI = "desktop-tauri"
    DESKTOP_ELECTRON = "desktop-electron"

    @property
    def platform(self) -> Platform:
        """Ecosystem of this target."""
        return TARGET_PLATFORMS[self]

    @property
    def family(self) -> TargetFamily:
        """Emitter family of this target."""
        return TARGET_FAMILIES[self]

    @classmethod
    def parse(cls, value: "str | Target") -> "Target":
        """Resolve a target id or a bare platform alias.

        Accepts the full ids ("web-react") and the original platform
        names ("web", "ios", "android", "desktop").

        Raises:
            ValueError: If the value names no known target.
        """
        if isinstance(value, Target):
            return value
        normalized = str(value).strip().lower()
        if normalized in TARGET_ALIASES:
            return TARGET_ALIASES[normalized]
        try:
            return cls(normalized)
        except ValueError:
            available = ", ".join(t.value for t in cls)
            raise ValueError(
                f"Unknown target '{value}'. Available: {available}"
            ) from None


TARGET_PLATFORMS: dict[Target, Platform] = {
    Target.IOS_SWIFTUI: Platform.IOS,
    Target.IOS_UIKIT: Platform.IOS,
    Target.ANDROID_COMPOSE: Platform.ANDROID,
    Target.ANDROID_XML: Platform.ANDROID,
    Target.WEB_REACT: Platform.WEB,
    Target.DESKTOP_TAURI: Platform.DESKTOP,
    Target.DESKTOP_ELECTRON: Platform.DESKTOP,
}

TARGET_FAMILIES: dict[Target, TargetFamily] = {
    Target.IOS_SWIFTUI: TargetFamily.SWIFTUI,
    Target.IOS_UIKIT: TargetFamily.UIKIT,
    Target.ANDROID_COMPOSE: TargetFamily.COMPOSE,
    Target.ANDROID_XML: TargetFamily.ANDROID_VIEW,
    Target.WEB_REACT: TargetFamily.REACT,
    Target.DESKTOP_TAURI: TargetFamily.REACT,
    Target.DESKTOP_ELECTRON: TargetFamily.REACT,
}

# Original platform names map to the target the product defaulted to.
TARGET_ALIASES: dict[str, Target] = {
    "web": Target.WEB_REACT,
    "react": Target.WEB_REACT,
    "ios": Target.IOS_SWIFTUI,
    "swiftui": Target.IOS_SWIFTUI,
    "uikit": Target.IOS_UIKIT,
    "android": Target.ANDROID_COMPOSE,
    "compose": Target.ANDROID_COMPOSE,
    "desktop": Target.DESKTOP_TAURI,
    "tauri": Target.DESKTOP_TAURI,
    "electron": Target.DESKTOP_ELECTRON,
}


def targets_in_family(family: TargetFamily) -> tuple[Target, ...]:
    """All targets rendered by an emitter family, in enum order."""
    return tuple(t for t in Target if t.family == family)


@dataclass(frozen=True)
class PropertySchema:
    """Declarative description of one capsule property.

    Attributes:
        name: Property name as it appears in instance props (camelCase).
        kind: Value kind.
        required: Whether the property must be present and non-empty.
        default: Value substituted when the property is absent.
        options: Allowed values for ENUM properties.
        minimum: Lower clamp bound for NUMBER properties.
        maximum: Upper clamp bound for NUMBER properties.
        description: Editor-facing help text.
    """

    name: str
    kind: PropertyKind
    required: bool = False
    default: Any = None
    options: tuple[str, ...] = field(default_factory=tuple)
    minimum: float | None = None
    maximum: float | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if self.kind == PropertyKind.ENUM and not self.options:
            raise ValueError(f"Enum property '{self.name}' needs options")
        if (
            self.kind == PropertyKind.ENUM
            and self.default is not None
            and self.default not in self.options
        ):
            raise ValueError(
                f"Default '{self.default}' of '{self.name}' is not an option"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for schema export."""
        data: dict[str, Any] = {
            "name": self.name,
            "kind": self.kind.value,
            "required": self.required,
        }
        if self.default is not None:
            data["default"] = self.default
        if self.options:
            data["options"] = list(self.options)
        if self.minimum is not None:
            data["minimum"] = self.minimum
        if self.maximum is not None:
            data["maximum"] = self.maximum
        if self.description:
            data["description"] = self.description
        return data


__all__ = [
    "PropertyKind",
    "PropertySchema",
    "CapsuleCategory",
    "Platform",
    "TargetFamily",
    "Target",
    "TARGET_PLATFORMS",
    "TARGET_FAMILIES",
    "TARGET_ALIASES",
    "targets_in_family",
]
