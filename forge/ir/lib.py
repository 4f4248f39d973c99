"""Core IR models for capsule projects and generated output.

Input side (pydantic, validated from editor JSON):
    ComponentInstance, ThemeTokens, Project, TargetOptions

Output side (frozen dataclasses, produced by the engine):
    SourceFragment, ManifestFile, GenerationWarning, ProjectManifest

The input models accept the persisted camelCase shape
``{id, capsules: [{id, type, props, children?}], theme: {...}, targets}``
as well as snake_case field names.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from forge.schema import Target
from forge.syntax import to_camel

# =============================================================================
# Theme Tokens
# =============================================================================

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
TOKEN_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")

# Nested `text: {...}` colors of the original theme shape
_TEXT_COLOR_KEYS = {
    "primary": "foreground",
    "secondary": "muted",
    "disabled": "disabled",
}


def is_hex_color(value: Any) -> bool:
    """Check whether a value is a #rgb, #rrggbb or #rrggbbaa string."""
    return isinstance(value, str) and bool(HEX_COLOR.match(value.strip()))


def normalize_hex(value: str) -> str:
    """Normalize a hex color to lowercase #rrggbb or #rrggbbaa.

    Raises:
        ValueError: If the value is not a hex color.
    """
    value = value.strip()
    if not HEX_COLOR.match(value):
        raise ValueError(f"Invalid hex color '{value}'")
    digits = value[1:].lower()
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return f"#{digits}"


class SpacingPreset(str, Enum):
    """Global spacing density."""

    COMPACT = "compact"
    NORMAL = "normal"
    RELAXED = "relaxed"


class RadiusPreset(str, Enum):
    """Base corner radius applied to surfaces and controls."""

    NONE = "none"
    SM = "sm"
    MD = "md"
    LG = "lg"
    FULL = "full"


class TypeScale(str, Enum):
    """Typography scale multiplier."""

    COMPACT = "compact"
    NORMAL = "normal"
    LARGE = "large"


class Typography(BaseModel):
    """Typography tokens."""

    font_family: str = Field(
        default="Inter",
        validation_alias=AliasChoices("fontFamily", "font_family"),
    )
    heading_font: str | None = Field(
        default=None,
        validation_alias=AliasChoices("headingFont", "heading_font"),
    )
    mono_font: str | None = Field(
        default=None,
        validation_alias=AliasChoices("monoFont", "mono_font"),
    )
    scale: TypeScale = TypeScale.NORMAL

    model_config = ConfigDict(populate_by_name=True, frozen=True)


def _token_name(key: Any, label: str, seen: dict[str, str]) -> str:
    """Canonical camelCase token name; rejects names colliding in generated code."""
    if not TOKEN_NAME.match(str(key)):
        raise ValueError(f"Invalid {label} token name '{key}'")
    name = to_camel(str(key))
    if name in seen:
        raise ValueError(f"{label} tokens '{seen[name]}' and '{key}' name the same token '{name}'")
    seen[name] = str(key)
    return name


def _check_scale(value: dict[str, Any], label: str) -> dict[str, float]:
    checked: dict[str, float] = {}
    seen: dict[str, str] = {}
    for key, amount in value.items():
        name = _token_name(key, label, seen)
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise ValueError(f"{label} token '{key}' must be a number")
        if amount < 0:
            raise ValueError(f"{label} token '{key}' must not be negative")
        checked[name] = float(amount)
    return checked


class ThemeTokens(BaseModel):
    """Abstract design tokens for one project.

    Resolved per target by the theme resolver at generation time; the
    resolved form is never persisted.

    Attributes:
        name: Theme display name.
        colors: Palette token name to normalized hex color.
        typography: Font family and type scale.
        spacing: Spacing density preset.
        spacing_scale: Explicit overrides for spacing tokens (xs..xl), in points.
        border_radius: Base radius preset.
        radius_scale: Explicit overrides for radius tokens, in points.
        shadows: Whether surfaces render drop shadows.
    """

    name: str = "Default"
    colors: dict[str, str] = Field(default_factory=dict)
    typography: Typography = Field(default_factory=Typography)
    spacing: SpacingPreset = SpacingPreset.NORMAL
    spacing_scale: dict[str, float] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("spacingScale", "spacing_scale"),
    )
    border_radius: RadiusPreset = Field(
        default=RadiusPreset.MD,
        validation_alias=AliasChoices("borderRadius", "border_radius"),
    )
    radius_scale: dict[str, float] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("radiusScale", "radius_scale"),
    )
    shadows: bool = True

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _split_scale_maps(cls, data: Any) -> Any:
        """Accept `spacing` / `borderRadius` given as explicit token maps."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if isinstance(data.get("spacing"), dict):
            data["spacingScale"] = {**data.pop("spacing"), **data.get("spacingScale", {})}
        for key in ("borderRadius", "border_radius"):
            if isinstance(data.get(key), dict):
                data["radiusScale"] = {**data.pop(key), **data.get("radiusScale", {})}
        return data

    @field_validator("colors", mode="before")
    @classmethod
    def _flatten_colors(cls, value: Any) -> dict[str, str]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("colors must be an object")
        flat: dict[str, str] = {}
        for key, color in value.items():
            if key == "text" and isinstance(color, dict):
                for text_key, text_color in color.items():
                    token = _TEXT_COLOR_KEYS.get(text_key)
                    if token is None:
                        raise ValueError(f"Unknown text color '{text_key}'")
                    flat.setdefault(token, text_color)
                continue
            flat[key] = color
        normalized: dict[str, str] = {}
        seen: dict[str, str] = {}
        for key, color in flat.items():
            name = _token_name(key, "color", seen)
            if not isinstance(color, str):
                raise ValueError(f"Color '{key}' must be a hex string")
            normalized[name] = normalize_hex(color)
        return normalized

    @field_validator("spacing_scale", mode="before")
    @classmethod
    def _check_spacing_scale(cls, value: Any) -> dict[str, float]:
        return _check_scale(value or {}, "spacing")

    @field_validator("radius_scale", mode="before")
    @classmethod
    def _check_radius_scale(cls, value: Any) -> dict[str, float]:
        return _check_scale(value or {}, "radius")


# =============================================================================
# Component Instances and Projects
# =============================================================================


class ComponentInstance(BaseModel):
    """One placed capsule in the editor tree.

    Attributes:
        id: Unique identifier within the project.
        type_id: Capsule type id; resolved against the registry only at
            generation time.
        properties: Raw property values as edited.
        children: Nested instances; sibling order is significant.

    Example:
        >>> ComponentInstance.model_validate(
        ...     {"id": "cta", "type": "button", "props": {"label": "Sign In"}}
        ... )
    """

    id: str = Field(..., min_length=1, description="Unique instance identifier")
    type_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("type", "capsuleId", "type_id"),
        serialization_alias="type",
        description="Capsule type id",
    )
    properties: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("props", "properties"),
        serialization_alias="props",
        description="Property values",
    )
    children: list[ComponentInstance] = Field(
        default_factory=list,
        description="Nested child instances in declared order",
    )

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("properties", "children", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any, info) -> Any:
        if value is None:
            return {} if info.field_name == "properties" else []
        return value


class ExtraFile(BaseModel):
    """A caller-supplied file merged into a target's manifest."""

    path: str = Field(..., min_length=1)
    content: str = ""

    @field_validator("path")
    @classmethod
    def _relative_path(cls, value: str) -> str:
        path = PurePosixPath(value)
        if path.is_absolute() or ".." in path.parts:
            raise ValueError(f"Extra file path must be relative: '{value}'")
        return str(path)


_SEGMENT = r"[A-Za-z][A-Za-z0-9_]*"
REVERSE_DNS = re.compile(rf"^{_SEGMENT}(\.{_SEGMENT})+$")
PACKAGE_PREFIX = re.compile(rf"^{_SEGMENT}(\.{_SEGMENT})*$")


def is_package_prefix(value: Any) -> bool:
    """Check whether a value can prefix a reverse-DNS package (`com.acme`)."""
    return isinstance(value, str) and bool(PACKAGE_PREFIX.match(value))


class TargetOptions(BaseModel):
    """Per-target generation options.

    Attributes:
        app_name: Display name override (defaults to the project name).
        package_name: Android application id / package.
        bundle_id: iOS bundle identifier.
        min_sdk: Android minimum SDK.
        ios_version: Minimum iOS deployment version.
        extra_files: Files merged verbatim into the manifest.
    """

    app_name: str | None = Field(
        default=None, validation_alias=AliasChoices("appName", "app_name")
    )
    package_name: str | None = Field(
        default=None, validation_alias=AliasChoices("packageName", "package_name")
    )
    bundle_id: str | None = Field(
        default=None, validation_alias=AliasChoices("bundleId", "bundle_id")
    )
    min_sdk: int = Field(
        default=24, ge=21, validation_alias=AliasChoices("minSdk", "min_sdk")
    )
    ios_version: str = Field(
        default="16.0", validation_alias=AliasChoices("iosVersion", "ios_version")
    )
    extra_files: list[ExtraFile] = Field(
        default_factory=list,
        validation_alias=AliasChoices("extraFiles", "extra_files"),
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @field_validator("package_name", "bundle_id")
    @classmethod
    def _reverse_dns(cls, value: str | None) -> str | None:
        if value is None:
            return value
        if not REVERSE_DNS.match(value):
            raise ValueError(f"Invalid reverse-DNS identifier '{value}'")
        return value

    @field_validator("ios_version")
    @classmethod
    def _version(cls, value: str) -> str:
        if not re.match(r"^\d+(\.\d+){0,2}$", value):
            raise ValueError(f"Invalid iOS version '{value}'")
        return value


class Project(BaseModel):
    """A persisted capsule project, the engine's only input.

    Attributes:
        id: Project identifier.
        name: Display name used for app and package naming.
        version: Semantic version written to dependency manifests.
        capsules: Top-level instances in declared order.
        theme: Design tokens.
        targets: Requested target ids (or platform aliases).
    """

    id: str = Field(..., min_length=1)
    name: str | None = None
    version: str = "1.0.0"
    description: str = ""
    capsules: list[ComponentInstance] = Field(default_factory=list)
    theme: ThemeTokens = Field(default_factory=ThemeTokens)
    targets: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("theme", mode="before")
    @classmethod
    def _theme_default(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def display_name(self) -> str:
        """Name shown in generated apps (falls back to the id)."""
        return self.name or self.id

    def walk(self) -> Iterator[tuple[ComponentInstance, str]]:
        """Depth-first walk in declared sibling order.

        Yields:
            (instance, tree path) pairs, e.g. ``capsules[0].children[1]``.
        """

        def _walk(
            instances: list[ComponentInstance], prefix: str
        ) -> Iterator[tuple[ComponentInstance, str]]:
            for index, instance in enumerate(instances):
                path = f"{prefix}[{index}]"
                yield instance, path
                yield from _walk(instance.children, f"{path}.children")

        yield from _walk(self.capsules, "capsules")


# =============================================================================
# Generated Output
# =============================================================================


class FileKind(str, Enum):
    """Role of a generated file inside a manifest."""

    ENTRY = "entry"
    COMPONENT = "component"
    THEME = "theme"
    DEPENDENCY_MANIFEST = "dependency_manifest"
    CONFIG = "config"
    SUPPORT = "support"
    DOCS = "docs"


LANGUAGE_BY_SUFFIX: dict[str, str] = {
    ".tsx": "typescript",
    ".ts": "typescript",
    ".js": "javascript",
    ".cjs": "javascript",
    ".json": "json",
    ".html": "html",
    ".css": "css",
    ".swift": "swift",
    ".kt": "kotlin",
    ".kts": "kotlin",
    ".xml": "xml",
    ".rs": "rust",
    ".toml": "toml",
    ".md": "markdown",
}


def language_for_path(path: str) -> str:
    """Guess the editor language of a generated file from its suffix."""
    return LANGUAGE_BY_SUFFIX.get(PurePosixPath(path).suffix.lower(), "text")


@dataclass(frozen=True)
class TargetFile:
    """An auxiliary file contributed by a single fragment."""

    path: str
    content: str
    kind: FileKind = FileKind.SUPPORT


@dataclass(frozen=True)
class SourceFragment:
    """Output of one emitter call for one instance.

    Attributes:
        unit_name: Name of the shared, importable source unit.
        body: Unit definition; identical for every instance of a type.
        usage: Call-site expression for this instance, children included.
        imports: External dependencies the unit needs.
        target_files: Auxiliary files the unit ships with.
        instance_id: Instance the fragment was emitted for.
        type_id: Capsule type of the instance.
        placeholder: True when rendered by the fallback emitter.
    """

    unit_name: str
    body: str
    usage: str
    imports: tuple[str, ...] = ()
    target_files: tuple[TargetFile, ...] = ()
    instance_id: str = ""
    type_id: str = ""
    placeholder: bool = False


@dataclass(frozen=True)
class ManifestFile:
    """One file of a generated project."""

    path: str
    content: str
    kind: FileKind

    @property
    def language(self) -> str:
        """Editor language derived from the file suffix."""
        return language_for_path(self.path)

    @property
    def size(self) -> int:
        """Size in bytes when written as UTF-8."""
        return len(self.content.encode("utf-8"))

    def to_dict(self) -> dict[str, Any]:
        """Convert to the response shape `{path, content, language, kind}`."""
        return {
            "path": self.path,
            "content": self.content,
            "language": self.language,
            "kind": self.kind.value,
        }


@dataclass(frozen=True)
class GenerationWarning:
    """A recoverable issue surfaced alongside a manifest.

    Attributes:
        code: Machine-readable code (e.g. "UnknownComponentType").
        message: Human-readable explanation.
        instance_id: Instance the warning refers to, if any.
        path: Property path, if the warning is about one property.
    """

    code: str
    message: str
    instance_id: str | None = None
    path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.instance_id is not None:
            data["instanceId"] = self.instance_id
        if self.path is not None:
            data["path"] = self.path
        return data


@dataclass
class ProjectManifest:
    """Complete file set for one target, consumed by the export packager.

    Attributes:
        target: Target the files were generated for.
        files: Files in deterministic order (scaffold first, then units).
        dependencies: Union of all fragment imports plus scaffold
            dependencies, in first-seen order.
        entry: Path of the entry file.
        warnings: Recoverable issues (placeholders, defaulted enums, ...).
    """

    target: Target
    files: list[ManifestFile]
    dependencies: list[str] = field(default_factory=list)
    entry: str = ""
    warnings: list[GenerationWarning] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.files)

    @property
    def total_size(self) -> int:
        """Total size in bytes of all files."""
        return sum(f.size for f in self.files)

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.files]

    def file(self, path: str) -> ManifestFile | None:
        """Look up a file by path."""
        for manifest_file in self.files:
            if manifest_file.path == path:
                return manifest_file
        return None

    def files_of_kind(self, kind: FileKind) -> list[ManifestFile]:
        return [f for f in self.files if f.kind == kind]


__all__ = [
    # Theme
    "ThemeTokens",
    "Typography",
    "SpacingPreset",
    "RadiusPreset",
    "TypeScale",
    "is_hex_color",
    "normalize_hex",
    # Input
    "ComponentInstance",
    "Project",
    "TargetOptions",
    "ExtraFile",
    "is_package_prefix",
    # Output
    "FileKind",
    "TargetFile",
    "SourceFragment",
    "ManifestFile",
    "GenerationWarning",
    "ProjectManifest",
    "language_for_path",
]
