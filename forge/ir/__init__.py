"""Intermediate Representation (IR) models for projects and generated output."""

from .lib import (
    ComponentInstance,
    ExtraFile,
    FileKind,
    GenerationWarning,
    ManifestFile,
    Project,
    ProjectManifest,
    RadiusPreset,
    SourceFragment,
    SpacingPreset,
    TargetFile,
    TargetOptions,
    ThemeTokens,
    TypeScale,
    Typography,
    is_hex_color,
    is_package_prefix,
    language_for_path,
    normalize_hex,
)

__all__ = [
    # Theme tokens
    "ThemeTokens",
    "Typography",
    "SpacingPreset",
    "RadiusPreset",
    "TypeScale",
    "is_hex_color",
    "normalize_hex",
    # Project input
    "ComponentInstance",
    "Project",
    "TargetOptions",
    "ExtraFile",
    "is_package_prefix",
    # Generated output
    "FileKind",
    "TargetFile",
    "SourceFragment",
    "ManifestFile",
    "GenerationWarning",
    "ProjectManifest",
    "language_for_path",
]
