"""Property schema vocabulary and output targets."""

from .lib import (
    TARGET_ALIASES,
    TARGET_FAMILIES,
    TARGET_PLATFORMS,
    CapsuleCategory,
    Platform,
    PropertyKind,
    PropertySchema,
    Target,
    TargetFamily,
    targets_in_family,
)

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
