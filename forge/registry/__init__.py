"""Capsule definition registry."""

from .lib import (
    CapsuleDefinition,
    CapsuleRegistry,
    DuplicateTypeError,
    RegistryFrozenError,
    build_default_registry,
)

__all__ = [
    "CapsuleDefinition",
    "CapsuleRegistry",
    "DuplicateTypeError",
    "RegistryFrozenError",
    "build_default_registry",
]
