"""capsule-forge: multi-platform UI code generation from capsule projects."""

from forge.compiler import FileConflictError, GenerationResult, MultiTargetResult, ProjectCompiler
from forge.ir import ComponentInstance, Project, ProjectManifest, TargetOptions, ThemeTokens
from forge.registry import CapsuleDefinition, CapsuleRegistry, build_default_registry
from forge.schema import Target
from forge.validation import ProjectValidationError, ValidationError, is_valid, validate_project

__version__ = "0.1.0"

__all__ = [
    # Input
    "Project",
    "ComponentInstance",
    "ThemeTokens",
    "TargetOptions",
    "Target",
    # Registry
    "CapsuleDefinition",
    "CapsuleRegistry",
    "build_default_registry",
    # Compiler
    "ProjectCompiler",
    "ProjectManifest",
    "GenerationResult",
    "MultiTargetResult",
    "FileConflictError",
    # Validation
    "validate_project",
    "is_valid",
    "ValidationError",
    "ProjectValidationError",
]
