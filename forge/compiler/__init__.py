"""Project compiler: validation, tree walk, unit dedup and assembly."""

from .lib import (
    FileConflictError,
    GenerationError,
    GenerationResult,
    GenerationStatus,
    MultiTargetResult,
    MultiTargetSummary,
    ProjectCompiler,
    TargetSummary,
    coerce_options,
    default_namespace,
)

__all__ = [
    # Compiler
    "ProjectCompiler",
    "FileConflictError",
    # Results
    "GenerationStatus",
    "GenerationError",
    "GenerationResult",
    "TargetSummary",
    "MultiTargetSummary",
    "MultiTargetResult",
    # Helpers
    "coerce_options",
    "default_namespace",
]
