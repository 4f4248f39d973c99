"""Instance and project validation."""

from .lib import (
    FATAL_CODES,
    ErrorCode,
    ProjectReport,
    ProjectValidationError,
    Severity,
    ValidationError,
    ValidationResult,
    check_project,
    describe_kind,
    is_empty,
    is_valid,
    validate_instance,
    validate_project,
)

__all__ = [
    # Records
    "ErrorCode",
    "Severity",
    "FATAL_CODES",
    "ValidationError",
    "ValidationResult",
    "ProjectReport",
    "ProjectValidationError",
    # Validation
    "validate_instance",
    "check_project",
    "validate_project",
    "is_valid",
    # Helpers
    "describe_kind",
    "is_empty",
]
