"""Instance validation against capsule property schemas.

Validation never throws eagerly: every problem is collected as a
ValidationError record. Fatal records block generation; warnings travel
with the generated manifest.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from forge.ir import ComponentInstance, Project, is_hex_color
from forge.registry import CapsuleDefinition, CapsuleRegistry
from forge.schema import PropertyKind, PropertySchema
from forge.theme import COLOR_TOKENS


class ErrorCode(str, Enum):
    """Validation error codes."""

    MISSING_REQUIRED_PROPERTY = "MissingRequiredProperty"
    TYPE_MISMATCH = "TypeMismatch"
    INVALID_ENUM_VALUE = "InvalidEnumValue"
    VALUE_CLAMPED = "ValueClamped"
    DUPLICATE_INSTANCE_ID = "DuplicateInstanceId"
    CHILDREN_IGNORED = "ChildrenIgnored"
    UNKNOWN_COMPONENT_TYPE = "UnknownComponentType"
    # Recorded by the compiler, never by validation
    UNSUPPORTED_TARGET = "UnsupportedTarget"


class Severity(str, Enum):
    """Whether a record blocks generation."""

    ERROR = "error"
    WARNING = "warning"


FATAL_CODES = frozenset(
    {
        ErrorCode.MISSING_REQUIRED_PROPERTY,
        ErrorCode.TYPE_MISMATCH,
        ErrorCode.DUPLICATE_INSTANCE_ID,
    }
)


@dataclass
class ValidationError:
    """Represents one validation problem.

    Attributes:
        code: Error category.
        instance_id: ID of the offending instance.
        message: Human-readable error description.
        path: Property path ("<instance id>.props.<name>"), if any.
        expected: Expected kind or options, for mismatches.
        actual: Observed kind or value, for mismatches.
    """

    code: ErrorCode
    instance_id: str
    message: str
    path: str | None = None
    expected: str | None = None
    actual: str | None = None

    @property
    def severity(self) -> Severity:
        return Severity.ERROR if self.code in FATAL_CODES else Severity.WARNING

    @property
    def is_fatal(self) -> bool:
        return self.severity == Severity.ERROR

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "code": self.code.value,
            "severity": self.severity.value,
            "instanceId": self.instance_id,
            "message": self.message,
        }
        if self.path is not None:
            data["path"] = self.path
        if self.expected is not None:
            data["expected"] = self.expected
        if self.actual is not None:
            data["actual"] = self.actual
        return data


@dataclass
class ValidationResult:
    """Normalized values and problems for one instance."""

    values: dict[str, Any] = field(default_factory=dict)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def fatal(self) -> list[ValidationError]:
        return [e for e in self.errors if e.is_fatal]

    @property
    def warnings(self) -> list[ValidationError]:
        return [e for e in self.errors if not e.is_fatal]

    @property
    def ok(self) -> bool:
        """True when nothing blocks generation."""
        return not self.fatal


class ProjectValidationError(ValueError):
    """Raised when a project has fatal validation errors.

    Attributes:
        errors: Every fatal error found in the project.
    """

    def __init__(self, errors: list[ValidationError]):
        self.errors = errors
        preview = "; ".join(f"{e.path or e.instance_id}: {e.message}" for e in errors[:3])
        more = f" (+{len(errors) - 3} more)" if len(errors) > 3 else ""
        super().__init__(f"{len(errors)} validation error(s): {preview}{more}")


# =============================================================================
# Value checks
# =============================================================================


def describe_kind(value: Any) -> str:
    """Name the JSON kind of a raw value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def is_empty(value: Any) -> bool:
    """Values treated as absent for required properties."""
    return value is None or (isinstance(value, (str, list, tuple, dict)) and not value)


def _is_json_like(value: Any) -> bool:
    if value is None or isinstance(value, (bool, str)):
        return True
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    if isinstance(value, (list, tuple)):
        return all(_is_json_like(v) for v in value)
    if isinstance(value, dict):
        return all(isinstance(k, str) and _is_json_like(v) for k, v in value.items())
    return False


def _kind_matches(
    prop: PropertySchema, value: Any, palette: frozenset[str]
) -> bool:
    kind = prop.kind
    if kind in (PropertyKind.STRING, PropertyKind.ICON, PropertyKind.ACTION):
        return isinstance(value, str)
    if kind == PropertyKind.NUMBER:
        return (
            isinstance(value, (int, float))
            and not isinstance(value, bool)
            and math.isfinite(value)
        )
    if kind == PropertyKind.BOOLEAN:
        return isinstance(value, bool)
    if kind == PropertyKind.ARRAY:
        return isinstance(value, (list, tuple)) and _is_json_like(value)
    if kind == PropertyKind.OBJECT:
        return isinstance(value, dict) and _is_json_like(value)
    if kind == PropertyKind.COLOR:
        return isinstance(value, str) and (is_hex_color(value) or value in palette)
    # ENUM membership is checked separately
    return True


def _expected(prop: PropertySchema) -> str:
    if prop.kind == PropertyKind.COLOR:
        return "color (hex or palette token)"
    return prop.kind.value


# =============================================================================
# Public API
# =============================================================================


def validate_instance(
    instance: ComponentInstance,
    definition: CapsuleDefinition,
    palette: Iterable[str] = COLOR_TOKENS,
) -> ValidationResult:
    """Validate one instance's properties against its definition's schema.

    Rules:
        - required and absent/empty: MissingRequiredProperty (fatal)
        - wrong kind: TypeMismatch (fatal)
        - enum value not in options: InvalidEnumValue, default substituted
        - number outside [minimum, maximum]: clamped, ValueClamped
        - optional and absent: schema default (omitted when none)
        - unknown properties are dropped

    The instance is never modified.

    Args:
        instance: Instance to validate.
        definition: Definition of the instance's type.
        palette: Color token names accepted by COLOR properties.

    Returns:
        ValidationResult with normalized values and collected errors.
    """
    palette = frozenset(palette)
    result = ValidationResult()
    raw = instance.properties

    for prop in definition.schema:
        path = f"{instance.id}.props.{prop.name}"
        value = raw.get(prop.name)
        absent = is_empty(value) if prop.required else value is None

        if absent:
            if prop.required:
                result.errors.append(
                    ValidationError(
                        code=ErrorCode.MISSING_REQUIRED_PROPERTY,
                        instance_id=instance.id,
                        path=path,
                        message=f"Required property '{prop.name}' is missing",
                        expected=_expected(prop),
                    )
                )
            elif prop.default is not None:
                result.values[prop.name] = prop.default
            continue

        if prop.kind == PropertyKind.ENUM:
            if value in prop.options:
                result.values[prop.name] = value
                continue
            result.errors.append(
                ValidationError(
                    code=ErrorCode.INVALID_ENUM_VALUE,
                    instance_id=instance.id,
                    path=path,
                    message=(
                        f"'{value}' is not one of {list(prop.options)}; "
                        f"using {prop.default!r}"
                    ),
                    expected=", ".join(prop.options),
                    actual=str(value),
                )
            )
            if prop.default is not None:
                result.values[prop.name] = prop.default
            continue

        if not _kind_matches(prop, value, palette):
            result.errors.append(
                ValidationError(
                    code=ErrorCode.TYPE_MISMATCH,
                    instance_id=instance.id,
                    path=path,
                    message=f"Expected {_expected(prop)}, got {describe_kind(value)}",
                    expected=_expected(prop),
                    actual=describe_kind(value),
                )
            )
            continue

        if prop.kind == PropertyKind.NUMBER:
            clamped = value
            if prop.minimum is not None and clamped < prop.minimum:
                clamped = prop.minimum
            if prop.maximum is not None and clamped > prop.maximum:
                clamped = prop.maximum
            if clamped != value:
                result.errors.append(
                    ValidationError(
                        code=ErrorCode.VALUE_CLAMPED,
                        instance_id=instance.id,
                        path=path,
                        message=f"{value} clamped to {clamped}",
                        expected=f"[{prop.minimum}, {prop.maximum}]",
                        actual=str(value),
                    )
                )
            value = clamped
        elif isinstance(value, tuple):
            value = list(value)

        result.values[prop.name] = value

    return result


@dataclass
class ProjectReport:
    """Validation outcome for a whole project.

    Attributes:
        errors: Every record, in depth-first instance order.
        values: Normalized values keyed by instance id.
    """

    errors: list[ValidationError] = field(default_factory=list)
    values: dict[str, dict[str, Any]] = field(default_factory=dict)

    @property
    def fatal(self) -> list[ValidationError]:
        return [e for e in self.errors if e.is_fatal]

    @property
    def warnings(self) -> list[ValidationError]:
        return [e for e in self.errors if not e.is_fatal]

    @property
    def ok(self) -> bool:
        return not self.fatal

    def raise_for_errors(self) -> None:
        """Raise ProjectValidationError carrying every fatal error."""
        if self.fatal:
            raise ProjectValidationError(self.fatal)


def check_project(project: Project, registry: CapsuleRegistry) -> ProjectReport:
    """Validate every instance of a project in depth-first sibling order.

    In addition to per-instance checks this reports:
        - DuplicateInstanceId (fatal) for ids used more than once
        - UnknownComponentType (warning) for ids missing from the registry;
          their children are still validated
        - ChildrenIgnored (warning) for children under a capsule that does
          not accept them; those children are not validated

    Args:
        project: Project to validate.
        registry: Registry the type ids resolve against.

    Returns:
        ProjectReport with records and normalized values.
    """
    report = ProjectReport()
    palette = frozenset(COLOR_TOKENS) | frozenset(project.theme.colors)

    id_counts: dict[str, int] = {}
    for instance, _ in project.walk():
        id_counts[instance.id] = id_counts.get(instance.id, 0) + 1
    for instance_id, count in id_counts.items():
        if count > 1:
            report.errors.append(
                ValidationError(
                    code=ErrorCode.DUPLICATE_INSTANCE_ID,
                    instance_id=instance_id,
                    message=f"Duplicate ID '{instance_id}' appears {count} times",
                )
            )

    def _check(instances: list[ComponentInstance]) -> None:
        for instance in instances:
            definition = registry.lookup(instance.type_id)
            if definition is None:
                report.errors.append(
                    ValidationError(
                        code=ErrorCode.UNKNOWN_COMPONENT_TYPE,
                        instance_id=instance.id,
                        message=f"Unknown component type '{instance.type_id}'",
                        actual=instance.type_id,
                    )
                )
                report.values.setdefault(instance.id, {})
                _check(instance.children)
                continue

            result = validate_instance(instance, definition, palette)
            report.errors.extend(result.errors)
            report.values.setdefault(instance.id, result.values)

            if instance.children and not definition.accepts_children:
                report.errors.append(
                    ValidationError(
                        code=ErrorCode.CHILDREN_IGNORED,
                        instance_id=instance.id,
                        message=(
                            f"'{instance.type_id}' does not accept children; "
                            f"{len(instance.children)} child instance(s) ignored"
                        ),
                    )
                )
                continue
            _check(instance.children)

    _check(project.capsules)
    return report


def validate_project(project: Project, registry: CapsuleRegistry) -> list[ValidationError]:
    """Validate a project and return every record (fatal and warnings).

    Example:
        >>> errors = validate_project(project, registry)
        >>> fatal = [e for e in errors if e.is_fatal]
    """
    return check_project(project, registry).errors


def is_valid(project: Project, registry: CapsuleRegistry) -> bool:
    """Check whether a project can be generated."""
    return check_project(project, registry).ok


__all__ = [
    "ErrorCode",
    "Severity",
    "FATAL_CODES",
    "ValidationError",
    "ValidationResult",
    "ProjectValidationError",
    "ProjectReport",
    "describe_kind",
    "is_empty",
    "validate_instance",
    "check_project",
    "validate_project",
    "is_valid",
]
