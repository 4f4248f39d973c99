"""Unit tests for instance and project validation."""

import pytest

from forge.ir import ComponentInstance, Project
from forge.registry import CapsuleDefinition, CapsuleRegistry, build_default_registry
from forge.schema import CapsuleCategory, PropertyKind, PropertySchema
from forge.validation import (
    ErrorCode,
    ProjectValidationError,
    Severity,
    ValidationError,
    check_project,
    describe_kind,
    is_empty,
    is_valid,
    validate_instance,
    validate_project,
)

BADGE = CapsuleDefinition(
    type_id="badge",
    display_name="Badge",
    category=CapsuleCategory.UI,
    schema=(
        PropertySchema("label", PropertyKind.STRING, required=True),
        PropertySchema("tone", PropertyKind.ENUM, default="info", options=("info", "alert")),
        PropertySchema("count", PropertyKind.NUMBER, default=0, minimum=0, maximum=99),
        PropertySchema("dot", PropertyKind.BOOLEAN, default=False),
        PropertySchema("color", PropertyKind.COLOR, default="primary"),
        PropertySchema("tags", PropertyKind.ARRAY),
        PropertySchema("meta", PropertyKind.OBJECT),
        PropertySchema("onTap", PropertyKind.ACTION),
    ),
)

BOX = CapsuleDefinition(
    type_id="box",
    display_name="Box",
    category=CapsuleCategory.LAYOUT,
    accepts_children=True,
)


def _instance(props: dict, instance_id: str = "b1") -> ComponentInstance:
    return ComponentInstance(id=instance_id, type_id="badge", properties=props)


def _codes(errors: list[ValidationError]) -> list[ErrorCode]:
    return [e.code for e in errors]


class TestHelpers:
    """Tests for value helpers."""

    @pytest.mark.unit
    def test_describe_kind(self):
        """Raw values are named by JSON kind."""
        assert describe_kind(None) == "null"
        assert describe_kind(True) == "boolean"
        assert describe_kind(3) == "number"
        assert describe_kind("x") == "string"
        assert describe_kind([1]) == "array"
        assert describe_kind({}) == "object"

    @pytest.mark.unit
    def test_is_empty(self):
        """Empty containers and strings count as absent."""
        assert is_empty(None)
        assert is_empty("")
        assert is_empty([])
        assert is_empty({})
        assert not is_empty(0)
        assert not is_empty(False)


class TestValidateInstance:
    """Tests for validate_instance."""

    @pytest.mark.unit
    def test_valid_instance_fills_defaults(self):
        """Absent optional properties take their schema default."""
        result = validate_instance(_instance({"label": "New"}), BADGE)
        assert result.ok
        assert result.errors == []
        assert result.values == {
            "label": "New",
            "tone": "info",
            "count": 0,
            "dot": False,
            "color": "primary",
        }

    @pytest.mark.unit
    @pytest.mark.parametrize("label", [None, "", [], {}])
    def test_missing_required(self, label):
        """Absent or empty required values are fatal."""
        props = {} if label is None else {"label": label}
        result = validate_instance(_instance(props), BADGE)
        assert _codes(result.errors) == [ErrorCode.MISSING_REQUIRED_PROPERTY]
        error = result.errors[0]
        assert error.path == "b1.props.label"
        assert error.severity == Severity.ERROR
        assert not result.ok
        assert "label" not in result.values

    @pytest.mark.unit
    def test_type_mismatch(self):
        """Wrong kinds are fatal and report expected and actual kinds."""
        result = validate_instance(_instance({"label": 42}), BADGE)
        error = result.errors[0]
        assert error.code == ErrorCode.TYPE_MISMATCH
        assert error.expected == "string"
        assert error.actual == "number"
        assert error.is_fatal

    @pytest.mark.unit
    def test_booleans_are_not_numbers(self):
        """True is rejected for NUMBER properties."""
        result = validate_instance(_instance({"label": "x", "count": True}), BADGE)
        assert _codes(result.errors) == [ErrorCode.TYPE_MISMATCH]

    @pytest.mark.unit
    def test_non_finite_numbers_rejected(self):
        """NaN and infinities are not valid numbers."""
        result = validate_instance(_instance({"label": "x", "count": float("nan")}), BADGE)
        assert _codes(result.errors) == [ErrorCode.TYPE_MISMATCH]

    @pytest.mark.unit
    def test_invalid_enum_uses_default(self):
        """Unknown enum options are a warning and fall back to the default."""
        result = validate_instance(_instance({"label": "x", "tone": "loud"}), BADGE)
        assert _codes(result.errors) == [ErrorCode.INVALID_ENUM_VALUE]
        assert result.errors[0].severity == Severity.WARNING
        assert result.values["tone"] == "info"
        assert result.ok

    @pytest.mark.unit
    def test_numbers_are_clamped(self):
        """Out-of-range numbers are clamped with a warning."""
        result = validate_instance(_instance({"label": "x", "count": 250}), BADGE)
        assert _codes(result.errors) == [ErrorCode.VALUE_CLAMPED]
        assert result.values["count"] == 99
        assert result.ok

    @pytest.mark.unit
    def test_color_accepts_hex_and_tokens(self):
        """COLOR values may be hex literals or palette token names."""
        assert validate_instance(_instance({"label": "x", "color": "#ff0000"}), BADGE).ok
        assert validate_instance(_instance({"label": "x", "color": "error"}), BADGE).ok
        result = validate_instance(_instance({"label": "x", "color": "brand"}), BADGE)
        assert _codes(result.errors) == [ErrorCode.TYPE_MISMATCH]

    @pytest.mark.unit
    def test_custom_palette(self):
        """Custom palettes extend the accepted token names."""
        result = validate_instance(
            _instance({"label": "x", "color": "brand"}), BADGE, palette=("brand",)
        )
        assert result.ok

    @pytest.mark.unit
    def test_array_and_object_values(self):
        """JSON-like arrays and objects pass through."""
        result = validate_instance(
            _instance({"label": "x", "tags": ("a", 1), "meta": {"k": [True]}}), BADGE
        )
        assert result.ok
        assert result.values["tags"] == ["a", 1]
        assert result.values["meta"] == {"k": [True]}

    @pytest.mark.unit
    def test_unknown_properties_dropped(self):
        """Properties outside the schema never reach the values."""
        result = validate_instance(_instance({"label": "x", "extra": 1}), BADGE)
        assert "extra" not in result.values
        assert result.errors == []

    @pytest.mark.unit
    def test_instance_not_modified(self):
        """Validation is side-effect free."""
        instance = _instance({"label": "x", "count": 500})
        validate_instance(instance, BADGE)
        assert instance.properties == {"label": "x", "count": 500}

    @pytest.mark.unit
    def test_collects_every_error(self):
        """All problems of an instance are reported together."""
        result = validate_instance(_instance({"count": "many", "dot": "yes"}), BADGE)
        assert _codes(result.errors) == [
            ErrorCode.MISSING_REQUIRED_PROPERTY,
            ErrorCode.TYPE_MISMATCH,
            ErrorCode.TYPE_MISMATCH,
        ]

    @pytest.mark.unit
    def test_to_dict(self):
        """Records serialize with camelCase keys."""
        error = validate_instance(_instance({}), BADGE).errors[0]
        data = error.to_dict()
        assert data["code"] == "MissingRequiredProperty"
        assert data["severity"] == "error"
        assert data["instanceId"] == "b1"
        assert data["path"] == "b1.props.label"


class TestValidateProject:
    """Tests for project-level validation."""

    @pytest.fixture
    def registry(self) -> CapsuleRegistry:
        return CapsuleRegistry.from_definitions([BADGE, BOX])

    def _project(self, capsules: list[dict], **kwargs) -> Project:
        return Project.model_validate({"id": "p1", "capsules": capsules, **kwargs})

    @pytest.mark.unit
    def test_valid_project(self, registry):
        """A well-formed tree has no records."""
        project = self._project(
            [{"id": "box", "type": "box", "children": [{"id": "b", "type": "badge", "props": {"label": "x"}}]}]
        )
        assert validate_project(project, registry) == []
        assert is_valid(project, registry)

    @pytest.mark.unit
    def test_duplicate_ids(self, registry):
        """Ids used twice anywhere in the tree are fatal."""
        project = self._project(
            [
                {"id": "dup", "type": "badge", "props": {"label": "a"}},
                {"id": "box", "type": "box", "children": [{"id": "dup", "type": "badge", "props": {"label": "b"}}]},
            ]
        )
        errors = validate_project(project, registry)
        assert _codes(errors) == [ErrorCode.DUPLICATE_INSTANCE_ID]
        assert "2 times" in errors[0].message
        assert not is_valid(project, registry)

    @pytest.mark.unit
    def test_unknown_type_is_warning(self, registry):
        """Unknown types warn, and their children are still checked."""
        project = self._project(
            [{"id": "w", "type": "widget", "children": [{"id": "b", "type": "badge"}]}]
        )
        errors = validate_project(project, registry)
        assert _codes(errors) == [
            ErrorCode.UNKNOWN_COMPONENT_TYPE,
            ErrorCode.MISSING_REQUIRED_PROPERTY,
        ]
        assert errors[0].actual == "widget"
        assert errors[0].severity == Severity.WARNING

    @pytest.mark.unit
    def test_children_ignored(self, registry):
        """Children of non-containers warn and are not validated."""
        project = self._project(
            [{"id": "b", "type": "badge", "props": {"label": "x"}, "children": [{"id": "c", "type": "badge"}]}]
        )
        errors = validate_project(project, registry)
        assert _codes(errors) == [ErrorCode.CHILDREN_IGNORED]
        assert is_valid(project, registry)

    @pytest.mark.unit
    def test_theme_colors_extend_palette(self, registry):
        """Custom theme color names are valid COLOR values."""
        project = self._project(
            [{"id": "b", "type": "badge", "props": {"label": "x", "color": "brand"}}],
            theme={"colors": {"brand": "#123456"}},
        )
        assert validate_project(project, registry) == []

    @pytest.mark.unit
    def test_report_values_and_raise(self, registry):
        """The report keeps normalized values and raises on fatal errors."""
        project = self._project(
            [
                {"id": "ok", "type": "badge", "props": {"label": "x", "count": 120}},
                {"id": "bad", "type": "badge", "props": {"label": 3}},
                {"id": "worse", "type": "badge"},
            ]
        )
        report = check_project(project, registry)
        assert report.values["ok"]["count"] == 99
        assert len(report.warnings) == 1
        with pytest.raises(ProjectValidationError) as excinfo:
            report.raise_for_errors()
        assert len(excinfo.value.errors) == 2
        assert str(excinfo.value).startswith("2 validation error(s)")

    @pytest.mark.unit
    def test_default_registry_button(self):
        """The built-in button requires a label."""
        project = self._project([{"id": "cta", "type": "button", "props": {"variant": "primary"}}])
        errors = validate_project(project, build_default_registry())
        assert _codes(errors) == [ErrorCode.MISSING_REQUIRED_PROPERTY]
        assert errors[0].path == "cta.props.label"
