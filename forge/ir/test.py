"""Unit tests for IR models."""

import pytest
from pydantic import ValidationError

from forge.ir import (
    ComponentInstance,
    FileKind,
    ManifestFile,
    Project,
    ProjectManifest,
    RadiusPreset,
    SpacingPreset,
    TargetOptions,
    ThemeTokens,
    TypeScale,
    language_for_path,
    normalize_hex,
)
from forge.schema import Target


class TestComponentInstance:
    """Tests for ComponentInstance model."""

    @pytest.mark.unit
    def test_persisted_shape(self):
        """Accepts the editor's {id, type, props, children} shape."""
        instance = ComponentInstance.model_validate(
            {
                "id": "root",
                "type": "stack",
                "props": {"direction": "vertical"},
                "children": [{"id": "cta", "type": "button", "props": {"label": "Go"}}],
            }
        )
        assert instance.type_id == "stack"
        assert instance.properties == {"direction": "vertical"}
        assert instance.children[0].id == "cta"

    @pytest.mark.unit
    def test_capsule_id_alias(self):
        """The original capsuleId key is accepted too."""
        instance = ComponentInstance.model_validate({"id": "a", "capsuleId": "text"})
        assert instance.type_id == "text"

    @pytest.mark.unit
    def test_field_names(self):
        """Python field names populate the model."""
        instance = ComponentInstance(id="a", type_id="text", properties={"content": "Hi"})
        assert instance.properties["content"] == "Hi"
        assert instance.children == []

    @pytest.mark.unit
    def test_null_children_become_empty(self):
        """Explicit nulls are treated as absent."""
        instance = ComponentInstance.model_validate(
            {"id": "a", "type": "text", "props": None, "children": None}
        )
        assert instance.properties == {}
        assert instance.children == []

    @pytest.mark.unit
    def test_empty_id_rejected(self):
        """Instance ids must not be empty."""
        with pytest.raises(ValidationError):
            ComponentInstance(id="", type_id="text")

    @pytest.mark.unit
    def test_serializes_with_editor_keys(self):
        """by_alias dumps use the persisted key names."""
        instance = ComponentInstance(id="a", type_id="text", properties={"content": "x"})
        dumped = instance.model_dump(by_alias=True)
        assert dumped["type"] == "text"
        assert dumped["props"] == {"content": "x"}


class TestThemeTokens:
    """Tests for ThemeTokens model."""

    @pytest.mark.unit
    def test_defaults(self):
        """An empty theme is valid."""
        theme = ThemeTokens()
        assert theme.colors == {}
        assert theme.spacing == SpacingPreset.NORMAL
        assert theme.border_radius == RadiusPreset.MD
        assert theme.typography.scale == TypeScale.NORMAL

    @pytest.mark.unit
    def test_colors_are_normalized(self):
        """Hex colors are lowercased and expanded."""
        theme = ThemeTokens(colors={"primary": "#3B82F6", "accent": "#FFF"})
        assert theme.colors == {"primary": "#3b82f6", "accent": "#ffffff"}

    @pytest.mark.unit
    def test_nested_text_colors(self):
        """The nested text form maps onto foreground/muted/disabled."""
        theme = ThemeTokens.model_validate(
            {"colors": {"text": {"primary": "#111111", "secondary": "#222222"}}}
        )
        assert theme.colors["foreground"] == "#111111"
        assert theme.colors["muted"] == "#222222"
        assert "text" not in theme.colors

    @pytest.mark.unit
    @pytest.mark.parametrize("color", ["blue", "#12", "#12345", 42, "rgb(0,0,0)"])
    def test_invalid_colors_rejected(self, color):
        """Only hex strings are accepted."""
        with pytest.raises(ValidationError):
            ThemeTokens(colors={"primary": color})

    @pytest.mark.unit
    def test_invalid_token_name_rejected(self):
        """Token names must be plain identifiers."""
        with pytest.raises(ValidationError):
            ThemeTokens(colors={"brand-color": "#000000"})

    @pytest.mark.unit
    def test_token_names_canonical(self):
        """Names are stored in camelCase, so `Primary` overrides `primary`."""
        theme = ThemeTokens(colors={"Primary": "#000000", "BrandDark": "#111111"})
        assert theme.colors == {"primary": "#000000", "brandDark": "#111111"}

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "colors",
        [
            {"primary": "#000000", "Primary": "#111111"},
            {"brandDark": "#000000", "BrandDark": "#111111"},
        ],
    )
    def test_colliding_color_names_rejected(self, colors):
        """Two names that become the same identifier are rejected."""
        with pytest.raises(ValidationError, match="name the same token"):
            ThemeTokens(colors=colors)

    @pytest.mark.unit
    def test_colliding_scale_names_rejected(self):
        """Spacing overrides follow the same naming rule."""
        with pytest.raises(ValidationError, match="name the same token"):
            ThemeTokens.model_validate({"spacingScale": {"md": 12, "MD": 14}})

    @pytest.mark.unit
    def test_camel_case_aliases(self):
        """Persisted camelCase keys are accepted."""
        theme = ThemeTokens.model_validate(
            {
                "borderRadius": "lg",
                "spacingScale": {"md": 20},
                "typography": {"fontFamily": "Roboto", "scale": "large"},
            }
        )
        assert theme.border_radius == RadiusPreset.LG
        assert theme.spacing_scale == {"md": 20.0}
        assert theme.typography.font_family == "Roboto"
        assert theme.typography.scale == TypeScale.LARGE

    @pytest.mark.unit
    def test_spacing_map_becomes_scale(self):
        """A spacing object is read as explicit token overrides."""
        theme = ThemeTokens.model_validate({"spacing": {"sm": 6, "lg": 30}})
        assert theme.spacing == SpacingPreset.NORMAL
        assert theme.spacing_scale == {"sm": 6.0, "lg": 30.0}

    @pytest.mark.unit
    def test_negative_scale_rejected(self):
        """Scale overrides must be non-negative numbers."""
        with pytest.raises(ValidationError):
            ThemeTokens.model_validate({"radiusScale": {"md": -1}})


class TestProject:
    """Tests for the Project model."""

    @pytest.mark.unit
    def test_minimal_project(self):
        """Only the id is required."""
        project = Project(id="p1")
        assert project.display_name == "p1"
        assert project.version == "1.0.0"
        assert project.capsules == []

    @pytest.mark.unit
    def test_null_theme(self):
        """A null theme falls back to defaults."""
        project = Project.model_validate({"id": "p1", "theme": None})
        assert project.theme == ThemeTokens()

    @pytest.mark.unit
    def test_walk_is_depth_first_in_sibling_order(self):
        """walk() visits children before later siblings."""
        project = Project.model_validate(
            {
                "id": "p1",
                "capsules": [
                    {
                        "id": "a",
                        "type": "stack",
                        "children": [
                            {"id": "a1", "type": "text"},
                            {"id": "a2", "type": "text"},
                        ],
                    },
                    {"id": "b", "type": "text"},
                ],
            }
        )
        visited = [(instance.id, path) for instance, path in project.walk()]
        assert visited == [
            ("a", "capsules[0]"),
            ("a1", "capsules[0].children[0]"),
            ("a2", "capsules[0].children[1]"),
            ("b", "capsules[1]"),
        ]


class TestTargetOptions:
    """Tests for TargetOptions."""

    @pytest.mark.unit
    def test_aliases(self):
        """camelCase keys map to fields."""
        options = TargetOptions.model_validate(
            {"appName": "Demo", "packageName": "com.acme.demo", "minSdk": 26}
        )
        assert options.app_name == "Demo"
        assert options.package_name == "com.acme.demo"
        assert options.min_sdk == 26

    @pytest.mark.unit
    @pytest.mark.parametrize("path", ["/etc/passwd", "../outside.txt", "a/../../b"])
    def test_extra_file_paths_must_stay_inside(self, path):
        """Absolute and parent-relative paths are rejected."""
        with pytest.raises(ValidationError):
            TargetOptions.model_validate({"extraFiles": [{"path": path, "content": ""}]})

    @pytest.mark.unit
    def test_invalid_package_name(self):
        """Package names must be reverse-DNS."""
        with pytest.raises(ValidationError):
            TargetOptions(package_name="not a package")


class TestManifest:
    """Tests for generated output records."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("path", "language"),
        [
            ("src/App.tsx", "typescript"),
            ("Package.swift", "swift"),
            ("app/build.gradle.kts", "kotlin"),
            ("res/values/colors.xml", "xml"),
            (".gitignore", "text"),
        ],
    )
    def test_language_for_path(self, path, language):
        """Languages are derived from suffixes."""
        assert language_for_path(path) == language

    @pytest.mark.unit
    def test_sizes_are_utf8_bytes(self):
        """Sizes count encoded bytes, not characters."""
        manifest = ProjectManifest(
            target=Target.WEB_REACT,
            files=[
                ManifestFile("a.txt", "é", FileKind.DOCS),
                ManifestFile("b.txt", "ab", FileKind.DOCS),
            ],
        )
        assert manifest.total_size == 4
        assert manifest.file_count == 2
        assert manifest.file("b.txt").content == "ab"
        assert manifest.file("missing") is None

    @pytest.mark.unit
    def test_file_to_dict(self):
        """Files serialize with their language."""
        data = ManifestFile("src/App.tsx", "x", FileKind.ENTRY).to_dict()
        assert data == {
            "path": "src/App.tsx",
            "content": "x",
            "language": "typescript",
            "kind": "entry",
        }

    @pytest.mark.unit
    def test_normalize_hex(self):
        """Short hex expands to six digits."""
        assert normalize_hex("#ABC") == "#aabbcc"
        with pytest.raises(ValueError):
            normalize_hex("nope")
