"""Tests for the schema vocabulary."""

import pytest

from .lib import (
    Platform,
    PropertyKind,
    PropertySchema,
    Target,
    TargetFamily,
    targets_in_family,
)


class TestTarget:
    """Tests for Target parsing and metadata."""

    @pytest.mark.unit
    def test_every_target_has_platform_and_family(self):
        """Metadata tables cover every target."""
        for target in Target:
            assert isinstance(target.platform, Platform)
            assert isinstance(target.family, TargetFamily)

    @pytest.mark.unit
    def test_parse_full_id(self):
        """Full ids parse to their member."""
        assert Target.parse("android-xml") is Target.ANDROID_XML

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("alias", "expected"),
        [
            ("web", Target.WEB_REACT),
            ("IOS", Target.IOS_SWIFTUI),
            ("android", Target.ANDROID_COMPOSE),
            ("desktop", Target.DESKTOP_TAURI),
        ],
    )
    def test_parse_platform_alias(self, alias, expected):
        """Bare platform names resolve to the default target."""
        assert Target.parse(alias) is expected

    @pytest.mark.unit
    def test_parse_unknown_raises(self):
        """Unknown ids raise ValueError listing the options."""
        with pytest.raises(ValueError, match="Available"):
            Target.parse("flutter")

    @pytest.mark.unit
    def test_desktop_shells_share_react_family(self):
        """Tauri and Electron reuse the React emitters."""
        react = targets_in_family(TargetFamily.REACT)
        assert react == (
            Target.WEB_REACT,
            Target.DESKTOP_TAURI,
            Target.DESKTOP_ELECTRON,
        )


class TestPropertySchema:
    """Tests for PropertySchema invariants and export."""

    @pytest.mark.unit
    def test_enum_requires_options(self):
        """Enum properties without options are rejected."""
        with pytest.raises(ValueError, match="needs options"):
            PropertySchema("variant", PropertyKind.ENUM)

    @pytest.mark.unit
    def test_enum_default_must_be_option(self):
        """Enum defaults must be listed in options."""
        with pytest.raises(ValueError, match="not an option"):
            PropertySchema(
                "size", PropertyKind.ENUM, default="xl", options=("sm", "md")
            )

    @pytest.mark.unit
    def test_is_immutable(self):
        """Schemas are frozen after construction."""
        prop = PropertySchema("label", PropertyKind.STRING, required=True)
        with pytest.raises(AttributeError):
            prop.required = False  # type: ignore[misc]

    @pytest.mark.unit
    def test_to_dict_omits_unset_fields(self):
        """Export only includes meaningful keys."""
        prop = PropertySchema("label", PropertyKind.STRING, required=True)
        assert prop.to_dict() == {
            "name": "label",
            "kind": "string",
            "required": True,
        }

    @pytest.mark.unit
    def test_to_dict_includes_options_and_bounds(self):
        """Enum options and numeric bounds are exported."""
        prop = PropertySchema(
            "ratio", PropertyKind.NUMBER, default=1.0, minimum=0.5, maximum=2.0
        )
        data = prop.to_dict()
        assert data["default"] == 1.0
        assert data["minimum"] == 0.5
        assert data["maximum"] == 2.0
