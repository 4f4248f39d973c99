"""Unit tests for theme resolution."""

import pytest

from forge.ir import ThemeTokens
from forge.schema import Target
from forge.theme import COLOR_TOKENS, DEFAULT_COLORS, ThemeResolver, hex_to_rgba


@pytest.fixture
def resolver() -> ThemeResolver:
    return ThemeResolver()


class TestResolve:
    """Tests for ThemeResolver.resolve."""

    @pytest.mark.unit
    def test_defaults_fill_every_token(self, resolver):
        """An empty theme resolves to the default palette and scales."""
        style = resolver.resolve(ThemeTokens(), Target.WEB_REACT)
        assert tuple(style.colors) == COLOR_TOKENS
        assert style.colors["primary"] == "#3b82f6"
        assert dict(style.spacing) == {"xs": 4, "sm": 8, "md": 16, "lg": 24, "xl": 32}
        assert style.radii["base"] == 8
        assert style.font_sizes["body"] == 16
        assert style.font_family == "Inter"

    @pytest.mark.unit
    def test_none_tokens(self, resolver):
        """Missing tokens behave like an empty theme."""
        assert resolver.resolve(None, "web") == resolver.resolve(ThemeTokens(), "web-react")

    @pytest.mark.unit
    def test_overrides_and_custom_colors(self, resolver):
        """Project colors override defaults; custom tokens are appended."""
        tokens = ThemeTokens(colors={"primary": "#FF0000", "brand": "#123456"})
        style = resolver.resolve(tokens, Target.WEB_REACT)
        assert style.colors["primary"] == "#ff0000"
        assert list(style.colors)[-1] == "brand"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("preset", "md"),
        [("compact", 14), ("normal", 16), ("relaxed", 20)],
    )
    def test_spacing_presets(self, resolver, preset, md):
        """Spacing presets scale every token."""
        style = resolver.resolve(ThemeTokens(spacing=preset), Target.IOS_SWIFTUI)
        assert style.spacing["md"] == md

    @pytest.mark.unit
    def test_spacing_scale_overrides_preset(self, resolver):
        """Explicit spacing tokens win over the preset."""
        tokens = ThemeTokens.model_validate({"spacing": "relaxed", "spacingScale": {"md": 18}})
        style = resolver.resolve(tokens, Target.IOS_SWIFTUI)
        assert style.spacing["md"] == 18
        assert style.spacing["sm"] == 10

    @pytest.mark.unit
    def test_radius_base_follows_preset(self, resolver):
        """The base radius is the chosen preset's value."""
        style = resolver.resolve(ThemeTokens(border_radius="full"), Target.ANDROID_COMPOSE)
        assert style.radii["base"] == 9999

    @pytest.mark.unit
    def test_type_scale(self, resolver):
        """Typography scale multiplies font sizes."""
        tokens = ThemeTokens.model_validate({"typography": {"scale": "large"}})
        style = resolver.resolve(tokens, Target.ANDROID_COMPOSE)
        assert style.font_sizes["body"] == 18

    @pytest.mark.unit
    def test_resolution_is_pure(self, resolver):
        """Resolving twice yields equal styles."""
        tokens = ThemeTokens(colors={"primary": "#00ff00"})
        assert resolver.resolve(tokens, Target.IOS_UIKIT) == resolver.resolve(tokens, Target.IOS_UIKIT)


class TestExpressions:
    """Tests for per-family code expressions."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("target", "expected"),
        [
            (Target.WEB_REACT, '"var(--color-primary)"'),
            (Target.DESKTOP_TAURI, '"var(--color-primary)"'),
            (Target.IOS_SWIFTUI, "ForgeTheme.primary"),
            (Target.IOS_UIKIT, "ForgeTheme.primary"),
            (Target.ANDROID_COMPOSE, "ForgeColors.Primary"),
            (Target.ANDROID_XML, "ContextCompat.getColor(context, R.color.forge_primary)"),
        ],
    )
    def test_color_expression(self, resolver, target, expected):
        """Each family references palette colors its own way."""
        assert resolver.resolve(None, target).color("primary") == expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("target", "expected"),
        [
            (Target.WEB_REACT, '"var(--space-md)"'),
            (Target.IOS_SWIFTUI, "ForgeTheme.Spacing.md"),
            (Target.ANDROID_COMPOSE, "ForgeDimens.SpacingMd"),
            (Target.ANDROID_XML, "resources.getDimension(R.dimen.forge_space_md)"),
        ],
    )
    def test_space_expression(self, resolver, target, expected):
        """Spacing tokens are referenced, never inlined."""
        assert resolver.resolve(None, target).space("md") == expected

    @pytest.mark.unit
    def test_unknown_token_raises(self, resolver):
        """Unknown tokens raise KeyError."""
        style = resolver.resolve(None, Target.WEB_REACT)
        with pytest.raises(KeyError):
            style.color("nope")
        with pytest.raises(KeyError):
            style.space("xxl")

    @pytest.mark.unit
    def test_color_arg(self, resolver):
        """Color props accept tokens and hex values."""
        compose = resolver.resolve(None, Target.ANDROID_COMPOSE)
        assert compose.color_arg("accent") == "ForgeColors.Accent"
        assert compose.color_arg("#3b82f6") == "Color(0xFF3B82F6)"
        xml = resolver.resolve(None, Target.ANDROID_XML)
        assert xml.color_arg("accent") == "accent"
        assert xml.color_arg("#3b82f680") == "#803B82F6"

    @pytest.mark.unit
    def test_swift_literal(self, resolver):
        """Swift colors use unit channels."""
        style = resolver.resolve(None, Target.IOS_SWIFTUI)
        assert style.color_value("#ffffff") == (
            "Color(red: 1.000, green: 1.000, blue: 1.000, opacity: 1.000)"
        )

    @pytest.mark.unit
    def test_dimension_literals(self, resolver):
        """Dimensions carry the unit of the target."""
        assert resolver.resolve(None, Target.WEB_REACT).dimension_literal(14.0) == "14px"
        assert resolver.resolve(None, Target.ANDROID_COMPOSE).dimension_literal(16, sp=True) == "16.sp"
        assert resolver.resolve(None, Target.ANDROID_XML).dimension_literal(3.5) == "3.5dp"

    @pytest.mark.unit
    def test_hex_to_rgba(self):
        """Channels are split from short and long forms."""
        assert hex_to_rgba("#fff") == (255, 255, 255, 255)
        assert hex_to_rgba(DEFAULT_COLORS["primary"]) == (59, 130, 246, 255)
