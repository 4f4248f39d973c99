"""Theme token resolution.

Turns a project's abstract ThemeTokens into a target-scoped ResolvedStyle.
Emitters ask the ResolvedStyle for code expressions (how a unit refers to
a token); target assemblers ask it for literal definitions (how the
scaffold's theme file defines the token).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from forge.ir import RadiusPreset, SpacingPreset, ThemeTokens, TypeScale, is_hex_color, normalize_hex
from forge.schema import Target, TargetFamily
from forge.syntax import (
    KOTLIN_KEYWORDS,
    SWIFT_KEYWORDS,
    format_number,
    js_string,
    to_identifier,
    to_kebab,
    to_snake,
)

# =============================================================================
# Token defaults
# =============================================================================

DEFAULT_COLORS: dict[str, str] = {
    "primary": "#3b82f6",
    "secondary": "#8b5cf6",
    "accent": "#06b6d4",
    "background": "#ffffff",
    "surface": "#f8fafc",
    "foreground": "#0f172a",
    "muted": "#64748b",
    "disabled": "#94a3b8",
    "error": "#ef4444",
    "success": "#22c55e",
    "warning": "#f59e0b",
    "onPrimary": "#ffffff",
}

COLOR_TOKENS: tuple[str, ...] = tuple(DEFAULT_COLORS)

SPACING_TOKENS: dict[str, float] = {"xs": 4, "sm": 8, "md": 16, "lg": 24, "xl": 32}

SPACING_MULTIPLIERS: dict[SpacingPreset, float] = {
    SpacingPreset.COMPACT: 0.875,
    SpacingPreset.NORMAL: 1.0,
    SpacingPreset.RELAXED: 1.25,
}

RADIUS_TOKENS: dict[str, float] = {"none": 0, "sm": 4, "md": 8, "lg": 12, "full": 9999}

FONT_SIZES: dict[str, float] = {"caption": 12, "body": 16, "heading": 20, "title": 28}

TYPE_SCALES: dict[TypeScale, float] = {
    TypeScale.COMPACT: 0.875,
    TypeScale.NORMAL: 1.0,
    TypeScale.LARGE: 1.125,
}


def hex_to_rgba(value: str) -> tuple[int, int, int, int]:
    """Split a hex color into 0-255 channels (alpha defaults to 255)."""
    digits = normalize_hex(value)[1:]
    alpha = int(digits[6:8], 16) if len(digits) == 8 else 255
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16), alpha


def _unit(channel: int) -> str:
    return f"{channel / 255:.3f}"


# =============================================================================
# Resolved style
# =============================================================================


@dataclass(frozen=True)
class ResolvedStyle:
    """Concrete token values for one target.

    Attributes:
        target: Target the style was resolved for.
        colors: Token name to normalized hex, defaults first, then custom tokens.
        spacing: Spacing token (xs..xl) to points.
        radii: Radius token to points; "base" is the project's chosen radius.
        font_sizes: Font size token to points.
        font_family: Body font family.
        heading_font: Heading font family.
        shadows: Whether elevated surfaces draw shadows.
        namespace: Code namespace the theme and support objects live in
            (the Android package; empty for other targets).
    """

    target: Target
    colors: Mapping[str, str]
    spacing: Mapping[str, float]
    radii: Mapping[str, float]
    font_sizes: Mapping[str, float]
    font_family: str = "Inter"
    heading_font: str = "Inter"
    shadows: bool = True
    namespace: str = ""
    _family: TargetFamily = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "colors", MappingProxyType(dict(self.colors)))
        object.__setattr__(self, "spacing", MappingProxyType(dict(self.spacing)))
        object.__setattr__(self, "radii", MappingProxyType(dict(self.radii)))
        object.__setattr__(self, "font_sizes", MappingProxyType(dict(self.font_sizes)))
        object.__setattr__(self, "_family", self.target.family)

    @property
    def family(self) -> TargetFamily:
        return self._family

    # -------------------------------------------------------------------------
    # Naming of tokens in generated code
    # -------------------------------------------------------------------------

    @staticmethod
    def css_var(group: str, name: str) -> str:
        """CSS custom property name, e.g. ("color", "primary") -> --color-primary."""
        return f"--{group}-{to_kebab(name)}"

    @staticmethod
    def swift_member(name: str) -> str:
        return to_identifier(name, SWIFT_KEYWORDS)

    @staticmethod
    def kotlin_member(name: str) -> str:
        return to_identifier(name, KOTLIN_KEYWORDS, pascal=True)

    @staticmethod
    def resource_name(group: str, name: str) -> str:
        """Android resource name, e.g. ("color", "onPrimary") -> forge_on_primary."""
        prefix = "forge" if group == "color" else f"forge_{group}"
        return f"{prefix}_{to_snake(name)}"

    # -------------------------------------------------------------------------
    # Code expressions used inside units
    # -------------------------------------------------------------------------

    def color(self, name: str) -> str:
        """Expression referencing a palette color.

        Raises:
            KeyError: If the token is not part of the palette.
        """
        if name not in self.colors:
            raise KeyError(f"Unknown color token '{name}'")
        family = self.family
        if family == TargetFamily.REACT:
            return js_string(f"var({self.css_var('color', name)})")
        if family in (TargetFamily.SWIFTUI, TargetFamily.UIKIT):
            return f"ForgeTheme.{self.swift_member(name)}"
        if family == TargetFamily.COMPOSE:
            return f"ForgeColors.{self.kotlin_member(name)}"
        return f"ContextCompat.getColor(context, R.color.{self.resource_name('color', name)})"

    def _dimension(self, group: str, table: Mapping[str, float], name: str) -> str:
        if name not in table:
            raise KeyError(f"Unknown {group} token '{name}'")
        family = self.family
        if family == TargetFamily.REACT:
            return js_string(f"var({self.css_var(group, name)})")
        swift_group = {"space": "Spacing", "radius": "Radius", "font": "FontSize"}[group]
        if family in (TargetFamily.SWIFTUI, TargetFamily.UIKIT):
            return f"ForgeTheme.{swift_group}.{self.swift_member(name)}"
        if family == TargetFamily.COMPOSE:
            return f"ForgeDimens.{swift_group}{self.kotlin_member(name)}"
        return f"resources.getDimension(R.dimen.{self.resource_name(group, name)})"

    def space(self, name: str) -> str:
        """Expression for a spacing token (xs..xl)."""
        return self._dimension("space", self.spacing, name)

    def corner(self, name: str = "base") -> str:
        """Expression for a radius token; defaults to the project's base radius."""
        return self._dimension("radius", self.radii, name)

    def font_size(self, name: str) -> str:
        """Expression for a font size token (caption, body, heading, title)."""
        return self._dimension("font", self.font_sizes, name)

    def color_arg(self, value: str) -> str:
        """Render a COLOR property value (hex or palette token).

        Code families get an expression. The Android view family gets the
        normalized attribute text (token name or #AARRGGBB) that the view
        resolves at runtime.
        """
        is_token = value in self.colors
        family = self.family
        if family == TargetFamily.ANDROID_VIEW:
            return value if is_token else self.color_literal_hex(value)
        if is_token:
            return self.color(value)
        return self.color_value(value)

    # -------------------------------------------------------------------------
    # Literal definitions used by theme files
    # -------------------------------------------------------------------------

    def color_value(self, hex_value: str) -> str:
        """Literal color value in the unit language of the target."""
        r, g, b, a = hex_to_rgba(hex_value)
        family = self.family
        if family == TargetFamily.REACT:
            return js_string(normalize_hex(hex_value))
        if family == TargetFamily.SWIFTUI:
            return (
                f"Color(red: {_unit(r)}, green: {_unit(g)}, blue: {_unit(b)}, "
                f"opacity: {_unit(a)})"
            )
        if family == TargetFamily.UIKIT:
            return (
                f"UIColor(red: {_unit(r)}, green: {_unit(g)}, blue: {_unit(b)}, "
                f"alpha: {_unit(a)})"
            )
        if family == TargetFamily.COMPOSE:
            return f"Color(0x{a:02X}{r:02X}{g:02X}{b:02X})"
        return f"Color.parseColor({js_string(self.color_literal_hex(hex_value))})"

    @staticmethod
    def color_literal_hex(hex_value: str) -> str:
        """#AARRGGBB form used by Android resources."""
        r, g, b, a = hex_to_rgba(hex_value)
        return f"#{a:02X}{r:02X}{g:02X}{b:02X}"

    def color_definitions(self) -> list[tuple[str, str]]:
        """(token, literal) pairs for every palette color, in palette order."""
        if self.family == TargetFamily.ANDROID_VIEW:
            return [(name, self.color_literal_hex(v)) for name, v in self.colors.items()]
        if self.family == TargetFamily.REACT:
            return list(self.colors.items())
        return [(name, self.color_value(v)) for name, v in self.colors.items()]

    def dimension_literal(self, value: float, sp: bool = False) -> str:
        """Literal for a point value (px, CGFloat, dp/sp)."""
        number = format_number(value)
        family = self.family
        if family == TargetFamily.REACT:
            return f"{number}px"
        if family in (TargetFamily.SWIFTUI, TargetFamily.UIKIT):
            return number
        if family == TargetFamily.COMPOSE:
            return f"{number}.{'sp' if sp else 'dp'}"
        return f"{number}{'sp' if sp else 'dp'}"


# =============================================================================
# Resolver
# =============================================================================


class ThemeResolver:
    """Resolves ThemeTokens against the built-in defaults.

    Stateless and safe to share between threads.

    Example:
        >>> style = ThemeResolver().resolve(project.theme, Target.WEB_REACT)
        >>> style.color("primary")
        '"var(--color-primary)"'
    """

    def resolve(
        self,
        tokens: ThemeTokens | None,
        target: Target | str,
        namespace: str = "",
    ) -> ResolvedStyle:
        """Resolve tokens for a target, filling every default."""
        tokens = tokens or ThemeTokens()
        target = Target.parse(target)

        colors = dict(DEFAULT_COLORS)
        for name, value in tokens.colors.items():
            if is_hex_color(value):
                colors[name] = normalize_hex(value)

        multiplier = SPACING_MULTIPLIERS[SpacingPreset(tokens.spacing)]
        spacing = {name: base * multiplier for name, base in SPACING_TOKENS.items()}
        spacing.update(tokens.spacing_scale)

        radii = dict(RADIUS_TOKENS)
        radii.update(tokens.radius_scale)
        radii["base"] = radii.get(RadiusPreset(tokens.border_radius).value, RADIUS_TOKENS["md"])

        scale = TYPE_SCALES[TypeScale(tokens.typography.scale)]
        font_sizes = {name: size * scale for name, size in FONT_SIZES.items()}

        typography = tokens.typography
        return ResolvedStyle(
            target=target,
            colors=colors,
            spacing=spacing,
            radii=radii,
            font_sizes=font_sizes,
            font_family=typography.font_family,
            heading_font=typography.heading_font or typography.font_family,
            shadows=tokens.shadows,
            namespace=namespace,
        )


__all__ = [
    "DEFAULT_COLORS",
    "COLOR_TOKENS",
    "SPACING_TOKENS",
    "SPACING_MULTIPLIERS",
    "RADIUS_TOKENS",
    "FONT_SIZES",
    "TYPE_SCALES",
    "hex_to_rgba",
    "ResolvedStyle",
    "ThemeResolver",
]
