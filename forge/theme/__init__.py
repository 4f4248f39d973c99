"""Theme token resolution."""

from .lib import (
    COLOR_TOKENS,
    DEFAULT_COLORS,
    FONT_SIZES,
    RADIUS_TOKENS,
    SPACING_MULTIPLIERS,
    SPACING_TOKENS,
    TYPE_SCALES,
    ResolvedStyle,
    ThemeResolver,
    hex_to_rgba,
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
