"""React web target."""

from .lib import ReactAssembler, css_string, npm_spec, theme_css

__all__ = [
    "ReactAssembler",
    "npm_spec",
    "css_string",
    "theme_css",
]
