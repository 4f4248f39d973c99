"""Android targets (Jetpack Compose, XML views)."""

from .lib import (
    AndroidXmlAssembler,
    ComposeAssembler,
    GradleAssembler,
    action_bus,
    colors_xml,
    compose_theme,
    dimens_xml,
    view_theme,
)

__all__ = [
    "GradleAssembler",
    "ComposeAssembler",
    "AndroidXmlAssembler",
    "action_bus",
    "compose_theme",
    "view_theme",
    "colors_xml",
    "dimens_xml",
]
