"""iOS targets (SwiftUI, UIKit)."""

from .lib import SwiftAssembler, SwiftUIAssembler, UIKitAssembler, dependency_spec, swift_theme

__all__ = [
    "SwiftAssembler",
    "SwiftUIAssembler",
    "UIKitAssembler",
    "swift_theme",
    "dependency_spec",
]
