"""Target emitters, usage dialects and fallback placeholders."""

from .dialect import (
    DIALECTS,
    AndroidXmlDialect,
    Bool,
    Call,
    ComposeDialect,
    Dialect,
    EnumCase,
    Expr,
    JsxDialect,
    Num,
    Str,
    StrList,
    SwiftUIDialect,
    UIKitDialect,
    get_dialect,
    kotlin_case,
    swift_case,
)
from .lib import (
    DEFAULT_NAMESPACE,
    EMITTER_CLASSES,
    AndroidViewEmitter,
    ComposeEmitter,
    Emitter,
    ReactEmitter,
    RenderNode,
    SwiftUIEmitter,
    TemplateEmitter,
    UIKitEmitter,
    UnitTemplate,
    build_emitters,
    display_string,
)
from .placeholder import (
    PLACEHOLDER_EMITTERS,
    PLACEHOLDER_NAME,
    PLACEHOLDER_SCHEMA,
    placeholder_emitter,
    placeholder_node,
)

__all__ = [
    # Emitters
    "Emitter",
    "TemplateEmitter",
    "ReactEmitter",
    "SwiftUIEmitter",
    "UIKitEmitter",
    "ComposeEmitter",
    "AndroidViewEmitter",
    "EMITTER_CLASSES",
    "DEFAULT_NAMESPACE",
    "RenderNode",
    "UnitTemplate",
    "build_emitters",
    "display_string",
    # Dialects
    "Dialect",
    "JsxDialect",
    "SwiftUIDialect",
    "UIKitDialect",
    "ComposeDialect",
    "AndroidXmlDialect",
    "DIALECTS",
    "get_dialect",
    "Call",
    "Str",
    "Num",
    "Bool",
    "EnumCase",
    "StrList",
    "Expr",
    "swift_case",
    "kotlin_case",
    # Placeholders
    "PLACEHOLDER_NAME",
    "PLACEHOLDER_SCHEMA",
    "PLACEHOLDER_EMITTERS",
    "placeholder_emitter",
    "placeholder_node",
]
