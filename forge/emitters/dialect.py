"""Call-site serializers, one per emitter family.

A usage is described as a structured Call (unit name, typed argument
values, already-rendered child usages) and rendered by the family's
Dialect. Dialects are the only place where argument values become source
text, so every user string goes through the family's literal encoder.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union

from forge.schema import TargetFamily
from forge.syntax import (
    KOTLIN_KEYWORDS,
    SWIFT_KEYWORDS,
    android_text,
    format_number,
    indent,
    js_string,
    json_value,
    kotlin_string,
    swift_string,
    to_identifier,
    xml_attr,
)

# =============================================================================
# Argument values
# =============================================================================


@dataclass(frozen=True)
class Str:
    """Untrusted text; always encoded."""

    value: str


@dataclass(frozen=True)
class Num:
    value: float


@dataclass(frozen=True)
class Bool:
    value: bool


@dataclass(frozen=True)
class EnumCase:
    """One option of a generated enum type.

    Attributes:
        value: Raw option value (as stored in the schema).
        type_name: Generated enum type, e.g. "ForgeButtonVariant".
    """

    value: str
    type_name: str


@dataclass(frozen=True)
class StrList:
    """A list of display strings (ARRAY properties)."""

    values: tuple[str, ...]


@dataclass(frozen=True)
class Expr:
    """Trusted code produced by the engine (theme references)."""

    code: str


Value = Union[Str, Num, Bool, EnumCase, StrList, Expr]


@dataclass(frozen=True)
class Call:
    """A unit invocation.

    Attributes:
        unit: Unit name (or fully qualified view class for XML).
        args: (argument name, value) pairs in schema order.
        children: Rendered child usages in sibling order.
    """

    unit: str
    args: tuple[tuple[str, Value], ...] = ()
    children: tuple[str, ...] = ()


def swift_case(option: str) -> str:
    """Swift enum case name for an option value."""
    return to_identifier(option, SWIFT_KEYWORDS)


def kotlin_case(option: str) -> str:
    """Kotlin enum entry name for an option value."""
    return to_identifier(option, KOTLIN_KEYWORDS, pascal=True)


# =============================================================================
# Dialects
# =============================================================================


class Dialect(ABC):
    """Serializer for one family's call syntax."""

    family: TargetFamily

    @abstractmethod
    def value(self, value: Value) -> str:
        """Render one argument value."""
        ...

    @abstractmethod
    def render(self, call: Call) -> str:
        """Render a complete usage, children included."""
        ...


class JsxDialect(Dialect):
    """`<Button label={"Sign In"} />` with nested JSX children."""

    family = TargetFamily.REACT

    def value(self, value: Value) -> str:
        if isinstance(value, Str):
            return js_string(value.value)
        if isinstance(value, Num):
            return format_number(value.value)
        if isinstance(value, Bool):
            return "true" if value.value else "false"
        if isinstance(value, EnumCase):
            return js_string(value.value)
        if isinstance(value, StrList):
            return "[" + ", ".join(js_string(v) for v in value.values) + "]"
        return value.code

    def render(self, call: Call) -> str:
        attrs = "".join(f" {name}={{{self.value(v)}}}" for name, v in call.args)
        if not call.children:
            return f"<{call.unit}{attrs} />"
        body = "\n".join(indent(child, 1, "  ") for child in call.children)
        return f"<{call.unit}{attrs}>\n{body}\n</{call.unit}>"


class SwiftUIDialect(Dialect):
    """`ForgeButton(label: "Sign In", variant: .primary)` with trailing closures."""

    family = TargetFamily.SWIFTUI

    def value(self, value: Value) -> str:
        if isinstance(value, Str):
            return swift_string(value.value)
        if isinstance(value, Num):
            return format_number(value.value)
        if isinstance(value, Bool):
            return "true" if value.value else "false"
        if isinstance(value, EnumCase):
            return "." + swift_case(value.value)
        if isinstance(value, StrList):
            return "[" + ", ".join(swift_string(v) for v in value.values) + "]"
        return value.code

    def _args(self, call: Call) -> str:
        return ", ".join(
            f"{to_identifier(name, SWIFT_KEYWORDS)}: {self.value(v)}" for name, v in call.args
        )

    def render(self, call: Call) -> str:
        args = self._args(call)
        if not call.children:
            return f"{call.unit}({args})"
        head = f"{call.unit}({args})" if args else call.unit
        body = "\n".join(indent(child) for child in call.children)
        return f"{head} {{\n{body}\n}}"


class UIKitDialect(SwiftUIDialect):
    """`ForgeStack(direction: .vertical, arrangedSubviews: [...])`."""

    family = TargetFamily.UIKIT

    def render(self, call: Call) -> str:
        args = self._args(call)
        if not call.children:
            return f"{call.unit}({args})"
        children = ",\n".join(indent(child) for child in call.children)
        subviews = f"arrangedSubviews: [\n{children}\n]"
        return f"{call.unit}({args}, {subviews})" if args else f"{call.unit}({subviews})"


class ComposeDialect(Dialect):
    """`ForgeButton(label = "Sign In")` with trailing content lambdas."""

    family = TargetFamily.COMPOSE

    def value(self, value: Value) -> str:
        if isinstance(value, Str):
            return kotlin_string(value.value)
        if isinstance(value, Num):
            return format_number(value.value) + "f"
        if isinstance(value, Bool):
            return "true" if value.value else "false"
        if isinstance(value, EnumCase):
            return f"{value.type_name}.{kotlin_case(value.value)}"
        if isinstance(value, StrList):
            return "listOf(" + ", ".join(kotlin_string(v) for v in value.values) + ")"
        return value.code

    def render(self, call: Call) -> str:
        args = ", ".join(
            f"{to_identifier(name, KOTLIN_KEYWORDS)} = {self.value(v)}" for name, v in call.args
        )
        if not call.children:
            return f"{call.unit}({args})"
        head = f"{call.unit}({args})" if args else call.unit
        body = "\n".join(indent(child) for child in call.children)
        return f"{head} {{\n{body}\n}}"


class AndroidXmlDialect(Dialect):
    """`<com.app.ui.components.ForgeButton app:button_label="Sign In" />`.

    Argument names are already the resource attribute names. Values are
    attribute text: strings get resource escaping, lists are JSON.
    """

    family = TargetFamily.ANDROID_VIEW

    LAYOUT_ATTRS = (
        ("android:layout_width", "match_parent"),
        ("android:layout_height", "wrap_content"),
    )

    def value(self, value: Value) -> str:
        if isinstance(value, Str):
            return android_text(value.value)
        if isinstance(value, Num):
            return format_number(value.value)
        if isinstance(value, Bool):
            return "true" if value.value else "false"
        if isinstance(value, EnumCase):
            return xml_attr(value.value)
        if isinstance(value, StrList):
            return android_text(json_value(list(value.values)))
        return xml_attr(value.code)

    def render(self, call: Call) -> str:
        lines = [f"<{call.unit}"]
        lines += [f'    {name}="{v}"' for name, v in self.LAYOUT_ATTRS]
        lines += [f'    app:{name}="{self.value(v)}"' for name, v in call.args]
        if not call.children:
            lines[-1] += " />"
            return "\n".join(lines)
        lines[-1] += ">"
        body = "\n".join(indent(child) for child in call.children)
        return "\n".join(lines) + f"\n{body}\n</{call.unit}>"


DIALECTS: dict[TargetFamily, Dialect] = {
    TargetFamily.REACT: JsxDialect(),
    TargetFamily.SWIFTUI: SwiftUIDialect(),
    TargetFamily.UIKIT: UIKitDialect(),
    TargetFamily.COMPOSE: ComposeDialect(),
    TargetFamily.ANDROID_VIEW: AndroidXmlDialect(),
}


def get_dialect(family: TargetFamily) -> Dialect:
    """Get the serializer for a family."""
    return DIALECTS[family]


__all__ = [
    "Str",
    "Num",
    "Bool",
    "EnumCase",
    "StrList",
    "Expr",
    "Value",
    "Call",
    "Dialect",
    "JsxDialect",
    "SwiftUIDialect",
    "UIKitDialect",
    "ComposeDialect",
    "AndroidXmlDialect",
    "DIALECTS",
    "get_dialect",
    "swift_case",
    "kotlin_case",
]
