"""Target emitters.

An emitter turns one validated instance into a SourceFragment for one
target: the shared unit definition (derived from the capsule's property
schema plus a family-specific template) and the instance's usage.

Families share all the machinery here; capsules only supply UnitTemplates
with the family-specific rendering code.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from forge.ir import SourceFragment, TargetFile
from forge.schema import PropertyKind, PropertySchema, Target, TargetFamily, targets_in_family
from forge.syntax import (
    format_number,
    indent,
    js_string,
    json_value,
    kotlin_string,
    swift_string,
    to_pascal,
    to_snake,
)
from forge.theme import ResolvedStyle

from .dialect import (
    Bool,
    Call,
    Dialect,
    EnumCase,
    Expr,
    Num,
    Str,
    StrList,
    Value,
    get_dialect,
    kotlin_case,
    swift_case,
)

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "com.forge.app"


# =============================================================================
# Inputs
# =============================================================================


@dataclass(frozen=True)
class RenderNode:
    """One validated instance, ready for emission.

    Attributes:
        instance_id: Source instance id.
        type_id: Source capsule type id.
        values: Validated property values (defaults substituted).
        schema: Property schemas of the capsule, in declared order.
        children: Already-rendered child usages, in sibling order.
        accepts_children: Whether the unit takes child content.
    """

    instance_id: str
    type_id: str
    values: Mapping[str, Any] = field(default_factory=dict)
    schema: tuple[PropertySchema, ...] = ()
    children: tuple[str, ...] = ()
    accepts_children: bool = False


TemplateBody = Union[str, Callable[[ResolvedStyle], str]]


@dataclass(frozen=True)
class UnitTemplate:
    """Family-specific rendering code of one capsule.

    Attributes:
        body: Unit body (dedented), or a function of the resolved theme.
        members: Extra declarations: module-level helpers for React and
            Compose, type members for Swift and Android view units.
        imports: Source-level import lines/modules the body needs.
        dependencies: External packages the unit needs.
        base: Superclass for UIKit and Android view units.
        resources: Auxiliary files (drawables and similar).
    """

    body: TemplateBody
    members: TemplateBody = ""
    imports: tuple[str, ...] = ()
    dependencies: tuple[str, ...] = ()
    base: str = ""
    resources: Callable[[ResolvedStyle], tuple[TargetFile, ...]] | None = None

    def render_body(self, theme: ResolvedStyle) -> str:
        body = self.body(theme) if callable(self.body) else self.body
        return body.strip("\n")

    def render_members(self, theme: ResolvedStyle) -> str:
        members = self.members(theme) if callable(self.members) else self.members
        return members.strip("\n")


def display_string(value: Any) -> str:
    """Render an array element as display text."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return json_value(value)


# =============================================================================
# Emitter hierarchy
# =============================================================================


class Emitter(ABC):
    """Produces a SourceFragment for one (capsule type, target) pair."""

    family: TargetFamily

    @abstractmethod
    def emit(self, node: RenderNode, theme: ResolvedStyle) -> SourceFragment:
        """Emit a fragment for one node.

        Args:
            node: Validated instance with rendered child usages.
            theme: Theme resolved for the target being generated.

        Returns:
            SourceFragment with the unit definition and the usage.
        """
        ...


class TemplateEmitter(Emitter):
    """Emitter driven by a UnitTemplate.

    Subclasses implement the family's unit layout (unit_source); the
    usage goes through the family's Dialect.
    """

    unit_prefix = "Forge"

    def __init__(self, name: str, template: UnitTemplate):
        self.name = name
        self.template = template

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    @property
    def dialect(self) -> Dialect:
        return get_dialect(self.family)

    def unit_name(self) -> str:
        return self.unit_prefix + to_pascal(self.name)

    def emit(self, node: RenderNode, theme: ResolvedStyle) -> SourceFragment:
        if theme.family != self.family:
            raise ValueError(
                f"{type(self).__name__} cannot emit for {theme.target.value}"
            )
        unit = self.unit_name()
        logger.debug("Emitting %s for %s (%s)", unit, node.instance_id, theme.target.value)
        return SourceFragment(
            unit_name=unit,
            body=self.unit_source(unit, node.schema, node.accepts_children, theme),
            usage=self.dialect.render(self.call(unit, node, theme)),
            imports=tuple(self.template.dependencies),
            target_files=self.target_files(unit, node.schema, theme),
            instance_id=node.instance_id,
            type_id=node.type_id,
        )

    # -------------------------------------------------------------------------
    # Usage
    # -------------------------------------------------------------------------

    def call(self, unit: str, node: RenderNode, theme: ResolvedStyle) -> Call:
        """Build the structured usage of a node.

        Values equal to an optional property's default are left out; the
        unit signature supplies them.
        """
        args: list[tuple[str, Value]] = []
        for prop in node.schema:
            value = node.values.get(prop.name)
            if value is None:
                continue
            if not prop.required and value == prop.default:
                continue
            args.append((self.arg_name(prop), self.arg_value(unit, prop, value, theme)))
        return Call(self.call_target(unit, theme), tuple(args), tuple(node.children))

    def arg_name(self, prop: PropertySchema) -> str:
        return prop.name

    def call_target(self, unit: str, theme: ResolvedStyle) -> str:
        return unit

    def arg_value(
        self, unit: str, prop: PropertySchema, value: Any, theme: ResolvedStyle
    ) -> Value:
        kind = prop.kind
        if kind == PropertyKind.NUMBER:
            return Num(value)
        if kind == PropertyKind.BOOLEAN:
            return Bool(value)
        if kind == PropertyKind.ENUM:
            return EnumCase(str(value), self.enum_type(unit, prop))
        if kind == PropertyKind.ARRAY:
            return StrList(tuple(display_string(v) for v in value))
        if kind == PropertyKind.OBJECT:
            return Str(json_value(value))
        if kind == PropertyKind.COLOR:
            return Expr(theme.color_arg(value))
        return Str(str(value))

    def enum_type(self, unit: str, prop: PropertySchema) -> str:
        return unit + to_pascal(prop.name)

    # -------------------------------------------------------------------------
    # Unit definition
    # -------------------------------------------------------------------------

    @abstractmethod
    def unit_source(
        self,
        unit: str,
        schema: tuple[PropertySchema, ...],
        accepts_children: bool,
        theme: ResolvedStyle,
    ) -> str:
        """Complete unit file content; depends only on schema and theme."""
        ...

    def target_files(
        self, unit: str, schema: tuple[PropertySchema, ...], theme: ResolvedStyle
    ) -> tuple[TargetFile, ...]:
        if self.template.resources is None:
            return ()
        return tuple(self.template.resources(theme))

    @staticmethod
    def has_kind(schema: tuple[PropertySchema, ...], kind: PropertyKind) -> bool:
        return any(prop.kind == kind for prop in schema)


# =============================================================================
# React (web-react, desktop-tauri, desktop-electron)
# =============================================================================


class ReactEmitter(TemplateEmitter):
    """Function components with a typed props interface."""

    family = TargetFamily.REACT
    unit_prefix = ""

    _TYPES = {
        PropertyKind.NUMBER: "number",
        PropertyKind.BOOLEAN: "boolean",
        PropertyKind.ARRAY: "string[]",
    }

    def _default(self, prop: PropertySchema, theme: ResolvedStyle) -> str:
        default = prop.default
        if prop.kind == PropertyKind.NUMBER:
            return format_number(default)
        if prop.kind == PropertyKind.BOOLEAN:
            return "true" if default else "false"
        if prop.kind == PropertyKind.ARRAY:
            return "[" + ", ".join(js_string(display_string(v)) for v in default) + "]"
        if prop.kind == PropertyKind.OBJECT:
            return js_string(json_value(default))
        if prop.kind == PropertyKind.COLOR:
            return theme.color_arg(default)
        return js_string(str(default))

    def unit_source(self, unit, schema, accepts_children, theme):
        body = self.template.render_body(theme)
        members = self.template.render_members(theme)
        react_types = [t for t in ("CSSProperties",) if t in body + members]
        if accepts_children:
            react_types.append("ReactNode")

        lines: list[str] = []
        if react_types:
            lines.append(f'import type {{ {", ".join(react_types)} }} from "react";')
        lines.extend(self.template.imports)
        if self.has_kind(schema, PropertyKind.ACTION):
            lines.append('import { dispatch } from "../actions";')
        if lines:
            lines.append("")

        for prop in schema:
            if prop.kind == PropertyKind.ENUM:
                union = " | ".join(js_string(o) for o in prop.options)
                lines.append(f"export type {self.enum_type(unit, prop)} = {union};")
                lines.append("")

        lines.append(f"export interface {unit}Props {{")
        for prop in schema:
            ts_type = (
                self.enum_type(unit, prop)
                if prop.kind == PropertyKind.ENUM
                else self._TYPES.get(prop.kind, "string")
            )
            optional = "" if prop.required else "?"
            lines.append(f"  {prop.name}{optional}: {ts_type};")
        if accepts_children:
            lines.append("  children?: ReactNode;")
        lines.append("}")
        lines.append("")
        if members:
            lines.append(members)
            lines.append("")

        params = [
            prop.name
            if prop.default is None
            else f"{prop.name} = {self._default(prop, theme)}"
            for prop in schema
        ]
        if accepts_children:
            params.append("children")
        if params:
            lines.append(f"export function {unit}({{")
            lines.extend(f"  {p}," for p in params)
            lines.append(f"}}: {unit}Props) {{")
        else:
            lines.append(f"export function {unit}(_props: {unit}Props) {{")
        lines.append(indent(body, 1, "  "))
        lines.append("}")
        lines.append("")
        lines.append(f"export default {unit};")
        return "\n".join(lines) + "\n"


# =============================================================================
# SwiftUI (ios-swiftui)
# =============================================================================


def _swift_enums(unit: str, schema, enum_type, extra: str = "") -> list[str]:
    lines: list[str] = []
    for prop in schema:
        if prop.kind != PropertyKind.ENUM:
            continue
        lines.append(f"enum {enum_type(unit, prop)}: String{extra} {{")
        for option in prop.options:
            case = swift_case(option)
            raw = f" = {swift_string(option)}" if case != option else ""
            lines.append(f"    case {case}{raw}")
        lines.append("}")
        lines.append("")
    return lines


class SwiftEmitterMixin:
    """Type and default mapping shared by SwiftUI and UIKit."""

    color_type = "Color"

    def swift_type(self, unit: str, prop: PropertySchema) -> str:
        kind = prop.kind
        if kind == PropertyKind.ENUM:
            return self.enum_type(unit, prop)  # type: ignore[attr-defined]
        if kind == PropertyKind.NUMBER:
            return "Double"
        if kind == PropertyKind.BOOLEAN:
            return "Bool"
        if kind == PropertyKind.ARRAY:
            return "[String]"
        if kind == PropertyKind.COLOR:
            return self.color_type
        return "String"

    def swift_default(self, prop: PropertySchema, theme: ResolvedStyle) -> str | None:
        default = prop.default
        if default is None:
            return None if prop.required else "nil"
        kind = prop.kind
        if kind == PropertyKind.ENUM:
            return "." + swift_case(default)
        if kind == PropertyKind.NUMBER:
            return format_number(default)
        if kind == PropertyKind.BOOLEAN:
            return "true" if default else "false"
        if kind == PropertyKind.ARRAY:
            return "[" + ", ".join(swift_string(display_string(v)) for v in default) + "]"
        if kind == PropertyKind.OBJECT:
            return swift_string(json_value(default))
        if kind == PropertyKind.COLOR:
            return theme.color_arg(default)
        return swift_string(str(default))

    def swift_decl(self, unit: str, prop: PropertySchema, theme: ResolvedStyle) -> tuple[str, str | None]:
        """(type, default) with optionals for absent-without-default props."""
        swift_type = self.swift_type(unit, prop)
        default = self.swift_default(prop, theme)
        if default == "nil":
            swift_type += "?"
        return swift_type, default


class SwiftUIEmitter(SwiftEmitterMixin, TemplateEmitter):
    """SwiftUI views with stored properties and generated enums."""

    family = TargetFamily.SWIFTUI

    def unit_source(self, unit, schema, accepts_children, theme):
        lines = ["import SwiftUI"]
        lines.extend(f"import {module}" for module in self.template.imports)
        lines.append("")
        lines.extend(_swift_enums(unit, schema, self.enum_type, ", CaseIterable"))

        generic = "<Content: View>" if accepts_children else ""
        lines.append(f"struct {unit}{generic}: View {{")
        params: list[str] = []
        for prop in schema:
            swift_type, default = self.swift_decl(unit, prop, theme)
            if default is None:
                lines.append(f"    let {prop.name}: {swift_type}")
                params.append(f"{prop.name}: {swift_type}")
            else:
                lines.append(f"    var {prop.name}: {swift_type} = {default}")
                params.append(f"{prop.name}: {swift_type} = {default}")
        if accepts_children:
            lines.append("    let content: Content")
            lines.append("")
            lines.append(f"    init({', '.join([*params, '@ViewBuilder content: () -> Content'])}) {{")
            for prop in schema:
                lines.append(f"        self.{prop.name} = {prop.name}")
            lines.append("        self.content = content()")
            lines.append("    }")
        lines.append("")
        lines.append("    var body: some View {")
        lines.append(indent(self.template.render_body(theme), 2))
        lines.append("    }")
        members = self.template.render_members(theme)
        if members:
            lines.append("")
            lines.append(indent(members))
        lines.append("}")
        if accepts_children:
            lines.extend(_swiftui_empty_init(unit, schema, params))
        return "\n".join(lines) + "\n"


def _swiftui_empty_init(unit: str, schema: tuple[PropertySchema, ...], params: list[str]) -> list[str]:
    """Initializer for a container used without children (`ForgeStack()`)."""
    forwarded = [f"{prop.name}: {prop.name}" for prop in schema]
    forwarded.append("content: { EmptyView() }")
    return [
        "",
        f"extension {unit} where Content == EmptyView {{",
        f"    init({', '.join(params)}) {{",
        f"        self.init({', '.join(forwarded)})",
        "    }",
        "}",
    ]


# =============================================================================
# UIKit (ios-uikit)
# =============================================================================


class UIKitEmitter(SwiftEmitterMixin, TemplateEmitter):
    """UIView subclasses with a designated initializer."""

    family = TargetFamily.UIKIT
    color_type = "UIColor"

    def unit_source(self, unit, schema, accepts_children, theme):
        base = self.template.base or "UIView"
        lines = ["import UIKit"]
        lines.extend(f"import {module}" for module in self.template.imports)
        lines.append("")
        lines.extend(_swift_enums(unit, schema, self.enum_type))

        lines.append(f"final class {unit}: {base} {{")
        params: list[str] = []
        for prop in schema:
            swift_type, default = self.swift_decl(unit, prop, theme)
            lines.append(f"    let {prop.name}: {swift_type}")
            params.append(
                f"{prop.name}: {swift_type}" if default is None
                else f"{prop.name}: {swift_type} = {default}"
            )
        if accepts_children:
            params.append("arrangedSubviews: [UIView] = []")
        if schema:
            lines.append("")

        lines.append(f"    init({', '.join(params)}) {{")
        for prop in schema:
            lines.append(f"        self.{prop.name} = {prop.name}")
        lines.append("        super.init(frame: .zero)")
        lines.append(
            "        setUp(arrangedSubviews: arrangedSubviews)" if accepts_children
            else "        setUp()"
        )
        lines.append("    }")
        lines.append("")
        lines.append("    required init?(coder: NSCoder) {")
        lines.append('        fatalError("init(coder:) has not been implemented")')
        lines.append("    }")
        lines.append("")
        signature = "arrangedSubviews: [UIView]" if accepts_children else ""
        lines.append(f"    private func setUp({signature}) {{")
        lines.append(indent(self.template.render_body(theme), 2))
        lines.append("    }")
        members = self.template.render_members(theme)
        if members:
            lines.append("")
            lines.append(indent(members))
        lines.append("}")
        return "\n".join(lines) + "\n"


# =============================================================================
# Kotlin families (android-compose, android-xml)
# =============================================================================


def _namespace(theme: ResolvedStyle) -> str:
    return theme.namespace or DEFAULT_NAMESPACE


def _kotlin_default(prop: PropertySchema, theme: ResolvedStyle, enum_type: str) -> str | None:
    default = prop.default
    if default is None:
        return None if prop.required else "null"
    kind = prop.kind
    if kind == PropertyKind.ENUM:
        return f"{enum_type}.{kotlin_case(default)}"
    if kind == PropertyKind.NUMBER:
        return format_number(default) + "f"
    if kind == PropertyKind.BOOLEAN:
        return "true" if default else "false"
    if kind == PropertyKind.ARRAY:
        if not default:
            return "emptyList()"
        return "listOf(" + ", ".join(kotlin_string(display_string(v)) for v in default) + ")"
    if kind == PropertyKind.OBJECT:
        return kotlin_string(json_value(default))
    if kind == PropertyKind.COLOR:
        return theme.color_arg(default)
    return kotlin_string(str(default))


class ComposeEmitter(TemplateEmitter):
    """@Composable functions with named, defaulted parameters."""

    family = TargetFamily.COMPOSE

    def kotlin_type(self, unit: str, prop: PropertySchema) -> str:
        kind = prop.kind
        if kind == PropertyKind.ENUM:
            return self.enum_type(unit, prop)
        if kind == PropertyKind.NUMBER:
            return "Float"
        if kind == PropertyKind.BOOLEAN:
            return "Boolean"
        if kind == PropertyKind.ARRAY:
            return "List<String>"
        if kind == PropertyKind.COLOR:
            return "Color"
        return "String"

    def unit_source(self, unit, schema, accepts_children, theme):
        namespace = _namespace(theme)

        decl: list[str] = []
        for prop in schema:
            if prop.kind == PropertyKind.ENUM:
                entries = ", ".join(kotlin_case(o) for o in prop.options)
                decl.append(f"enum class {self.enum_type(unit, prop)} {{ {entries} }}")
                decl.append("")
        decl.append("@Composable")
        decl.append(f"fun {unit}(")
        for prop in schema:
            kotlin_type = self.kotlin_type(unit, prop)
            default = _kotlin_default(prop, theme, self.enum_type(unit, prop))
            if default is None:
                decl.append(f"    {prop.name}: {kotlin_type},")
            elif default == "null":
                decl.append(f"    {prop.name}: {kotlin_type}? = null,")
            else:
                decl.append(f"    {prop.name}: {kotlin_type} = {default},")
        decl.append("    modifier: Modifier = Modifier,")
        if accepts_children:
            decl.append("    content: @Composable () -> Unit = {},")
        decl.append(") {")
        decl.append(indent(self.template.render_body(theme)))
        decl.append("}")
        members = self.template.render_members(theme)
        if members:
            decl.append("")
            decl.append(members)
        text = "\n".join(decl)

        imports = {"androidx.compose.runtime.Composable", "androidx.compose.ui.Modifier"}
        imports.update(self.template.imports)
        if self.has_kind(schema, PropertyKind.COLOR):
            imports.add("androidx.compose.ui.graphics.Color")
        if "ActionBus" in text:
            imports.add(f"{namespace}.ActionBus")
        for helper in ("ForgeColors", "ForgeDimens"):
            if helper in text:
                imports.add(f"{namespace}.ui.theme.{helper}")

        lines = [f"package {namespace}.ui.components", ""]
        lines.extend(f"import {module}" for module in sorted(imports))
        lines.append("")
        return "\n".join(lines) + "\n" + text + "\n"


class AndroidViewEmitter(TemplateEmitter):
    """View classes configured from styled XML attributes.

    Each unit ships a declare-styleable resource whose attribute names are
    prefixed with the capsule name so units never redeclare an attribute.
    """

    family = TargetFamily.ANDROID_VIEW

    _FORMATS = {PropertyKind.NUMBER: "float", PropertyKind.BOOLEAN: "boolean"}

    def attr_name(self, prop: PropertySchema) -> str:
        return f"{to_snake(self.name)}_{to_snake(prop.name)}"

    def arg_name(self, prop: PropertySchema) -> str:
        return self.attr_name(prop)

    def call_target(self, unit: str, theme: ResolvedStyle) -> str:
        return f"{_namespace(theme)}.ui.components.{unit}"

    def arg_value(self, unit, prop, value, theme):
        if prop.kind == PropertyKind.COLOR:
            return Str(theme.color_arg(value))
        return super().arg_value(unit, prop, value, theme)

    def _read(self, unit: str, prop: PropertySchema) -> tuple[str, str]:
        """(declaration, assignment) for one attribute-backed property."""
        index = f"R.styleable.{unit}_{self.attr_name(prop)}"
        default = prop.default
        kind = prop.kind
        if kind == PropertyKind.NUMBER:
            literal = format_number(default if default is not None else 0) + "f"
            return f"var {prop.name}: Float = {literal}", f"a.getFloat({index}, {literal})"
        if kind == PropertyKind.BOOLEAN:
            literal = "true" if default else "false"
            return f"var {prop.name}: Boolean = {literal}", f"a.getBoolean({index}, {literal})"
        if kind == PropertyKind.ARRAY:
            return (
                f"var {prop.name}: List<String> = emptyList()",
                f"ForgeTheme.parseList(a.getString({index}))",
            )
        if kind == PropertyKind.COLOR:
            token = kotlin_string(str(default if default is not None else "foreground"))
            return (
                f"var {prop.name}: Int = 0",
                f"ForgeTheme.resolveColor(context, a.getString({index}) ?: {token})",
            )
        if default is None and not prop.required:
            return f"var {prop.name}: String? = null", f"a.getString({index})"
        fallback = kotlin_string("" if default is None else str(default))
        return f'var {prop.name}: String = ""', f"a.getString({index}) ?: {fallback}"

    def unit_source(self, unit, schema, accepts_children, theme):
        namespace = _namespace(theme)
        base = self.template.base or "LinearLayout"
        body = self.template.render_body(theme)
        members = self.template.render_members(theme)
        code = body + members

        imports = {"android.content.Context", "android.util.AttributeSet", f"{namespace}.R"}
        imports.update(self.template.imports)
        if self.has_kind(schema, PropertyKind.ACTION):
            imports.add(f"{namespace}.ActionBus")
        if "ContextCompat" in code:
            imports.add("androidx.core.content.ContextCompat")
        if "ForgeTheme" in code or any(
            p.kind in (PropertyKind.COLOR, PropertyKind.ARRAY) for p in schema
        ):
            imports.add(f"{namespace}.ui.theme.ForgeTheme")

        lines = [f"package {namespace}.ui.components", ""]
        lines.extend(f"import {module}" for module in sorted(imports))
        lines.append("")
        lines.append(f"class {unit} @JvmOverloads constructor(")
        lines.append("    context: Context,")
        lines.append("    attrs: AttributeSet? = null,")
        lines.append(f") : {base}(context, attrs) {{")
        lines.append("")

        reads = [self._read(unit, prop) for prop in schema]
        for declaration, _ in reads:
            lines.append(f"    {declaration}")
            lines.append("        private set")
        if reads:
            lines.append("")
        lines.append("    init {")
        if reads:
            lines.append(f"        val a = context.obtainStyledAttributes(attrs, R.styleable.{unit})")
            lines.append("        try {")
            for prop, (_, assignment) in zip(schema, reads):
                lines.append(f"            {prop.name} = {assignment}")
            lines.append("        } finally {")
            lines.append("            a.recycle()")
            lines.append("        }")
        lines.append(indent(body, 2))
        lines.append("    }")
        if members:
            lines.append("")
            lines.append(indent(members))
        lines.append("}")
        return "\n".join(lines) + "\n"

    def styleable(self, unit: str, schema: tuple[PropertySchema, ...]) -> TargetFile:
        lines = [
            '<?xml version="1.0" encoding="utf-8"?>',
            "<resources>",
            f'    <declare-styleable name="{unit}">',
        ]
        for prop in schema:
            fmt = self._FORMATS.get(prop.kind, "string")
            lines.append(f'        <attr name="{self.attr_name(prop)}" format="{fmt}" />')
        lines += ["    </declare-styleable>", "</resources>"]
        return TargetFile(
            path=f"app/src/main/res/values/attrs_{to_snake(unit)}.xml",
            content="\n".join(lines) + "\n",
        )

    def target_files(self, unit, schema, theme):
        files = [self.styleable(unit, schema)] if schema else []
        files.extend(super().target_files(unit, schema, theme))
        return tuple(files)


# =============================================================================
# Construction helpers
# =============================================================================

EMITTER_CLASSES: dict[TargetFamily, type[TemplateEmitter]] = {
    TargetFamily.REACT: ReactEmitter,
    TargetFamily.SWIFTUI: SwiftUIEmitter,
    TargetFamily.UIKIT: UIKitEmitter,
    TargetFamily.COMPOSE: ComposeEmitter,
    TargetFamily.ANDROID_VIEW: AndroidViewEmitter,
}


def build_emitters(
    name: str,
    templates: Mapping[TargetFamily, UnitTemplate],
) -> dict[Target, Emitter]:
    """Create one emitter per family and map it onto the family's targets.

    The React emitter serves web-react, desktop-tauri and desktop-electron.

    Example:
        >>> emitters = build_emitters("badge", {TargetFamily.REACT: UnitTemplate(body)})
        >>> sorted(t.value for t in emitters)
        ['desktop-electron', 'desktop-tauri', 'web-react']
    """
    emitters: dict[Target, Emitter] = {}
    for family, template in templates.items():
        emitter = EMITTER_CLASSES[family](name, template)
        for target in targets_in_family(family):
            emitters[target] = emitter
    return emitters


__all__ = [
    "DEFAULT_NAMESPACE",
    "RenderNode",
    "UnitTemplate",
    "Emitter",
    "TemplateEmitter",
    "ReactEmitter",
    "SwiftUIEmitter",
    "UIKitEmitter",
    "ComposeEmitter",
    "AndroidViewEmitter",
    "EMITTER_CLASSES",
    "build_emitters",
    "display_string",
]
