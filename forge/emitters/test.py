"""Unit tests for emitters, dialects and placeholders."""

import pytest

from forge.emitters import (
    AndroidXmlDialect,
    Bool,
    Call,
    ComposeDialect,
    EnumCase,
    Expr,
    JsxDialect,
    Num,
    ReactEmitter,
    RenderNode,
    Str,
    StrList,
    SwiftUIDialect,
    UIKitDialect,
    UnitTemplate,
    build_emitters,
    display_string,
    kotlin_case,
    placeholder_emitter,
    placeholder_node,
    swift_case,
)
from forge.schema import PropertyKind, PropertySchema, Target, TargetFamily
from forge.theme import ThemeResolver

SCHEMA = (
    PropertySchema("label", PropertyKind.STRING, required=True),
    PropertySchema("tone", PropertyKind.ENUM, default="info", options=("info", "alert")),
    PropertySchema("count", PropertyKind.NUMBER, default=0),
    PropertySchema("onTap", PropertyKind.ACTION),
)

TEMPLATES = {
    TargetFamily.REACT: UnitTemplate("return <span>{label}</span>;"),
    TargetFamily.SWIFTUI: UnitTemplate("Text(label)"),
    TargetFamily.UIKIT: UnitTemplate("backgroundColor = .clear"),
    TargetFamily.COMPOSE: UnitTemplate(
        "Text(text = label, modifier = modifier)",
        imports=("androidx.compose.material3.Text",),
    ),
    TargetFamily.ANDROID_VIEW: UnitTemplate("orientation = VERTICAL"),
}

EMITTERS = build_emitters("badge", TEMPLATES)


def _theme(target: Target):
    return ThemeResolver().resolve(None, target, namespace="com.example.app")


def _node(values: dict, children: tuple[str, ...] = (), accepts_children: bool = False) -> RenderNode:
    return RenderNode(
        instance_id="b1",
        type_id="badge",
        values=values,
        schema=SCHEMA,
        children=children,
        accepts_children=accepts_children,
    )


class TestDialects:
    """Tests for call-site serializers."""

    @pytest.mark.unit
    def test_jsx_escaping(self):
        """JSX string attributes are JS literals safe inside HTML."""
        usage = JsxDialect().render(Call("Badge", (("label", Str('"</script>')),)))
        assert usage == '<Badge label={"\\"<\\/script>"} />'

    @pytest.mark.unit
    def test_jsx_children(self):
        """Children are nested and indented by two spaces."""
        usage = JsxDialect().render(Call("Card", (), ("<Text />", "<Button />")))
        assert usage == "<Card>\n  <Text />\n  <Button />\n</Card>"

    @pytest.mark.unit
    def test_jsx_values(self):
        """Numbers, booleans, enums and lists have JS forms."""
        dialect = JsxDialect()
        assert dialect.value(Num(3.0)) == "3"
        assert dialect.value(Bool(False)) == "false"
        assert dialect.value(EnumCase("alert", "BadgeTone")) == '"alert"'
        assert dialect.value(StrList(("a", "b"))) == '["a", "b"]'
        assert dialect.value(Expr('"var(--color-primary)"')) == '"var(--color-primary)"'

    @pytest.mark.unit
    def test_swiftui_interpolation_neutralised(self):
        """Swift interpolation in user text is escaped."""
        usage = SwiftUIDialect().render(Call("ForgeBadge", (("label", Str("\\(secret)")),)))
        assert usage == 'ForgeBadge(label: "\\\\(secret)")'

    @pytest.mark.unit
    def test_swiftui_trailing_closure(self):
        """Children go in a trailing closure."""
        dialect = SwiftUIDialect()
        assert dialect.render(Call("ForgeStack", (), ("ForgeText()",))) == (
            "ForgeStack {\n    ForgeText()\n}"
        )
        assert dialect.render(
            Call("ForgeCard", (("title", Str("A")),), ("ForgeText()",))
        ) == 'ForgeCard(title: "A") {\n    ForgeText()\n}'

    @pytest.mark.unit
    def test_swiftui_enum_case(self):
        """Enums render as leading-dot cases."""
        assert SwiftUIDialect().value(EnumCase("alert", "ForgeBadgeTone")) == ".alert"

    @pytest.mark.unit
    def test_uikit_arranged_subviews(self):
        """UIKit children are passed as arranged subviews."""
        usage = UIKitDialect().render(Call("ForgeStack", (), ("ForgeText()",)))
        assert usage == "ForgeStack(arrangedSubviews: [\n    ForgeText()\n])"

    @pytest.mark.unit
    def test_kotlin_templates_neutralised(self):
        """Kotlin string templates in user text are escaped."""
        usage = ComposeDialect().render(Call("ForgeBadge", (("label", Str("${pwd}")),)))
        assert usage == 'ForgeBadge(label = "\\${pwd}")'

    @pytest.mark.unit
    def test_compose_values(self):
        """Compose numbers are floats and enums are qualified."""
        dialect = ComposeDialect()
        assert dialect.value(Num(2)) == "2f"
        assert dialect.value(EnumCase("alert", "ForgeBadgeTone")) == "ForgeBadgeTone.Alert"
        assert dialect.value(StrList(("a",))) == 'listOf("a")'

    @pytest.mark.unit
    def test_android_xml_escaping(self):
        """Attribute values get resource and XML escaping."""
        usage = AndroidXmlDialect().render(
            Call("com.example.ForgeBadge", (("badge_label", Str("@It's <b>")),))
        )
        assert 'app:badge_label="\\@It\\&apos;s &lt;b&gt;"' in usage
        assert usage.startswith("<com.example.ForgeBadge\n")
        assert usage.endswith(" />")

    @pytest.mark.unit
    def test_android_xml_children(self):
        """Nested views close with the full class name."""
        usage = AndroidXmlDialect().render(Call("com.example.ForgeStack", (), ("<View />",)))
        assert usage.endswith(">\n    <View />\n</com.example.ForgeStack>")

    @pytest.mark.unit
    def test_case_names(self):
        """Option values become safe case names."""
        assert swift_case("default") == "default_"
        assert swift_case("2x") == "_2x"
        assert kotlin_case("sm") == "Sm"
        assert kotlin_case("in") == "In"


class TestTemplateEmitters:
    """Tests for unit signatures and usages."""

    @pytest.mark.unit
    def test_build_emitters_maps_families(self):
        """One emitter serves every target of its family."""
        assert set(EMITTERS) == set(Target)
        assert EMITTERS[Target.WEB_REACT] is EMITTERS[Target.DESKTOP_TAURI]
        assert isinstance(EMITTERS[Target.DESKTOP_ELECTRON], ReactEmitter)

    @pytest.mark.unit
    def test_react_unit(self):
        """React units export a typed props interface with defaults."""
        fragment = EMITTERS[Target.WEB_REACT].emit(
            _node({"label": "Hi", "tone": "info", "count": 0}), _theme(Target.WEB_REACT)
        )
        assert fragment.unit_name == "Badge"
        assert 'export type BadgeTone = "info" | "alert";' in fragment.body
        assert "  label: string;" in fragment.body
        assert "  tone?: BadgeTone;" in fragment.body
        assert '  tone = "info",' in fragment.body
        assert 'import { dispatch } from "../actions";' in fragment.body
        assert fragment.body.endswith("export default Badge;\n")
        # Defaults are left to the signature
        assert fragment.usage == '<Badge label={"Hi"} />'

    @pytest.mark.unit
    def test_react_usage_non_default_values(self):
        """Values differing from defaults appear in schema order."""
        fragment = EMITTERS[Target.WEB_REACT].emit(
            _node({"label": "Hi", "tone": "alert", "count": 3, "onTap": "open"}),
            _theme(Target.WEB_REACT),
        )
        assert fragment.usage == '<Badge label={"Hi"} tone={"alert"} count={3} onTap={"open"} />'

    @pytest.mark.unit
    def test_swiftui_unit(self):
        """SwiftUI units declare enums and stored properties."""
        fragment = EMITTERS[Target.IOS_SWIFTUI].emit(
            _node({"label": "Hi", "tone": "alert"}), _theme(Target.IOS_SWIFTUI)
        )
        assert fragment.unit_name == "ForgeBadge"
        assert "enum ForgeBadgeTone: String, CaseIterable {" in fragment.body
        assert "    let label: String" in fragment.body
        assert "    var tone: ForgeBadgeTone = .info" in fragment.body
        assert "    var onTap: String? = nil" in fragment.body
        assert fragment.usage == 'ForgeBadge(label: "Hi", tone: .alert)'

    @pytest.mark.unit
    def test_swiftui_container_init(self):
        """Containers get a ViewBuilder initializer."""
        fragment = EMITTERS[Target.IOS_SWIFTUI].emit(
            _node({"label": "Hi"}, ("ForgeText()",), accepts_children=True),
            _theme(Target.IOS_SWIFTUI),
        )
        assert "struct ForgeBadge<Content: View>: View {" in fragment.body
        assert "@ViewBuilder content: () -> Content" in fragment.body
        assert fragment.usage.endswith("{\n    ForgeText()\n}")

    @pytest.mark.unit
    def test_swiftui_container_without_children(self):
        """Containers used without children resolve Content to EmptyView."""
        fragment = EMITTERS[Target.IOS_SWIFTUI].emit(
            _node({"label": "Hi"}, accepts_children=True),
            _theme(Target.IOS_SWIFTUI),
        )
        assert fragment.usage == 'ForgeBadge(label: "Hi")'
        assert "extension ForgeBadge where Content == EmptyView {" in fragment.body
        assert (
            "self.init(label: label, tone: tone, count: count, onTap: onTap, "
            "content: { EmptyView() })"
        ) in fragment.body

    @pytest.mark.unit
    def test_swiftui_placeholder_without_children(self):
        """A childless placeholder still has an initializer it can call."""
        fragment = placeholder_emitter(Target.IOS_SWIFTUI).emit(
            placeholder_node("c1", "carousel"), _theme(Target.IOS_SWIFTUI)
        )
        assert fragment.usage == 'ForgePlaceholder(typeId: "carousel")'
        assert "extension ForgePlaceholder where Content == EmptyView {" in fragment.body
        assert "    init(typeId: String) {" in fragment.body

    @pytest.mark.unit
    def test_uikit_unit(self):
        """UIKit units have a designated initializer."""
        fragment = EMITTERS[Target.IOS_UIKIT].emit(_node({"label": "Hi"}), _theme(Target.IOS_UIKIT))
        assert "final class ForgeBadge: UIView {" in fragment.body
        assert "init(label: String, tone: ForgeBadgeTone = .info" in fragment.body
        assert "required init?(coder: NSCoder)" in fragment.body

    @pytest.mark.unit
    def test_compose_unit(self):
        """Compose units live in the components package."""
        fragment = EMITTERS[Target.ANDROID_COMPOSE].emit(
            _node({"label": "Hi"}), _theme(Target.ANDROID_COMPOSE)
        )
        assert fragment.body.startswith("package com.example.app.ui.components\n")
        assert "import androidx.compose.material3.Text" in fragment.body
        assert "enum class ForgeBadgeTone { Info, Alert }" in fragment.body
        assert "    tone: ForgeBadgeTone = ForgeBadgeTone.Info," in fragment.body
        assert "    count: Float = 0f," in fragment.body
        assert "    modifier: Modifier = Modifier," in fragment.body
        assert fragment.usage == 'ForgeBadge(label = "Hi")'

    @pytest.mark.unit
    def test_android_view_unit(self):
        """Android view units read styled attributes and ship a styleable."""
        fragment = EMITTERS[Target.ANDROID_XML].emit(
            _node({"label": "Hi", "count": 2}), _theme(Target.ANDROID_XML)
        )
        assert "class ForgeBadge @JvmOverloads constructor(" in fragment.body
        assert "R.styleable.ForgeBadge_badge_count" in fragment.body
        assert "a.recycle()" in fragment.body
        assert 'app:badge_label="Hi"' in fragment.usage
        assert 'app:badge_count="2"' in fragment.usage
        assert fragment.usage.startswith("<com.example.app.ui.components.ForgeBadge")
        styleable = fragment.target_files[0]
        assert styleable.path == "app/src/main/res/values/attrs_forge_badge.xml"
        assert '<attr name="badge_count" format="float" />' in styleable.content

    @pytest.mark.unit
    def test_family_mismatch(self):
        """An emitter refuses a theme resolved for another family."""
        with pytest.raises(ValueError, match="cannot emit"):
            EMITTERS[Target.WEB_REACT].emit(_node({"label": "Hi"}), _theme(Target.IOS_SWIFTUI))

    @pytest.mark.unit
    def test_body_independent_of_values(self):
        """Unit bodies depend only on schema and theme."""
        emitter = EMITTERS[Target.ANDROID_COMPOSE]
        theme = _theme(Target.ANDROID_COMPOSE)
        first = emitter.emit(_node({"label": "A"}), theme)
        second = emitter.emit(_node({"label": "B", "tone": "alert"}), theme)
        assert first.body == second.body
        assert first.usage != second.usage

    @pytest.mark.unit
    def test_display_string(self):
        """Array elements become display text."""
        assert display_string("a") == "a"
        assert display_string(2.0) == "2"
        assert display_string(True) == "true"
        assert display_string({"b": 1}) == '{"b":1}'


class TestPlaceholder:
    """Tests for the fallback emitter."""

    @pytest.mark.unit
    @pytest.mark.parametrize("target", list(Target))
    def test_placeholder_names_type(self, target):
        """Placeholders label the missing type on every target."""
        fragment = placeholder_emitter(target).emit(
            placeholder_node("w1", "widget"), _theme(target)
        )
        assert "Unsupported component" in fragment.body
        assert "widget" in fragment.usage

    @pytest.mark.unit
    def test_placeholder_escapes_type(self):
        """The type id is user data and gets escaped."""
        fragment = placeholder_emitter(Target.ANDROID_COMPOSE).emit(
            placeholder_node("w1", 'x"$y'), _theme(Target.ANDROID_COMPOSE)
        )
        assert fragment.usage == 'ForgePlaceholder(typeId = "x\\"\\$y")'

    @pytest.mark.unit
    def test_placeholder_keeps_children(self):
        """Children of unknown types are still rendered."""
        fragment = placeholder_emitter(Target.WEB_REACT).emit(
            placeholder_node("w1", "widget", ("<Text />",)), _theme(Target.WEB_REACT)
        )
        assert fragment.unit_name == "Placeholder"
        assert fragment.usage == '<Placeholder typeId={"widget"}>\n  <Text />\n</Placeholder>'
