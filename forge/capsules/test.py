"""Unit tests for the built-in capsules."""

import pytest

from forge.capsules import ALL_CAPSULES, BUTTON, CARD, IMAGE, LIST, STACK, TEXT
from forge.emitters import RenderNode
from forge.ir import ComponentInstance, ThemeTokens
from forge.schema import PropertyKind, Target
from forge.theme import ThemeResolver
from forge.validation import validate_instance

SAMPLE_PROPS = {
    "button": {"label": "Sign In"},
    "text": {"content": "Welcome back"},
    "input": {"label": "Email", "placeholder": "you@example.com", "inputType": "email"},
    "image": {"src": "https://example.com/a.png", "alt": "Logo"},
    "switch": {"label": "Remember me", "checked": True},
    "card": {"title": "Account"},
    "stack": {"direction": "horizontal"},
    "list": {"items": ["One", "Two"], "ordered": True},
}


def _theme(target: Target):
    return ThemeResolver().resolve(None, target, namespace="com.example.app")


def _node(definition, props: dict, children: tuple[str, ...] = ()) -> RenderNode:
    instance = ComponentInstance(id=f"{definition.type_id}-1", type_id=definition.type_id, properties=props)
    result = validate_instance(instance, definition)
    assert result.ok, result.errors
    return RenderNode(
        instance_id=instance.id,
        type_id=definition.type_id,
        values=result.values,
        schema=definition.schema,
        children=children,
        accepts_children=definition.accepts_children,
    )


class TestCatalog:
    """Tests for the capsule catalog."""

    @pytest.mark.unit
    def test_type_ids(self):
        """The catalog holds the built-in sample in a fixed order."""
        assert [c.type_id for c in ALL_CAPSULES] == [
            "button", "text", "input", "image", "switch", "card", "stack", "list",
        ]

    @pytest.mark.unit
    def test_every_capsule_targets_everything(self):
        """Each capsule has an emitter for all seven targets."""
        for capsule in ALL_CAPSULES:
            assert set(capsule.targets) == set(Target), capsule.type_id

    @pytest.mark.unit
    def test_containers(self):
        """Only layout capsules accept children."""
        assert {c.type_id for c in ALL_CAPSULES if c.accepts_children} == {"card", "stack"}

    @pytest.mark.unit
    def test_enum_defaults_are_options(self):
        """Every enum default is one of its options."""
        for capsule in ALL_CAPSULES:
            for prop in capsule.schema:
                if prop.kind == PropertyKind.ENUM:
                    assert prop.default in prop.options, (capsule.type_id, prop.name)


class TestEmission:
    """Every capsule renders on every target."""

    @pytest.mark.unit
    @pytest.mark.parametrize("target", list(Target))
    @pytest.mark.parametrize("capsule", ALL_CAPSULES, ids=lambda c: c.type_id)
    def test_emits(self, capsule, target):
        """Units are named after the capsule and the usage calls them."""
        theme = _theme(target)
        children = ("<child />",) if capsule.accepts_children else ()
        fragment = capsule.emitter_for(target).emit(
            _node(capsule, SAMPLE_PROPS[capsule.type_id], children), theme
        )
        assert fragment.unit_name.endswith(capsule.display_name)
        assert fragment.unit_name in fragment.body
        assert fragment.unit_name in fragment.usage
        assert fragment.body.endswith("\n")
        assert "{t." not in fragment.body

    @pytest.mark.unit
    @pytest.mark.parametrize("target", list(Target))
    def test_bodies_are_deterministic(self, target):
        """Emitting twice yields identical text."""
        for capsule in ALL_CAPSULES:
            node = _node(capsule, SAMPLE_PROPS[capsule.type_id])
            first = capsule.emitter_for(target).emit(node, _theme(target))
            second = capsule.emitter_for(target).emit(node, _theme(target))
            assert first == second


class TestButton:
    """Tests for the button capsule."""

    @pytest.mark.unit
    def test_react_sign_in(self):
        """The React button uses theme variables and dispatches actions."""
        fragment = BUTTON.emitter_for(Target.WEB_REACT).emit(
            _node(BUTTON, {"label": "Sign In", "variant": "primary", "onPress": "signIn"}),
            _theme(Target.WEB_REACT),
        )
        assert fragment.usage == '<Button label={"Sign In"} onPress={"signIn"} />'
        assert "var(--color-primary)" in fragment.body
        assert 'import type { CSSProperties } from "react";' in fragment.body
        assert 'import { dispatch } from "../actions";' in fragment.body

    @pytest.mark.unit
    def test_swiftui_sign_in(self):
        """The SwiftUI button reads theme tokens."""
        fragment = BUTTON.emitter_for(Target.IOS_SWIFTUI).emit(
            _node(BUTTON, {"label": "Sign In", "size": "lg"}), _theme(Target.IOS_SWIFTUI)
        )
        assert fragment.usage == 'ForgeButton(label: "Sign In", size: .lg)'
        assert "case .primary: return ForgeTheme.primary" in fragment.body
        assert "ActionBus.shared.dispatch(onPress)" in fragment.body

    @pytest.mark.unit
    def test_compose_imports(self):
        """Compose units import the theme objects they use."""
        fragment = BUTTON.emitter_for(Target.ANDROID_COMPOSE).emit(
            _node(BUTTON, {"label": "Sign In"}), _theme(Target.ANDROID_COMPOSE)
        )
        assert "import com.example.app.ui.theme.ForgeColors" in fragment.body
        assert "import com.example.app.ui.theme.ForgeDimens" in fragment.body
        assert "import com.example.app.ActionBus" in fragment.body
        assert "ForgeButtonVariant.Primary -> ForgeColors.Primary" in fragment.body


class TestResources:
    """Tests for auxiliary files and dependencies."""

    @pytest.mark.unit
    def test_card_drawables(self):
        """The Android card ships its background drawables."""
        fragment = CARD.emitter_for(Target.ANDROID_XML).emit(
            _node(CARD, {}), _theme(Target.ANDROID_XML)
        )
        paths = [f.path for f in fragment.target_files]
        assert "app/src/main/res/values/attrs_forge_card.xml" in paths
        assert "app/src/main/res/drawable/forge_card_elevated.xml" in paths
        assert "app/src/main/res/drawable/forge_card_outlined.xml" in paths

    @pytest.mark.unit
    def test_image_dependencies(self):
        """Image units declare their image loading library."""
        compose = IMAGE.emitter_for(Target.ANDROID_COMPOSE).emit(
            _node(IMAGE, SAMPLE_PROPS["image"]), _theme(Target.ANDROID_COMPOSE)
        )
        assert compose.imports == ("io.coil-kt:coil-compose:2.6.0",)
        react = IMAGE.emitter_for(Target.WEB_REACT).emit(
            _node(IMAGE, SAMPLE_PROPS["image"]), _theme(Target.WEB_REACT)
        )
        assert react.imports == ()

    @pytest.mark.unit
    def test_shadows_disabled(self):
        """Themes without shadows never draw card shadows."""
        theme = ThemeResolver().resolve(None, Target.WEB_REACT)
        flat = ThemeResolver().resolve(ThemeTokens(shadows=False), Target.WEB_REACT)
        node = _node(CARD, {"title": "A"})
        with_shadow = CARD.emitter_for(Target.WEB_REACT).emit(node, theme)
        without = CARD.emitter_for(Target.WEB_REACT).emit(node, flat)
        assert "rgba(15, 23, 42, 0.12)" in with_shadow.body
        assert "rgba(15, 23, 42, 0.12)" not in without.body


class TestUsages:
    """Usage rendering of representative values."""

    @pytest.mark.unit
    def test_text_color_token(self):
        """COLOR values resolve to theme expressions."""
        fragment = TEXT.emitter_for(Target.ANDROID_COMPOSE).emit(
            _node(TEXT, {"content": "Hi", "color": "error"}), _theme(Target.ANDROID_COMPOSE)
        )
        assert fragment.usage == 'ForgeText(content = "Hi", color = ForgeColors.Error)'

    @pytest.mark.unit
    def test_text_color_hex(self):
        """Hex colors become literals."""
        fragment = TEXT.emitter_for(Target.IOS_UIKIT).emit(
            _node(TEXT, {"content": "Hi", "color": "#ff0000"}), _theme(Target.IOS_UIKIT)
        )
        assert "UIColor(red: 1.000, green: 0.000, blue: 0.000, alpha: 1.000)" in fragment.usage

    @pytest.mark.unit
    def test_list_items(self):
        """Array values render as string lists."""
        fragment = LIST.emitter_for(Target.ANDROID_XML).emit(
            _node(LIST, {"items": ["a", 'b"c']}), _theme(Target.ANDROID_XML)
        )
        assert 'app:list_items="[\\&quot;a\\&quot;,\\&quot;b\\\\\\&quot;c\\&quot;]"' in fragment.usage

    @pytest.mark.unit
    def test_stack_children(self):
        """Containers nest child usages."""
        fragment = STACK.emitter_for(Target.IOS_SWIFTUI).emit(
            _node(STACK, {"gap": "lg"}, ('ForgeText(content: "A")',)), _theme(Target.IOS_SWIFTUI)
        )
        assert fragment.usage == 'ForgeStack(gap: .lg) {\n    ForgeText(content: "A")\n}'
