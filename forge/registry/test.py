"""Unit tests for the capsule registry."""

import pytest

from forge.registry import (
    CapsuleDefinition,
    CapsuleRegistry,
    DuplicateTypeError,
    RegistryFrozenError,
    build_default_registry,
)
from forge.schema import CapsuleCategory, PropertyKind, PropertySchema, Target


def _definition(type_id: str, **kwargs) -> CapsuleDefinition:
    return CapsuleDefinition(
        type_id=type_id,
        display_name=type_id.title(),
        category=kwargs.pop("category", CapsuleCategory.UI),
        schema=(PropertySchema("label", PropertyKind.STRING, required=True),),
        **kwargs,
    )


class TestCapsuleDefinition:
    """Tests for CapsuleDefinition."""

    @pytest.mark.unit
    def test_emitters_are_read_only(self):
        """The emitters mapping cannot be mutated after construction."""
        emitters = {Target.WEB_REACT: object()}
        definition = _definition("badge", emitters=emitters)
        emitters[Target.IOS_SWIFTUI] = object()
        assert Target.IOS_SWIFTUI not in definition.emitters
        with pytest.raises(TypeError):
            definition.emitters[Target.ANDROID_XML] = object()

    @pytest.mark.unit
    def test_duplicate_property_names_rejected(self):
        """Schemas may not declare the same property twice."""
        with pytest.raises(ValueError, match="duplicate"):
            CapsuleDefinition(
                type_id="bad",
                display_name="Bad",
                category=CapsuleCategory.UI,
                schema=(
                    PropertySchema("label", PropertyKind.STRING),
                    PropertySchema("label", PropertyKind.NUMBER),
                ),
            )

    @pytest.mark.unit
    def test_get_property(self):
        """Properties are looked up by name."""
        definition = _definition("badge")
        assert definition.get_property("label").required is True
        assert definition.get_property("missing") is None

    @pytest.mark.unit
    def test_to_dict(self):
        """Export uses camelCase keys."""
        data = _definition("badge", emitters={Target.WEB_REACT: object()}).to_dict()
        assert data["typeId"] == "badge"
        assert data["displayName"] == "Badge"
        assert data["category"] == "ui"
        assert data["targets"] == ["web-react"]
        assert data["schema"][0]["name"] == "label"


class TestCapsuleRegistry:
    """Tests for CapsuleRegistry."""

    @pytest.mark.unit
    def test_register_and_lookup(self):
        """Registered definitions are found by type id."""
        registry = CapsuleRegistry()
        definition = registry.register(_definition("badge"))
        assert registry.lookup("badge") is definition
        assert "badge" in registry
        assert len(registry) == 1

    @pytest.mark.unit
    def test_lookup_unknown_returns_none(self):
        """Unknown ids never raise."""
        assert CapsuleRegistry().lookup("nope") is None

    @pytest.mark.unit
    def test_duplicate_type_rejected(self):
        """Registering a type id twice raises DuplicateTypeError."""
        registry = CapsuleRegistry()
        registry.register(_definition("badge"))
        with pytest.raises(DuplicateTypeError):
            registry.register(_definition("badge"))

    @pytest.mark.unit
    def test_frozen_registry_rejects_registration(self):
        """Registration after freeze() raises RegistryFrozenError."""
        registry = CapsuleRegistry.from_definitions([_definition("badge")])
        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.register(_definition("chip"))
        assert registry.type_ids() == ["badge"]

    @pytest.mark.unit
    def test_registration_order_preserved(self):
        """definitions() keeps registration order."""
        registry = CapsuleRegistry.from_definitions(
            [_definition("zeta"), _definition("alpha"), _definition("mid")]
        )
        assert registry.type_ids() == ["zeta", "alpha", "mid"]

    @pytest.mark.unit
    def test_supports_and_by_category(self):
        """Target support and category filters."""
        registry = CapsuleRegistry.from_definitions(
            [
                _definition("badge", emitters={Target.WEB_REACT: object()}),
                _definition("row", category=CapsuleCategory.LAYOUT),
            ]
        )
        assert registry.supports("badge", "web")
        assert not registry.supports("badge", Target.IOS_SWIFTUI)
        assert not registry.supports("missing", Target.WEB_REACT)
        assert [d.type_id for d in registry.by_category("layout")] == ["row"]


class TestDefaultRegistry:
    """Tests for the built-in capsules."""

    @pytest.mark.unit
    def test_builtins_registered(self):
        """The representative capsule set is available."""
        registry = build_default_registry()
        assert registry.frozen
        for type_id in ("button", "text", "input", "image", "switch", "card", "stack", "list"):
            assert type_id in registry

    @pytest.mark.unit
    def test_builtins_cover_every_target(self):
        """Every built-in capsule has an emitter for every target."""
        registry = build_default_registry()
        for definition in registry.definitions():
            assert set(definition.targets) == set(Target), definition.type_id

    @pytest.mark.unit
    def test_containers_accept_children(self):
        """Only layout containers accept children."""
        registry = build_default_registry()
        containers = {d.type_id for d in registry.definitions() if d.accepts_children}
        assert containers == {"card", "stack"}

    @pytest.mark.unit
    def test_export_schema(self):
        """Schema export lists every capsule with its properties."""
        exported = build_default_registry().export_schema()
        button = next(item for item in exported if item["typeId"] == "button")
        label = next(p for p in button["schema"] if p["name"] == "label")
        assert label["kind"] == "string"
        assert label["required"] is True
