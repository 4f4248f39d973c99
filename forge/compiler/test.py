"""Unit tests for the project compiler."""

import pytest

from forge.capsules import ALL_CAPSULES, BUTTON, TEXT
from forge.compiler import (
    FileConflictError,
    GenerationStatus,
    ProjectCompiler,
    default_namespace,
)
from forge.emitters import ReactEmitter
from forge.ir import FileKind, Project
from forge.registry import CapsuleDefinition, CapsuleRegistry, build_default_registry
from forge.schema import CapsuleCategory, PropertyKind, Target, TargetFamily
from forge.syntax import android_text, js_string, kotlin_string, swift_string
from forge.validation import ProjectValidationError


@pytest.fixture(scope="module")
def compiler() -> ProjectCompiler:
    return ProjectCompiler(build_default_registry(), max_workers=2)


def _project(*capsules, **kwargs) -> Project:
    return Project.model_validate(
        {"id": "demo", "name": kwargs.pop("name", "Sign In Demo"), "capsules": list(capsules), **kwargs}
    )


def _button(instance_id: str, label: str = "Sign In", **props) -> dict:
    return {"id": instance_id, "type": "button", "props": {"label": label, **props}}


SIGN_IN = {
    "id": "form",
    "type": "stack",
    "props": {"direction": "vertical"},
    "children": [
        {"id": "title", "type": "text", "props": {"content": "Welcome back"}},
        {"id": "email", "type": "input", "props": {"label": "Email", "placeholder": "you@example.com"}},
        _button("submit", onPress="signIn"),
    ],
}


class TestGenerate:
    """Tests for single-target generation."""

    @pytest.mark.unit
    def test_sign_in_web(self, compiler):
        """A sign-in form produces a runnable React project."""
        project = _project(SIGN_IN, theme={"colors": {"primary": "#3B82F6"}})
        manifest = compiler.generate(project, "web-react")

        assert manifest.target == Target.WEB_REACT
        assert manifest.entry == "src/main.tsx"
        assert manifest.file("src/main.tsx").kind == FileKind.ENTRY
        assert "--color-primary: #3b82f6;" in manifest.file("src/theme.css").content
        assert "react@^18.2.0" in manifest.dependencies
        app = manifest.file("src/App.tsx").content
        assert '<Button label={"Sign In"}' in app
        assert '<Text content={"Welcome back"}' in app
        assert manifest.warnings == []

    @pytest.mark.unit
    def test_units_in_depth_first_order(self, compiler):
        """Containers come before their children in the unit list."""
        manifest = compiler.generate(_project(SIGN_IN), "web-react")
        assert [f.path for f in manifest.files_of_kind(FileKind.COMPONENT)] == [
            "src/components/Stack.tsx",
            "src/components/Text.tsx",
            "src/components/Input.tsx",
            "src/components/Button.tsx",
        ]

    @pytest.mark.unit
    def test_deterministic(self, compiler):
        """Generating twice yields identical manifests."""
        project = _project(SIGN_IN)
        first = compiler.generate(project, "android-compose")
        second = compiler.generate(project, "android-compose")
        assert first.files == second.files
        assert first.dependencies == second.dependencies

    @pytest.mark.unit
    def test_units_deduplicated(self, compiler):
        """Five buttons share one unit but keep five usages."""
        project = _project(*[_button(f"b{i}", f"Button {i}") for i in range(5)])
        manifest = compiler.generate(project, "web-react")
        assert [f.path for f in manifest.files_of_kind(FileKind.COMPONENT)] == [
            "src/components/Button.tsx"
        ]
        assert manifest.file("src/App.tsx").content.count("<Button ") == 5

    @pytest.mark.unit
    def test_strings_escaped(self, compiler):
        """User text is encoded as a string literal."""
        project = _project(_button("b1", 'Say "hi" </script>'))
        app = compiler.generate(project, "web-react").file("src/App.tsx").content
        assert '"Say \\"hi\\" <\\/script>"' in app

    @pytest.mark.unit
    def test_unknown_type_placeholder(self, compiler):
        """Unknown types render as placeholders with a warning."""
        project = _project(
            {"id": "c1", "type": "carousel", "children": [_button("b1")]},
        )
        manifest = compiler.generate(project, "web-react")
        paths = manifest.paths
        assert "src/components/Placeholder.tsx" in paths
        assert "src/components/Button.tsx" in paths
        assert [w.code for w in manifest.warnings] == ["UnknownComponentType"]
        assert manifest.warnings[0].instance_id == "c1"

    @pytest.mark.unit
    def test_unsupported_target_placeholder(self):
        """Known types without an emitter for the target become placeholders."""
        badge = CapsuleDefinition(
            type_id="badge",
            display_name="Badge",
            category=CapsuleCategory.UI,
            schema=BUTTON.schema,
            emitters={Target.WEB_REACT: BUTTON.emitter_for(Target.WEB_REACT)},
        )
        compiler = ProjectCompiler(CapsuleRegistry.from_definitions([badge]))
        project = _project({"id": "b1", "type": "badge", "props": {"label": "New"}})

        manifest = compiler.generate(project, "ios-swiftui")
        assert [w.code for w in manifest.warnings] == ["UnsupportedTarget"]
        assert "SignInDemo/Components/ForgePlaceholder.swift" in manifest.paths

        web = compiler.generate(project, "web-react")
        assert web.warnings == []

    @pytest.mark.unit
    def test_capitalized_color_defines_token_once(self, compiler):
        """A capitalized palette name overrides the default instead of duplicating it."""
        project = _project(_button("b1"), theme={"colors": {"Primary": "#000000"}})

        swift = compiler.generate(project, "ios-swiftui").file("SignInDemo/Theme/ForgeTheme.swift").content
        assert swift.count("static let primary =") == 1

        css = compiler.generate(project, "web-react").file("src/theme.css").content
        assert css.count("--color-primary:") == 1
        assert "--color-primary: #000000;" in css

    @pytest.mark.unit
    def test_swiftui_empty_stack(self, compiler):
        """An empty stack is called without a closure and has a matching init."""
        manifest = compiler.generate(_project({"id": "s1", "type": "stack"}), "ios-swiftui")
        assert "ForgeStack()" in manifest.file("SignInDemo/ContentView.swift").content
        stack = manifest.file("SignInDemo/Components/ForgeStack.swift").content
        assert "extension ForgeStack where Content == EmptyView {" in stack
        assert "content: { EmptyView() })" in stack

    @pytest.mark.unit
    def test_swiftui_leaf_unknown_type(self, compiler):
        """A childless unknown type renders a placeholder callable without content."""
        manifest = compiler.generate(_project({"id": "c1", "type": "carousel"}), "ios-swiftui")
        assert 'ForgePlaceholder(typeId: "carousel")' in manifest.file("SignInDemo/ContentView.swift").content
        placeholder = manifest.file("SignInDemo/Components/ForgePlaceholder.swift").content
        assert "extension ForgePlaceholder where Content == EmptyView {" in placeholder
        assert "    init(typeId: String) {" in placeholder

    @pytest.mark.unit
    def test_children_of_leaf_ignored(self, compiler):
        """Children under a non-container are neither validated nor emitted."""
        project = _project(
            {**_button("b1"), "children": [{"id": "t1", "type": "text", "props": {}}]},
        )
        manifest = compiler.generate(project, "web-react")
        assert "src/components/Text.tsx" not in manifest.paths
        assert [w.code for w in manifest.warnings] == ["ChildrenIgnored"]

    @pytest.mark.unit
    def test_fatal_validation_raises(self, compiler):
        """Missing required properties abort generation."""
        project = _project({"id": "b1", "type": "button", "props": {}})
        with pytest.raises(ProjectValidationError) as exc_info:
            compiler.generate(project, "web-react")
        assert exc_info.value.errors[0].code.value == "MissingRequiredProperty"

    @pytest.mark.unit
    def test_unknown_target(self, compiler):
        """Unknown target ids are rejected."""
        with pytest.raises(ValueError):
            compiler.generate(_project(), "windows-forms")

    @pytest.mark.unit
    def test_empty_project(self, compiler):
        """A project without capsules still produces a scaffold."""
        manifest = compiler.generate(_project(), "ios-swiftui")
        assert manifest.entry == "SignInDemo/SignInDemoApp.swift"
        assert manifest.files_of_kind(FileKind.COMPONENT) == []

    @pytest.mark.unit
    def test_android_namespace(self, compiler):
        """Android sources live under the derived package."""
        manifest = compiler.generate(_project(SIGN_IN), "android-compose")
        assert manifest.entry == "app/src/main/java/com/forge/signindemo/MainActivity.kt"
        custom = compiler.generate(
            _project(SIGN_IN), "android-compose", {"packageName": "io.acme.login"}
        )
        assert custom.entry == "app/src/main/java/io/acme/login/MainActivity.kt"

    @pytest.mark.unit
    def test_package_prefix_fixed_at_construction(self, monkeypatch):
        """Changing FORGE_PACKAGE_PREFIX later does not change output."""
        monkeypatch.setenv("FORGE_PACKAGE_PREFIX", "com.a")
        compiler = ProjectCompiler(build_default_registry())
        project = _project(_button("b1"))
        first = compiler.generate(project, "android-compose")

        monkeypatch.setenv("FORGE_PACKAGE_PREFIX", "org.b")
        second = compiler.generate(project, "android-compose")

        assert first.files == second.files
        assert 'namespace = "com.a.signindemo"' in first.file("app/build.gradle.kts").content

    @pytest.mark.unit
    def test_package_prefix_argument(self):
        """An explicit prefix is used for the derived namespace."""
        compiler = ProjectCompiler(build_default_registry(), package_prefix="io.acme")
        manifest = compiler.generate(_project(_button("b1")), "android-compose")
        assert manifest.entry == "app/src/main/java/io/acme/signindemo/MainActivity.kt"

    @pytest.mark.unit
    @pytest.mark.parametrize("prefix", ["my-co", "com..acme", "1com", "com.acme app"])
    def test_invalid_package_prefix(self, prefix):
        """Prefixes that are not reverse-DNS segments are rejected."""
        with pytest.raises(ValueError, match="Invalid package prefix"):
            ProjectCompiler(build_default_registry(), package_prefix=prefix)

    @pytest.mark.unit
    def test_extra_files(self, compiler):
        """Extra files are merged verbatim."""
        manifest = compiler.generate(
            _project(), "web-react", {"extraFiles": [{"path": "docs/NOTES.md", "content": "hi"}]}
        )
        assert manifest.file("docs/NOTES.md").content == "hi"

    @pytest.mark.unit
    def test_extra_file_collision(self, compiler):
        """Extra files may not overwrite generated files."""
        with pytest.raises(FileConflictError) as exc_info:
            compiler.generate(
                _project(), "web-react", {"extraFiles": [{"path": "package.json", "content": "{}"}]}
            )
        assert exc_info.value.path == "package.json"

    @pytest.mark.unit
    def test_unit_name_collision(self):
        """Two types emitting one unit name with different bodies conflict."""
        impostor = CapsuleDefinition(
            type_id="fancy-button",
            display_name="Fancy Button",
            category=CapsuleCategory.UI,
            schema=TEXT.schema,
            emitters={
                Target.WEB_REACT: ReactEmitter("button", TEXT.emitter_for(Target.WEB_REACT).template)
            },
        )
        compiler = ProjectCompiler(CapsuleRegistry.from_definitions([BUTTON, impostor]))
        project = _project(
            _button("b1"),
            {"id": "f1", "type": "fancy-button", "props": {"content": "Hi"}},
        )
        with pytest.raises(FileConflictError) as exc_info:
            compiler.generate(project, "web-react")
        assert exc_info.value.path == "Button"


# User text that is meaningful to at least one target language
HOSTILE = "a\"b'c{d}$e${f}\\(g)</h>\n@i&j"

STRING_KINDS = (PropertyKind.STRING, PropertyKind.ACTION, PropertyKind.ICON)

ENCODERS = {
    TargetFamily.REACT: js_string,
    TargetFamily.SWIFTUI: swift_string,
    TargetFamily.UIKIT: swift_string,
    TargetFamily.COMPOSE: kotlin_string,
    TargetFamily.ANDROID_VIEW: android_text,
}


def _hostile_instance(definition: CapsuleDefinition) -> dict:
    props = {}
    for prop in definition.schema:
        if prop.kind in STRING_KINDS:
            props[prop.name] = HOSTILE
        elif prop.kind == PropertyKind.ARRAY and prop.required:
            props[prop.name] = [HOSTILE]
    return {"id": "c1", "type": definition.type_id, "props": props}


class TestEscaping:
    """User strings reach every target only through its literal encoder."""

    @pytest.mark.unit
    @pytest.mark.parametrize("target", list(Target), ids=lambda t: t.value)
    @pytest.mark.parametrize("definition", ALL_CAPSULES, ids=lambda d: d.type_id)
    def test_string_props_encoded(self, compiler, definition, target):
        """Every string, action and icon prop is encoded, never copied raw."""
        manifest = compiler.generate(_project(_hostile_instance(definition)), target)
        content = "\n".join(f.content for f in manifest.files)

        assert HOSTILE not in content
        string_props = [p for p in definition.schema if p.kind in STRING_KINDS]
        encoded = ENCODERS[target.family](HOSTILE)
        assert content.count(encoded) >= len(string_props)


class TestCompile:
    """Tests for the non-raising compile API."""

    @pytest.mark.unit
    def test_success(self, compiler):
        """A clean project succeeds without warnings."""
        result = compiler.compile(_project(SIGN_IN), "desktop-tauri")
        assert result.status == GenerationStatus.SUCCEEDED
        assert result.success
        assert result.file_count == result.manifest.file_count

    @pytest.mark.unit
    def test_warnings(self, compiler):
        """Warnings downgrade the status but not success."""
        result = compiler.compile(_project({"id": "x", "type": "carousel"}), "web-react")
        assert result.status == GenerationStatus.SUCCEEDED_WITH_WARNINGS
        assert result.success

    @pytest.mark.unit
    def test_validation_failure(self, compiler):
        """Fatal errors come back as a failed result without files."""
        result = compiler.compile(_project({"id": "b1", "type": "button"}), "web-react")
        assert result.status == GenerationStatus.FAILED
        assert result.manifest is None
        assert result.error.code == "ValidationFailed"
        assert result.error.details[0]["instanceId"] == "b1"


class TestGenerateMulti:
    """Tests for multi-target generation."""

    @pytest.mark.unit
    def test_all_targets(self, compiler):
        """Every target is generated and summarized."""
        targets = [t.value for t in Target]
        result = compiler.generate_multi(_project(SIGN_IN), targets)

        assert result.success
        assert list(result.results) == list(Target)
        assert result.summary.total_platforms == 7
        assert result.summary.successful_platforms == 7
        assert result.summary.total_files == sum(r.file_count for r in result.results.values())
        assert result.per_target[Target.WEB_REACT].to_dict()["platform"] == "web-react"

    @pytest.mark.unit
    def test_matches_single_target(self, compiler):
        """Concurrent generation produces the same files as sequential."""
        project = _project(SIGN_IN)
        result = compiler.generate_multi(project, ["ios-uikit", "android-xml"])
        for target in (Target.IOS_UIKIT, Target.ANDROID_XML):
            assert result.results[target].manifest.files == compiler.generate(project, target).files

    @pytest.mark.unit
    def test_failure_isolated(self, compiler):
        """One failing target does not affect the others."""
        result = compiler.generate_multi(
            _project(SIGN_IN),
            [
                ("web-react", {"extraFiles": [{"path": "package.json", "content": "{}"}]}),
                "ios-swiftui",
                "android-compose",
            ],
        )
        assert not result.success
        assert result.summary.total_platforms == 3
        assert result.summary.successful_platforms == 2
        assert result.summary.failed_platforms == ["web-react"]
        assert result.results[Target.IOS_SWIFTUI].success
        assert result.results[Target.ANDROID_COMPOSE].success
        assert result.per_target[Target.ANDROID_COMPOSE].file_count > 0
        summary = result.per_target[Target.WEB_REACT].to_dict()
        assert summary["success"] is False
        assert summary["fileCount"] == 0
        assert summary["errors"]

    @pytest.mark.unit
    def test_summary_camel_case(self, compiler):
        """Summary keys are camelCase."""
        result = compiler.generate_multi(_project(), ["web", "web-react"])
        assert result.summary.to_dict() == {
            "totalPlatforms": 1,
            "successfulPlatforms": 1,
            "failedPlatforms": [],
            "totalFiles": result.results[Target.WEB_REACT].file_count,
            "totalSize": result.results[Target.WEB_REACT].total_size,
        }


class TestHelpers:
    """Tests for naming helpers."""

    @pytest.mark.unit
    def test_default_namespace(self):
        """Namespaces are lowercased and avoid Kotlin keywords."""
        assert default_namespace("SignInDemo", "com.forge") == "com.forge.signindemo"
        assert default_namespace("When", "com.forge") == "com.forge.whenapp"


@pytest.mark.integration
class TestSignInEndToEnd:
    """End-to-end generation of the sign-in sample for every target."""

    PRIMARY = {
        Target.WEB_REACT: ("src/theme.css", "--color-primary: #3b82f6;"),
        Target.DESKTOP_TAURI: ("src/theme.css", "--color-primary: #3b82f6;"),
        Target.DESKTOP_ELECTRON: ("src/theme.css", "--color-primary: #3b82f6;"),
        Target.ANDROID_COMPOSE: (
            "app/src/main/java/com/forge/signin/ui/theme/ForgeTheme.kt",
            "Color(0xFF3B82F6)",
        ),
        Target.ANDROID_XML: ("app/src/main/res/values/colors.xml", "#FF3B82F6"),
    }

    def test_every_target(self, project_compiler, sample_project):
        """Every target builds with the button, the theme and an entry file."""
        result = project_compiler.generate_multi(sample_project, list(Target))
        assert result.success, result.summary.failed_platforms

        for target, generated in result.results.items():
            manifest = generated.manifest
            assert generated.status == GenerationStatus.SUCCEEDED, target
            assert manifest.file(manifest.entry).kind == FileKind.ENTRY, target
            assert any(p.endswith(("Button.tsx", "Button.swift", "Button.kt")) for p in manifest.paths), target
            assert manifest.files_of_kind(FileKind.THEME), target
            if target in self.PRIMARY:
                path, needle = self.PRIMARY[target]
                assert needle in manifest.file(path).content, target

    def test_declared_targets(self, project_compiler, sample_project):
        """The project's own target list resolves through the aliases."""
        result = project_compiler.generate_multi(sample_project, sample_project.targets)
        assert list(result.results) == [Target.WEB_REACT, Target.IOS_SWIFTUI, Target.ANDROID_COMPOSE]
