"""Unit tests for target assemblers."""

import json

import pytest

from forge.ir import FileKind, Project, TargetOptions
from forge.schema import Target
from forge.targets import (
    AssemblyInput,
    TargetAssembler,
    UnitSource,
    get_assembler,
    json_document,
    list_assemblers,
    unique,
)
from forge.targets.ios import dependency_spec
from forge.targets.web import npm_spec
from forge.theme import ThemeResolver

NAMESPACE = "com.forge.notes"

BUTTON = UnitSource(name="Button", body="// button unit\n", type_id="button")


def _input(target: Target, units=(BUTTON,), usages=("<Button />",), imports=(), **options) -> AssemblyInput:
    project = Project(id="notes", name="Notes & Co", description="Take notes")
    return AssemblyInput(
        project=project,
        target=target,
        theme=ThemeResolver().resolve(None, target, namespace=NAMESPACE),
        options=TargetOptions(**options),
        app_name="NotesCo",
        display_name="Notes & Co",
        namespace=NAMESPACE,
        bundle_id=NAMESPACE,
        units=tuple(units),
        usages=tuple(usages),
        imports=tuple(imports),
    )


def _assemble(target: Target, **kwargs):
    return get_assembler(target).assemble(_input(target, **kwargs))


def _file(assembly, path: str) -> str:
    for manifest_file in assembly.files:
        if manifest_file.path == path:
            return manifest_file.content
    raise AssertionError(f"{path} not in {[f.path for f in assembly.files]}")


class TestRegistry:
    """Tests for the assembler registry."""

    @pytest.mark.unit
    def test_every_target_registered(self):
        """Each target has exactly one assembler."""
        assert list_assemblers() == list(Target)

    @pytest.mark.unit
    def test_get_by_alias(self):
        """Assemblers are looked up by target id or platform alias."""
        assert get_assembler("web").target == Target.WEB_REACT
        assert isinstance(get_assembler(Target.ANDROID_XML), TargetAssembler)

    @pytest.mark.unit
    def test_unknown_target(self):
        """Unknown targets are rejected."""
        with pytest.raises(ValueError):
            get_assembler("blackberry")

    @pytest.mark.unit
    def test_target_mismatch(self):
        """An assembler refuses input for another target."""
        with pytest.raises(ValueError, match="cannot assemble"):
            get_assembler(Target.WEB_REACT).assemble(_input(Target.IOS_SWIFTUI))


class TestHelpers:
    """Tests for shared helpers."""

    @pytest.mark.unit
    def test_unique(self):
        """Duplicates are dropped in first-seen order."""
        assert unique(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]

    @pytest.mark.unit
    def test_json_document(self):
        """JSON documents are indented and end with a newline."""
        assert json_document({"a": 1}) == '{\n  "a": 1\n}\n'

    @pytest.mark.unit
    def test_npm_spec(self):
        """Scoped packages keep their leading @."""
        assert npm_spec("react@^18.2.0") == ("react", "^18.2.0")
        assert npm_spec("@tauri-apps/api@^2.0.0") == ("@tauri-apps/api", "^2.0.0")

    @pytest.mark.unit
    def test_dependency_spec(self):
        """SwiftPM dependencies pin a minimum version."""
        assert dependency_spec("https://github.com/a/b@1.2.0") == (
            '.package(url: "https://github.com/a/b", from: "1.2.0")'
        )


class TestWeb:
    """Tests for the React assembler."""

    @pytest.mark.unit
    def test_layout(self):
        """Scaffold comes first, then one file per unit."""
        assembly = _assemble(Target.WEB_REACT)
        paths = [f.path for f in assembly.files]
        assert paths[0] == "package.json"
        assert paths[-1] == "src/components/Button.tsx"
        assert assembly.entry == "src/main.tsx"
        kinds = {f.path: f.kind for f in assembly.files}
        assert kinds["src/main.tsx"] == FileKind.ENTRY
        assert kinds["src/theme.css"] == FileKind.THEME
        assert kinds["src/components/Button.tsx"] == FileKind.COMPONENT

    @pytest.mark.unit
    def test_package_json(self):
        """Dependencies merge scaffold and fragment imports."""
        assembly = _assemble(Target.WEB_REACT, imports=("lucide-react@^0.300.0", "react@^18.2.0"))
        package = json.loads(_file(assembly, "package.json"))
        assert package["name"] == "notes-co"
        assert package["description"] == "Take notes"
        assert package["dependencies"] == {
            "react": "^18.2.0",
            "react-dom": "^18.2.0",
            "lucide-react": "^0.300.0",
        }
        assert assembly.dependencies == ["react@^18.2.0", "react-dom@^18.2.0", "lucide-react@^0.300.0"]

    @pytest.mark.unit
    def test_app(self):
        """App imports units and renders usages inside the app shell."""
        app = _file(_assemble(Target.WEB_REACT), "src/App.tsx")
        assert 'import { Button } from "./components";' in app
        assert '      <Button />' in app
        index = _file(_assemble(Target.WEB_REACT), "src/components/index.ts")
        assert index == 'export * from "./Button";\n'

    @pytest.mark.unit
    def test_empty(self):
        """Projects without units still render an app shell."""
        app = _file(_assemble(Target.WEB_REACT, units=(), usages=()), "src/App.tsx")
        assert "import" not in app
        assert 'return <main className="forge-app" />;' in app

    @pytest.mark.unit
    def test_title_escaped(self):
        """The display name is HTML-escaped in index.html."""
        html = _file(_assemble(Target.WEB_REACT), "index.html")
        assert "<title>Notes &amp; Co</title>" in html

    @pytest.mark.unit
    def test_theme_css(self):
        """Theme tokens become CSS custom properties."""
        css = _file(_assemble(Target.WEB_REACT), "src/theme.css")
        assert css.startswith(":root {")
        assert "--color-primary:" in css
        assert "--font-family-heading:" in css


class TestDesktop:
    """Tests for the desktop assemblers."""

    @pytest.mark.unit
    def test_tauri(self):
        """Tauri adds the Rust shell next to the React frontend."""
        assembly = _assemble(Target.DESKTOP_TAURI)
        paths = [f.path for f in assembly.files]
        assert "src/App.tsx" in paths
        assert "src-tauri/src/main.rs" in paths
        conf = json.loads(_file(assembly, "src-tauri/tauri.conf.json"))
        assert conf["identifier"] == NAMESPACE
        assert conf["app"]["windows"][0]["title"] == "Notes & Co"
        assert "@tauri-apps/api@^2.0.0" in assembly.dependencies
        assert "src-tauri/target/" in _file(assembly, ".gitignore")

    @pytest.mark.unit
    def test_electron(self):
        """Electron points package.json at its main process."""
        assembly = _assemble(Target.DESKTOP_ELECTRON)
        package = json.loads(_file(assembly, "package.json"))
        assert package["main"] == "electron/main.cjs"
        assert "electron" in package["devDependencies"]
        assert 'base: "./"' in _file(assembly, "vite.config.ts")
        assert 'title: "Notes & Co"' in _file(assembly, "electron/main.cjs")


class TestIOS:
    """Tests for the iOS assemblers."""

    @pytest.mark.unit
    def test_swiftui(self):
        """SwiftUI apps have an App entry and a ContentView."""
        assembly = _assemble(Target.IOS_SWIFTUI, usages=("ForgeButton(label: \"Go\")",))
        assert assembly.entry == "NotesCo/NotesCoApp.swift"
        assert "struct NotesCoApp: App" in _file(assembly, assembly.entry)
        content = _file(assembly, "NotesCo/ContentView.swift")
        assert '                ForgeButton(label: "Go")' in content
        assert "NotesCo/Components/Button.swift" in [f.path for f in assembly.files]

    @pytest.mark.unit
    def test_swiftui_empty(self):
        """Empty screens fall back to EmptyView."""
        content = _file(_assemble(Target.IOS_SWIFTUI, units=(), usages=()), "NotesCo/ContentView.swift")
        assert "EmptyView()" in content

    @pytest.mark.unit
    def test_uikit(self):
        """UIKit apps have an app delegate, scene delegate and view controller."""
        assembly = _assemble(Target.IOS_UIKIT)
        paths = [f.path for f in assembly.files]
        assert assembly.entry == "NotesCo/AppDelegate.swift"
        assert "NotesCo/SceneDelegate.swift" in paths
        assert "NotesCo/MainViewController.swift" in paths
        assert _file(assembly, "NotesCo/Theme/ForgeTheme.swift").startswith("import UIKit")

    @pytest.mark.unit
    def test_package_swift(self):
        """The deployment target follows the options."""
        package = _file(_assemble(Target.IOS_SWIFTUI, ios_version="17.0"), "Package.swift")
        assert 'platforms: [.iOS("17.0")]' in package
        assert 'name: "NotesCo"' in package


class TestAndroid:
    """Tests for the Android assemblers."""

    SOURCE = "app/src/main/java/com/forge/notes"

    @pytest.mark.unit
    def test_compose(self):
        """Compose apps set content inside ForgeTheme."""
        assembly = _assemble(Target.ANDROID_COMPOSE, usages=('ForgeButton(label = "Go")',))
        assert assembly.entry == f"{self.SOURCE}/MainActivity.kt"
        activity = _file(assembly, assembly.entry)
        assert activity.startswith(f"package {NAMESPACE}\n")
        assert "ForgeTheme {" in activity
        assert 'ForgeButton(label = "Go")' in activity
        assert f"{self.SOURCE}/ui/theme/ForgeTheme.kt" in [f.path for f in assembly.files]
        assert f"{self.SOURCE}/ui/components/Button.kt" in [f.path for f in assembly.files]

    @pytest.mark.unit
    def test_gradle(self):
        """The app module declares namespace, minSdk and dependencies."""
        assembly = _assemble(Target.ANDROID_COMPOSE, min_sdk=26)
        gradle = _file(assembly, "app/build.gradle.kts")
        assert f'namespace = "{NAMESPACE}"' in gradle
        assert "minSdk = 26" in gradle
        assert 'implementation("androidx.core:core-ktx:1.12.0")' in gradle
        assert 'rootProject.name = "NotesCo"' in _file(assembly, "settings.gradle.kts")

    @pytest.mark.unit
    def test_strings_escaped(self):
        """The app name is escaped for Android resources."""
        strings = _file(_assemble(Target.ANDROID_COMPOSE), "app/src/main/res/values/strings.xml")
        assert '<string name="app_name">Notes &amp; Co</string>' in strings

    @pytest.mark.unit
    def test_xml_views(self):
        """View-based apps inflate a layout with theme resources."""
        assembly = _assemble(Target.ANDROID_XML)
        assert "setContentView(R.layout.activity_main)" in _file(assembly, assembly.entry)
        layout = _file(assembly, "app/src/main/res/layout/activity_main.xml")
        assert 'android:background="@color/forge_background"' in layout
        assert "<Button />" in layout
        assert '<color name="forge_primary">' in _file(assembly, "app/src/main/res/values/colors.xml")
        assert "androidx.appcompat:appcompat:1.6.1" in assembly.dependencies
