"""Tests for output module."""

import pytest

from forge.ir import FileKind, GenerationWarning, ManifestFile, Project, ProjectManifest
from forge.output import format_manifest_tree, format_project_tree, format_warnings, write_manifest
from forge.schema import Target


@pytest.fixture
def sample_project():
    """Create sample project for testing."""
    return Project.model_validate(
        {
            "id": "demo",
            "name": "Sign In Demo",
            "capsules": [
                {
                    "id": "form",
                    "type": "stack",
                    "children": [
                        {"id": "title", "type": "text", "props": {"content": "Welcome back"}},
                        {"id": "submit", "type": "button", "props": {"label": "Sign In"}},
                    ],
                },
                {"id": "footer", "type": "text", "props": {"content": "v1"}},
            ],
        }
    )


@pytest.fixture
def sample_manifest():
    """Create sample manifest for testing."""
    return ProjectManifest(
        target=Target.WEB_REACT,
        files=[
            ManifestFile("package.json", "{}\n", FileKind.DEPENDENCY_MANIFEST),
            ManifestFile("src/main.tsx", "main\n", FileKind.ENTRY),
            ManifestFile("src/components/Button.tsx", "button\n", FileKind.COMPONENT),
        ],
        entry="src/main.tsx",
        warnings=[GenerationWarning("UnknownComponentType", "Unknown component type 'x'", "c1")],
    )


class TestFormatProjectTree:
    """Tests for format_project_tree function."""

    @pytest.mark.unit
    def test_nested_tree(self, sample_project):
        """Test formatting nested tree."""
        assert format_project_tree(sample_project).splitlines() == [
            "Sign In Demo",
            "├── form [stack]",
            '│   ├── title [text] "Welcome back"',
            '│   └── submit [button] "Sign In"',
            '└── footer [text] "v1"',
        ]

    @pytest.mark.unit
    def test_empty_project(self):
        """Test formatting project without capsules."""
        assert format_project_tree(Project(id="empty")) == "empty"


class TestFormatManifestTree:
    """Tests for format_manifest_tree function."""

    @pytest.mark.unit
    def test_tree(self, sample_manifest):
        """Test directories nest and the entry is marked."""
        assert format_manifest_tree(sample_manifest).splitlines() == [
            "web-react (3 files, 15 bytes)",
            "├── package.json (3 B)",
            "└── src",
            "    ├── main.tsx (5 B) *",
            "    └── components",
            "        └── Button.tsx (7 B)",
        ]

    @pytest.mark.unit
    def test_warnings(self, sample_manifest):
        """Test warnings are listed with their instance."""
        assert format_warnings(sample_manifest) == (
            "UnknownComponentType (c1): Unknown component type 'x'"
        )


class TestWriteManifest:
    """Tests for write_manifest function."""

    @pytest.mark.unit
    def test_writes_files(self, sample_manifest, tmp_path):
        """Test files are written below the output directory."""
        written = write_manifest(sample_manifest, tmp_path / "out")
        assert len(written) == 3
        assert (tmp_path / "out" / "src" / "components" / "Button.tsx").read_text() == "button\n"

    @pytest.mark.unit
    def test_rejects_escaping_paths(self, tmp_path):
        """Test paths outside the output directory are refused."""
        manifest = ProjectManifest(
            target=Target.WEB_REACT,
            files=[ManifestFile("../evil.txt", "x", FileKind.SUPPORT)],
        )
        with pytest.raises(ValueError, match="escapes"):
            write_manifest(manifest, tmp_path / "out")
        assert not (tmp_path / "evil.txt").exists()
