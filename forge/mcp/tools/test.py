"""Unit tests for MCP tools."""

import pytest

from forge.mcp.tools import (
    export_schema,
    generate_multi,
    generate_project,
    get_status,
    list_targets,
    validate_project,
)

PROJECT = {
    "id": "demo",
    "name": "Demo",
    "capsules": [
        {"id": "b1", "type": "button", "props": {"label": "Go"}},
        {"id": "x1", "type": "carousel"},
    ],
}


class TestGenerateProject:
    """Tests for generate_project tool."""

    @pytest.mark.unit
    def test_warnings_reported(self):
        """Placeholders succeed with warnings."""
        result = generate_project(PROJECT, "web-react")

        assert result["success"] is True
        assert result["status"] == "succeeded_with_warnings"
        assert result["warnings"][0]["code"] == "UnknownComponentType"
        assert result["warnings"][0]["instanceId"] == "x1"
        assert result["entry"] == "src/main.tsx"

    @pytest.mark.unit
    def test_default_target(self, monkeypatch):
        """The default target comes from configuration."""
        monkeypatch.setenv("FORGE_DEFAULT_TARGET", "android-xml")

        assert generate_project(PROJECT)["target"] == "android-xml"

    @pytest.mark.unit
    def test_invalid_project(self):
        """Malformed projects are rejected with details."""
        result = generate_project({"capsules": []}, "web")

        assert result["success"] is False
        assert result["error"]["code"] == "InvalidProject"
        assert result["error"]["details"]

    @pytest.mark.unit
    def test_invalid_options(self):
        """Malformed options are rejected."""
        result = generate_project(PROJECT, "android", {"packageName": "not a package"})

        assert result["error"]["code"] == "InvalidOptions"

    @pytest.mark.unit
    def test_file_conflict(self):
        """Extra files colliding with generated files fail the target."""
        result = generate_project(
            PROJECT, "web", {"extraFiles": [{"path": "src/App.tsx", "content": ""}]}
        )

        assert result["error"]["code"] == "FileConflict"
        assert result["error"]["details"] == [{"path": "src/App.tsx"}]


class TestGenerateMulti:
    """Tests for generate_multi tool."""

    @pytest.mark.unit
    def test_isolation(self):
        """A failing target is reported alongside successful ones."""
        result = generate_multi(
            PROJECT,
            [
                {"platform": "web", "options": {"extraFiles": [{"path": "package.json"}]}},
                "ios-uikit",
            ],
        )

        assert result["success"] is False
        assert result["summary"]["failedPlatforms"] == ["web-react"]
        web, ios = result["exports"]
        assert web["success"] is False and web["errors"]
        assert ios["success"] is True and ios["warnings"]

    @pytest.mark.unit
    def test_include_files(self):
        """Files are returned on request."""
        result = generate_multi(PROJECT, ["desktop-electron"], include_files=True)

        paths = [f["path"] for f in result["exports"][0]["files"]]
        assert "electron/main.cjs" in paths

    @pytest.mark.unit
    def test_requires_targets(self):
        """An empty target list is an error."""
        assert generate_multi(PROJECT, [])["error"]["code"] == "InvalidTarget"

    @pytest.mark.unit
    def test_target_object_requires_platform(self, monkeypatch):
        """A target object without a platform is rejected, not defaulted."""
        monkeypatch.setenv("FORGE_DEFAULT_TARGET", "web-react")
        result = generate_multi(PROJECT, ["ios", {"options": {"appName": "Demo"}}])

        assert result["success"] is False
        assert result["error"]["code"] == "InvalidTarget"
        assert "platform" in result["error"]["message"]


class TestCatalogTools:
    """Tests for schema, targets, validation and status tools."""

    @pytest.mark.unit
    def test_export_schema(self):
        """Every built-in capsule is exported in camelCase."""
        schema = export_schema()

        assert schema[0]["typeId"] == "button"
        assert {"typeId", "displayName", "category", "schema"} <= set(schema[0])

    @pytest.mark.unit
    def test_list_targets(self):
        """All seven targets are listed with their capsules."""
        result = list_targets()

        assert len(result["targets"]) == 7
        web = next(t for t in result["targets"] if t["id"] == "web-react")
        assert web["platform"] == "web"
        assert "button" in web["capsules"]

    @pytest.mark.unit
    def test_validate_project(self):
        """Fatal errors and warnings are split."""
        project = {
            "id": "p",
            "capsules": [
                {"id": "b1", "type": "button", "props": {}},
                {"id": "b1", "type": "carousel"},
            ],
        }
        result = validate_project(project)

        assert result["valid"] is False
        assert {e["code"] for e in result["errors"]} == {
            "MissingRequiredProperty",
            "DuplicateInstanceId",
        }
        assert [w["code"] for w in result["warnings"]] == ["UnknownComponentType"]
        assert result["stats"]["capsule_types"] == ["button", "carousel"]

    @pytest.mark.unit
    def test_status(self):
        """Status lists registered capsules and targets."""
        result = get_status()

        assert result["status"] == "healthy"
        assert len(result["targets"]) == 7
