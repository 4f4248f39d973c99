"""Unit tests for MCP server module.

Tests cover:
- Server configuration
- Server instance creation
- Tool registration and calls over the in-memory client
"""

import json

import pytest

from .lib import (
    ServerConfig,
    TransportType,
    error_envelope,
    get_compiler,
    get_server_capabilities,
    get_server_version,
    parse_project,
    ToolError,
)
from .server import create_server, mcp

TOOLS = {"generate", "generate_multi", "validate_project", "schema", "list_targets", "status"}


def _payload(result):
    """Decode the JSON text content of a tool result."""
    return json.loads(result.content[0].text)


# =============================================================================
# Configuration Tests
# =============================================================================


class TestServerConfig:
    """Tests for ServerConfig dataclass."""

    @pytest.mark.unit
    def test_default_config(self):
        """Default config has expected values."""
        config = ServerConfig()

        assert config.name == "capsule-forge"
        assert config.transport == TransportType.STDIO
        assert config.host == "0.0.0.0"
        assert config.port == 18080
        assert config.path == "/mcp"

    @pytest.mark.unit
    def test_from_env_with_transport(self, monkeypatch):
        """from_env reads the port and respects transport override."""
        monkeypatch.setenv("MCP_PORT", "9000")
        config = ServerConfig.from_env(transport=TransportType.HTTP)

        assert config.transport == TransportType.HTTP
        assert config.port == 9000


class TestServerUtilities:
    """Tests for server utility functions."""

    @pytest.mark.unit
    def test_get_server_version(self):
        """Server version is a valid semver string."""
        assert len(get_server_version().split(".")) >= 2

    @pytest.mark.unit
    def test_get_server_capabilities(self):
        """Server capabilities advertise tools and resources."""
        caps = get_server_capabilities()

        assert caps["tools"] is True
        assert caps["resources"] is True

    @pytest.mark.unit
    def test_compiler_shared(self):
        """Every tool call uses one compiler."""
        assert get_compiler() is get_compiler()

    @pytest.mark.unit
    def test_error_envelope(self):
        """Error envelopes carry code, message and details."""
        assert error_envelope("InvalidTarget", "nope") == {
            "success": False,
            "error": {"code": "InvalidTarget", "message": "nope", "details": []},
        }

    @pytest.mark.unit
    def test_parse_project_errors(self):
        """Schema errors become an InvalidProject ToolError."""
        with pytest.raises(ToolError) as exc_info:
            parse_project({"capsules": "nope"})
        assert exc_info.value.code == "InvalidProject"
        assert {d["path"] for d in exc_info.value.details} >= {"id"}


# =============================================================================
# Server Instance Tests
# =============================================================================


class TestServerInstance:
    """Tests for FastMCP server instance."""

    @pytest.mark.unit
    def test_create_server_returns_mcp(self):
        """create_server returns the mcp instance."""
        assert create_server() is mcp

    @pytest.mark.unit
    def test_server_has_name(self):
        """Server has correct name."""
        assert mcp.name == "capsule-forge"


# =============================================================================
# MCP Protocol Tests
# =============================================================================


@pytest.mark.mcp
class TestMCPProtocol:
    """Integration tests using the MCP client protocol."""

    @pytest.mark.asyncio
    async def test_client_can_list_tools(self, mcp_client):
        """Every engine tool is exposed."""
        tools = await mcp_client.list_tools()

        assert {t.name for t in tools} == TOOLS

    @pytest.mark.asyncio
    async def test_generate(self, mcp_client, sign_in_project):
        """generate returns files inline."""
        result = await mcp_client.call_tool(
            "generate", {"project": sign_in_project, "target": "web"}
        )
        data = _payload(result)

        assert data["success"] is True
        assert data["target"] == "web-react"
        paths = [f["path"] for f in data["files"]]
        assert "src/components/Button.tsx" in paths
        theme = next(f for f in data["files"] if f["path"] == "src/theme.css")
        assert "#3b82f6" in theme["content"]
        assert theme["language"] == "css"

    @pytest.mark.asyncio
    async def test_generate_validation_failure(self, mcp_client):
        """Fatal validation errors come back as an error envelope."""
        project = {"id": "p", "capsules": [{"id": "b1", "type": "button", "props": {}}]}
        data = _payload(await mcp_client.call_tool("generate", {"project": project, "target": "ios"}))

        assert data["success"] is False
        assert data["error"]["code"] == "ValidationFailed"
        assert data["error"]["details"][0]["code"] == "MissingRequiredProperty"

    @pytest.mark.asyncio
    async def test_generate_unknown_target(self, mcp_client, sign_in_project):
        """Unknown targets are reported, not raised."""
        data = _payload(
            await mcp_client.call_tool("generate", {"project": sign_in_project, "target": "symbian"})
        )

        assert data["error"]["code"] == "InvalidTarget"

    @pytest.mark.asyncio
    async def test_generate_multi(self, mcp_client, sign_in_project):
        """generate_multi summarizes every target."""
        data = _payload(
            await mcp_client.call_tool(
                "generate_multi",
                {
                    "project": sign_in_project,
                    "targets": [
                        {"platform": "web"},
                        {"platform": "android", "options": {"packageName": "io.acme.signin"}},
                    ],
                },
            )
        )

        assert data["success"] is True
        assert [e["platform"] for e in data["exports"]] == ["web-react", "android-compose"]
        assert data["summary"]["totalPlatforms"] == 2
        assert data["summary"]["failedPlatforms"] == []
        assert data["summary"]["totalFiles"] == sum(e["fileCount"] for e in data["exports"])

    @pytest.mark.asyncio
    async def test_validate_project(self, mcp_client, sign_in_project):
        """validate_project reports stats for a clean project."""
        data = _payload(await mcp_client.call_tool("validate_project", {"project": sign_in_project}))

        assert data["valid"] is True
        assert data["stats"]["instance_count"] == 4
        assert data["stats"]["max_depth"] == 2

    @pytest.mark.asyncio
    async def test_status(self, mcp_client):
        """status reports a healthy engine."""
        data = _payload(await mcp_client.call_tool("status", {}))

        assert data["status"] == "healthy"
        assert "button" in data["capsules"]
        assert data["missing_targets"] == []
