"""Tests for configuration management."""

from pathlib import Path

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    get_environment,
    get_environment_info,
    get_max_workers,
    get_output_dir,
    get_package_prefix,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("MCP_PORT", raising=False)
        assert get_environment(EnvVar.MCP_PORT) == 18080

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("FORGE_MAX_WORKERS", "9")
        assert get_environment(EnvVar.FORGE_MAX_WORKERS, override=2) == 2

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("FORGE_DEFAULT_TARGET", "ios-swiftui")
        assert get_environment(EnvVar.FORGE_DEFAULT_TARGET) == "ios-swiftui"

    @pytest.mark.unit
    def test_int_type_conversion(self, monkeypatch):
        """Integer type conversion from string."""
        monkeypatch.setenv("FORGE_MAX_WORKERS", "12")
        result = get_environment(EnvVar.FORGE_MAX_WORKERS)
        assert result == 12
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_invalid_int_falls_back_to_default(self, monkeypatch):
        """Unparseable integers fall back to the default."""
        monkeypatch.setenv("FORGE_MAX_WORKERS", "many")
        assert get_environment(EnvVar.FORGE_MAX_WORKERS) == 4

    @pytest.mark.unit
    def test_path_type_conversion(self, monkeypatch, tmp_path):
        """Path variables are returned as Path objects."""
        monkeypatch.setenv("FORGE_OUTPUT_DIR", str(tmp_path))
        assert get_environment(EnvVar.FORGE_OUTPUT_DIR) == tmp_path


class TestEnvironmentInfo:
    """Tests for metadata access and listing."""

    @pytest.mark.unit
    def test_info_is_env_config(self):
        """get_environment_info returns EnvConfig metadata."""
        info = get_environment_info(EnvVar.MCP_HOST)
        assert isinstance(info, EnvConfig)
        assert info.name == "MCP_HOST"
        assert info.category == "service"

    @pytest.mark.unit
    def test_list_by_category(self):
        """Category filter only returns matching variables."""
        engine = list_environment_variables("engine")
        assert EnvVar.FORGE_MAX_WORKERS in engine
        assert EnvVar.MCP_PORT not in engine
        assert len(list_environment_variables()) == len(EnvVar)


class TestConvenienceFunctions:
    """Tests for derived configuration helpers."""

    @pytest.mark.unit
    def test_output_dir_default(self, monkeypatch):
        """Output dir defaults to ./build."""
        monkeypatch.delenv("FORGE_OUTPUT_DIR", raising=False)
        assert get_output_dir() == Path.cwd() / "build"

    @pytest.mark.unit
    def test_output_dir_override(self, tmp_path):
        """Explicit override wins."""
        assert get_output_dir(tmp_path) == tmp_path

    @pytest.mark.unit
    def test_max_workers_is_positive(self, monkeypatch):
        """Worker count never drops below one."""
        monkeypatch.setenv("FORGE_MAX_WORKERS", "0")
        assert get_max_workers() == 1

    @pytest.mark.unit
    def test_package_prefix_strips_dots(self, monkeypatch):
        """Trailing dots are removed from the prefix."""
        monkeypatch.setenv("FORGE_PACKAGE_PREFIX", "io.example.")
        assert get_package_prefix() == "io.example"
