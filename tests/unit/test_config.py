"""
Tests for configuration system.
"""

import pytest

from web_automation_mcp.config import (
    Settings,
    BrowserSettings,
    CodegenSettings,
    ConfigLoader,
    load_config,
)
from web_automation_mcp.exceptions import ConfigurationError


class TestSettings:
    """Test the Settings classes."""

    def test_default_settings(self):
        """Test default settings are created correctly."""
        settings = Settings()

        assert settings.browser.browser_type == "chromium"
        assert settings.browser.headless is False
        assert settings.browser.viewport_width == 1280
        assert settings.browser.viewport_height == 720
        assert settings.codegen.output_directory == "tests"
        assert settings.codegen.test_name_prefix == "MCP"
        assert settings.codegen.include_comments is True
        assert settings.http.default_headers == {"Content-Type": "application/json"}

    def test_merge_with_overrides(self):
        """Test merging settings with overrides."""
        settings = Settings()
        new_settings = settings.merge_with({
            "browser": {"headless": True},
            "codegen": {"test_name_prefix": "Smoke"},
        })

        assert new_settings.browser.headless is True
        assert new_settings.codegen.test_name_prefix == "Smoke"
        # Other settings should remain default
        assert new_settings.browser.browser_type == "chromium"

    def test_browser_settings_validation(self):
        """Test validation of browser settings."""
        settings = BrowserSettings(navigation_timeout_ms=5000)
        assert settings.navigation_timeout_ms == 5000

        with pytest.raises(ValueError):
            BrowserSettings(navigation_timeout_ms=10)

        with pytest.raises(ValueError):
            BrowserSettings(browser_type="netscape")

    def test_env_vars(self, monkeypatch):
        """Test nested environment variables."""
        monkeypatch.setenv("WEB_AUTOMATION_MCP__BROWSER__HEADLESS", "true")
        monkeypatch.setenv("WEB_AUTOMATION_MCP__CODEGEN__OUTPUT_DIRECTORY", "generated")

        settings = Settings()

        assert settings.browser.headless is True
        assert settings.codegen.output_directory == "generated"


class TestConfigLoader:
    """Test the ConfigLoader."""

    def test_load_yaml_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("browser:\n  browser_type: firefox\ncodegen:\n  include_comments: false\n")

        settings = load_config(config_path=config_file)

        assert settings.browser.browser_type == "firefox"
        assert settings.codegen.include_comments is False

    def test_env_beats_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("browser:\n  browser_type: firefox\n")
        monkeypatch.setenv("WEB_AUTOMATION_MCP__BROWSER__BROWSER_TYPE", "webkit")

        settings = load_config(config_path=config_file)

        assert settings.browser.browser_type == "webkit"

    def test_overrides_beat_everything(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("WEB_AUTOMATION_MCP__BROWSER__HEADLESS", "false")

        settings = load_config(browser={"headless": True})

        assert settings.browser.headless is True

    def test_missing_explicit_file(self, tmp_path):
        loader = ConfigLoader(tmp_path / "nope.yaml")
        with pytest.raises(ConfigurationError):
            loader.load()

    def test_non_mapping_yaml(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            ConfigLoader(config_file).load()

    def test_empty_yaml(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        settings = ConfigLoader(config_file).load()

        assert settings.codegen == CodegenSettings()

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("browser: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ConfigLoader(config_file).load()

    def test_layers_in_priority_order(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("debug: true\n")
        monkeypatch.setenv("WEB_AUTOMATION_MCP__CODEGEN__TEST_NAME_PREFIX", "Env")

        layers = ConfigLoader(config_file).layers({"server_name": "cli"})

        assert layers == [
            {"debug": True},
            {"codegen": {"test_name_prefix": "Env"}},
            {"server_name": "cli"},
        ]

    def test_search_path_is_used(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config.yml").write_text("codegen:\n  test_name_prefix: Found\n")

        settings = load_config()

        assert settings.codegen.test_name_prefix == "Found"
