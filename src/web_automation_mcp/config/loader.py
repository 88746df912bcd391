"""
Config Loader - Builds Settings from layered sources.

Layers, lowest to highest:
    defaults < YAML config file < WEB_AUTOMATION_MCP__* environment < overrides

A .env file, when present, is loaded into the environment before the
environment layer is read.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from dotenv import load_dotenv

from web_automation_mcp.config.settings import Settings
from web_automation_mcp.exceptions import ConfigurationError

PathLike = Union[str, Path]

SEARCH_PATHS = (
    Path("config.yaml"),
    Path("config.yml"),
    Path("config/default.yaml"),
    Path.home() / ".config" / "web-automation-mcp" / "config.yaml",
)

ENV_FILES = (Path(".env"), Path(".env.local"))


def read_yaml(path: Path) -> Dict[str, Any]:
    """
    Parse a YAML config file into a mapping. An empty file is an empty mapping.

    Raises:
        ConfigurationError: If the file is not valid YAML or not a mapping
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}", {"path": str(path)}) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping", {"path": str(path)})
    return data


class ConfigLoader:
    """
    Resolves the config file and merges every layer into one Settings.

    Example:
        >>> settings = ConfigLoader("config.yaml").load(overrides={"debug": True})
    """

    def __init__(self, config_path: Optional[PathLike] = None):
        self.config_path = Path(config_path) if config_path else None

    def find_config_file(self) -> Optional[Path]:
        """
        Locate the YAML file to read.

        An explicit path must exist; the search paths are optional.

        Raises:
            ConfigurationError: If the explicit path is missing
        """
        if self.config_path is not None:
            if not self.config_path.exists():
                raise ConfigurationError(
                    f"Config file not found: {self.config_path}",
                    {"path": str(self.config_path)},
                )
            return self.config_path
        return next((path for path in SEARCH_PATHS if path.exists()), None)

    def layers(self, overrides: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Config layers in increasing priority (defaults are implicit)."""
        config_file = self.find_config_file()
        file_layer = read_yaml(config_file) if config_file else {}

        # Only values actually present in the environment.
        env_layer = Settings().model_dump(exclude_unset=True)

        return [file_layer, env_layer, overrides or {}]

    def load(
        self,
        env_file: Optional[PathLike] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> Settings:
        """
        Build Settings from all layers.

        Args:
            env_file: .env file to load (defaults: .env, then .env.local)
            overrides: Highest-priority values, e.g. from CLI flags

        Returns:
            Merged Settings
        """
        _load_env_file(env_file)

        merged: Dict[str, Any] = {}
        for layer in self.layers(overrides):
            merged = _deep_merge(merged, layer)
        return Settings(**merged)


def _load_env_file(env_file: Optional[PathLike]) -> None:
    if env_file:
        load_dotenv(env_file)
        return
    found = next((path for path in ENV_FILES if path.exists()), None)
    if found is not None:
        load_dotenv(found)


def _deep_merge(base: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in updates.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(
    config_path: Optional[PathLike] = None,
    env_file: Optional[PathLike] = None,
    **overrides: Any,
) -> Settings:
    """
    Load settings from every layer.

    Example:
        >>> settings = load_config()
        >>> settings = load_config(config_path="my-config.yaml")
        >>> settings = load_config(browser={"headless": True})
    """
    return ConfigLoader(config_path).load(env_file=env_file, overrides=overrides or None)
