"""
Configuration loader with environment variable support.

Loads configuration from YAML files with hierarchical overrides:
1. config/default.yaml (base configuration)
2. config/{FINDAR_ENV}.yaml (environment-specific)
3. Environment variables (FINDAR_*)
"""

import os
from pathlib import Path
from typing import Any

import yaml


class Config:
    """
    Hierarchical configuration loader.

    Load order (later overrides earlier):
    1. default.yaml
    2. {FINDAR_ENV}.yaml (development, production, etc.)
    3. Environment variables (FINDAR_*)

    Usage:
        config = Config()
        camera_source = config.get('camera.source', 0)
        # or
        camera_source = config['camera']['source']
    """

    ENV_PREFIX = "FINDAR_"

    def __init__(self, config_dir: Path | None = None):
        """
        Initialize configuration loader.

        Args:
            config_dir: Path to configuration directory. Defaults to project config/
        """
        if config_dir is None:
            # Find config directory relative to this file
            config_dir = Path(__file__).parent.parent.parent.parent / "config"
        self.config_dir = Path(config_dir)
        self.env = os.getenv("FINDAR_ENV", "development")
        self._config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Load and merge configuration files."""
        config: dict[str, Any] = {}

        default_path = self.config_dir / "default.yaml"
        if default_path.exists():
            with open(default_path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}

        env_path = self.config_dir / f"{self.env}.yaml"
        if env_path.exists():
            with open(env_path, encoding="utf-8") as f:
                env_config = yaml.safe_load(f) or {}
                config = self._deep_merge(config, env_config)

        return self._apply_env_overrides(config)

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: dict) -> dict:
        """
        Apply FINDAR_* environment variables.

        Example: FINDAR_CAMERA_SOURCE=1 -> config['camera']['source'] = 1

        Name segments are matched against existing keys first, so
        FINDAR_RECOGNITION_ALERT_LABEL sets config['recognition']['alert_label'].
        FINDAR_ENV only selects the environment file and is not copied.
        """
        for key, value in os.environ.items():
            if key.startswith(self.ENV_PREFIX) and key != "FINDAR_ENV":
                parts = key[len(self.ENV_PREFIX) :].lower().split("_")
                path = self._match_keys(config, parts)
                if path is not None:
                    self._set_nested(config, path, self._parse_value(value))
        return config

    def _match_keys(self, config: dict, parts: list[str]) -> list[str] | None:
        """
        Map env name segments onto a key path.

        At each level the longest run of segments naming an existing key
        wins. Segments with no matching key become one nesting level each.
        Returns None when the name runs past an existing scalar value.
        """
        path: list[str] = []
        node: Any = config
        i = 0
        while i < len(parts):
            if not isinstance(node, dict):
                return None
            for j in range(len(parts), i, -1):
                candidate = "_".join(parts[i:j])
                if candidate in node:
                    path.append(candidate)
                    node = node[candidate]
                    i = j
                    break
            else:
                return path + parts[i:]
        return path

    def _set_nested(self, d: dict, keys: list, value: Any) -> None:
        """Set a nested dictionary value."""
        for key in keys[:-1]:
            d = d.setdefault(key, {})
        d[keys[-1]] = value

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "false"):
            return value.lower() == "true"
        try:
            return int(value)
        except ValueError:
            pass
        try:
            return float(value)
        except ValueError:
            pass
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Dot-separated path like 'camera.source' or 'recognition.alert_label'
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split(".")
        value: Any = self._config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
            if value is None:
                return default
        return value

    def path(self, key: str, default: str | None = None) -> Path | None:
        """
        Get a filesystem path setting.

        Relative paths are resolved against the project root (the parent of
        the configuration directory), so bundled assets are found regardless
        of the working directory.
        """
        value = self.get(key, default)
        if value is None:
            return None
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = self.config_dir.parent / path
        return path

    def __getitem__(self, key: str) -> Any:
        """Get top-level configuration section."""
        return self._config.get(key, {})

    @property
    def as_dict(self) -> dict[str, Any]:
        """Return configuration as dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from files."""
        self.env = os.getenv("FINDAR_ENV", "development")
        self._config = self._load_config()
