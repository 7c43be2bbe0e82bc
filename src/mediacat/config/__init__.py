"""Configuration management for Mediacat."""

from __future__ import annotations

import os
import textwrap
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigError
from .models import MediacatConfig
from .resolver import (
    ENV_PREFIX,
    assign_nested,
    flatten_for_env,
    parse_env,
    resolve_with_precedence,
)

DEFAULT_CONFIG_PATH = Path("~/.mediacat/config.yaml")
_CONFIG_HEADER = textwrap.dedent(
    f"""\
    # Mediacat configuration file
    # Manage via `mediacat config edit` or `mediacat config set`.
    # Variables named {ENV_PREFIX}SECTION__KEY override values in this file.
    """
)


class ConfigManager:
    """Read and update the YAML overrides that sit between defaults and the environment."""

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._env = env if env is not None else os.environ

    @property
    def config_path(self) -> Path:
        """Return the resolved configuration path."""
        return self._config_path

    def load(
        self,
        *,
        cli_overrides: Mapping[str, Any] | None = None,
        include_env: bool = True,
    ) -> MediacatConfig:
        """Return the effective configuration, creating the file on first use.

        Args:
            cli_overrides: Dotted or nested values from the command line.
            include_env: Whether ``MEDIACAT__`` variables are applied.

        Raises:
            ConfigError: If the file is malformed or a merged value is invalid.
        """
        self.ensure_exists()
        return resolve_with_precedence(
            defaults=MediacatConfig(),
            file_overrides=self.load_file_overrides(),
            env_overrides=parse_env(self._env) if include_env else None,
            cli_overrides=cli_overrides,
        )

    def load_file_overrides(self) -> dict[str, Any]:
        """Return the raw mapping stored on disk, or an empty one when absent."""
        if not self._config_path.exists():
            return {}

        try:
            raw = yaml.safe_load(self._config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse configuration file: {exc}") from exc

        if not isinstance(raw, dict):
            raise ConfigError("Configuration file must contain a mapping at the top level.")
        return raw

    def set_value(self, key: str, value: Any) -> MediacatConfig:
        """Store ``value`` at the dotted ``key`` once the result validates.

        Raises:
            ConfigError: If ``key`` is empty or the updated file would be invalid.
        """
        segments = [segment.strip() for segment in key.split(".") if segment.strip()]
        if not segments:
            raise ConfigError("KEY must name a dotted path such as 'server.port'.")

        overrides = self.load_file_overrides()
        assign_nested(overrides, segments, value)
        return self.replace_overrides(overrides)

    def replace_overrides(self, overrides: Mapping[str, Any]) -> MediacatConfig:
        """Validate ``overrides`` against the defaults and write them to disk."""
        config = resolve_with_precedence(defaults=MediacatConfig(), file_overrides=overrides)
        self._write_file(overrides)
        return config

    def ensure_exists(self) -> Path:
        """Write the default settings if no configuration file exists yet."""
        if not self._config_path.exists():
            self._write_file(MediacatConfig().model_dump(mode="python"))
        return self._config_path

    def read_text(self) -> str:
        """Return the current configuration file contents."""
        if not self._config_path.exists():
            return ""
        return self._config_path.read_text(encoding="utf-8")

    def _write_file(self, overrides: Mapping[str, Any]) -> None:
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        body = yaml.safe_dump(dict(overrides), sort_keys=False)
        self._config_path.write_text(
            f"{_CONFIG_HEADER}# Last updated: {stamp}\n{body}", encoding="utf-8"
        )


__all__ = [
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "MediacatConfig",
    "resolve_with_precedence",
    "flatten_for_env",
    "assign_nested",
    "ConfigError",
]
