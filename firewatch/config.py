"""Application configuration loaded from YAML files found near the working directory."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

log = logging.getLogger(__name__)

APP_CONFIG_RELATIVE_PATH = "TFConfigs/TFConfigs.yml"

_TRUE_WORDS = frozenset({"true", "yes", "on", "1"})
_FALSE_WORDS = frozenset({"false", "no", "off", "0"})


class ConfigError(RuntimeError):
    """A configuration file is missing or malformed, or a value is absent or of the wrong type."""


def _merge(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _merge(current, value)
        elif isinstance(value, Mapping):
            target[key] = {}
            _merge(target[key], value)
        else:
            target[key] = value


class AppConfig:
    """Settings merged from one or more YAML files, looked up by section and key."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self.files: list[Path] = []

    def add_yaml_file(self, path: str | Path) -> None:
        """Load a YAML mapping and merge it over the settings already held."""
        path = Path(path)
        try:
            with path.open(encoding="utf-8") as handle:
                content = yaml.safe_load(handle)
        except OSError as exc:
            raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc
        if content is None:
            content = {}
        if not isinstance(content, Mapping):
            raise ConfigError(f"Config file {path} does not hold a mapping.")
        _merge(self._data, content)
        self.files.append(path)

    def _lookup(self, *keys: str) -> Any:
        node: Any = self._data
        for key in keys:
            if not isinstance(node, Mapping) or key not in node:
                raise ConfigError(f"Config value {'/'.join(keys)} not found.")
            node = node[key]
        return node

    def get_bool(self, section: str, key: str) -> bool:
        value = self._lookup(section, key)
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            word = value.strip().lower()
            if word in _TRUE_WORDS:
                return True
            if word in _FALSE_WORDS:
                return False
        raise ConfigError(f"Config value {section}/{key} is not a boolean: {value!r}")

    def get_int(self, section: str, key: str) -> int:
        value = self._lookup(section, key)
        if isinstance(value, bool):
            raise ConfigError(f"Config value {section}/{key} is not an integer: {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigError(
                f"Config value {section}/{key} is not an integer: {value!r}"
            ) from None

    def get_float(self, section: str, key: str) -> float:
        value = self._lookup(section, key)
        if isinstance(value, bool):
            raise ConfigError(f"Config value {section}/{key} is not a number: {value!r}")
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ConfigError(
                f"Config value {section}/{key} is not a number: {value!r}"
            ) from None

    def get_str(self, *args: str) -> str:
        """Return a string value given either a top-level key or a section and key."""
        if len(args) not in (1, 2):
            raise TypeError("get_str takes a key or a section and a key")
        value = self._lookup(*args)
        if value is None or isinstance(value, Mapping):
            raise ConfigError(f"Config value {'/'.join(args)} is not a string: {value!r}")
        return str(value)


def search_file_in_parent_dirs(
    relative_path: str | Path, start: str | Path | None = None
) -> Path | None:
    """Find relative_path under start or any of its parents; None when absent."""
    base = Path(start) if start is not None else Path.cwd()
    base = base.resolve()
    for directory in (base, *base.parents):
        candidate = directory / relative_path
        if candidate.is_file():
            return candidate
    return None


def load_app_config(start: str | Path | None = None) -> AppConfig:
    """Locate the application config file above start and load it."""
    path = search_file_in_parent_dirs(APP_CONFIG_RELATIVE_PATH, start)
    if path is None:
        raise ConfigError(f"Config file {APP_CONFIG_RELATIVE_PATH} not found.")
    config = AppConfig()
    config.add_yaml_file(path)
    log.info("[AppConfig] After initConfigs.")
    return config