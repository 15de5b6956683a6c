# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Configuration sources (TOML, JSON, pyproject) and layered loading."""

from __future__ import annotations

import json
import re
import tomllib
from collections.abc import Mapping, MutableMapping, Sequence
from pathlib import Path
from typing import Any, Final, Protocol

from pydantic import ValidationError

from ..errors import ConfigError
from .models import Config, OutputFormat

DEFAULT_CONFIG_NAMES: Final[tuple[str, ...]] = (".metalint.toml", "metalint.toml")
PYPROJECT_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "metalint"
INCLUDE_KEY: Final[str] = "include_config"
_JSON_SUFFIX: Final[str] = ".json"
_CAMEL_BOUNDARY: Final[re.Pattern[str]] = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
# Legacy key names from JSON configuration files.
_KEY_ALIASES: Final[dict[str, str]] = {
    "cyclo": "cyclo_over",
    "errors": "errors_only",
    "test": "tests",
    "warn_unmatch_nolint": "warn_unmatched_directive",
}
_OUTPUT_SWITCHES: Final[dict[str, OutputFormat]] = {
    "json": OutputFormat.JSON,
    "checkstyle": OutputFormat.CHECKSTYLE,
}
# Dict-valued sections merge key by key; every other value is replaced.
_MERGED_SECTIONS: Final[frozenset[str]] = frozenset({"severity", "message_override", "linters", "define"})


class ConfigSource(Protocol):
    """Provide one layer of raw configuration data."""

    name: str

    def load(self) -> Mapping[str, Any]:
        """Return the raw configuration mapping for this layer."""
        raise NotImplementedError


def _normalise_key(key: str) -> str:
    snake = _CAMEL_BOUNDARY.sub("_", key).replace("-", "_").lower()
    return _KEY_ALIASES.get(snake, snake)


def _normalise_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    """Accept ``enable-all`` and ``EnableAll`` style keys as ``enable_all``.

    ``json`` and ``checkstyle`` switches become an ``output`` selection.
    """

    normalised: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = _normalise_key(str(raw_key))
        if key in _OUTPUT_SWITCHES:
            if value:
                normalised["output"] = _OUTPUT_SWITCHES[key]
            continue
        normalised[key] = value
    return normalised


def _merge_layer(base: Mapping[str, Any], layer: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` updated with ``layer``.

    Args:
        base: Accumulated configuration mapping.
        layer: Higher-precedence mapping applied on top.

    Returns:
        dict[str, Any]: Merged mapping; dictionary sections merge key by key.
    """

    merged = dict(base)
    for key, value in layer.items():
        current = merged.get(key)
        if key in _MERGED_SECTIONS and isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = {**current, **value}
        else:
            merged[key] = value
    return merged


class TomlConfigSource:
    """Load configuration data from a TOML document with include support."""

    def __init__(self, path: Path, *, name: str | None = None) -> None:
        self._root_path = path
        self.name = name or str(path)

    def load(self) -> Mapping[str, Any]:
        return self._load(self._root_path, ())

    def _load(self, path: Path, stack: tuple[Path, ...]) -> Mapping[str, Any]:
        resolved = path.resolve()
        if resolved in stack:
            include_chain = " -> ".join(str(entry) for entry in (*stack, resolved))
            raise ConfigError(f"Circular include detected: {include_chain}")
        try:
            with resolved.open("rb") as handle:
                data = tomllib.load(handle)
        except OSError as exc:
            raise ConfigError(f"cannot read configuration {path}: {exc}") from exc
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {path}: {exc}") from exc
        document: dict[str, Any] = dict(data)
        includes = document.pop(INCLUDE_KEY, None)
        merged: dict[str, Any] = {}
        for include_path in self._coerce_includes(includes, resolved.parent):
            merged = _merge_layer(merged, self._load(include_path, (*stack, resolved)))
        return _merge_layer(merged, document)

    @staticmethod
    def _coerce_includes(raw: object, base_dir: Path) -> list[Path]:
        if raw is None:
            return []
        if isinstance(raw, str):
            raw = [raw]
        if not isinstance(raw, list):
            raise ConfigError(f"Unsupported include declaration: {raw!r}")
        paths = [Path(str(item)) for item in raw]
        return [path if path.is_absolute() else base_dir / path for path in paths]


class JsonConfigSource:
    """Load configuration from a JSON document."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self.name = str(path)

    def load(self) -> Mapping[str, Any]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigError(f"cannot read configuration {self._path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(f"invalid JSON in {self._path}: {exc}") from exc
        if not isinstance(data, MutableMapping):
            raise ConfigError(f"Configuration at {self._path} must be an object")
        return data


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.metalint]`` within ``pyproject.toml``."""

    def load(self) -> Mapping[str, Any]:
        data = super().load()
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, Mapping):
            return {}
        return dict(section)


class MappingConfigSource:
    """Wrap an in-memory mapping, typically command-line overrides."""

    def __init__(self, data: Mapping[str, Any], *, name: str = "overrides") -> None:
        self._data = data
        self.name = name

    def load(self) -> Mapping[str, Any]:
        return self._data


def source_for_path(path: Path) -> ConfigSource:
    """Return the configuration source able to read ``path``.

    Args:
        path: Configuration file selected by the user.

    Returns:
        ConfigSource: JSON source for ``.json`` files, pyproject source for
        ``pyproject.toml``, TOML source otherwise.
    """

    if path.suffix.lower() == _JSON_SUFFIX:
        return JsonConfigSource(path)
    if path.name == PYPROJECT_NAME:
        return PyProjectConfigSource(path)
    return TomlConfigSource(path)


def discover_config(root: Path) -> ConfigSource | None:
    """Return the first project configuration found directly under ``root``."""

    for name in DEFAULT_CONFIG_NAMES:
        candidate = root / name
        if candidate.is_file():
            return TomlConfigSource(candidate)
    pyproject = root / PYPROJECT_NAME
    if pyproject.is_file():
        return PyProjectConfigSource(pyproject)
    return None


class ConfigLoader:
    """Apply layered configuration sources with predictable precedence.

    Later sources win. Dictionary sections (``severity``,
    ``message_override``, ``linters``, ``define``) merge key by key.
    """

    def __init__(self, sources: Sequence[ConfigSource]) -> None:
        self._sources = tuple(sources)

    def load(self) -> Config:
        """Merge every source and validate the result.

        Returns:
            Config: Validated configuration.

        Raises:
            ConfigError: If a source cannot be read or the merged data is invalid.
        """

        merged: dict[str, Any] = {}
        for source in self._sources:
            merged = _merge_layer(merged, _normalise_keys(source.load()))
        try:
            return Config.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(f"invalid configuration: {exc}") from exc


def merge_overrides(config: Config, overrides: Mapping[str, Any]) -> Config:
    """Return ``config`` with ``overrides`` layered on top.

    Args:
        config: Previously loaded configuration.
        overrides: Values that win over ``config``; ``None`` values are ignored
            so unset command-line flags keep the configured value.

    Returns:
        Config: Newly validated configuration.

    Raises:
        ConfigError: If the merged configuration is invalid.
    """

    layer = {key: value for key, value in _normalise_keys(overrides).items() if value is not None}
    merged = _merge_layer(config.model_dump(exclude_unset=True), layer)
    try:
        return Config.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc


def load_config(
    path: Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
    root: Path | None = None,
) -> Config:
    """Load the effective configuration.

    Args:
        path: Explicit configuration file; when omitted a project file under
            ``root`` is discovered.
        overrides: Highest-precedence values, usually from command-line flags.
        root: Directory searched for a project configuration file.

    Returns:
        Config: Validated configuration.
    """

    sources: list[ConfigSource] = []
    if path is not None:
        sources.append(source_for_path(path))
    else:
        discovered = discover_config(root or Path.cwd())
        if discovered is not None:
            sources.append(discovered)
    if overrides:
        sources.append(MappingConfigSource(overrides))
    return ConfigLoader(sources).load()


__all__ = [
    "ConfigLoader",
    "ConfigSource",
    "JsonConfigSource",
    "MappingConfigSource",
    "PyProjectConfigSource",
    "TomlConfigSource",
    "discover_config",
    "load_config",
    "merge_overrides",
    "source_for_path",
]
