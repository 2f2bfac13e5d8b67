"""Input sources loaded from TOML and YAML files."""

from __future__ import annotations

import tomllib
from collections.abc import Callable, Mapping
from typing import Any, Protocol

import yaml

from .fetch import LoadError, load_data_from
from .source import InputSource, MapInputSource, default_input_source


class _FlagContext(Protocol):
    def is_set(self, name: str) -> bool: ...

    def string(self, name: str) -> str: ...


def normalize_toml_map(value: Mapping[str, Any]) -> dict[Any, Any]:
    """Copy decoded TOML into plain scalars, lists and nested dicts.

    Raises ValueError for values of any other type, such as dates.
    """
    result: dict[Any, Any] = {}
    for key, item in value.items():
        if isinstance(item, (bool, str, int, float)):
            result[key] = item
        elif isinstance(item, Mapping):
            result[key] = normalize_toml_map(item)
        elif isinstance(item, list):
            result[key] = item
        else:
            raise ValueError(f"Unsupported: type = {type(item).__name__}")
    return result


def toml_source_from_file(path: str) -> MapInputSource:
    """Build a source from a TOML file or URL."""
    try:
        parsed = tomllib.loads(load_data_from(path).decode("utf-8"))
        value_map = normalize_toml_map(parsed)
    except (OSError, ValueError) as exc:
        raise LoadError(
            f"Unable to load TOML file '{path}': inner error: \n'{exc}'"
        ) from exc
    return MapInputSource(path, value_map)


def toml_source_from_flag_func(flag_name: str) -> Callable[[_FlagContext], InputSource]:
    """Return a factory that loads TOML from the file named by a flag."""

    def create(ctx: _FlagContext) -> InputSource:
        if ctx.is_set(flag_name):
            return toml_source_from_file(ctx.string(flag_name))
        return default_input_source()

    return create


def yaml_source_from_file(path: str) -> MapInputSource:
    """Build a source from a YAML file or URL."""
    try:
        parsed = yaml.safe_load(load_data_from(path))
        if parsed is None:
            parsed = {}
        if not isinstance(parsed, dict):
            raise ValueError(
                f"YAML document must be a mapping, got {type(parsed).__name__}"
            )
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise LoadError(
            f"Unable to load Yaml file '{path}': inner error: \n'{exc}'"
        ) from exc
    return MapInputSource(path, parsed)


def yaml_source_from_flag_func(flag_name: str) -> Callable[[_FlagContext], InputSource]:
    """Return a factory that loads YAML from the file named by a flag, if any."""

    def create(ctx: _FlagContext) -> InputSource:
        file_path = ctx.string(flag_name)
        if file_path:
            return yaml_source_from_file(file_path)
        return default_input_source()

    return create