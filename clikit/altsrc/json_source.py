"""An input source backed by JSON data."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from datetime import timedelta
from typing import IO, Any, Protocol

from .fetch import load_data_from
from .source import InputSource, default_input_source


class _FlagContext(Protocol):
    def is_set(self, name: str) -> bool: ...

    def string(self, name: str) -> str: ...


def _unexpected(value: Any, name: str) -> TypeError:
    return TypeError(f'unexpected type {type(value).__name__} for "{name}"')


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def json_get_value(key: str, mapping: Mapping[str, Any]) -> Any:
    """Look up a dotted key in nested JSON objects.

    Raises KeyError when a segment is missing or an intermediate value is not
    an object.
    """
    working: Any = mapping
    segments = key.split(".")
    result: Any = None
    for index, segment in enumerate(segments):
        if not isinstance(working, Mapping) or segment not in working:
            raise KeyError(f'missing key "{key}"')
        result = working[segment]
        if not isinstance(result, Mapping) and index < len(segments) - 1:
            raise KeyError(
                f'unexpected intermediate value at "{segment}" segment of '
                f'"{key}": {type(result).__name__}'
            )
        working = result
    return result


class JSONSource(InputSource):
    """Flag values read from a decoded JSON object."""

    def __init__(self, data: Mapping[str, Any], file: str = "") -> None:
        self.data = data
        self.file = file

    def _value(self, name: str) -> Any:
        return json_get_value(name, self.data)

    def source(self) -> str:
        return self.file

    def get_int(self, name: str) -> int:
        value = self._value(name)
        if _is_int(value):
            return value
        if isinstance(value, float):
            return int(value)
        raise _unexpected(value, name)

    def get_duration(self, name: str) -> timedelta:
        value = self._value(name)
        if not isinstance(value, timedelta):
            raise _unexpected(value, name)
        return value

    def get_float64(self, name: str) -> float:
        value = self._value(name)
        if isinstance(value, float) or _is_int(value):
            return float(value)
        raise _unexpected(value, name)

    def get_string(self, name: str) -> str:
        value = self._value(name)
        if not isinstance(value, str):
            raise _unexpected(value, name)
        return value

    def get_string_slice(self, name: str) -> list[str]:
        value = self._value(name)
        if not isinstance(value, list):
            raise _unexpected(value, name)
        for item in value:
            if not isinstance(item, str):
                raise TypeError(
                    f'unexpected item type {type(item).__name__} in list for "{name}"'
                )
        return list(value)

    def get_int_slice(self, name: str) -> list[int]:
        value = self._value(name)
        if not isinstance(value, list):
            raise _unexpected(value, name)
        for item in value:
            if not _is_int(item):
                raise TypeError(
                    f'unexpected item type {type(item).__name__} in list for "{name}"'
                )
        return list(value)

    def get_generic(self, name: str) -> Any:
        value = self._value(name)
        if not callable(getattr(value, "set", None)):
            raise _unexpected(value, name)
        return value

    def get_bool(self, name: str) -> bool:
        value = self._value(name)
        if not isinstance(value, bool):
            raise _unexpected(value, name)
        return value

    def is_set(self, name: str) -> bool:
        try:
            self._value(name)
        except KeyError:
            return False
        return True


def _decode(data: str | bytes, file: str = "") -> JSONSource:
    decoded = json.loads(data)
    if decoded is None:
        decoded = {}
    if not isinstance(decoded, dict):
        raise ValueError(
            f"JSON input must be an object, got {type(decoded).__name__}"
        )
    return JSONSource(decoded, file)


def json_source(data: str | bytes) -> JSONSource:
    """Build a source from raw JSON text."""
    return _decode(data)


def json_source_from_reader(reader: IO[Any]) -> JSONSource:
    """Build a source from everything a file-like object yields."""
    return _decode(reader.read())


def json_source_from_file(path: str) -> JSONSource:
    """Build a source from a local JSON file or an HTTP(S) URL."""
    return _decode(load_data_from(path), path)


def json_source_from_flag_func(flag: str) -> Callable[[_FlagContext], InputSource]:
    """Return a factory that loads JSON from the file named by a flag."""

    def create(ctx: _FlagContext) -> InputSource:
        if ctx.is_set(flag):
            return json_source_from_file(ctx.string(flag))
        return default_input_source()

    return create