"""Input sources that supply flag values from structured data."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from datetime import timedelta
from fractions import Fraction
from typing import Any, Mapping

_MAX_DURATION_NS = 2**63 - 1

_UNIT_NS: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 60 * 60 * 1_000_000_000,
}

_COMPONENT = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


class IncorrectTypeError(TypeError):
    """Raised when a stored value does not have the type a flag expects."""

    def __init__(self, name: str, expected: str, value: Any) -> None:
        actual = "" if value is None else type(value).__name__
        super().__init__(
            f"Mismatched type for flag '{name}'. "
            f"Expected '{expected}' but actual is '{actual}'"
        )
        self.name = name
        self.expected = expected
        self.value = value


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``"1h30m"``, ``"-1.5s"`` or ``"300ms"``."""
    rest = text
    negative = False
    if rest and rest[0] in "+-":
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not rest:
        raise ValueError(f'time: invalid duration "{text}"')

    total = Fraction(0)
    pos = 0
    while pos < len(rest):
        match = _COMPONENT.match(rest, pos)
        if match is None:
            raise ValueError(f'time: invalid duration "{text}"')
        total += Fraction(match.group(1)) * _UNIT_NS[match.group(2)]
        pos = match.end()

    nanos = int(total)
    if nanos > _MAX_DURATION_NS:
        raise ValueError(f'time: invalid duration "{text}"')
    if negative:
        nanos = -nanos
    return timedelta(microseconds=int(nanos / 1000))


def nested_value(name: str, tree: Mapping[Any, Any]) -> Any:
    """Follow a dotted name through nested mappings.

    Raises KeyError if the name has no dots or the path cannot be followed.
    """
    sections = name.split(".")
    if len(sections) < 2:
        raise KeyError(name)
    node: Mapping[Any, Any] = tree
    for section in sections[:-1]:
        if section not in node:
            raise KeyError(name)
        child = node[section]
        if not isinstance(child, Mapping):
            raise KeyError(name)
        node = child
    last = sections[-1]
    if last not in node:
        raise KeyError(name)
    return node[last]


class InputSource(ABC):
    """A source of flag values other than the command line."""

    @abstractmethod
    def source(self) -> str:
        """Return an identifier for the source, such as a file path."""

    @abstractmethod
    def get_int(self, name: str) -> int: ...

    @abstractmethod
    def get_duration(self, name: str) -> timedelta: ...

    @abstractmethod
    def get_float64(self, name: str) -> float: ...

    @abstractmethod
    def get_string(self, name: str) -> str: ...

    @abstractmethod
    def get_string_slice(self, name: str) -> list[str] | None: ...

    @abstractmethod
    def get_int_slice(self, name: str) -> list[int] | None: ...

    @abstractmethod
    def get_generic(self, name: str) -> Any: ...

    @abstractmethod
    def get_bool(self, name: str) -> bool: ...

    @abstractmethod
    def is_set(self, name: str) -> bool: ...


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_generic(value: Any) -> bool:
    return callable(getattr(value, "set", None))


class MapInputSource(InputSource):
    """An input source backed by a (possibly nested) mapping."""

    def __init__(self, file: str, value_map: dict[Any, Any]) -> None:
        self.file = file
        self.value_map = value_map

    def _find(self, name: str) -> tuple[bool, Any]:
        if name in self.value_map:
            return True, self.value_map[name]
        try:
            return True, nested_value(name, self.value_map)
        except KeyError:
            return False, None

    def source(self) -> str:
        return self.file

    def get_int(self, name: str) -> int:
        found, value = self._find(name)
        if not found:
            return 0
        if not _is_int(value):
            raise IncorrectTypeError(name, "int", value)
        return value

    def get_duration(self, name: str) -> timedelta:
        found, value = self._find(name)
        if not found:
            return timedelta(0)
        if isinstance(value, timedelta):
            return value
        if isinstance(value, str):
            try:
                return parse_duration(value)
            except ValueError:
                pass
        raise IncorrectTypeError(name, "duration", value)

    def get_float64(self, name: str) -> float:
        found, value = self._find(name)
        if not found:
            return 0.0
        if not isinstance(value, float):
            raise IncorrectTypeError(name, "float64", value)
        return value

    def get_string(self, name: str) -> str:
        found, value = self._find(name)
        if not found:
            return ""
        if not isinstance(value, str):
            raise IncorrectTypeError(name, "string", value)
        return value

    def _get_list(self, name: str) -> list[Any] | None:
        found, value = self._find(name)
        if not found:
            return None
        if not isinstance(value, (list, tuple)):
            raise IncorrectTypeError(name, "[]interface{}", value)
        return list(value)

    def get_string_slice(self, name: str) -> list[str] | None:
        items = self._get_list(name)
        if items is None:
            return None
        for i, item in enumerate(items):
            if not isinstance(item, str):
                raise IncorrectTypeError(f"{name}[{i}]", "string", item)
        return items

    def get_int_slice(self, name: str) -> list[int] | None:
        items = self._get_list(name)
        if items is None:
            return None
        for i, item in enumerate(items):
            if not _is_int(item):
                raise IncorrectTypeError(f"{name}[{i}]", "int", item)
        return items

    def get_generic(self, name: str) -> Any:
        found, value = self._find(name)
        if not found:
            return None
        if not _is_generic(value):
            raise IncorrectTypeError(name, "cli.Generic", value)
        return value

    def get_bool(self, name: str) -> bool:
        found, value = self._find(name)
        if not found:
            return False
        if not isinstance(value, bool):
            raise IncorrectTypeError(name, "bool", value)
        return value

    def is_set(self, name: str) -> bool:
        found, _ = self._find(name)
        return found


def default_input_source() -> MapInputSource:
    """Return an empty input source with no backing file."""
    return MapInputSource("", {})