"""Applying values from an input source to parsed flags."""

from __future__ import annotations

import math
import os
from collections.abc import Callable, Iterable, MutableMapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Protocol

from .source import InputSource

_KINDS = frozenset(
    {
        "generic",
        "string_slice",
        "int_slice",
        "bool",
        "string",
        "path",
        "int",
        "duration",
        "float64",
    }
)
_SLICE_KINDS = frozenset({"string_slice", "int_slice"})


class _FlagContext(Protocol):
    def is_set(self, name: str) -> bool: ...


def is_env_var_set(env_vars: Iterable[str]) -> bool:
    """Tell whether any of the named environment variables is defined."""
    return any(name in os.environ for name in env_vars)


def float_to_string(value: float) -> str:
    """Format a float with the shortest digits that read back exactly."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    sign, digit_tuple, exponent = Decimal(repr(float(value))).as_tuple()
    digits = "".join(map(str, digit_tuple))
    stripped = digits.rstrip("0")
    exponent += len(digits) - len(stripped)
    digits = stripped
    prefix = "-" if sign else ""
    magnitude = len(digits) - 1 + exponent

    if magnitude < -4 or magnitude >= 21:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        exp_sign = "+" if magnitude >= 0 else "-"
        return f"{prefix}{mantissa}e{exp_sign}{abs(magnitude):02d}"
    if exponent >= 0:
        return prefix + digits + "0" * exponent
    point = len(digits) + exponent
    if point > 0:
        return f"{prefix}{digits[:point]}.{digits[point:]}"
    return f"{prefix}0.{'0' * -point}{digits}"


@dataclass
class InputSourceExtension:
    """A flag whose value may be filled in from an input source.

    ``flag_set`` is the mapping of flag names to parsed values that the flag
    was registered in; nothing is applied while it is None.
    """

    name: str
    kind: str
    aliases: list[str] = field(default_factory=list)
    env_vars: list[str] = field(default_factory=list)
    destination: list[Any] | None = None
    flag_set: MutableMapping[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.kind not in _KINDS:
            raise ValueError(f"unknown flag kind {self.kind!r}")

    def _names(self) -> list[str]:
        return [self.name, *self.aliases]

    def _read(self, source: InputSource, name: str) -> Any:
        match self.kind:
            case "generic":
                return source.get_generic(name)
            case "string_slice":
                return source.get_string_slice(name)
            case "int_slice":
                return source.get_int_slice(name)
            case "bool":
                return source.get_bool(name)
            case "string":
                return source.get_string(name)
            case "int":
                return source.get_int(name)
            case "duration":
                return source.get_duration(name)
            case "float64":
                return source.get_float64(name)
            case "path":
                value = source.get_string(name)
                if value == "":
                    return None
                base = source.source()
                if not os.path.isabs(value) and base:
                    value = os.path.join(os.path.dirname(os.path.abspath(base)), value)
                return value
        raise ValueError(f"unknown flag kind {self.kind!r}")

    def _store(self, value: Any) -> None:
        assert self.flag_set is not None
        is_slice = self.kind in _SLICE_KINDS
        for name in self._names():
            if name in self.flag_set:
                self.flag_set[name] = list(value) if is_slice else value
        if is_slice and self.destination is not None:
            self.destination[:] = value

    def apply_input_source_value(self, ctx: _FlagContext, source: InputSource) -> None:
        """Fill the flag from the source unless it was set otherwise."""
        if (
            self.flag_set is None
            or ctx.is_set(self.name)
            or is_env_var_set(self.env_vars)
        ):
            return
        for name in self._names():
            if not source.is_set(name):
                continue
            value = self._read(source, name)
            if value is None:
                continue
            self._store(value)


def apply_input_source_values(
    ctx: _FlagContext, source: InputSource, flags: Iterable[Any]
) -> None:
    """Apply the source to every flag that can take input-source values."""
    for flag in flags:
        apply = getattr(flag, "apply_input_source_value", None)
        if callable(apply):
            apply(ctx, source)


def init_input_source(
    flags: Iterable[Any], create_input_source: Callable[[], InputSource]
) -> Callable[[_FlagContext], None]:
    """Return a before-hook that creates a source and applies it to flags."""
    flag_list = list(flags)

    def before(ctx: _FlagContext) -> None:
        try:
            source = create_input_source()
        except Exception as exc:
            raise RuntimeError(
                f"Unable to create input source: inner error: \n'{exc}'"
            ) from exc
        apply_input_source_values(ctx, source, flag_list)

    return before


def init_input_source_with_context(
    flags: Iterable[Any],
    create_input_source: Callable[[_FlagContext], InputSource],
) -> Callable[[_FlagContext], None]:
    """Like init_input_source, but the factory receives the context."""
    flag_list = list(flags)

    def before(ctx: _FlagContext) -> None:
        try:
            source = create_input_source(ctx)
        except Exception as exc:
            raise RuntimeError(
                "Unable to create input source with context: inner error: "
                f"\n'{exc}'"
            ) from exc
        apply_input_source_values(ctx, source, flag_list)

    return before