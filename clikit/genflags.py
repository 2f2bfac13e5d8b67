"""Specification model for generated flag types."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import yaml

DEFAULT_PACKAGE_NAME = "cli"

_WORD_START = re.compile(r"(^|\s)(\S)")


def _title(text: str) -> str:
    """Upper-case the first letter of each word, leaving the rest untouched."""
    return _WORD_START.sub(lambda m: m.group(1) + m.group(2).upper(), text)


@dataclass
class FlagStructField:
    """An extra field carried by a generated flag type."""

    name: str = ""
    type: str = ""
    pointer: bool = False


@dataclass
class FlagTypeConfig:
    """Per-type options for flag generation."""

    skip_interfaces: list[str] = field(default_factory=list)
    struct_fields: list[FlagStructField] | None = None
    type_name: str = ""
    value_pointer: bool = False
    no_destination_pointer: bool = False


def type_name(go_type: str, config: FlagTypeConfig | None) -> str:
    """Return the flag type name for a value type and optional config."""
    if config is not None and config.type_name.strip():
        return config.type_name.strip()

    base = go_type.split(".")[-1]
    if base.startswith("[]"):
        return _title(base[2:]) + "SliceFlag"
    return _title(base) + "Flag"


@dataclass
class FlagType:
    """A value type together with its generation config."""

    go_type: str
    config: FlagTypeConfig | None = None

    def struct_fields(self) -> list[FlagStructField]:
        if self.config is None or self.config.struct_fields is None:
            return []
        return self.config.struct_fields

    def value_pointer(self) -> bool:
        return self.config is not None and self.config.value_pointer

    def no_destination_pointer(self) -> bool:
        return self.config is not None and self.config.no_destination_pointer

    def type_name(self) -> str:
        return type_name(self.go_type, self.config)

    def generate_fmt_stringer_interface(self) -> bool:
        return self._interface_not_skipped("fmt.Stringer")

    def generate_flag_interface(self) -> bool:
        return self._interface_not_skipped("Flag")

    def generate_required_flag_interface(self) -> bool:
        return self._interface_not_skipped("RequiredFlag")

    def generate_visible_flag_interface(self) -> bool:
        return self._interface_not_skipped("VisibleFlag")

    def _interface_not_skipped(self, name: str) -> bool:
        if self.config is None:
            return True
        low = name.lower()
        return all(skip.lower() != low for skip in self.config.skip_interfaces)


def _struct_field_from(raw: Any) -> FlagStructField:
    if not isinstance(raw, dict):
        raise ValueError(f"struct field must be a mapping, got {type(raw).__name__}")
    return FlagStructField(
        name=str(raw.get("name") or ""),
        type=str(raw.get("type") or ""),
        pointer=bool(raw.get("pointer", False)),
    )


def _config_from(raw: Any) -> FlagTypeConfig | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"flag type config must be a mapping, got {type(raw).__name__}")
    fields_raw = raw.get("struct_fields")
    return FlagTypeConfig(
        skip_interfaces=[str(s) for s in raw.get("skip_interfaces") or []],
        struct_fields=None
        if fields_raw is None
        else [_struct_field_from(f) for f in fields_raw],
        type_name=str(raw.get("type_name") or ""),
        value_pointer=bool(raw.get("value_pointer", False)),
        no_destination_pointer=bool(raw.get("no_destination_pointer", False)),
    )


@dataclass
class Spec:
    """The full flag generation specification."""

    flag_types: dict[str, FlagTypeConfig | None] = field(default_factory=dict)
    package_name: str = ""
    test_package_name: str = ""
    urfave_cli_namespace: str = ""
    urfave_cli_test_namespace: str = ""

    def sorted_flag_types(self) -> list[FlagType]:
        """Return the flag types sorted by their (slice-renamed) names."""
        names = sorted(
            name[2:] + "Slice" if name.startswith("[]") else name
            for name in self.flag_types
        )
        return [FlagType(go_type=name, config=self.flag_types.get(name)) for name in names]

    @classmethod
    def from_yaml(cls, text: str | bytes) -> Spec:
        """Parse a specification from YAML text."""
        data = yaml.safe_load(text)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("flag spec must be a mapping")
        raw_types = data.get("flag_types") or {}
        if not isinstance(raw_types, dict):
            raise ValueError("flag_types must be a mapping")
        return cls(
            flag_types={str(k): _config_from(v) for k, v in raw_types.items()},
            package_name=str(data.get("package_name") or ""),
            test_package_name=str(data.get("test_package_name") or ""),
            urfave_cli_namespace=str(data.get("urfave_cli_namespace") or ""),
            urfave_cli_test_namespace=str(data.get("urfave_cli_test_namespace") or ""),
        )