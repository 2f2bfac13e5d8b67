"""Positional arguments left over after flag parsing."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class Args:
    """An immutable view over positional command-line arguments."""

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[str] = ()) -> None:
        self._values: tuple[str, ...] = tuple(values)

    def get(self, n: int) -> str:
        """Return the nth argument, or an empty string if there is none."""
        if 0 <= n < len(self._values):
            return self._values[n]
        return ""

    def first(self) -> str:
        """Return the first argument, or an empty string."""
        return self.get(0)

    def tail(self) -> list[str]:
        """Return a new list of every argument but the first."""
        if len(self._values) >= 2:
            return list(self._values[1:])
        return []

    def present(self) -> bool:
        """Tell whether any argument is present."""
        return bool(self._values)

    def slice(self) -> list[str]:
        """Return a new list holding all the arguments."""
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Args):
            return self._values == other._values
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._values)

    def __repr__(self) -> str:
        return f"Args({list(self._values)!r})"