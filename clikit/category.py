"""Grouping of commands and flags into named categories for help output."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable


@dataclass
class CommandCategory:
    """A named category holding commands."""

    name: str
    commands: list[Any] = field(default_factory=list)

    def visible_commands(self) -> list[Any]:
        """Return the commands of this category that are not hidden."""
        return [c for c in self.commands if not getattr(c, "hidden", False)]


@dataclass
class CommandCategories:
    """Commands collected into categories, in the order categories appear."""

    _categories: list[CommandCategory] = field(default_factory=list)

    def add_command(self, category: str, command: Any) -> None:
        """Add a command to a category, creating the category if needed."""
        for existing in self._categories:
            if existing.name == category:
                existing.commands.append(command)
                return
        self._categories.append(CommandCategory(category, [command]))

    def categories(self) -> list[CommandCategory]:
        """Return a new list of the categories."""
        return list(self._categories)

    def __len__(self) -> int:
        return len(self._categories)


def _is_visible_flag(flag: Any) -> bool:
    check = getattr(flag, "is_visible", None)
    return callable(check) and bool(check())


@dataclass
class VisibleFlagCategory:
    """A named category holding flags keyed by their string form."""

    name: str
    _flags: dict[str, Any] = field(default_factory=dict)

    def flags(self) -> list[Any]:
        """Return the visible flags of this category, sorted by string form."""
        return [
            self._flags[key]
            for key in sorted(self._flags)
            if _is_visible_flag(self._flags[key])
        ]


@dataclass
class FlagCategories:
    """Flags collected into named categories."""

    _categories: dict[str, VisibleFlagCategory] = field(default_factory=dict)

    def add_flag(self, category: str, flag: Any) -> None:
        """Add a flag to a category, creating the category if needed."""
        cat = self._categories.setdefault(category, VisibleFlagCategory(category))
        cat._flags[str(flag)] = flag

    def visible_categories(self) -> list[VisibleFlagCategory]:
        """Return all categories sorted by name."""
        return [self._categories[name] for name in sorted(self._categories)]


def flag_categories_from_flags(flags: Iterable[Any]) -> FlagCategories:
    """Build flag categories from every flag that reports a category."""
    result = FlagCategories()
    for flag in flags:
        get_category = getattr(flag, "get_category", None)
        if callable(get_category):
            result.add_flag(get_category(), flag)
    return result