"""Named suite registry."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from casebook.core.discovery import DEFAULT_SEPARATOR
from casebook.utils.importing import import_string


@dataclass(frozen=True)
class SuiteEntry:
    """A target registered under a short name, e.g. by a plugin."""

    name: str
    target: Any
    labels: Mapping[str, str] = field(default_factory=dict)
    separator: str = DEFAULT_SEPARATOR
    description: str = ""

    def resolve(self) -> Any:
        """Return the target object, importing it when given as a dotted path."""

        if isinstance(self.target, str):
            return import_string(self.target)
        return self.target


class SuiteRegistry:
    """Stores suite entries and exposes lookup utilities."""

    def __init__(self) -> None:
        self._entries: dict[str, SuiteEntry] = {}

    def register(self, entry: SuiteEntry) -> SuiteEntry:
        if entry.name in self._entries:
            raise ValueError(f"Suite '{entry.name}' already registered")
        self._entries[entry.name] = entry
        return entry

    def get(self, name: str) -> SuiteEntry:
        try:
            return self._entries[name]
        except KeyError as exc:
            raise KeyError(f"Suite '{name}' is not registered") from exc

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def names(self) -> Iterable[str]:
        return tuple(self._entries.keys())


registry = SuiteRegistry()


def register_suite(
    name: str,
    target: Any,
    labels: Optional[Mapping[str, str]] = None,
    *,
    separator: str = DEFAULT_SEPARATOR,
    description: str = "",
) -> SuiteEntry:
    return registry.register(
        SuiteEntry(
            name=name,
            target=target,
            labels=dict(labels or {}),
            separator=separator,
            description=description,
        )
    )


def clear_registry() -> None:
    registry._entries.clear()
