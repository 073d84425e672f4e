"""Data models for suite files."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from casebook.core.discovery import DEFAULT_SEPARATOR
from casebook.utils.importing import import_string, load_from_source


@dataclass(frozen=True)
class TargetConfig:
    """One object, class or module to discover cases on."""

    target: Optional[str] = None
    source: Optional[Path] = None
    labels: Mapping[str, str] = field(default_factory=dict)
    separator: str = DEFAULT_SEPARATOR
    obj: Any = field(default=None, compare=False, repr=False)

    def resolve(self) -> Any:
        if self.obj is not None:
            return self.obj
        if self.source is not None:
            return load_from_source(self.source, self.target)
        assert self.target  # guaranteed by the loader
        return import_string(self.target)

    def describe(self) -> str:
        if self.obj is not None:
            return repr(self.obj)
        if self.source is not None:
            return f"{self.source}:{self.target}" if self.target else str(self.source)
        return str(self.target)


@dataclass(frozen=True)
class ReportConfig:
    format: str = "terminal"
    path: Optional[Path] = None
    hide_passed: bool = False
    sort_by_group: bool = False
    color: bool = True


@dataclass(frozen=True)
class SuiteConfig:
    app_name: str
    targets: Sequence[TargetConfig]
    report: ReportConfig
    capture_logs: bool
    suite_dir: Path


@dataclass(frozen=True)
class SuiteOptions:
    """Command-line overrides applied on top of a suite file."""

    report_format: Optional[str] = None
    report_path: Optional[str] = None
    hide_passed: Optional[bool] = None
    sort_by_group: Optional[bool] = None
    color: Optional[bool] = None
