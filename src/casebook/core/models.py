"""Core dataclasses shared across casebook subsystems."""
from __future__ import annotations

import functools
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Callable, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from .harness import TestHarness


CaseBody = Callable[["TestHarness"], None]


@dataclass(frozen=True)
class CaseDefinition:
    """A discovered test case, ready to be executed by the harness."""

    identifier: str
    group: str
    name: str
    invoke: CaseBody = field(compare=False, repr=False)

    def label(self) -> str:
        return f"{self.group}:{self.name}"


@dataclass(frozen=True)
class CaseState:
    """Pass/fail state of the case in progress.

    Every signal replaces the state with a new value. ``pass_`` discards any
    failure recorded before it, so the last signal within a case wins.
    """

    passed: bool = True
    message: str = ""
    trace: str = ""

    @classmethod
    def initial(cls) -> "CaseState":
        return cls()

    def pass_(self) -> "CaseState":
        return CaseState()

    def fail(self, message: str, stack: str) -> "CaseState":
        return CaseState(
            passed=False,
            message=f"{self.message}{message}\n",
            trace=f"{self.trace}{message}\n{stack}\n",
        )


@dataclass(frozen=True)
class CaseResult:
    """Outcome of executing a single test case."""

    sequence: int
    identifier: str
    group: str
    name: str
    passed: bool = True
    message: str = ""
    trace: str = ""
    duration_s: float = 0.0

    @classmethod
    def from_state(
        cls, sequence: int, case: CaseDefinition, state: CaseState, duration_s: float
    ) -> "CaseResult":
        return cls(
            sequence=sequence,
            identifier=case.identifier,
            group=case.group,
            name=case.name,
            passed=state.passed,
            message=state.message,
            trace=state.trace,
            duration_s=duration_s,
        )

    @property
    def status(self) -> str:
        return "passed" if self.passed else "failed"

    def label(self) -> str:
        return f"{self.group}:{self.name}"


def compare_groups(a: CaseResult, b: CaseResult) -> int:
    """Order results by group, greater groups first; equal groups compare equal."""

    if a.group == b.group:
        return 0
    return -1 if a.group > b.group else 1


@dataclass(frozen=True)
class RunSummary:
    """All results of one harness run plus counts derived from them."""

    app_name: str
    results: Tuple[CaseResult, ...] = tuple()
    other_errors: str = ""
    duration_s: float = 0.0

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for result in self.results if result.passed)

    @property
    def failed(self) -> int:
        return sum(1 for result in self.results if not result.passed)

    @property
    def all_passed(self) -> bool:
        return self.failed == 0

    def sorted_by_group(self) -> "RunSummary":
        ordered = sorted(self.results, key=functools.cmp_to_key(compare_groups))
        return replace(self, results=tuple(ordered))

    def visible_results(self, hide_passed: bool = False) -> Tuple[CaseResult, ...]:
        if not hide_passed:
            return self.results
        return tuple(result for result in self.results if not result.passed)
