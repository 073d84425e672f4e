"""Sequential test harness: executes cases and accumulates their results."""
from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Sequence, Tuple, Union

from casebook.exceptions import AssertionFailure, HarnessStateError
from casebook.reporting.base import ReportManager

from .discovery import DEFAULT_SEPARATOR, discover
from .interception import ErrorSink
from .models import CaseDefinition, CaseResult, CaseState, RunSummary
from .tracing import render_current_stack, render_traceback

if TYPE_CHECKING:  # pragma: no cover
    from casebook.reporting.base import Reporter

log = logging.getLogger(__name__)

ASSERTION_MESSAGE = "Assertion failed"


class TestHarness:
    """Runs test cases one after another and records every outcome.

    The harness is a context manager: entering it installs the error sink so
    warnings and logged errors are attributed to the running case, leaving it
    restores the previous configuration and finishes the harness. ``run``
    enters the scope on its own when the caller has not.

    Each case receives the harness and may call :meth:`assert_true`,
    :meth:`mark_passed` or :meth:`mark_failed`. The last signal within a case
    wins: a failure followed by ``mark_passed`` is recorded as passed.
    """

    __test__ = False  # keep pytest from collecting this class

    def __init__(
        self,
        app_name: str,
        *,
        reporters: Sequence["Reporter"] = (),
        capture_logs: bool = True,
    ) -> None:
        self.app_name = app_name
        self._reports = ReportManager(reporters)
        self._sink = ErrorSink(capture_logs=capture_logs)
        self._results: List[CaseResult] = []
        self._counter = 1
        self._state: Optional[CaseState] = None
        self._finished = False
        self._duration = 0.0

    # lifecycle -----------------------------------------------------------
    def __enter__(self) -> "TestHarness":
        if self._finished:
            raise HarnessStateError(f"Harness '{self.app_name}' has already finished")
        self._sink.install()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._sink.uninstall()
        self._finished = True

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def running(self) -> bool:
        return self._state is not None

    @property
    def results(self) -> Tuple[CaseResult, ...]:
        return tuple(self._results)

    @property
    def other_errors(self) -> str:
        return self._sink.other_errors

    def summary(self) -> RunSummary:
        return RunSummary(
            app_name=self.app_name,
            results=tuple(self._results),
            other_errors=self._sink.other_errors,
            duration_s=self._duration,
        )

    def run(self, cases: Sequence[CaseDefinition]) -> RunSummary:
        """Execute ``cases`` in order and return the run summary."""

        if self._finished:
            raise HarnessStateError(f"Harness '{self.app_name}' has already finished")
        if not self._sink.active:
            with self:
                return self.run(cases)
        cases = list(cases)
        total = len(cases)
        log.info(f"running {total} case(s) for {self.app_name}")
        self._reports.on_start(self.app_name, total)
        start = time.perf_counter()
        for index, case in enumerate(cases, start=1):
            result = self._execute_case(case)
            self._results.append(result)
            self._reports.on_case_result(result, index, total)
        self._duration += time.perf_counter() - start
        summary = self.summary()
        self._reports.on_complete(summary)
        return summary

    def run_target(
        self,
        target: Any,
        labels: Optional[Mapping[str, str]] = None,
        *,
        separator: str = DEFAULT_SEPARATOR,
    ) -> RunSummary:
        """Discover the cases on ``target`` inside the harness scope, then run them."""

        if not self._sink.active:
            with self:
                return self.run_target(target, labels, separator=separator)
        return self.run(discover(target, labels, separator=separator))

    # signals used by case bodies ------------------------------------------
    def mark_passed(self) -> None:
        """Mark the running case as passed, discarding earlier failures."""

        self._require_running("mark_passed")
        self._state = self._state.pass_()

    def mark_failed(self, error: Union[BaseException, str]) -> None:
        """Mark the running case as failed.

        The error's message is appended to the case message and trace,
        followed by the stack: the traceback of ``error`` when it was raised,
        the current call stack otherwise. It is safe to call this first to set
        a default failure and :meth:`mark_passed` later in the same case.
        """

        self._require_running("mark_failed")
        self._state = self._state.fail(_error_text(error), _error_stack(error))

    def assert_true(self, condition: Any, message: str = ASSERTION_MESSAGE) -> None:
        """Pass the running case if ``condition`` holds, otherwise abort it as failed."""

        self._require_running("assert_true")
        if condition:
            self.mark_passed()
            return
        raise AssertionFailure(message)

    # internals -------------------------------------------------------------
    def _require_running(self, operation: str) -> None:
        if self._state is None:
            raise HarnessStateError(f"{operation}() called outside of a running test case")

    def _execute_case(self, case: CaseDefinition) -> CaseResult:
        sequence = self._counter
        self._counter += 1
        self._state = CaseState.initial()
        log.debug(f"case {sequence} {case.identifier} started")
        start = time.perf_counter()
        try:
            with self._sink.case_scope(self.mark_failed):
                case.invoke(self)
        except Exception as exc:
            self.mark_failed(exc)
        finally:
            duration = time.perf_counter() - start
            state, self._state = self._state, None
        result = CaseResult.from_state(sequence, case, state, duration)
        log.debug(f"case {sequence} {case.identifier} {result.status}")
        return result


def run_target(
    app_name: str,
    target: Any,
    labels: Optional[Mapping[str, str]] = None,
    *,
    separator: str = DEFAULT_SEPARATOR,
    reporters: Sequence["Reporter"] = (),
    capture_logs: bool = True,
) -> RunSummary:
    """Discover and run every case on ``target`` with a fresh harness."""

    with TestHarness(app_name, reporters=reporters, capture_logs=capture_logs) as harness:
        return harness.run_target(target, labels, separator=separator)


def _error_text(error: Union[BaseException, str]) -> str:
    if isinstance(error, BaseException):
        text = str(error)
        return text if text else type(error).__name__
    return str(error)


def _error_stack(error: Union[BaseException, str]) -> str:
    stack = getattr(error, "stack", None)
    if isinstance(stack, str) and stack:
        return stack
    if isinstance(error, BaseException) and error.__traceback__ is not None:
        return render_traceback(error.__traceback__)
    return render_current_stack(skip=2)
