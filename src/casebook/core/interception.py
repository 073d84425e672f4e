"""Scoped interception of warnings and logged errors raised during a run."""
from __future__ import annotations

import contextlib
import contextvars
import logging
import warnings
from typing import Callable, Iterator, List, Optional

from casebook.exceptions import CaseWarning, HarnessStateError

from .tracing import render_current_stack

log = logging.getLogger(__name__)

CaseEventHandler = Callable[[CaseWarning], None]


class _SinkLogHandler(logging.Handler):
    """Feeds WARNING-and-above records from foreign loggers into the sink."""

    def __init__(self, sink: "ErrorSink") -> None:
        super().__init__(level=logging.WARNING)
        self._sink = sink

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "casebook" or record.name.startswith("casebook."):
            return False
        return super().filter(record)

    def emit(self, record: logging.LogRecord) -> None:
        self._sink.report(
            record.getMessage(),
            category=record.levelname,
            filename=record.pathname,
            lineno=record.lineno,
        )


class ErrorSink:
    """Routes warnings and logged errors to the running case.

    While installed, an event raised inside :meth:`case_scope` is handed to
    that scope's handler as a :class:`CaseWarning`; any other event is kept
    verbatim in :attr:`other_errors`. :meth:`uninstall` restores the previous
    ``warnings`` configuration and detaches the log handler.
    """

    def __init__(self, *, capture_logs: bool = True) -> None:
        self._capture_logs = capture_logs
        self._current: contextvars.ContextVar[Optional[CaseEventHandler]] = contextvars.ContextVar(
            "casebook_current_case", default=None
        )
        self._other_errors: List[str] = []
        self._catcher: Optional[warnings.catch_warnings] = None
        self._log_handler: Optional[_SinkLogHandler] = None

    @property
    def active(self) -> bool:
        return self._catcher is not None

    @property
    def other_errors(self) -> str:
        return "".join(self._other_errors)

    def install(self) -> None:
        if self._catcher is not None:
            raise HarnessStateError("Error sink is already installed")
        catcher = warnings.catch_warnings()
        catcher.__enter__()
        self._catcher = catcher
        warnings.simplefilter("always")
        warnings.showwarning = self._show_warning
        if self._capture_logs:
            self._log_handler = _SinkLogHandler(self)
            logging.getLogger().addHandler(self._log_handler)
        log.debug("error sink installed")

    def uninstall(self) -> None:
        if self._log_handler is not None:
            logging.getLogger().removeHandler(self._log_handler)
            self._log_handler = None
        if self._catcher is not None:
            catcher, self._catcher = self._catcher, None
            catcher.__exit__(None, None, None)
            log.debug("error sink uninstalled")

    def __enter__(self) -> "ErrorSink":
        self.install()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.uninstall()

    @contextlib.contextmanager
    def case_scope(self, handler: CaseEventHandler) -> Iterator[None]:
        token = self._current.set(handler)
        try:
            yield
        finally:
            self._current.reset(token)

    def report(self, message: str, *, category: str, filename: str, lineno: int) -> None:
        handler = self._current.get()
        if handler is None:
            self._other_errors.append(f"{filename}({lineno}): {category}: '{message}'\n")
            return
        handler(CaseWarning(f"{category}: {message}", stack=render_current_stack(skip=1)))

    def _show_warning(self, message, category, filename, lineno, file=None, line=None) -> None:
        self.report(str(message), category=category.__name__, filename=filename, lineno=lineno)
