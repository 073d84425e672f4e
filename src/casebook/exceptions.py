"""Error hierarchy shared by the casebook subsystems."""
from __future__ import annotations


class CasebookError(Exception):
    """Base class for errors raised by casebook itself."""


class DiscoveryError(CasebookError):
    """A target could not be turned into test cases."""


class SuiteConfigError(CasebookError, ValueError):
    """A suite file is malformed or fails schema validation."""


class HarnessStateError(CasebookError, RuntimeError):
    """The harness was used outside of its lifecycle."""


class CaseWarning(CasebookError):
    """A warning or logged error intercepted while a case was running."""

    def __init__(self, message: str, stack: str = "") -> None:
        super().__init__(message)
        self.stack = stack


class AssertionFailure(AssertionError):
    """Raised by ``TestHarness.assert_true`` when the condition does not hold."""
