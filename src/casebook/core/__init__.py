"""Core models and helpers exposed at the package level."""
from .discovery import CaseCollector, discover, split_identifier
from .harness import TestHarness, run_target
from .interception import ErrorSink
from .models import CaseDefinition, CaseResult, CaseState, RunSummary, compare_groups

__all__ = [
    "CaseCollector",
    "CaseDefinition",
    "CaseResult",
    "CaseState",
    "ErrorSink",
    "RunSummary",
    "TestHarness",
    "compare_groups",
    "discover",
    "run_target",
    "split_identifier",
]
