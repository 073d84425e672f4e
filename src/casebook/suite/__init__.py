"""Suite file loader and executor."""

from .loader import load_suite
from .models import ReportConfig, SuiteConfig, SuiteOptions, TargetConfig
from .runner import collect_cases, execute_suite, run_suite

__all__ = [
    "ReportConfig",
    "SuiteConfig",
    "SuiteOptions",
    "TargetConfig",
    "collect_cases",
    "execute_suite",
    "load_suite",
    "run_suite",
]
