"""Suite registry public API."""
from .registry import SuiteEntry, SuiteRegistry, clear_registry, register_suite, registry

__all__ = [
    "SuiteEntry",
    "SuiteRegistry",
    "clear_registry",
    "register_suite",
    "registry",
]
