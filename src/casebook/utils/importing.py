"""Utility helpers for dynamic imports."""
from __future__ import annotations

import importlib
import importlib.util
import sys
from pathlib import Path
from typing import Any, Optional


def import_string(path: str) -> Any:
    """Return the attribute at the given dotted path.

    Supports ``module:attr`` or ``module.attr`` syntax. A ``module:`` path or a
    bare module name returns the module itself, so module-level test
    functions can be targeted too.
    """

    if not path:
        raise ValueError("Empty import path provided")
    module_name, sep, attr = path.partition(":")
    if sep and not attr:
        return importlib.import_module(module_name)
    if not sep:
        try:
            return importlib.import_module(path)
        except ModuleNotFoundError as exc:
            if exc.name != path:
                raise
        module_name, sep, attr = path.rpartition(".")
    if not module_name or not attr:
        raise ValueError(f"Invalid import path '{path}'")
    module = importlib.import_module(module_name)
    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:  # pragma: no cover - simple attribute error
            raise AttributeError(f"Module '{module_name}' has no attribute '{attr}'") from exc
    return target


def load_from_source(source: Path, attr: Optional[str] = None) -> Any:
    """Load a Python file and return it as a module, or its attribute ``attr``."""

    path = source.expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(f"Test source file not found: {path}")
    module_name = f"casebook_source_{path.stem}_{hash(str(path)) & 0xFFFF:x}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Unable to load module from {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    if not attr:
        return module
    if not hasattr(module, attr):
        raise AttributeError(f"Attribute '{attr}' not found in {path}")
    return getattr(module, attr)
