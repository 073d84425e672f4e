"""Render call stacks into the trace text stored on failed results."""
from __future__ import annotations

import inspect
import reprlib
import sys
from types import FrameType, TracebackType
from typing import Iterable, Iterator, List, Optional, Tuple

# Frames from these modules belong to the harness machinery, not to the case.
_INTERNAL_MODULES = (
    "casebook.core.harness",
    "casebook.core.interception",
    "casebook.core.tracing",
    "warnings",
    "_py_warnings",
    "logging",
)

_repr = reprlib.Repr()
_repr.maxstring = 40
_repr.maxother = 40


def render_frame(frame: FrameType, lineno: int) -> str:
    code = frame.f_code
    info = inspect.getargvalues(frame)
    enclosing = ""
    names = list(info.args)
    if names and names[0] in ("self", "cls") and names[0] in info.locals:
        owner = info.locals[names[0]]
        enclosing = owner.__name__ if names[0] == "cls" and isinstance(owner, type) else type(owner).__name__
        names = names[1:]
    values = [_repr.repr(info.locals[name]) for name in names if name in info.locals]
    if info.varargs and info.varargs in info.locals:
        values.extend(_repr.repr(value) for value in info.locals[info.varargs])
    prefix = f"{enclosing}." if enclosing else ""
    return f"  {code.co_filename}:{lineno} - {prefix}{code.co_name}({', '.join(values)})"


def render_traceback(tb: Optional[TracebackType]) -> str:
    """Render the frames of a traceback, outermost first."""

    return _join(_traceback_frames(tb))


def render_current_stack(skip: int = 0) -> str:
    """Render the caller's stack up to the case boundary, outermost first.

    Leading harness frames are skipped; the walk stops at the first harness
    frame found after the case's own frames.
    """

    frame: Optional[FrameType] = sys._getframe(skip + 1)
    frames: List[Tuple[FrameType, int]] = []
    while frame is not None:
        if _is_internal(frame):
            if frames:
                break
        else:
            frames.append((frame, frame.f_lineno))
        frame = frame.f_back
    frames.reverse()
    return _join(frames)


def _traceback_frames(tb: Optional[TracebackType]) -> Iterator[Tuple[FrameType, int]]:
    while tb is not None:
        yield tb.tb_frame, tb.tb_lineno
        tb = tb.tb_next


def _join(frames: Iterable[Tuple[FrameType, int]]) -> str:
    lines = [render_frame(frame, lineno) for frame, lineno in frames if not _is_internal(frame)]
    return "\n".join(lines)


def _is_internal(frame: FrameType) -> bool:
    module = frame.f_globals.get("__name__", "")
    return any(module == name or module.startswith(f"{name}.") for name in _INTERNAL_MODULES)
