"""Turn targets (objects, classes, modules) into ordered test cases."""
from __future__ import annotations

import inspect
import logging
import types
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from casebook.exceptions import DiscoveryError

from .models import CaseBody, CaseDefinition

log = logging.getLogger(__name__)

DEFAULT_SEPARATOR = "_"
LABELS_ATTRIBUTE = "test_names"


def split_identifier(identifier: str, separator: str = DEFAULT_SEPARATOR) -> Tuple[str, str]:
    """Split ``identifier`` on the first ``separator`` into ``(group, name)``.

    Identifiers without a separator belong to the empty group.
    """

    if not separator:
        raise ValueError("Separator cannot be empty")
    group, sep, name = identifier.partition(separator)
    if not sep:
        return "", identifier
    return group, name


def build_case(
    identifier: str,
    invoke: CaseBody,
    *,
    label: Optional[str] = None,
    separator: str = DEFAULT_SEPARATOR,
) -> CaseDefinition:
    group, name = split_identifier(identifier, separator)
    if label is not None:
        name = label
    return CaseDefinition(identifier=identifier, group=group, name=name, invoke=invoke)


def discover(
    target: Any,
    labels: Optional[Mapping[str, str]] = None,
    *,
    separator: str = DEFAULT_SEPARATOR,
) -> List[CaseDefinition]:
    """Collect the test cases exposed by ``target`` in declaration order.

    ``target`` may be an instance, a class (instantiated without arguments)
    or a module. Names starting with an underscore, the ``test_names`` label
    table and anything that is not a function or method are never treated as
    cases. Labels found in ``test_names`` are merged with ``labels``; the
    explicit mapping wins.
    """

    if inspect.isclass(target):
        target = _instantiate(target)
    if isinstance(target, types.ModuleType):
        members = _module_members(target)
    elif _is_plain_value(target):
        raise DiscoveryError(f"Cannot discover test cases on {type(target).__name__} value {target!r}")
    else:
        members = _instance_members(target)
    merged = _merge_labels(target, labels)
    cases = [
        build_case(name, func, label=merged.get(name), separator=separator)
        for name, func in members
    ]
    log.debug(f"discovered {len(cases)} case(s) on {_describe(target)}")
    return cases


class CaseCollector:
    """Explicit, ordered registration of test cases.

    Example::

        collector = CaseCollector()

        @collector.case(label="Load user")
        def User_Load(test):
            test.assert_true(load("john").user_id == "john")
    """

    def __init__(self, *, separator: str = DEFAULT_SEPARATOR) -> None:
        self._separator = separator
        self._entries: Dict[str, Tuple[CaseBody, Optional[str]]] = {}

    def add(self, identifier: str, func: CaseBody, label: Optional[str] = None) -> CaseBody:
        if not identifier:
            raise DiscoveryError("Case identifier cannot be empty")
        if not callable(func):
            raise DiscoveryError(f"Case '{identifier}' is not callable")
        if identifier in self._entries:
            raise DiscoveryError(f"Case '{identifier}' already registered")
        self._entries[identifier] = (func, label)
        return func

    def case(
        self, identifier: Optional[str] = None, *, label: Optional[str] = None
    ) -> Callable[[CaseBody], CaseBody]:
        """Decorator registering the decorated function as a case."""

        def decorator(func: CaseBody) -> CaseBody:
            return self.add(identifier or func.__name__, func, label)

        return decorator

    def extend(self, pairs: Iterable[Tuple[str, CaseBody]]) -> None:
        for identifier, func in pairs:
            self.add(identifier, func)

    def cases(self, labels: Optional[Mapping[str, str]] = None) -> List[CaseDefinition]:
        overrides = dict(labels or {})
        return [
            build_case(
                identifier,
                func,
                label=overrides.get(identifier, label),
                separator=self._separator,
            )
            for identifier, (func, label) in self._entries.items()
        ]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._entries


def _instantiate(cls: type) -> Any:
    try:
        return cls()
    except TypeError as exc:
        raise DiscoveryError(
            f"Test class '{cls.__qualname__}' must be constructible without arguments: {exc}"
        ) from exc


def _is_plain_value(target: Any) -> bool:
    return target is None or isinstance(target, (str, bytes, int, float, bool, list, tuple, dict, set))


def _is_case_name(name: str) -> bool:
    return not name.startswith("_") and name != LABELS_ATTRIBUTE


def _instance_members(instance: Any) -> List[Tuple[str, CaseBody]]:
    seen = set()
    members: List[Tuple[str, CaseBody]] = []
    for klass in type(instance).__mro__:
        if klass is object:
            continue
        for name, raw in vars(klass).items():
            if name in seen or not _is_case_name(name):
                continue
            seen.add(name)
            if not isinstance(raw, (types.FunctionType, staticmethod, classmethod)):
                continue
            members.append((name, getattr(instance, name)))
    return members


def _module_members(module: types.ModuleType) -> List[Tuple[str, CaseBody]]:
    members: List[Tuple[str, CaseBody]] = []
    for name, value in vars(module).items():
        if not _is_case_name(name) or not inspect.isfunction(value):
            continue
        if value.__module__ != module.__name__:
            continue
        members.append((name, value))
    return members


def _merge_labels(owner: Any, labels: Optional[Mapping[str, str]]) -> Dict[str, str]:
    declared = getattr(owner, LABELS_ATTRIBUTE, None)
    merged: Dict[str, str] = {}
    if declared is not None:
        if not isinstance(declared, Mapping):
            raise DiscoveryError(
                f"'{LABELS_ATTRIBUTE}' on {_describe(owner)} must be a mapping, "
                f"got {type(declared).__name__}"
            )
        merged.update({str(key): str(value) for key, value in declared.items()})
    if labels:
        merged.update({str(key): str(value) for key, value in labels.items()})
    return merged


def _describe(owner: Any) -> str:
    if isinstance(owner, types.ModuleType):
        return f"module {owner.__name__}"
    return f"{type(owner).__qualname__} instance"
