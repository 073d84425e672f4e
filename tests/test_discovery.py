from __future__ import annotations

import types

import pytest

from casebook.core.discovery import CaseCollector, discover, split_identifier
from casebook.exceptions import DiscoveryError


def test_split_identifier_uses_first_separator() -> None:
    assert split_identifier("User_Load_NonExisting") == ("User", "Load_NonExisting")
    assert split_identifier("FailingCase") == ("", "FailingCase")
    assert split_identifier("User.Load", ".") == ("User", "Load")


def test_discover_preserves_declaration_order(example_cases) -> None:
    cases = discover(example_cases)
    assert [case.identifier for case in cases] == ["User_Load", "Group_AddUser", "FailingCase"]
    assert [(case.group, case.name) for case in cases] == [
        ("User", "Load user"),
        ("Group", "AddUser"),
        ("", "FailingCase"),
    ]


def test_explicit_labels_override_declared_table(example_cases) -> None:
    cases = discover(example_cases, {"User_Load": "Fetch user", "FailingCase": "Always fails"})
    assert [case.name for case in cases] == ["Fetch user", "AddUser", "Always fails"]


def test_empty_label_replaces_derived_name() -> None:
    class _Blank:
        test_names = {"User_Load": ""}

        def User_Load(self, test):
            pass

    cases = discover(_Blank())
    assert (cases[0].group, cases[0].name) == ("User", "")
    collector = CaseCollector()
    collector.add("User_Load", lambda test: None, label="")
    assert collector.cases()[0].name == ""


class _Base:
    def Base_First(self, test):
        pass

    def Shared_Case(self, test):
        pass


class _Derived(_Base):
    test_names = {"Base_First": "From base"}
    helper_value = 3

    def Derived_Case(self, test):
        pass

    def Shared_Case(self, test):
        pass

    def _helper(self):
        pass

    @staticmethod
    def Static_Case(test):
        pass

    @property
    def Prop_Case(self):
        raise AssertionError("properties must not be evaluated")


def test_discover_walks_class_hierarchy_own_class_first() -> None:
    cases = discover(_Derived())
    assert [case.identifier for case in cases] == [
        "Derived_Case",
        "Shared_Case",
        "Static_Case",
        "Base_First",
    ]
    assert cases[-1].name == "From base"


def test_discover_instantiates_classes() -> None:
    cases = discover(_Derived)
    assert len(cases) == 4


def test_discover_rejects_class_requiring_arguments() -> None:
    class NeedsArgs:
        def __init__(self, value):
            self.value = value

        def Case_One(self, test):
            pass

    with pytest.raises(DiscoveryError) as exc:
        discover(NeedsArgs)
    assert "NeedsArgs" in str(exc.value)


def test_discover_module_functions_in_definition_order() -> None:
    module = types.ModuleType("sample_cases")
    exec(
        "import os\n"
        "from os.path import join\n"
        "def Zeta_Last(test):\n    pass\n"
        "def Alpha_First(test):\n    pass\n"
        "def _private(test):\n    pass\n"
        "test_names = {'Alpha_First': 'alpha'}\n",
        module.__dict__,
    )
    cases = discover(module)
    assert [case.identifier for case in cases] == ["Zeta_Last", "Alpha_First"]
    assert cases[1].name == "alpha"


@pytest.mark.parametrize("target", [None, 3, "User_Load", ["a"]])
def test_discover_rejects_plain_values(target) -> None:
    with pytest.raises(DiscoveryError):
        discover(target)


def test_discover_rejects_non_mapping_label_table() -> None:
    class BadLabels:
        test_names = ["User_Load"]

        def User_Load(self, test):
            pass

    with pytest.raises(DiscoveryError):
        discover(BadLabels())


def test_collector_registers_in_order_with_labels() -> None:
    collector = CaseCollector()

    @collector.case(label="Load user")
    def User_Load(test):
        pass

    collector.add("FailingCase", lambda test: None)
    collector.extend([("Group_AddUser", lambda test: None)])

    cases = collector.cases()
    assert len(collector) == 3
    assert "FailingCase" in collector
    assert [case.identifier for case in cases] == ["User_Load", "FailingCase", "Group_AddUser"]
    assert cases[0].name == "Load user"
    assert collector.cases({"User_Load": "Other"})[0].name == "Other"


def test_collector_rejects_duplicates_and_non_callables() -> None:
    collector = CaseCollector()
    collector.add("One", lambda test: None)
    with pytest.raises(DiscoveryError):
        collector.add("One", lambda test: None)
    with pytest.raises(DiscoveryError):
        collector.add("Two", "not callable")  # type: ignore[arg-type]
