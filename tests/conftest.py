import pytest

from casebook.registry import clear_registry


class ExampleCases:
    """Three-case object used across the harness and reporting tests."""

    test_names = {"User_Load": "Load user"}

    def User_Load(self, test):
        self.user = "john"
        test.assert_true(self.user == "john")

    def Group_AddUser(self, test):
        self.group = [self.user]

    def FailingCase(self, test):
        raise RuntimeError("This testcase will fail")


@pytest.fixture()
def example_cases() -> ExampleCases:
    return ExampleCases()


@pytest.fixture(autouse=True)
def isolated_registry():
    """Give every test an empty suite registry."""

    clear_registry()
    yield
    clear_registry()
