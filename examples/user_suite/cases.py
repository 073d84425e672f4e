"""Example test object mirroring a small user/group module."""
from __future__ import annotations


class UserCases:
    test_names = {
        "User_Load": "Load user",
        "Group_AddUser": "Add user to group",
        "FailingCase": "Deliberately fail",
    }

    def __init__(self) -> None:
        self.user = None
        self.group = []

    def User_Load(self, test):
        self.user = "john"
        test.assert_true(self.user == "john")

    def Group_AddUser(self, test):
        self.group.append(self.user)

    def FailingCase(self, test):
        raise RuntimeError("This testcase will fail")

    def User_Load_NonExisting(self, test):
        test.mark_failed("Non existing user loaded.")
        try:
            {"john": 1}["amelia"]
        except KeyError:
            test.mark_passed()
