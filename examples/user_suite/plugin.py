from casebook.registry import register_suite


def register() -> None:
    register_suite(
        "users",
        "examples.user_suite.cases:UserCases",
        description="Example user and group cases",
    )
