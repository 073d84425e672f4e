"""Run the example cases and print the text report."""
from casebook import run_target
from casebook.reporting import render_text

from examples.user_suite.cases import UserCases


def main() -> None:
    summary = run_target("ExampleTest", UserCases())
    print(render_text(summary))
    raise SystemExit(0 if summary.all_passed else 1)


if __name__ == "__main__":
    main()
