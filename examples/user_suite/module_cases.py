"""Module-level test functions, discovered in definition order."""
import warnings


def Math_Add(test):
    test.assert_true(1 + 1 == 2)


def Math_Divide(test):
    test.assert_true(10 / 4 == 2)


def Deprecated_Call(test):
    warnings.warn("old API used", DeprecationWarning)
