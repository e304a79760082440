"""Tests for prefer-exponentiation-operator."""

import pytest

from idiomfix.rules import PREFER_EXPONENTIATION_OPERATOR


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("x = Math.pow(2, 8);", "x = (2) ** (8);"),
        ("x = Math.pow(a + 1, n);", "x = (a + 1) ** (n);"),
        ("x = -Math.pow(a, b);", "x = -((a) ** (b));"),
        ("x = Math.pow(a, b).toFixed(2);", "x = ((a) ** (b)).toFixed(2);"),
        ("x = c * Math.pow(a, b);", "x = c * (a) ** (b);"),
    ],
)
def test_rewrites(fix, code: str, expected: str) -> None:
    assert fix(PREFER_EXPONENTIATION_OPERATOR, code) == expected


@pytest.mark.parametrize(
    "code",
    [
        "x = Math.pow(a);",
        "x = Math.pow(...args);",
        "x = Math?.pow(a, b);",
        "x = Math.max(a, b);",
        "function f(Math) { return Math.pow(a, b); }",
    ],
)
def test_no_finding(lint, code: str) -> None:
    assert lint(PREFER_EXPONENTIATION_OPERATOR, code).diagnostics == []
