"""Tests for prefer-array-fill."""

import pytest

from idiomfix.rules import PREFER_ARRAY_FILL


class TestArrayFromLength:
    def test_constant_arrow(self, lint, fix) -> None:
        code = "const zeros = Array.from({length: 5}, () => 0);"
        report = lint(PREFER_ARRAY_FILL, code)
        assert [d.message_key for d in report.diagnostics] == ["preferFillArrayFrom"]
        assert fix(PREFER_ARRAY_FILL, code) == "const zeros = Array.from({length: 5}).fill(0);"

    def test_function_expression_with_return(self, fix) -> None:
        code = "x = Array.from({length: n}, function () { return 'a'; });"
        assert fix(PREFER_ARRAY_FILL, code) == "x = Array.from({length: n}).fill('a');"

    @pytest.mark.parametrize(
        "code",
        [
            "x = Array.from({length: 3}, () => ({}));",
            "x = Array.from({length: 3}, () => []);",
            "x = Array.from({length: 3}, (_, i) => i);",
            "x = Array.from({length: 3}, () => Math.random());",
            "x = Array.from({length: 3}, async () => 0);",
            "x = Array.from({length: 3, other: 1}, () => 0);",
            "x = Array.from(items, () => 0);",
            "x = Array.from({length: 3}, function () { return arguments[0]; });",
            "let Array = {}; x = Array.from({length: 3}, () => 0);",
        ],
    )
    def test_no_finding(self, lint, code: str) -> None:
        assert lint(PREFER_ARRAY_FILL, code).diagnostics == []


class TestSpreadArrayMap:
    def test_constant_map(self, fix) -> None:
        assert fix(PREFER_ARRAY_FILL, "x = [...Array(5)].map(() => null);") == "x = Array(5).fill(null);"

    def test_random_callback_is_not_constant(self, lint) -> None:
        assert lint(PREFER_ARRAY_FILL, "[...Array(5)].map(() => Math.random());").diagnostics == []

    def test_other_spread_source(self, lint) -> None:
        assert lint(PREFER_ARRAY_FILL, "x = [...items].map(() => 0);").diagnostics == []
