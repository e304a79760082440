"""Tests for prefer-includes."""

import pytest

from idiomfix.core.annotations import AnnotationTypeService
from idiomfix.rules import PREFER_INCLUDES


class TestComparisons:
    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("if (arr.indexOf(x) !== -1) {}", "if (arr.includes(x)) {}"),
            ("if (arr.indexOf(x) != -1) {}", "if (arr.includes(x)) {}"),
            ("if (arr.indexOf(x) > -1) {}", "if (arr.includes(x)) {}"),
            ("if (arr.indexOf(x) >= 0) {}", "if (arr.includes(x)) {}"),
            ("if (arr.indexOf(x) === -1) {}", "if (!arr.includes(x)) {}"),
            ("if (arr.indexOf(x) == -1) {}", "if (!arr.includes(x)) {}"),
            ("if (arr.indexOf(x) < 0) {}", "if (!arr.includes(x)) {}"),
            ("if (-1 !== arr.indexOf(x)) {}", "if (arr.includes(x)) {}"),
            ("if (-1 < arr.indexOf(x)) {}", "if (arr.includes(x)) {}"),
            ("if (0 > arr.indexOf(x)) {}", "if (!arr.includes(x)) {}"),
        ],
    )
    def test_rewrites(self, fix, code: str, expected: str) -> None:
        assert fix(PREFER_INCLUDES, code) == expected

    def test_from_index_is_kept(self, fix) -> None:
        assert fix(PREFER_INCLUDES, "ok = s.indexOf('a', 2) !== -1;") == "ok = s.includes('a', 2);"

    @pytest.mark.parametrize(
        "code",
        [
            "ok = arr.indexOf(x) !== 0;",
            "ok = arr.indexOf(x) > 0;",
            "ok = arr.indexOf(x, 1, 2) !== -1;",
            "ok = arr.indexOf(...args) !== -1;",
            "ok = arr?.indexOf(x) !== -1;",
            "ok = arr.lastIndexOf(x) !== -1;",
            "i = arr.indexOf(x);",
        ],
    )
    def test_no_finding(self, lint, code: str) -> None:
        assert lint(PREFER_INCLUDES, code).diagnostics == []

    def test_known_non_array_receiver_is_skipped(self, lint) -> None:
        code = "const m = new Map(); ok = m.indexOf(x) !== -1;"
        assert lint(PREFER_INCLUDES, code, "ts", AnnotationTypeService()).diagnostics == []


class TestBitwiseNot:
    def test_in_condition(self, fix) -> None:
        assert fix(PREFER_INCLUDES, "if (~arr.indexOf(x)) {}") == "if (arr.includes(x)) {}"

    def test_negated(self, fix) -> None:
        assert fix(PREFER_INCLUDES, "ok = !~arr.indexOf(x);") == "ok = !arr.includes(x);"

    def test_value_position_is_left_alone(self, lint) -> None:
        assert lint(PREFER_INCLUDES, "n = ~arr.indexOf(x);").diagnostics == []
