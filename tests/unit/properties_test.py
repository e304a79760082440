"""Whole-catalogue behaviour: scenarios, idempotence, valid output, capture fidelity and conservativeness."""

import pytest

from idiomfix.core.engine import Linter
from idiomfix.core.matching import FixMode, Idiom
from idiomfix.core.syntax import parse_source
from idiomfix.presets import resolve_idioms
from idiomfix.rules import (
    PREFER_ARRAY_AT,
    PREFER_ARRAY_FILL,
    PREFER_ARRAY_FROM_MAP,
    PREFER_ARRAY_TO_REVERSED,
    PREFER_ARRAY_TO_SORTED,
    PREFER_DATE_NOW,
    PREFER_EXPONENTIATION_OPERATOR,
    PREFER_INCLUDES,
    PREFER_INLINE_EQUALITY,
    PREFER_NULLISH_COALESCING,
    PREFER_OBJECT_HAS_OWN,
    PREFER_REGEX_TEST,
    PREFER_SPREAD_SYNTAX,
    PREFER_TIMER_ARGS,
)

ALL_UNTYPED = resolve_idioms("all")

CORPUS = [
    "const last = myArray[myArray.length - 1];",
    "if (arr.indexOf(x) !== -1) { found(); }",
    "const zeros = Array.from({length: n}, () => 0);",
    "const names = [...users].map((u) => u.name);",
    "x = items.slice().reverse();",
    "x = items.concat().sort((a, b) => a - b);",
    "x = Math.pow(base, 2) + 1;",
    "x = value != null ? value : fallback;",
    "if (opts.size == null) opts.size = 10;",
    "ok = Object.prototype.hasOwnProperty.call(obj, key);",
    "x = Object.assign({}, defaults, overrides);",
    "x = fn.apply(null, args);",
    "setTimeout(() => tick(1), 100);",
    "t = new Date().getTime();",
    "if (str.match(/abc/)) { go(); }",
    "if (['a', 'b'].includes(kind)) {}",
    "function f(s) { return /a+/.test(s); }",
    "x = a != null ? a : b[b.length - 1];",
]


# Fixes placed where a careless rewrite would turn into a block, a pattern or another syntax error.
AWKWARD_POSITIONS = [
    (PREFER_ARRAY_AT, "[a[a.length - 1]] = vals;", "[a[a.length - 1]] = vals;"),
    (PREFER_ARRAY_AT, "({k: a[a.length - 1]} = o);", "({k: a[a.length - 1]} = o);"),
    (PREFER_ARRAY_AT, "const f = () => a[a.length - 1];", "const f = () => a.at(-1);"),
    (PREFER_ARRAY_FILL, "const f = () => [...Array(3)].map(() => 0);", "const f = () => Array(3).fill(0);"),
    (
        PREFER_ARRAY_FILL,
        "Array.from({length: 3}, () => 0).forEach(f);",
        "Array.from({length: 3}).fill(0).forEach(f);",
    ),
    (PREFER_ARRAY_FROM_MAP, "[...xs].map(f).forEach(g);", "Array.from(xs, f).forEach(g);"),
    (PREFER_INCLUDES, "arr.indexOf(x) !== -1 && go();", "arr.includes(x) && go();"),
    (PREFER_ARRAY_TO_REVERSED, "arr.slice().reverse().forEach(f);", "arr.toReversed().forEach(f);"),
    (
        PREFER_ARRAY_TO_SORTED,
        "arr.slice().sort((a, b) => a - b).forEach(f);",
        "arr.toSorted((a, b) => a - b).forEach(f);",
    ),
    (PREFER_EXPONENTIATION_OPERATOR, "Math.pow(a, b).toFixed(2);", "((a) ** (b)).toFixed(2);"),
    (PREFER_EXPONENTIATION_OPERATOR, "const f = () => Math.pow(a, 2);", "const f = () => (a) ** (2);"),
    (PREFER_NULLISH_COALESCING, "(a != null ? a : b).run();", "(a ?? b).run();"),
    (PREFER_NULLISH_COALESCING, "const f = () => a != null ? a : b;", "const f = () => a ?? b;"),
    (
        PREFER_OBJECT_HAS_OWN,
        "const f = (k) => Object.prototype.hasOwnProperty.call(o, k);",
        "const f = (k) => Object.hasOwn(o, k);",
    ),
    (PREFER_SPREAD_SYNTAX, "Object.assign({}, a).run();", "({...a}).run();"),
    (PREFER_SPREAD_SYNTAX, "const f = () => Object.assign({}, a).b;", "const f = () => ({...a}).b;"),
    (PREFER_SPREAD_SYNTAX, "const f = () => Object.assign({}, a);", "const f = () => ({...a});"),
    (PREFER_TIMER_ARGS, "const f = () => setTimeout(() => tick(1), 100);", "const f = () => setTimeout(tick, 100, 1);"),
    (PREFER_DATE_NOW, "new Date().getTime().toString();", "Date.now().toString();"),
    (PREFER_REGEX_TEST, "const f = (s) => /a/.exec(s) ? 1 : 2;", "const f = (s) => /a/.test(s) ? 1 : 2;"),
    (PREFER_INLINE_EQUALITY, "['a', 'b'].includes(k) && go();", "('a' === k || 'b' === k) && go();"),
    (PREFER_INLINE_EQUALITY, "const f = (k) => ['a', 'b'].includes(k);", "const f = (k) => 'a' === k || 'b' === k;"),
]


class TestFixedOutputIsValid:
    @pytest.mark.parametrize(("idiom", "code", "expected"), AWKWARD_POSITIONS)
    def test_fix_parses_and_does_not_fire_again(self, idiom: Idiom, code: str, expected: str) -> None:
        linter = Linter([idiom])
        fixed = linter.fix_text(code, "js").fixed_text
        assert fixed == expected
        parse_source(fixed, "js")
        assert linter.lint_text(fixed, "js").fixable_count == 0

    def test_every_automatic_fix_is_exercised(self) -> None:
        automatic = {idiom.id for idiom in ALL_UNTYPED if idiom.mode == FixMode.CODE}
        assert automatic <= {idiom.id for idiom, _, _ in AWKWARD_POSITIONS}



class TestScenarios:
    def test_last_element(self, fix) -> None:
        assert fix(PREFER_ARRAY_AT, "myArray[myArray.length - 1]") == "myArray.at(-1)"

    def test_second_to_last_element(self, lint) -> None:
        assert lint(PREFER_ARRAY_AT, "myArray[myArray.length - 2]").diagnostics == []

    def test_index_of_comparisons(self, fix) -> None:
        assert fix(PREFER_INCLUDES, "arr.indexOf(x) !== -1") == "arr.includes(x)"
        assert fix(PREFER_INCLUDES, "arr.indexOf(x) === -1") == "!arr.includes(x)"

    def test_random_values_are_not_filled(self, lint) -> None:
        assert lint(PREFER_ARRAY_FILL, "[...Array(5)].map(() => Math.random())").diagnostics == []

    @pytest.mark.parametrize(
        "code",
        [
            "value !== null && value !== undefined ? value : fallback",
            "value === null || value === undefined ? fallback : value",
        ],
    )
    def test_null_check_ternaries(self, fix, code: str) -> None:
        assert fix(PREFER_NULLISH_COALESCING, code) == "value ?? fallback"


class TestIdempotence:
    @pytest.mark.parametrize("code", CORPUS)
    def test_fixing_twice_changes_nothing(self, code: str) -> None:
        linter = Linter(ALL_UNTYPED)
        once = linter.fix_text(code, "js")
        assert once.fixed_text is not None
        assert once.fixable_count == 0
        twice = linter.fix_text(once.fixed_text, "js")
        assert twice.fixed_text == once.fixed_text

    @pytest.mark.parametrize("code", CORPUS)
    def test_fixed_text_still_parses(self, code: str) -> None:
        linter = Linter(ALL_UNTYPED)
        fixed = linter.fix_text(code, "js").fixed_text
        assert fixed is not None
        linter.lint_text(fixed, "js")


class TestCaptureFidelity:
    def test_comments_inside_arguments_survive(self, fix) -> None:
        code = "if (list.indexOf(x /* needle */, 2) !== -1) {}"
        assert fix(PREFER_INCLUDES, code) == "if (list.includes(x /* needle */, 2)) {}"

    def test_text_outside_the_fix_is_untouched(self, fix) -> None:
        code = "// header\nconst a = 1;   /* keep */\nx = xs[xs.length - 1]; // tail\n"
        expected = "// header\nconst a = 1;   /* keep */\nx = xs.at(-1); // tail\n"
        assert fix(PREFER_ARRAY_AT, code) == expected

    def test_unicode_before_the_fix(self, fix) -> None:
        code = "const s = 'héllo ✓';\nx = xs[xs.length - 1];"
        assert fix(PREFER_ARRAY_AT, code) == "const s = 'héllo ✓';\nx = xs.at(-1);"

    def test_fix_spans_cover_only_reported_nodes(self, lint) -> None:
        code = "foo(bar[bar.length - 1], 1);"
        diagnostic = lint(PREFER_ARRAY_AT, code).diagnostics[0]
        assert diagnostic.fix is not None
        assert code[diagnostic.fix.start : diagnostic.fix.end] == "bar[bar.length - 1]"


class TestConservativeness:
    @pytest.mark.parametrize(
        "code",
        [
            "x = f()[f().length - 1];",
            "x = obj.list.indexOf(v);",
            "x = next() != null ? next() : 0;",
            "x = a.concat(b);",
            "x = obj.method.apply(null, args);",
            "setTimeout(() => obj.go(), 10);",
            "t = new Date(0).getTime();",
            "if (str.match(/a/g)) {}",
            "ok = [a, b].includes(x);",
            "x = [...iterable].sort();",
            "x = value === undefined ? fallback : value;",
        ],
    )
    def test_uncertain_code_is_left_alone(self, code: str) -> None:
        linter = Linter(ALL_UNTYPED)
        report = linter.lint_text(code, "js")
        assert report.fixable_count == 0
        assert linter.fix_text(code, "js").fixed_text == code
