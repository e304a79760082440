"""Tests for prefer-timer-args."""

import pytest

from idiomfix.rules import PREFER_TIMER_ARGS


class TestArrowCallback:
    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("setTimeout(() => tick(1), 100);", "setTimeout(tick, 100, 1);"),
            ("setTimeout(() => run(), 0);", "setTimeout(run, 0);"),
            ("setInterval(() => poll('/a', -1), delay);", "setInterval(poll, delay, '/a', -1);"),
            ("setTimeout(() => f(...[1, 2]), 0);", "setTimeout(f, 0, ...[1, 2]);"),
            ("const f = () => 1;\nsetTimeout(() => f(), 0);", "const f = () => 1;\nsetTimeout(f, 0);"),
            ("setTimeout(() => f(), 0);\nfunction f() {}", "setTimeout(f, 0);\nfunction f() {}"),
            (
                "const url = '/x';\nwindow.setTimeout(() => poll(url, `${url}!`), 10);",
                "const url = '/x';\nwindow.setTimeout(poll, 10, url, `${url}!`);",
            ),
        ],
    )
    def test_rewrites(self, fix, code: str, expected: str) -> None:
        assert fix(PREFER_TIMER_ARGS, code) == expected

    @pytest.mark.parametrize(
        "code",
        [
            "setTimeout(() => obj.run(), 10);",
            "let n = 0;\nn++;\nsetTimeout(() => log(n), 10);",
            "setTimeout(() => log(compute()), 10);",
            "setTimeout(() => log(obj.value), 10);",
            "setTimeout((x) => log(x), 10);",
            "setTimeout(async () => log(1), 10);",
            "setTimeout(() => { log(1); }, 10);",
            "setTimeout(() => log(1), 10, extra);",
            "setTimeout(() => log?.(1), 10);",
            "let log = a;\nlog = b;\nsetTimeout(() => log(1), 10);",
            "const setTimeout = schedule;\nsetTimeout(() => log(1), 10);",
            "setTimeout(() => f(), 0);\nconst f = () => 1;",
            "setTimeout(() => log(url), 0);\nconst url = '/x';",
            "setTimeout(() => log(1), 0);\nvar log = console.log;",
            "setTimeout(() => log(Task), 0);\nclass Task {}",
            "const args = [1];\nsetTimeout(() => f(...args), 0);\nargs.push(2);",
            "setTimeout(() => f(...[1, ...rest]), 0);",
        ],
    )
    def test_no_finding(self, lint, code: str) -> None:
        assert lint(PREFER_TIMER_ARGS, code).diagnostics == []


class TestBind:
    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("setTimeout(fn.bind(null, a, b), 50);", "setTimeout(fn, 50, a, b);"),
            ("setTimeout(fn.bind(undefined), 50);", "setTimeout(fn, 50);"),
            ("globalThis.setInterval(api.poll.bind(null, id), ms);", "globalThis.setInterval(api.poll, ms, id);"),
        ],
    )
    def test_rewrites(self, fix, code: str, expected: str) -> None:
        assert fix(PREFER_TIMER_ARGS, code) == expected

    @pytest.mark.parametrize(
        "code",
        [
            "setTimeout(fn.bind(obj, 1), 10);",
            "setTimeout(fn.bind(null, next()), 10);",
            "setTimeout(fn.bind(null, 1), delay());",
            "setTimeout(fn.bind(), 10);",
        ],
    )
    def test_no_finding(self, lint, code: str) -> None:
        assert lint(PREFER_TIMER_ARGS, code).diagnostics == []
