"""Tests for prefer-url-canparse."""

import pytest

from idiomfix.core.matching import FixMode
from idiomfix.rules import PREFER_URL_CANPARSE

RETURN_FORM = """function isValid(u) {
  try {
    new URL(u);
    return true;
  } catch {
    return false;
  }
}"""


def test_offers_a_suggestion_only() -> None:
    assert PREFER_URL_CANPARSE.mode == FixMode.SUGGESTION


def test_return_form(lint, fix) -> None:
    report = lint(PREFER_URL_CANPARSE, RETURN_FORM)
    assert len(report.diagnostics) == 1
    diagnostic = report.diagnostics[0]
    assert diagnostic.fix is None
    assert [s.message_key for s in diagnostic.suggestions] == ["replaceWithCanParse"]
    assert diagnostic.suggestions[0].fix.text == "return URL.canParse(u);"
    assert fix(PREFER_URL_CANPARSE, RETURN_FORM) == RETURN_FORM


def test_guarded_block(lint) -> None:
    code = "try {\n  new URL(u, base);\n  go(u);\n} catch {}"
    suggestion = lint(PREFER_URL_CANPARSE, code).diagnostics[0].suggestions[0]
    assert suggestion.fix.text == "if (URL.canParse(u, base)) {\ngo(u);\n}"
    assert (suggestion.fix.start, suggestion.fix.end) == (0, len(code))


def test_guarded_block_with_fallback(lint) -> None:
    code = "try { new URL(u); go(u); } catch (error) { fail(); }"
    suggestion = lint(PREFER_URL_CANPARSE, code).diagnostics[0].suggestions[0]
    assert suggestion.fix.text == "if (URL.canParse(u)) {\ngo(u);\n} else {\nfail();\n}"


@pytest.mark.parametrize(
    "code",
    [
        "try { new URL(u); go(u); } catch (error) { log(error); }",
        "try { new URL(u); go(u); } catch {} finally { done(); }",
        "try { new URL(u); } catch {}",
        "try { go(u); new URL(u); } catch {}",
        "try { new URL(); go(); } catch {}",
        "const URL = Fake;\ntry { new URL(u); go(u); } catch {}",
    ],
)
def test_no_finding(lint, code: str) -> None:
    assert lint(PREFER_URL_CANPARSE, code).diagnostics == []
