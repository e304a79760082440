"""Unit tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from idiomfix.models import Diagnostic, FileReport, Fix, Position, Suggestion


def _position() -> Position:
    return Position(line=1, column=1, offset=0)


def _diagnostic(fix: Fix | None = None, suggestions: list[Suggestion] | None = None) -> Diagnostic:
    return Diagnostic(
        rule_id="prefer-array-at",
        message_key="preferAt",
        message="Use .at(-1)",
        start=_position(),
        end=_position(),
        fix=fix,
        suggestions=suggestions or [],
    )


class TestPositionModel:
    """Tests for the Position model."""

    def test_creates_position(self) -> None:
        pos = Position(line=3, column=7, offset=42)
        assert (pos.line, pos.column, pos.offset) == (3, 7, 42)

    def test_position_requires_offset(self) -> None:
        """Test that Position requires the offset field."""
        with pytest.raises(ValidationError):
            Position(line=1, column=1)  # type: ignore[call-arg]


class TestDiagnosticModel:
    def test_defaults(self) -> None:
        diagnostic = _diagnostic()
        assert diagnostic.fix is None
        assert diagnostic.suggestions == []

    def test_serializes_fix(self) -> None:
        data = _diagnostic(Fix(start=0, end=3, text="a.at(-1)")).model_dump()
        assert data["fix"] == {"start": 0, "end": 3, "text": "a.at(-1)"}

    def test_suggestion_requires_fix(self) -> None:
        with pytest.raises(ValidationError):
            Suggestion(message_key="k", message="m")  # type: ignore[call-arg]


class TestFileReportModel:
    """Tests for the FileReport model."""

    def test_empty_report(self) -> None:
        report = FileReport(language="javascript")
        assert report.diagnostics == []
        assert report.fixed_text is None
        assert report.fixable_count == 0

    def test_fixable_count_ignores_suggestions(self) -> None:
        fix = Fix(start=0, end=1, text="x")
        report = FileReport(
            language="typescript",
            diagnostics=[
                _diagnostic(fix),
                _diagnostic(suggestions=[Suggestion(message_key="k", message="m", fix=fix)]),
                _diagnostic(),
            ],
        )
        assert report.fixable_count == 1

    def test_json_round_trip(self) -> None:
        report = FileReport(path="a.js", language="javascript", diagnostics=[_diagnostic()])
        assert FileReport.model_validate_json(report.model_dump_json()) == report
