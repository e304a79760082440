"""Host that runs the enabled idioms over source files and applies their fixes until the text is stable."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from idiomfix.core.fixes import apply_fixes, report, synthesize
from idiomfix.core.matching import DispatchTable, FixMode, Idiom, MatchContext
from idiomfix.core.ports.type_service import TypeService
from idiomfix.core.syntax import SourceFile, parse_file, parse_source
from idiomfix.core.types import TypeOracle
from idiomfix.models import Diagnostic, FileReport

logger = logging.getLogger(__name__)

# Same limit as ESLint's autofix loop.
MAX_FIX_PASSES = 10


class ConfigurationError(ValueError):
    """Raised when the set of enabled idioms cannot run as configured."""


class TypeInformationRequiredError(ConfigurationError):
    def __init__(self, idiom_ids: Sequence[str]) -> None:
        self.idiom_ids = tuple(idiom_ids)
        super().__init__(
            f"Rule(s) {', '.join(self.idiom_ids)} require type information, but no type service "
            "with type information is configured. Enable type information or disable these rules."
        )


class Linter:
    """Runs a fixed, ordered set of idioms over source files.

    Configuration is validated once, here; linting a file never raises for
    configuration reasons. Files are independent: nothing computed for one file
    is visible while linting another.
    """

    def __init__(self, idioms: Sequence[Idiom], type_service: TypeService | None = None) -> None:
        self._idioms = tuple(idioms)
        self._types = TypeOracle(type_service)

        ids = [idiom.id for idiom in self._idioms]
        duplicates = sorted({idiom_id for idiom_id in ids if ids.count(idiom_id) > 1})
        if duplicates:
            raise ConfigurationError(f"Rule(s) enabled more than once: {', '.join(duplicates)}")

        needs_types = [idiom.id for idiom in self._idioms if idiom.requires_types]
        if needs_types and not self._types.has_type_information:
            raise TypeInformationRequiredError(needs_types)

        self._table = DispatchTable(self._idioms)
        logger.info("Enabled %d rule(s): %s", len(self._idioms), ", ".join(ids))

    @property
    def idioms(self) -> tuple[Idiom, ...]:
        return self._idioms

    def lint(self, source: SourceFile) -> FileReport:
        context = MatchContext(source=source, types=self._types)
        diagnostics: list[Diagnostic] = []
        for node in source.walk():
            for idiom, match in self._table.dispatch(node, context):
                fix = synthesize(match, idiom, source) if idiom.mode != FixMode.NONE else None
                diagnostics.append(report(match, idiom, source, fix))

        diagnostics.sort(key=lambda diagnostic: diagnostic.start.offset)
        logger.debug("%s: %d diagnostic(s)", source.path or "<source>", len(diagnostics))
        return FileReport(
            path=str(source.path) if source.path is not None else None,
            language=source.language,
            diagnostics=diagnostics,
        )

    def lint_text(self, text: str, language: str, path: Path | None = None) -> FileReport:
        return self.lint(parse_source(text, language, path))

    def lint_file(self, path: str | Path, language: str | None = None) -> FileReport:
        return self.lint(parse_file(path, language))

    def fix_text(self, text: str, language: str, path: Path | None = None) -> FileReport:
        """Lint and apply automatic fixes until nothing changes, for at most ``MAX_FIX_PASSES`` passes.

        The returned report describes the fixed text, which is stored in ``fixed_text``.
        """
        current = text
        file_report = self.lint_text(current, language, path)
        for _ in range(MAX_FIX_PASSES):
            fixed, applied = apply_fixes(current, file_report.diagnostics)
            if applied == 0:
                break
            logger.debug("Applied %d fix(es) to %s", applied, path or "<source>")
            current = fixed
            file_report = self.lint_text(current, language, path)
        return file_report.model_copy(update={"fixed_text": current})

    def fix_file(self, path: str | Path, language: str | None = None, write: bool = True) -> FileReport:
        source = parse_file(path, language)
        file_report = self.fix_text(source.text, source.language, source.path)
        if write and file_report.fixed_text is not None and file_report.fixed_text != source.text:
            Path(path).write_text(file_report.fixed_text, encoding="utf-8")
            logger.info("Fixed %s", path)
        return file_report
