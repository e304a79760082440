from pydantic import BaseModel


class Position(BaseModel):
    line: int
    column: int
    offset: int


class Fix(BaseModel):
    # Closed-open character range over the original source.
    start: int
    end: int
    text: str


class Suggestion(BaseModel):
    message_key: str
    message: str
    fix: Fix


class Diagnostic(BaseModel):
    rule_id: str
    message_key: str
    message: str
    start: Position
    end: Position
    fix: Fix | None = None
    suggestions: list[Suggestion] = []


class FileReport(BaseModel):
    path: str | None = None
    language: str
    diagnostics: list[Diagnostic] = []
    fixed_text: str | None = None

    @property
    def fixable_count(self) -> int:
        return sum(1 for diagnostic in self.diagnostics if diagnostic.fix is not None)
