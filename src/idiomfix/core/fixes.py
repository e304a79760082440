"""Turn matches into fixes and diagnostics.

Replacements are rendered by splicing the verbatim source of each capture into
the idiom's template; captured sub-trees are never re-serialised. A fix always
replaces exactly the span of the node the match was reported against.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from string import Template

from idiomfix.core.matching import FixMode, Idiom, Match
from idiomfix.core.syntax import NodeKind, SourceFile, Span, SyntaxNode
from idiomfix.models import Diagnostic, Fix, Position, Suggestion

logger = logging.getLogger(__name__)

# Expressions that bind at least as tightly as member access and calls.
_TIGHT_KINDS = frozenset(
    {
        NodeKind.IDENTIFIER,
        NodeKind.PRIVATE_IDENTIFIER,
        NodeKind.THIS,
        NodeKind.SUPER,
        NodeKind.LITERAL,
        NodeKind.TEMPLATE_LITERAL,
        NodeKind.TAGGED_TEMPLATE,
        NodeKind.MEMBER,
        NodeKind.CALL,
        NodeKind.ARRAY,
    }
)


def render_capture(capture: SyntaxNode | str, source: SourceFile) -> str:
    if isinstance(capture, str):
        return capture
    return source.group_text_of(capture)


def wrap_low_precedence(node: SyntaxNode, source: SourceFile) -> str:
    """Source of ``node``, parenthesised unless it already binds as tightly as a member access."""
    if node.parenthesized:
        return source.group_text_of(node)
    text = source.text_of(node)
    if node.kind in _TIGHT_KINDS:
        return text
    if node.kind == NodeKind.NEW and text.endswith(")"):
        return text
    return f"({text})"


def render_arguments(call: SyntaxNode, source: SourceFile) -> str:
    """Verbatim source of a call's argument list, without the surrounding parentheses."""
    arguments = [argument for argument in call.items("arguments") if argument is not None]
    if not arguments:
        return ""
    return source.slice(arguments[0].group_span.start, arguments[-1].group_span.end)


def render_template(template: str, captures: Mapping[str, SyntaxNode | str], source: SourceFile) -> str:
    rendered = {name: render_capture(capture, source) for name, capture in captures.items()}
    return Template(template).substitute(rendered)


def format_message(idiom: Idiom, message_key: str, match: Match, source: SourceFile) -> str:
    values = {name: render_capture(capture, source) for name, capture in match.captures.items()}
    values.update(match.data)
    return Template(idiom.messages[message_key]).safe_substitute(values)


def synthesize(match: Match, idiom: Idiom, source: SourceFile) -> Fix | None:
    template_key = match.template_key or match.message_key
    template = idiom.templates.get(template_key)
    if template is None:
        return None
    span = match.node.span
    return Fix(start=span.start, end=span.end, text=render_template(template, match.captures, source))


def report(match: Match, idiom: Idiom, source: SourceFile, fix: Fix | None = None) -> Diagnostic:
    span = match.node.span
    diagnostic = Diagnostic(
        rule_id=idiom.id,
        message_key=match.message_key,
        message=format_message(idiom, match.message_key, match, source),
        start=_start_position(span),
        end=_end_position(span),
    )
    if fix is None or idiom.mode == FixMode.NONE:
        return diagnostic
    if idiom.mode == FixMode.SUGGESTION:
        suggestion_key = idiom.suggestion_message or match.message_key
        suggestion = Suggestion(
            message_key=suggestion_key,
            message=format_message(idiom, suggestion_key, match, source),
            fix=fix,
        )
        return diagnostic.model_copy(update={"suggestions": [suggestion]})
    return diagnostic.model_copy(update={"fix": fix})


def apply_fixes(text: str, diagnostics: Iterable[Diagnostic]) -> tuple[str, int]:
    """Apply the automatic fixes that do not overlap an earlier one. Returns the new text and the count applied."""
    fixes = sorted(
        (diagnostic.fix for diagnostic in diagnostics if diagnostic.fix is not None),
        key=lambda fix: (fix.start, fix.end),
    )
    parts: list[str] = []
    cursor = 0
    applied = 0
    for fix in fixes:
        if fix.start < cursor:
            logger.debug("Skipping overlapping fix at offset %d", fix.start)
            continue
        parts.append(text[cursor : fix.start])
        parts.append(fix.text)
        cursor = fix.end
        applied += 1
    parts.append(text[cursor:])
    return "".join(parts), applied


def _start_position(span: Span) -> Position:
    return Position(line=span.start_line, column=span.start_column, offset=span.start)


def _end_position(span: Span) -> Position:
    return Position(line=span.end_line, column=span.end_column, offset=span.end)
