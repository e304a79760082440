from __future__ import annotations

from idiomfix.core.matching import FixMode, Idiom, Match, MatchContext
from idiomfix.core.safety import is_global_reference
from idiomfix.core.syntax import FUNCTION_KINDS, NodeKind, SyntaxNode
from idiomfix.core.types import is_regexp_literal


def _inside_function(node: SyntaxNode) -> bool:
    return any(
        ancestor.kind in FUNCTION_KINDS or ancestor.raw_type == "method_definition" for ancestor in node.ancestors()
    )


def match_regex_literal(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``/re/`` inside a function body"""
    if not is_regexp_literal(node) or not _inside_function(node):
        return None
    return Match(node=node, message_key="preferStatic")


def match_static_constructor(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``new RegExp("re", "flags")`` with string literal arguments inside a function body"""
    if not is_global_reference(node.child("callee"), "RegExp"):
        return None
    arguments = node.items("arguments")
    if not 1 <= len(arguments) <= 2:
        return None
    if not all(arg is not None and arg.kind == NodeKind.LITERAL and arg.literal_type == "string" for arg in arguments):
        return None
    if not _inside_function(node):
        return None
    return Match(node=node, message_key="preferStatic")


IDIOM = Idiom(
    id="prefer-static-regex",
    description=(
        "Prefer defining regular expressions at module scope to avoid re-compilation on every function call"
    ),
    messages={
        "preferStatic": "Move this regular expression to module scope to avoid re-compilation on every call."
    },
    matchers={NodeKind.LITERAL: (match_regex_literal,), NodeKind.NEW: (match_static_constructor,)},
    mode=FixMode.NONE,
)
