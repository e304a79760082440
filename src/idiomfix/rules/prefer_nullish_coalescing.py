"""Null-check ternaries and assignments to ``??`` and ``??=``.

A test only counts as a nullish check when it is true for exactly ``null`` and
``undefined``: a loose comparison against any nullish spelling, or a pair of
strict comparisons against one ``null`` and one ``undefined`` spelling. A lone
strict comparison against ``undefined`` lets ``null`` through and is not one.
"""

from __future__ import annotations

from dataclasses import dataclass

from idiomfix.core.matching import Idiom, Match, MatchContext
from idiomfix.core.safety import NullishKind, is_pure_to_repeat, nullish_kind, same_text
from idiomfix.core.syntax import NodeKind, SourceFile, SyntaxNode

# Operand kinds that can sit next to ``??`` without parentheses.
_COALESCE_OPERAND_KINDS = frozenset(
    {
        NodeKind.IDENTIFIER,
        NodeKind.THIS,
        NodeKind.LITERAL,
        NodeKind.TEMPLATE_LITERAL,
        NodeKind.TAGGED_TEMPLATE,
        NodeKind.MEMBER,
        NodeKind.CALL,
        NodeKind.NEW,
        NodeKind.ARRAY,
        NodeKind.OBJECT,
        NodeKind.UNARY,
        NodeKind.UPDATE,
        NodeKind.AWAIT,
        NodeKind.BINARY,
    }
)


@dataclass(frozen=True)
class _NullishCheck:
    value: SyntaxNode
    # True when the test holds for nullish values, False when it holds for the rest.
    is_nullish: bool


def _compared_value(comparison: SyntaxNode | None) -> tuple[SyntaxNode, NullishKind] | None:
    if comparison is None or comparison.kind != NodeKind.BINARY:
        return None
    left = comparison.child("left")
    right = comparison.child("right")
    if left is None or right is None:
        return None
    right_kind = nullish_kind(right)
    if right_kind != NullishKind.NONE and nullish_kind(left) == NullishKind.NONE:
        return left, right_kind
    left_kind = nullish_kind(left)
    if left_kind != NullishKind.NONE and right_kind == NullishKind.NONE:
        return right, left_kind
    return None


def nullish_check(test: SyntaxNode, source: SourceFile) -> _NullishCheck | None:
    if test.kind == NodeKind.BINARY and test.operator in ("==", "!="):
        compared = _compared_value(test)
        if compared is None:
            return None
        return _NullishCheck(value=compared[0], is_nullish=test.operator == "==")

    if test.kind != NodeKind.LOGICAL or test.operator not in ("&&", "||"):
        return None
    expected = "===" if test.operator == "||" else "!=="
    left = test.child("left")
    right = test.child("right")
    if left is None or right is None or left.operator != expected or right.operator != expected:
        return None
    first = _compared_value(left)
    second = _compared_value(right)
    if first is None or second is None or not same_text(source, first[0], second[0]):
        return None
    if {first[1], second[1]} != {NullishKind.NULL, NullishKind.UNDEFINED}:
        return None
    return _NullishCheck(value=first[0], is_nullish=test.operator == "||")


def _operand(node: SyntaxNode, source: SourceFile) -> str:
    if node.parenthesized:
        return source.group_text_of(node)
    text = source.text_of(node)
    return text if node.kind in _COALESCE_OPERAND_KINDS else f"({text})"


def match_conditional(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``v != null ? v : d`` and ``v === null || v === undefined ? d : v``"""
    test = node.child("test")
    consequent = node.child("consequent")
    alternate = node.child("alternate")
    if test is None or consequent is None or alternate is None:
        return None
    check = nullish_check(test, context.source)
    if check is None:
        return None

    kept, fallback = (alternate, consequent) if check.is_nullish else (consequent, alternate)
    if not same_text(context.source, check.value, kept):
        return None
    # The value is evaluated twice in the original and once in the rewrite.
    if not is_pure_to_repeat(check.value):
        return None

    return Match(
        node=node,
        message_key="preferNullishCoalescing",
        captures={
            "value": _operand(check.value, context.source),
            "fallback": _operand(fallback, context.source),
        },
    )


def _single_assignment(statement: SyntaxNode | None) -> SyntaxNode | None:
    if statement is not None and statement.kind == NodeKind.BLOCK:
        body = statement.items("body")
        statement = body[0] if len(body) == 1 else None
    if statement is None or statement.kind != NodeKind.EXPRESSION_STATEMENT:
        return None
    expression = statement.child("expression")
    if expression is None or expression.kind != NodeKind.ASSIGNMENT or expression.operator != "=":
        return None
    return expression


def match_if_assignment(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``if (v == null) v = d;``"""
    if node.child("alternate") is not None:
        return None
    test = node.child("test")
    assignment = _single_assignment(node.child("consequent"))
    if test is None or assignment is None:
        return None

    target = assignment.child("left")
    value = assignment.child("right")
    if target is None or value is None or target.kind not in (NodeKind.IDENTIFIER, NodeKind.MEMBER):
        return None
    check = nullish_check(test, context.source)
    if check is None or not check.is_nullish or not same_text(context.source, check.value, target):
        return None
    if not is_pure_to_repeat(target):
        return None

    return Match(
        node=node,
        message_key="preferNullishCoalescingAssignment",
        captures={"target": context.text(target), "value": value},
    )


IDIOM = Idiom(
    id="prefer-nullish-coalescing",
    description="Prefer nullish coalescing operator (?? and ??=) over verbose null checks",
    messages={
        "preferNullishCoalescing": "Use nullish coalescing operator (??) instead of verbose null check",
        "preferNullishCoalescingAssignment": "Use nullish coalescing assignment (??=) instead of verbose null check",
    },
    templates={
        "preferNullishCoalescing": "${value} ?? ${fallback}",
        "preferNullishCoalescingAssignment": "${target} ??= ${value};",
    },
    matchers={NodeKind.CONDITIONAL: (match_conditional,), NodeKind.IF: (match_if_assignment,)},
)
