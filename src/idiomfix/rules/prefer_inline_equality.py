"""``[a, b].includes(x)`` to ``a === x || b === x``.

``includes`` compares with SameValueZero, which only differs from ``===`` for
``NaN``. Plain elements are therefore limited to literals and to constants
whose single initializer is a literal, none of which can be ``NaN``. Spread
elements are only expanded when the type service knows them to be an array
or a ``Set``.
"""

from __future__ import annotations

from idiomfix.core.fixes import wrap_low_precedence
from idiomfix.core.matching import Idiom, Match, MatchContext
from idiomfix.core.safety import (
    NullishKind,
    is_identifier,
    is_number_literal,
    is_pure_to_repeat,
    method_name,
    nullish_kind,
)
from idiomfix.core.scope import resolve_single_initializer
from idiomfix.core.syntax import NodeKind, SyntaxNode
from idiomfix.core.types import Capability

MAX_ELEMENTS = 6

# Positions where an unparenthesised ``a === x || b === x`` would bind differently.
_WRAPPING_PARENTS = frozenset(
    {
        NodeKind.CALL,
        NodeKind.NEW,
        NodeKind.MEMBER,
        NodeKind.CONDITIONAL,
        NodeKind.BINARY,
        NodeKind.LOGICAL,
        NodeKind.UNARY,
        NodeKind.TAGGED_TEMPLATE,
        NodeKind.SPREAD,
        NodeKind.AWAIT,
    }
)


def _is_non_nan_literal(node: SyntaxNode | None) -> bool:
    if node is None:
        return False
    if node.kind == NodeKind.LITERAL:
        return node.literal_type != "regex"
    if node.kind == NodeKind.UNARY and node.operator == "-":
        return is_number_literal(node.child("argument"))
    return nullish_kind(node) == NullishKind.UNDEFINED


def _is_simple_element(node: SyntaxNode) -> bool:
    if _is_non_nan_literal(node):
        return True
    if is_identifier(node) and not is_identifier(node, "NaN"):
        return _is_non_nan_literal(resolve_single_initializer(node))
    return False


def _includes_call(node: SyntaxNode | None) -> SyntaxNode | None:
    if node is None or method_name(node) != "includes" or node.optional:
        return None
    callee = node.child("callee")
    if callee is None or callee.optional:
        return None
    array = callee.child("object")
    if array is None or array.kind != NodeKind.ARRAY:
        return None
    arguments = node.items("arguments")
    if len(arguments) != 1 or arguments[0] is None or arguments[0].kind == NodeKind.SPREAD:
        return None
    return node


def _comparisons(call: SyntaxNode, negated: bool, context: MatchContext) -> str | None:
    callee = call.child("callee")
    array = callee.child("object") if callee is not None else None
    value = call.items("arguments")[0]
    if array is None or value is None or not is_pure_to_repeat(value):
        return None
    elements = array.items("elements")
    if not 1 <= len(elements) <= MAX_ELEMENTS:
        return None

    value_text = wrap_low_precedence(value, context.source)
    operator = "!==" if negated else "==="
    prefix = "!" if negated else ""
    parts: list[str] = []
    for element in elements:
        if element is None:
            return None
        if element.kind == NodeKind.SPREAD:
            spread = element.child("argument")
            if spread is None or not is_pure_to_repeat(spread):
                return None
            if context.types.check(spread, Capability.SET_LIKE):
                method = "has"
            elif context.types.check(spread, Capability.ARRAY_LIKE, default=False):
                method = "includes"
            else:
                return None
            parts.append(f"{prefix}{wrap_low_precedence(spread, context.source)}.{method}({value_text})")
        elif _is_simple_element(element):
            parts.append(f"{context.source.group_text_of(element)} {operator} {value_text}")
        else:
            return None
    return (" && " if negated else " || ").join(parts)


def _needs_parentheses(node: SyntaxNode) -> bool:
    parent = node.parent
    return not node.parenthesized and parent is not None and parent.kind in _WRAPPING_PARENTS


def _match(node: SyntaxNode, call: SyntaxNode, negated: bool, context: MatchContext) -> Match | None:
    replacement = _comparisons(call, negated, context)
    if replacement is None:
        return None
    return Match(
        node=node,
        message_key="preferEquality",
        template_key="wrapped" if _needs_parentheses(node) else "preferEquality",
        captures={"comparisons": replacement},
    )


def match_array_includes(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``[a, b].includes(x)``"""
    parent = node.parent
    if parent is not None and parent.kind == NodeKind.UNARY and parent.operator == "!":
        return None
    call = _includes_call(node)
    return _match(node, call, False, context) if call is not None else None


def match_negated_includes(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``![a, b].includes(x)``"""
    if node.operator != "!":
        return None
    call = _includes_call(node.child("argument"))
    return _match(node, call, True, context) if call is not None else None


IDIOM = Idiom(
    id="prefer-inline-equality",
    description="Prefer inline equality checks over temporary object creation for simple comparisons",
    messages={
        "preferEquality": (
            "Avoid creating a temporary array just to call `.includes()`. Use equality checks instead."
        )
    },
    templates={"preferEquality": "${comparisons}", "wrapped": "(${comparisons})"},
    matchers={NodeKind.CALL: (match_array_includes,), NodeKind.UNARY: (match_negated_includes,)},
)
