"""``indexOf`` comparisons to ``includes``.

``includes`` differs from ``indexOf`` only for ``NaN``, which ``includes``
finds. The bare ``~arr.indexOf(x)`` form yields a number, so it is only
rewritten where its truthiness is all that is observed.
"""

from __future__ import annotations

from idiomfix.core.fixes import render_arguments
from idiomfix.core.matching import Idiom, Match, MatchContext
from idiomfix.core.safety import is_in_boolean_context, is_number_literal, method_name
from idiomfix.core.syntax import NodeKind, SyntaxNode
from idiomfix.core.types import Capability

_MIRRORED = {"<": ">", ">": "<", "<=": ">=", ">=": "<="}
_FOUND_AGAINST_MINUS_ONE = frozenset({"!==", "!=", ">"})
_MISSING_AGAINST_MINUS_ONE = frozenset({"===", "=="})


def _index_of_call(node: SyntaxNode | None, context: MatchContext) -> SyntaxNode | None:
    if node is None or method_name(node) != "indexOf" or node.optional:
        return None
    arguments = node.items("arguments")
    if not 1 <= len(arguments) <= 2 or any(arg is None or arg.kind == NodeKind.SPREAD for arg in arguments):
        return None
    callee = node.child("callee")
    receiver = callee.child("object") if callee is not None else None
    if receiver is None or (callee is not None and callee.optional):
        return None
    if not (
        context.types.check(receiver, Capability.ARRAY_LIKE) or context.types.check(receiver, Capability.STRING_LIKE)
    ):
        return None
    return node


def _is_minus_one(node: SyntaxNode | None) -> bool:
    return (
        node is not None
        and node.kind == NodeKind.UNARY
        and node.operator == "-"
        and is_number_literal(node.child("argument"), 1)
    )


def _match(node: SyntaxNode, call: SyntaxNode, negate: bool, context: MatchContext) -> Match | None:
    callee = call.child("callee")
    if callee is None:
        return None
    return Match(
        node=node,
        message_key="preferIncludes",
        template_key="missing" if negate else "found",
        captures={
            "array": callee.child("object") or callee,
            "arguments": render_arguments(call, context.source),
        },
    )


def match_comparison(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``arr.indexOf(x) !== -1``, ``arr.indexOf(x) >= 0`` and their mirrored and negated forms."""
    operator = node.operator or ""
    call = _index_of_call(node.child("left"), context)
    constant = node.child("right")
    if call is None:
        call = _index_of_call(node.child("right"), context)
        constant = node.child("left")
        operator = _MIRRORED.get(operator, operator)
    if call is None or constant is None:
        return None

    if _is_minus_one(constant):
        if operator in _FOUND_AGAINST_MINUS_ONE:
            return _match(node, call, False, context)
        if operator in _MISSING_AGAINST_MINUS_ONE:
            return _match(node, call, True, context)
    if is_number_literal(constant, 0):
        if operator == ">=":
            return _match(node, call, False, context)
        if operator == "<":
            return _match(node, call, True, context)
    return None


def match_bitwise_not(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``~arr.indexOf(x)`` in a boolean context and ``!~arr.indexOf(x)``."""
    if node.operator == "~":
        parent = node.parent
        if parent is not None and parent.kind == NodeKind.UNARY and parent.operator == "!":
            return None
        call = _index_of_call(node.child("argument"), context)
        if call is None or not is_in_boolean_context(node):
            return None
        return _match(node, call, False, context)

    if node.operator == "!":
        inner = node.child("argument")
        if inner is None or inner.kind != NodeKind.UNARY or inner.operator != "~":
            return None
        call = _index_of_call(inner.child("argument"), context)
        if call is None:
            return None
        return _match(node, call, True, context)
    return None


IDIOM = Idiom(
    id="prefer-includes",
    description="Prefer .includes() over indexOf() comparisons for arrays and strings",
    messages={"preferIncludes": "Use .includes() instead of indexOf() comparison"},
    templates={
        "found": "${array}.includes(${arguments})",
        "missing": "!${array}.includes(${arguments})",
    },
    matchers={NodeKind.BINARY: (match_comparison,), NodeKind.UNARY: (match_bitwise_not,)},
)
