"""Existence checks on ``find`` to ``some``.

``find`` returns the matching element, so its truthiness (or comparison with
``undefined``) differs from ``some`` when the matching element is itself falsy
or ``undefined``. The rewrite is therefore offered as a suggestion rather than
applied automatically.
"""

from __future__ import annotations

from idiomfix.core.fixes import render_arguments
from idiomfix.core.matching import FixMode, Idiom, Match, MatchContext
from idiomfix.core.safety import NullishKind, is_in_boolean_context, method_name, nullish_kind
from idiomfix.core.syntax import NodeKind, SyntaxNode
from idiomfix.core.types import Capability


def _find_call(node: SyntaxNode | None, context: MatchContext) -> SyntaxNode | None:
    if node is None or method_name(node) != "find" or node.optional:
        return None
    callee = node.child("callee")
    receiver = callee.child("object") if callee is not None else None
    if receiver is None or (callee is not None and callee.optional):
        return None
    arguments = node.items("arguments")
    if not arguments or any(arg is None or arg.kind == NodeKind.SPREAD for arg in arguments):
        return None
    if not context.types.check(receiver, Capability.ARRAY_LIKE):
        return None
    return node


def _match(node: SyntaxNode, call: SyntaxNode, negate: bool, context: MatchContext) -> Match | None:
    callee = call.child("callee")
    if callee is None:
        return None
    return Match(
        node=node,
        message_key="preferArraySome",
        template_key="missing" if negate else "found",
        captures={
            "array": callee.child("object") or callee,
            "arguments": render_arguments(call, context.source),
        },
    )


def match_undefined_comparison(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``arr.find(fn) !== undefined`` and ``arr.find(fn) === undefined``, either way round."""
    if node.operator not in ("===", "!=="):
        return None
    left = node.child("left")
    right = node.child("right")
    call = _find_call(left, context)
    other = right
    if call is None:
        call = _find_call(right, context)
        other = left
    if call is None or other is None or nullish_kind(other) != NullishKind.UNDEFINED:
        return None
    return _match(node, call, node.operator == "===", context)


def match_negation(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``!arr.find(fn)`` and ``!!arr.find(fn)``"""
    if node.operator != "!":
        return None
    parent = node.parent
    if parent is not None and parent.kind == NodeKind.UNARY and parent.operator == "!":
        return None
    argument = node.child("argument")
    if argument is not None and argument.kind == NodeKind.UNARY and argument.operator == "!":
        call = _find_call(argument.child("argument"), context)
        return _match(node, call, False, context) if call is not None else None
    call = _find_call(argument, context)
    return _match(node, call, True, context) if call is not None else None


def match_condition(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``if (arr.find(fn))``"""
    parent = node.parent
    if parent is not None and parent.kind in (NodeKind.UNARY, NodeKind.BINARY):
        return None
    if _find_call(node, context) is None or not is_in_boolean_context(node):
        return None
    return _match(node, node, False, context)


IDIOM = Idiom(
    id="prefer-array-some",
    description="Prefer Array.some() over Array.find() when checking for element existence",
    messages={
        "preferArraySome": "Use Array.some() instead of Array.find() when checking for element existence",
        "replaceWithSome": "Replace with Array.some() (differs if the matching element is falsy)",
    },
    templates={
        "found": "${array}.some(${arguments})",
        "missing": "!${array}.some(${arguments})",
    },
    matchers={
        NodeKind.BINARY: (match_undefined_comparison,),
        NodeKind.UNARY: (match_negation,),
        NodeKind.CALL: (match_condition,),
    },
    mode=FixMode.SUGGESTION,
    suggestion_message="replaceWithSome",
)
