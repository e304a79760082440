from __future__ import annotations

from idiomfix.core.matching import Idiom, Match, MatchContext
from idiomfix.core.safety import is_global_member
from idiomfix.core.syntax import NodeKind, SyntaxNode


def _needs_outer_parentheses(node: SyntaxNode) -> bool:
    # ``**`` binds looser than member access and calls, cannot follow a unary
    # operator, and is right-associative.
    if node.parenthesized:
        return False
    parent = node.parent
    if parent is None:
        return False
    if parent.kind in (NodeKind.UNARY, NodeKind.AWAIT):
        return True
    if parent.kind == NodeKind.MEMBER:
        return parent.child("object") is node
    if parent.kind in (NodeKind.CALL, NodeKind.NEW):
        return parent.child("callee") is node
    if parent.kind == NodeKind.TAGGED_TEMPLATE:
        return parent.child("tag") is node
    if parent.kind == NodeKind.BINARY and parent.operator == "**":
        return parent.child("left") is node
    return False


def match_math_pow(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``Math.pow(base, exponent)``"""
    if node.optional or not is_global_member(node.child("callee"), "Math", "pow"):
        return None
    arguments = node.items("arguments")
    if len(arguments) != 2 or any(arg is None or arg.kind == NodeKind.SPREAD for arg in arguments):
        return None
    base, exponent = arguments
    if base is None or exponent is None:
        return None
    return Match(
        node=node,
        message_key="preferExponentiation",
        template_key="wrapped" if _needs_outer_parentheses(node) else "preferExponentiation",
        captures={"base": context.text(base), "exponent": context.text(exponent)},
    )


IDIOM = Idiom(
    id="prefer-exponentiation-operator",
    description="Prefer the exponentiation operator ** over Math.pow()",
    messages={"preferExponentiation": "Use the ** operator instead of Math.pow()"},
    templates={
        "preferExponentiation": "(${base}) ** (${exponent})",
        "wrapped": "((${base}) ** (${exponent}))",
    },
    matchers={NodeKind.CALL: (match_math_pow,)},
)
