from __future__ import annotations

from idiomfix.core.matching import Idiom, Match, MatchContext
from idiomfix.core.safety import is_global_member, is_global_reference, is_identifier
from idiomfix.core.syntax import NodeKind, SyntaxNode

_GLOBAL_OBJECTS = ("window", "globalThis")


def _date_constructor(node: SyntaxNode | None) -> SyntaxNode | None:
    """The ``Date`` callee of an argument-less ``new Date()``, if ``node`` is one."""
    if node is None or node.kind != NodeKind.NEW or node.items("arguments"):
        return None
    callee = node.child("callee")
    if is_global_reference(callee, "Date"):
        return callee
    if any(is_global_member(callee, name, "Date") for name in _GLOBAL_OBJECTS):
        return callee
    return None


def match_get_time(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``new Date().getTime()``"""
    callee = node.child("callee")
    if node.optional or node.items("arguments") or callee is None or callee.kind != NodeKind.MEMBER:
        return None
    if callee.computed or callee.optional or not is_identifier(callee.child("property"), "getTime"):
        return None
    date = _date_constructor(callee.child("object"))
    if date is None:
        return None
    return Match(node=node, message_key="preferDateNow", captures={"date": context.text(date)})


def match_unary_plus(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``+new Date()``"""
    if node.operator != "+":
        return None
    date = _date_constructor(node.child("argument"))
    if date is None:
        return None
    return Match(node=node, message_key="preferDateNow", captures={"date": context.text(date)})


IDIOM = Idiom(
    id="prefer-date-now",
    description="Prefer Date.now() over new Date().getTime() and +new Date()",
    messages={"preferDateNow": "Use Date.now() to avoid allocating a new Date object."},
    templates={"preferDateNow": "${date}.now()"},
    matchers={NodeKind.CALL: (match_get_time,), NodeKind.UNARY: (match_unary_plus,)},
)
