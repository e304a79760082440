from __future__ import annotations

from idiomfix.core.matching import Idiom, Match, MatchContext
from idiomfix.core.safety import method_name
from idiomfix.core.syntax import NodeKind, SyntaxNode
from idiomfix.rules.copies import copied_array


def match_copy_then_reverse(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``arr.slice().reverse()``, ``arr.concat().reverse()`` and ``[...arr].reverse()``"""
    if method_name(node) != "reverse" or node.items("arguments") or node.optional:
        return None
    callee = node.child("callee")
    array = copied_array(callee.child("object") if callee is not None else None, context)
    if array is None:
        return None
    return Match(node=node, message_key="preferToReversed", captures={"array": array})


IDIOM = Idiom(
    id="prefer-array-to-reversed",
    description="Prefer Array.prototype.toReversed() over copying and reversing arrays",
    messages={"preferToReversed": "Use ${array}.toReversed() instead of copying and reversing"},
    templates={"preferToReversed": "${array}.toReversed()"},
    matchers={NodeKind.CALL: (match_copy_then_reverse,)},
)
