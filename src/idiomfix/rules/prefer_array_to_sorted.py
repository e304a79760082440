from __future__ import annotations

from idiomfix.core.fixes import render_arguments
from idiomfix.core.matching import Idiom, Match, MatchContext
from idiomfix.core.safety import method_name
from idiomfix.core.syntax import NodeKind, SyntaxNode
from idiomfix.rules.copies import copied_array


def match_copy_then_sort(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``arr.slice().sort(compare)`` and ``[...arr].sort(compare)``"""
    if method_name(node) != "sort" or len(node.items("arguments")) > 1 or node.optional:
        return None
    callee = node.child("callee")
    array = copied_array(callee.child("object") if callee is not None else None, context)
    if array is None:
        return None
    return Match(
        node=node,
        message_key="preferToSorted",
        captures={"array": array, "arguments": render_arguments(node, context.source)},
    )


IDIOM = Idiom(
    id="prefer-array-to-sorted",
    description="Prefer Array.prototype.toSorted() over copying and sorting arrays",
    messages={"preferToSorted": "Use ${array}.toSorted() instead of copying and sorting"},
    templates={"preferToSorted": "${array}.toSorted(${arguments})"},
    matchers={NodeKind.CALL: (match_copy_then_sort,)},
)
