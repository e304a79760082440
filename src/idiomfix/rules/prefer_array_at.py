from __future__ import annotations

from idiomfix.core.matching import Idiom, Match, MatchContext
from idiomfix.core.safety import is_assignment_target, is_number_literal, is_pure_to_repeat, same_text
from idiomfix.core.syntax import NodeKind, SyntaxNode
from idiomfix.core.types import Capability


def match_last_index(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``arr[arr.length - 1]``"""
    if not node.computed or node.optional or is_assignment_target(node):
        return None

    array = node.child("object")
    index = node.child("property")
    if array is None or index is None:
        return None
    if index.kind != NodeKind.BINARY or index.operator != "-" or not is_number_literal(index.child("right"), 1):
        return None

    length = index.child("left")
    if length is None or length.kind != NodeKind.MEMBER or length.computed or length.optional:
        return None
    length_property = length.child("property")
    length_object = length.child("object")
    if length_property is None or length_property.name != "length" or length_object is None:
        return None

    if not same_text(context.source, array, length_object):
        return None
    # The receiver is evaluated twice in the original and once in the rewrite.
    if not is_pure_to_repeat(array):
        return None
    if not (context.types.check(array, Capability.ARRAY_LIKE) or context.types.check(array, Capability.STRING_LIKE)):
        return None

    return Match(node=node, message_key="preferAt", captures={"array": array})


IDIOM = Idiom(
    id="prefer-array-at",
    description="Prefer Array.prototype.at() over length-based indexing",
    messages={"preferAt": "Use .at(-1) instead of [${array}.length - 1]"},
    templates={"preferAt": "${array}.at(-1)"},
    matchers={NodeKind.MEMBER: (match_last_index,)},
)
