"""``indexOf(x) === 0`` on values of a known type.

For strings the comparison becomes ``startsWith``. For arrays, only index ``0``
is rewritten to direct access: ``arr.indexOf(x) === n`` also requires that
``x`` does not occur before ``n``, which ``arr[n] === x`` does not check. The
searched value must also be a literal, so it cannot be ``undefined``.
"""

from __future__ import annotations

from idiomfix.core.fixes import wrap_low_precedence
from idiomfix.core.matching import Idiom, Match, MatchContext
from idiomfix.core.safety import is_number_literal, method_name
from idiomfix.core.syntax import NodeKind, SyntaxNode
from idiomfix.core.types import Capability


def _index_of_operands(node: SyntaxNode) -> tuple[SyntaxNode, SyntaxNode] | None:
    left = node.child("left")
    right = node.child("right")
    if left is None or right is None:
        return None
    if is_number_literal(right, 0) and method_name(left) == "indexOf":
        return left, right
    if is_number_literal(left, 0) and method_name(right) == "indexOf":
        return right, left
    return None


def match_index_of_equality(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``value.indexOf(x) === 0``"""
    if node.operator not in ("===", "=="):
        return None
    operands = _index_of_operands(node)
    if operands is None:
        return None
    call = operands[0]
    arguments = call.items("arguments")
    callee = call.child("callee")
    if call.optional or callee is None or callee.optional or len(arguments) != 1:
        return None
    receiver = callee.child("object")
    search = arguments[0]
    if receiver is None or search is None or search.kind == NodeKind.SPREAD:
        return None

    if context.types.check(receiver, Capability.STRING_LIKE):
        # startsWith throws for a RegExp argument where indexOf converts it to a string.
        if context.types.check(search, Capability.REGEXP):
            return None
        return Match(node=node, message_key="preferStartsWith", captures={"object": receiver, "item": search})
    # An empty array has no index 0, yet `arr[0] === undefined` holds for it.
    if search.kind in (NodeKind.LITERAL, NodeKind.TEMPLATE_LITERAL) and context.types.check(
        receiver, Capability.ARRAY_LIKE, default=False
    ):
        return Match(
            node=node,
            message_key="preferDirectAccess",
            captures={"object": receiver, "item": wrap_low_precedence(search, context.source), "index": "0"},
        )
    return None


IDIOM = Idiom(
    id="no-indexof-equality",
    description="Prefer optimized alternatives to `indexOf()` equality checks",
    messages={
        "preferDirectAccess": (
            "Use direct array access `${object}[${index}] === ${item}` instead of `indexOf() === ${index}`"
        ),
        "preferStartsWith": "Use `.startsWith()` instead of `indexOf() === 0` for strings",
    },
    templates={
        "preferDirectAccess": "${object}[${index}] === ${item}",
        "preferStartsWith": "${object}.startsWith(${item})",
    },
    matchers={NodeKind.BINARY: (match_index_of_equality,)},
    requires_types=True,
)
