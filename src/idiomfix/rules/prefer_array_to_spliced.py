"""Copy-then-splice sequences that ``toSpliced`` expresses in one call.

``[...arr].splice(...)`` evaluates to the removed elements, not to the spliced
copy, so the chained form has no ``toSpliced`` equivalent. The idiom is
instead the two-statement form::

    const copy = [...arr];
    copy.splice(1, 2);

It is reported on the ``splice`` call without a fix, since the rewrite has to
merge two statements.
"""

from __future__ import annotations

from idiomfix.core.fixes import render_arguments
from idiomfix.core.matching import FixMode, Idiom, Match, MatchContext
from idiomfix.core.safety import is_identifier, method_name
from idiomfix.core.scope import resolve_binding
from idiomfix.core.syntax import NodeKind, SyntaxNode
from idiomfix.rules.copies import copied_array


def _previous_statement(statement: SyntaxNode) -> SyntaxNode | None:
    parent = statement.parent
    if parent is None or parent.kind not in (NodeKind.BLOCK, NodeKind.PROGRAM):
        return None
    body = parent.items("body")
    for index, candidate in enumerate(body):
        if candidate is statement:
            return body[index - 1] if index > 0 else None
    return None


def match_copy_then_splice(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``const copy = [...arr]; copy.splice(start, count)``"""
    if method_name(node) != "splice" or node.optional:
        return None
    statement = node.parent
    if statement is None or statement.kind != NodeKind.EXPRESSION_STATEMENT:
        return None

    callee = node.child("callee")
    copy = callee.child("object") if callee is not None else None
    if copy is None or not is_identifier(copy):
        return None
    binding = resolve_binding(copy)
    if binding is None or len(binding.declarations) != 1:
        return None
    declarator = binding.declarations[0]
    if declarator.kind != NodeKind.VARIABLE_DECLARATOR:
        return None

    declaration = declarator.parent
    if declaration is None or len(declaration.items("declarations")) != 1:
        return None
    if _previous_statement(statement) is not declaration:
        return None

    array = copied_array(declarator.child("init"), context)
    if array is None:
        return None
    return Match(
        node=node,
        message_key="preferToSpliced",
        captures={"array": array, "arguments": render_arguments(node, context.source)},
    )


IDIOM = Idiom(
    id="prefer-array-to-spliced",
    description="Prefer Array.prototype.toSpliced() over copying and splicing arrays",
    messages={
        "preferToSpliced": "Use ${array}.toSpliced(${arguments}) instead of copying and splicing",
    },
    matchers={NodeKind.CALL: (match_copy_then_splice,)},
    mode=FixMode.NONE,
)
