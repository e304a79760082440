from __future__ import annotations

from idiomfix.core.matching import Idiom, Match, MatchContext
from idiomfix.core.safety import can_use_global, method_name
from idiomfix.core.syntax import FUNCTION_KINDS, NodeKind, SyntaxNode


def _mapper_ignores_array(mapper: SyntaxNode) -> bool:
    # Array.from passes (value, index); map also passes the intermediate array.
    if mapper.kind not in FUNCTION_KINDS:
        return mapper.kind != NodeKind.SPREAD
    params = mapper.items("params")
    if len(params) > 2:
        return False
    return all(param is not None and param.raw_type != "rest_pattern" for param in params)


def match_spread_map(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``[...iterable].map(mapper)``"""
    if method_name(node) != "map" or node.optional:
        return None
    callee = node.child("callee")
    arguments = node.items("arguments")
    if callee is None or callee.optional or len(arguments) != 1 or arguments[0] is None:
        return None

    spread_array = callee.child("object")
    if spread_array is None or spread_array.kind != NodeKind.ARRAY:
        return None
    elements = spread_array.items("elements")
    if len(elements) != 1 or elements[0] is None or elements[0].kind != NodeKind.SPREAD:
        return None

    iterable = elements[0].child("argument")
    mapper = arguments[0]
    if iterable is None or not _mapper_ignores_array(mapper) or not can_use_global(node, "Array"):
        return None

    return Match(node=node, message_key="preferArrayFrom", captures={"iterable": iterable, "mapper": mapper})


IDIOM = Idiom(
    id="prefer-array-from-map",
    description=(
        "Prefer Array.from(iterable, mapper) over [...iterable].map(mapper) to avoid intermediate array allocation"
    ),
    messages={
        "preferArrayFrom": (
            "Use Array.from(${iterable}, ${mapper}) instead of [...${iterable}].map(${mapper}) "
            "to avoid creating an intermediate array"
        )
    },
    templates={"preferArrayFrom": "Array.from(${iterable}, ${mapper})"},
    matchers={NodeKind.CALL: (match_spread_map,)},
)
