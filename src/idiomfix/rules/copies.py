"""Shared recognition of "copy, then mutate the copy" receivers."""

from __future__ import annotations

from idiomfix.core.matching import MatchContext
from idiomfix.core.safety import array_from_copy_pattern
from idiomfix.core.syntax import NodeKind, SyntaxNode
from idiomfix.core.types import Capability


def copied_array(node: SyntaxNode | None, context: MatchContext) -> SyntaxNode | None:
    """The array a shallow copy was taken of, if ``node`` is such a copy of an array.

    ``x.slice()`` and ``x.concat()`` only exist with copying semantics on
    arrays, so their receivers are accepted unless known to be something else.
    ``[...x]`` copies any iterable, and ``toSorted`` and friends only exist on
    arrays, so a spread copy needs positive evidence that ``x`` is an array.
    """
    if node is None:
        return None
    array = array_from_copy_pattern(node)
    if array is None or array.kind == NodeKind.SPREAD:
        return None
    if node.kind == NodeKind.ARRAY:
        return array if context.types.check(array, Capability.ARRAY_LIKE, default=False) else None
    return array if context.types.check(array, Capability.ARRAY_LIKE) else None
