"""``Array.from({length: n}, () => v)`` and ``[...Array(n)].map(() => v)`` to ``fill(v)``.

Only callbacks whose value is the same on every call qualify. Object, array
and function literals allocate a fresh value per call, and ``fill`` would share
one instance across all slots, so they are left alone.
"""

from __future__ import annotations

from idiomfix.core.matching import Idiom, Match, MatchContext
from idiomfix.core.safety import (
    callback_value,
    is_constant_expression,
    is_global_member,
    is_global_reference,
    is_identifier,
    is_plain_callback,
    method_name,
)
from idiomfix.core.syntax import NodeKind, SourceFile, SyntaxNode


def _constant_callback_value(callback: SyntaxNode | None, source: SourceFile) -> SyntaxNode | None:
    if callback is None or not is_plain_callback(callback, source) or callback.items("params"):
        return None
    value = callback_value(callback)
    if value is None or not is_constant_expression(value):
        return None
    if callback.kind == NodeKind.FUNCTION_EXPRESSION and any(
        is_identifier(node, "arguments") for node in value.walk()
    ):
        return None
    return value


def match_array_from_length(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``Array.from({length: n}, () => v)``"""
    if not is_global_member(node.child("callee"), "Array", "from"):
        return None
    arguments = node.items("arguments")
    if len(arguments) != 2 or arguments[0] is None or arguments[0].kind != NodeKind.OBJECT:
        return None

    properties = arguments[0].items("properties")
    if len(properties) != 1 or properties[0] is None or properties[0].kind != NodeKind.PROPERTY:
        return None
    length_property = properties[0]
    if length_property.computed or not is_identifier(length_property.child("key"), "length"):
        return None
    length = length_property.child("value")
    value = _constant_callback_value(arguments[1], context.source)
    if length is None or value is None:
        return None

    return Match(
        node=node,
        message_key="preferFillArrayFrom",
        captures={"length": length, "value": value},
    )


def match_spread_array_map(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``[...Array(n)].map(() => v)``"""
    if method_name(node) != "map":
        return None
    arguments = node.items("arguments")
    callee = node.child("callee")
    if len(arguments) != 1 or callee is None:
        return None

    spread_array = callee.child("object")
    if spread_array is None or spread_array.kind != NodeKind.ARRAY:
        return None
    elements = spread_array.items("elements")
    if len(elements) != 1 or elements[0] is None or elements[0].kind != NodeKind.SPREAD:
        return None

    constructed = elements[0].child("argument")
    if constructed is None or constructed.kind != NodeKind.CALL:
        return None
    if not is_global_reference(constructed.child("callee"), "Array"):
        return None
    constructor_arguments = constructed.items("arguments")
    if len(constructor_arguments) != 1 or constructor_arguments[0] is None:
        return None
    if constructor_arguments[0].kind == NodeKind.SPREAD:
        return None

    value = _constant_callback_value(arguments[0], context.source)
    if value is None:
        return None

    return Match(
        node=node,
        message_key="preferFillSpreadMap",
        captures={"length": constructor_arguments[0], "value": value},
    )


IDIOM = Idiom(
    id="prefer-array-fill",
    description="Prefer Array.prototype.fill() over Array.from or map with constant values",
    messages={
        "preferFillArrayFrom": (
            "Use Array.from({length: ${length}}).fill(${value}) instead of Array.from with a constant callback"
        ),
        "preferFillSpreadMap": "Use Array(${length}).fill(${value}) instead of spread Array with map",
    },
    templates={
        "preferFillArrayFrom": "Array.from({length: ${length}}).fill(${value})",
        "preferFillSpreadMap": "Array(${length}).fill(${value})",
    },
    matchers={NodeKind.CALL: (match_array_from_length, match_spread_array_map)},
)
