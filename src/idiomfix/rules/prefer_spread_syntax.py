"""``concat``, ``Object.assign({}, ...)`` and ``fn.apply(null, args)`` to spread syntax.

``concat`` appends non-array arguments as single elements while spreading
them would iterate them, so every operand has to be known to be an array.
``apply`` with a ``null`` receiver is only rewritten when the callee does not
observe ``this``: a plain function name, or a static ``Math`` function.
"""

from __future__ import annotations

from idiomfix.core.fixes import render_capture
from idiomfix.core.matching import Idiom, Match, MatchContext
from idiomfix.core.safety import NullishKind, is_global_member, is_identifier, method_name, nullish_kind
from idiomfix.core.syntax import NodeKind, SyntaxNode
from idiomfix.core.types import Capability


def _is_known_array(node: SyntaxNode, context: MatchContext) -> bool:
    if node.kind == NodeKind.ARRAY:
        # ``concat`` keeps holes, spreading turns them into ``undefined``.
        return all(element is not None for element in node.items("elements"))
    return context.types.check(node, Capability.ARRAY_LIKE, default=False)


def _spread_list(nodes: list[SyntaxNode], context: MatchContext) -> str:
    return ", ".join(f"...{render_capture(node, context.source)}" for node in nodes)


def _plain_arguments(node: SyntaxNode) -> list[SyntaxNode] | None:
    arguments = [arg for arg in node.items("arguments") if arg is not None and arg.kind != NodeKind.SPREAD]
    return arguments if len(arguments) == len(node.items("arguments")) else None


def match_concat(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``arr.concat(a, b)``"""
    if method_name(node) != "concat" or node.optional:
        return None
    callee = node.child("callee")
    array = callee.child("object") if callee is not None else None
    arguments = _plain_arguments(node)
    if array is None or not arguments:
        return None
    if not all(_is_known_array(operand, context) for operand in [array, *arguments]):
        return None
    return Match(
        node=node,
        message_key="preferSpreadArray",
        captures={"elements": _spread_list([array, *arguments], context)},
    )


def _opens_block_position(node: SyntaxNode) -> bool:
    """True when the first token of ``node`` would open a statement or an arrow body.

    An object literal there parses as a block, so the rewrite has to be
    parenthesised. The walk follows leftmost operands such as
    ``Object.assign({}, a).run()`` up to the enclosing statement.
    """
    current = node
    while not current.parenthesized:
        parent = current.parent
        if parent is None:
            return False
        if parent.kind == NodeKind.EXPRESSION_STATEMENT:
            return True
        if parent.kind == NodeKind.ARROW_FUNCTION:
            return parent.child("body") is current
        if parent.span.start != current.span.start:
            return False
        current = parent
    return False


def match_object_assign(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``Object.assign({}, a, b)`` and ``Object.assign({k: v}, a)``"""
    if node.optional or not is_global_member(node.child("callee"), "Object", "assign"):
        return None
    arguments = _plain_arguments(node)
    if arguments is None or len(arguments) < 2 or arguments[0].kind != NodeKind.OBJECT:
        return None

    target = arguments[0]
    properties = [prop for prop in target.items("properties") if prop is not None]
    for prop in properties:
        # Methods and accessors are not plain data properties.
        if prop.kind not in (NodeKind.PROPERTY, NodeKind.SPREAD):
            return None
        if prop.kind == NodeKind.PROPERTY and not prop.computed and is_identifier(prop.child("key"), "__proto__"):
            return None

    spread = _spread_list(arguments[1:], context)
    if properties:
        leading = context.source.slice(target.span.start + 1, properties[-1].group_span.end)
        contents = f"{leading}, {spread}"
    else:
        contents = spread
    parent = node.parent
    if parent is not None and parent.kind == NodeKind.EXPRESSION_STATEMENT:
        return None
    return Match(
        node=node,
        message_key="preferSpreadObject",
        template_key="wrappedObject" if _opens_block_position(node) else "preferSpreadObject",
        captures={"contents": contents},
    )


def _ignores_receiver(function: SyntaxNode) -> bool:
    if function.kind == NodeKind.IDENTIFIER:
        return True
    prop = function.child("property")
    return prop is not None and prop.name is not None and is_global_member(function, "Math", prop.name)


def match_apply(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``fn.apply(null, args)`` and ``fn.apply(undefined, args)``"""
    if method_name(node) != "apply" or node.optional:
        return None
    arguments = _plain_arguments(node)
    callee = node.child("callee")
    function = callee.child("object") if callee is not None else None
    if arguments is None or len(arguments) != 2 or function is None:
        return None
    if nullish_kind(arguments[0]) == NullishKind.NONE or not _ignores_receiver(function):
        return None
    if arguments[1].kind == NodeKind.OBJECT:
        return None
    return Match(
        node=node,
        message_key="preferSpreadFunction",
        captures={"function": function, "arguments": arguments[1]},
    )


IDIOM = Idiom(
    id="prefer-spread-syntax",
    description="Prefer spread syntax over Array.concat(), Object.assign({}, ...), and Function.apply()",
    messages={
        "preferSpreadArray": "Use spread syntax [...arr, ...other] instead of arr.concat(other)",
        "preferSpreadObject": "Use spread syntax {...a, ...b} instead of Object.assign({}, a, b)",
        "preferSpreadFunction": "Use spread syntax fn(...args) instead of fn.apply(null/undefined, args)",
    },
    templates={
        "preferSpreadArray": "[${elements}]",
        "preferSpreadObject": "{${contents}}",
        "wrappedObject": "({${contents}})",
        "preferSpreadFunction": "${function}(...${arguments})",
    },
    matchers={NodeKind.CALL: (match_concat, match_object_assign, match_apply)},
)
