"""``setTimeout(() => f(a), d)`` and ``setTimeout(f.bind(null, a), d)`` to ``setTimeout(f, d, a)``.

Extra timer arguments are evaluated when the timer is scheduled, whereas the
body of an arrow callback is evaluated when it fires. The arrow form is
therefore only rewritten when every value involved is a literal or a name
that is never reassigned and already initialized where the timer is set up.
``bind`` already evaluates its arguments early, so the ``bind`` form only
needs them to be free of side effects.
"""

from __future__ import annotations

from idiomfix.core.fixes import render_arguments
from idiomfix.core.matching import Idiom, Match, MatchContext
from idiomfix.core.safety import (
    NullishKind,
    is_global_reference,
    is_identifier,
    is_plain_callback,
    is_pure_to_repeat,
    method_name,
    nullish_kind,
)
from idiomfix.core.scope import is_initialized_before, is_never_reassigned, is_reference
from idiomfix.core.syntax import NodeKind, SyntaxNode

_TIMERS = ("setTimeout", "setInterval")
_GLOBAL_OBJECTS = ("window", "globalThis")


def _is_timer(callee: SyntaxNode | None) -> bool:
    if callee is None:
        return False
    if callee.kind == NodeKind.IDENTIFIER:
        return any(is_global_reference(callee, timer) for timer in _TIMERS)
    if callee.kind != NodeKind.MEMBER or callee.computed or callee.optional:
        return False
    return any(is_global_reference(callee.child("object"), name) for name in _GLOBAL_OBJECTS) and is_identifier(
        callee.child("property"), *_TIMERS
    )


def _is_stable_value(node: SyntaxNode) -> bool:
    if node.kind == NodeKind.LITERAL:
        return True
    if node.kind == NodeKind.IDENTIFIER:
        return is_never_reassigned(node)
    if node.kind == NodeKind.TEMPLATE_LITERAL:
        return all(expr is not None and _is_stable_value(expr) for expr in node.items("expressions"))
    if node.kind == NodeKind.UNARY and node.operator in ("-", "+", "!", "~", "typeof"):
        argument = node.child("argument")
        return argument is not None and _is_stable_value(argument)
    if node.kind in (NodeKind.BINARY, NodeKind.LOGICAL):
        left = node.child("left")
        right = node.child("right")
        return left is not None and right is not None and _is_stable_value(left) and _is_stable_value(right)
    return False


def _is_ready(value: SyntaxNode, offset: int) -> bool:
    return all(
        is_initialized_before(node, offset)
        for node in value.walk()
        if node.kind == NodeKind.IDENTIFIER and is_reference(node)
    )


def _arrow_call(callback: SyntaxNode, timer_call: SyntaxNode, context: MatchContext) -> SyntaxNode | None:
    if callback.kind != NodeKind.ARROW_FUNCTION or callback.items("params"):
        return None
    if not is_plain_callback(callback, context.source):
        return None
    body = callback.child("body")
    if body is None or body.kind != NodeKind.CALL or body.optional:
        return None
    offset = timer_call.span.start
    # A method call would lose its receiver.
    function = body.child("callee")
    if function is None or function.kind != NodeKind.IDENTIFIER or not is_never_reassigned(function):
        return None
    if not _is_ready(function, offset):
        return None
    for argument in body.items("arguments"):
        if argument is None:
            return None
        if argument.kind == NodeKind.SPREAD:
            # Spreading a named array would copy its contents at schedule time.
            spread = argument.child("argument")
            if spread is None or spread.kind != NodeKind.ARRAY:
                return None
            values = list(spread.items("elements"))
        else:
            values = [argument]
        for value in values:
            if value is None or value.kind == NodeKind.SPREAD:
                return None
            if not _is_stable_value(value) or not _is_ready(value, offset):
                return None
    return body


def _bind_call(callback: SyntaxNode) -> SyntaxNode | None:
    if method_name(callback) != "bind" or callback.optional:
        return None
    arguments = callback.items("arguments")
    if not arguments or arguments[0] is None or nullish_kind(arguments[0]) == NullishKind.NONE:
        return None
    callee = callback.child("callee")
    function = callee.child("object") if callee is not None else None
    if function is None or not is_pure_to_repeat(function):
        return None
    if not all(arg is not None and is_pure_to_repeat(arg, allow_spread=True) for arg in arguments[1:]):
        return None
    return callback


def match_timer_callback(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``setTimeout(() => fn(a, b), delay)`` and ``setTimeout(fn.bind(null, a, b), delay)``"""
    timer = node.child("callee")
    if node.optional or not _is_timer(timer):
        return None
    arguments = node.items("arguments")
    if len(arguments) != 2 or arguments[0] is None or arguments[1] is None:
        return None
    callback, delay = arguments
    if delay.kind == NodeKind.SPREAD:
        return None

    call = _arrow_call(callback, node, context)
    if call is not None:
        function = call.child("callee")
        extra = render_arguments(call, context.source)
    else:
        bound = _bind_call(callback)
        if bound is None or not is_pure_to_repeat(delay):
            return None
        bound_callee = bound.child("callee")
        function = bound_callee.child("object") if bound_callee is not None else None
        bound_arguments = [arg for arg in bound.items("arguments")[1:] if arg is not None]
        extra = (
            context.source.slice(bound_arguments[0].group_span.start, bound_arguments[-1].group_span.end)
            if bound_arguments
            else ""
        )
    if function is None or timer is None:
        return None

    return Match(
        node=node,
        message_key="preferArgs",
        template_key="withArguments" if extra else "withoutArguments",
        captures={"timer": timer, "function": function, "delay": delay, "arguments": extra},
    )


IDIOM = Idiom(
    id="prefer-timer-args",
    description=(
        "Prefer passing function and arguments directly to setTimeout/setInterval "
        "instead of wrapping in an arrow function or using bind"
    ),
    messages={
        "preferArgs": "Pass function and arguments directly to timer function to avoid allocating an extra function"
    },
    templates={
        "withArguments": "${timer}(${function}, ${delay}, ${arguments})",
        "withoutArguments": "${timer}(${function}, ${delay})",
    },
    matchers={NodeKind.CALL: (match_timer_callback,)},
)
