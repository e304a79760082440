"""Shape-based safety checks shared by the idiom matchers.

Every predicate here is a pure function of the node's shape (and, for the
identifier-aware helpers, of bindings resolved through ``idiomfix.core.scope``).
When a shape is not recognised the answer is the conservative one.
"""

from __future__ import annotations

from enum import Enum

from idiomfix.core.scope import is_shadowed, resolve_binding
from idiomfix.core.syntax import NodeKind, SourceFile, SyntaxNode

_LOOP_TEST_PARENTS = frozenset({NodeKind.IF, NodeKind.WHILE, NodeKind.FOR, NodeKind.DO_WHILE, NodeKind.CONDITIONAL})
_COPY_METHODS = frozenset({"concat", "slice"})
_PATTERN_TYPES = frozenset(
    {
        "array_pattern",
        "object_pattern",
        "pair_pattern",
        "assignment_pattern",
        "object_assignment_pattern",
        "rest_pattern",
    }
)
_PATTERN_LIKE_KINDS = frozenset({NodeKind.ARRAY, NodeKind.OBJECT, NodeKind.PROPERTY, NodeKind.SPREAD})


class NullishKind(Enum):
    NONE = "none"
    NULL = "null"
    UNDEFINED = "undefined"


def is_pure_to_repeat(node: SyntaxNode, allow_spread: bool = False) -> bool:
    """True if evaluating ``node`` twice cannot duplicate or reorder side effects.

    Calls and constructions are never pure. Spread elements are only accepted
    when the caller knows what spreading means for its rewrite.
    """
    kind = node.kind
    if kind in (NodeKind.IDENTIFIER, NodeKind.LITERAL, NodeKind.THIS):
        return True
    if kind == NodeKind.TEMPLATE_LITERAL:
        return all(expr is not None and is_pure_to_repeat(expr) for expr in node.items("expressions"))
    if kind == NodeKind.MEMBER:
        obj = node.child("object")
        prop = node.child("property")
        if obj is None or prop is None or not is_pure_to_repeat(obj):
            return False
        return not node.computed or is_pure_to_repeat(prop)
    if kind == NodeKind.UNARY:
        argument = node.child("argument")
        return node.operator != "delete" and argument is not None and is_pure_to_repeat(argument)
    if kind in (NodeKind.BINARY, NodeKind.LOGICAL):
        return _all_pure(node, ("left", "right"))
    if kind == NodeKind.CONDITIONAL:
        return _all_pure(node, ("test", "consequent", "alternate"))
    if kind == NodeKind.SPREAD:
        argument = node.child("argument")
        return allow_spread and argument is not None and is_pure_to_repeat(argument)
    if kind == NodeKind.ARRAY:
        return all(el is None or is_pure_to_repeat(el, allow_spread) for el in node.items("elements"))
    if kind == NodeKind.OBJECT:
        return all(prop is not None and _is_pure_property(prop, allow_spread) for prop in node.items("properties"))
    return False


def _all_pure(node: SyntaxNode, names: tuple[str, ...]) -> bool:
    for name in names:
        child = node.child(name)
        if child is None or not is_pure_to_repeat(child):
            return False
    return True


def _is_pure_property(prop: SyntaxNode, allow_spread: bool) -> bool:
    if prop.kind == NodeKind.SPREAD:
        return is_pure_to_repeat(prop, allow_spread)
    if prop.kind != NodeKind.PROPERTY:
        return False
    key = prop.child("key")
    value = prop.child("value")
    if key is None or value is None:
        return False
    if prop.computed and not is_pure_to_repeat(key):
        return False
    return is_pure_to_repeat(value)


def is_constant_expression(node: SyntaxNode) -> bool:
    """True if every evaluation of ``node`` yields the same value, so it can be computed once and shared.

    Array, object, function and regular expression literals allocate a new
    object per evaluation and are therefore not constant.
    """
    kind = node.kind
    if kind == NodeKind.LITERAL:
        return node.literal_type != "regex"
    if kind == NodeKind.IDENTIFIER:
        return True
    if kind == NodeKind.TEMPLATE_LITERAL:
        return all(expr is not None and is_constant_expression(expr) for expr in node.items("expressions"))
    if kind == NodeKind.MEMBER:
        obj = node.child("object")
        prop = node.child("property")
        if obj is None or prop is None or not is_constant_expression(obj):
            return False
        return not node.computed or is_constant_expression(prop)
    if kind == NodeKind.UNARY:
        argument = node.child("argument")
        return node.operator != "delete" and argument is not None and is_constant_expression(argument)
    if kind in (NodeKind.BINARY, NodeKind.LOGICAL, NodeKind.CONDITIONAL):
        return all(child is not None and is_constant_expression(child) for child in node.fields.values())
    return False


def nullish_kind(node: SyntaxNode) -> NullishKind:
    if node.kind == NodeKind.IDENTIFIER and node.name == "undefined":
        return NullishKind.UNDEFINED
    if node.kind == NodeKind.LITERAL and node.literal_type == "null":
        return NullishKind.NULL
    if node.kind == NodeKind.UNARY and node.operator == "void":
        argument = node.child("argument")
        if argument is not None and is_number_literal(argument, 0):
            return NullishKind.UNDEFINED
    return NullishKind.NONE


def is_in_boolean_context(node: SyntaxNode) -> bool:
    """True if only the truthiness of ``node``'s value is observed where it is used."""
    parent = node.parent
    if parent is None:
        return False

    if parent.kind in _LOOP_TEST_PARENTS:
        return parent.child("test") is node

    if parent.kind == NodeKind.UNARY and parent.operator == "!":
        return True

    if parent.kind == NodeKind.LOGICAL and parent.operator in ("&&", "||"):
        return is_in_boolean_context(parent)

    return False


def is_negated(node: SyntaxNode) -> bool:
    parent = node.parent
    return parent is not None and parent.kind == NodeKind.UNARY and parent.operator == "!"


def is_shallow_copy_call(node: SyntaxNode) -> bool:
    """Recognise ``x.concat()``, ``x.slice()`` and ``x.slice(0)``."""
    method = method_name(node)
    if method not in _COPY_METHODS:
        return False
    arguments = node.items("arguments")
    if not arguments:
        return True
    if method == "slice" and len(arguments) == 1:
        argument = arguments[0]
        return argument is not None and is_number_literal(argument, 0)
    return False


def array_from_copy_pattern(node: SyntaxNode) -> SyntaxNode | None:
    """Return ``x`` for ``x.slice()``-style copies and for ``[...x]``."""
    if node.kind == NodeKind.CALL and is_shallow_copy_call(node):
        callee = node.child("callee")
        return callee.child("object") if callee is not None else None

    if node.kind == NodeKind.ARRAY:
        elements = node.items("elements")
        if len(elements) == 1 and elements[0] is not None and elements[0].kind == NodeKind.SPREAD:
            return elements[0].child("argument")

    return None


def method_name(node: SyntaxNode) -> str | None:
    """Name of the method for ``obj.name(...)`` calls, ``None`` for anything else."""
    if node.kind != NodeKind.CALL:
        return None
    callee = node.child("callee")
    if callee is None or callee.kind != NodeKind.MEMBER or callee.computed:
        return None
    prop = callee.child("property")
    if prop is None or prop.kind != NodeKind.IDENTIFIER:
        return None
    return prop.name


def is_identifier(node: SyntaxNode | None, *names: str) -> bool:
    return node is not None and node.kind == NodeKind.IDENTIFIER and (not names or node.name in names)


def is_assignment_target(node: SyntaxNode) -> bool:
    """True when ``node`` is written to, directly or from inside a destructuring pattern."""
    current = node
    parent = node.parent
    in_pattern = False
    while parent is not None and (parent.raw_type in _PATTERN_TYPES or parent.kind in _PATTERN_LIKE_KINDS):
        # Computed keys and default values are read, not written.
        if current is parent.child("key") or current is parent.child("right"):
            return False
        in_pattern = in_pattern or parent.raw_type in _PATTERN_TYPES
        current, parent = parent, parent.parent
    if parent is None:
        return False
    if parent.kind == NodeKind.ASSIGNMENT:
        return parent.child("left") is current
    if parent.kind == NodeKind.FOR_IN:
        return parent.child("left") is current
    if current is node and parent.kind == NodeKind.UPDATE:
        return True
    if current is node and parent.kind == NodeKind.UNARY and parent.operator == "delete":
        return True
    return in_pattern


def same_text(source: SourceFile, a: SyntaxNode, b: SyntaxNode) -> bool:
    """Structural equality approximated by comparing the verbatim source of both nodes."""
    return source.text_of(a) == source.text_of(b)


def is_number_literal(node: SyntaxNode | None, value: float | None = None) -> bool:
    if node is None or node.kind != NodeKind.LITERAL or node.literal_type != "number":
        return False
    return value is None or node.value == value


def is_global_reference(node: SyntaxNode | None, name: str) -> bool:
    """True for an identifier ``name`` that no enclosing scope shadows."""
    return is_identifier(node, name) and node is not None and resolve_binding(node) is None


def is_global_member(node: SyntaxNode | None, object_name: str, property_name: str) -> bool:
    """``Object.prop`` with an unshadowed ``Object``."""
    if node is None or node.kind != NodeKind.MEMBER or node.computed or node.optional:
        return False
    prop = node.child("property")
    return is_global_reference(node.child("object"), object_name) and is_identifier(prop, property_name)


def callback_value(function: SyntaxNode) -> SyntaxNode | None:
    """The value a callback returns when its body is a single expression or a single ``return``."""
    if function.kind not in (NodeKind.ARROW_FUNCTION, NodeKind.FUNCTION_EXPRESSION):
        return None
    body = function.child("body")
    if body is None:
        return None
    if body.kind != NodeKind.BLOCK:
        return body
    statements = body.items("body")
    if len(statements) != 1 or statements[0] is None or statements[0].kind != NodeKind.RETURN:
        return None
    return statements[0].child("argument")


def is_plain_callback(function: SyntaxNode, source: SourceFile) -> bool:
    """A non-async, non-generator function or arrow expression."""
    if function.kind not in (NodeKind.ARROW_FUNCTION, NodeKind.FUNCTION_EXPRESSION):
        return False
    if function.raw_type == "generator_function":
        return False
    return not source.text_of(function).startswith("async")


def can_use_global(at: SyntaxNode, name: str) -> bool:
    """True if a rewrite placed at ``at`` may refer to the global ``name``."""
    return not is_shadowed(at, name)
