"""Resolve identifier references to the binding that declares them.

Resolution is intentionally one-sided: when anything about a binding is
ambiguous (several declarations, a later write, a destructuring pattern, a
parameter) the resolver answers ``None`` rather than guess.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from idiomfix.core.syntax import FUNCTION_KINDS, NodeKind, SyntaxNode

# Wrappers whose inner declaration belongs to the enclosing block.
_TRANSPARENT_STATEMENTS = frozenset({"export_statement", "ambient_declaration"})
_PARAMETER_WRAPPERS = {"required_parameter": "pattern", "optional_parameter": "pattern", "assignment_pattern": "left"}
# Every case of a switch shares the lexical scope of the switch body.
_SWITCH_CASES = frozenset({"switch_case", "switch_default"})


@dataclass(frozen=True)
class Binding:
    name: str
    scope: SyntaxNode
    declarations: tuple[SyntaxNode, ...]


def is_reference(node: SyntaxNode) -> bool:
    """True if ``node`` is an identifier read, not a declaration or property name."""
    if node.kind != NodeKind.IDENTIFIER:
        return False
    parent = node.parent
    if parent is None:
        return True
    if parent.kind == NodeKind.VARIABLE_DECLARATOR and parent.child("id") is node:
        return False
    if parent.kind == NodeKind.MEMBER and parent.child("property") is node and not parent.computed:
        return False
    if parent.kind == NodeKind.PROPERTY and parent.child("key") is node and parent.child("value") is not node:
        return parent.computed
    if parent.kind in FUNCTION_KINDS and (parent.child("id") is node or node in parent.items("params")):
        return False
    if parent.kind == NodeKind.CLASS_DECLARATION and parent.child("id") is node:
        return False
    if parent.kind == NodeKind.CATCH and parent.child("param") is node:
        return False
    wrapped = _PARAMETER_WRAPPERS.get(parent.raw_type)
    if wrapped is not None and parent.child(wrapped) is node:
        return False
    return True


def resolve_binding(identifier: SyntaxNode) -> Binding | None:
    if not is_reference(identifier) or identifier.name is None:
        return None
    name = identifier.name
    for scope in identifier.ancestors():
        declarations = tuple(_declarations_in(scope, name))
        if declarations:
            return Binding(name=name, scope=scope, declarations=declarations)
    return None


def is_shadowed(at: SyntaxNode, name: str) -> bool:
    """True if some scope enclosing ``at`` declares ``name``, hiding the global of that name."""
    return any(any(True for _ in _declarations_in(scope, name)) for scope in at.ancestors())


def resolve_single_initializer(identifier: SyntaxNode) -> SyntaxNode | None:
    """Return the initializer of the identifier's binding when it is the only value it can hold."""
    binding = resolve_binding(identifier)
    if binding is None or len(binding.declarations) != 1:
        return None

    declarator = binding.declarations[0]
    if declarator.kind != NodeKind.VARIABLE_DECLARATOR:
        return None
    declared = declarator.child("id")
    init = declarator.child("init")
    if declared is None or declared.kind != NodeKind.IDENTIFIER or init is None:
        return None

    if any(_writes(node, binding.name) for node in binding.scope.walk()):
        return None
    return init


def is_never_reassigned(identifier: SyntaxNode) -> bool:
    """True if the identifier's binding is never written after its declaration.

    Unresolved names (globals) count as stable unless this file writes them.
    """
    if not is_reference(identifier) or identifier.name is None:
        return False
    binding = resolve_binding(identifier)
    scope = binding.scope if binding is not None else _root(identifier)
    return not any(_writes(node, identifier.name) for node in scope.walk())


def is_initialized_before(identifier: SyntaxNode, offset: int) -> bool:
    """True if the identifier's binding already holds its value at source ``offset``.

    ``let``, ``const`` and ``class`` bindings cannot be read before their
    declaration runs and ``var`` bindings are still ``undefined``. Function
    declarations, imports and parameters are ready as soon as their scope is
    entered. Unresolved names count as initialized.
    """
    binding = resolve_binding(identifier)
    if binding is None:
        return True
    return all(
        declaration.span.end <= offset
        for declaration in binding.declarations
        if declaration.kind in (NodeKind.VARIABLE_DECLARATOR, NodeKind.CLASS_DECLARATION)
    )


def _root(
node: SyntaxNode) -> SyntaxNode:
    for ancestor in node.ancestors():
        node = ancestor
    return node


def _writes(node: SyntaxNode, name: str) -> bool:
    if node.kind == NodeKind.ASSIGNMENT:
        target = node.child("left")
        return target is not None and _target_names(target, name)
    if node.kind == NodeKind.UPDATE:
        argument = node.child("argument")
        return argument is not None and argument.kind == NodeKind.IDENTIFIER and argument.name == name
    if node.kind == NodeKind.FOR_IN and node.keyword is None:
        target = node.child("left")
        return target is not None and _target_names(target, name)
    return False


def _target_names(target: SyntaxNode, name: str) -> bool:
    if target.kind == NodeKind.IDENTIFIER:
        return target.name == name
    if target.kind == NodeKind.MEMBER:
        return False
    return any(_target_names(child, name) for child in target.children)


def _declarations_in(scope: SyntaxNode, name: str) -> Iterator[SyntaxNode]:
    if scope.kind in FUNCTION_KINDS:
        own_name = scope.child("id")
        if scope.kind == NodeKind.FUNCTION_EXPRESSION and own_name is not None and own_name.name == name:
            yield own_name
        for param in scope.items("params"):
            if param is not None:
                yield from _identifiers_named(param, name)
        body = scope.child("body")
        if body is not None:
            yield from _var_declarations(body, name)
        return

    if scope.kind == NodeKind.CATCH:
        param = scope.child("param")
        if param is not None:
            yield from _identifiers_named(param, name)
        return

    if scope.raw_type in _SWITCH_CASES:
        return

    if scope.kind == NodeKind.FOR_IN and scope.keyword in ("let", "const"):
        left = scope.child("left")
        if left is not None:
            yield from _identifiers_named(left, name)
        return

    for statement in _direct_statements(scope):
        if statement.kind == NodeKind.VARIABLE_DECLARATION and statement.keyword != "var":
            yield from _declarators_named(statement, name)
        elif statement.kind in (NodeKind.FUNCTION_DECLARATION, NodeKind.CLASS_DECLARATION):
            declared = statement.child("id")
            if declared is not None and declared.name == name:
                yield statement
        elif statement.kind == NodeKind.IMPORT:
            yield from _identifiers_named(statement, name)

    if scope.kind == NodeKind.PROGRAM:
        yield from _var_declarations(scope, name)


def _direct_statements(scope: SyntaxNode) -> Iterator[SyntaxNode]:
    for child in scope.children:
        if child.raw_type in _TRANSPARENT_STATEMENTS:
            yield from child.children
        elif child.raw_type in _SWITCH_CASES:
            yield from _direct_statements(child)
        else:
            yield child


def _declarators_named(declaration: SyntaxNode, name: str) -> Iterator[SyntaxNode]:
    for declarator in declaration.items("declarations"):
        if declarator is None:
            continue
        declared = declarator.child("id")
        if declared is not None and any(True for _ in _identifiers_named(declared, name)):
            yield declarator


def _var_declarations(root: SyntaxNode, name: str) -> Iterator[SyntaxNode]:
    """``var`` declarations hoisted into ``root``; nested functions are not entered."""
    stack = list(reversed(root.children))
    while stack:
        node = stack.pop()
        if node.kind in FUNCTION_KINDS:
            continue
        if node.kind == NodeKind.VARIABLE_DECLARATION and node.keyword == "var":
            yield from _declarators_named(node, name)
        elif node.kind == NodeKind.FOR_IN and node.keyword == "var":
            left = node.child("left")
            if left is not None:
                yield from _identifiers_named(left, name)
        stack.extend(reversed(node.children))


def _identifiers_named(root: SyntaxNode, name: str) -> Iterator[SyntaxNode]:
    for node in root.walk():
        if node.kind == NodeKind.IDENTIFIER and node.name == name:
            yield node
