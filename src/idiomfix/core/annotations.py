"""A lightweight ``TypeService`` that reads what the source itself states.

It understands TypeScript annotations on variable declarators and parameters,
and infers the obvious type of literal and ``new X()`` initializers. Types are
represented by their nominal name (``"string"``, ``"Array"``, ``"Set"``,
``"RegExp"`` ...). Anything it cannot classify is reported as unknown, never
guessed.
"""

from __future__ import annotations

import logging

from idiomfix.core.scope import resolve_binding, resolve_single_initializer
from idiomfix.core.syntax import NodeKind, SyntaxNode

logger = logging.getLogger(__name__)

_ARRAY_TYPES = frozenset(
    {
        "Array",
        "ReadonlyArray",
        "Int8Array",
        "Uint8Array",
        "Uint8ClampedArray",
        "Int16Array",
        "Uint16Array",
        "Int32Array",
        "Uint32Array",
        "Float32Array",
        "Float64Array",
        "BigInt64Array",
        "BigUint64Array",
    }
)
_SET_TYPES = frozenset({"Set", "ReadonlySet"})
_OPAQUE_TYPES = frozenset({"any", "unknown", "never", "object"})
_PARAMETER_WRAPPERS = frozenset({"required_parameter", "optional_parameter"})
_LITERAL_TYPES = {
    "string": "string",
    "number": "number",
    "bigint": "bigint",
    "boolean": "boolean",
    "regex": "RegExp",
}


class AnnotationTypeService:
    """Implements the ``TypeService`` protocol from annotations and initializers."""

    @property
    def has_type_information(self) -> bool:
        return True

    def get_type_of(self, node: SyntaxNode) -> str | None:
        type_ = self._infer(node)
        if type_ is not None:
            logger.debug("Inferred %s for %s at line %d", type_, node.kind, node.span.start_line)
        return type_

    def is_array_like(self, type_: str) -> bool:
        return type_ in _ARRAY_TYPES

    def is_string_like(self, type_: str) -> bool:
        return type_ == "string"

    def is_set_like(self, type_: str) -> bool:
        return type_ in _SET_TYPES

    def type_name(self, type_: str) -> str | None:
        return type_

    def _infer(self, node: SyntaxNode) -> str | None:
        if node.kind == NodeKind.LITERAL:
            return _LITERAL_TYPES.get(node.literal_type or "")
        if node.kind == NodeKind.TEMPLATE_LITERAL:
            return "string"
        if node.kind == NodeKind.ARRAY:
            return "Array"
        if node.kind == NodeKind.NEW:
            callee = node.child("callee")
            # A local binding may shadow the built-in of the same name.
            if callee is not None and callee.kind == NodeKind.IDENTIFIER and resolve_binding(callee) is None:
                return callee.name
            return None
        if node.kind == NodeKind.IDENTIFIER:
            return self._infer_identifier(node)
        if node.raw_type in ("as_expression", "satisfies_expression", "type_assertion"):
            return describe_type(node.items("children")[-1] if node.items("children") else None)
        return None

    def _infer_identifier(self, identifier: SyntaxNode) -> str | None:
        binding = resolve_binding(identifier)
        if binding is None or len(binding.declarations) != 1:
            return None

        declaration = binding.declarations[0]
        annotation = _declared_annotation(declaration)
        if annotation is not None:
            return describe_type(annotation)

        init = resolve_single_initializer(identifier)
        if init is None or init.kind == NodeKind.IDENTIFIER:
            return None
        return self._infer(init)


def _declared_annotation(declaration: SyntaxNode) -> SyntaxNode | None:
    if declaration.kind == NodeKind.VARIABLE_DECLARATOR:
        declared = declaration.child("id")
        if declared is None or declared.kind != NodeKind.IDENTIFIER:
            return None
        return declaration.child("type")

    parent = declaration.parent
    if parent is not None and parent.raw_type in _PARAMETER_WRAPPERS and parent.child("pattern") is declaration:
        return parent.child("type")
    return None


def describe_type(node: SyntaxNode | None) -> str | None:
    """Nominal name of a type annotation node, or ``None`` when it is not a single nominal type."""
    if node is None:
        return None
    raw_type = node.raw_type

    if raw_type in ("type_annotation", "parenthesized_type", "readonly_type"):
        inner = node.items("children")
        return describe_type(inner[0]) if len(inner) == 1 else None

    if raw_type == "predefined_type":
        name = node.name
        return None if name is None or name in _OPAQUE_TYPES else name

    if raw_type == "type_identifier":
        return node.name

    if raw_type in ("array_type", "tuple_type"):
        return "Array"

    if raw_type == "generic_type":
        base = node.child("name")
        return base.name if base is not None and base.raw_type == "type_identifier" else None

    if raw_type == "literal_type":
        inner = node.items("children")
        if len(inner) == 1 and inner[0] is not None and inner[0].kind == NodeKind.LITERAL:
            return _LITERAL_TYPES.get(inner[0].literal_type or "")
    return None
