"""Type capability queries on top of an optional type service.

Matchers never talk to a ``TypeService`` directly. They ask the ``TypeOracle``
whether a node has a capability and get a ``TriState`` back, or collapse that
answer to a boolean with ``check``. When nothing is known, ``check`` falls back
to ``DEFAULT_POLICY``, which is decided per capability:

``ARRAY_LIKE``
    Permissive. The idioms that consult it (``prefer-array-at``,
    ``prefer-includes``) are already sound for arrays, strings and typed
    arrays on syntax alone; the type is only used to drop findings on
    receivers known to be something else.
``STRING_LIKE``
    Restrictive. It is consulted to pick a string-only method such as
    ``startsWith``, which must not be called on a value that only looks like
    a string.
``SET_LIKE``
    Restrictive. Set membership rewrites change which method is called.
``NOMINAL``
    Restrictive. A nominal check confirms a specific class before a rewrite
    relies on its methods.
``REGEXP``
    Restrictive. ``re.test(s)`` is only equivalent to ``s.match(re)`` when
    ``re`` really is a regular expression.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from idiomfix.core.scope import resolve_binding, resolve_single_initializer
from idiomfix.core.syntax import NodeKind, SyntaxNode

if TYPE_CHECKING:
    from idiomfix.core.ports.type_service import TypeService


class TriState(Enum):
    YES = "yes"
    NO = "no"
    UNKNOWN = "unknown"

    @classmethod
    def of(cls, value: bool) -> TriState:
        return cls.YES if value else cls.NO


class Capability(Enum):
    ARRAY_LIKE = "array-like"
    STRING_LIKE = "string-like"
    SET_LIKE = "set-like"
    NOMINAL = "nominal"
    REGEXP = "regexp"


DEFAULT_POLICY: dict[Capability, bool] = {
    Capability.ARRAY_LIKE: True,
    Capability.STRING_LIKE: False,
    Capability.SET_LIKE: False,
    Capability.NOMINAL: False,
    Capability.REGEXP: False,
}

_GLOBAL_OBJECTS = frozenset({"window", "globalThis", "self"})


class NullTypeService:
    """A type service that knows nothing. Every query ends up ``UNKNOWN``."""

    @property
    def has_type_information(self) -> bool:
        return False

    def get_type_of(self, node: SyntaxNode) -> Any | None:
        return None

    def is_array_like(self, type_: Any) -> bool:
        return False

    def is_string_like(self, type_: Any) -> bool:
        return False

    def is_set_like(self, type_: Any) -> bool:
        return False

    def type_name(self, type_: Any) -> str | None:
        return None


class TypeOracle:
    def __init__(self, service: TypeService | None = None) -> None:
        self._service: TypeService = service if service is not None else NullTypeService()

    @property
    def service(self) -> TypeService:
        return self._service

    @property
    def has_type_information(self) -> bool:
        return self._service.has_type_information

    def query(self, node: SyntaxNode, capability: Capability, type_name: str | None = None) -> TriState:
        if capability == Capability.NOMINAL and not type_name:
            raise ValueError("A nominal capability query needs a type name.")

        if capability == Capability.REGEXP and resolves_to_regexp_syntactically(node):
            return TriState.YES

        if not self._service.has_type_information:
            return TriState.UNKNOWN

        type_ = self._service.get_type_of(node)
        if type_ is None:
            return TriState.UNKNOWN

        if capability == Capability.ARRAY_LIKE:
            return TriState.of(self._service.is_array_like(type_))
        if capability == Capability.STRING_LIKE:
            return TriState.of(self._service.is_string_like(type_))
        if capability == Capability.SET_LIKE:
            return TriState.of(self._service.is_set_like(type_))
        if capability == Capability.REGEXP:
            type_name = "RegExp"
        return TriState.of(self._service.type_name(type_) == type_name)

    def check(
        self,
        node: SyntaxNode,
        capability: Capability,
        type_name: str | None = None,
        default: bool | None = None,
    ) -> bool:
        """Collapse ``query`` to a boolean, using ``default`` or the capability policy for ``UNKNOWN``."""
        answer = self.query(node, capability, type_name)
        if answer == TriState.YES:
            return True
        if answer == TriState.NO:
            return False
        return DEFAULT_POLICY[capability] if default is None else default


def is_regexp_literal(node: SyntaxNode | None) -> bool:
    return node is not None and node.kind == NodeKind.LITERAL and node.literal_type == "regex"


def is_regexp_constructor(node: SyntaxNode | None) -> bool:
    """``new RegExp(...)`` with the built-in constructor, also through ``window``/``globalThis``/``self``."""
    if node is None or node.kind != NodeKind.NEW:
        return False
    callee = node.child("callee")
    if callee is None:
        return False
    if callee.kind == NodeKind.IDENTIFIER:
        return callee.name == "RegExp" and resolve_binding(callee) is None
    if callee.kind == NodeKind.MEMBER and not callee.computed:
        obj = callee.child("object")
        prop = callee.child("property")
        return (
            obj is not None
            and obj.kind == NodeKind.IDENTIFIER
            and obj.name in _GLOBAL_OBJECTS
            and resolve_binding(obj) is None
            and prop is not None
            and prop.name == "RegExp"
        )
    return False


def resolves_to_regexp_syntactically(node: SyntaxNode) -> bool:
    if is_regexp_literal(node) or is_regexp_constructor(node):
        return True
    if node.kind != NodeKind.IDENTIFIER:
        return False
    init = resolve_single_initializer(node)
    return is_regexp_literal(init) or is_regexp_constructor(init)
