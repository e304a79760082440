from __future__ import annotations

from idiomfix.core.matching import Idiom, Match, MatchContext
from idiomfix.core.safety import can_use_global, is_global_member, is_identifier, method_name
from idiomfix.core.syntax import NodeKind, SyntaxNode


def _is_prototype_has_own_property(node: SyntaxNode | None) -> bool:
    """``Object.prototype.hasOwnProperty`` or ``{}.hasOwnProperty``"""
    if node is None or node.kind != NodeKind.MEMBER or node.computed:
        return False
    if not is_identifier(node.child("property"), "hasOwnProperty"):
        return False
    owner = node.child("object")
    if owner is None:
        return False
    if owner.kind == NodeKind.OBJECT:
        return not owner.items("properties")
    return is_global_member(owner, "Object", "prototype")


def _plain_arguments(node: SyntaxNode, count: int) -> tuple[SyntaxNode, ...] | None:
    arguments = node.items("arguments")
    if len(arguments) != count:
        return None
    plain = tuple(arg for arg in arguments if arg is not None and arg.kind != NodeKind.SPREAD)
    return plain if len(plain) == count else None


def match_has_own_property(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``Object.prototype.hasOwnProperty.call(obj, key)`` and ``obj.hasOwnProperty(key)``"""
    if node.optional or not can_use_global(node, "Object"):
        return None
    callee = node.child("callee")
    if callee is None or callee.optional:
        return None

    method = method_name(node)
    if method == "call" and _is_prototype_has_own_property(callee.child("object")):
        arguments = _plain_arguments(node, 2)
        if arguments is None:
            return None
        target, key = arguments
    elif method == "hasOwnProperty":
        arguments = _plain_arguments(node, 1)
        target = callee.child("object")
        if arguments is None or target is None or target.kind == NodeKind.SUPER:
            return None
        key = arguments[0]
    else:
        return None

    return Match(node=node, message_key="preferObjectHasOwn", captures={"object": target, "key": key})


IDIOM = Idiom(
    id="prefer-object-has-own",
    description="Prefer Object.hasOwn() over Object.prototype.hasOwnProperty.call() and obj.hasOwnProperty()",
    messages={"preferObjectHasOwn": "Use Object.hasOwn() instead of hasOwnProperty"},
    templates={"preferObjectHasOwn": "Object.hasOwn(${object}, ${key})"},
    matchers={NodeKind.CALL: (match_has_own_property,)},
)
