"""``try { new URL(u); ... } catch { ... }`` to ``URL.canParse(u)``.

Anything after ``new URL(...)`` in the ``try`` block was protected by the
``catch`` and no longer is after the rewrite, so the fix is only offered as a
suggestion for a human to review.
"""

from __future__ import annotations

from idiomfix.core.fixes import render_arguments
from idiomfix.core.matching import FixMode, Idiom, Match, MatchContext
from idiomfix.core.safety import can_use_global, is_global_reference
from idiomfix.core.syntax import NodeKind, SyntaxNode


def _statements(block: SyntaxNode | None) -> list[SyntaxNode]:
    if block is None or block.kind != NodeKind.BLOCK:
        return []
    return [statement for statement in block.items("body") if statement is not None]


def _new_url(statement: SyntaxNode) -> SyntaxNode | None:
    if statement.kind != NodeKind.EXPRESSION_STATEMENT:
        return None
    expression = statement.child("expression")
    if expression is None or expression.kind != NodeKind.NEW:
        return None
    if not is_global_reference(expression.child("callee"), "URL") or not expression.items("arguments"):
        return None
    if any(arg is None or arg.kind == NodeKind.SPREAD for arg in expression.items("arguments")):
        return None
    return expression


def _returns_boolean(statements: list[SyntaxNode], value: bool) -> bool:
    if len(statements) != 1 or statements[0].kind != NodeKind.RETURN:
        return False
    argument = statements[0].child("argument")
    return argument is not None and argument.literal_type == "boolean" and argument.value is value


def _uses_catch_parameter(handler: SyntaxNode) -> bool:
    param = handler.child("param")
    body = handler.child("body")
    if param is None or body is None:
        return False
    names = {node.name for node in param.walk() if node.kind == NodeKind.IDENTIFIER}
    return any(node.kind == NodeKind.IDENTIFIER and node.name in names for node in body.walk())


def _text_between(statements: list[SyntaxNode], context: MatchContext) -> str:
    return context.source.slice(statements[0].span.start, statements[-1].span.end)


def match_try_new_url(node: SyntaxNode, context: MatchContext) -> Match | None:
    """``try { new URL(u); return true; } catch { return false; }`` and the guarded-block form."""
    handler = node.child("handler")
    if handler is None or node.child("finalizer") is not None or not can_use_global(node, "URL"):
        return None

    body = _statements(node.child("block"))
    if len(body) < 2:
        return None
    construction = _new_url(body[0])
    if construction is None:
        return None

    if _uses_catch_parameter(handler):
        return None
    handler_statements = _statements(handler.child("body"))

    arguments = render_arguments(construction, context.source)
    rest = body[1:]
    if _returns_boolean(rest, True) and _returns_boolean(handler_statements, False):
        return Match(
            node=node,
            message_key="preferCanParse",
            template_key="returnCanParse",
            captures={"arguments": arguments},
        )

    meaningful_handler = [statement for statement in handler_statements if statement.kind != NodeKind.EMPTY]
    captures = {"arguments": arguments, "body": _text_between(rest, context)}
    if not meaningful_handler:
        return Match(node=node, message_key="preferCanParse", template_key="guardedBlock", captures=captures)
    captures["fallback"] = _text_between(meaningful_handler, context)
    return Match(node=node, message_key="preferCanParse", template_key="guardedBlockWithElse", captures=captures)


IDIOM = Idiom(
    id="prefer-url-canparse",
    description="Prefer URL.canParse() over try-catch blocks for URL validation",
    messages={
        "preferCanParse": "Use URL.canParse() instead of try-catch for URL validation",
        "replaceWithCanParse": "Replace with URL.canParse()",
    },
    templates={
        "returnCanParse": "return URL.canParse(${arguments});",
        "guardedBlock": "if (URL.canParse(${arguments})) {\n${body}\n}",
        "guardedBlockWithElse": "if (URL.canParse(${arguments})) {\n${body}\n} else {\n${fallback}\n}",
    },
    matchers={NodeKind.TRY: (match_try_new_url,)},
    mode=FixMode.SUGGESTION,
    suggestion_message="replaceWithCanParse",
)
