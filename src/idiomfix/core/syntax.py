"""Immutable syntax tree built from a tree-sitter parse of JavaScript or TypeScript.

tree-sitter produces a concrete syntax tree; idioms are easier to describe over
an ESTree-like shape, so the builder below normalises the handful of node types
the idioms care about into ``NodeKind`` variants with named fields, collapses
grouping parentheses, and drops comments. Everything else is kept as
``NodeKind.OTHER`` with its tree-sitter fields copied through.
"""

from __future__ import annotations

import bisect
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any, cast

from tree_sitter import Node
from tree_sitter_language_pack import SupportedLanguage, get_parser

from idiomfix.core.languages import detect_language_from_path, normalize_language


class SourceParseError(ValueError):
    """Raised when a file cannot be parsed without syntax errors."""


class NodeKind(StrEnum):
    PROGRAM = "Program"
    EXPRESSION_STATEMENT = "ExpressionStatement"
    VARIABLE_DECLARATION = "VariableDeclaration"
    VARIABLE_DECLARATOR = "VariableDeclarator"
    BLOCK = "BlockStatement"
    IF = "IfStatement"
    WHILE = "WhileStatement"
    DO_WHILE = "DoWhileStatement"
    FOR = "ForStatement"
    FOR_IN = "ForInStatement"
    RETURN = "ReturnStatement"
    TRY = "TryStatement"
    CATCH = "CatchClause"
    EMPTY = "EmptyStatement"
    FUNCTION_DECLARATION = "FunctionDeclaration"
    FUNCTION_EXPRESSION = "FunctionExpression"
    ARROW_FUNCTION = "ArrowFunctionExpression"
    CLASS_DECLARATION = "ClassDeclaration"
    IMPORT = "ImportDeclaration"
    IDENTIFIER = "Identifier"
    PRIVATE_IDENTIFIER = "PrivateIdentifier"
    THIS = "ThisExpression"
    SUPER = "Super"
    LITERAL = "Literal"
    TEMPLATE_LITERAL = "TemplateLiteral"
    MEMBER = "MemberExpression"
    CALL = "CallExpression"
    NEW = "NewExpression"
    UNARY = "UnaryExpression"
    UPDATE = "UpdateExpression"
    BINARY = "BinaryExpression"
    LOGICAL = "LogicalExpression"
    CONDITIONAL = "ConditionalExpression"
    ASSIGNMENT = "AssignmentExpression"
    SEQUENCE = "SequenceExpression"
    ARRAY = "ArrayExpression"
    OBJECT = "ObjectExpression"
    PROPERTY = "Property"
    SPREAD = "SpreadElement"
    AWAIT = "AwaitExpression"
    TAGGED_TEMPLATE = "TaggedTemplateExpression"
    OTHER = "Other"


FUNCTION_KINDS = frozenset({NodeKind.FUNCTION_DECLARATION, NodeKind.FUNCTION_EXPRESSION, NodeKind.ARROW_FUNCTION})

_LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})
_IDENTIFIER_TYPES = frozenset(
    {
        "identifier",
        "property_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
        "undefined",
    }
)
_COMMENT_TYPES = frozenset({"comment", "html_comment", "hash_bang_line"})


@dataclass(frozen=True)
class Span:
    """Closed-open character range with 1-based line/column of both ends."""

    start: int
    end: int
    start_line: int
    start_column: int
    end_line: int
    end_column: int


@dataclass(eq=False)
class SyntaxNode:
    kind: NodeKind
    raw_type: str
    span: Span
    group_span: Span
    name: str | None = None
    operator: str | None = None
    # "var" / "let" / "const" on declarations and declaring for-in/of loops.
    keyword: str | None = None
    value: Any = None
    literal_type: str | None = None
    computed: bool = False
    optional: bool = False
    fields: dict[str, SyntaxNode | None] = field(default_factory=dict, repr=False)
    lists: dict[str, tuple[SyntaxNode | None, ...]] = field(default_factory=dict, repr=False)
    children: tuple[SyntaxNode, ...] = field(default=(), repr=False)
    # Set once by the builder; never used for ownership.
    parent: SyntaxNode | None = field(default=None, repr=False)

    def child(self, name: str) -> SyntaxNode | None:
        return self.fields.get(name)

    def items(self, name: str) -> tuple[SyntaxNode | None, ...]:
        return self.lists.get(name, ())

    def is_kind(self, *kinds: NodeKind) -> bool:
        return self.kind in kinds

    @property
    def parenthesized(self) -> bool:
        return self.group_span != self.span

    def ancestors(self) -> Iterator[SyntaxNode]:
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def walk(self) -> Iterator[SyntaxNode]:
        """Yield this node and every descendant, depth-first pre-order."""
        stack: list[SyntaxNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass(frozen=True)
class SourceFile:
    text: str
    language: str
    root: SyntaxNode
    path: Path | None = None

    def text_of(self, node: SyntaxNode) -> str:
        return self.text[node.span.start : node.span.end]

    def group_text_of(self, node: SyntaxNode) -> str:
        """Source text of ``node`` including any grouping parentheses around it."""
        return self.text[node.group_span.start : node.group_span.end]

    def slice(self, start: int, end: int) -> str:
        return self.text[start:end]

    def walk(self) -> Iterator[SyntaxNode]:
        return self.root.walk()


def parse_source(text: str, language: str, path: Path | None = None) -> SourceFile:
    resolved_language = normalize_language(language)
    parser = get_parser(cast(SupportedLanguage, resolved_language))
    source_bytes = text.encode("utf-8")
    tree = parser.parse(source_bytes)

    if tree.root_node.has_error:
        row, column = _first_error_point(tree.root_node)
        raise SourceParseError(f"Syntax error in {path or '<source>'} at line {row + 1}, column {column + 1}")

    builder = _TreeBuilder(text, source_bytes)
    root = builder.build(tree.root_node)
    return SourceFile(text=text, language=resolved_language, root=root, path=path)


def parse_file(path: str | Path, language: str | None = None) -> SourceFile:
    file_path = Path(path)
    resolved_language = normalize_language(language) if language else detect_language_from_path(file_path)

    try:
        text = file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None

    return parse_source(text, resolved_language, file_path)


def _first_error_point(root: Node) -> tuple[int, int]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0], node.start_point[1]
        stack.extend(reversed([child for child in node.children if child.has_error or child.is_missing]))
    return root.start_point[0], root.start_point[1]


def _parse_number(raw: str) -> tuple[str, Any]:
    text = raw.replace("_", "")
    if text.endswith("n"):
        return "bigint", int(text[:-1], 0)
    lowered = text.lower()
    if lowered.startswith(("0x", "0o", "0b")):
        return "number", int(text, 0)
    if len(text) > 1 and text.startswith("0") and text.isdigit():
        # legacy octal
        return "number", int(text, 8) if all(c in "01234567" for c in text) else int(text)
    number = float(text)
    if number.is_integer() and "e" not in lowered:
        return "number", int(number)
    return "number", number


_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    "\n": "",
}


def _decode_escape(raw: str) -> str:
    body = raw[1:]
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    if body.startswith("u{") and body.endswith("}"):
        return chr(int(body[2:-1], 16))
    if body.startswith(("u", "x")) and len(body) > 1:
        try:
            return chr(int(body[1:], 16))
        except ValueError:
            return body
    return body


class _TreeBuilder:
    def __init__(self, text: str, source_bytes: bytes) -> None:
        self._text = text
        self._bytes = source_bytes
        self._byte_to_char: list[int] | None = None
        if len(source_bytes) != len(text):
            mapping: list[int] = []
            for index, char in enumerate(text):
                mapping.extend([index] * len(char.encode("utf-8")))
            mapping.append(len(text))
            self._byte_to_char = mapping
        self._line_starts = [0] + [i + 1 for i, char in enumerate(text) if char == "\n"]

    # -- spans ---------------------------------------------------------------

    def _char(self, byte_offset: int) -> int:
        if self._byte_to_char is None:
            return byte_offset
        return self._byte_to_char[byte_offset]

    def _span(self, node: Node) -> Span:
        start = self._char(node.start_byte)
        end = self._char(node.end_byte)
        start_line = bisect.bisect_right(self._line_starts, start) - 1
        end_line = bisect.bisect_right(self._line_starts, end) - 1
        return Span(
            start=start,
            end=end,
            start_line=start_line + 1,
            start_column=start - self._line_starts[start_line] + 1,
            end_line=end_line + 1,
            end_column=end - self._line_starts[end_line] + 1,
        )

    def _raw_text(self, node: Node) -> str:
        return self._bytes[node.start_byte : node.end_byte].decode("utf-8")

    # -- construction --------------------------------------------------------

    def build(self, node: Node) -> SyntaxNode:
        if node.type == "parenthesized_expression":
            inner = _named(node)
            if len(inner) == 1:
                built = self.build(inner[0])
                built.group_span = self._span(node)
                return built

        handler = getattr(self, f"_build_{node.type}", None)
        if handler is not None:
            return cast(SyntaxNode, handler(node))
        if node.type in _IDENTIFIER_TYPES:
            return self._leaf(node, NodeKind.IDENTIFIER, name=self._raw_text(node))
        return self._build_other(node)

    def _make(
        self,
        node: Node,
        kind: NodeKind,
        fields: dict[str, SyntaxNode | None] | None = None,
        lists: dict[str, tuple[SyntaxNode | None, ...]] | None = None,
        **attrs: Any,
    ) -> SyntaxNode:
        fields = fields or {}
        lists = lists or {}
        span = self._span(node)
        children: list[SyntaxNode] = [child for child in fields.values() if child is not None]
        for items in lists.values():
            children.extend(child for child in items if child is not None)
        unique: dict[int, SyntaxNode] = {id(child): child for child in children}
        ordered = tuple(sorted(unique.values(), key=lambda child: (child.span.start, child.span.end)))
        built = SyntaxNode(
            kind=kind,
            raw_type=node.type,
            span=span,
            group_span=span,
            fields=fields,
            lists=lists,
            children=ordered,
            **attrs,
        )
        for child in ordered:
            child.parent = built
        return built

    def _leaf(self, node: Node, kind: NodeKind, **attrs: Any) -> SyntaxNode:
        return self._make(node, kind, **attrs)

    def _opt(self, node: Node | None) -> SyntaxNode | None:
        return self.build(node) if node is not None else None

    def _field(self, node: Node, name: str) -> SyntaxNode | None:
        return self._opt(node.child_by_field_name(name))

    def _build_other(self, node: Node) -> SyntaxNode:
        fields: dict[str, SyntaxNode | None] = {}
        repeated: dict[str, list[SyntaxNode]] = {}
        unnamed: list[SyntaxNode] = []
        for index, child in enumerate(node.children):
            if not child.is_named or child.type in _COMMENT_TYPES:
                continue
            built = self.build(child)
            field_name = node.field_name_for_child(index)
            if field_name is None:
                unnamed.append(built)
            elif field_name in fields:
                repeated.setdefault(field_name, [cast(SyntaxNode, fields[field_name])]).append(built)
            else:
                fields[field_name] = built
        lists: dict[str, tuple[SyntaxNode | None, ...]] = {name: tuple(items) for name, items in repeated.items()}
        lists["children"] = tuple(unnamed)
        name = self._raw_text(node) if node.named_child_count == 0 else None
        return self._make(node, NodeKind.OTHER, fields, lists, name=name)

    # statements

    def _build_program(self, node: Node) -> SyntaxNode:
        return self._make(node, NodeKind.PROGRAM, lists={"body": self._statements(node)})

    def _build_statement_block(self, node: Node) -> SyntaxNode:
        return self._make(node, NodeKind.BLOCK, lists={"body": self._statements(node)})

    def _statements(self, node: Node) -> tuple[SyntaxNode | None, ...]:
        return tuple(self.build(child) for child in _named(node))

    def _build_expression_statement(self, node: Node) -> SyntaxNode:
        inner = _named(node)
        return self._make(node, NodeKind.EXPRESSION_STATEMENT, {"expression": self._opt(inner[0] if inner else None)})

    def _build_lexical_declaration(self, node: Node) -> SyntaxNode:
        keyword = node.child_by_field_name("kind")
        declarators = tuple(self.build(child) for child in _named(node) if child.type == "variable_declarator")
        return self._make(
            node,
            NodeKind.VARIABLE_DECLARATION,
            lists={"declarations": declarators},
            keyword=keyword.type if keyword is not None else node.children[0].type,
        )

    def _build_variable_declaration(self, node: Node) -> SyntaxNode:
        declarators = tuple(self.build(child) for child in _named(node) if child.type == "variable_declarator")
        return self._make(node, NodeKind.VARIABLE_DECLARATION, lists={"declarations": declarators}, keyword="var")

    def _build_variable_declarator(self, node: Node) -> SyntaxNode:
        return self._make(
            node,
            NodeKind.VARIABLE_DECLARATOR,
            {
                "id": self._field(node, "name"),
                "init": self._field(node, "value"),
                "type": self._field(node, "type"),
            },
        )

    def _build_if_statement(self, node: Node) -> SyntaxNode:
        alternative = node.child_by_field_name("alternative")
        alternate = None
        if alternative is not None:
            branch = _named(alternative)
            alternate = self._opt(branch[0] if branch else None)
        return self._make(
            node,
            NodeKind.IF,
            {
                "test": self._field(node, "condition"),
                "consequent": self._field(node, "consequence"),
                "alternate": alternate,
            },
        )

    def _build_while_statement(self, node: Node) -> SyntaxNode:
        return self._make(
            node, NodeKind.WHILE, {"test": self._field(node, "condition"), "body": self._field(node, "body")}
        )

    def _build_do_statement(self, node: Node) -> SyntaxNode:
        return self._make(
            node, NodeKind.DO_WHILE, {"body": self._field(node, "body"), "test": self._field(node, "condition")}
        )

    def _build_for_statement(self, node: Node) -> SyntaxNode:
        return self._make(
            node,
            NodeKind.FOR,
            {
                "init": self._loop_clause(node.child_by_field_name("initializer")),
                "test": self._loop_clause(node.child_by_field_name("condition")),
                "update": self._field(node, "increment"),
                "body": self._field(node, "body"),
            },
        )

    def _loop_clause(self, node: Node | None) -> SyntaxNode | None:
        # Older grammars wrap for-clauses in expression/empty statements.
        if node is None or node.type == "empty_statement":
            return None
        if node.type == "expression_statement":
            inner = _named(node)
            return self._opt(inner[0] if inner else None)
        return self.build(node)

    def _build_for_in_statement(self, node: Node) -> SyntaxNode:
        operator = next((child.type for child in node.children if child.type in ("in", "of")), "in")
        keyword = node.child_by_field_name("kind")
        return self._make(
            node,
            NodeKind.FOR_IN,
            {
                "left": self._field(node, "left"),
                "right": self._field(node, "right"),
                "body": self._field(node, "body"),
            },
            operator=operator,
            keyword=keyword.type if keyword is not None else None,
        )

    def _build_return_statement(self, node: Node) -> SyntaxNode:
        inner = _named(node)
        return self._make(node, NodeKind.RETURN, {"argument": self._opt(inner[0] if inner else None)})

    def _build_try_statement(self, node: Node) -> SyntaxNode:
        return self._make(
            node,
            NodeKind.TRY,
            {
                "block": self._field(node, "body"),
                "handler": self._field(node, "handler"),
                "finalizer": self._field(node, "finalizer"),
            },
        )

    def _build_catch_clause(self, node: Node) -> SyntaxNode:
        return self._make(
            node, NodeKind.CATCH, {"param": self._field(node, "parameter"), "body": self._field(node, "body")}
        )

    def _build_empty_statement(self, node: Node) -> SyntaxNode:
        return self._leaf(node, NodeKind.EMPTY)

    def _build_import_statement(self, node: Node) -> SyntaxNode:
        return self._make(node, NodeKind.IMPORT, lists={"specifiers": tuple(self.build(c) for c in _named(node))})

    def _build_class_declaration(self, node: Node) -> SyntaxNode:
        return self._make(
            node, NodeKind.CLASS_DECLARATION, {"id": self._field(node, "name"), "body": self._field(node, "body")}
        )

    # functions

    def _function(self, node: Node, kind: NodeKind) -> SyntaxNode:
        parameters = node.child_by_field_name("parameters")
        single = node.child_by_field_name("parameter")
        if single is not None:
            params: tuple[SyntaxNode | None, ...] = (self.build(single),)
        elif parameters is not None:
            params = tuple(self.build(child) for child in _named(parameters))
        else:
            params = ()
        return self._make(
            node,
            kind,
            {
                "id": self._field(node, "name"),
                "body": self._field(node, "body"),
                "returnType": self._field(node, "return_type"),
            },
            {"params": params},
        )

    def _build_function_declaration(self, node: Node) -> SyntaxNode:
        return self._function(node, NodeKind.FUNCTION_DECLARATION)

    def _build_generator_function_declaration(self, node: Node) -> SyntaxNode:
        return self._function(node, NodeKind.FUNCTION_DECLARATION)

    def _build_function_expression(self, node: Node) -> SyntaxNode:
        return self._function(node, NodeKind.FUNCTION_EXPRESSION)

    def _build_function(self, node: Node) -> SyntaxNode:
        return self._function(node, NodeKind.FUNCTION_EXPRESSION)

    def _build_generator_function(self, node: Node) -> SyntaxNode:
        return self._function(node, NodeKind.FUNCTION_EXPRESSION)

    def _build_arrow_function(self, node: Node) -> SyntaxNode:
        return self._function(node, NodeKind.ARROW_FUNCTION)

    # leaves

    def _build_private_property_identifier(self, node: Node) -> SyntaxNode:
        return self._leaf(node, NodeKind.PRIVATE_IDENTIFIER, name=self._raw_text(node))

    def _build_this(self, node: Node) -> SyntaxNode:
        return self._leaf(node, NodeKind.THIS)

    def _build_super(self, node: Node) -> SyntaxNode:
        return self._leaf(node, NodeKind.SUPER)

    def _build_number(self, node: Node) -> SyntaxNode:
        literal_type, value = _parse_number(self._raw_text(node))
        return self._leaf(node, NodeKind.LITERAL, literal_type=literal_type, value=value)

    def _build_string(self, node: Node) -> SyntaxNode:
        parts: list[str] = []
        for child in node.children:
            if child.type == "string_fragment":
                parts.append(self._raw_text(child))
            elif child.type == "escape_sequence":
                parts.append(_decode_escape(self._raw_text(child)))
        return self._leaf(node, NodeKind.LITERAL, literal_type="string", value="".join(parts))

    def _build_true(self, node: Node) -> SyntaxNode:
        return self._leaf(node, NodeKind.LITERAL, literal_type="boolean", value=True)

    def _build_false(self, node: Node) -> SyntaxNode:
        return self._leaf(node, NodeKind.LITERAL, literal_type="boolean", value=False)

    def _build_null(self, node: Node) -> SyntaxNode:
        return self._leaf(node, NodeKind.LITERAL, literal_type="null", value=None)

    def _build_regex(self, node: Node) -> SyntaxNode:
        pattern = node.child_by_field_name("pattern")
        flags = node.child_by_field_name("flags")
        value = (
            self._raw_text(pattern) if pattern is not None else "",
            self._raw_text(flags) if flags is not None else "",
        )
        return self._leaf(node, NodeKind.LITERAL, literal_type="regex", value=value)

    def _build_template_string(self, node: Node) -> SyntaxNode:
        expressions: list[SyntaxNode | None] = []
        for child in node.children:
            if child.type == "template_substitution":
                inner = _named(child)
                if inner:
                    expressions.append(self.build(inner[0]))
        return self._make(node, NodeKind.TEMPLATE_LITERAL, lists={"expressions": tuple(expressions)})

    # expressions

    def _build_member_expression(self, node: Node) -> SyntaxNode:
        return self._make(
            node,
            NodeKind.MEMBER,
            {"object": self._field(node, "object"), "property": self._field(node, "property")},
            optional=node.child_by_field_name("optional_chain") is not None,
        )

    def _build_subscript_expression(self, node: Node) -> SyntaxNode:
        return self._make(
            node,
            NodeKind.MEMBER,
            {"object": self._field(node, "object"), "property": self._field(node, "index")},
            computed=True,
            optional=node.child_by_field_name("optional_chain") is not None,
        )

    def _build_call_expression(self, node: Node) -> SyntaxNode:
        arguments = node.child_by_field_name("arguments")
        if arguments is not None and arguments.type == "template_string":
            return self._make(
                node,
                NodeKind.TAGGED_TEMPLATE,
                {"tag": self._field(node, "function"), "quasi": self.build(arguments)},
            )
        return self._make(
            node,
            NodeKind.CALL,
            {"callee": self._field(node, "function")},
            {"arguments": self._arguments(arguments)},
            optional=node.child_by_field_name("optional_chain") is not None,
        )

    def _build_new_expression(self, node: Node) -> SyntaxNode:
        return self._make(
            node,
            NodeKind.NEW,
            {"callee": self._field(node, "constructor")},
            {"arguments": self._arguments(node.child_by_field_name("arguments"))},
        )

    def _arguments(self, node: Node | None) -> tuple[SyntaxNode | None, ...]:
        if node is None:
            return ()
        return tuple(self.build(child) for child in _named(node))

    def _build_binary_expression(self, node: Node) -> SyntaxNode:
        operator_node = node.child_by_field_name("operator")
        operator = operator_node.type if operator_node is not None else ""
        kind = NodeKind.LOGICAL if operator in _LOGICAL_OPERATORS else NodeKind.BINARY
        return self._make(
            node,
            kind,
            {"left": self._field(node, "left"), "right": self._field(node, "right")},
            operator=operator,
        )

    def _build_unary_expression(self, node: Node) -> SyntaxNode:
        operator_node = node.child_by_field_name("operator")
        return self._make(
            node,
            NodeKind.UNARY,
            {"argument": self._field(node, "argument")},
            operator=operator_node.type if operator_node is not None else None,
        )

    def _build_update_expression(self, node: Node) -> SyntaxNode:
        operator_node = node.child_by_field_name("operator")
        return self._make(
            node,
            NodeKind.UPDATE,
            {"argument": self._field(node, "argument")},
            operator=operator_node.type if operator_node is not None else None,
        )

    def _build_ternary_expression(self, node: Node) -> SyntaxNode:
        return self._make(
            node,
            NodeKind.CONDITIONAL,
            {
                "test": self._field(node, "condition"),
                "consequent": self._field(node, "consequence"),
                "alternate": self._field(node, "alternative"),
            },
        )

    def _build_assignment_expression(self, node: Node) -> SyntaxNode:
        return self._make(
            node,
            NodeKind.ASSIGNMENT,
            {"left": self._field(node, "left"), "right": self._field(node, "right")},
            operator="=",
        )

    def _build_augmented_assignment_expression(self, node: Node) -> SyntaxNode:
        operator_node = node.child_by_field_name("operator")
        return self._make(
            node,
            NodeKind.ASSIGNMENT,
            {"left": self._field(node, "left"), "right": self._field(node, "right")},
            operator=operator_node.type if operator_node is not None else None,
        )

    def _build_sequence_expression(self, node: Node) -> SyntaxNode:
        expressions: list[SyntaxNode | None] = []
        pending = [node]
        while pending:
            current = pending.pop()
            for child in reversed(_named(current)):
                if child.type == "sequence_expression":
                    pending.append(child)
                else:
                    expressions.insert(0, self.build(child))
        return self._make(node, NodeKind.SEQUENCE, lists={"expressions": tuple(expressions)})

    def _build_array(self, node: Node) -> SyntaxNode:
        elements: list[SyntaxNode | None] = []
        expecting_element = True
        for child in node.children:
            if child.type in ("[", "]") or child.type in _COMMENT_TYPES:
                continue
            if child.type == ",":
                if expecting_element:
                    elements.append(None)
                expecting_element = True
                continue
            elements.append(self.build(child))
            expecting_element = False
        return self._make(node, NodeKind.ARRAY, lists={"elements": tuple(elements)})

    def _build_object(self, node: Node) -> SyntaxNode:
        properties: list[SyntaxNode | None] = []
        for child in _named(node):
            if child.type == "shorthand_property_identifier":
                identifier = self._leaf(child, NodeKind.IDENTIFIER, name=self._raw_text(child))
                properties.append(self._make(child, NodeKind.PROPERTY, {"key": identifier, "value": identifier}))
            else:
                properties.append(self.build(child))
        return self._make(node, NodeKind.OBJECT, lists={"properties": tuple(properties)})

    def _build_pair(self, node: Node) -> SyntaxNode:
        key_node = node.child_by_field_name("key")
        computed = key_node is not None and key_node.type == "computed_property_name"
        if computed and key_node is not None:
            inner = _named(key_node)
            key = self._opt(inner[0] if inner else None)
        else:
            key = self._opt(key_node)
        return self._make(
            node,
            NodeKind.PROPERTY,
            {"key": key, "value": self._field(node, "value")},
            computed=computed,
        )

    def _build_spread_element(self, node: Node) -> SyntaxNode:
        inner = _named(node)
        return self._make(node, NodeKind.SPREAD, {"argument": self._opt(inner[0] if inner else None)})

    def _build_await_expression(self, node: Node) -> SyntaxNode:
        inner = _named(node)
        return self._make(node, NodeKind.AWAIT, {"argument": self._opt(inner[0] if inner else None)})


def _named(node: Node) -> list[Node]:
    return [child for child in node.named_children if child.type not in _COMMENT_TYPES]
