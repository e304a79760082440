"""Idioms as data, and the per-node-kind dispatch table that runs them.

An ``Idiom`` bundles the matchers for one legacy pattern with its message and
replacement templates. A matcher is a plain function ``(node, context)`` that
returns a ``Match`` or ``None``; it never reports or fixes anything itself.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum

from idiomfix.core.syntax import NodeKind, SourceFile, SyntaxNode
from idiomfix.core.types import TypeOracle

logger = logging.getLogger(__name__)


class FixMode(Enum):
    CODE = "code"
    SUGGESTION = "suggestion"
    NONE = "none"


@dataclass(frozen=True)
class Match:
    node: SyntaxNode
    message_key: str
    captures: Mapping[str, SyntaxNode | str] = field(default_factory=dict)
    # Falls back to ``message_key`` when not set.
    template_key: str | None = None
    data: Mapping[str, str] = field(default_factory=dict)
    idiom_id: str = ""


@dataclass(frozen=True)
class MatchContext:
    source: SourceFile
    types: TypeOracle

    def text(self, node: SyntaxNode) -> str:
        return self.source.text_of(node)


MatchFunction = Callable[[SyntaxNode, MatchContext], Match | None]


@dataclass(frozen=True, eq=False)
class Idiom:
    id: str
    description: str
    messages: Mapping[str, str]
    matchers: Mapping[NodeKind, Sequence[MatchFunction]]
    templates: Mapping[str, str] = field(default_factory=dict)
    mode: FixMode = FixMode.CODE
    # Message key of the suggestion offered in ``FixMode.SUGGESTION``.
    suggestion_message: str | None = None
    requires_types: bool = False

    def __post_init__(self) -> None:
        if self.mode == FixMode.SUGGESTION and self.suggestion_message not in self.messages:
            raise ValueError(f"Idiom '{self.id}' offers suggestions but has no suggestion message.")


class DispatchTable:
    """Maps each node kind to the ``(idiom, matcher)`` pairs interested in it, in registration order."""

    def __init__(self, idioms: Sequence[Idiom]) -> None:
        table: dict[NodeKind, list[tuple[Idiom, MatchFunction]]] = {}
        for idiom in idioms:
            for kind, matchers in idiom.matchers.items():
                table.setdefault(kind, []).extend((idiom, matcher) for matcher in matchers)
        self._table = {kind: tuple(entries) for kind, entries in table.items()}

    @property
    def kinds(self) -> frozenset[NodeKind]:
        return frozenset(self._table)

    def entries_for(self, kind: NodeKind) -> tuple[tuple[Idiom, MatchFunction], ...]:
        return self._table.get(kind, ())

    def dispatch(self, node: SyntaxNode, context: MatchContext) -> Iterator[tuple[Idiom, Match]]:
        """Run the matchers for ``node``; each idiom contributes at most one match."""
        matched: set[str] = set()
        for idiom, matcher in self.entries_for(node.kind):
            if idiom.id in matched:
                continue
            match = matcher(node, context)
            if match is None:
                continue
            if match.node is not node:
                raise ValueError(f"Matcher of '{idiom.id}' reported a node other than the one it was given.")
            matched.add(idiom.id)
            logger.debug("%s matched %s at line %d", idiom.id, node.kind, node.span.start_line)
            yield idiom, replace(match, idiom_id=idiom.id)
