from typing import Any, Protocol

from idiomfix.core.syntax import SyntaxNode


class TypeService(Protocol):
    @property
    def has_type_information(self) -> bool: ...

    def get_type_of(self, node: SyntaxNode) -> Any | None: ...

    def is_array_like(self, type_: Any) -> bool: ...

    def is_string_like(self, type_: Any) -> bool: ...

    def is_set_like(self, type_: Any) -> bool: ...

    def type_name(self, type_: Any) -> str | None: ...
