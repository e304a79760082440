"""Tests for language detection."""

from pathlib import Path

import pytest

from idiomfix.core.languages import (
    detect_language_from_path,
    is_supported_path,
    normalize_language,
    resolve_language,
)


class TestNormalizeLanguage:
    @pytest.mark.parametrize(
        ("alias", "expected"),
        [("js", "javascript"), ("JSX", "javascript"), ("ts", "typescript"), (" tsx ", "tsx")],
    )
    def test_aliases(self, alias: str, expected: str) -> None:
        assert normalize_language(alias) == expected

    def test_unsupported(self) -> None:
        with pytest.raises(ValueError, match="Unsupported language"):
            normalize_language("python")


class TestDetectLanguage:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("a.js", "javascript"),
            ("a.mjs", "javascript"),
            ("a.cjs", "javascript"),
            ("a.jsx", "javascript"),
            ("a.ts", "typescript"),
            ("a.MTS", "typescript"),
            ("a.tsx", "tsx"),
        ],
    )
    def test_extensions(self, name: str, expected: str) -> None:
        assert detect_language_from_path(Path(name)) == expected

    def test_unsupported_extension(self) -> None:
        with pytest.raises(ValueError, match="Unsupported file extension"):
            detect_language_from_path(Path("a.py"))

    def test_is_supported_path(self) -> None:
        assert is_supported_path(Path("src/a.ts")) is True
        assert is_supported_path(Path("Makefile")) is False


class TestResolveLanguage:
    def test_explicit_language_wins(self) -> None:
        assert resolve_language("ts", Path("a.js")) == "typescript"

    def test_falls_back_to_path(self) -> None:
        assert resolve_language(None, Path("a.jsx")) == "javascript"

    def test_requires_one_of_them(self) -> None:
        with pytest.raises(ValueError, match="Language must be provided"):
            resolve_language(None, None)
