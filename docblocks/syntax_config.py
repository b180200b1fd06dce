"""Comment, string and declaration syntax for one source language."""

import re
from dataclasses import dataclass, field
from typing import Any

from docblocks.load_config import DEFAULT_CONFIG
from docblocks.models import DeclarationKind


@dataclass(frozen=True)
class SyntaxConfig:
    """Markers the scanner, matcher and tag parser are driven by."""

    code_start: str = ""
    code_start_full: str = ""
    code_end: str = ""
    line_comment: str = "//"
    line_comment_end: str = "\n"
    block_comment_start: str = "/*"
    block_comment_end: str = "*/"
    doc_comment_start: str = "/**"
    quotes: tuple[str, ...] = ('"', "'")
    escape: str = "\\"
    # keyword -> kind, in configuration order
    declarations: tuple[tuple[str, DeclarationKind], ...] = ()
    statement_separators: frozenset[str] = field(
        default_factory=lambda: frozenset("{};")
    )
    no_space_before: frozenset[str] = field(default_factory=lambda: frozenset("(),"))
    args_start: str = "("
    args_end: str = ")"
    doc_line_marker: str = "*"
    tag_prefix: str = "@"
    param_pattern: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyntaxConfig":
        """Build a syntax profile from a configuration section."""
        declarations = []
        for keyword, kind in (data.get("declarations") or {}).items():
            try:
                declarations.append((str(keyword), DeclarationKind(kind)))
            except ValueError as e:
                msg = f"Unknown declaration kind {kind!r} for keyword {keyword!r}"
                raise ValueError(msg) from e

        pattern = data.get("param_pattern") or ""
        if pattern:
            try:
                re.compile(pattern)
            except re.error as e:
                msg = f"Invalid param_pattern {pattern!r}: {e}"
                raise ValueError(msg) from e

        return cls(
            code_start=data.get("code_start") or "",
            code_start_full=data.get("code_start_full") or "",
            code_end=data.get("code_end") or "",
            line_comment=data.get("line_comment") or "",
            line_comment_end=data.get("line_comment_end") or "\n",
            block_comment_start=data.get("block_comment_start") or "",
            block_comment_end=data.get("block_comment_end") or "",
            doc_comment_start=data.get("doc_comment_start") or "",
            quotes=tuple(data.get("quotes") or ()),
            escape=data.get("escape") or "",
            declarations=tuple(declarations),
            statement_separators=frozenset(data.get("statement_separators") or ()),
            no_space_before=frozenset(data.get("no_space_before") or ()),
            args_start=data.get("args_start") or "(",
            args_end=data.get("args_end") or ")",
            doc_line_marker=data.get("doc_line_marker") or "*",
            tag_prefix=data.get("tag_prefix") or "@",
            param_pattern=pattern,
        )


def php_syntax() -> SyntaxConfig:
    """Return the built-in PHP profile."""
    return SyntaxConfig.from_dict(DEFAULT_CONFIG["syntax"]["php"])


def syntax_for_extension(config: dict[str, Any], extension: str) -> SyntaxConfig | None:
    """Look up the syntax profile configured for a file extension."""
    profile = (config.get("languages") or {}).get(extension.lower())
    if not profile:
        return None
    section = (config.get("syntax") or {}).get(profile)
    if not section:
        return None
    return SyntaxConfig.from_dict(section)
