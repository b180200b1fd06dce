"""Orchestration of scanning, matching and tag parsing into a document."""

from __future__ import annotations

import logging
from typing import Any

from docblocks.lint import lint_document
from docblocks.matcher import DeclarationMatcher
from docblocks.models import (
    DeclarationDoc,
    DocBlock,
    ErrorKind,
    ParsedDocument,
    SourceUnit,
    build_name_index,
)
from docblocks.scanner import Scanner
from docblocks.syntax_config import SyntaxConfig
from docblocks.tag_parser import TagParser

logger = logging.getLogger(__name__)


class DocumentAssembler:
    """Builds a ParsedDocument from one source unit."""

    def __init__(
        self, syntax: SyntaxConfig, config: dict[str, Any] | None = None
    ) -> None:
        """Initialize the pipeline stages for a syntax profile."""
        self.syntax = syntax
        self.config = config or {}
        self.scanner = Scanner(syntax)
        self.matcher = DeclarationMatcher(syntax)
        self.parser = TagParser(syntax)

    def assemble(
        self,
        source: SourceUnit,
        *,
        summary_only: bool = False,
        lookup: str = "",
    ) -> ParsedDocument:
        """Parse a source unit.

        With ``summary_only`` parsing stops at the first documentation block,
        which becomes the main block; declarations are not collected and no
        lint runs. ``lookup`` selects one declaration by name (case
        insensitive); a miss is reported as an error on the document.
        """
        debug = bool(self.config.get("debug"))
        document = ParsedDocument(filename=source.filename)
        main: DocBlock | None = None
        pending = DocBlock()
        pending_is_orphan = False
        declarations: list[DeclarationDoc] = []

        for segment in self.scanner.iter_segments(source.content):
            matched = self.matcher.match(segment.code, pending)
            if matched:
                declarations.extend(matched)
                pending = DocBlock()
                pending_is_orphan = False
            elif pending_is_orphan:
                logger.debug(
                    "%s: documentation block not followed by a declaration: %r",
                    source.filename,
                    pending.summary,
                )
                if debug:
                    document.debug.append(f"Orphan block: {pending.summary}")

            if segment.doc is None:
                break

            block = self.parser.parse(segment.doc)
            if main is None and not declarations:
                main = block
                if summary_only:
                    break
            else:
                pending = block
                pending_is_orphan = True

        document.main = main or DocBlock()
        if summary_only:
            return document

        document.declarations = declarations
        document.index = build_name_index(declarations)
        if debug:
            document.debug.append(
                f"Found {len(declarations)} declarations in {source.filename}"
            )
        document.errors.extend(
            lint_document(document, self.syntax, self.config.get("lint"))
        )

        if lookup:
            select(document, lookup)
        return document


def select(document: ParsedDocument, name: str) -> DeclarationDoc | None:
    """Scope a document to one declaration, reporting a miss as an error."""
    found = document.lookup(name)
    document.selected = found
    if found is None:
        document.add_error(
            ErrorKind.LOOKUP_NOT_FOUND,
            f"No declaration matches the search ({name.strip()})",
        )
    return found
