"""Reading source files and producing documents for them."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any

from docblocks.assembler import DocumentAssembler, select
from docblocks.document_cache import DocumentCache
from docblocks.models import ErrorKind, ParsedDocument, SourceUnit
from docblocks.syntax_config import syntax_for_extension

logger = logging.getLogger(__name__)


def load_source(path: Path) -> SourceUnit:
    """Read a source file; undecodable bytes are replaced."""
    return SourceUnit(
        filename=str(path),
        content=path.read_text(encoding="utf-8", errors="replace"),
        modified=path.stat().st_mtime,
    )


def _detached(document: ParsedDocument) -> ParsedDocument:
    """Copy the mutable parts a lookup may touch, leaving cached data intact."""
    return replace(
        document,
        errors=list(document.errors),
        debug=list(document.debug),
        selected=None,
    )


def document_for_file(
    path: str | Path,
    config: dict[str, Any],
    *,
    cache: DocumentCache | None = None,
    summary_only: bool = False,
    lookup: str = "",
) -> ParsedDocument:
    """Parse a file, reporting unusable input as an error document."""
    p = Path(path)
    filename = str(path)
    display = filename if config.get("debug") else p.name

    if not p.is_file():
        document = ParsedDocument(filename=filename)
        document.add_error(
            ErrorKind.SOURCE_UNAVAILABLE, f"Source file does not exist ({display})"
        )
        return document

    syntax = syntax_for_extension(config, p.suffix)
    if syntax is None:
        document = ParsedDocument(filename=filename)
        if not p.suffix:
            msg = f"Cannot identify the type of file to process ({display})"
        else:
            msg = f"Cannot document this type of file ({display})"
        document.add_error(ErrorKind.UNRECOGNIZED_UNIT_TYPE, msg)
        return document

    if summary_only:
        return DocumentAssembler(syntax, config).assemble(
            load_source(p), summary_only=True
        )

    cached = cache.get(filename) if cache is not None else None
    if cached is not None:
        logger.debug("Using cached document for %s", filename)
        document = _detached(cached)
        if config.get("debug"):
            document.debug.append("Loaded from cache")
    else:
        document = DocumentAssembler(syntax, config).assemble(load_source(p))
        if cache is not None:
            cache.put(filename, document)
            document = _detached(document)

    if lookup:
        select(document, lookup)
    return document


def summarize_file(
    path: str | Path,
    config: dict[str, Any],
    required: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Return the file-level documentation as a flat dictionary.

    ``summary`` is always present. ``since`` falls back to the file's
    modification date marked with ``(A)``. Keys of ``required`` missing from
    the documentation are filled in with the given initial values.
    """
    document = document_for_file(path, config, summary_only=True)
    main = document.main
    result: dict[str, Any] = {"summary": main.summary}
    if main.description:
        result["description"] = main.description
    result.update(main.tags)
    if main.uses:
        result["uses"] = dict(main.uses)

    if "since" not in result:
        try:
            modified = Path(path).stat().st_mtime
        except OSError:
            result["since"] = ""
        else:
            result["since"] = datetime.fromtimestamp(modified).strftime("%Y/%m/%d (A)")

    for key, initial in (required or {}).items():
        result.setdefault(key, initial)
    return result
