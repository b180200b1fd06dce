"""Documentation quality checks run over an assembled document."""

from __future__ import annotations

import re
from typing import Any

from docblocks.models import (
    DeclarationDoc,
    DocBlock,
    DocumentError,
    ErrorKind,
    ParsedDocument,
)
from docblocks.syntax_config import SyntaxConfig


def lint_document(
    document: ParsedDocument,
    syntax: SyntaxConfig,
    lint_config: dict[str, Any] | None = None,
) -> list[DocumentError]:
    """Check a document for missing documentation.

    Checks:
    1. The file and every declaration should have a summary, except for
       exempt names (constructors) and exempt kinds (namespaces, classes).
    2. The file should name an author.
    3. Declarations with arguments should document each of them with @param,
       and should not document arguments they do not take.

    Args:
        document: The assembled document (not modified)
        syntax: Syntax profile, for the argument variable pattern
        lint_config: The "lint" configuration section

    Returns:
        Messages in file order, all of kind MISSING_DOCUMENTATION
    """
    lint_config = lint_config or {}
    if not lint_config.get("enabled", True):
        return []

    exempt_names = set(lint_config.get("summary_exempt_names") or [])
    exempt_kinds = set(lint_config.get("summary_exempt_kinds") or [])
    messages: list[str] = []

    messages.extend(_lint_main(document.main))
    for decl in document.declarations:
        exempt = decl.name in exempt_names or decl.kind.value in exempt_kinds
        messages.extend(_lint_declaration(decl, syntax, check_summary=not exempt))

    return [DocumentError(ErrorKind.MISSING_DOCUMENTATION, m) for m in messages]


def _lint_main(main: DocBlock) -> list[str]:
    messages = []
    if not main.summary:
        messages.append("No summary documented for the file")
    if not main.tag("author"):
        messages.append("No author documented for the file")
    return messages


def _lint_declaration(
    decl: DeclarationDoc, syntax: SyntaxConfig, *, check_summary: bool
) -> list[str]:
    messages = []
    name = decl.name
    if check_summary and not decl.doc.summary:
        messages.append(f"No summary documented for {name}")

    args = decl.signature.arguments
    if decl.kind.is_container or not args:
        return messages

    if not decl.doc.params:
        messages.append(f"No @param documented for {name}")
        return messages

    if not syntax.param_pattern:
        return messages
    declared = list(dict.fromkeys(re.findall(syntax.param_pattern, args)))
    if not declared:
        return messages
    documented = [p for p in decl.doc.params if p]
    missing = [p for p in declared if p not in decl.doc.params]
    unknown = [p for p in documented if p not in declared]
    if missing:
        messages.append(f"Undocumented @param in {name} ({', '.join(missing)})")
    if unknown:
        messages.append(f"Unknown @param in {name} ({', '.join(unknown)})")
    return messages


def compute_coverage(document: ParsedDocument) -> float:
    """Return the fraction of non-container declarations with a summary."""
    members = [d for d in document.declarations if not d.kind.is_container]
    if not members:
        return 1.0
    return sum(1 for d in members if d.doc.summary) / len(members)
