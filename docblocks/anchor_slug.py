"""Utility for generating anchor ids for declarations."""

import re

from docblocks.models import DeclarationDoc, DeclarationKind

MEMBER_SEPARATOR = "::"


def anchor_slug(s: str) -> str:
    """Generate an anchor id: lower, hyphenate non-alnum."""
    s = s.strip().lower()
    s = re.sub(r"[^a-z0-9_]+", "-", s)
    s = re.sub(r"-{2,}", "-", s).strip("-")
    return s or "section"


def declaration_anchors(declarations: list[DeclarationDoc]) -> list[str]:
    """Compute one unique anchor id per declaration, in the same order.

    Members are qualified with the class they follow (``Class::method``), so
    two classes declaring the same method get distinct anchors. Remaining
    collisions are numbered.
    """
    anchors: list[str] = []
    seen: set[str] = set()
    current_class = ""
    for decl in declarations:
        if decl.kind is DeclarationKind.CLASS:
            current_class = decl.name
            qualified = decl.name
        elif decl.kind is DeclarationKind.NAMESPACE or not current_class:
            qualified = decl.name
        else:
            qualified = f"{current_class}{MEMBER_SEPARATOR}{decl.name}"

        slug = anchor_slug(qualified)
        anchor = slug
        n = 2
        while anchor in seen:
            anchor = f"{slug}-{n}"
            n += 1
        seen.add(anchor)
        anchors.append(anchor)
    return anchors
