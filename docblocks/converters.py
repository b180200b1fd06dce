"""Pluggable hooks used by the page renderer.

Each hook is a single-method interface with a default implementation, so a
richer Markdown converter, a project-specific @uses renderer or a different
navigation scheme can be substituted without touching the renderer.
"""

from dataclasses import dataclass
from html import escape
from typing import Protocol
from urllib.parse import urlencode

from docblocks.block_renderer import render_block_text
from docblocks.models import DeclarationKind


class TextConverter(Protocol):
    """Turns free-form description text into markup."""

    def convert(self, text: str) -> str:
        """Return markup for ``text``."""
        ...


class UsesRenderer(Protocol):
    """Renders one @uses reference."""

    def render(self, module: str, description: str) -> str:
        """Return markup for one module and its description."""
        ...


@dataclass(frozen=True)
class Reference:
    """What a navigation link points at; None means the unscoped view."""

    kind: DeclarationKind
    name: str


class LinkBuilder(Protocol):
    """Builds a link to a scoped (or, for None, the unscoped) document view."""

    def __call__(self, title: str, reference: Reference | None) -> str:
        """Return a link labelled ``title``."""
        ...


class BlockTextConverter:
    """Default converter backed by the built-in block renderer."""

    def convert(self, text: str) -> str:
        """Render with the built-in block renderer."""
        return render_block_text(text)


def markup_text(
    text: str,
    converter: TextConverter,
    *,
    inline: bool = False,
    link_target: str = "",
) -> str:
    """Convert text with ``converter`` and post-process the result.

    Links produced by the converter open in ``link_target``. With ``inline``
    a single enclosing paragraph is unwrapped so the result fits in a list
    item or table cell.
    """
    text = text.strip()
    if not text:
        return ""
    html = converter.convert(text)
    if link_target:
        html = html.replace("<a href=", f'<a target="{link_target}" href=')
    if inline:
        html = html.strip()
        if html.startswith("<p>") and "<p>" not in html[3:]:
            html = html[3:]
            if html.endswith("</p>"):
                html = html[:-4]
    return html


class PlainUsesRenderer:
    """Bold module name followed by the converted description."""

    def __init__(self, converter: TextConverter | None = None) -> None:
        self.converter = converter or BlockTextConverter()

    def render(self, module: str, description: str) -> str:
        """Render the module in bold and the description inline."""
        out = f"<b>{escape(module.lower())}</b>"
        if description:
            out += " " + markup_text(description, self.converter, inline=True)
        return out


class QueryLinkBuilder:
    """Links as query strings: ``?decl=name``, or ``?`` for the overview."""

    def __init__(self, param: str = "decl", base_query: dict[str, str] | None = None):
        self.param = param
        self.base_query = dict(base_query or {})

    def __call__(self, title: str, reference: Reference | None) -> str:
        query = dict(self.base_query)
        if reference is None:
            query.pop(self.param, None)
        else:
            query[self.param] = reference.name.strip().lower()
        href = "?" + urlencode(query)
        return f'<a href="{escape(href)}">{escape(title)}</a>'
