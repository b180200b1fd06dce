"""Rendering of parsed documents as HTML pages."""

from __future__ import annotations

from html import escape
from pathlib import PurePath
from typing import Any

from docblocks.anchor_slug import anchor_slug, declaration_anchors
from docblocks.converters import (
    BlockTextConverter,
    LinkBuilder,
    PlainUsesRenderer,
    QueryLinkBuilder,
    Reference,
    TextConverter,
    UsesRenderer,
    markup_text,
)
from docblocks.html_table import html_table
from docblocks.load_config import DEFAULT_CONFIG
from docblocks.models import (
    DeclarationDoc,
    DeclarationKind,
    DeclarationSignature,
    DocBlock,
    ParsedDocument,
)
from docblocks.tag_text import tag_text

# Kinds listed without a "(keyword)" annotation
PLAIN_FUNCTION_KINDS = frozenset(
    {DeclarationKind.FUNCTION, DeclarationKind.PUBLIC_METHOD}
)
INFO_FIELDS = ("version", "author", "since")


class PageRenderer:
    """Lays out a document: title, summary, declarations and tag sections."""

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        *,
        converter: TextConverter | None = None,
        uses_renderer: UsesRenderer | None = None,
        link_builder: LinkBuilder | None = None,
    ) -> None:
        """Initialize the renderer; hooks default to the built-in ones."""
        defaults = DEFAULT_CONFIG["render"]
        render_config = (config or {}).get("render") or {}
        self.labels = {**defaults["labels"], **(render_config.get("labels") or {})}
        self.link_target = render_config.get("link_target", defaults["link_target"])
        self.namespace_separator = render_config.get(
            "namespace_separator", defaults["namespace_separator"]
        )
        self.converter = converter or BlockTextConverter()
        self.uses_renderer = uses_renderer or PlainUsesRenderer(self.converter)
        self.link_builder = link_builder or QueryLinkBuilder(
            render_config.get("link_param", defaults["link_param"])
        )

    def render(
        self,
        document: ParsedDocument,
        *,
        clickable: bool = False,
        scope: str = "",
        show_errors: bool = True,
    ) -> str:
        """Render a whole document, or the one declaration named by ``scope``.

        Without ``scope`` the declaration selected on the document (if any)
        is used. An unknown ``scope`` is reported in the error block and the
        unscoped document is rendered. The document is not modified.
        """
        errors = document.error_messages()
        selected = document.selected
        if scope:
            selected = document.lookup(scope)
            if selected is None:
                errors.append(f"No declaration matches the search ({scope.strip()})")

        header = escape(PurePath(document.filename).name)
        if selected is not None and clickable:
            header += " " + self.link_builder(self.labels["back"], None)

        parts = ['<div class="docblock">', f'<div class="docfile">{header}</div>']

        if errors and show_errors and selected is None:
            parts.append(self._render_errors(errors))

        if selected is None:
            parts.append(
                self.render_block(
                    document.main,
                    siblings=document.declarations,
                    clickable=clickable,
                )
            )
            if not clickable:
                parts.append(self._render_contents(document.declarations))
        else:
            parts.append(self.render_declaration(selected, clickable=clickable))

        parts.append("</div>")
        return "\n".join(p for p in parts if p) + "\n"

    def render_declaration(
        self,
        decl: DeclarationDoc,
        *,
        clickable: bool = False,
        anchor: str | None = None,
    ) -> str:
        """Render one declaration with its documentation."""
        return self.render_block(
            decl.doc, signature=decl.signature, clickable=clickable, anchor=anchor
        )

    def render_block(
        self,
        block: DocBlock,
        *,
        signature: DeclarationSignature | None = None,
        siblings: list[DeclarationDoc] | None = None,
        clickable: bool = False,
        anchor: str | None = None,
    ) -> str:
        """Render a documentation block, optionally with its declaration."""
        parts: list[str] = []
        syntax_line = ""
        if signature is not None:
            parts.append(
                f'<p class="docfunction" id="{anchor or anchor_slug(signature.name)}">'
                f"{escape(signature.name)}</p>"
            )
            syntax_line = self._render_syntax(signature, block)

        if block.summary:
            parts.append(f'<div class="docsummary">{self._markup(block.summary)}</div>')
        if syntax_line:
            parts.append(syntax_line)
        if block.description:
            description = self._markup(block.description)
            parts.append(f'<div class="docdesc">{description}</div>')

        if siblings:
            parts.extend(self._render_siblings(siblings, clickable))

        parts.extend(self._render_uses(block))
        parts.extend(self._render_params(block))
        parts.extend(self._render_returns(block))
        parts.extend(self._render_info(block))
        return "\n".join(parts)

    def _markup(self, text: str, *, inline: bool = False) -> str:
        return markup_text(
            text, self.converter, inline=inline, link_target=self.link_target
        )

    def _render_errors(self, errors: list[str]) -> str:
        """Render problems as a block the reader can fold away."""
        items = "".join(f"<li>{escape(e)}</li>" for e in errors)
        title = f"{escape(self.labels['errors'])} ({len(errors)})"
        return (
            f'<details class="docerrors" open><summary>{title}</summary>'
            f"<ul>{items}</ul></details>"
        )

    def _render_syntax(self, signature: DeclarationSignature, block: DocBlock) -> str:
        """Render the declaration line: keyword, name, arguments, return type."""
        line = f"{signature.keyword} {signature.name}"
        if not signature.kind.is_container:
            line += f"({signature.arguments})"
            if block.returns is not None and block.returns.type:
                line += f" : {block.returns.type}"
        elif signature.arguments:
            line += f" {signature.arguments}"
        return f'<pre class="docsyntax">{escape(line)}</pre>'

    def _render_siblings(
        self, siblings: list[DeclarationDoc], clickable: bool
    ) -> list[str]:
        """Render the declaration listing, grouped under the preceding class."""
        parts: list[str] = []
        title = self.labels["functions"]
        intro = ""
        is_class = False
        namespace = ""
        items: dict[str, str] = {}

        def flush() -> None:
            if not items and not is_class:
                return
            listing = "".join(f"<li>{items[k]}</li>" for k in sorted(items))
            parts.append(
                f'<div class="docfun"><h2>{escape(title)}</h2>{intro}'
                + (f"<ul>{listing}</ul>" if listing else "")
                + "</div>"
            )
            items.clear()

        for decl, anchor in zip(siblings, declaration_anchors(siblings)):
            if decl.kind is DeclarationKind.NAMESPACE:
                namespace = decl.name + self.namespace_separator
            elif decl.kind is DeclarationKind.CLASS:
                flush()
                is_class = True
                title = f"{self.labels['class']} {namespace}{decl.name}"
                intro = self._markup(decl.doc.summary) if decl.doc.summary else ""
                if clickable:
                    ref = Reference(decl.kind, decl.name)
                    link = self.link_builder(self.labels["view_details"], ref)
                    intro += f"<p>{link}</p>"
            else:
                items[decl.name.lower()] = self._render_sibling_item(
                    decl, clickable, anchor
                )

        flush()
        return parts

    def _render_sibling_item(
        self, decl: DeclarationDoc, clickable: bool, anchor: str
    ) -> str:
        if clickable:
            entry = self.link_builder(decl.name, Reference(decl.kind, decl.name))
        else:
            entry = (
                f'<a href="#{anchor}"><b>{escape(decl.name)}</b></a>'
            )
        if decl.kind not in PLAIN_FUNCTION_KINDS:
            entry += f" ({escape(decl.signature.keyword)})"
        if decl.doc.summary:
            entry += " -- " + self._markup(decl.doc.summary, inline=True)
        return entry

    def _render_contents(self, declarations: list[DeclarationDoc]) -> str:
        """Render every declaration in full (non-navigable view)."""
        sections = [
            self.render_declaration(d, anchor=anchor)
            for d, anchor in zip(declarations, declaration_anchors(declarations))
            if d.kind is not DeclarationKind.NAMESPACE
        ]
        if not sections:
            return ""
        body = "\n".join(sections)
        return (
            f'<div class="docnonav"><h1>{escape(self.labels["contents"])}</h1>\n'
            f"{body}\n</div>"
        )

    def _render_uses(self, block: DocBlock) -> list[str]:
        if not block.uses:
            return []
        items = "".join(
            f"<li>{self.uses_renderer.render(module, desc)}</li>"
            for module, desc in block.uses.items()
        )
        return [
            f'<div class="docuses"><h2>{escape(self.labels["uses"])}</h2>'
            f"<ul>{items}</ul></div>"
        ]

    def _render_params(self, block: DocBlock) -> list[str]:
        if not block.params:
            return []
        rows = [
            [
                f"<b>{escape(name)}</b>",
                f"<code>{escape(p.type)}</code>" if p.type else "",
                self._markup(p.description, inline=True),
            ]
            for name, p in block.params.items()
        ]
        table = html_table(["Name", "Type", "Description"], rows, "docparams")
        return [
            f'<div class="docparam"><h2>{escape(self.labels["parameters"])}</h2>\n'
            f"{table}\n</div>"
        ]

    def _render_returns(self, block: DocBlock) -> list[str]:
        ret = block.returns
        if ret is None:
            return []
        body = f"<code>{escape(ret.type)}</code>" if ret.type else ""
        if ret.description:
            body += (" " if body else "") + self._markup(ret.description, inline=True)
        return [
            f'<div class="docreturn"><h2>{escape(self.labels["returns"])}</h2>'
            f"<ul><li>{body}</li></ul></div>"
        ]

    def _render_info(self, block: DocBlock) -> list[str]:
        parts = []
        for name in INFO_FIELDS:
            value = tag_text(block.tags.get(name))
            if not value:
                continue
            text = escape(value).replace("\n", "<br>\n")
            parts.append(
                f'<p class="docinfo"><b>{escape(self.labels[name])}:</b> {text}</p>'
            )
        return parts


def render_document(
    document: ParsedDocument,
    config: dict[str, Any] | None = None,
    *,
    clickable: bool = False,
    scope: str = "",
    show_errors: bool = True,
) -> str:
    """Render a document with the default hooks."""
    return PageRenderer(config).render(
        document, clickable=clickable, scope=scope, show_errors=show_errors
    )
