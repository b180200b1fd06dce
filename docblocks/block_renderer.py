"""Minimal block-structured text to HTML renderer.

Understood structure, one construct per line:

- ``- item`` or ``* item``: list item.
- ``> text``: blockquote.
- a line holding only three backticks: toggles a preformatted region whose
  content is escaped and kept verbatim.
- ``#`` to ``######`` followed by a space: heading.
- anything else: paragraph text. Consecutive plain lines are joined until a
  line ends in ``.`` or ``:`` or a blank line follows.
"""

import re
from html import escape

FENCE = "```"
SENTENCE_ENDINGS = (".", ":")
SPECIAL_STARTS = ("-", "*", ">", "#")
HEADING_RE = re.compile(r"^(#{1,6}) (.*)$")


class ContainerStack:
    """Open container tags, innermost last."""

    def __init__(self) -> None:
        self.tags: list[str] = []

    def open(self, tag: str) -> str:
        """Make ``tag`` the innermost container, closing any others first."""
        if self.tags and self.tags[-1] == tag:
            return ""
        out = self.close_all()
        self.tags.append(tag)
        return f"{out}<{tag}>"

    def close(self, tag: str) -> str:
        """Close containers down to and including ``tag``."""
        out = []
        while self.tags:
            current = self.tags.pop()
            out.append(f"</{current}>")
            if current == tag:
                break
        return "".join(out)

    def close_all(self) -> str:
        """Close every open container, innermost first."""
        out = "".join(f"</{t}>" for t in reversed(self.tags))
        self.tags.clear()
        return out


def render_block_text(text: str) -> str:
    """Render block-structured text as HTML."""
    lines = text.split("\n")
    stack = ContainerStack()
    out: list[str] = []
    in_pre = False
    k = 0

    while k < len(lines):
        raw = lines[k]
        k += 1

        if in_pre:
            if raw.strip() == FENCE:
                in_pre = False
                out.append(stack.close("pre") + "\n")
            else:
                out.append(escape(raw) + "\n")
            continue

        line = raw.strip()
        if not line:
            continue

        if line == FENCE:
            in_pre = True
            out.append(stack.open("pre"))
            continue

        heading = HEADING_RE.match(line)
        if line[0] in "-*":
            out.append(stack.open("ul"))
            out.append(f"<li>{escape(line[1:].strip())}</li>")
        elif line[0] == ">":
            out.append(stack.open("blockquote"))
            out.append(f"<p>{escape(line[1:].strip())}</p>")
        elif heading:
            level = len(heading.group(1))
            out.append(stack.close_all())
            out.append(f"<h{level}>{escape(heading.group(2).strip())}</h{level}>\n")
        else:
            # Re-flow soft-wrapped paragraph lines
            while k < len(lines) and not line.endswith(SENTENCE_ENDINGS):
                following = lines[k].strip()
                if not following:
                    k += 1
                    break
                if following == FENCE or following.startswith(SPECIAL_STARTS):
                    break
                line += " " + following
                k += 1
            out.append(stack.close_all())
            out.append(f"<p>{escape(line)}</p>\n")

    out.append(stack.close_all())
    return "".join(out)
