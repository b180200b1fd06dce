"""Logic for turning documentation comment text into DocBlock records."""

from docblocks.models import DocBlock, ParamTag, ReturnTag, TagValue
from docblocks.syntax_config import SyntaxConfig

FENCE = "```"
SENTENCE_ENDINGS = (".", ":")
STRUCTURE_MARKERS = ("-", "*", "+", ">", "#")
INDENTS = ("\t", "    ")

# Free-text tags kept on DocBlock.tags; anything unknown goes to others.
SCALAR_TAGS = frozenset({"author", "since", "version", "todo", "link"})


def _append(text: str, more: str) -> str:
    return f"{text} {more}".strip() if more else text


def accumulate(bucket: dict[str, TagValue], name: str, value: str) -> None:
    """Store a repeatable tag: a string first, promoted to a list on repeat.

    An empty first value is replaced rather than promoted.
    """
    current = bucket.get(name)
    if current is None or current == "":
        bucket[name] = value
    elif isinstance(current, list):
        current.append(value)
    else:
        bucket[name] = [current, value]


class TagParser:
    """Parses the text between the documentation comment delimiters."""

    def __init__(self, syntax: SyntaxConfig | None = None) -> None:
        """Initialize the parser with the line marker and tag prefix."""
        syntax = syntax or SyntaxConfig()
        self.marker = syntax.doc_line_marker
        self.prefix = syntax.tag_prefix

    def parse(self, raw: str) -> DocBlock:
        """Parse one comment; never fails, worst case returns an empty block."""
        summary, description, tag_texts = self._segment(self._clean_lines(raw))
        block = DocBlock(
            summary=" ".join(summary),
            description="\n".join(description).strip("\n"),
        )
        for text in tag_texts:
            self._apply_tag(block, text)
        return block

    def _clean_lines(self, raw: str) -> list[str | None]:
        """Strip line markers; None stands for a blank documentation line."""
        raw = raw.strip()
        if not raw:
            return []
        if "\n" not in raw and not raw.startswith(self.marker):
            # Single-line comment: /** Text. */
            return [raw]

        lines: list[str | None] = []
        for line in raw.split("\n"):
            stripped = line.strip()
            if stripped == self.marker:
                lines.append(None)
            elif stripped.startswith(self.marker):
                content = stripped[len(self.marker) :]
                if content.startswith(" "):
                    content = content[1:]
                lines.append(content.rstrip())
            # Anything else is alignment noise
        return lines

    def _segment(
        self, lines: list[str | None]
    ) -> tuple[list[str], list[str], list[str]]:
        """Split cleaned lines into summary, description and tag texts."""
        summary: list[str] = []
        summary_open = True
        description: list[str] = []
        tags: list[str] = []
        tag_open = False
        in_pre = False

        for line in lines:
            if line is None:
                tag_open = False
                if summary:
                    summary_open = False
                if in_pre or (description and description[-1] != ""):
                    description.append("")
                continue

            text = line.strip()
            if text == FENCE:
                in_pre = not in_pre
                tag_open = False
                summary_open = False
                description.append(FENCE)
                continue
            if in_pre:
                description.append(line)
                continue

            if text.startswith(self.prefix):
                tags.append(text)
                tag_open = True
                if summary:
                    summary_open = False
                continue
            if tag_open and line.startswith(INDENTS):
                tags[-1] += "\n" + text
                continue
            tag_open = False

            if summary_open and not description:
                summary.append(text)
                if text.endswith(SENTENCE_ENDINGS) and not text.startswith(">"):
                    summary_open = False
                continue
            summary_open = False

            if self._continues(description, line, text):
                description[-1] += " " + text
            else:
                description.append(text)

        while description and description[-1] == "":
            description.pop()
        return summary, description, tags

    @staticmethod
    def _continues(description: list[str], line: str, text: str) -> bool:
        """Check whether a line re-flows into the previous description line."""
        if not description or text.startswith(STRUCTURE_MARKERS):
            return False
        prev = description[-1]
        if not prev or prev == FENCE or prev.endswith(SENTENCE_ENDINGS):
            return False
        if prev.startswith(">"):
            return False
        if prev.startswith(STRUCTURE_MARKERS):
            # Only indented lines continue a list item
            return line.startswith(INDENTS)
        return True

    def _apply_tag(self, block: DocBlock, text: str) -> None:
        """Store one tag according to its type-specific rules."""
        parts = text[len(self.prefix) :].split(None, 1)
        if not parts:
            return
        name = parts[0].lower()
        rest = parts[1].strip() if len(parts) > 1 else ""

        if name == "param":
            fields = rest.split(None, 2) + ["", "", ""]
            ptype, pname, desc = fields[0], fields[1], fields[2].strip()
            existing = block.params.get(pname)
            if existing is None:
                block.params[pname] = ParamTag(ptype, desc)
            else:
                existing.description = _append(existing.description, desc)
        elif name == "return":
            fields = rest.split(None, 1) + ["", ""]
            rtype, desc = fields[0], fields[1].strip()
            if block.returns is None:
                block.returns = ReturnTag(rtype, desc)
            else:
                block.returns.description = _append(block.returns.description, desc)
        elif name == "uses":
            fields = rest.split(None, 1) + ["", ""]
            module, desc = fields[0], fields[1].strip()
            if module in block.uses:
                block.uses[module] = _append(block.uses[module], desc)
            else:
                block.uses[module] = desc
        elif name in SCALAR_TAGS:
            accumulate(block.tags, name, rest)
        else:
            accumulate(block.others, name, rest)
