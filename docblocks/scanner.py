"""Character-level scanner separating code, comments, strings and doc comments.

The scanner walks the raw source once. Code outside comments and strings is
normalized into a "skeleton": whitespace runs collapse to one space, no space
is kept before punctuation such as ``(`` or ``,`` and statement separators
(``{``, ``}``, ``;``) become line breaks, so every skeleton line holds at most
one statement. Documentation comments are kept verbatim and split the
skeleton into segments: each segment carries the code seen since the previous
documentation comment plus the text of the comment that closed it.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

from docblocks.syntax_config import SyntaxConfig


class ScanState(Enum):
    """Mutually exclusive scanner states."""

    OUTSIDE = auto()  # before the code-start marker
    CODE = auto()
    STRING = auto()
    LINE_COMMENT = auto()
    BLOCK_COMMENT = auto()


@dataclass(frozen=True)
class ScanSegment:
    """Skeleton code followed by the documentation comment that ended it."""

    code: str
    doc: str | None = None  # None only for the trailing segment


@dataclass
class ScanResult:
    """All segments of one scan."""

    segments: list[ScanSegment]

    @property
    def skeleton(self) -> str:
        """The full normalized code stream."""
        return "\n".join(s.code for s in self.segments if s.code)

    @property
    def blocks(self) -> list[str]:
        """Documentation comment texts in source order."""
        return [s.doc for s in self.segments if s.doc is not None]


class _Skeleton:
    """Accumulator for normalized code."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, text: str) -> None:
        self._parts.append(text)

    def soft_space(self) -> None:
        """Add one space unless empty or already after whitespace."""
        if self._parts and not self._parts[-1][-1].isspace():
            self._parts.append(" ")

    def trim_spaces(self) -> None:
        while self._parts and self._parts[-1] == " ":
            self._parts.pop()

    def newline(self) -> None:
        self.trim_spaces()
        self._parts.append("\n")

    def take(self) -> str:
        text = "".join(self._parts)
        self._parts.clear()
        return text


class Scanner:
    """Splits source text into skeleton code and documentation comments."""

    def __init__(self, syntax: SyntaxConfig) -> None:
        """Initialize the scanner with a syntax profile."""
        self.syntax = syntax

    def scan(self, content: str) -> ScanResult:
        """Scan the whole content at once."""
        return ScanResult(list(self.iter_segments(content)))

    def iter_segments(self, content: str) -> Iterator[ScanSegment]:
        """Yield segments lazily; the last one has no documentation text."""
        syn = self.syntax
        state = ScanState.OUTSIDE if syn.code_start else ScanState.CODE
        skeleton = _Skeleton()
        doc: list[str] | None = None  # set while inside a documentation comment
        code_before_doc = ""
        quote = ""
        n = len(content)
        i = 0

        while i < n:
            ch = content[i]

            if state is ScanState.OUTSIDE:
                if content.startswith(syn.code_start, i):
                    state = ScanState.CODE
                    if syn.code_start_full and content.startswith(
                        syn.code_start_full, i
                    ):
                        i += len(syn.code_start_full)
                    else:
                        i += len(syn.code_start)
                    continue
                i += 1
                continue

            if state is ScanState.STRING:
                if syn.escape and ch == syn.escape:
                    # The escaped character is swallowed whatever it is
                    skeleton.append(content[i : i + 2])
                    i += 2
                    continue
                skeleton.append(ch)
                if ch == quote:
                    state = ScanState.CODE
                i += 1
                continue

            if state is ScanState.LINE_COMMENT:
                if content.startswith(syn.line_comment_end, i):
                    skeleton.soft_space()
                    state = ScanState.CODE
                    i += len(syn.line_comment_end)
                    continue
                i += 1
                continue

            if state is ScanState.BLOCK_COMMENT:
                if content.startswith(syn.block_comment_end, i):
                    state = ScanState.CODE
                    i += len(syn.block_comment_end)
                    if doc is not None:
                        yield ScanSegment(code=code_before_doc, doc="".join(doc))
                        doc = None
                    else:
                        skeleton.soft_space()
                    continue
                if doc is not None:
                    doc.append(ch)
                i += 1
                continue

            # ScanState.CODE
            if syn.code_end and syn.code_start and content.startswith(syn.code_end, i):
                skeleton.newline()
                state = ScanState.OUTSIDE
                i += len(syn.code_end)
            elif ch in syn.quotes:
                skeleton.append(ch)
                quote = ch
                state = ScanState.STRING
                i += 1
            elif syn.line_comment and content.startswith(syn.line_comment, i):
                state = ScanState.LINE_COMMENT
                i += len(syn.line_comment)
            elif self._opens_doc_comment(content, i):
                code_before_doc = skeleton.take()
                doc = []
                state = ScanState.BLOCK_COMMENT
                i += len(syn.doc_comment_start)
            elif syn.block_comment_start and content.startswith(
                syn.block_comment_start, i
            ):
                state = ScanState.BLOCK_COMMENT
                i += len(syn.block_comment_start)
            else:
                self._code_char(skeleton, ch)
                i += 1

        if doc is not None:
            # Truncated documentation comment: keep what was read
            yield ScanSegment(code=code_before_doc, doc="".join(doc))
        yield ScanSegment(code=skeleton.take())

    def _opens_doc_comment(self, content: str, i: int) -> bool:
        """Check for the documentation opener standing alone.

        It must be preceded by whitespace or the start of input and followed
        by whitespace or the end of input.
        """
        start = self.syntax.doc_comment_start
        if not start or not content.startswith(start, i):
            return False
        if i > 0 and not content[i - 1].isspace():
            return False
        after = i + len(start)
        return after >= len(content) or content[after].isspace()

    def _code_char(self, skeleton: _Skeleton, ch: str) -> None:
        """Normalize one character of plain code into the skeleton."""
        syn = self.syntax
        if ch == "\r":
            return
        if ch in syn.statement_separators:
            skeleton.newline()
        elif ch.isspace():
            skeleton.soft_space()
        elif ch in syn.no_space_before:
            skeleton.trim_spaces()
            skeleton.append(ch)
        else:
            skeleton.append(ch)
