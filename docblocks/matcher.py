"""Logic for pairing skeleton declarations with documentation blocks."""

import re

from docblocks.models import DeclarationDoc, DeclarationSignature, DocBlock
from docblocks.syntax_config import SyntaxConfig


class DeclarationMatcher:
    """Recognizes declaration lines in a skeleton segment."""

    def __init__(self, syntax: SyntaxConfig) -> None:
        """Build the keyword pattern, most specific keyword first."""
        self.syntax = syntax
        self.kinds = dict(syntax.declarations)
        keywords = sorted(self.kinds, key=len, reverse=True)
        if keywords:
            alternatives = "|".join(re.escape(k) for k in keywords)
            self._pattern: re.Pattern[str] | None = re.compile(
                rf"^({alternatives})\s+(.*)$"
            )
        else:
            self._pattern = None

    def match(self, skeleton: str, pending: DocBlock) -> list[DeclarationDoc]:
        """Extract the declarations of one segment.

        Only the first declaration receives ``pending``; any later one in the
        same segment was not documented and gets an empty block.
        """
        found: list[DeclarationDoc] = []
        if self._pattern is None:
            return found
        for line in skeleton.strip().split("\n"):
            signature = self.parse_line(line)
            if signature is None:
                continue
            doc = pending if not found else DocBlock()
            found.append(DeclarationDoc(signature=signature, doc=doc))
        return found

    def parse_line(self, line: str) -> DeclarationSignature | None:
        """Parse one skeleton line into a signature, if it declares something."""
        if self._pattern is None:
            return None
        m = self._pattern.match(line.strip())
        if not m:
            return None
        keyword, rest = m.group(1), m.group(2).strip()
        kind = self.kinds[keyword]

        if kind.is_container:
            name, _, arguments = rest.partition(" ")
            return DeclarationSignature(kind, keyword, name, arguments.strip())

        # Outermost bounds, so default values may contain parentheses
        start = rest.find(self.syntax.args_start)
        end = rest.rfind(self.syntax.args_end)
        arguments = ""
        name = rest
        if start != -1 and end != -1 and start < end:
            arguments = rest[start + 1 : end].strip()
            name = rest[:start]
        return DeclarationSignature(kind, keyword, name.strip(), arguments)
