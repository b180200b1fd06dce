"""Data models for extracted documentation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

TagValue = str | list[str]


class DeclarationKind(Enum):
    """Kinds of declarations recognized in the code skeleton."""

    NAMESPACE = "namespace"
    CLASS = "class"
    FUNCTION = "function"
    PUBLIC_METHOD = "public_method"
    PRIVATE_METHOD = "private_method"
    PROTECTED_METHOD = "protected_method"

    @property
    def is_container(self) -> bool:
        """Namespaces and classes take inheritance text instead of arguments."""
        return self in (DeclarationKind.NAMESPACE, DeclarationKind.CLASS)


class ErrorKind(Enum):
    """Categories of recoverable problems reported on a document."""

    SOURCE_UNAVAILABLE = "source_unavailable"
    UNRECOGNIZED_UNIT_TYPE = "unrecognized_unit_type"
    LOOKUP_NOT_FOUND = "lookup_not_found"
    MISSING_DOCUMENTATION = "missing_documentation"


@dataclass(frozen=True)
class DocumentError:
    """A problem reported as data rather than raised."""

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class SourceUnit:
    """Decoded source text handed to the scanner."""

    filename: str
    content: str
    modified: float | None = None  # mtime, seconds since the epoch


@dataclass(frozen=True)
class DeclarationSignature:
    """A declaration line as found in the skeleton."""

    kind: DeclarationKind
    keyword: str  # raw keyword text, e.g. "public function"
    name: str
    arguments: str = ""  # raw argument or inheritance text


@dataclass
class ParamTag:
    """An @param entry."""

    type: str
    description: str = ""


@dataclass
class ReturnTag:
    """The @return entry."""

    type: str
    description: str = ""


@dataclass
class DocBlock:
    """Structured contents of one documentation comment."""

    summary: str = ""
    description: str = ""
    tags: dict[str, TagValue] = field(default_factory=dict)  # author, since...
    uses: dict[str, str] = field(default_factory=dict)  # module -> description
    params: dict[str, ParamTag] = field(default_factory=dict)
    returns: ReturnTag | None = None
    others: dict[str, TagValue] = field(default_factory=dict)

    def is_empty(self) -> bool:
        """Check whether nothing at all was documented."""
        return not (
            self.summary
            or self.description
            or self.tags
            or self.uses
            or self.params
            or self.returns
            or self.others
        )

    def tag(self, name: str) -> TagValue | None:
        """Return a free-text tag, looking in the recognized set then others."""
        if name in self.tags:
            return self.tags[name]
        return self.others.get(name)

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain JSON-compatible data."""
        return {
            "summary": self.summary,
            "description": self.description,
            "tags": self.tags,
            "uses": self.uses,
            "params": {
                k: {"type": p.type, "description": p.description}
                for k, p in self.params.items()
            },
            "returns": (
                {"type": self.returns.type, "description": self.returns.description}
                if self.returns
                else None
            ),
            "others": self.others,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DocBlock:
        """Rebuild a block from `to_dict` output."""
        ret = data.get("returns")
        return cls(
            summary=data.get("summary", ""),
            description=data.get("description", ""),
            tags=dict(data.get("tags") or {}),
            uses=dict(data.get("uses") or {}),
            params={
                k: ParamTag(v.get("type", ""), v.get("description", ""))
                for k, v in (data.get("params") or {}).items()
            },
            returns=ReturnTag(ret.get("type", ""), ret.get("description", ""))
            if ret
            else None,
            others=dict(data.get("others") or {}),
        )


@dataclass
class DeclarationDoc:
    """A declaration paired with the documentation that precedes it."""

    signature: DeclarationSignature
    doc: DocBlock = field(default_factory=DocBlock)

    @property
    def name(self) -> str:
        """The declared name."""
        return self.signature.name

    @property
    def kind(self) -> DeclarationKind:
        """The declaration kind."""
        return self.signature.kind


@dataclass
class ParsedDocument:
    """Everything extracted from one source unit."""

    filename: str
    main: DocBlock = field(default_factory=DocBlock)
    declarations: list[DeclarationDoc] = field(default_factory=list)
    index: dict[str, int] = field(default_factory=dict)  # lower(name) -> position
    errors: list[DocumentError] = field(default_factory=list)
    debug: list[str] = field(default_factory=list)
    selected: DeclarationDoc | None = None  # set by a successful lookup

    def lookup(self, name: str) -> DeclarationDoc | None:
        """Find a declaration by name, ignoring case."""
        pos = self.index.get(name.strip().lower())
        if pos is None:
            return None
        return self.declarations[pos]

    def add_error(self, kind: ErrorKind, message: str) -> None:
        """Record a recoverable problem."""
        self.errors.append(DocumentError(kind, message))

    def error_messages(self) -> list[str]:
        """Return the error messages in the order they were recorded."""
        return [e.message for e in self.errors]

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain JSON-compatible data (without the debug trace)."""
        return {
            "filename": self.filename,
            "main": self.main.to_dict(),
            "declarations": [
                {
                    "kind": d.signature.kind.value,
                    "keyword": d.signature.keyword,
                    "name": d.signature.name,
                    "arguments": d.signature.arguments,
                    "doc": d.doc.to_dict(),
                }
                for d in self.declarations
            ],
            "errors": [
                {"kind": e.kind.value, "message": e.message} for e in self.errors
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParsedDocument:
        """Rebuild a document from `to_dict` output, recomputing the index."""
        declarations = [
            DeclarationDoc(
                signature=DeclarationSignature(
                    kind=DeclarationKind(d["kind"]),
                    keyword=d.get("keyword", d["kind"]),
                    name=d["name"],
                    arguments=d.get("arguments", ""),
                ),
                doc=DocBlock.from_dict(d.get("doc") or {}),
            )
            for d in data.get("declarations") or []
        ]
        return cls(
            filename=data.get("filename", ""),
            main=DocBlock.from_dict(data.get("main") or {}),
            declarations=declarations,
            index=build_name_index(declarations),
            errors=[
                DocumentError(ErrorKind(e["kind"]), e["message"])
                for e in data.get("errors") or []
            ],
        )


def build_name_index(declarations: list[DeclarationDoc]) -> dict[str, int]:
    """Map lower-cased names to positions; the last declaration of a name wins."""
    return {d.name.lower(): pos for pos, d in enumerate(declarations)}
