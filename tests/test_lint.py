"""Tests for documentation quality checks."""

from docblocks.deep_merge import deep_merge
from docblocks.lint import compute_coverage, lint_document
from docblocks.load_config import DEFAULT_CONFIG
from docblocks.models import (
    DeclarationDoc,
    DeclarationKind,
    DeclarationSignature,
    DocBlock,
    ErrorKind,
    ParamTag,
    ParsedDocument,
)
from docblocks.syntax_config import php_syntax

DOCUMENTED_MAIN = DocBlock(summary="File.", tags={"author": "Someone"})


def _decl(
    name: str,
    kind: DeclarationKind = DeclarationKind.FUNCTION,
    arguments: str = "",
    doc: DocBlock | None = None,
) -> DeclarationDoc:
    signature = DeclarationSignature(kind, kind.value, name, arguments)
    return DeclarationDoc(signature, doc or DocBlock())


def _lint(*declarations: DeclarationDoc, main: DocBlock = DOCUMENTED_MAIN, lint=None):
    document = ParsedDocument("x.php", main=main, declarations=list(declarations))
    errors = lint_document(document, php_syntax(), lint or DEFAULT_CONFIG["lint"])
    assert all(e.kind is ErrorKind.MISSING_DOCUMENTATION for e in errors)
    return [e.message for e in errors]


def test_file_block_requirements() -> None:
    """Verify that the file needs a summary and an author."""
    assert _lint(main=DocBlock()) == [
        "No summary documented for the file",
        "No author documented for the file",
    ]
    assert _lint() == []


def test_author_may_be_repeated() -> None:
    """Verify that a list of authors satisfies the author check."""
    assert _lint(main=DocBlock(summary="F.", tags={"author": ["A", "B"]})) == []


def test_missing_summary() -> None:
    """Verify that undocumented declarations are reported."""
    assert _lint(_decl("f")) == ["No summary documented for f"]


def test_summary_exemptions() -> None:
    """Verify that constructors, classes and namespaces need no summary."""
    assert _lint(
        _decl("__construct", DeclarationKind.PUBLIC_METHOD),
        _decl("Foo", DeclarationKind.CLASS, "extends Bar"),
        _decl("App", DeclarationKind.NAMESPACE),
    ) == []


def test_extra_exempt_names_from_config() -> None:
    """Verify that configured names add to the default exemptions."""
    lint = deep_merge(DEFAULT_CONFIG["lint"], {"summary_exempt_names": ["main"]})
    assert _lint(_decl("main"), _decl("__construct"), lint=lint) == []


def test_arguments_without_params() -> None:
    """Verify that declared arguments require @param documentation."""
    doc = DocBlock(summary="Does f.")
    assert _lint(_decl("f", arguments="$a", doc=doc)) == ["No @param documented for f"]


def test_missing_and_unknown_params() -> None:
    """Verify both directions of the argument/@param comparison."""
    doc = DocBlock(
        summary="Does f.",
        params={"$a": ParamTag("int"), "$c": ParamTag("int")},
    )
    assert _lint(_decl("f", arguments="$a, $b = 1", doc=doc)) == [
        "Undocumented @param in f ($b)",
        "Unknown @param in f ($c)",
    ]


def test_matching_params() -> None:
    """Verify that fully documented arguments pass."""
    doc = DocBlock(
        summary="Does f.",
        params={"$a": ParamTag("int"), "$b": ParamTag("array")},
    )
    assert _lint(_decl("f", arguments="int $a, array $b = array()", doc=doc)) == []


def test_disabled() -> None:
    """Verify that linting can be switched off."""
    assert _lint(_decl("f"), main=DocBlock(), lint={"enabled": False}) == []


def test_compute_coverage() -> None:
    """Verify the documented fraction ignores containers."""
    document = ParsedDocument(
        "x.php",
        declarations=[
            _decl("Foo", DeclarationKind.CLASS),
            _decl("a", doc=DocBlock(summary="A.")),
            _decl("b"),
        ],
    )
    assert compute_coverage(document) == 0.5
    assert compute_coverage(ParsedDocument("empty.php")) == 1.0
