"""Tests for declaration matching."""

from docblocks.matcher import DeclarationMatcher
from docblocks.models import DeclarationKind, DocBlock
from docblocks.syntax_config import SyntaxConfig, php_syntax


def _matcher() -> DeclarationMatcher:
    return DeclarationMatcher(php_syntax())


def test_parse_method_line() -> None:
    """Verify keyword, name and arguments of a method declaration."""
    sig = _matcher().parse_line(
        "public function getSummary(string $filename, mixed $required = array())"
    )
    assert sig is not None
    assert sig.kind is DeclarationKind.PUBLIC_METHOD
    assert sig.keyword == "public function"
    assert sig.name == "getSummary"
    assert sig.arguments == "string $filename, mixed $required = array()"


def test_nested_parentheses_in_defaults() -> None:
    """Verify that arguments span the outermost parentheses."""
    sig = _matcher().parse_line("function f($a = array(1, 2), $b = max(1,2))")
    assert sig is not None
    assert sig.kind is DeclarationKind.FUNCTION
    assert sig.name == "f"
    assert sig.arguments == "$a = array(1, 2), $b = max(1,2)"


def test_container_declarations_keep_inheritance_text() -> None:
    """Verify that classes and namespaces take the text after their name."""
    cls = _matcher().parse_line("class Foo extends Bar implements Baz")
    assert cls is not None
    assert cls.kind is DeclarationKind.CLASS
    assert cls.name == "Foo"
    assert cls.arguments == "extends Bar implements Baz"

    ns = _matcher().parse_line("namespace App\\Text")
    assert ns is not None
    assert ns.kind is DeclarationKind.NAMESPACE
    assert ns.name == "App\\Text"
    assert ns.arguments == ""


def test_non_declarations_are_ignored() -> None:
    """Verify that keyword prefixes and closures are not declarations."""
    matcher = _matcher()
    assert matcher.parse_line("functional_thing()") is None
    assert matcher.parse_line("$x = function ($a)") is None
    assert matcher.parse_line("return classify($x)") is None


def test_first_declaration_takes_pending_block() -> None:
    """Verify that a second declaration in the same segment is undocumented."""
    pending = DocBlock(summary="Doc for a.")
    found = _matcher().match("function a()\n\nfunction b()\n", pending)
    assert [d.name for d in found] == ["a", "b"]
    assert found[0].doc is pending
    assert found[1].doc.is_empty()


def test_empty_segment_matches_nothing() -> None:
    """Verify that an empty skeleton yields no declarations."""
    assert _matcher().match("", DocBlock(summary="x")) == []


def test_profile_without_keywords_matches_nothing() -> None:
    """Verify that a profile without declaration keywords is inert."""
    matcher = DeclarationMatcher(SyntaxConfig())
    assert matcher.match("function a()\n", DocBlock()) == []
    assert matcher.parse_line("function a()") is None
