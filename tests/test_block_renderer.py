"""Tests for block-structured text rendering."""

from docblocks.block_renderer import ContainerStack, render_block_text


def test_list_closes_before_paragraph() -> None:
    """Verify that a list is opened once and closed before following prose."""
    html = render_block_text("- a\n- b\nc")
    assert html == "<ul><li>a</li><li>b</li></ul><p>c</p>\n"
    assert html.count("<ul>") == 1
    assert html.count("</ul>") == 1


def test_fenced_text_is_not_structured() -> None:
    """Verify that list markers inside a fence stay literal."""
    html = render_block_text("```\n- not a list\n```")
    assert html == "<pre>- not a list\n</pre>\n"
    assert "<ul>" not in html


def test_unterminated_fence_is_closed() -> None:
    """Verify that a fence left open is closed at the end."""
    assert render_block_text("```\ncode") == "<pre>code\n</pre>"


def test_headings() -> None:
    """Verify headings of level one to six, and text that only looks like one."""
    assert render_block_text("## Title\ntext") == "<h2>Title</h2>\n<p>text</p>\n"
    assert render_block_text("#NoSpace") == "<p>#NoSpace</p>\n"
    assert render_block_text("####### seven") == "<p>####### seven</p>\n"


def test_blockquote() -> None:
    """Verify consecutive quoted lines share one blockquote."""
    html = render_block_text("> quoted\n> more\nafter")
    assert html == (
        "<blockquote><p>quoted</p><p>more</p></blockquote><p>after</p>\n"
    )


def test_switching_containers() -> None:
    """Verify that opening a different container closes the current one."""
    html = render_block_text("- a\n> q")
    assert html == "<ul><li>a</li></ul><blockquote><p>q</p></blockquote>"


def test_paragraph_reflow() -> None:
    """Verify that soft-wrapped lines join until a sentence ends."""
    html = render_block_text("first line\nsecond line.\nthird")
    assert html == "<p>first line second line.</p>\n<p>third</p>\n"


def test_blank_line_ends_paragraph() -> None:
    """Verify that a blank line separates paragraphs."""
    assert render_block_text("one\n\ntwo") == "<p>one</p>\n<p>two</p>\n"


def test_text_is_escaped() -> None:
    """Verify that markup characters are escaped."""
    assert render_block_text("a < b & c") == "<p>a &lt; b &amp; c</p>\n"
    assert render_block_text("```\n<b>\n```") == "<pre>&lt;b&gt;\n</pre>\n"


def test_rendering_is_repeatable() -> None:
    """Verify that rendering the same text twice gives the same output."""
    text = "Intro:\n- a\n- b\n\n> note\n## Head\nend."
    assert render_block_text(text) == render_block_text(text)


def test_container_stack() -> None:
    """Verify open, close and close_all bookkeeping."""
    stack = ContainerStack()
    assert stack.open("ul") == "<ul>"
    assert stack.open("ul") == ""
    assert stack.open("pre") == "</ul><pre>"
    assert stack.close("pre") == "</pre>"
    assert stack.close_all() == ""
