"""Tests for XML documentation comment rendering."""

from csapi.backend.xmldoc import render_xml_doc, tokenize, wrap
from csapi.ir import DocNode


def _text(s: str) -> DocNode:
    return DocNode("text", text=s)


def _li(s: str, li_type: str = "bullet") -> DocNode:
    return DocNode("li", text=s, li_type=li_type)


# ── Tokens ──


def test_tokenize_splits_on_whitespace():
    assert tokenize("a  b\tc\nd") == ["a", "b", "c", "d"]


def test_tokenize_keeps_bracket_span_whole():
    assert tokenize("see [option: timeout] here") == ["see", "[option: timeout]", "here"]


def test_tokenize_keeps_trailing_punctuation():
    assert tokenize("use [Page.click].") == ["use", "[Page.click]."]


def test_tokenize_unclosed_bracket():
    assert tokenize("a [b c") == ["a", "[b", "c"]


# ── Wrapping ──


def test_wrap_respects_width():
    lines = wrap("alpha beta gamma delta epsilon zeta", 30)
    assert lines == ["/// alpha beta gamma delta", "/// epsilon zeta"]
    assert all(len(line) <= 30 for line in lines)


def test_wrap_never_breaks_link_span():
    lines = wrap("see [Page.waitForEvent with spaces] now", 20)
    assert "/// [Page.waitForEvent with spaces]" in lines
    assert lines == ["/// see", "/// [Page.waitForEvent with spaces]", "/// now"]


def test_wrap_empty_text():
    assert wrap("", 80) == []


# ── Summary ──


def test_no_nodes_no_lines():
    assert render_xml_doc([], 120) == []


def test_single_paragraph():
    assert render_xml_doc([_text("Returns the page title.")], 120) == [
        "/// <summary>",
        "/// Returns the page title.",
        "/// </summary>",
    ]


def test_xml_characters_escaped():
    lines = render_xml_doc([_text("a < b & c > d")], 120)
    assert lines[1] == "/// a &lt; b &amp; c &gt; d"


def test_multiple_paragraphs_use_para():
    lines = render_xml_doc([_text("One."), _text("Two.")], 120)
    assert lines == [
        "/// <summary>",
        "/// <para>",
        "/// One.",
        "/// </para>",
        "/// <para>",
        "/// Two.",
        "/// </para>",
        "/// </summary>",
    ]


# ── Links ──


def test_link_renderer_substitutes_links():
    def links(target: str):
        if target == "Page.click":
            return '<see cref="IPage.ClickAsync"/>'
        return None

    lines = render_xml_doc([_text("Call [Page.click] first.")], 120, links)
    assert lines[1] == '/// Call <see cref="IPage.ClickAsync"/> first.'


def test_unresolved_link_kept_as_text():
    lines = render_xml_doc([_text("See [Unknown].")], 120, lambda t: None)
    assert lines[1] == "/// See [Unknown]."


# ── Lists ──


def test_list_closed_when_text_follows():
    nodes = [_text("Options:"), _li("a"), _li("b"), _text("After.")]
    assert render_xml_doc(nodes, 120) == [
        "/// <summary>",
        "/// <para>",
        "/// Options:",
        "/// </para>",
        '/// <list type="bullet">',
        "/// <item><description>",
        "/// a",
        "/// </description></item>",
        "/// <item><description>",
        "/// b",
        "/// </description></item>",
        "/// </list>",
        "/// <para>",
        "/// After.",
        "/// </para>",
        "/// </summary>",
    ]


def test_list_closed_at_end():
    lines = render_xml_doc([_li("only")], 120)
    assert lines[-2:] == ["/// </list>", "/// </summary>"]


def test_ordinal_list_and_type_switch():
    lines = render_xml_doc([_li("one", "ordinal"), _li("dot")], 120)
    assert lines[1] == '/// <list type="number">'
    assert lines.count("/// </list>") == 2
    assert '/// <list type="bullet">' in lines


# ── Code and notes ──


def test_code_block():
    code = DocNode("code", lines=("await page.GotoAsync(url);", "if (a < b) {}"))
    lines = render_xml_doc([code], 120)
    assert lines == [
        "/// <summary>",
        "/// <code>",
        "/// await page.GotoAsync(url);",
        "/// if (a &lt; b) {}",
        "/// </code>",
        "/// </summary>",
    ]


def test_code_block_closes_list():
    lines = render_xml_doc([_li("a"), DocNode("code", lines=("x",))], 120)
    assert lines.index("/// </list>") < lines.index("/// <code>")


def test_note_becomes_remarks():
    lines = render_xml_doc([_text("Clicks."), DocNode("note", text="Waits first.")], 120)
    assert lines == [
        "/// <summary>",
        "/// Clicks.",
        "/// </summary>",
        "/// <remarks>",
        "/// Waits first.",
        "/// </remarks>",
    ]
