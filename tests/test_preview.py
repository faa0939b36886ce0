"""Tests for preview chunk extraction."""

from pyqt_refview import TextDocument, TextRange, get_preview_chunks

LINE = "    result = compute(value)  "


def test_chunks_extend_to_word_start_and_trim():
    doc = TextDocument("a", LINE)
    chunks = get_preview_chunks(doc, TextRange.on_line(0, 13, 20))

    assert chunks.before == "result = "
    assert chunks.inside == "compute"
    assert chunks.after == "(value)"
    assert chunks.text == "result = compute(value)"
    assert chunks.highlight == (9, 16)


def test_chunks_without_trim_keep_whitespace():
    doc = TextDocument("a", LINE)
    chunks = get_preview_chunks(doc, TextRange.on_line(0, 13, 20), before_chars=13, trim=False)

    assert chunks.before == "    result = "
    assert chunks.after == "(value)  "


def test_after_is_limited():
    doc = TextDocument("a", "abc" + "x" * 50)
    chunks = get_preview_chunks(doc, TextRange.on_line(0, 0, 3), after_chars=5)

    assert chunks.before == ""
    assert chunks.after == "xxxxx"


def test_before_includes_word_ending_at_preview_start():
    doc = TextDocument("a", "foo bar")
    chunks = get_preview_chunks(doc, TextRange.on_line(0, 4, 7), before_chars=1)

    assert chunks.before == "foo "
    assert chunks.highlight == (4, 7)
