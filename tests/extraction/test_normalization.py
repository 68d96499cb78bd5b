from __future__ import annotations

from larder.extraction.normalization import decode_entities, normalize_text, strip_tags


def test_normalize_text_decodes_known_entities_and_collapses_whitespace() -> None:
    raw = "  Salt &amp; pepper\n\t&lt;to taste&gt;  &quot;fresh&quot; &#39;cracked&#39;&nbsp;&nbsp;black  "

    assert normalize_text(raw) == "Salt & pepper <to taste> \"fresh\" 'cracked' black"


def test_normalize_text_leaves_unknown_entities_untouched() -> None:
    assert normalize_text("Cr&egrave;me fra&icirc;che") == "Cr&egrave;me fra&icirc;che"


def test_normalize_text_handles_empty_input() -> None:
    assert normalize_text("") == ""
    assert normalize_text(None) == ""
    assert normalize_text(" \n  ") == ""


def test_normalize_text_is_idempotent() -> None:
    once = normalize_text("  2 &amp; 1/2   cups flour ")

    assert normalize_text(once) == once


def test_decode_entities_does_not_touch_whitespace() -> None:
    assert decode_entities("a &amp;  b") == "a &  b"


def test_strip_tags_removes_inline_markup() -> None:
    assert strip_tags("<b>2</b> cups <a href='#'>sugar</a>") == "2 cups sugar"
