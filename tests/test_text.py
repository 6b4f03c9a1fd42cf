"""Tests for text normalisation."""

from bs4 import BeautifulSoup

from docfx_search_index.text import extract_text, normalize_content, normalize_summary


def test_normalize_collapses_whitespace() -> None:
    """Test that all whitespace runs collapse to single spaces."""
    assert normalize_content(" a   b\n\nc ") == "a b c"


def test_normalize_keeps_paragraph_breaks() -> None:
    """Test that runs containing a newline collapse to a newline."""
    assert normalize_content(" a   b\n\nc ", keep_paragraph_breaks=True) == "a b\nc"
    assert normalize_content("one  \n   two\tthree", keep_paragraph_breaks=True) == "one\ntwo three"


def test_normalize_decodes_entities() -> None:
    """Test that HTML entities are decoded."""
    assert normalize_content("List&lt;T&gt;&nbsp;&amp; more") == "List<T> & more"


def test_normalize_empty_input() -> None:
    """Test that empty and missing input give an empty string."""
    assert normalize_content(None) == ""
    assert normalize_content("") == ""
    assert normalize_content(" \n\t ") == ""


def test_summary_cut_at_last_period() -> None:
    """Test that the summary is truncated at its last sentence boundary."""
    assert normalize_summary("Does a thing.") == "Does a thing"
    assert normalize_summary("Gets the value. Remarks follow") == "Gets the value"
    assert normalize_summary("  first.  second.  ") == "first. second"


def test_summary_without_period_kept() -> None:
    """Test that a summary without a period is kept whole."""
    assert normalize_summary("  No period here ") == "No period here"


def test_summary_empty_input() -> None:
    """Test that empty summaries are None."""
    assert normalize_summary(None) is None
    assert normalize_summary("") is None


def test_extract_text_separates_blocks() -> None:
    """Test that block elements do not glue words together."""
    soup = BeautifulSoup("<div><p>One</p><p>Two</p></div>", "html.parser")
    assert normalize_content(extract_text(soup)) == "One Two"


def test_extract_text_joins_inline_elements() -> None:
    """Test that inline elements are not padded."""
    soup = BeautifulSoup("<p>Get<code>Value</code><span>s</span></p>", "html.parser")
    assert normalize_content(extract_text(soup)) == "GetValues"


def test_extract_text_includes_comments_skips_doctype() -> None:
    """Test that comment text is kept and the doctype is ignored."""
    soup = BeautifulSoup("<!DOCTYPE html><p>a<!--b-->c</p>", "html.parser")
    assert normalize_content(extract_text(soup)) == "abc"


def test_extract_text_none() -> None:
    """Test extracting from a missing node."""
    assert extract_text(None) == ""
