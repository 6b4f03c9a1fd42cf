"""Tests for page and member titles."""

import pytest
from bs4 import BeautifulSoup, Tag

from docfx_search_index.exceptions import ConfigurationError
from docfx_search_index.titles import build_member_title, extract_title


def _soup(head: str) -> BeautifulSoup:
    return BeautifulSoup(f"<html><head>{head}</head><body></body></html>", "html.parser")


@pytest.fixture
def member() -> Tag:
    """Create a member heading.

    Returns:
        ``h3`` tag naming ``Bar()``.
    """
    return BeautifulSoup('<h3 id="bar">Bar()</h3>', "html.parser").h3


def test_extract_title_keeps_site_name() -> None:
    """Test that the site name is kept by default."""
    assert extract_title(_soup("<title>Class Foo | MySite</title>")) == "Class Foo | MySite"


def test_extract_title_strips_site_name() -> None:
    """Test stripping the site name suffix."""
    assert extract_title(_soup("<title>Class Foo | MySite</title>"), strip_site_name=True) == "Class Foo"


def test_extract_title_without_site_name() -> None:
    """Test stripping when there is no site name."""
    assert extract_title(_soup("<title>Class Foo</title>"), strip_site_name=True) == "Class Foo"


def test_extract_title_normalises() -> None:
    """Test whitespace and entities in the title."""
    assert extract_title(_soup("<title>\n  Class  Foo&lt;T&gt;\n</title>")) == "Class Foo<T>"


def test_empty_title_element_wins_over_meta() -> None:
    """Test that an empty title element still takes precedence."""
    soup = _soup('<title></title><meta name="title" content="Meta Title">')
    assert extract_title(soup) == ""


def test_extract_title_meta_fallback() -> None:
    """Test falling back to the title meta tag."""
    assert extract_title(_soup('<meta name="title" content="Meta Title | Site">'), True) == "Meta Title"


def test_extract_title_missing() -> None:
    """Test a page without any title."""
    assert extract_title(_soup("")) == ""


def test_member_title_site_name_stripped(member: Tag) -> None:
    """Test member title for a stripped type title."""
    assert build_member_title("methods", member, "Class Foo", False, strip_site_name=True) == "Method Foo.Bar()"


def test_member_title_keeps_site_name(member: Tag) -> None:
    """Test that the site name follows the member name."""
    title = build_member_title("methods", member, "Class Foo | MySite", False)
    assert title == "Method Foo.Bar() | MySite"


def test_member_title_generic_type(member: Tag) -> None:
    """Test splicing after a generic type name."""
    title = build_member_title("properties", member, "Class Foo<T> | MySite", False)
    assert title == "Property Foo<T>.Bar() | MySite"


def test_member_title_site_name_without_space(member: Tag) -> None:
    """Test a type name running up to the site separator."""
    assert build_member_title("fields", member, "Class Foo|MySite", False) == "Field Foo.Bar()|MySite"
    assert build_member_title("fields", member, "Class Foo  |MySite", False) == "Field Foo.Bar()  |MySite"


def test_member_title_no_site_name(member: Tag) -> None:
    """Test a title without site name and without stripping."""
    assert build_member_title("events", member, "Class Foo", False) == "Event Foo.Bar()"


def test_member_title_single_token(member: Tag) -> None:
    """Test a title without any space."""
    assert build_member_title("methods", member, "Foo", False, strip_site_name=True) == "Method Foo.Bar()"


def test_member_title_enum_value() -> None:
    """Test enum value titles."""
    node = BeautifulSoup('<dt id="Color_Red"><code>Red = 0</code></dt>', "html.parser").dt
    assert build_member_title("enum values", node, "Enum Color | MySite", False) == "Enum Value Color.Red = 0 | MySite"


def test_member_title_from_metadata(member: Tag) -> None:
    """Test that metadata titles are joined without a label."""
    assert build_member_title("methods", member, "MyLib.Foo", True) == "MyLib.Foo.Bar()"


def test_member_title_normalises_member_name() -> None:
    """Test that the member name is collapsed to one line."""
    node = BeautifulSoup('<h3 id="baz">\n  Baz(int,\n    string)  </h3>', "html.parser").h3
    assert build_member_title("methods", node, "Class Foo", False) == "Method Foo.Baz(int, string)"


def test_member_title_unknown_section(member: Tag) -> None:
    """Test that unsupported section kinds are rejected."""
    with pytest.raises(ConfigurationError, match="Unsupported search scope: constructors"):
        build_member_title("constructors", member, "Class Foo", False)


def test_extract_title_decodes_entities_once() -> None:
    """Test that escaped entities in the title are kept."""
    assert extract_title(_soup("<title>Class Foo&amp;amp;Bar</title>")) == "Class Foo&amp;Bar"
    assert extract_title(_soup('<meta name="title" content="A &amp;amp; B">')) == "A &amp; B"


def test_member_title_decodes_entities_once() -> None:
    """Test that an escaped member name is kept escaped."""
    node = BeautifulSoup('<h3 id="a">A&amp;lt;B</h3>', "html.parser").h3
    assert build_member_title("methods", node, "Class Foo", False) == "Method Foo.A&lt;B"
