"""Shared fixtures for search index tests."""

import pytest

CLASS_PAGE = """<!DOCTYPE html>
<html>
<head>
  <title>Class Foo | MySite</title>
  <meta name="description" content="Foo does things. More">
</head>
<body>
<article data-uid="Foo">
  <h1 id="Foo" class="section">Class Foo</h1>
  <div class="summary">Represents a foo.</div>
  <h2 class="section" id="properties">Properties</h2>
  <h3 id="Foo_Size">Size</h3>
  <div class="summary">Gets the size.</div>
  <h2 class="section" id="methods">Methods</h2>
  <h3 id="Foo_Bar">Bar()</h3>
  <div class="summary">Does a thing.</div>
  <h3 id="Foo_Baz_System_Int32_">Baz(int)</h3>
  <div class="summary">Does another thing.</div>
</article>
</body>
</html>
"""

ENUM_PAGE = """<!DOCTYPE html>
<html>
<head>
  <title>Enum Color | MySite</title>
</head>
<body>
<article data-uid="Color">
  <h1 id="Color" class="section">Enum Color</h1>
  <h2 id="fields">Fields</h2>
  <dl class="parameters">
    <dt id="Color_Red"><code>Red = 0</code></dt>
    <dd>The red color.</dd>
    <dt id="Color_Green"><code>Green = 1</code></dt>
    <dt id="Color_Blue"><code>Blue = 2</code></dt>
    <dd>The blue color.</dd>
  </dl>
</article>
</body>
</html>
"""


@pytest.fixture
def class_page() -> str:
    """Rendered page of a class with properties and methods.

    Returns:
        HTML source.
    """
    return CLASS_PAGE


@pytest.fixture
def enum_page() -> str:
    """Rendered page of an enum with three values.

    Returns:
        HTML source.
    """
    return ENUM_PAGE
