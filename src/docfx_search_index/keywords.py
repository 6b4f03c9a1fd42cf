"""Keyword expansion of titles for prefix and substring search."""

import html
import re

# Acronyms end where a capitalised word starts: "HTTPResponse" -> "HTTP", "Response"
STEM_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")


def get_stems(token: str | None) -> list[str]:
    """Split an identifier into its case and digit delimited stems.

    Args:
        token: Identifier such as ``GetHTTPResponse2``.

    Returns:
        Stems in order, e.g. ``["Get", "HTTP", "Response", "2"]``;
        ``[""]`` for an empty token.
    """
    if not token:
        return [""]
    return STEM_RE.findall(html.unescape(token))


def get_stem_aggregations(stems: list[str]) -> list[str]:
    """Concatenate every contiguous run of stems.

    ``["A", "B", "C"]`` gives ``["A", "AB", "ABC", "B", "BC", "C"]``.

    Args:
        stems: Stems as returned by get_stems.

    Returns:
        The ``n * (n + 1) / 2`` aggregations, duplicates kept.
    """
    aggregations = []
    for start in range(len(stems)):
        current = ""
        for stem in stems[start:]:
            current += stem
            aggregations.append(current)
    return aggregations


def get_keywords_for_title(title: str) -> str:
    """Build the space separated keyword list for a display title.

    The site name suffix (from the last ``|``) is dropped and only the simple
    name after the last ``.`` of each word is expanded.

    Args:
        title: Display title, e.g. ``"Method Foo.GetValue() | Site"``.

    Returns:
        Keywords joined by single spaces.
    """
    site_index = title.rfind("|")
    if site_index != -1:
        title = title[:site_index].rstrip()

    return " ".join(
        " ".join(get_stem_aggregations(get_stems(word.split(".")[-1]))) for word in title.split(" ")
    )
