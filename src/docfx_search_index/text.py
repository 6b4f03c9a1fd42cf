"""Text normalisation for search index titles and summaries."""

import html
import re

from bs4 import Comment, NavigableString, Tag
from bs4.element import PageElement, PreformattedString

WHITESPACE_RE = re.compile(r"(\s*\n\s*)|\s+")

INLINE_TAGS = frozenset(
    {
        "a", "area", "del", "ins", "link", "map", "meta", "abbr", "audio", "b", "bdo", "button", "canvas", "cite",
        "code", "command", "data", "datalist", "dfn", "em", "embed", "i", "iframe", "img", "input", "kbd", "keygen",
        "label", "mark", "math", "meter", "noscript", "object", "output", "picture", "progress", "q", "ruby", "samp",
        "script", "select", "small", "span", "strong", "sub", "sup", "svg", "textarea", "time", "var", "video", "wbr",
    }
)  # fmt: skip


def normalize_content(raw: str | None, keep_paragraph_breaks: bool = False, decode_entities: bool = True) -> str:
    """Decode entities and collapse whitespace.

    Args:
        raw: Text to normalise, possibly containing HTML entities.
        keep_paragraph_breaks: Collapse whitespace runs containing a newline
            to a single newline instead of a space.
        decode_entities: Decode HTML entities. Text taken from a parsed
            tree is already decoded and must not be decoded again.

    Returns:
        Normalised, trimmed text ("" for empty input).
    """
    if not raw:
        return ""

    decoded = html.unescape(raw) if decode_entities else raw
    if keep_paragraph_breaks:
        collapsed = WHITESPACE_RE.sub(lambda m: "\n" if m.group(1) is not None else " ", decoded)
    else:
        collapsed = WHITESPACE_RE.sub(" ", decoded)
    return collapsed.strip()


def normalize_summary(
    raw: str | None, keep_paragraph_breaks: bool = False, decode_entities: bool = True
) -> str | None:
    """Normalise a summary and cut it at its last sentence boundary.

    Args:
        raw: Summary text.
        keep_paragraph_breaks: Passed through to normalize_content.
        decode_entities: Passed through to normalize_content.

    Returns:
        Text before the last ``.`` (whole text if there is none), or None for empty input.
    """
    if not raw:
        return None

    summary = normalize_content(raw, keep_paragraph_breaks, decode_entities)
    trailing_dot = summary.rfind(".")
    if trailing_dot == -1:
        return summary
    return summary[:trailing_dot].rstrip()


def extract_text(node: PageElement | None) -> str:
    """Flatten the text of a node, separating block elements with spaces.

    Args:
        node: Document, element, text or comment node.

    Returns:
        Raw concatenated text, not yet normalised.
    """
    parts: list[str] = []
    _collect_text(node, parts)
    return "".join(parts)


def _collect_text(node: PageElement | None, parts: list[str]) -> None:
    """Append the text of node and its descendants to parts."""
    if node is None:
        return

    if isinstance(node, NavigableString):
        # Doctype, CDATA and processing instructions carry no prose
        if isinstance(node, Comment) or not isinstance(node, PreformattedString):
            parts.append(str(node))
        return

    if isinstance(node, Tag):
        is_block = node.name.lower() not in INLINE_TAGS
        if is_block:
            parts.append(" ")
        for child in node.children:
            _collect_text(child, parts)
        if is_block:
            parts.append(" ")
