"""Page and member titles for search index items."""

from bs4 import BeautifulSoup, Tag

from docfx_search_index.exceptions import ConfigurationError
from docfx_search_index.text import normalize_content

SECTION_LABELS = {
    "methods": "Method ",
    "properties": "Property ",
    "fields": "Field ",
    "events": "Event ",
    "enum values": "Enum Value ",
}


def extract_title(soup: BeautifulSoup, strip_site_name: bool = False) -> str:
    """Extract the page title from the document head.

    The ``<title>`` element wins whenever it exists, even if it is empty;
    ``<meta name="title">`` is only consulted without one.

    Args:
        soup: Parsed page.
        strip_site_name: Remove the ``| Site`` suffix.

    Returns:
        Normalised page title.
    """
    title_node = soup.select_one("head > title")
    if title_node is not None:
        original_title = title_node.get_text()
    else:
        meta_node = soup.select_one('head > meta[name="title"]')
        original_title = meta_node.get("content") if meta_node is not None else None

    title = normalize_content(original_title, decode_entities=False)
    strip_index = title.rfind("|") if strip_site_name else -1
    return (title if strip_index == -1 else title[:strip_index]).rstrip()


def build_member_title(
    section_kind: str,
    member_node: Tag,
    type_title: str,
    used_metadata_title: bool,
    strip_site_name: bool = False,
) -> str:
    """Compose the display title of a member.

    Without a metadata title the member name is spliced in after the bare
    type name: ``"Class Foo | Site"`` and ``Bar()`` give
    ``"Method Foo.Bar() | Site"``.

    Args:
        section_kind: One of the SECTION_LABELS keys.
        member_node: Heading (``h3``) or ``dt`` node naming the member.
        type_title: Title of the page the member belongs to.
        used_metadata_title: Whether type_title came from page metadata.
        strip_site_name: Whether the site name was already stripped from type_title.

    Returns:
        Member display title.

    Raises:
        ConfigurationError: If section_kind is not supported.
    """
    if section_kind not in SECTION_LABELS:
        msg = f"Unsupported search scope: {section_kind}."
        raise ConfigurationError(msg)

    member_name = normalize_content(member_node.get_text(), decode_entities=False)
    if used_metadata_title:
        return f"{type_title}.{member_name}"

    type_start, type_end = _type_name_bounds(type_title, strip_site_name)
    return (
        f"{SECTION_LABELS[section_kind]}{type_title[type_start:type_end]}.{member_name}{type_title[type_end:]}"
    )


def _type_name_bounds(title: str, strip_site_name: bool) -> tuple[int, int]:
    """Locate the bare type name in a title such as ``"Class Foo | Site"``.

    Args:
        title: Type title, read as ``<Kind> <TypeName>[ <more>][ | <Site>]``.
        strip_site_name: Whether the site name was already stripped.

    Returns:
        Start and end index of the type name.
    """
    type_start = title.find(" ") + 1
    type_end = title.find(" ", type_start)
    if type_end != -1:
        return type_start, type_end

    type_end = len(title)
    if not strip_site_name:
        site_index = title.rfind("|")
        if site_index != -1:
            type_end = site_index
            while type_end > 0 and title[type_end - 1].isspace():
                type_end -= 1

    return type_start, max(type_end, type_start)
