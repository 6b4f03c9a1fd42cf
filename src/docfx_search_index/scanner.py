"""Extraction of search index items from a rendered documentation page."""

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from bs4 import BeautifulSoup, Tag
from bs4.element import PageElement

from docfx_search_index.config import IndexConfiguration
from docfx_search_index.keywords import get_keywords_for_title
from docfx_search_index.models import PageMetadata, SearchIndexItem, SearchScopes
from docfx_search_index.text import extract_text, normalize_summary
from docfx_search_index.titles import build_member_title, extract_title

logger = logging.getLogger(__name__)

SECTION_SCOPES = {
    "methods": SearchScopes.METHODS,
    "properties": SearchScopes.PROPERTIES,
    "fields": SearchScopes.FIELDS,
    "events": SearchScopes.EVENTS,
}


class GroupEvent(Enum):
    """What a child node means to the group scanner."""

    BOUNDARY = "boundary"
    START = "start"
    SUMMARY = "summary"


@dataclass
class MemberGroup:
    """An index item being collected."""

    href: str
    title: str
    keywords: str | None = None
    summary: str | None = None

    def to_item(self) -> SearchIndexItem:
        """Return the completed index item."""
        return SearchIndexItem(self.href, self.title, self.keywords, self.summary)


@dataclass(frozen=True)
class Step:
    """Result of classifying one child node.

    ``closes`` marks a SUMMARY that completes its group immediately.
    """

    event: GroupEvent
    group: MemberGroup | None = None
    summary: str | None = None
    closes: bool = False


GroupRule = Callable[[PageElement, bool], Step | None]


def scan_groups(nodes: Iterable[PageElement], rule: GroupRule) -> Iterator[SearchIndexItem]:
    """Group sibling nodes into index items.

    The rule classifies each node given whether a group is open. A BOUNDARY
    or START flushes the open group, START opens a new one, SUMMARY sets the
    open group's summary and flushes it when ``closes`` is set. The last
    group is flushed at the end of the nodes.

    Args:
        nodes: Sibling nodes in document order.
        rule: Classifier for the nodes.

    Yields:
        Completed SearchIndexItem instances in document order.
    """
    current: MemberGroup | None = None
    for node in nodes:
        step = rule(node, current is not None)
        if step is None:
            continue

        if step.event in (GroupEvent.BOUNDARY, GroupEvent.START):
            if current is not None:
                yield current.to_item()
            current = step.group if step.event is GroupEvent.START else None
        elif step.event is GroupEvent.SUMMARY and current is not None:
            current.summary = step.summary
            if step.closes:
                yield current.to_item()
                current = None

    if current is not None:
        yield current.to_item()


def _has_class(node: PageElement, class_name: str) -> bool:
    """Return whether node is an element carrying class_name."""
    return isinstance(node, Tag) and class_name in (node.get("class") or [])


@dataclass(frozen=True)
class PageContext:
    """Per-page values shared by the page's item builders."""

    href: str
    type_title: str
    use_metadata: bool
    use_metadata_title: bool
    strip_site_name: bool

    def new_group(self, section_kind: str, node: Tag) -> MemberGroup:
        """Open a member group for a heading or ``dt`` node.

        Args:
            section_kind: Section the member belongs to, e.g. ``methods``.
            node: Node naming the member; its id is the href fragment.

        Returns:
            MemberGroup with href, title and keywords set.
        """
        title = build_member_title(section_kind, node, self.type_title, self.use_metadata_title, self.strip_site_name)
        return MemberGroup(
            href=f"{self.href}#{node.get('id', '')}",
            title=title,
            keywords=get_keywords_for_title(title) if self.use_metadata else None,
        )


class EnumValueRule:
    """Groups a definition list: each ``dt[id]`` opens a value, its ``dd`` is the summary."""

    def __init__(self, page: PageContext) -> None:
        self.page = page

    def __call__(self, node: PageElement, is_open: bool) -> Step | None:
        if not isinstance(node, Tag):
            return None
        if node.name == "dt" and node.get("id"):
            return Step(GroupEvent.START, group=self.page.new_group("enum values", node))
        if is_open and node.name == "dd":
            return Step(GroupEvent.SUMMARY, summary=normalize_summary(node.get_text(), decode_entities=False))
        return None


class MemberSectionRule:
    """Groups member headings under ``h2.section`` boundaries.

    Tracks the current section id; ``h3`` headings open members only inside
    sections enabled by the scopes, and the ``.summary`` node closes them.
    """

    def __init__(self, page: PageContext, scopes: SearchScopes) -> None:
        self.page = page
        self.scopes = scopes
        self.section_id: str | None = None

    def _section_enabled(self) -> bool:
        scope = SECTION_SCOPES.get(self.section_id or "")
        return scope is not None and scope in self.scopes

    def __call__(self, node: PageElement, is_open: bool) -> Step | None:
        if not isinstance(node, Tag):
            return None

        if node.name == "h2" and _has_class(node, "section"):
            self.section_id = node.get("id", "")
            return Step(GroupEvent.BOUNDARY)

        if not self._section_enabled():
            return None

        if node.name == "h3":
            return Step(GroupEvent.START, group=self.page.new_group(self.section_id, node))
        if is_open and _has_class(node, "summary"):
            summary = normalize_summary(node.get_text(), decode_entities=False)
            return Step(GroupEvent.SUMMARY, summary=summary, closes=True)
        return None


class SectionScanner:
    """Produces the index items of rendered pages.

    A page gives its type item first, then its enum values, then the
    members found in its searchable nodes, all in document order.
    """

    def __init__(self, config: IndexConfiguration) -> None:
        """Initialise scanner with the build configuration.

        Args:
            config: Read-only configuration shared by all pages.
        """
        self.config = config

    def scan(
        self, soup: BeautifulSoup, href: str, metadata: PageMetadata | None = None
    ) -> Iterator[SearchIndexItem]:
        """Extract the index items of a page.

        Args:
            soup: Parsed page.
            href: Page href relative to the site root.
            metadata: Optional page metadata.

        Yields:
            SearchIndexItem instances in document order.
        """
        scopes = self.config.search_scopes
        if scopes == SearchScopes.NONE:
            return

        if soup.select_one('html > head > meta[name="searchOption"][content="noindex"]') is not None:
            logger.debug("Skipping %s: marked noindex", href)
            return

        html_title = extract_title(soup, self.config.strip_site_name_from_title)
        is_enum = html_title.startswith("Enum")
        nodes = self._searchable_nodes(soup, include_articles=not is_enum)

        use_metadata = self.config.use_metadata and metadata is not None and metadata.is_mref
        use_metadata_title = use_metadata and self.config.use_metadata_title and metadata.title is not None
        page = PageContext(
            href=href,
            type_title=metadata.title if use_metadata_title else html_title,
            use_metadata=use_metadata,
            use_metadata_title=use_metadata_title,
            strip_site_name=self.config.strip_site_name_from_title,
        )

        if SearchScopes.TYPES in scopes:
            yield self._type_item(page, soup, nodes, metadata)

        if scopes == SearchScopes.TYPES:
            return

        if is_enum and SearchScopes.ENUM_VALUES in scopes:
            yield from scan_groups(self._enum_value_nodes(soup, href), EnumValueRule(page))

        for node in nodes:
            yield from scan_groups(node.children, MemberSectionRule(page, scopes))

    @staticmethod
    def _searchable_nodes(soup: BeautifulSoup, include_articles: bool) -> list[Tag]:
        """Select the nodes holding searchable content.

        Enum articles are not split into sections, so they are left out and
        their values are read from the field list instead.
        """
        nodes = soup.select('[class*="data-searchable"]')
        if include_articles:
            seen = {id(node) for node in nodes}
            nodes.extend(article for article in soup.find_all("article") if id(article) not in seen)
        return nodes

    @staticmethod
    def _enum_value_nodes(soup: BeautifulSoup, href: str) -> list[PageElement]:
        """Return the children of the enum value list, or an empty list if the page has none."""
        for heading in soup.select("article > h2#fields"):
            value_list = heading.find_next_sibling(
                lambda tag: isinstance(tag, Tag) and tag.name == "dl" and tag.get("class") == ["parameters"]
            )
            if value_list is not None:
                return list(value_list.children)

        logger.debug("No enum value list found in %s", href)
        return []

    @staticmethod
    def _type_item(
        page: PageContext, soup: BeautifulSoup, nodes: list[Tag], metadata: PageMetadata | None
    ) -> SearchIndexItem:
        """Build the page level item from metadata or the searchable text of the page."""
        keywords = None
        if page.use_metadata:
            if metadata is not None and metadata.summary:
                fragment = BeautifulSoup(metadata.summary, "html.parser")
                summary = normalize_summary(
                    extract_text(next(iter(fragment.contents), None)), True, decode_entities=False
                )
            else:
                description = soup.select_one('head > meta[name="description"]')
                content = description.get("content") if description is not None else None
                summary = normalize_summary(content, True, decode_entities=False)
            keywords = get_keywords_for_title(page.type_title)
        else:
            summary = normalize_summary("".join(extract_text(node) for node in nodes), True, decode_entities=False)

        return SearchIndexItem(page.href, page.type_title, keywords, summary)
