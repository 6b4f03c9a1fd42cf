"""Data models for the documentation search index."""

from dataclasses import dataclass
from enum import Flag
from typing import Any


class SearchScopes(Flag):
    """Kinds of index items extracted from a page."""

    NONE = 0
    TYPES = 1
    METHODS = 2
    PROPERTIES = 4
    EVENTS = 8
    FIELDS = 16
    ENUM_VALUES = 32
    ALL = TYPES | METHODS | PROPERTIES | EVENTS | FIELDS | ENUM_VALUES

    @classmethod
    def parse(cls, name: str) -> "SearchScopes":
        """Parse a scope name such as ``EnumValues`` or ``methods``.

        Args:
            name: Scope name, case-insensitive, with or without underscores.

        Returns:
            Matching SearchScopes member.

        Raises:
            KeyError: If the name does not match any scope.
        """
        key = name.replace("_", "").lower()
        for member_name, member in cls.__members__.items():
            if member_name.replace("_", "").lower() == key:
                return member
        raise KeyError(name)


@dataclass(frozen=True)
class SearchIndexItem:
    """Represents a single entry of the search index."""

    href: str
    title: str
    keywords: str | None = None
    summary: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        """Return the JSON representation of the item."""
        return {
            "href": self.href,
            "title": self.title,
            "keywords": self.keywords,
            "summary": self.summary,
        }


@dataclass(frozen=True)
class PageMetadata:
    """Metadata supplied by the build for a rendered page."""

    is_mref: bool = False
    title: str | None = None
    summary: str | None = None

    @classmethod
    def from_dict(cls, metadata: dict[str, Any] | None) -> "PageMetadata | None":
        """Build page metadata from the raw manifest mapping.

        Args:
            metadata: Mapping with the optional keys ``IsMRef``, ``Title`` and ``Summary``.

        Returns:
            PageMetadata instance or None if no mapping was given.
        """
        if metadata is None:
            return None
        return cls(
            is_mref=bool(metadata.get("IsMRef", False)),
            title=metadata.get("Title"),
            summary=metadata.get("Summary"),
        )


@dataclass(frozen=True)
class HtmlPage:
    """A rendered HTML file of the site together with its metadata."""

    relative_path: str
    metadata: PageMetadata | None = None
