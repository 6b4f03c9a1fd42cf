"""Errors raised while building the search index."""


class SearchIndexError(Exception):
    """Base class for search index errors."""


class ConfigurationError(SearchIndexError, ValueError):
    """Raised for invalid search index configuration."""


class PreconditionError(SearchIndexError):
    """Raised when the build output is not in the expected state."""


class PageLoadError(SearchIndexError):
    """Raised when a rendered page cannot be read or parsed."""


class IndexBuildCancelledError(SearchIndexError):
    """Raised when an index build is cancelled between pages."""
