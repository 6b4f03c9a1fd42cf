"""Search index configuration derived from the build's global metadata."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from docfx_search_index.exceptions import ConfigurationError
from docfx_search_index.models import SearchScopes

logger = logging.getLogger(__name__)

ENABLE_SEARCH_KEY = "_enableSearch"
USE_METADATA_KEY = "_searchIndexUseMetadata"
USE_METADATA_TITLE_KEY = "_searchIndexUseMetadataTitle"
SCOPES_KEY = "_searchIndexScopes"
STRIP_SITE_NAME_KEY = "_searchIndexStripSiteNameFromTitle"


@dataclass(frozen=True)
class IndexConfiguration:
    """Options shared read-only by every page scan of a build."""

    use_metadata: bool = False
    use_metadata_title: bool = True
    search_scopes: SearchScopes = SearchScopes.ALL
    strip_site_name_from_title: bool = False

    @classmethod
    def from_metadata(cls, metadata: Mapping[str, Any]) -> "IndexConfiguration":
        """Read the configuration from global build metadata.

        Args:
            metadata: Global metadata mapping.

        Returns:
            IndexConfiguration instance.

        Raises:
            ConfigurationError: If a scope name is not recognised.
        """
        scopes = SearchScopes.ALL
        if metadata.get(SCOPES_KEY) is not None:
            scopes = parse_scopes(metadata[SCOPES_KEY])

        return cls(
            use_metadata=bool(metadata.get(USE_METADATA_KEY, False)),
            use_metadata_title=bool(metadata.get(USE_METADATA_TITLE_KEY, True)),
            search_scopes=scopes,
            strip_site_name_from_title=bool(metadata.get(STRIP_SITE_NAME_KEY, False)),
        )


def parse_scopes(names: Iterable[str] | str) -> SearchScopes:
    """Combine scope names into a single flag set.

    Args:
        names: Scope names, matched case-insensitively. A single string is
            treated as one name.

    Returns:
        Union of the named scopes (``NONE`` for an empty sequence).

    Raises:
        ConfigurationError: If a name is not a known scope.
    """
    if isinstance(names, str):
        names = [names]

    scopes = SearchScopes.NONE
    for name in names:
        try:
            scopes |= SearchScopes.parse(str(name))
        except KeyError:
            msg = f"Invalid scope: {name}."
            raise ConfigurationError(msg) from None
    return scopes


def prepare_metadata(metadata: Mapping[str, Any]) -> tuple[dict[str, Any], IndexConfiguration]:
    """Fill in search defaults and derive the index configuration.

    Args:
        metadata: Global build metadata.

    Returns:
        Tuple of the updated metadata (a new mapping) and the configuration.
    """
    prepared = dict(metadata)
    prepared.setdefault(ENABLE_SEARCH_KEY, True)

    config = IndexConfiguration.from_metadata(prepared)
    logger.debug(
        "Search index configuration: use_metadata=%s, use_metadata_title=%s, scopes=%s, strip_site_name=%s",
        config.use_metadata,
        config.use_metadata_title,
        config.search_scopes,
        config.strip_site_name_from_title,
    )
    return prepared, config
