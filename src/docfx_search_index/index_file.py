"""Reading and writing the search index JSON file."""

import json
from collections.abc import Mapping
from pathlib import Path

from docfx_search_index.exceptions import PreconditionError
from docfx_search_index.models import SearchIndexItem

INDEX_FILE_NAME = "index.json"


class SearchIndexFile:
    """Manages the ``index.json`` search index of a built site."""

    def __init__(self, output_folder: Path) -> None:
        """Initialise with the site's output folder.

        Args:
            output_folder: Folder holding the rendered site.
        """
        self.path = output_folder / INDEX_FILE_NAME

    def exists(self) -> bool:
        """Return whether an index file is present."""
        return self.path.is_file()

    def replace(self, index: Mapping[str, SearchIndexItem]) -> None:
        """Overwrite the existing index file with the given items.

        Items are written keyed by href in ascending href order.

        Args:
            index: Items keyed by href.

        Raises:
            PreconditionError: If no index file was produced earlier in the build.
        """
        if not self.exists():
            msg = f"{INDEX_FILE_NAME} not found in {self.path.parent}. Make sure the default search index was built."
            raise PreconditionError(msg)

        payload = {href: index[href].to_dict() for href in sorted(index)}
        temp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            temp_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
            temp_path.replace(self.path)
        finally:
            temp_path.unlink(missing_ok=True)

    def load(self) -> dict[str, SearchIndexItem]:
        """Read the index file.

        Returns:
            Items keyed by href.
        """
        data = json.loads(self.path.read_text(encoding="utf-8"))
        return {
            href: SearchIndexItem(
                href=entry["href"],
                title=entry["title"],
                keywords=entry.get("keywords"),
                summary=entry.get("summary"),
            )
            for href, entry in data.items()
        }
