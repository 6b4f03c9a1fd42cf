"""Search index builder for the rendered pages of a documentation site."""

import logging
import threading
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from bs4 import BeautifulSoup

from docfx_search_index.config import IndexConfiguration
from docfx_search_index.exceptions import IndexBuildCancelledError, PageLoadError
from docfx_search_index.index_file import SearchIndexFile
from docfx_search_index.manifest import Manifest
from docfx_search_index.models import HtmlPage, PageMetadata, SearchIndexItem
from docfx_search_index.scanner import SectionScanner

logger = logging.getLogger(__name__)


class SearchIndexBuilder:
    """Builds ``index.json`` with type and member entries from rendered HTML pages."""

    TOC_TYPE = "Toc"
    HTML_EXTENSION = ".html"

    def __init__(self, config: IndexConfiguration) -> None:
        """Initialise builder with the build configuration.

        Args:
            config: Configuration shared by every page scan.
        """
        self.config = config
        self.scanner = SectionScanner(config)

    def process(
        self,
        manifest: Manifest,
        output_folder: Path | None,
        cancel_event: threading.Event | None = None,
        max_workers: int = 1,
    ) -> Manifest:
        """Rebuild the site's search index from the manifest's pages.

        Args:
            manifest: Manifest of the build.
            output_folder: Folder holding the rendered site.
            cancel_event: Set to abort the build between pages.
            max_workers: Number of pages scanned concurrently.

        Returns:
            The manifest, unchanged.

        Raises:
            ValueError: If no output folder is given.
            PreconditionError: If the site has no index file to replace.
            IndexBuildCancelledError: If the build was cancelled.
        """
        if output_folder is None:
            msg = "Base directory can not be None"
            raise ValueError(msg)

        pages = self.collect_html_pages(manifest)
        if not pages:
            logger.info("No HTML pages to index")
            return manifest

        index = self.build_index(pages, output_folder, cancel_event, max_workers)

        index_file = SearchIndexFile(output_folder)
        index_file.replace(index)
        logger.info("Wrote %d search index items to %s", len(index), index_file.path)
        return manifest

    def collect_html_pages(self, manifest: Manifest) -> list[HtmlPage]:
        """List the HTML outputs of all non-TOC manifest items.

        Args:
            manifest: Manifest of the build.

        Returns:
            HtmlPage instances in manifest order.
        """
        pages = []
        for item in manifest.files:
            if item.type == self.TOC_TYPE:
                continue
            metadata = PageMetadata.from_dict(item.metadata)
            for extension, output in item.output.items():
                if extension.lower() == self.HTML_EXTENSION:
                    pages.append(HtmlPage(relative_path=output.relative_path, metadata=metadata))
        return pages

    def build_index(
        self,
        pages: Iterable[HtmlPage],
        output_folder: Path,
        cancel_event: threading.Event | None = None,
        max_workers: int = 1,
    ) -> dict[str, SearchIndexItem]:
        """Scan pages and merge their items by href.

        Items of later pages replace items of earlier pages with the same
        href. Pages scanned by worker threads are merged in page order.

        Args:
            pages: Pages to index.
            output_folder: Folder holding the rendered site.
            cancel_event: Set to abort the build between pages.
            max_workers: Number of pages scanned concurrently.

        Returns:
            Items keyed by href, in ascending href order.

        Raises:
            IndexBuildCancelledError: If the build was cancelled.
        """
        pages = list(pages)
        logger.info("Extracting search index items from %d HTML files", len(pages))

        def scan(page: HtmlPage) -> list[SearchIndexItem]:
            return self._scan_page(page, output_folder, cancel_event)

        index: dict[str, SearchIndexItem] = {}
        if max_workers > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                page_items = list(executor.map(scan, pages))
        else:
            page_items = map(scan, pages)

        for items in page_items:
            for item in items:
                index[item.href] = item

        logger.info("Extracted %d search index items", len(index))
        return {href: index[href] for href in sorted(index)}

    def _scan_page(
        self, page: HtmlPage, output_folder: Path, cancel_event: threading.Event | None
    ) -> list[SearchIndexItem]:
        """Scan a single page, skipping it if it cannot be loaded.

        Raises:
            IndexBuildCancelledError: If the build was cancelled before this page.
        """
        if cancel_event is not None and cancel_event.is_set():
            msg = "Search index build was cancelled"
            raise IndexBuildCancelledError(msg)

        file_path = output_folder / page.relative_path
        if not file_path.is_file():
            logger.warning("Skipping %s: file does not exist", file_path)
            return []

        logger.debug("Extracting index data from %s", file_path)
        try:
            soup = self.load_page(file_path)
        except PageLoadError as e:
            logger.warning("Can't load content from %s: %s", file_path, e)
            return []

        return list(self.scanner.scan(soup, page.relative_path, page.metadata))

    @staticmethod
    def load_page(file_path: Path) -> BeautifulSoup:
        """Read and parse a rendered page.

        Args:
            file_path: Path to the HTML file.

        Returns:
            Parsed page.

        Raises:
            PageLoadError: If the file cannot be read or decoded as UTF-8.
        """
        try:
            source = file_path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Failed to read {file_path}: {e}"
            raise PageLoadError(msg) from e
        return BeautifulSoup(source, "html.parser")
