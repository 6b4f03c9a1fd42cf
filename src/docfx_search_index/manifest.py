"""Build manifest describing the rendered output files."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class OutputFileInfo:
    """An output file produced for a manifest item."""

    relative_path: str


@dataclass
class ManifestItem:
    """A source file of the build and the outputs rendered from it."""

    type: str
    output: dict[str, OutputFileInfo] = field(default_factory=dict)
    metadata: dict[str, Any] | None = None


@dataclass
class Manifest:
    """All items produced by a documentation build."""

    files: list[ManifestItem] = field(default_factory=list)


def load_manifest(path: Path) -> Manifest:
    """Read a ``manifest.json`` written by the site generator.

    Args:
        path: Path to the manifest file.

    Returns:
        Manifest instance.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    files = []
    for entry in data.get("files") or []:
        output = {
            extension: OutputFileInfo(relative_path=info["relative_path"])
            for extension, info in (entry.get("output") or {}).items()
        }
        files.append(ManifestItem(type=entry.get("type", ""), output=output, metadata=entry.get("metadata")))
    return Manifest(files=files)
