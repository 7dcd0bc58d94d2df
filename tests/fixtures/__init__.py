"""Test fixtures for mdbook-build-annotations.

Builders for the JSON documents mdBook exchanges with preprocessors.
"""

from pathlib import Path
from typing import Any

from mdbook_build_annotations.models.context import MDBOOK_VERSION


def chapter(name: str, content: str, sub_items: list[Any] | None = None) -> dict[str, Any]:
    """Build a serialized chapter item."""
    return {
        "Chapter": {
            "name": name,
            "content": content,
            "number": [1],
            "sub_items": sub_items or [],
            "path": f"{name.lower()}.md",
            "source_path": f"{name.lower()}.md",
            "parent_names": [],
        }
    }


def make_book(items: list[Any] | None = None) -> dict[str, Any]:
    """Build a serialized mdBook 0.5 book.

    Defaults to two chapters separated by a separator.
    """
    if items is None:
        items = [
            chapter("Intro", "# Intro\n"),
            "Separator",
            chapter("Usage", "# Usage\n"),
        ]
    return {"items": items}


def make_context(
    root: Path,
    mdbook_version: str = MDBOOK_VERSION,
    renderer: str = "html",
    **options: Any,
) -> dict[str, Any]:
    """Build a serialized preprocessor context.

    Keyword options land in ``[preprocessor.build-annotations]``.
    """
    return {
        "root": str(root),
        "config": {
            "book": {"title": "Test Book", "src": "src"},
            "preprocessor": {"build-annotations": dict(options)},
        },
        "renderer": renderer,
        "mdbook_version": mdbook_version,
    }
