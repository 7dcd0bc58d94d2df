"""Preprocessor context and input parsing.

mdBook sends ``[context, book]`` as a JSON array on stdin. The context holds
the book root, the parsed ``book.toml``, the renderer being run and the
mdBook version doing the calling.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TextIO

from mdbook_build_annotations.errors import DocumentError
from mdbook_build_annotations.models.book import Book

# mdBook release the book format handled here was taken from.
MDBOOK_VERSION = "0.5.0"

# mdBook reads and writes preprocessor documents as UTF-8 on every platform.
ENCODING = "utf-8"


@dataclass
class PreprocessorContext:
    """Run context supplied by mdBook.

    Attributes:
        root: Book root directory
        config: Parsed book.toml as nested tables
        renderer: Name of the renderer the book is being prepared for
        mdbook_version: Version of the calling mdBook
        extra: Any other context fields
    """

    root: Path
    config: dict[str, Any] = field(default_factory=dict)
    renderer: str = "html"
    mdbook_version: str = MDBOOK_VERSION
    extra: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str) -> Any:
        """Look up a dotted config key.

        ``get("preprocessor.build-annotations.git_dir")`` walks the
        ``preprocessor`` table, then ``build-annotations``, then returns
        ``git_dir``.

        Args:
            key: Dotted path into the book configuration

        Returns:
            The value, or None when any part of the path is missing
        """
        value: Any = self.config
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return None
            value = value[part]
        return value

    @classmethod
    def from_dict(cls, data: Any) -> "PreprocessorContext":
        """Create a context from its deserialized JSON form.

        Raises:
            DocumentError: If the value is not a context object
        """
        if not isinstance(data, dict):
            raise DocumentError(f"Context must be an object, got {type(data).__name__}")

        extra = dict(data)
        config = extra.pop("config", {}) or {}
        if not isinstance(config, dict):
            raise DocumentError("Context 'config' must be an object")

        return cls(
            root=Path(extra.pop("root", ".")),
            config=config,
            renderer=str(extra.pop("renderer", "html")),
            mdbook_version=str(extra.pop("mdbook_version", "")),
            extra=extra,
        )


def parse_input(stream: TextIO) -> tuple[PreprocessorContext, Book]:
    """Read the ``[context, book]`` pair mdBook writes to a preprocessor.

    mdBook always writes UTF-8. When ``stream`` wraps a binary buffer (as
    ``sys.stdin`` does) the raw bytes are decoded as UTF-8 so the locale or
    ``PYTHONIOENCODING`` cannot garble chapter text.

    Args:
        stream: Text stream holding the JSON document

    Returns:
        Tuple of (context, book)

    Raises:
        DocumentError: If the input is not valid JSON or not a pair
    """
    buffer = getattr(stream, "buffer", None)
    try:
        if buffer is not None:
            data = json.loads(buffer.read().decode(ENCODING))
        else:
            data = json.load(stream)
    except UnicodeDecodeError as e:
        raise DocumentError(f"Input is not valid {ENCODING}: {e}") from e
    except json.JSONDecodeError as e:
        raise DocumentError(f"Unable to parse the input: {e}") from e

    if not isinstance(data, list) or len(data) != 2:
        raise DocumentError("Expected a JSON array of [context, book]")

    return PreprocessorContext.from_dict(data[0]), Book.from_dict(data[1])


def write_book(book: Book, stream: TextIO) -> None:
    """Serialize the book to ``stream`` as UTF-8 JSON.

    Raises:
        DocumentError: If the book cannot be written
    """
    buffer = getattr(stream, "buffer", None)
    try:
        payload = json.dumps(book.to_dict(), ensure_ascii=False)
        if buffer is not None:
            stream.flush()
            buffer.write(payload.encode(ENCODING))
            buffer.flush()
        else:
            stream.write(payload)
            stream.flush()
    except (TypeError, ValueError, OSError) as e:
        raise DocumentError(f"Unable to write the book: {e}") from e
