"""Book entities as mdBook serializes them for preprocessors.

A book is a tree of items. Only chapters carry text; separators, part
titles and anything this version does not recognise are structural and
passed through untouched.

Serialized shapes:
- Chapter:   {"Chapter": {"name": ..., "content": ..., "sub_items": [...], ...}}
- Separator: "Separator"
- PartTitle: {"PartTitle": "Title"}
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from mdbook_build_annotations.errors import DocumentError

# mdBook 0.5 writes "items"; 0.4 wrote "sections", still accepted on input.
ITEM_KEYS = ("items", "sections")


@dataclass
class Chapter:
    """A chapter with renderable markdown content.

    Attributes:
        name: Chapter title, None if the input had none
        content: Markdown content (mutated in place by preprocessors)
        sub_items: Nested items
        extra: Remaining serialized fields (number, path, source_path, ...)
        absent: Keys missing from the input, left out again on output
            unless they were given a value since
    """

    name: str | None = None
    content: str = ""
    sub_items: list["BookItem"] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)
    absent: frozenset[str] = field(default_factory=frozenset, repr=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = dict(self.extra)
        if self.name is not None or "name" not in self.absent:
            data["name"] = self.name
        if self.content or "content" not in self.absent:
            data["content"] = self.content
        if self.sub_items or "sub_items" not in self.absent:
            data["sub_items"] = [item.to_dict() for item in self.sub_items]
        return {"Chapter": data}


@dataclass
class Separator:
    """A separator line in the summary."""

    def to_dict(self) -> str:
        """Convert to the serialized form."""
        return "Separator"


@dataclass
class PartTitle:
    """A part heading in the summary."""

    title: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for serialization."""
        return {"PartTitle": self.title}


@dataclass
class UnknownItem:
    """An item kind this version does not know about, kept verbatim."""

    raw: Any

    def to_dict(self) -> Any:
        """Return the original serialized value."""
        return self.raw


BookItem = Chapter | Separator | PartTitle | UnknownItem


def item_from_dict(data: Any) -> BookItem:
    """Build a book item from its serialized form.

    Args:
        data: Deserialized JSON value for one item

    Returns:
        The matching BookItem variant

    Raises:
        DocumentError: If a chapter is malformed
    """
    if data == "Separator":
        return Separator()

    if isinstance(data, dict) and len(data) == 1:
        if "Chapter" in data:
            return _chapter_from_dict(data["Chapter"])
        if "PartTitle" in data and isinstance(data["PartTitle"], str):
            return PartTitle(title=data["PartTitle"])

    return UnknownItem(raw=data)


def _chapter_from_dict(data: Any) -> Chapter:
    if not isinstance(data, dict):
        raise DocumentError(f"Chapter must be an object, got {type(data).__name__}")

    extra = dict(data)
    absent = frozenset(key for key in ("name", "content", "sub_items") if key not in extra)
    name = extra.pop("name", None)
    content = extra.pop("content", "")
    sub_items = extra.pop("sub_items", [])

    if name is not None and not isinstance(name, str):
        raise DocumentError(f"Chapter name must be a string, got {type(name).__name__}")
    if not isinstance(content, str):
        raise DocumentError(f"Chapter {name!r} has non-string content")
    if not isinstance(sub_items, list):
        raise DocumentError(f"Chapter {name!r} has invalid sub_items")

    return Chapter(
        name=name,
        content=content,
        sub_items=[item_from_dict(item) for item in sub_items],
        extra=extra,
        absent=absent,
    )


@dataclass
class Book:
    """The whole book handed to a preprocessor.

    Attributes:
        items: Top-level items in summary order
        items_key: Key the items were read from ("sections" or "items")
        extra: Other top-level fields, preserved as-is
    """

    items: list[BookItem] = field(default_factory=list)
    items_key: str = "items"
    extra: dict[str, Any] = field(default_factory=dict)

    def iter_items(self) -> Iterator[BookItem]:
        """Yield every item depth-first, parents before their sub-items."""
        stack = list(reversed(self.items))
        while stack:
            item = stack.pop()
            yield item
            if isinstance(item, Chapter):
                stack.extend(reversed(item.sub_items))

    def for_each_mut(self, func: Callable[[BookItem], None]) -> None:
        """Call ``func`` on every item of the book, including nested ones."""
        for item in self.iter_items():
            func(item)

    def chapters(self) -> list[Chapter]:
        """Return all chapters in visiting order."""
        return [item for item in self.iter_items() if isinstance(item, Chapter)]

    @classmethod
    def from_dict(cls, data: Any) -> "Book":
        """Create a book from its deserialized JSON form.

        Raises:
            DocumentError: If the value is not a book
        """
        if not isinstance(data, dict):
            raise DocumentError(f"Book must be an object, got {type(data).__name__}")

        extra = dict(data)
        for key in ITEM_KEYS:
            if key in extra:
                raw_items = extra.pop(key)
                break
        else:
            raise DocumentError("Book has no 'sections' or 'items' list")

        if not isinstance(raw_items, list):
            raise DocumentError(f"Book '{key}' must be a list")

        return cls(
            items=[item_from_dict(item) for item in raw_items],
            items_key=key,
            extra=extra,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = {self.items_key: [item.to_dict() for item in self.items]}
        data.update(self.extra)
        return data
