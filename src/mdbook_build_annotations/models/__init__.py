"""Book and context models exchanged with mdBook.

- Book: the book tree (chapters, separators, part titles)
- PreprocessorContext: root, book.toml config, renderer, mdBook version
"""

from mdbook_build_annotations.models.book import (
    Book,
    BookItem,
    Chapter,
    PartTitle,
    Separator,
    UnknownItem,
)
from mdbook_build_annotations.models.context import (
    MDBOOK_VERSION,
    PreprocessorContext,
    parse_input,
    write_book,
)

__all__ = [
    "Book",
    "BookItem",
    "Chapter",
    "PartTitle",
    "Separator",
    "UnknownItem",
    "MDBOOK_VERSION",
    "PreprocessorContext",
    "parse_input",
    "write_book",
]
