"""The build-annotations preprocessor.

Resolves config, reads Cargo.toml, asks git for the current commit, builds
the footer and appends it to every chapter. Running it twice on the same
book appends the footer twice.
"""

import sys
from typing import TextIO

from mdbook_build_annotations.config import PREPROCESSOR_NAME, Config
from mdbook_build_annotations.footer import compose_footer
from mdbook_build_annotations.manifest import load_manifest
from mdbook_build_annotations.models.book import Book, BookItem, Chapter
from mdbook_build_annotations.models.context import (
    MDBOOK_VERSION,
    PreprocessorContext,
    parse_input,
    write_book,
)
from mdbook_build_annotations.revision import determine_git_rev
from mdbook_build_annotations.utils.logging import get_logger

_logger = get_logger()


def annotate_item(item: BookItem, footer: str) -> None:
    """Append ``footer`` to a chapter's content; ignore other items."""
    if isinstance(item, Chapter):
        item.content += footer


class BuildAnnotations:
    """Preprocessor appending a provenance footer to each chapter."""

    name = PREPROCESSOR_NAME

    def supports_renderer(self, renderer: str) -> bool:
        """Return True if the preprocessor can run for ``renderer``.

        The footer is inline HTML in markdown, which every renderer accepts.
        """
        return True

    def run(self, ctx: PreprocessorContext, book: Book) -> Book:
        """Annotate the book.

        Args:
            ctx: Preprocessor context
            book: Book to annotate in place

        Returns:
            The same book, annotated unless no facts were available

        Raises:
            ConfigTypeError: If the preprocessor config is malformed
            ManifestReadError: If Cargo.toml cannot be read
            ManifestParseError: If Cargo.toml is not valid TOML
        """
        cfg = Config.from_context(ctx)
        _logger.debug(f"Config: {cfg}")

        metadata = load_manifest(cfg.workspace_dir).metadata()
        commit = determine_git_rev(cfg.git_dir, cfg.commit_characters)

        _logger.debug(
            f"Package: {metadata.name or 'unknown'} v{metadata.version or 'unknown'} "
            f"Git commit: {commit or 'unknown'}"
        )

        footer = compose_footer(metadata, commit, cfg)
        if footer is None:
            return book

        book.for_each_mut(lambda item: annotate_item(item, footer))
        return book


def handle_preprocessing(
    preprocessor: BuildAnnotations | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> None:
    """Read a book from stdin, annotate it and write it to stdout.

    Raises:
        AnnotationError: On any fatal error
    """
    preprocessor = preprocessor or BuildAnnotations()
    ctx, book = parse_input(stdin or sys.stdin)

    if ctx.mdbook_version != MDBOOK_VERSION:
        _logger.warning(
            f"Warning: The {preprocessor.name} preprocessor was built against version "
            f"{MDBOOK_VERSION} of mdbook, but we're being called from version "
            f"{ctx.mdbook_version}"
        )

    processed_book = preprocessor.run(ctx, book)
    write_book(processed_book, stdout or sys.stdout)
