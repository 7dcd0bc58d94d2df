"""Footer composition.

The footer lists whichever facts are enabled and known, always in the order
name, revision, version:

    <footer>my-crate @1a2b3c4d5e v0.3.1</footer>
"""

from mdbook_build_annotations.config import Config
from mdbook_build_annotations.manifest import ProjectMetadata
from mdbook_build_annotations.utils.logging import get_logger

_logger = get_logger()

FOOTER_OPEN = "<footer>"
FOOTER_CLOSE = "</footer>"


def _append(footer: str, fragment: str) -> str:
    # An empty footer so far (nothing added, or an empty name) gets no separator.
    return f"{footer} {fragment}" if footer else fragment


def compose_footer(
    metadata: ProjectMetadata,
    revision: str | None,
    config: Config,
) -> str | None:
    """Build the footer for a book.

    Facts that are enabled but unknown are reported and left out.

    Args:
        metadata: Package name and version
        revision: Truncated commit id, if known
        config: Flags choosing which facts to include

    Returns:
        The wrapped footer, or None when there is nothing to show
    """
    footer = ""

    if config.package_name:
        if metadata.name is not None:
            footer = _append(footer, metadata.name)
        else:
            _logger.error("Package name not found in Cargo.toml, skipping it in annotation")

    if config.git_commit:
        if revision is not None:
            footer = _append(footer, f"@{revision}")
        else:
            _logger.error("Git commit not found, skipping it in annotation")

    if config.package_version:
        if metadata.version is not None:
            footer = _append(footer, f"v{metadata.version}")
        else:
            _logger.error("Package version not found in Cargo.toml, skipping it in annotation")

    if not footer:
        _logger.error("No annotation data found, not adding footer")
        return None

    return f"{FOOTER_OPEN}{footer}{FOOTER_CLOSE}"
