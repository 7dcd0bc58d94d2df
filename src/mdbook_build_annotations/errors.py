"""Fatal errors raised while annotating a book.

Every error here aborts the run. Recoverable conditions (no git repository,
missing manifest fields) are logged instead and never raise.
"""


class AnnotationError(Exception):
    """Base class for errors that abort preprocessing."""


class ManifestReadError(AnnotationError):
    """Raised when the Cargo.toml manifest cannot be read."""


class ManifestParseError(AnnotationError):
    """Raised when the Cargo.toml manifest is not valid TOML."""


class ConfigTypeError(AnnotationError):
    """Raised when a preprocessor config value has the wrong type."""


class DocumentError(AnnotationError):
    """Raised when the book document cannot be read or written."""
