"""Utility modules.

- logging: stderr logging driven by MDBOOK_LOG and CLI flags
"""

from mdbook_build_annotations.utils.logging import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
]
