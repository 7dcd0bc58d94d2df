"""Entry point for running the preprocessor as a module.

Usage:
    python -m mdbook_build_annotations [command]

Example:
    python -m mdbook_build_annotations supports html
    python -m mdbook_build_annotations < input.json
"""

from mdbook_build_annotations.cli import app

if __name__ == "__main__":
    app()
