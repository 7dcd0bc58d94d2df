"""Preprocessor configuration.

Configuration lives in the book's ``book.toml`` under the preprocessor's own
table. Every key is optional:

    [preprocessor.build-annotations]
    commit_characters = 10
    workspace_dir = "../"
    git_dir = "../"
    package_name = true
    package_version = true
    git_commit = true
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mdbook_build_annotations.errors import ConfigTypeError
from mdbook_build_annotations.models.context import PreprocessorContext

PREPROCESSOR_NAME = "build-annotations"

DEFAULT_COMMIT_CHARACTERS = 10
DEFAULT_DIR = "../"


def config_key(name: str) -> str:
    """Return the full dotted book.toml key for a preprocessor setting."""
    return f"preprocessor.{PREPROCESSOR_NAME}.{name}"


@dataclass
class Config:
    """Resolved preprocessor configuration.

    Attributes:
        commit_characters: How many characters of the commit id to show
        workspace_dir: Directory holding the Cargo.toml to read
        git_dir: Directory inside the git repository to describe
        package_name: Include the package name in the footer
        package_version: Include the package version in the footer
        git_commit: Include the git commit in the footer
    """

    commit_characters: int = DEFAULT_COMMIT_CHARACTERS
    workspace_dir: Path = field(default_factory=lambda: Path(DEFAULT_DIR))
    git_dir: Path = field(default_factory=lambda: Path(DEFAULT_DIR))
    package_name: bool = True
    package_version: bool = True
    git_commit: bool = True

    @classmethod
    def from_context(cls, ctx: PreprocessorContext) -> "Config":
        """Resolve configuration from the book context.

        Args:
            ctx: Preprocessor context carrying book.toml

        Returns:
            Config with defaults filled in for unset keys

        Raises:
            ConfigTypeError: If a set value has the wrong type
        """
        defaults = cls()
        return cls(
            commit_characters=_get_commit_characters(ctx, defaults.commit_characters),
            workspace_dir=_get_path(ctx, "workspace_dir", defaults.workspace_dir),
            git_dir=_get_path(ctx, "git_dir", defaults.git_dir),
            package_name=_get_bool(ctx, "package_name", defaults.package_name),
            package_version=_get_bool(ctx, "package_version", defaults.package_version),
            git_commit=_get_bool(ctx, "git_commit", defaults.git_commit),
        )


def _type_error(name: str, expected: str, value: Any) -> ConfigTypeError:
    return ConfigTypeError(
        f"Failed to deserialize `{config_key(name)}`: "
        f"expected {expected}, got {type(value).__name__} {value!r}"
    )


def _get_commit_characters(ctx: PreprocessorContext, default: int) -> int:
    value = ctx.get(config_key("commit_characters"))
    if value is None:
        return default
    # bool is an int subclass; `true` is not a length.
    if isinstance(value, bool) or not isinstance(value, int):
        raise _type_error("commit_characters", "a non-negative integer", value)
    if value < 0:
        raise _type_error("commit_characters", "a non-negative integer", value)
    return value


def _get_path(ctx: PreprocessorContext, name: str, default: Path) -> Path:
    value = ctx.get(config_key(name))
    if value is None:
        return default
    if not isinstance(value, str):
        raise _type_error(name, "a path string", value)
    return Path(value)


def _get_bool(ctx: PreprocessorContext, name: str, default: bool) -> bool:
    value = ctx.get(config_key(name))
    if value is None:
        return default
    if not isinstance(value, bool):
        raise _type_error(name, "a boolean", value)
    return value
