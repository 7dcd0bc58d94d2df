"""Package name and version from Cargo.toml.

Only two tables matter: ``[package]`` for a single crate and ``[workspace]``
for a workspace root. When both exist, ``[package]`` wins, field by field.
"""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from mdbook_build_annotations.errors import ManifestParseError, ManifestReadError

MANIFEST_FILENAME = "Cargo.toml"


@dataclass(frozen=True)
class ProjectMetadata:
    """Package identity used in the footer.

    Attributes:
        name: Package name, None if not declared
        version: Package version, None if not declared
    """

    name: str | None = None
    version: str | None = None


@dataclass(frozen=True)
class CargoManifest:
    """The subset of Cargo.toml used for annotations.

    Attributes:
        package: The ``[package]`` table, if present
        workspace: The ``[workspace]`` table, if present
    """

    package: dict[str, Any] | None = None
    workspace: dict[str, Any] | None = None

    def _lookup(self, key: str) -> str | None:
        for table in (self.package, self.workspace):
            if table is not None and isinstance(table.get(key), str):
                return table[key]
        return None

    @property
    def name(self) -> str | None:
        """Package name, falling back to the workspace name."""
        return self._lookup("name")

    @property
    def version(self) -> str | None:
        """Package version, falling back to the workspace version."""
        return self._lookup("version")

    def metadata(self) -> ProjectMetadata:
        """Return the resolved name and version."""
        return ProjectMetadata(name=self.name, version=self.version)

    @classmethod
    def from_str(cls, content: str) -> "CargoManifest":
        """Parse manifest text.

        Args:
            content: Cargo.toml contents

        Returns:
            CargoManifest with whichever tables are present

        Raises:
            ManifestParseError: If the content is not valid TOML
        """
        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise ManifestParseError(f"Failed to parse {MANIFEST_FILENAME}: {e}") from e

        package = data.get("package")
        workspace = data.get("workspace")
        return cls(
            package=package if isinstance(package, dict) else None,
            workspace=workspace if isinstance(workspace, dict) else None,
        )


def load_manifest(workspace_dir: Path) -> CargoManifest:
    """Read ``Cargo.toml`` from a workspace directory.

    Args:
        workspace_dir: Directory containing Cargo.toml

    Returns:
        Parsed manifest

    Raises:
        ManifestReadError: If the file cannot be read
        ManifestParseError: If the file is not valid TOML
    """
    manifest_path = workspace_dir / MANIFEST_FILENAME
    try:
        content = manifest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestReadError(f"Failed to read {manifest_path}: {e}") from e

    return CargoManifest.from_str(content)
