"""Integration tests for the mdbook-build-annotations CLI.

These tests drive the Typer app the way mdBook does: a JSON document on
stdin, the book expected back on stdout.
"""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from mdbook_build_annotations import __version__
from mdbook_build_annotations.cli import app
from tests.fixtures import chapter, make_book

runner = CliRunner()


class TestSupports:
    """Tests for `mdbook-build-annotations supports`."""

    @pytest.mark.parametrize("renderer", ["html", "markdown"])
    def test_supported(self, renderer: str) -> None:
        """Test supported renderers exit 0."""
        result = runner.invoke(app, ["supports", renderer])

        assert result.exit_code == 0

    def test_unsupported(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test an unsupported renderer exits 1."""
        monkeypatch.setattr(
            "mdbook_build_annotations.cli.BuildAnnotations.supports_renderer",
            lambda self, renderer: renderer != "pdf",
        )

        result = runner.invoke(app, ["supports", "pdf"])

        assert result.exit_code == 1

    def test_missing_renderer(self) -> None:
        """Test the renderer argument is required."""
        result = runner.invoke(app, ["supports"])

        assert result.exit_code != 0


class TestVersion:
    """Tests for --version."""

    def test_version(self) -> None:
        """Test the version is printed."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestPreprocess:
    """Tests for the default preprocessing mode."""

    def test_annotates_book(
        self,
        crate_dir: Path,
        git_repo: Path,
        head_commit: str,
        context_factory,
    ) -> None:
        """Test every chapter, nested ones included, gets the footer."""
        ctx = context_factory(
            workspace_dir=str(crate_dir),
            git_dir=str(git_repo),
            commit_characters=7,
        )
        book = make_book(
            [
                chapter("Intro", "# Intro\n", sub_items=[chapter("Details", "# Details\n")]),
                "Separator",
                {"PartTitle": "Reference"},
                chapter("Usage", "# Usage\n"),
            ]
        )

        result = runner.invoke(app, [], input=json.dumps([ctx, book]))

        assert result.exit_code == 0, result.output
        output = json.loads(result.stdout)
        footer = f"<footer>foo @{head_commit[:7]} v1.0.0</footer>"
        intro = output["items"][0]["Chapter"]
        assert intro["content"] == "# Intro\n" + footer
        assert intro["sub_items"][0]["Chapter"]["content"] == "# Details\n" + footer
        assert output["items"][1] == "Separator"
        assert output["items"][2] == {"PartTitle": "Reference"}
        assert output["items"][3]["Chapter"]["content"] == "# Usage\n" + footer

    def test_missing_manifest_fails(self, tmp_path: Path, context_factory) -> None:
        """Test an unreadable Cargo.toml exits 1."""
        ctx = context_factory(workspace_dir=str(tmp_path / "missing"))

        result = runner.invoke(app, [], input=json.dumps([ctx, make_book()]))

        assert result.exit_code == 1
        assert "failed to handle preprocessing" in result.output

    def test_bad_config_fails(self, crate_dir: Path, context_factory) -> None:
        """Test a wrongly typed setting exits 1."""
        ctx = context_factory(workspace_dir=str(crate_dir), package_name="yes")

        result = runner.invoke(app, [], input=json.dumps([ctx, make_book()]))

        assert result.exit_code == 1

    def test_invalid_input_fails(self) -> None:
        """Test input that is not a [context, book] pair exits 1."""
        result = runner.invoke(app, [], input="{}")

        assert result.exit_code == 1


class TestModuleEntryPoint:
    """Tests running `python -m mdbook_build_annotations` as mdBook would."""

    @pytest.fixture
    def module_env(self) -> dict[str, str]:
        """Return an environment that imports the package from this checkout."""
        src = Path(__file__).resolve().parents[2] / "src"
        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(
            p for p in (str(src), env.get("PYTHONPATH", "")) if p
        )
        return env

    def test_utf8_book_with_other_stdio_encoding(
        self,
        crate_dir: Path,
        context_factory,
        module_env: dict[str, str],
    ) -> None:
        """Test non-ASCII chapters survive when stdio is not UTF-8."""
        ctx = context_factory(workspace_dir=str(crate_dir), git_commit=False)
        book = make_book([chapter("Café", "café ✓"), "Separator"])
        module_env["PYTHONIOENCODING"] = "latin-1"

        result = subprocess.run(
            [sys.executable, "-m", "mdbook_build_annotations"],
            input=json.dumps([ctx, book], ensure_ascii=False).encode("utf-8"),
            capture_output=True,
            env=module_env,
            cwd=crate_dir,
            timeout=60,
        )

        assert result.returncode == 0, result.stderr.decode("utf-8", "replace")
        output = json.loads(result.stdout.decode("utf-8"))
        item = output["items"][0]["Chapter"]
        assert item["name"] == "Café"
        assert item["content"] == "café ✓<footer>foo v1.0.0</footer>"
        assert output["items"][1] == "Separator"
