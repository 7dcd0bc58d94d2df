"""mdbook-build-annotations - build provenance footers for mdBook.

An mdBook preprocessor that appends the package name, git revision and
package version of the documented project to every chapter of a book:

    <footer>my-crate @1a2b3c4d5e v0.3.1</footer>

Facts come from the workspace ``Cargo.toml`` and the git repository the book
lives in. Missing facts are reported and left out; a build never fails
because a fact is unavailable.
"""

__version__ = "0.1.0"
__author__ = "mdbook-build-annotations Contributors"
