# ABOUTME: Shared pytest fixtures for Folio tests.
# ABOUTME: Provides sample EPUB files (with and without ISBNs, corrupt) and a small mixed-format library.

from pathlib import Path

import pytest

from tests.fixtures.epubs import write_epub

DUNE_ISBN13 = "9780441172719"


@pytest.fixture
def sample_epub(tmp_path: Path) -> Path:
    """An EPUB whose package metadata carries Dune's ISBN-13."""
    return write_epub(
        tmp_path / "Dune.epub", title="Dune", identifier=DUNE_ISBN13, author="Frank Herbert"
    )


@pytest.fixture
def uuid_epub(tmp_path: Path) -> Path:
    """An EPUB identified only by a UUID-style identifier."""
    return write_epub(
        tmp_path / "The Name of the Rose - Umberto Eco.epub",
        title="The Name of the Rose",
        identifier="urn:uuid:3f2504e0-4f89-11d3-9a0c-0305e82c3301",
        author="Umberto Eco",
    )


@pytest.fixture
def corrupt_epub(tmp_path: Path) -> Path:
    """Create a corrupt file that is not a valid EPUB."""
    filepath = tmp_path / "corrupt.epub"
    filepath.write_text("this is not a valid epub file")
    return filepath


@pytest.fixture
def library_tree(tmp_path: Path) -> Path:
    """A small library with one book in two formats plus unrelated files.

    Layout:
        Library/
            Frank Herbert/
                Dune.epub             (embedded ISBN-13)
                Dune.mobi
            The Hobbit - J.R.R. Tolkien.pdf
            Report_Final_Draft.txt
            cover.jpg                 (not an ebook)
    """
    root = tmp_path / "Library"
    herbert = root / "Frank Herbert"
    herbert.mkdir(parents=True)

    write_epub(herbert / "Dune.epub", title="Dune", identifier=DUNE_ISBN13, author="Frank Herbert")
    (herbert / "Dune.mobi").write_bytes(b"fake mobi content")
    (root / "The Hobbit - J.R.R. Tolkien.pdf").write_bytes(b"fake pdf content")
    (root / "Report_Final_Draft.txt").write_text("quarterly numbers")
    (root / "cover.jpg").write_bytes(b"fake jpg")

    return root
