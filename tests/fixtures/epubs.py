# ABOUTME: Helper for writing small, structurally valid EPUB files in tests.
# ABOUTME: Lets fixtures and tests control the embedded title, identifier, and author.

from pathlib import Path

from ebooklib import epub


def write_epub(path: Path, *, title: str, identifier: str, author: str | None = None) -> Path:
    """Write a minimal, structurally valid EPUB with the given metadata."""
    book = epub.EpubBook()
    book.set_identifier(identifier)
    book.set_title(title)
    book.set_language("en")
    if author:
        book.add_author(author)

    # Add a minimal chapter so the EPUB is structurally valid
    chapter = epub.EpubHtml(title="Chapter 1", file_name="chap01.xhtml", lang="en")
    chapter.content = b"<html><body><h1>Chapter 1</h1><p>Content.</p></body></html>"
    book.add_item(chapter)

    book.toc = [epub.Link("chap01.xhtml", "Chapter 1", "chap01")]
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", chapter]

    epub.write_epub(str(path), book)
    return path
