"""Content loading for Bread.

This module handles discovery of Markdown sources and the mapping from a
source document to its output location.

Key classes:
- Document: Dataclass representing one parsed source file.
- OutputTarget: Where a document is written and the URL it is served at.
- PostMetadata: Dataclass describing a post in the aggregate listing.
- FileContentLoader: Depth-first discovery of Markdown files.
- UrlDeriver: Derives output filenames, paths and URLs for documents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .frontmatter import Frontmatter, parse_frontmatter
from .utils import is_markdown, output_filename

DEFAULT_TITLE = "Untitled"
INDEX_MARKER = "index"


@dataclass
class Document:
    """Represents one Markdown source file.

    Attributes:
        path: Path to the source file.
        rel_path: Path relative to the content root.
        stem: File stem of the source file.
        frontmatter: Parsed front-matter.
        body: Markdown body following the front-matter.
    """

    path: Path
    rel_path: Path
    stem: str
    frontmatter: Frontmatter
    body: str

    @classmethod
    def load(cls, path: Path, content_root: Path) -> Document:
        """Read and parse a source file.

        Args:
            path: Path to the Markdown file.
            content_root: Root of the content tree.

        Returns:
            Parsed Document.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
        """
        text = path.read_text(encoding="utf-8")
        frontmatter, body = parse_frontmatter(text)
        try:
            rel_path = path.relative_to(content_root)
        except ValueError:
            rel_path = Path(path.name)
        return cls(
            path=path,
            rel_path=rel_path,
            stem=path.stem,
            frontmatter=frontmatter,
            body=body,
        )

    @property
    def title(self) -> str:
        if self.frontmatter.title is None:
            return DEFAULT_TITLE
        return self.frontmatter.title

    @property
    def date(self) -> str:
        return self.frontmatter.date or ""

    @property
    def tags(self) -> list[str]:
        return list(self.frontmatter.tags or [])


@dataclass
class OutputTarget:
    """Output location of a document.

    Attributes:
        filename: Output HTML filename (``slug.html`` or ``stem.html``).
        subdir: Directory relative to the output root, ``/`` separated,
            empty for documents at the content root.
        url: Public URL, always starting with ``/``.
    """

    filename: str
    subdir: str
    url: str

    @property
    def is_index(self) -> bool:
        """Whether the document is an index page excluded from post listings."""
        return INDEX_MARKER in self.filename

    def output_path(self, output_root: Path) -> Path:
        """Return the file path under an output root."""
        if self.subdir:
            return output_root / self.subdir / self.filename
        return output_root / self.filename


@dataclass
class PostMetadata:
    """Represents a post in the aggregate listing.

    Attributes:
        title: Post title, ``Untitled`` when missing.
        date: Post date, compared as a plain string.
        tags: Raw tags from front-matter.
        url: Public URL of the rendered page.
    """

    title: str
    url: str
    date: str = ""
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_document(cls, document: Document, target: OutputTarget) -> PostMetadata:
        return cls(
            title=document.title,
            date=document.date,
            tags=document.tags,
            url=target.url,
        )


class FileContentLoader:
    """Discovers Markdown files in a content directory.

    Traversal is depth-first and follows the filesystem's native listing
    order. Anything that is neither a directory nor a regular ``.md`` file
    is ignored.

    Attributes:
        content_dir: Root of the content tree.
    """

    def __init__(self, content_dir: Path):
        self.content_dir = content_dir

    def iter_files(self) -> list[Path]:
        """List all Markdown files under the content directory.

        Returns:
            List of paths in discovery order; empty if the directory is
            missing.

        Raises:
            OSError: If a directory cannot be listed.
        """
        if not self.content_dir.is_dir():
            return []
        return list(self._walk(self.content_dir))

    def _walk(self, directory: Path):
        for path in directory.iterdir():
            if path.is_dir():
                yield from self._walk(path)
            elif path.is_file() and is_markdown(path):
                yield path


class UrlDeriver:
    """Derives output locations for documents.

    Attributes:
        content_dir: Root of the content tree.
    """

    def __init__(self, content_dir: Path):
        self.content_dir = content_dir

    def derive(self, path: Path, frontmatter: Frontmatter) -> OutputTarget:
        """Derive the output filename, subdirectory and URL of a document.

        Args:
            path: Path to the source file.
            frontmatter: Parsed front-matter; its slug overrides the stem.

        Returns:
            OutputTarget for the document.
        """
        filename = output_filename(path, frontmatter.slug)
        subdir = self._relative_subdir(path)
        url = f"/{subdir}/{filename}" if subdir else f"/{filename}"
        return OutputTarget(filename=filename, subdir=subdir, url=url)

    def _relative_subdir(self, path: Path) -> str:
        try:
            rel = path.parent.relative_to(self.content_dir)
        except ValueError:
            return ""
        if rel == Path("."):
            return ""
        return rel.as_posix()
