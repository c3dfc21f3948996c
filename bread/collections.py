from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from .content import Document, PostMetadata, UrlDeriver
from .utils import normalize_tag


class PostCollection(Sequence[PostMetadata]):
    """Lightweight helper for working with the list of posts."""

    def __init__(self, posts: Iterable[PostMetadata]):
        self._posts = list(posts)

    def __iter__(self) -> Iterator[PostMetadata]:
        return iter(self._posts)

    def __len__(self) -> int:
        return len(self._posts)

    def __getitem__(self, item):
        return self._posts[item]

    def sorted(self) -> PostCollection:
        """Sort posts by date, newest first.

        Dates are compared as plain strings, so ISO-8601 dates sort
        chronologically and anything else sorts lexically. Posts with equal
        dates keep their discovery order.

        Returns:
            A new PostCollection with sorted posts.
        """
        return PostCollection(sorted(self._posts, key=lambda p: p.date, reverse=True))

    def tag_names(self) -> list[str]:
        """Return distinct normalized tags across all posts, sorted ascending."""
        return sorted({normalize_tag(tag) for post in self._posts for tag in post.tags})

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"PostCollection({len(self._posts)} posts)"


def collect_posts(
    files: Iterable[Path], content_dir: Path, url_deriver: UrlDeriver | None = None
) -> PostCollection:
    """Collect post metadata from source files (first build pass).

    Index documents (output filename containing ``index``) are skipped.
    Files that cannot be read are skipped as well; the render pass reports
    the failure.

    Args:
        files: Markdown files in discovery order.
        content_dir: Root of the content tree.
        url_deriver: Optional custom URL deriver.

    Returns:
        PostCollection sorted by date, newest first.
    """
    deriver = url_deriver or UrlDeriver(content_dir)
    posts: list[PostMetadata] = []
    for path in files:
        try:
            document = Document.load(path, content_dir)
        except (OSError, UnicodeDecodeError):
            continue
        target = deriver.derive(path, document.frontmatter)
        if target.is_index:
            continue
        posts.append(PostMetadata.from_document(document, target))
    return PostCollection(posts).sorted()
