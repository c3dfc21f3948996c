"""Utility functions for Bread.

This module contains small helpers used throughout the Bread codebase.

Key functions:
    normalize_tag: Normalize a tag for chips and filter options.
    is_markdown: Check if a path is a Markdown source file.
    output_filename: Derive the HTML filename for a document.
    join_base_path: Prefix a site URL with a deployment base path.
"""

from __future__ import annotations

from pathlib import Path

FALLBACK_FILENAME = "output.html"


def normalize_tag(tag: str) -> str:
    """Normalize a tag for display and filtering.

    Strips surrounding whitespace and removes interior spaces. No other
    normalization (case folding, Unicode) is applied.

    Args:
        tag: Raw tag text.

    Returns:
        Normalized tag.

    Examples:
        >>> normalize_tag("  hello world  ")
        'helloworld'
    """
    return tag.strip().replace(" ", "")


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Only the exact lowercase ``.md`` extension counts.

    Args:
        path: Path to check.

    Returns:
        True if the file has a ``.md`` extension.
    """
    return path.suffix == ".md"


def output_filename(path: Path, slug: str | None = None) -> str:
    """Derive the output HTML filename for a source document.

    Args:
        path: Path to the source file.
        slug: Optional slug from front-matter, overriding the file stem.

    Returns:
        ``{slug}.html``, ``{stem}.html``, or ``output.html`` when neither
        is available.
    """
    if slug is not None:
        return f"{slug}.html"
    if path.stem:
        return f"{path.stem}.html"
    return FALLBACK_FILENAME


def join_base_path(base_path: str, url: str) -> str:
    """Join a deployment base path with a site URL.

    Args:
        base_path: Base path such as ``/bread``; may be empty.
        url: Site URL starting with ``/``.

    Returns:
        The combined URL.

    Examples:
        >>> join_base_path("/bread", "/posts/a.html")
        '/bread/posts/a.html'
    """
    return f"{base_path.rstrip('/')}{url}"
