"""Front-matter parsing for Bread.

Documents may open with a metadata block delimited by ``---`` lines:

    ---
    title: Hello
    date: 2024-01-15
    slug: hello
    tags: python, web
    ---

Only ``title``, ``date``, ``slug`` and ``tags`` are recognized. ``tags`` may
also be written as a block list:

    tags:
    - python
    - web dev

The parser is line oriented rather than a YAML loader. It never raises:
malformed input degrades to whatever metadata could be recovered, and input
without a complete block is returned untouched as the body.
"""

from __future__ import annotations

from dataclasses import dataclass

OPEN_MARKER = "---"
CLOSE_MARKER = "\n---"


@dataclass
class Frontmatter:
    """Parsed front-matter.

    Attributes:
        title: Page title.
        date: Publication date, kept as opaque text.
        slug: Filename stem override for the output page.
        tags: Ordered list of non-empty tags.
    """

    title: str | None = None
    date: str | None = None
    slug: str | None = None
    tags: list[str] | None = None


def split_inline_tags(value: str) -> list[str]:
    """Split an inline ``a, b, c`` tag value into trimmed, non-empty tags."""
    return [tag.strip() for tag in value.split(",") if tag.strip()]


def parse_frontmatter(text: str) -> tuple[Frontmatter, str]:
    """Split a document into front-matter and Markdown body.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (Frontmatter, body). Without a complete ``---`` block the
        default Frontmatter and the unchanged text are returned.
    """
    if not text.startswith(OPEN_MARKER):
        return Frontmatter(), text

    rest = text[len(OPEN_MARKER) :]
    end = rest.find(CLOSE_MARKER)
    if end == -1:
        return Frontmatter(), text

    section = rest[:end]
    body = rest[end + len(CLOSE_MARKER) :].lstrip()
    return _parse_section(section), body


def _parse_section(section: str) -> Frontmatter:
    frontmatter = Frontmatter()
    current_key: str | None = None
    pending_tags: list[str] | None = None

    for raw_line in section.split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        if line.startswith("-"):
            if current_key == "tags" and pending_tags is not None:
                item = line[1:].strip()
                if item:
                    pending_tags.append(item)
            continue

        # Any other non-empty line closes a block list.
        if pending_tags is not None:
            frontmatter.tags = pending_tags
            pending_tags = None
        current_key = None

        if ":" not in line:
            continue

        key, _, value = line.partition(":")
        key = key.strip()
        value = value.strip()

        if key == "title":
            frontmatter.title = value
        elif key == "date":
            frontmatter.date = value
        elif key == "slug":
            frontmatter.slug = value
        elif key == "tags":
            if value:
                frontmatter.tags = split_inline_tags(value)
            else:
                current_key = key
                pending_tags = []

    if pending_tags is not None:
        frontmatter.tags = pending_tags

    return frontmatter
