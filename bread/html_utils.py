"""HTML fragment builders for Bread.

Templates receive pre-rendered HTML for tag chips, post rows and filter
options. Values are interpolated verbatim; titles and tags are not escaped.

Functions:
    render_tag_chips: Tag chips for a standalone page.
    render_post_item: One row of the aggregate posts page.
    render_posts: All rows of the aggregate posts page.
    render_tag_options: ``<option>`` elements for the tag filter.
    render_post_list: Post list embedded through the ``{{ post_list }}`` placeholder.
"""

from __future__ import annotations

from collections.abc import Iterable

from .content import PostMetadata
from .utils import join_base_path, normalize_tag

NO_POSTS_HTML = "<p>No posts found.</p>"

_POST_ITEM = """  <article class="post-item">
    <h3><a href="{href}">{title}</a></h3>
    <div class="post-meta">
      <span class="post-date">{date}</span>
      <span class="post-tags">{tags}</span>
    </div>
  </article>
"""


def render_tag_chips(tags: Iterable[str]) -> str:
    """Render tags as ``<span class="tag">#tag</span>`` chips, no separator."""
    return "".join(f'<span class="tag">#{normalize_tag(tag)}</span>' for tag in tags)


def render_clickable_tag_chips(tags: Iterable[str]) -> str:
    """Render tags as chips carrying a ``data-tag`` attribute for the filter script."""
    chips = []
    for tag in tags:
        name = normalize_tag(tag)
        chips.append(f'<span class="tag clickable-tag" data-tag="{name}">#{name}</span>')
    return "".join(chips)


def render_post_item(post: PostMetadata, base_path: str) -> str:
    """Render one post row for the aggregate posts page.

    Args:
        post: Post metadata.
        base_path: Deployment base path prefixed to the post URL.

    Returns:
        HTML for a ``post-item`` article.
    """
    return _POST_ITEM.format(
        href=join_base_path(base_path, post.url),
        title=post.title,
        date=post.date,
        tags=render_clickable_tag_chips(post.tags),
    )


def render_posts(posts: Iterable[PostMetadata], base_path: str) -> str:
    return "".join(render_post_item(post, base_path) for post in posts)


def render_tag_options(tag_names: Iterable[str]) -> str:
    """Render ``<option>`` elements for already normalized, sorted tag names."""
    return "".join(f'<option value="{tag}">#{tag}</option>' for tag in tag_names)


def render_post_list(posts: Iterable[PostMetadata]) -> str:
    """Render the post list substituted for ``{{ post_list }}`` in documents.

    Rows link to the plain post URL and use non-clickable chips.

    Args:
        posts: Posts in display order.

    Returns:
        A ``post-list`` block, or a "No posts found." paragraph.
    """
    posts = list(posts)
    if not posts:
        return NO_POSTS_HTML
    rows = "".join(
        _POST_ITEM.format(
            href=post.url,
            title=post.title,
            date=post.date,
            tags=render_tag_chips(post.tags),
        )
        for post in posts
    )
    return f'<div class="post-list">\n{rows}</div>\n'
