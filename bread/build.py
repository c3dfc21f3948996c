"""Site building functionality for Bread.

This module contains the core logic for building a static site from source files.
It loads configuration, collects post metadata, renders every document and the
aggregate posts page, and copies static assets.

Key functions:
- build_site: Main function to build the entire site.
- load_config: Loads project configuration from bread.yaml.
- render_page: Renders one Markdown document through the base template.
- write_posts_page: Renders the aggregate posts page.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jinja2 import TemplateNotFound, TemplateSyntaxError

from .assets import AssetPipeline
from .collections import PostCollection, collect_posts
from .content import Document, FileContentLoader, UrlDeriver
from .html_utils import (
    render_post_list,
    render_posts,
    render_tag_chips,
    render_tag_options,
)
from .protocols import ContentLoader, MarkdownConverter, TemplateRenderer
from .renderers import MarkdownRenderer
from .templates import PageContext, PostsContext, TemplateEngine


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


CONFIG_FILENAME = "bread.yaml"

DEFAULT_CONFIG = {
    "content_dir": "content",
    "output_dir": "public",
    "template_dir": "templates",
    "static_dir": "static",
    "base_path": "/bread",
}

BASE_TEMPLATE = "base"
POSTS_TEMPLATE = "posts"
POSTS_FILENAME = "posts.html"
POST_LIST_PLACEHOLDER = "{{ post_list }}"


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        pages: Output paths of all rendered pages, in discovery order.
        posts: Posts listed on the aggregate page, newest first.
        output_dir: Directory where the site was built.
        posts_page: Path of the aggregate page, or None if it was not written.
    """

    pages: list[Path]
    posts: PostCollection
    output_dir: Path
    posts_page: Path | None = None


def load_config(project_root: Path) -> dict[str, Any]:
    """Load project configuration from bread.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.

    Raises:
        BuildError: If bread.yaml is not valid YAML.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise BuildError(config_path, f"Invalid configuration: {exc}", exc) from exc
        if isinstance(loaded, dict):
            config.update(loaded)
    return config


def build_site(
    project_root: Path,
    content_dir: Path | str | None = None,
    output_dir: Path | str | None = None,
    template_dir: Path | str | None = None,
    base_path: str | None = None,
    markdown: MarkdownConverter | None = None,
    engine: TemplateRenderer | None = None,
    content_loader: ContentLoader | None = None,
) -> BuildResult:
    """Build the entire static site.

    Args:
        project_root: Directory the configured paths are relative to.
        content_dir: Markdown source directory (overrides bread.yaml).
        output_dir: Output directory (overrides bread.yaml).
        template_dir: Template directory (overrides bread.yaml).
        base_path: Prefix for links on the posts page (overrides bread.yaml).
        markdown: Optional custom Markdown converter.
        engine: Optional custom template renderer.
        content_loader: Optional custom content loader.

    Returns:
        BuildResult with the rendered pages and listed posts.

    Raises:
        BuildError: On any fatal error; pages already written are kept.
    """
    config = load_config(project_root)
    content_path = project_root / (content_dir or config["content_dir"])
    output_path = project_root / (output_dir or config["output_dir"])
    template_path = project_root / (template_dir or config["template_dir"])
    static_path = project_root / config["static_dir"]
    resolved_base = str(config["base_path"] if base_path is None else base_path)

    print("Building site...\n")
    if not output_path.exists():
        _mkdir(output_path)
        print(f"  Created output directory: {output_path}")

    engine = engine or TemplateEngine(template_path)
    _load_template(engine, BASE_TEMPLATE, template_path)

    markdown = markdown or MarkdownRenderer()
    loader = content_loader or FileContentLoader(content_path)
    try:
        files = loader.iter_files()
    except OSError as exc:
        raise BuildError(content_path, f"Failed to list content: {exc}", exc) from exc

    if files:
        print(f"  Found {len(files)} markdown file(s)\n")
    else:
        print(f"  No markdown files found in {content_path}")

    url_deriver = UrlDeriver(content_path)
    posts = collect_posts(files, content_path, url_deriver)
    post_list_html = render_post_list(posts)

    pages = [
        render_page(
            path,
            content_path,
            output_path,
            engine,
            markdown,
            url_deriver=url_deriver,
            post_list_html=post_list_html,
        )
        for path in files
    ]

    posts_page = None
    if posts:
        posts_page = write_posts_page(
            posts, output_path, engine, resolved_base, template_path
        )

    print("\nCopying static assets...\n")
    try:
        AssetPipeline(static_path, output_path).run()
    except OSError as exc:
        raise BuildError(static_path, f"Failed to copy assets: {exc}", exc) from exc

    print(f"\nSite built successfully to {output_path}/")
    return BuildResult(
        pages=pages, posts=posts, output_dir=output_path, posts_page=posts_page
    )


def render_page(
    path: Path,
    content_dir: Path,
    output_dir: Path,
    engine: TemplateRenderer,
    markdown: MarkdownConverter,
    url_deriver: UrlDeriver | None = None,
    post_list_html: str = "",
) -> Path:
    """Render one Markdown document and write it to the output directory.

    Args:
        path: Path to the Markdown file.
        content_dir: Root of the content tree.
        output_dir: Root of the output tree.
        engine: Template renderer providing the base template.
        markdown: Markdown converter.
        url_deriver: Optional custom URL deriver.
        post_list_html: HTML substituted for ``{{ post_list }}`` in the body.

    Returns:
        Path of the written HTML file.

    Raises:
        BuildError: If the file cannot be read, rendered or written.
    """
    try:
        document = Document.load(path, content_dir)
    except (OSError, UnicodeDecodeError) as exc:
        raise BuildError(path, f"Failed to read: {exc}", exc) from exc

    target = (url_deriver or UrlDeriver(content_dir)).derive(path, document.frontmatter)
    body = document.body.replace(POST_LIST_PLACEHOLDER, post_list_html)
    tags = document.tags
    context = PageContext(
        title=document.title,
        content=markdown.convert(body),
        tags=render_tag_chips(tags),
        keywords=", ".join(tags),
        date=document.date,
    )
    rendered = _render(engine, BASE_TEMPLATE, context.as_dict(), path)

    destination = target.output_path(output_dir)
    _write(destination, rendered, path)
    print(f"  ✓ {path} -> {destination}")
    return destination


def write_posts_page(
    posts: PostCollection,
    output_dir: Path,
    engine: TemplateRenderer,
    base_path: str,
    template_dir: Path,
) -> Path:
    """Render the aggregate posts page to ``posts.html``.

    Args:
        posts: Posts in display order.
        output_dir: Root of the output tree.
        engine: Template renderer providing the posts template.
        base_path: Deployment base path prefixed to post links.
        template_dir: Template directory, for error reporting.

    Returns:
        Path of the written page.

    Raises:
        BuildError: If the template is missing or fails, or the write fails.
    """
    template_path = template_dir / TemplateEngine.filename(POSTS_TEMPLATE)
    _load_template(engine, POSTS_TEMPLATE, template_dir)
    context = PostsContext(
        post_count=len(posts),
        posts=render_posts(posts, base_path),
        tag_options=render_tag_options(posts.tag_names()),
    )
    rendered = _render(engine, POSTS_TEMPLATE, context.as_dict(), template_path)

    destination = output_dir / POSTS_FILENAME
    _write(destination, rendered, template_path)
    print(f"  ✓ {POSTS_FILENAME} -> {destination}")
    return destination


def _load_template(engine: TemplateRenderer, name: str, template_dir: Path) -> None:
    template_path = template_dir / TemplateEngine.filename(name)
    try:
        engine.load(name)
    except TemplateNotFound as exc:
        raise BuildError(
            template_path,
            f"Template not found: {TemplateEngine.filename(name)}",
            exc,
        ) from exc
    except TemplateSyntaxError as exc:
        raise BuildError(
            template_path,
            f"Template syntax error on line {exc.lineno}: {exc.message}",
            exc,
        ) from exc
    except OSError as exc:
        raise BuildError(
            template_path, f"Failed to read template: {exc}", exc
        ) from exc


def _render(
    engine: TemplateRenderer, name: str, context: Mapping[str, Any], source_path: Path
) -> str:
    try:
        return engine.render(name, context)
    except TemplateSyntaxError as exc:
        raise BuildError(
            source_path,
            f"Template syntax error on line {exc.lineno}: {exc.message}",
            exc,
        ) from exc
    except Exception as exc:
        raise BuildError(source_path, _format_error_message(exc), exc) from exc


def _write(destination: Path, rendered: str, source_path: Path) -> None:
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with open(destination, "w", encoding="utf-8") as f:
            f.write(rendered)
    except OSError as exc:
        raise BuildError(
            source_path, f"Failed to write {destination}: {exc}", exc
        ) from exc


def _mkdir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise BuildError(path, f"Failed to create directory: {exc}", exc) from exc


def _format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    error_type = type(exc).__name__
    error_msg = str(exc)

    if error_type == "UndefinedError":
        return f"Undefined variable: {error_msg}"
    if error_type == "TypeError":
        return f"Type error: {error_msg}"
    if error_type == "AttributeError":
        return f"Attribute error: {error_msg}"

    return f"{error_type}: {error_msg}"
