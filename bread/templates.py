"""Template rendering engine for Bread.

This module uses Jinja2 to render the ``base`` page template and the
``posts`` aggregate template from a template directory. Autoescaping is
disabled: the build pipeline hands the templates pre-rendered HTML.

Key classes:
- TemplateEngine: Loads ``{name}.html`` templates and renders them.
- PageContext: Variables available to ``base.html``.
- PostsContext: Variables available to ``posts.html``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

TEMPLATE_SUFFIX = ".html"


@dataclass
class PageContext:
    """Context for a standalone page.

    Attributes:
        title: Page title.
        content: Rendered body HTML.
        tags: Pre-rendered tag chips.
        keywords: Raw tags joined with ``", "``.
        date: Page date.
    """

    title: str
    content: str
    tags: str
    keywords: str
    date: str

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class PostsContext:
    """Context for the aggregate posts page.

    Attributes:
        post_count: Number of posts listed.
        posts: Pre-rendered post rows.
        tag_options: Pre-rendered ``<option>`` elements for the tag filter.
    """

    post_count: int
    posts: str
    tag_options: str

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


class TemplateEngine:
    """Template rendering engine using Jinja2.

    Templates are looked up by name as ``{name}.html`` in the template
    directory. Undefined variables raise instead of rendering as empty text.

    Attributes:
        template_dir: Directory containing templates.
        env: Jinja2 environment.
    """

    def __init__(self, template_dir: Path):
        """Initialize the template engine.

        Args:
            template_dir: Directory with templates.
        """
        self.template_dir = template_dir
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    @staticmethod
    def filename(name: str) -> str:
        """Return the template filename for a template name."""
        return f"{name}{TEMPLATE_SUFFIX}"

    def path(self, name: str) -> Path:
        """Return the path of a named template."""
        return self.template_dir / self.filename(name)

    def load(self, name: str) -> None:
        """Load and compile a template.

        Args:
            name: Template name without extension.

        Raises:
            jinja2.TemplateNotFound: If the template file is missing.
            jinja2.TemplateSyntaxError: If the template cannot be compiled.
        """
        self._get(name)

    def _get(self, name: str) -> Template:
        return self.env.get_template(self.filename(name))

    def render(self, name: str, context: Mapping[str, Any]) -> str:
        """Render a named template.

        Args:
            name: Template name without extension.
            context: Variables to make available in the template.

        Returns:
            Rendered text.
        """
        return self._get(name).render(**context)
