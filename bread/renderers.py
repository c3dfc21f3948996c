"""Markdown rendering for Bread.

Markdown bodies are converted with mistune. Raw HTML inside a document is
passed through untouched, and the GFM-style extensions used by the site
(strikethrough, tables, footnotes and task lists) are enabled.
"""

from __future__ import annotations

import mistune

MARKDOWN_PLUGINS = ["strikethrough", "table", "footnotes", "task_lists"]


class MarkdownRenderer:
    """Renders Markdown content to HTML.

    Attributes:
        plugins: mistune plugin names enabled for every document.
    """

    def __init__(self, plugins: list[str] | None = None):
        self.plugins = list(MARKDOWN_PLUGINS if plugins is None else plugins)
        self._markdown = mistune.create_markdown(
            renderer=mistune.HTMLRenderer(escape=False),
            plugins=self.plugins,
        )

    def convert(self, text: str) -> str:
        """Render Markdown content to HTML.

        Args:
            text: Markdown source content.

        Returns:
            Rendered HTML.
        """
        return self._markdown(text)
