"""Protocol definitions for Bread.

The build pipeline treats Markdown conversion, template rendering and file
discovery as collaborators. These protocols describe the interfaces the
pipeline depends on, so alternative implementations (or test doubles) can be
passed to ``build_site``.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MarkdownConverter(Protocol):
    """Protocol for converting Markdown text to HTML."""

    @abstractmethod
    def convert(self, text: str) -> str:
        """Convert Markdown source to an HTML fragment.

        Args:
            text: Markdown source.

        Returns:
            Rendered HTML.
        """
        ...


@runtime_checkable
class TemplateRenderer(Protocol):
    """Protocol for rendering named templates.

    Implementations must substitute values verbatim: the pipeline passes
    pre-rendered HTML fragments that would be corrupted by escaping.
    """

    @abstractmethod
    def load(self, name: str) -> None:
        """Load a template eagerly so missing or broken templates fail early.

        Args:
            name: Template name without extension (e.g. ``base``).
        """
        ...

    @abstractmethod
    def render(self, name: str, context: Mapping[str, Any]) -> str:
        """Render a named template.

        Args:
            name: Template name without extension.
            context: Variables to make available in the template.

        Returns:
            Rendered text.
        """
        ...


@runtime_checkable
class ContentLoader(Protocol):
    """Protocol for discovering content files."""

    @abstractmethod
    def iter_files(self) -> list[Path]:
        """List all Markdown source files in discovery order.

        Returns:
            List of paths to content files.
        """
        ...
