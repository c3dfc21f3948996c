"""Bread static site generator.

This package provides a minimal static site generator that turns a tree of
Markdown documents into HTML pages rendered through Jinja2 templates, plus an
aggregate posts page listing every non-index document by date.

The main entry point is the CLI module, which exposes the ``build`` command.

Build pipeline:
- Discover Markdown files under the content directory.
- Pass 1: collect post metadata and sort it by date.
- Pass 2: render every document through the ``base`` template.
- Render the aggregate ``posts`` page and copy the static tree.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
