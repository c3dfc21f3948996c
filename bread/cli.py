"""Command-line interface for Bread.

This module defines the CLI commands using Click framework.

Commands:
- build: Build the site into the output directory.
"""

from __future__ import annotations

from pathlib import Path

import click

from . import __version__


@click.group()
@click.version_option(version=__version__, prog_name="bread")
def cli():
    """Bread: a minimal static site generator."""


@cli.command()
@click.option(
    "--content-dir",
    "-c",
    default=None,
    help="Directory containing Markdown sources [default: content]",
)
@click.option(
    "--output-dir",
    "-o",
    default=None,
    help="Directory to write the site into [default: public]",
)
@click.option(
    "--template-dir",
    "-t",
    default=None,
    help="Directory containing base.html and posts.html [default: templates]",
)
def build(content_dir: str | None, output_dir: str | None, template_dir: str | None):
    """Build the site into the output directory."""
    project_root = Path.cwd()
    from .build import BuildError, build_site

    try:
        result = build_site(
            project_root,
            content_dir=content_dir,
            output_dir=output_dir,
            template_dir=template_dir,
        )
    except BuildError as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(
            click.style(f"  File: {_display_path(exc.source_path, project_root)}", fg="yellow"),
            err=True,
        )
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None
    click.echo(f"Built {len(result.pages)} pages into {result.output_dir}")


def _display_path(path: Path, project_root: Path) -> Path:
    """Return path relative to the project root when it lies inside it."""
    try:
        return path.relative_to(project_root)
    except ValueError:
        return path


def main():
    """Entry point for the CLI application."""
    cli()
