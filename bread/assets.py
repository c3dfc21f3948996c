"""Static asset copying for Bread.

The contents of the project's static directory are mirrored verbatim into
the output root: ``static/css/site.css`` becomes ``public/css/site.css``.
"""

from __future__ import annotations

import shutil
from pathlib import Path


class AssetPipeline:
    """Copies static assets into the output directory.

    Attributes:
        static_dir (Path): Directory containing source assets.
        output_dir (Path): Directory where assets are written.
    """

    def __init__(self, static_dir: Path, output_dir: Path):
        """Initialize the asset pipeline.

        Args:
            static_dir: Directory holding static files.
            output_dir: Directory where the site is built.
        """
        self.static_dir = static_dir
        self.output_dir = output_dir

    def run(self) -> list[Path]:
        """Mirror the static tree into the output directory.

        Existing files are overwritten; directories are created as needed.
        A missing static directory is reported and otherwise ignored.

        Returns:
            Destination paths of the copied files.
        """
        if not self.static_dir.is_dir():
            print(
                f"  No static directory found. Create '{self.static_dir.name}/' "
                "for CSS/images."
            )
            return []

        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self._copy_tree(self.static_dir, self.output_dir)

    def _copy_tree(self, source: Path, destination: Path) -> list[Path]:
        destination.mkdir(parents=True, exist_ok=True)
        copied: list[Path] = []
        for item in source.iterdir():
            dest = destination / item.name
            if item.is_dir():
                copied.extend(self._copy_tree(item, dest))
            else:
                shutil.copyfile(item, dest)
                print(f"  Copied: {item.name}")
                copied.append(dest)
        return copied
