"""Template materialisation.

Copies a framework's template tree, unchanged, into the project directory.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from ..catalog import Framework, get_framework
from ..errors import MaterializeError


class TemplateMaterializer:
    """Copies framework templates from *templates_dir*."""

    def __init__(self, templates_dir: Path) -> None:
        self.templates_dir = Path(templates_dir)

    def source_for(self, framework: str | Framework) -> Path:
        """Template directory for *framework*.

        Raises:
            MaterializeError: Unknown framework or missing template directory.
        """
        try:
            spec = get_framework(framework)
        except KeyError:
            raise MaterializeError(f"Unknown framework '{framework}'.") from None

        source = self.templates_dir / spec.template
        if not source.is_dir():
            raise MaterializeError(
                f"Template for '{spec.framework.value}' not found at {source}."
            )
        return source

    async def materialize(self, framework: str | Framework, destination: Path) -> list[Path]:
        """Copy the template tree for *framework* into *destination*.

        *destination* must not exist yet.

        Returns:
            Every file copied, as paths inside *destination*.

        Raises:
            MaterializeError: The template is missing or the copy failed.
                A partial copy is left in place.
        """
        source = self.source_for(framework)
        try:
            await asyncio.to_thread(shutil.copytree, source, destination)
        except (OSError, shutil.Error) as exc:
            raise MaterializeError(
                f"Error copying '{source}' to '{destination}': {exc}"
            ) from exc
        return sorted(p for p in destination.rglob("*") if p.is_file())
