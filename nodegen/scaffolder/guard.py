"""Destination guard.

Decides whether the project directory may be created.  An existing
directory is only removed after explicit confirmation, and removal is
all-or-nothing from the caller's point of view: the directory is first
renamed out of the way in a single step, then deleted.
"""

from __future__ import annotations

import asyncio
import os
import shutil
import uuid
from pathlib import Path

from ..errors import DestinationError, GenerationAborted
from ..prompts import Prompt
from ..utils import console


class DestinationGuard:
    """Clears the way for a new project directory."""

    def __init__(self, prompt: Prompt, *, assume_yes: bool = False) -> None:
        self.prompt = prompt
        self.assume_yes = assume_yes

    async def prepare(self, target: Path) -> bool:
        """Make sure *target* does not exist.

        Returns:
            ``True`` if an existing directory was removed, ``False`` if the
            path was free to begin with.

        Raises:
            GenerationAborted: The user declined the overwrite.  Nothing on
                disk has been touched.
            DestinationError: The existing directory could not be removed.
        """
        if not os.path.lexists(target):
            return False

        if not self.assume_yes:
            question = (
                f"There is a folder with the name {target.name} in this location. "
                "Okay to delete and continue?"
            )
            if not self.prompt.confirm(question):
                raise GenerationAborted(f"Aborting: '{target}' already exists.")

        console.print("  Removing folder...this might take a moment.")
        await asyncio.to_thread(_remove, target)
        return True


def _remove(target: Path) -> None:
    """Rename *target* to a hidden sibling, then delete the sibling."""
    trash = target.with_name(f".{target.name}.deleting-{uuid.uuid4().hex[:8]}")
    try:
        os.replace(target, trash)
    except OSError as exc:
        raise DestinationError(f"Could not remove '{target}': {exc}") from exc

    try:
        if trash.is_dir() and not trash.is_symlink():
            shutil.rmtree(trash)
        else:
            trash.unlink()
    except OSError as exc:
        raise DestinationError(
            f"'{target}' was moved to '{trash}' but could not be deleted: {exc}"
        ) from exc
