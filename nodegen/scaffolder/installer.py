"""Package installation.

Thin boundary around the package manager executable.  Output is streamed
straight to the user's terminal.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from ..errors import InstallError
from ..utils import console, print_plain, run_command


class InstallRunner:
    """Runs ``<package_manager> install <names...>``."""

    def __init__(self, package_manager: str = "npm", timeout: int = 900) -> None:
        self.package_manager = package_manager
        self.timeout = timeout

    def command(self, names: Sequence[str]) -> list[str]:
        return [self.package_manager, "install", *names]

    async def install(self, names: Sequence[str], working_directory: Path) -> int:
        """Install *names* inside *working_directory*.

        Returns:
            The package manager's exit status (always ``0``).

        Raises:
            InstallError: The executable is missing, timed out or exited
                with a non-zero status.
        """
        cmd = self.command(names)
        console.print("  Installing packages. This might take a couple of minutes.")
        print_plain(f"  Installing: {' '.join(names)}")

        try:
            returncode, _, stderr = await run_command(
                cmd, cwd=working_directory, timeout=self.timeout, capture=False
            )
        except FileNotFoundError as exc:
            raise InstallError(
                f"Package manager '{self.package_manager}' was not found: {exc}"
            ) from exc

        if returncode != 0:
            reason = stderr or f"exit status {returncode}"
            raise InstallError(
                f"'{' '.join(cmd)}' failed: {reason}", returncode=returncode
            )
        return returncode
