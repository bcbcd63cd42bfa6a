"""Shared utility functions for nodegen.

Provides async command execution, JSON output, name helpers and Rich-based
console reporting used by every stage of the generator.
"""

from __future__ import annotations

import asyncio
import json
import os
import re
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int = 120,
    capture: bool = True,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run a program (never through a shell) and wait for it to exit.

    With ``capture=False`` the child writes straight to this terminal, which
    is how the install step shows the package manager's progress; the two
    output strings are then empty.  Entries in *env* are layered over the
    current environment.

    Returns ``(returncode, stdout, stderr)``.  Once *timeout* seconds pass
    the child is killed and ``-1`` comes back with the reason as stderr.

    Raises:
        FileNotFoundError: The program is not on ``PATH``.
    """
    pipe = asyncio.subprocess.PIPE if capture else None
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=pipe,
        stderr=pipe,
        cwd=None if cwd is None else str(cwd),
        env={**os.environ, **env} if env else None,
    )

    try:
        out, err = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return -1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}"

    return process.returncode or 0, _decode(out), _decode(err)


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace").strip()


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def sanitize_name(name: str) -> str:
    """Convert an arbitrary string to a safe directory/package name.

    * Lowercases the input.
    * Replaces spaces and characters other than alphanumerics, ``-``,
      ``_``, ``.`` and ``~`` with hyphens.
    * Collapses consecutive hyphens and strips leading/trailing
      hyphens, dots and underscores.

    Examples::

        sanitize_name("My Shop API") -> "my-shop-api"
        sanitize_name("  Blog (v2)  ") -> "blog-v2"
    """
    result = re.sub(r"[^a-z0-9._~-]", "-", name.strip().lower())
    result = re.sub(r"-+", "-", result)
    return result.strip("-._")


def split_tokens(raw: str) -> list[str]:
    """Split a free-text list into tokens.

    Commas are treated as spaces so ``"a,b c"`` and ``"a b c"`` produce the
    same result.  Empty tokens are discarded.
    """
    return raw.replace(",", " ").split()


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------


def dump_json(data: dict[str, Any] | list[Any], indent: int | str = 2) -> str:
    """Serialise *data* as pretty-printed JSON with a trailing newline."""
    return json.dumps(data, indent=indent, ensure_ascii=False) + "\n"


async def save_json(
    data: dict[str, Any] | list[Any],
    path: str | Path,
    indent: int | str = 2,
) -> Path:
    """Save data as pretty-printed JSON.

    Parent directories are created automatically and the write is performed
    in a worker thread.  The coroutine only returns once the file is fully
    written.

    Args:
        data: Serialisable data (dict or list).
        path: Destination file path.
        indent: Indentation passed to :func:`json.dumps` (``"\\t"`` for tabs).

    Returns:
        The path that was written.
    """
    file_path = Path(path)
    content = dump_json(data, indent=indent)
    await asyncio.to_thread(write_text, file_path, content)
    return file_path


def write_text(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Elapsed time for the stage and run summaries.

    Under a minute keeps one decimal (``"3.7s"``); longer runs drop the
    fraction (``"1m 5s"``, ``"1h 1m 1s"``).  Negative input reads as zero.
    """
    if seconds < 60:
        return f"{max(seconds, 0.0):.1f}s"

    hours, rest = divmod(int(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h {minutes}m {secs}s"
    return f"{minutes}m {secs}s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


STAGE_NAMES: dict[str, str] = {
    "validate": "Validate request",
    "destination": "Prepare destination",
    "template": "Copy template",
    "dependencies": "Resolve dependencies",
    "addons": "Configure add-ons",
    "manifest": "Write package.json",
    "install": "Install dependencies",
}

STAGE_COLORS: dict[str, str] = {
    "validate": "bright_cyan",
    "destination": "bright_red",
    "template": "bright_green",
    "dependencies": "bright_yellow",
    "addons": "bright_magenta",
    "manifest": "bright_blue",
    "install": "bright_cyan",
}


def print_stage_header(step: int, stage: str) -> None:
    """Print a stage header as a full-width coloured rule."""
    color = STAGE_COLORS.get(stage, "white")
    name = STAGE_NAMES.get(stage, stage)
    console.print(
        Rule(
            f"[bold {color}] {step}. {name} [/bold {color}]",
            style=color,
        )
    )


def print_summary_table(rows: dict[str, Any], title: str = "Summary") -> None:
    """Show the end-of-run summary; values are printed literally."""
    table = Table(title=title, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for label, value in rows.items():
        table.add_row(label, Text(str(value)))

    console.print(table)
    console.print()


def print_plain(message: str, style: str = "") -> None:
    """Print *message* without interpreting ``[...]`` as markup.

    Use it for any line that can contain user input or exception text.
    """
    console.print(message, style=style or None, markup=False, highlight=False)


def print_success(message: str) -> None:
    print_plain(message, "bold green")


def print_error(message: str) -> None:
    print_plain(message, "bold red")


def print_warning(message: str) -> None:
    print_plain(message, "bold yellow")
