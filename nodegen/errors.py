"""Exception hierarchy for the generation pipeline.

Every stage raises a subclass of :class:`GenerationError`; the pipeline
driver catches it at the stage boundary and maps it to an exit status.
"""

from __future__ import annotations

from collections.abc import Iterable


class GenerationError(Exception):
    """Raised when a generation stage fails irrecoverably."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)


class InvalidRequestError(GenerationError):
    """The generation request itself is malformed (name, framework, add-on placement)."""


class AddonSelectionError(GenerationError):
    """An add-on selection is not part of its category's catalog."""

    def __init__(self, category: str, selection: str, options: Iterable[str]) -> None:
        self.category = category
        self.selection = selection
        self.options = list(options)
        super().__init__(
            f"Invalid {category} selection '{selection}'. "
            f"Supported options: {', '.join(self.options)}."
        )


class DestinationError(GenerationError):
    """The existing destination could not be cleared."""


class GenerationAborted(DestinationError):
    """The user declined a destructive action."""


class MaterializeError(GenerationError):
    """The framework template could not be copied."""


class AddonWriteError(GenerationError):
    """An add-on source file could not be written."""


class ManifestError(GenerationError):
    """``package.json`` could not be written."""


class InstallError(GenerationError):
    """The package manager failed."""

    def __init__(self, message: str, *, returncode: int | None = None) -> None:
        self.returncode = returncode
        exit_code = returncode if returncode and returncode > 0 else 1
        super().__init__(message, exit_code=exit_code)
