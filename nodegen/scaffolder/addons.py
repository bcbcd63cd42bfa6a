"""Add-on configurators.

One configurator per add-on category.  Each validates the user's selection
against its catalog and, when the selection is accepted, reports the
packages to install and renders at most one source file into the project.

Validation always happens before anything is written: an invalid selection
raises :class:`~nodegen.errors.AddonSelectionError` and leaves both the
project directory and the dependency set untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..catalog import (
    AUTH_PROVIDERS,
    CSS_LIBRARIES,
    DATABASES,
    MAIL_CLIENTS,
    SQL_DIALECTS,
)
from ..errors import AddonSelectionError, AddonWriteError
from ..models import AddonCategory, AddonResult
from .templates import TemplateRenderer


class AddonConfigurator:
    """Base class: catalog lookup plus optional source-file rendering.

    Subclasses set ``category`` and ``options`` and override
    :meth:`artifact` when the add-on generates a file.
    """

    category: AddonCategory
    options: Mapping[str, tuple[str, ...]]

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    # -- Validation --------------------------------------------------------

    def validate(self, selection: str) -> str:
        """Return the stripped selection, or raise if it is not in the catalog.

        An empty selection is valid and means "skip".
        """
        selection = (selection or "").strip()
        if selection and selection not in self.options:
            raise AddonSelectionError(self.category.value, selection, self.options)
        return selection

    def dependencies_for(self, selection: str) -> list[str]:
        """Packages required by an accepted selection."""
        if not selection:
            return []
        return list(self.options[selection])

    # -- Generation --------------------------------------------------------

    def artifact(self, selection: str, extension: str) -> tuple[str, str, dict[str, Any]] | None:
        """``(template, relative output path, extra context)`` or ``None``."""
        return None

    async def configure(
        self,
        selection: str,
        project_root: Path,
        context: dict[str, Any],
        extension: str = "js",
    ) -> AddonResult:
        """Validate *selection* and generate the add-on.

        Args:
            selection: Raw user selection; empty skips the add-on.
            project_root: Root of the generated project.
            context: Base template context (``project_name``, ``framework``).
            extension: Extension of generated source files.

        Raises:
            AddonSelectionError: Selection is not in the catalog.
            AddonWriteError: The source file could not be written.
        """
        selection = self.validate(selection)
        if not selection:
            return AddonResult(category=self.category)

        written: Path | None = None
        artifact = self.artifact(selection, extension)
        if artifact is not None:
            template, relative_path, extra = artifact
            output = project_root / relative_path
            try:
                written = await self.renderer.render_to_file(
                    template, output, {**context, **extra}
                )
            except OSError as exc:
                raise AddonWriteError(
                    f"Error creating {self.category.value} set up at {output}: {exc}"
                ) from exc

        return AddonResult(
            category=self.category,
            selection=selection,
            dependencies=self.dependencies_for(selection),
            written=written,
        )


class DatabaseConfigurator(AddonConfigurator):
    """Writes ``src/models/index`` with a mongoose or Sequelize connection."""

    category = AddonCategory.DATABASE
    options = DATABASES

    def artifact(self, selection: str, extension: str) -> tuple[str, str, dict[str, Any]] | None:
        path = f"src/models/index.{extension}"
        if selection == "mongo":
            return ("addons/mongo_index.js.j2", path, {})
        return ("addons/sql_index.js.j2", path, {"dialect": SQL_DIALECTS[selection]})


class MailConfigurator(AddonConfigurator):
    """Writes ``src/services/mail_service``; identical for every provider."""

    category = AddonCategory.MAIL
    options = MAIL_CLIENTS

    def artifact(self, selection: str, extension: str) -> tuple[str, str, dict[str, Any]] | None:
        return ("addons/mail_service.js.j2", f"src/services/mail_service.{extension}", {})


class AuthConfigurator(AddonConfigurator):
    """Writes ``src/middlewares/authentication`` exposing ``verifyAuthToken``."""

    category = AddonCategory.AUTH
    options = AUTH_PROVIDERS

    def artifact(self, selection: str, extension: str) -> tuple[str, str, dict[str, Any]] | None:
        return (
            "addons/authentication.js.j2",
            f"src/middlewares/authentication.{extension}",
            {"provider": selection},
        )


class CssConfigurator(AddonConfigurator):
    """Dependencies only; styling setup ships with the framework template."""

    category = AddonCategory.CSS
    options = CSS_LIBRARIES


_CONFIGURATORS: dict[AddonCategory, type[AddonConfigurator]] = {
    AddonCategory.DATABASE: DatabaseConfigurator,
    AddonCategory.MAIL: MailConfigurator,
    AddonCategory.AUTH: AuthConfigurator,
    AddonCategory.CSS: CssConfigurator,
}


def build_configurators(
    renderer: TemplateRenderer | None = None,
) -> dict[AddonCategory, AddonConfigurator]:
    """One configurator per category, sharing a single renderer."""
    renderer = renderer or TemplateRenderer()
    return {category: cls(renderer) for category, cls in _CONFIGURATORS.items()}
