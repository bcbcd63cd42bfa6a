"""Pydantic v2 models describing a generation run.

``GenerationRequest`` is the validated, immutable input; ``AddonResult`` is
what each add-on configurator reports back to the pipeline.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .catalog import Framework, FrameworkSpec, get_framework
from .utils import sanitize_name

# npm package-name rules, restricted to unscoped names so the name is also a
# single, portable directory name.
_APP_NAME_RE = re.compile(r"^[a-z0-9][a-z0-9._~-]*$")
MAX_APP_NAME_LENGTH = 214


class AddonCategory(str, Enum):
    """Independently configurable add-on kinds."""
    DATABASE = "database"
    MAIL = "mail"
    AUTH = "auth"
    CSS = "css"


BACKEND_ADDONS: tuple[AddonCategory, ...] = (
    AddonCategory.DATABASE,
    AddonCategory.MAIL,
    AddonCategory.AUTH,
)
FRONTEND_ADDONS: tuple[AddonCategory, ...] = (AddonCategory.CSS,)


def validate_app_name(name: str) -> str:
    """Return *name* if it is usable as both a directory and a package name.

    Raises:
        ValueError: With a suggested alternative when the name is rejected.
    """
    if not name:
        raise ValueError("App name must not be empty")
    if len(name) > MAX_APP_NAME_LENGTH:
        raise ValueError(f"App name must be at most {MAX_APP_NAME_LENGTH} characters")
    if not _APP_NAME_RE.match(name):
        suggestion = sanitize_name(name)
        hint = f" Try '{suggestion}'." if suggestion else ""
        raise ValueError(
            f"App name '{name}' may only contain lowercase letters, digits, "
            f"'-', '.', '_' and '~' and must start with a letter or digit.{hint}"
        )
    return name


class GenerationRequest(BaseModel):
    """Everything needed to generate one project.

    Add-on selections are kept as raw strings (stripped); an empty string
    means the add-on is skipped.  Whether a selection is part of its catalog
    is checked by the add-on configurators, not here.
    """

    model_config = ConfigDict(frozen=True)

    app_name: str = Field(..., description="Directory name and package name")
    framework: Framework
    extra_dependencies: str = Field(default="", description="Space/comma separated package names")
    database: str = Field(default="")
    mail: str = Field(default="")
    auth: str = Field(default="")
    css: str = Field(default="")

    @field_validator("app_name")
    @classmethod
    def _check_app_name(cls, value: str) -> str:
        return validate_app_name(value)

    @field_validator("database", "mail", "auth", "css", "extra_dependencies")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()

    @property
    def spec(self) -> FrameworkSpec:
        """Catalog entry for the requested framework."""
        return get_framework(self.framework)

    @property
    def is_backend(self) -> bool:
        return self.spec.backend

    def selection(self, category: AddonCategory) -> str:
        """Raw selection for an add-on category."""
        return getattr(self, category.value)

    def applicable_addons(self) -> tuple[AddonCategory, ...]:
        """Add-on categories offered for this request's framework."""
        return BACKEND_ADDONS if self.is_backend else FRONTEND_ADDONS

    def misplaced_addons(self) -> list[AddonCategory]:
        """Categories with a selection that this framework does not offer."""
        offered = self.applicable_addons()
        return [
            category
            for category in AddonCategory
            if category not in offered and self.selection(category)
        ]


class AddonResult(BaseModel):
    """Outcome of configuring a single add-on."""

    category: AddonCategory
    selection: str = Field(default="", description="Accepted selection, empty if skipped")
    dependencies: list[str] = Field(default_factory=list)
    written: Optional[Path] = Field(default=None, description="Generated source file, if any")

    @property
    def skipped(self) -> bool:
        return not self.selection
