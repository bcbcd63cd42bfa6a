"""nodegen configuration.

Centralised, typed configuration for a generation run.  Settings use a
Pydantic v2 model so they are validated at construction time and can be
overridden from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

# Framework template trees shipped with the package.
DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "frameworks"

_TRUTHY = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Global nodegen configuration.

    Created once by the CLI entry point (or by tests) and passed to the
    ``Pipeline``.
    """

    output_dir: Path = Field(default=Path("."), description="Parent directory of generated projects")
    templates_dir: Path = Field(default=DEFAULT_TEMPLATES_DIR)
    package_manager: str = Field(default="npm", min_length=1)
    install_timeout: int = Field(
        default=900, ge=60, description="Package manager timeout in seconds"
    )
    skip_install: bool = Field(default=False)
    assume_yes: bool = Field(
        default=False, description="Overwrite an existing destination without asking"
    )

    def project_path(self, app_name: str) -> Path:
        """Destination directory for *app_name*."""
        return self.output_dir / app_name

    def template_path(self, template: str) -> Path:
        """Source directory of a framework template."""
        return self.templates_dir / template

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            NODEGEN_OUTPUT_DIR, NODEGEN_TEMPLATES_DIR, NODEGEN_PACKAGE_MANAGER,
            NODEGEN_INSTALL_TIMEOUT, NODEGEN_SKIP_INSTALL.

        Keyword arguments whose value is not ``None`` take precedence over
        the environment.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("NODEGEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["NODEGEN_OUTPUT_DIR"])
        if os.environ.get("NODEGEN_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["NODEGEN_TEMPLATES_DIR"])
        if os.environ.get("NODEGEN_PACKAGE_MANAGER"):
            kwargs["package_manager"] = os.environ["NODEGEN_PACKAGE_MANAGER"]
        if os.environ.get("NODEGEN_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = int(os.environ["NODEGEN_INSTALL_TIMEOUT"])
        if os.environ.get("NODEGEN_SKIP_INSTALL"):
            kwargs["skip_install"] = os.environ["NODEGEN_SKIP_INSTALL"].lower() in _TRUTHY

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
