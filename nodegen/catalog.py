"""Static registries of everything nodegen knows how to generate.

Frameworks, add-on catalogs (database, mail, authentication, CSS) and the
fixed selection -> dependency tables.  All tables are read-only mappings
built once at import time; nothing in here is mutated at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Frameworks
# ---------------------------------------------------------------------------

class Framework(str, Enum):
    """Supported application frameworks."""
    EXPRESS = "express"
    HAPI = "hapi"
    NEST = "nest"
    REACT = "react"
    NEXT = "next"


class FrameworkSpec(BaseModel):
    """Fixed attributes of a supported framework."""

    model_config = ConfigDict(frozen=True)

    framework: Framework
    template: str = Field(..., description="Template directory name under the templates root")
    default_dependencies: tuple[str, ...] = Field(
        ..., description="Packages installed for every project of this framework (ordered)"
    )
    backend: bool = Field(..., description="Whether this is a server-side framework")
    extension: str = Field(default="js", description="Extension of generated source files")


FRAMEWORKS: Mapping[Framework, FrameworkSpec] = MappingProxyType({
    Framework.EXPRESS: FrameworkSpec(
        framework=Framework.EXPRESS,
        template="express_template",
        default_dependencies=("express", "cors", "dotenv", "helmet", "morgan"),
        backend=True,
    ),
    Framework.HAPI: FrameworkSpec(
        framework=Framework.HAPI,
        template="hapi_template",
        default_dependencies=("@hapi/hapi", "dotenv"),
        backend=True,
    ),
    Framework.NEST: FrameworkSpec(
        framework=Framework.NEST,
        template="nest_template",
        default_dependencies=(
            "@nestjs/common",
            "@nestjs/core",
            "@nestjs/platform-express",
            "reflect-metadata",
            "rxjs",
        ),
        backend=True,
    ),
    Framework.REACT: FrameworkSpec(
        framework=Framework.REACT,
        template="react_template",
        default_dependencies=("react", "react-dom", "react-scripts", "web-vitals"),
        backend=False,
    ),
    Framework.NEXT: FrameworkSpec(
        framework=Framework.NEXT,
        template="next_template",
        default_dependencies=("next", "react", "react-dom"),
        backend=False,
    ),
})


def get_framework(name: str | Framework) -> FrameworkSpec:
    """Look up a framework by name.

    Raises:
        KeyError: If *name* is not a supported framework.
    """
    try:
        return FRAMEWORKS[Framework(name)]
    except ValueError:
        raise KeyError(name) from None


def framework_names() -> list[str]:
    """Return the supported framework identifiers in catalog order."""
    return [f.value for f in FRAMEWORKS]


def default_dependencies(framework: str | Framework) -> list[str]:
    """Return a fresh copy of the framework's default dependency list."""
    return list(get_framework(framework).default_dependencies)


# ---------------------------------------------------------------------------
# Add-on catalogs (selection -> dependencies, order matters)
# ---------------------------------------------------------------------------

DATABASES: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "mongo": ("mongoose",),
    "postgres": ("sequelize", "pg", "pg-hstore"),
    "mysql": ("sequelize", "mysql2"),
    "mssql": ("sequelize", "tedious"),
    "sqlite": ("sequelize", "sqlite3"),
    "maria": ("sequelize", "mariadb"),
})

# Sequelize dialect for each relational selection.
SQL_DIALECTS: Mapping[str, str] = MappingProxyType({
    "postgres": "postgres",
    "mysql": "mysql",
    "mssql": "mssql",
    "sqlite": "sqlite",
    "maria": "mariadb",
})

MAIL_CLIENTS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "nodemailer": ("nodemailer",),
    "sendgrid": ("nodemailer", "nodemailer-sendgrid"),
    "mailgun": ("nodemailer", "nodemailer-mailgun-transport"),
})

AUTH_PROVIDERS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "jwt": ("jsonwebtoken",),
})

CSS_LIBRARIES: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "bootstrap": ("bootstrap",),
    "antd": ("antd",),
    "material": ("@mui/material", "@emotion/react", "@emotion/styled"),
})
