"""``package.json`` generation.

Dependencies and devDependencies are written empty: the package manager
fills them in when it installs the resolved dependency list.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..catalog import Framework
from ..errors import ManifestError
from ..utils import print_plain, save_json

MANIFEST_FILENAME = "package.json"
MANIFEST_VERSION = "1.0.0"

BACKEND_SCRIPTS: dict[str, str] = {
    "start": "node server.js",
}

FRONTEND_SCRIPTS: dict[str, str] = {
    "start": "react-scripts start",
    "build": "react-scripts build",
    "test": "react-scripts test --watchAll --coverage",
    "eject": "react-scripts eject",
}

BROWSERSLIST: dict[str, list[str]] = {
    "production": [">0.2%", "not dead", "not op_mini all"],
    "development": [
        "last 1 chrome version",
        "last 1 firefox version",
        "last 1 safari version",
    ],
}


class Manifest(BaseModel):
    """The generated ``package.json`` document."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    version: str = Field(default=MANIFEST_VERSION)
    scripts: dict[str, str] = Field(default_factory=dict)
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict, alias="devDependencies")
    browserslist: Optional[dict[str, list[str]]] = None

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


def build_manifest(app_name: str, framework: str | Framework, is_backend: bool) -> Manifest:
    """Manifest for a freshly generated project."""
    framework_name = Framework(framework).value
    return Manifest(
        name=app_name,
        description=f"{framework_name} application.",
        scripts=dict(BACKEND_SCRIPTS if is_backend else FRONTEND_SCRIPTS),
        browserslist=None if is_backend else {k: list(v) for k, v in BROWSERSLIST.items()},
    )


class ManifestWriter:
    """Writes ``package.json`` into the project root."""

    def __init__(self, project_root: Path) -> None:
        self.project_root = Path(project_root)

    @property
    def path(self) -> Path:
        return self.project_root / MANIFEST_FILENAME

    async def write(
        self,
        app_name: str,
        framework: str | Framework,
        is_backend: bool,
        dependencies: Iterable[str] = (),
    ) -> Path:
        """Build the manifest and write it, tab-indented.

        The coroutine completes only once the file is on disk.  The
        dependency list is not stored in the manifest; it is reported so the
        user can see what the install step is about to add.

        Raises:
            ManifestError: The file could not be written.
        """
        manifest = build_manifest(app_name, framework, is_backend)
        try:
            path = await save_json(manifest.to_dict(), self.path, indent="\t")
        except OSError as exc:
            raise ManifestError(f"Error creating package json file: {exc}") from exc

        names = list(dependencies)
        print_plain(f"  Wrote {path} ({len(names)} dependencies pending install)")
        return path
