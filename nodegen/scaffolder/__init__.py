"""nodegen scaffolder -- the stages that turn a request into a project.

Each stage is a small class or function that raises a
:class:`~nodegen.errors.GenerationError` subclass on failure:

* :class:`DestinationGuard` clears (or refuses to clear) the target directory.
* :class:`TemplateMaterializer` copies the framework template tree.
* :func:`resolve` / :class:`DependencySet` compute the install list.
* the add-on configurators validate selections and render source files.
* :class:`ManifestWriter` writes ``package.json``.
* :class:`InstallRunner` invokes the package manager.
"""

from nodegen.scaffolder.addons import (
    AddonConfigurator,
    AuthConfigurator,
    CssConfigurator,
    DatabaseConfigurator,
    MailConfigurator,
    build_configurators,
)
from nodegen.scaffolder.guard import DestinationGuard
from nodegen.scaffolder.installer import InstallRunner
from nodegen.scaffolder.manifest import Manifest, ManifestWriter, build_manifest
from nodegen.scaffolder.materializer import TemplateMaterializer
from nodegen.scaffolder.resolver import DependencySet, resolve
from nodegen.scaffolder.templates import TemplateRenderer

__all__ = [
    "AddonConfigurator",
    "AuthConfigurator",
    "CssConfigurator",
    "DatabaseConfigurator",
    "DependencySet",
    "DestinationGuard",
    "InstallRunner",
    "MailConfigurator",
    "Manifest",
    "ManifestWriter",
    "TemplateMaterializer",
    "TemplateRenderer",
    "build_configurators",
    "build_manifest",
    "resolve",
]
