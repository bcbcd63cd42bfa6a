"""nodegen pipeline orchestrator.

Runs a single generation request through its stages:

validate     -- Collect missing answers, validate name, framework and add-ons.
destination  -- Confirm and clear an existing project directory.
template     -- Copy the framework template tree.
dependencies -- Merge default and user-supplied dependencies.
addons       -- Configure database/mail/auth (backend) or CSS (frontend).
manifest     -- Write package.json.
install      -- Run the package manager.

The first failing stage stops the run; nothing is retried or rolled back.

Usage::

    nodegen my-api --framework express --database postgres
    python -m nodegen my-site --framework react --css material
"""

from __future__ import annotations

import asyncio
import sys
import time
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError
from rich.markup import escape

from .catalog import (
    AUTH_PROVIDERS,
    CSS_LIBRARIES,
    DATABASES,
    MAIL_CLIENTS,
    framework_names,
    get_framework,
)
from .config import Config
from .errors import GenerationError, InvalidRequestError
from .models import (
    BACKEND_ADDONS,
    FRONTEND_ADDONS,
    AddonCategory,
    AddonResult,
    GenerationRequest,
    validate_app_name,
)
from .prompts import ConsolePrompt, Prompt
from .scaffolder.addons import AddonConfigurator, build_configurators
from .scaffolder.guard import DestinationGuard
from .scaffolder.installer import InstallRunner
from .scaffolder.manifest import ManifestWriter
from .scaffolder.materializer import TemplateMaterializer
from .scaffolder.resolver import DependencySet
from .scaffolder.templates import TemplateRenderer
from .utils import (
    STAGE_NAMES,
    console,
    format_duration,
    print_error,
    print_plain,
    print_stage_header,
    print_success,
    print_summary_table,
    print_warning,
)

STAGES: tuple[str, ...] = (
    "validate",
    "destination",
    "template",
    "dependencies",
    "addons",
    "manifest",
    "install",
)

DEPENDENCIES_QUESTION = "'SPACE' delimited list of dependencies to include?"

_ADDON_QUESTIONS: dict[AddonCategory, tuple[str, list[str]]] = {
    AddonCategory.DATABASE: ("Include database set up? Supported databases", list(DATABASES)),
    AddonCategory.MAIL: ("Include mail set up? Supported mail clients", list(MAIL_CLIENTS)),
    AddonCategory.AUTH: (
        "Include authentication set up? Supported authentication providers",
        list(AUTH_PROVIDERS),
    ),
    AddonCategory.CSS: ("CSS library to include? Supported libraries", list(CSS_LIBRARIES)),
}


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class Pipeline:
    """Drives one generation request from raw answers to installed project.

    Answers that are ``None`` (or missing) are asked through *prompt*; an
    empty string is a deliberate "skip".

    Attributes:
        config: Run configuration.
        state: Accumulates per-stage results; returned by :meth:`run`.
    """

    def __init__(
        self,
        config: Config,
        prompt: Prompt | None = None,
        *,
        installer: InstallRunner | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.prompt: Prompt = prompt or ConsolePrompt()
        self.installer = installer or InstallRunner(
            config.package_manager, timeout=config.install_timeout
        )
        self.configurators: dict[AddonCategory, AddonConfigurator] = build_configurators(
            renderer or TemplateRenderer()
        )
        self._inputs: tuple[str, str, dict[str, Optional[str]]] = ("", "", {})
        self.request: Optional[GenerationRequest] = None
        self.dependencies: Optional[DependencySet] = None
        self.state: dict[str, Any] = {
            "started_at": datetime.now(timezone.utc).isoformat(),
            "stages_completed": [],
            "stage_failed": None,
            "error": None,
            "exit_code": 0,
            "success": False,
            "files_written": [],
        }

    # ------------------------------------------------------------------
    # Driver
    # ------------------------------------------------------------------

    async def run(
        self,
        app_name: str,
        framework: str,
        answers: dict[str, Optional[str]] | None = None,
    ) -> dict[str, Any]:
        """Execute every stage in order, stopping at the first failure.

        Args:
            app_name: Project directory and package name.
            framework: Framework identifier.
            answers: Pre-supplied answers keyed by ``"dependencies"``,
                ``"database"``, ``"mail"``, ``"auth"`` and ``"css"``.

        Returns:
            The final state dictionary, including ``success`` and the
            ``exit_code`` the process should terminate with.
        """
        run_start = time.monotonic()
        self._inputs = (app_name, framework, dict(answers or {}))

        for step, stage in enumerate(STAGES, start=1):
            print_stage_header(step, stage)
            stage_start = time.monotonic()
            try:
                result = await getattr(self, f"stage_{stage}")()
                self.state[stage] = result
                self.state["stages_completed"].append(stage)
                elapsed = time.monotonic() - stage_start
                console.print(f"  [dim]{STAGE_NAMES[stage]} done in {format_duration(elapsed)}[/dim]")

            except GenerationError as exc:
                self._fail(stage, str(exc), exc.exit_code)
                print_error(f"{STAGE_NAMES[stage]} failed: {exc}")
                break

            except Exception as exc:
                tb = traceback.format_exc()
                self._fail(stage, f"{type(exc).__name__}: {exc}", 1)
                print_error(f"{STAGE_NAMES[stage]} failed unexpectedly: {exc}")
                print_plain(tb, "dim")
                break

        else:
            self.state["success"] = True

        total_elapsed = time.monotonic() - run_start
        self.state["total_duration"] = format_duration(total_elapsed)
        self.state["finished_at"] = datetime.now(timezone.utc).isoformat()
        self._print_final_summary()
        return self.state

    def _fail(self, stage: str, message: str, exit_code: int) -> None:
        self.state["stage_failed"] = stage
        self.state["error"] = message
        self.state["exit_code"] = exit_code or 1

    # ------------------------------------------------------------------
    # Stage: validate
    # ------------------------------------------------------------------

    async def stage_validate(self) -> dict[str, Any]:
        """Build and validate the request before touching the filesystem."""
        app_name, framework, answers = self._inputs

        try:
            validate_app_name(app_name)
        except ValueError as exc:
            raise InvalidRequestError(str(exc)) from None
        try:
            spec = get_framework(framework)
        except KeyError:
            raise InvalidRequestError(
                f"Unsupported framework '{framework}'. "
                f"Supported frameworks: {', '.join(framework_names())}."
            ) from None

        offered = BACKEND_ADDONS if spec.backend else FRONTEND_ADDONS
        fields: dict[str, str] = {}
        if answers.get("dependencies") is None:
            answers["dependencies"] = self.prompt.ask(DEPENDENCIES_QUESTION)
        fields["extra_dependencies"] = answers["dependencies"] or ""

        for category in AddonCategory:
            value = answers.get(category.value)
            if value is None and category in offered:
                label, options = _ADDON_QUESTIONS[category]
                value = self.prompt.ask(f"{label}: {', '.join(options)}")
            fields[category.value] = value or ""

        try:
            request = GenerationRequest(app_name=app_name, framework=spec.framework, **fields)
        except ValidationError as exc:
            raise InvalidRequestError(_first_error(exc)) from None

        misplaced = request.misplaced_addons()
        if misplaced:
            kind = "backend" if not request.is_backend else "frontend"
            names = ", ".join(c.value for c in misplaced)
            raise InvalidRequestError(
                f"{names} add-on is only available for {kind} frameworks, "
                f"not '{request.framework.value}'."
            )

        for category in request.applicable_addons():
            self.configurators[category].validate(request.selection(category))

        self.request = request
        return request.model_dump(mode="json")

    # ------------------------------------------------------------------
    # Stage: destination
    # ------------------------------------------------------------------

    async def stage_destination(self) -> dict[str, Any]:
        target = self.config.project_path(self._req.app_name)
        guard = DestinationGuard(self.prompt, assume_yes=self.config.assume_yes)
        removed = await guard.prepare(target)
        return {"path": str(target), "replaced": removed}

    # ------------------------------------------------------------------
    # Stage: template
    # ------------------------------------------------------------------

    async def stage_template(self) -> dict[str, Any]:
        request = self._req
        materializer = TemplateMaterializer(self.config.templates_dir)
        copied = await materializer.materialize(request.framework, self._project_root)
        console.print(
            f"  Copied [bold]{len(copied)}[/bold] template files for {request.framework.value}"
        )
        return {"files": len(copied)}

    # ------------------------------------------------------------------
    # Stage: dependencies
    # ------------------------------------------------------------------

    async def stage_dependencies(self) -> list[str]:
        request = self._req
        self.dependencies = DependencySet.for_framework(
            request.framework, request.extra_dependencies
        )
        if self.dependencies.extras:
            print_plain(f"  Extra dependencies: {' '.join(self.dependencies.extras)}")
        return self.dependencies.as_list()

    # ------------------------------------------------------------------
    # Stage: addons
    # ------------------------------------------------------------------

    async def stage_addons(self) -> list[dict[str, Any]]:
        """Configure the add-ons offered for the framework, in catalog order.

        Each selection is validated before its file is written or its
        packages are added.
        """
        request = self._req
        dependencies = self._deps
        context = {"project_name": request.app_name, "framework": request.framework.value}

        results: list[AddonResult] = []
        for category in request.applicable_addons():
            result = await self.configurators[category].configure(
                request.selection(category),
                self._project_root,
                context,
                extension=request.spec.extension,
            )
            if result.skipped:
                console.print(f"  [dim]{category.value}: skipped[/dim]")
                continue
            dependencies.add(*result.dependencies)
            if result.written is not None:
                self.state["files_written"].append(str(result.written))
            console.print(
                f"  [green]+[/green] {category.value}: {escape(result.selection)} "
                f"({', '.join(result.dependencies)})"
            )
            results.append(result)

        self.state["dependencies"] = dependencies.as_list()
        return [r.model_dump(mode="json") for r in results]

    # ------------------------------------------------------------------
    # Stage: manifest
    # ------------------------------------------------------------------

    async def stage_manifest(self) -> str:
        request = self._req
        writer = ManifestWriter(self._project_root)
        path = await writer.write(
            request.app_name,
            request.framework,
            request.is_backend,
            self._deps,
        )
        self.state["files_written"].append(str(path))
        return str(path)

    # ------------------------------------------------------------------
    # Stage: install
    # ------------------------------------------------------------------

    async def stage_install(self) -> dict[str, Any]:
        names = self._deps.as_list()
        if self.config.skip_install:
            print_warning("  Skipping dependency installation (--skip-install).")
            return {"skipped": True, "packages": names}
        returncode = await self.installer.install(names, self._project_root)
        return {"skipped": False, "packages": names, "returncode": returncode}

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def _req(self) -> GenerationRequest:
        if self.request is None:
            raise RuntimeError("Request has not been validated yet")
        return self.request

    @property
    def _deps(self) -> DependencySet:
        if self.dependencies is None:
            raise RuntimeError("Dependencies have not been resolved yet")
        return self.dependencies

    @property
    def _project_root(self) -> Path:
        return self.config.project_path(self._req.app_name)

    def _print_final_summary(self) -> None:
        app_name, framework, _ = self._inputs
        console.print()
        if self.state["success"]:
            print_success(f"{framework} app '{app_name}' generated successfully.")
        else:
            print_error(
                f"Generation of '{app_name}' stopped at "
                f"'{self.state['stage_failed']}': {self.state['error']}"
            )

        dependencies = self.dependencies.as_list() if self.dependencies else []
        print_summary_table(
            {
                "App": app_name,
                "Framework": framework,
                "Destination": str(self.config.project_path(app_name)),
                "Dependencies": " ".join(dependencies) or "-",
                "Generated files": "\n".join(self.state["files_written"]) or "-",
                "Duration": self.state.get("total_duration", "-"),
            },
            title="Generation Summary",
        )


def _first_error(exc: ValidationError) -> str:
    """Human readable message for the first pydantic validation error."""
    err = exc.errors()[0]
    message = str(err.get("msg", exc))
    return message.removeprefix("Value error, ")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``nodegen`` / ``python -m nodegen``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="nodegen",
        description="nodegen -- generate a Node.js application from a template",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  nodegen my-api --framework express --database postgres --auth jwt\n"
            "  nodegen my-site --framework react --css material -d 'lodash axios'\n"
            "\n"
            "Options that are not given are asked interactively; pass an empty\n"
            "string (e.g. --database '') to skip an add-on without being asked.\n"
        ),
    )
    parser.add_argument("app_name", help="Application (directory and package) name")
    parser.add_argument(
        "--framework", "-f",
        required=True,
        help=f"Framework to generate ({', '.join(framework_names())})",
    )
    parser.add_argument(
        "--dependencies", "-d",
        default=None,
        help="Extra packages to install, space or comma separated",
    )
    parser.add_argument("--database", default=None, help=f"Database ({', '.join(DATABASES)})")
    parser.add_argument("--mail", default=None, help=f"Mail client ({', '.join(MAIL_CLIENTS)})")
    parser.add_argument(
        "--auth", default=None, help=f"Authentication provider ({', '.join(AUTH_PROVIDERS)})"
    )
    parser.add_argument("--css", default=None, help=f"CSS library ({', '.join(CSS_LIBRARIES)})")
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory of the generated project (default: current directory)",
    )
    parser.add_argument(
        "--package-manager",
        default=None,
        help="Package manager executable (default: npm)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing project directory without asking",
    )
    parser.add_argument(
        "--skip-install",
        action="store_true",
        help="Write the project but do not run the package manager",
    )

    args = parser.parse_args(argv)

    try:
        config = Config.from_env(
            output_dir=args.output,
            package_manager=args.package_manager,
            skip_install=True if args.skip_install else None,
            assume_yes=True if args.force else None,
        )
    except (ValidationError, ValueError) as exc:
        print_error(f"Error: Invalid configuration: {exc}")
        sys.exit(1)

    answers = {
        "dependencies": args.dependencies,
        "database": args.database,
        "mail": args.mail,
        "auth": args.auth,
        "css": args.css,
    }

    pipeline = Pipeline(config)
    result = asyncio.run(pipeline.run(args.app_name, args.framework, answers))

    if not result.get("success"):
        sys.exit(result.get("exit_code") or 1)


if __name__ == "__main__":
    main()
