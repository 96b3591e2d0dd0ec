"""Project scaffolding sequence."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable

from .config import ProjectConfig, ScaffoldOptions
from .errors import FilesystemError, ScaffoldError, StepFailedError
from .materializer import Materializer
from .runner import CommandRunner, SubprocessRunner, probe
from .schema import Artifact, ScaffoldResult
from .template import (
    BUILD_FILE,
    CIBUILD_SCRIPT,
    IGNORE_FILE,
    LINT_CONFIG,
    PRE_COMMIT_SCRIPT,
    RELEASE_CONFIG,
    RELEASE_WORKFLOW,
    SETUP_SCRIPT,
    PackagedTemplateStore,
    TemplateStore,
)

__all__ = [
    "HOOKS_DIRECTORY",
    "ProjectScaffolder",
    "ScaffoldStep",
    "SCRIPTS_DIRECTORY",
    "WORKFLOWS_DIRECTORY",
]


LOGGER = logging.getLogger(__name__)

SCRIPTS_DIRECTORY = Path("scripts")
WORKFLOWS_DIRECTORY = Path(".github") / "workflows"
HOOKS_DIRECTORY = Path(".git") / "hooks"

ROOT_FILES = (
    Artifact(target=".golintci.yml", template=LINT_CONFIG),
    Artifact(target=".gitignore", template=IGNORE_FILE),
    Artifact(target="Makefile", template=BUILD_FILE),
)
RELEASE_FILES = (Artifact(target=".goreleaser.yml", template=RELEASE_CONFIG),)
SCRIPT_FILES = (
    Artifact(target="scripts/pre-commit", template=PRE_COMMIT_SCRIPT, executable=True),
    Artifact(target="scripts/setup.sh", template=SETUP_SCRIPT, executable=True),
    Artifact(target="scripts/cibuild.sh", template=CIBUILD_SCRIPT, executable=True),
)
WORKFLOW_FILES = (Artifact(target=".github/workflows/releaser.yml", template=RELEASE_WORKFLOW),)
HOOK_FILE = Artifact(target=".git/hooks/pre-commit", template=PRE_COMMIT_SCRIPT, executable=True)


class ScaffoldStep(str, Enum):
    """Ordered states of a scaffolding run."""

    PREFLIGHT = "preflight"
    CREATE_ROOT = "create-root"
    INIT_REPO = "init-repo"
    INIT_MODULE = "init-module"
    WRITE_FILES = "write-files"
    WRITE_SCRIPTS = "write-scripts"
    WRITE_WORKFLOW = "write-workflow"
    INSTALL_HOOK = "install-hook"

    @property
    def description(self) -> str:
        return _STEP_DESCRIPTIONS[self]


_STEP_DESCRIPTIONS = {
    ScaffoldStep.PREFLIGHT: "error checking the Go toolchain",
    ScaffoldStep.CREATE_ROOT: "error creating project directory",
    ScaffoldStep.INIT_REPO: "error initializing repository",
    ScaffoldStep.INIT_MODULE: "error initializing Go module",
    ScaffoldStep.WRITE_FILES: "error creating project files",
    ScaffoldStep.WRITE_SCRIPTS: "error creating scripts",
    ScaffoldStep.WRITE_WORKFLOW: "error creating release workflow",
    ScaffoldStep.INSTALL_HOOK: "error creating pre-commit hook",
}


@dataclass(slots=True)
class _Progress:
    config: ProjectConfig
    files: list[str] = field(default_factory=list)
    commands: list[list[str]] = field(default_factory=list)


class ProjectScaffolder:
    """Create a Go project skeleton.

    Steps run in :class:`ScaffoldStep` order and stop at the first failure,
    which is raised as :class:`StepFailedError`. Nothing created before the
    failure is removed.
    """

    def __init__(
        self,
        store: TemplateStore | None = None,
        runner: CommandRunner | None = None,
        options: ScaffoldOptions | None = None,
    ) -> None:
        self.materializer = Materializer(store or PackagedTemplateStore())
        self.runner = runner or SubprocessRunner()
        self.options = options or ScaffoldOptions()

    def steps(self) -> list[ScaffoldStep]:
        """Return the steps this scaffolder will run, honouring its options."""

        skipped: set[ScaffoldStep] = set()
        if not self.options.preflight:
            skipped.add(ScaffoldStep.PREFLIGHT)
        if not self.options.release:
            skipped.add(ScaffoldStep.WRITE_WORKFLOW)
        return [step for step in ScaffoldStep if step not in skipped]

    def create(self, config: ProjectConfig) -> ScaffoldResult:
        """Create the project described by ``config``."""

        progress = _Progress(config)
        handlers: dict[ScaffoldStep, Callable[[_Progress], None]] = {
            ScaffoldStep.PREFLIGHT: self._preflight,
            ScaffoldStep.CREATE_ROOT: self._create_root,
            ScaffoldStep.INIT_REPO: self._init_repo,
            ScaffoldStep.INIT_MODULE: self._init_module,
            ScaffoldStep.WRITE_FILES: self._write_files,
            ScaffoldStep.WRITE_SCRIPTS: self._write_scripts,
            ScaffoldStep.WRITE_WORKFLOW: self._write_workflow,
            ScaffoldStep.INSTALL_HOOK: self._install_hook,
        }

        for step in self.steps():
            LOGGER.info("%s: %s", step.value, config.root)
            try:
                handlers[step](progress)
            except (ScaffoldError, OSError) as exc:
                LOGGER.debug("step %s failed", step.value, exc_info=True)
                raise StepFailedError(step, exc) from exc

        return ScaffoldResult(
            root=str(config.root),
            module_path=config.module_path,
            files=progress.files,
            commands=progress.commands,
        )

    def _run(self, progress: _Progress, program: str, *args: str, cwd: Path | None) -> str:
        progress.commands.append([program, *args])
        return self.runner.run(program, *args, cwd=cwd)

    def _write(self, progress: _Progress, artifact: Artifact) -> None:
        self.materializer.write_artifact(progress.config.root, artifact)
        progress.files.append(artifact.target)

    def _preflight(self, progress: _Progress) -> None:
        progress.commands.append([self.options.go, "version"])
        version = probe(self.runner, self.options.go, "version")
        LOGGER.debug("using %s", version or self.options.go)

    def _create_root(self, progress: _Progress) -> None:
        self.materializer.create_directory(progress.config.root)

    def _init_repo(self, progress: _Progress) -> None:
        self._run(progress, self.options.git, "init", cwd=progress.config.root)

    def _init_module(self, progress: _Progress) -> None:
        module = progress.config.module_path
        LOGGER.info("module path: %s", module)
        self._run(progress, self.options.go, "mod", "init", module, cwd=progress.config.root)

    def _write_files(self, progress: _Progress) -> None:
        artifacts = ROOT_FILES + RELEASE_FILES if self.options.release else ROOT_FILES
        for artifact in artifacts:
            self._write(progress, artifact)

    def _write_scripts(self, progress: _Progress) -> None:
        self.materializer.create_directory(progress.config.root / SCRIPTS_DIRECTORY)
        for artifact in SCRIPT_FILES:
            self._write(progress, artifact)

    def _write_workflow(self, progress: _Progress) -> None:
        self.materializer.create_directory(progress.config.root / WORKFLOWS_DIRECTORY, parents=True)
        for artifact in WORKFLOW_FILES:
            self._write(progress, artifact)

    def _install_hook(self, progress: _Progress) -> None:
        hooks = progress.config.root / HOOKS_DIRECTORY
        if not hooks.is_dir():
            raise FilesystemError(f"hooks directory {hooks} does not exist")
        self._write(progress, HOOK_FILE)
