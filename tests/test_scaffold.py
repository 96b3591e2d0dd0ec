from __future__ import annotations

import stat
from pathlib import Path

import pytest

from goforge.config import ProjectConfig, ScaffoldOptions
from goforge.errors import AlreadyExistsError, ExternalToolError, FilesystemError, StepFailedError
from goforge.scaffold import ProjectScaffolder, ScaffoldStep
from goforge.template import PackagedTemplateStore
from tests.fixtures.fake_runner import FakeRunner

EXPECTED_FILES = {
    ".golintci.yml",
    ".gitignore",
    "Makefile",
    ".goreleaser.yml",
    "go.mod",
    "scripts/pre-commit",
    "scripts/setup.sh",
    "scripts/cibuild.sh",
    ".github/workflows/releaser.yml",
    ".git/hooks/pre-commit",
}
EXECUTABLE_FILES = {
    "scripts/pre-commit",
    "scripts/setup.sh",
    "scripts/cibuild.sh",
    ".git/hooks/pre-commit",
}


def _files(root: Path) -> set[str]:
    return {path.relative_to(root).as_posix() for path in root.rglob("*") if path.is_file()}


def _is_executable(path: Path) -> bool:
    return bool(path.stat().st_mode & stat.S_IXUSR)


@pytest.fixture()
def config(tmp_path: Path) -> ProjectConfig:
    return ProjectConfig.from_name("demo", base_dir=tmp_path, alias="project/")


def test_scaffolder_creates_expected_structure(
    config: ProjectConfig, fake_runner: FakeRunner, template_store: PackagedTemplateStore
):
    scaffolder = ProjectScaffolder(template_store, fake_runner)
    result = scaffolder.create(config)

    assert _files(config.root) == EXPECTED_FILES
    for relative in EXPECTED_FILES - {"go.mod"}:
        path = config.root / relative
        assert _is_executable(path) == (relative in EXECUTABLE_FILES), relative

    assert (config.root / ".git" / "hooks" / "pre-commit").read_bytes() == template_store.get(
        "scripts/pre-commit"
    )
    assert (config.root / ".golintci.yml").read_bytes() == template_store.get(".golangci.yml")
    assert result.root == str(config.root)
    assert result.module_path == "project/demo"
    assert result.files[-1] == ".git/hooks/pre-commit"


def test_scaffolder_runs_tools_in_project_root(config: ProjectConfig, fake_runner: FakeRunner):
    result = ProjectScaffolder(runner=fake_runner).create(config)

    assert fake_runner.commands == [
        ("go", "version"),
        ("git", "init"),
        ("go", "mod", "init", "project/demo"),
    ]
    assert [call.cwd for call in fake_runner.calls] == [None, config.root, config.root]
    assert result.commands == [list(command) for command in fake_runner.commands]
    assert "module project/demo" in (config.root / "go.mod").read_text(encoding="utf-8")


def test_scaffolder_uses_alias_in_module_path(tmp_path: Path, fake_runner: FakeRunner):
    config = ProjectConfig.from_name("demo", base_dir=tmp_path, alias="github.com/octocat/")
    ProjectScaffolder(runner=fake_runner).create(config)
    assert ("go", "mod", "init", "github.com/octocat/demo") in fake_runner.commands


def test_scaffolder_without_release_files(config: ProjectConfig, fake_runner: FakeRunner):
    scaffolder = ProjectScaffolder(runner=fake_runner, options=ScaffoldOptions(release=False))
    assert ScaffoldStep.WRITE_WORKFLOW not in scaffolder.steps()

    scaffolder.create(config)

    assert _files(config.root) == EXPECTED_FILES - {".goreleaser.yml", ".github/workflows/releaser.yml"}
    assert not (config.root / ".github").exists()


def test_scaffolder_skips_preflight(config: ProjectConfig, fake_runner: FakeRunner):
    scaffolder = ProjectScaffolder(runner=fake_runner, options=ScaffoldOptions(preflight=False))
    scaffolder.create(config)
    assert ("go", "version") not in fake_runner.commands


def test_scaffolder_uses_configured_binaries(config: ProjectConfig, fake_runner: FakeRunner):
    options = ScaffoldOptions(git="/usr/local/bin/git", go="/opt/go/bin/go")
    ProjectScaffolder(runner=fake_runner, options=options).create(config)
    assert [command[0] for command in fake_runner.commands] == [
        "/opt/go/bin/go",
        "/usr/local/bin/git",
        "/opt/go/bin/go",
    ]


def test_scaffolder_refuses_existing_directory(config: ProjectConfig, fake_runner: FakeRunner):
    config.root.mkdir()

    with pytest.raises(StepFailedError) as excinfo:
        ProjectScaffolder(runner=fake_runner).create(config)

    assert excinfo.value.step is ScaffoldStep.CREATE_ROOT
    assert isinstance(excinfo.value.cause, AlreadyExistsError)
    assert isinstance(excinfo.value.__cause__, AlreadyExistsError)
    assert str(excinfo.value).startswith("error creating project directory:")
    assert list(config.root.iterdir()) == []
    assert fake_runner.commands == [("go", "version")]


def test_scaffolder_preflight_failure_touches_nothing(config: ProjectConfig):
    runner = FakeRunner(fail=[("go", "version")])

    with pytest.raises(StepFailedError) as excinfo:
        ProjectScaffolder(runner=runner).create(config)

    assert excinfo.value.step is ScaffoldStep.PREFLIGHT
    assert isinstance(excinfo.value.cause, ExternalToolError)
    assert not config.root.exists()


def test_scaffolder_stops_after_failed_module_init(config: ProjectConfig):
    runner = FakeRunner(fail=[("go", "mod", "init")])

    with pytest.raises(StepFailedError) as excinfo:
        ProjectScaffolder(runner=runner).create(config)

    assert excinfo.value.step is ScaffoldStep.INIT_MODULE
    assert isinstance(excinfo.value.cause, ExternalToolError)
    assert "error initializing Go module" in str(excinfo.value)
    # Earlier steps are kept, later ones never run.
    assert (config.root / ".git" / "hooks").is_dir()
    assert _files(config.root) == set()
    assert not (config.root / "scripts").exists()


def test_scaffolder_stops_after_failed_repo_init(config: ProjectConfig):
    runner = FakeRunner(fail=[("git", "init")])

    with pytest.raises(StepFailedError) as excinfo:
        ProjectScaffolder(runner=runner).create(config)

    assert excinfo.value.step is ScaffoldStep.INIT_REPO
    assert ("go", "mod", "init", "project/demo") not in runner.commands
    assert config.root.is_dir()


def test_scaffolder_requires_hooks_directory(config: ProjectConfig):
    runner = FakeRunner(create_git=False)

    with pytest.raises(StepFailedError) as excinfo:
        ProjectScaffolder(runner=runner).create(config)

    assert excinfo.value.step is ScaffoldStep.INSTALL_HOOK
    assert isinstance(excinfo.value.cause, FilesystemError)
    assert (config.root / "scripts" / "cibuild.sh").exists()
    assert (config.root / ".github" / "workflows" / "releaser.yml").exists()


def test_scaffolder_refuses_existing_scripts_directory(config: ProjectConfig):
    class ScriptsSquatter(FakeRunner):
        def run(self, program, *args, cwd=None):
            output = super().run(program, *args, cwd=cwd)
            if args[:2] == ("mod", "init"):
                (Path(cwd) / "scripts").mkdir()
            return output

    with pytest.raises(StepFailedError) as excinfo:
        ProjectScaffolder(runner=ScriptsSquatter()).create(config)

    assert excinfo.value.step is ScaffoldStep.WRITE_SCRIPTS
    assert isinstance(excinfo.value.cause, AlreadyExistsError)
    assert (config.root / "Makefile").exists()
    assert not (config.root / ".git" / "hooks" / "pre-commit").exists()


def test_steps_follow_declared_order():
    assert ProjectScaffolder(runner=FakeRunner()).steps() == list(ScaffoldStep)
