"""Configuration helpers shared by the project scaffolder and CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .naming import DEFAULT_ALIAS, module_path, resolve_alias

__all__ = [
    "DEFAULT_ALIAS",
    "DEFAULT_PROJECT_NAME",
    "ProjectConfig",
    "ScaffoldOptions",
]


DEFAULT_PROJECT_NAME = "new_project"


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    """Identifiers describing a new project.

    Attributes
    ----------
    name:
        The project name provided by the user. It doubles as the name of the
        project directory and the last segment of the module path.
    alias:
        Namespace prefix prepended to :attr:`name` when initialising the Go
        module, for example ``github.com/octocat/``.
    root:
        Absolute path of the project directory that will be created.
    """

    name: str
    alias: str
    root: Path

    @classmethod
    def from_name(
        cls,
        name: str,
        *,
        base_dir: str | Path | None = None,
        alias: str | None = None,
        home: str | Path | None = None,
    ) -> "ProjectConfig":
        """Build a :class:`ProjectConfig` for ``name``.

        Parameters
        ----------
        name:
            The project directory name.
        base_dir:
            Directory in which the project is created. Defaults to the current
            working directory.
        alias:
            Override the namespace prefix. When omitted it is resolved from the
            SSH configuration found under ``home``.
        home:
            Home directory consulted by :func:`resolve_alias`.
        """

        stripped = name.strip()
        if not stripped:
            raise ValueError("project name must not be empty")

        base = Path(base_dir) if base_dir is not None else Path.cwd()
        root = (base.expanduser() / stripped).absolute()
        resolved_alias = alias if alias is not None else resolve_alias(home)

        return cls(name=stripped, alias=resolved_alias, root=root)

    @property
    def module_path(self) -> str:
        return module_path(self.alias, self.name)


@dataclass(frozen=True, slots=True)
class ScaffoldOptions:
    """Switches controlling which optional steps the scaffolder runs."""

    release: bool = True
    preflight: bool = True
    git: str = "git"
    go: str = "go"

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        release: bool = True,
        preflight: bool = True,
    ) -> "ScaffoldOptions":
        """Build options, honouring ``GOFORGE_GIT`` and ``GOFORGE_GO`` overrides."""

        env = os.environ if environ is None else environ
        return cls(
            release=release,
            preflight=preflight,
            git=env.get("GOFORGE_GIT") or "git",
            go=env.get("GOFORGE_GO") or "go",
        )
