"""Scaffolding for new Go projects.

The package creates a project directory, initialises the git repository and Go
module, copies a fixed set of lint, build, CI and release files shipped as
package data, and installs a pre-commit hook. The pieces are usable on their
own as well as through the command line interface.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import ProjectConfig, ScaffoldOptions
from .errors import (
    AlreadyExistsError,
    ExternalToolError,
    FilesystemError,
    ScaffoldError,
    StepFailedError,
)
from .naming import resolve_alias
from .scaffold import ProjectScaffolder, ScaffoldStep

__all__ = [
    "AlreadyExistsError",
    "ExternalToolError",
    "FilesystemError",
    "ProjectConfig",
    "ProjectScaffolder",
    "ScaffoldError",
    "ScaffoldOptions",
    "ScaffoldStep",
    "StepFailedError",
    "resolve_alias",
]
