"""Exception types raised while scaffolding a project."""

from __future__ import annotations

from typing import Sequence


class ScaffoldError(RuntimeError):
    """Base class for every error the scaffolder reports."""


class AlreadyExistsError(ScaffoldError):
    """Raised when a directory that must be created is already present."""

    def __init__(self, path: object) -> None:
        super().__init__(f"{path} already exists")
        self.path = path


class FilesystemError(ScaffoldError):
    """Raised when a file or directory cannot be created, written or chmod-ed."""


class TemplateNotFoundError(ScaffoldError):
    """Raised when a template store has no entry for a logical path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"template '{path}' not found")
        self.path = path


class ExternalToolError(ScaffoldError):
    """Raised when an external program cannot be launched or exits non-zero."""

    def __init__(self, command: Sequence[str], message: str, *, output: str = "") -> None:
        text = f"command failed: {' '.join(command)}: {message}"
        if output.strip():
            text = f"{text}\n\n{output.rstrip()}"
        super().__init__(text)
        self.command = list(command)
        self.output = output


class ConfigReadError(ScaffoldError):
    """Raised when the SSH client configuration cannot be read."""


class StepFailedError(ScaffoldError):
    """Raised by the scaffolder when one of its steps fails."""

    def __init__(self, step: object, cause: BaseException) -> None:
        description = getattr(step, "description", str(step))
        super().__init__(f"{description}: {cause}")
        self.step = step
        self.cause = cause


__all__ = [
    "AlreadyExistsError",
    "ConfigReadError",
    "ExternalToolError",
    "FilesystemError",
    "ScaffoldError",
    "StepFailedError",
    "TemplateNotFoundError",
]
