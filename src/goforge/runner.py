"""Run the external tools the scaffolder depends on."""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from .errors import ExternalToolError

__all__ = ["CommandRunner", "SubprocessRunner", "probe"]


LOGGER = logging.getLogger(__name__)


class CommandRunner(ABC):
    """Narrow interface for invoking external programs."""

    @abstractmethod
    def run(self, program: str, *args: str, cwd: str | Path | None = None) -> str:
        """Run ``program`` with ``args`` and return its combined output.

        Raises :class:`ExternalToolError` when the program cannot be launched
        or exits with a non-zero status.
        """


class SubprocessRunner(CommandRunner):
    """Run commands synchronously with :func:`subprocess.run`.

    There is no timeout: a hung tool blocks the caller indefinitely.
    """

    def run(self, program: str, *args: str, cwd: str | Path | None = None) -> str:
        cmd = [program, *args]
        LOGGER.debug("running %s (cwd=%s)", " ".join(cmd), cwd or ".")
        try:
            result = subprocess.run(
                cmd,
                cwd=str(cwd) if cwd is not None else None,
                check=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except subprocess.CalledProcessError as exc:
            raise ExternalToolError(cmd, f"exit status {exc.returncode}", output=exc.stdout or "") from exc
        except OSError as exc:
            raise ExternalToolError(cmd, str(exc)) from exc
        return result.stdout or ""


def probe(runner: CommandRunner, program: str, *args: str, cwd: str | Path | None = None) -> str:
    """Check that ``program`` is invocable by running a cheap subcommand.

    Returns the first line of its output, typically a version string.
    """

    output = runner.run(program, *args, cwd=cwd)
    first_line = output.strip().splitlines()[0] if output.strip() else ""
    LOGGER.debug("%s is available: %s", program, first_line or "<no output>")
    return first_line
