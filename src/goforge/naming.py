"""Module namespace helpers derived from the local SSH configuration."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from .errors import ConfigReadError

__all__ = [
    "DEFAULT_ALIAS",
    "SSH_CONFIG_PATH",
    "SSH_CONFIG_READ_LIMIT",
    "module_path",
    "read_ssh_config",
    "resolve_alias",
]


LOGGER = logging.getLogger(__name__)

DEFAULT_ALIAS = "project/"
SSH_CONFIG_PATH = Path(".ssh") / "config"
SSH_CONFIG_READ_LIMIT = 1024

_GITHUB_USER_PATTERN = re.compile(r"Host github\.com\n\s+User (?P<user>\w+)", re.ASCII)


def _home_directory() -> Path | None:
    try:
        return Path.home()
    except (RuntimeError, KeyError):
        return None


def read_ssh_config(path: str | Path, *, limit: int = SSH_CONFIG_READ_LIMIT) -> str:
    """Return at most ``limit`` bytes of the file at ``path`` as text.

    A single read is issued, so anything past ``limit`` bytes is never seen by
    the caller. Raises :class:`ConfigReadError` when the file is missing,
    unreadable or empty.
    """

    try:
        with Path(path).open("rb") as handle:
            data = handle.read(limit)
    except OSError as exc:
        raise ConfigReadError(f"error reading {path}: {exc}") from exc

    if not data:
        raise ConfigReadError(f"{path} is empty")

    return data.decode("utf-8", errors="replace")


def resolve_alias(home: str | Path | None = None) -> str:
    """Return the module namespace prefix for new projects.

    The prefix is ``github.com/<user>/`` when ``~/.ssh/config`` declares a
    ``User`` for ``Host github.com`` within its first
    :data:`SSH_CONFIG_READ_LIMIT` bytes. Any failure yields
    :data:`DEFAULT_ALIAS`; this function never raises.
    """

    home_path = Path(home) if home is not None else _home_directory()
    if home_path is None:
        LOGGER.debug("home directory unavailable, using default alias")
        return DEFAULT_ALIAS

    try:
        content = read_ssh_config(home_path / SSH_CONFIG_PATH)
    except ConfigReadError as exc:
        LOGGER.debug("%s, using default alias", exc)
        return DEFAULT_ALIAS

    match = _GITHUB_USER_PATTERN.search(content)
    if match is None:
        LOGGER.debug("no github.com user in ssh config, using default alias")
        return DEFAULT_ALIAS

    return f"github.com/{match.group('user')}/"


def module_path(alias: str, name: str) -> str:
    """Compose the fully qualified module path for ``name``."""

    return f"{alias}{name}"
