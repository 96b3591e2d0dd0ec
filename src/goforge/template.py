"""Read-only stores of the file payloads copied into new projects."""

from __future__ import annotations

from abc import ABC, abstractmethod
from importlib import resources
from importlib.resources.abc import Traversable
from typing import Iterator, Mapping

from .errors import TemplateNotFoundError
from .schema import TemplateEntry

__all__ = [
    "InMemoryTemplateStore",
    "LINT_CONFIG",
    "IGNORE_FILE",
    "BUILD_FILE",
    "RELEASE_CONFIG",
    "PRE_COMMIT_SCRIPT",
    "SETUP_SCRIPT",
    "CIBUILD_SCRIPT",
    "RELEASE_WORKFLOW",
    "PackagedTemplateStore",
    "TemplateStore",
]


LINT_CONFIG = ".golangci.yml"
IGNORE_FILE = ".gitignore"
BUILD_FILE = "Makefile"
RELEASE_CONFIG = ".goreleaser.yml"
PRE_COMMIT_SCRIPT = "scripts/pre-commit"
SETUP_SCRIPT = "scripts/setup.sh"
CIBUILD_SCRIPT = "scripts/cibuild.sh"
RELEASE_WORKFLOW = "workflows/releaser.yml"

TEMPLATE_PACKAGE = "goforge"
TEMPLATE_DIRECTORY = "templates"


class TemplateStore(ABC):
    """Source of immutable template payloads keyed by logical path."""

    @abstractmethod
    def get(self, path: str) -> bytes:
        """Return the content of the template at ``path``."""

    @abstractmethod
    def entries(self) -> list[TemplateEntry]:
        """Return every template in the store, sorted by path."""

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        try:
            self.get(path)
        except TemplateNotFoundError:
            return False
        return True


class InMemoryTemplateStore(TemplateStore):
    """Template store backed by a mapping, mostly useful for tests."""

    def __init__(self, templates: Mapping[str, bytes | str]) -> None:
        self._templates = {
            path: content.encode("utf-8") if isinstance(content, str) else bytes(content)
            for path, content in templates.items()
        }

    def get(self, path: str) -> bytes:
        try:
            return self._templates[path]
        except KeyError:
            raise TemplateNotFoundError(path) from None

    def entries(self) -> list[TemplateEntry]:
        return [
            TemplateEntry(path=path, content=content)
            for path, content in sorted(self._templates.items())
        ]


def _walk(directory: Traversable, prefix: str = "") -> Iterator[tuple[str, Traversable]]:
    for entry in directory.iterdir():
        logical = f"{prefix}{entry.name}"
        if entry.is_dir():
            if entry.name == "__pycache__":
                continue
            yield from _walk(entry, f"{logical}/")
        elif entry.is_file():
            yield logical, entry


class PackagedTemplateStore(TemplateStore):
    """Serve the templates shipped as package data.

    The payloads are read once, on first access, and kept in memory for the
    lifetime of the store.
    """

    def __init__(self, package: str = TEMPLATE_PACKAGE, directory: str = TEMPLATE_DIRECTORY) -> None:
        self._package = package
        self._directory = directory
        self._cache: dict[str, bytes] | None = None

    def _load(self) -> dict[str, bytes]:
        if self._cache is None:
            root = resources.files(self._package) / self._directory
            self._cache = {
                logical: entry.read_bytes()
                for logical, entry in _walk(root)
            }
        return self._cache

    def get(self, path: str) -> bytes:
        try:
            return self._load()[path]
        except KeyError:
            raise TemplateNotFoundError(path) from None

    def entries(self) -> list[TemplateEntry]:
        return [
            TemplateEntry(path=path, content=content)
            for path, content in sorted(self._load().items())
        ]
