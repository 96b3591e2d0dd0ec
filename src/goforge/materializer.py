"""Create directories and write template payloads to disk."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import AlreadyExistsError, FilesystemError, TemplateNotFoundError
from .schema import Artifact
from .template import TemplateStore

__all__ = ["DIRECTORY_MODE", "EXECUTABLE_MODE", "Materializer"]


LOGGER = logging.getLogger(__name__)

DIRECTORY_MODE = 0o777
EXECUTABLE_MODE = 0o700


class Materializer:
    """Write files from a :class:`TemplateStore` at explicit paths."""

    def __init__(self, store: TemplateStore) -> None:
        self._store = store

    @property
    def store(self) -> TemplateStore:
        return self._store

    def create_directory(self, path: str | Path, *, parents: bool = False) -> Path:
        """Create ``path``, refusing when it already exists."""

        directory = Path(path)
        if directory.exists():
            raise AlreadyExistsError(directory)

        try:
            directory.mkdir(mode=DIRECTORY_MODE, parents=parents)
        except FileExistsError as exc:
            raise AlreadyExistsError(directory) from exc
        except OSError as exc:
            raise FilesystemError(f"error creating directory {directory}: {exc}") from exc

        LOGGER.debug("created directory %s", directory)
        return directory

    def write_template_file(self, target: str | Path, template: str) -> Path:
        """Create or truncate ``target`` and copy the ``template`` payload into it.

        A failed write may leave ``target`` empty or truncated.
        """

        destination = Path(target)
        try:
            handle = destination.open("wb")
        except OSError as exc:
            raise FilesystemError(f"error creating file {destination}: {exc}") from exc

        with handle:
            try:
                content = self._store.get(template)
            except TemplateNotFoundError as exc:
                raise FilesystemError(f"error reading template for {destination}: {exc}") from exc
            try:
                handle.write(content)
            except OSError as exc:
                raise FilesystemError(f"error writing to file {destination}: {exc}") from exc

        LOGGER.debug("wrote %s from template %s (%d bytes)", destination, template, len(content))
        return destination

    def write_executable_template_file(self, target: str | Path, template: str) -> Path:
        """Write ``target`` like :meth:`write_template_file` and mark it executable."""

        destination = self.write_template_file(target, template)
        try:
            destination.chmod(EXECUTABLE_MODE)
        except OSError as exc:
            raise FilesystemError(f"error making file executable {destination}: {exc}") from exc
        return destination

    def write_artifact(self, root: str | Path, artifact: Artifact) -> Path:
        target = Path(root) / artifact.target
        if artifact.executable:
            return self.write_executable_template_file(target, artifact.template)
        return self.write_template_file(target, artifact.template)
