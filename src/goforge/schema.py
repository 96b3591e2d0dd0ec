"""Records exchanged between the scaffolder components."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class TemplateEntry(BaseModel):
    """A compiled-in file payload addressed by its logical path."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str = Field(..., description="Logical path of the template inside the store.")
    content: bytes = Field(..., description="Raw bytes copied verbatim into generated files.")


class Artifact(BaseModel):
    """A file the scaffolder writes relative to the project root."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    target: str = Field(..., description="Destination path relative to the project root.")
    template: str = Field(..., description="Logical path of the template providing the content.")
    executable: bool = Field(False, description="Whether the owner execute bit is set after writing.")


class ScaffoldResult(BaseModel):
    """Summary of a completed scaffolding run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    root: str = Field(..., description="Absolute path of the created project.")
    module_path: str = Field(..., description="Module path passed to the module tool.")
    files: List[str] = Field(default_factory=list, description="Files written, relative to the root, in order.")
    commands: List[List[str]] = Field(default_factory=list, description="External commands executed, in order.")


__all__ = ["Artifact", "ScaffoldResult", "TemplateEntry"]
