"""Document source interface shared by vault adapters."""
from __future__ import annotations

from typing import List, Protocol


class SourceError(RuntimeError):
    """Raised when a document source cannot serve a request."""


class SourceListError(SourceError):
    """Raised when the set of documents cannot be enumerated."""


class SourceReadError(SourceError):
    """Raised when a single document cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to read {path}: {reason}")
        self.path = path
        self.reason = reason


class DocumentSource(Protocol):
    """Where notes come from.

    Paths are vault-relative and ``/``-separated, e.g. ``Books/Dune.md``.
    """

    def list_documents(self) -> List[str]:
        ...

    def read_document(self, path: str) -> str:
        ...


def in_folder(path: str, folder: str) -> bool:
    """Return ``True`` when ``path`` sits under ``folder`` (empty = whole vault)."""

    if not folder:
        return True
    prefix = folder if folder.endswith("/") else f"{folder}/"
    return path.startswith(prefix)
