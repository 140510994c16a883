"""Read notes straight from a vault directory on disk."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List

from loguru import logger

from .base import SourceListError, SourceReadError


class VaultDirectorySource:
    """Serves every Markdown note below ``root``."""

    def __init__(self, root: Path, pattern: str = "**/*.md", encoding: str = "utf-8") -> None:
        self.root = root.expanduser()
        self.pattern = pattern
        self.encoding = encoding

    def _iter_files(self) -> List[Path]:
        if not self.root.is_dir():
            raise SourceListError(f"Vault directory does not exist: {self.root}")
        try:
            return sorted(path for path in self.root.glob(self.pattern) if path.is_file())
        except OSError as exc:
            raise SourceListError(f"Failed to list {self.root}: {exc}") from exc

    def list_documents(self) -> List[str]:
        return [path.relative_to(self.root).as_posix() for path in self._iter_files()]

    def read_document(self, path: str) -> str:
        file_path = self.root / path
        try:
            return file_path.read_text(encoding=self.encoding)
        except FileNotFoundError as exc:
            raise SourceReadError(path, "file not found") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceReadError(path, str(exc)) from exc

    def snapshot(self) -> Dict[str, int]:
        """Map each note to its modification time in nanoseconds."""

        stamps: Dict[str, int] = {}
        for file_path in self._iter_files():
            try:
                stamps[file_path.relative_to(self.root).as_posix()] = file_path.stat().st_mtime_ns
            except OSError as exc:
                logger.warning(f"Could not stat file {file_path}: {exc}")
        return stamps
