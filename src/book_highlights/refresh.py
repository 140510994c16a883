"""Serialise refresh passes and detect note changes."""
from __future__ import annotations

import threading
from typing import Callable, Dict, Optional, Protocol

from loguru import logger

from .scanner import ScanResult


class RefreshCoordinator:
    """Run at most one refresh pass at a time.

    A request made while a pass is running is coalesced into a single
    follow-up pass; any further requests before that pass starts are dropped.
    ``on_result`` only ever sees complete results.
    """

    def __init__(
        self,
        run_pass: Callable[[], ScanResult],
        on_result: Optional[Callable[[ScanResult], None]] = None,
    ) -> None:
        self._run_pass = run_pass
        self._on_result = on_result
        self._lock = threading.Lock()
        self._running = False
        self._pending = False
        self.passes = 0

    @property
    def running(self) -> bool:
        with self._lock:
            return self._running

    def request(self) -> bool:
        """Run a pass now, or queue one if a pass is in flight.

        Returns ``True`` if this call ran the pass(es) itself.
        """

        with self._lock:
            if self._running:
                if not self._pending:
                    logger.debug("Refresh in progress; queued a follow-up pass")
                self._pending = True
                return False
            self._running = True

        try:
            while True:
                result = self._run_pass()
                self.passes += 1
                if self._on_result is not None:
                    self._on_result(result)
                with self._lock:
                    if not self._pending:
                        self._running = False
                        break
                    self._pending = False
        except BaseException:
            with self._lock:
                self._running = False
                self._pending = False
            raise
        return True


class SnapshotSource(Protocol):
    def snapshot(self) -> Dict[str, int]:
        ...


class ChangeMonitor:
    """Poll a source's modification times and report changed notes."""

    def __init__(self, source: SnapshotSource, suffix: str = ".md") -> None:
        self.source = source
        self.suffix = suffix
        self._previous: Optional[Dict[str, int]] = None

    def _current(self) -> Dict[str, int]:
        return {path: stamp for path, stamp in self.source.snapshot().items() if path.endswith(self.suffix)}

    def poll(self) -> bool:
        """Return ``True`` if any note was added, removed or modified since the last poll."""

        current = self._current()
        previous, self._previous = self._previous, current
        if previous is None:
            return False
        changed = current != previous
        if changed:
            logger.debug("Vault notes changed")
        return changed
