"""
Polling watcher that re-syncs tokens when the input file changes.

Uses mtime-based change detection in a daemon thread, so it works the same
on every platform without a file-system notification dependency.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections.abc import Callable, Iterable
from pathlib import Path

from .core.errors import TokenSyncError
from .core.ir.report import SyncResult
from .core.pipeline import TokenPipeline

logger = logging.getLogger(__name__)

SyncCallback = Callable[[SyncResult | None, TokenSyncError | None], None]


class TokenWatcher:
    """
    Watches a pipeline's input file and runs a sync after changes settle.

    A change starts (or restarts) the debounce window; the sync runs once no
    further change has been seen for ``debounce`` seconds. Each sync drops
    the pipeline cache first so the new file contents are read.
    """

    def __init__(
        self,
        pipeline: TokenPipeline,
        *,
        force: bool = False,
        targets: Iterable[str] | None = None,
        poll_interval: float = 0.5,
        debounce: float = 0.3,
        on_sync: SyncCallback | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the watcher.

        Args:
            pipeline: Pipeline whose input file is watched and synced
            force: Generate even when validation reports errors
            targets: Target names to generate; defaults to every configured output
            poll_interval: How often to check for changes (seconds)
            debounce: Quiet period after the last change before syncing (seconds)
            on_sync: Called with ``(result, None)`` or ``(None, error)`` after each sync
            clock: Monotonic time source
        """
        self.pipeline = pipeline
        self.force = force
        self.targets = list(targets) if targets is not None else None
        self.poll_interval = poll_interval
        self.debounce = debounce
        self.on_sync = on_sync
        self._clock = clock

        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._last_mtime: float | None = self._mtime()
        self._pending_since: float | None = None

    @property
    def path(self) -> Path:
        return self.pipeline.input_path

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start watching in a daemon thread."""
        self._stop_event.clear()
        self._last_mtime = self._mtime()
        self._thread = threading.Thread(target=self._watch_loop, daemon=True)
        self._thread.start()
        logger.info(f"Watching {self.path} for changes")

    def stop(self) -> None:
        """Stop watching and wait for the thread to exit."""
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=2)
            self._thread = None

    def _mtime(self) -> float | None:
        try:
            return self.path.stat().st_mtime
        except OSError:
            return None

    def poll(self) -> bool:
        """Check the file once; run a sync if a change has settled.

        Returns:
            True if a sync ran during this poll.
        """
        now = self._clock()
        mtime = self._mtime()

        if mtime != self._last_mtime:
            self._last_mtime = mtime
            self._pending_since = now
            logger.info(f"Token file changed: {self.path}")

        if self._pending_since is not None and now - self._pending_since >= self.debounce:
            self._pending_since = None
            self.sync_now()
            return True
        return False

    def sync_now(self) -> SyncResult | None:
        """Invalidate the cache and run a sync on a fresh event loop."""
        self.pipeline.invalidate_cache()
        try:
            result = asyncio.run(self.pipeline.sync(force=self.force, targets=self.targets))
        except TokenSyncError as e:
            logger.error(f"Sync failed: {e.message}")
            self._notify(None, e)
            return None

        logger.info(f"Sync completed: {len(result.written_paths)} file(s) written")
        self._notify(result, None)
        return result

    def _notify(self, result: SyncResult | None, error: TokenSyncError | None) -> None:
        if self.on_sync is None:
            return
        try:
            self.on_sync(result, error)
        except Exception:
            logger.exception("Error in sync callback")

    def _watch_loop(self) -> None:
        while not self._stop_event.is_set():
            self.poll()
            self._stop_event.wait(self.poll_interval)
