"""Single-flight orchestration of full storage scans."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from pathlib import Path
from typing import Protocol

from localmusic.core.models import ScanResult
from localmusic.core.options import ScanOptions
from localmusic.core.scanner import DirectoryWalker, TrackCallback
from localmusic.errors import (
    ErrorCode,
    LocalMusicError,
    format_error_for_user,
)

logger = logging.getLogger(__name__)


class ScanState(Enum):
    IDLE = "idle"
    SCANNING = "scanning"


class AccessGate(Protocol):
    """Host-provided storage permission check."""

    def has_access(self) -> bool: ...


class ScanCoordinator:
    """Runs at most one full-storage walk at a time on a worker thread.

    A request that arrives while a walk is in flight is rejected
    immediately; it is neither queued nor retried.
    """

    def __init__(
        self,
        options: ScanOptions | None = None,
        walker: DirectoryWalker | None = None,
    ) -> None:
        self._options = options or ScanOptions()
        self._walker = walker or DirectoryWalker(self._options)
        self._gate = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="localmusic-scan")

    @property
    def state(self) -> ScanState:
        return ScanState.SCANNING if self._gate.locked() else ScanState.IDLE

    @property
    def is_scanning(self) -> bool:
        return self._gate.locked()

    def start_full_scan(
        self,
        root: str | Path | None,
        *,
        gate: AccessGate | None = None,
        on_track: TrackCallback | None = None,
    ) -> ScanResult:
        """Walk *root* on the scan thread and return the collected tracks.

        Blocks the calling thread until the walk finishes. Never raises;
        every outcome is reported through the returned ScanResult.
        """
        if not self._gate.acquire(blocking=False):
            logger.info("Rejected scan of %s: another scan is in flight", root)
            return ScanResult.failure(format_error_for_user(LocalMusicError(ErrorCode.SCAN_IN_PROGRESS)))

        try:
            if gate is not None and not gate.has_access():
                return ScanResult.failure(format_error_for_user(LocalMusicError(ErrorCode.PERMISSION_DENIED)))

            logger.info("Full scan started: %s", root)
            future = self._executor.submit(self._walker.walk, root, on_track)
            tracks = future.result()
        except Exception as exc:
            logger.exception("Full scan of %s failed", root)
            return ScanResult.failure(format_error_for_user(exc))
        finally:
            self._gate.release()

        logger.info("Full scan finished: %d tracks under %s", len(tracks), root)
        return ScanResult.ok(tracks)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> ScanCoordinator:
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()
